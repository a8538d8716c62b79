"""
Project service: owner-scoped CRUD.

A project that belongs to another user is reported exactly like a missing
one (NotFoundError), so other users' project ids are never revealed.
"""

import uuid

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from sqlmodel import select

from app.exceptions import NotFoundError
from app.logging_config import get_logger
from app.models import Project, ProjectStatus, User
from app.schemas import ProjectRequest
from app.services.pagination import (
    Page,
    ProjectSortField,
    fetch_page,
    normalize_page_request,
)
from app.services.validation import parse_enum, require_text

logger = get_logger(__name__)


def _apply_request(project_in: ProjectRequest, project: Project) -> None:
    name = require_text(project_in.name, "name", "Project name")
    status = project.status
    if project_in.status is not None:
        status = parse_enum(ProjectStatus, project_in.status)

    project.name = name
    project.description = project_in.description
    project.due_date = project_in.due_date
    project.status = status


async def _get_owned_project(session: AsyncSession, project_id: uuid.UUID, user: User) -> Project:
    result = await session.execute(
        select(Project)
        .options(selectinload(Project.owner))
        .where(Project.id == project_id, Project.owner_id == user.id)
    )
    project = result.scalars().first()
    if project is None:
        raise NotFoundError("Project", str(project_id))
    return project


async def create_project(session: AsyncSession, project_in: ProjectRequest, user: User) -> Project:
    """Create a project owned by `user`. Status defaults to OPEN."""
    project = Project(owner_id=user.id, status=ProjectStatus.OPEN, name="")
    project.owner = user
    _apply_request(project_in, project)

    session.add(project)
    await session.flush()

    logger.info(f"Created project: id={project.id} name='{project.name}' owner={user.id}")

    return project


async def list_projects(
    session: AsyncSession,
    user: User,
    page: int,
    size: int,
    sort_by: str | None,
    direction: str | None,
) -> Page[Project]:
    """List the user's own projects, one page at a time."""
    request = normalize_page_request(page, size, sort_by, direction, ProjectSortField)

    statement = select(Project).where(Project.owner_id == user.id)
    result = await fetch_page(session, statement, request, options=[selectinload(Project.owner)])

    logger.debug(
        f"Listed {len(result.content)} of {result.total_elements} projects for user={user.id}"
    )

    return result


async def get_project(session: AsyncSession, project_id: uuid.UUID, user: User) -> Project:
    return await _get_owned_project(session, project_id, user)


async def update_project(
    session: AsyncSession,
    project_id: uuid.UUID,
    project_in: ProjectRequest,
    user: User,
) -> Project:
    """
    Replace the editable fields of a project.

    Omitted status keeps the current one; the owner never changes.
    """
    project = await _get_owned_project(session, project_id, user)

    logger.info(f"Updating project {project_id}: {project_in.model_dump(exclude_unset=True)}")

    _apply_request(project_in, project)
    await session.flush()
    return project


async def delete_project(session: AsyncSession, project_id: uuid.UUID, user: User) -> None:
    """Delete a project and all its tasks."""
    project = await _get_owned_project(session, project_id, user)

    logger.info(f"Deleting project {project_id}: '{project.name}'")

    await session.delete(project)
    await session.flush()
