"""
Task service: CRUD through the owning project.

Unlike projects, a task reached through another user's project is reported
as ForbiddenError rather than NotFoundError.
"""

import uuid

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from sqlmodel import select

from app.exceptions import NotFoundError
from app.logging_config import get_logger
from app.models import Project, Task, TaskStatus, User
from app.models.task import DEFAULT_PRIORITY
from app.schemas import TaskRequest
from app.services.access import assert_project_owned, assert_task_owned
from app.services.pagination import (
    Page,
    TaskSortField,
    fetch_page,
    normalize_page_request,
)
from app.services.validation import parse_enum, require_text, validate_priority

logger = get_logger(__name__)


def _apply_request(task_in: TaskRequest, task: Task) -> None:
    # Validate everything before touching the entity
    title = require_text(task_in.title, "title")
    status = parse_enum(TaskStatus, task_in.status)
    priority = validate_priority(task_in.priority, DEFAULT_PRIORITY)

    task.title = title
    task.description = task_in.description
    task.status = status
    task.due_date = task_in.due_date
    task.priority = priority


async def _get_owned_project(session: AsyncSession, project_id: uuid.UUID, user: User) -> Project:
    project = await session.get(Project, project_id)
    if not project:
        raise NotFoundError("Project", str(project_id))
    assert_project_owned(project, user)
    return project


async def _get_owned_task(session: AsyncSession, task_id: uuid.UUID, user: User) -> Task:
    result = await session.execute(
        select(Task).options(selectinload(Task.project)).where(Task.id == task_id)
    )
    task = result.scalars().first()
    if not task:
        raise NotFoundError("Task", str(task_id))
    assert_task_owned(task, user)
    return task


async def create_task(
    session: AsyncSession,
    project_id: uuid.UUID,
    task_in: TaskRequest,
    user: User,
) -> Task:
    """
    Create a task in one of the user's projects.

    Priority defaults to 2 when omitted.
    """
    project = await _get_owned_project(session, project_id, user)

    task = Task(title="", project_id=project.id)
    _apply_request(task_in, task)
    task.project = project

    session.add(task)
    await session.flush()

    logger.info(f"Created task: id={task.id} title='{task.title}' project={task.project_id}")

    return task


async def list_tasks(
    session: AsyncSession,
    project_id: uuid.UUID,
    user: User,
    page: int,
    size: int,
    sort_by: str | None,
    direction: str | None,
) -> Page[Task]:
    """List one page of a project's tasks."""
    project = await _get_owned_project(session, project_id, user)
    request = normalize_page_request(page, size, sort_by, direction, TaskSortField)

    statement = select(Task).where(Task.project_id == project.id)
    result = await fetch_page(session, statement, request, options=[selectinload(Task.project)])

    logger.debug(f"Listed {len(result.content)} of {result.total_elements} tasks for project={project_id}")

    return result


async def get_task(session: AsyncSession, task_id: uuid.UUID, user: User) -> Task:
    return await _get_owned_task(session, task_id, user)


async def update_task(
    session: AsyncSession,
    task_id: uuid.UUID,
    task_in: TaskRequest,
    user: User,
) -> Task:
    """Replace the editable fields of a task. The project link never changes."""
    task = await _get_owned_task(session, task_id, user)

    logger.info(f"Updating task {task_id}: {task_in.model_dump(exclude_unset=True)}")

    _apply_request(task_in, task)
    await session.flush()
    return task


async def delete_task(session: AsyncSession, task_id: uuid.UUID, user: User) -> None:
    task = await _get_owned_task(session, task_id, user)

    logger.info(f"Deleting task {task_id}: '{task.title}'")

    await session.delete(task)
    await session.flush()
