"""
Project routes for the Taskflow API.
"""

import uuid
from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth import get_current_user
from app.database import get_session
from app.models import User
from app.schemas import PagedResponse, ProjectRequest, ProjectRead, TaskRequest, TaskRead
from app.services import projects as project_service
from app.services import tasks as task_service
from app.services.pagination import (
    DEFAULT_DIRECTION,
    DEFAULT_PAGE,
    DEFAULT_PAGE_SIZE,
    DEFAULT_SORT_BY,
)

router = APIRouter()


@router.post("", response_model=ProjectRead, status_code=status.HTTP_201_CREATED)
async def create_project(
    project_in: ProjectRequest,
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
) -> ProjectRead:
    """Create a project owned by the current user."""
    project = await project_service.create_project(session, project_in, current_user)
    return ProjectRead.from_project(project)


@router.get("", response_model=PagedResponse[ProjectRead])
async def list_projects(
    page: int = Query(DEFAULT_PAGE),
    size: int = Query(DEFAULT_PAGE_SIZE),
    sort_by: str = Query(DEFAULT_SORT_BY, alias="sortBy"),
    direction: str = Query(DEFAULT_DIRECTION),
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
) -> PagedResponse[ProjectRead]:
    """List the current user's projects with pagination and sorting."""
    result = await project_service.list_projects(
        session, current_user, page, size, sort_by, direction
    )
    return PagedResponse[ProjectRead].from_page(result, ProjectRead.from_project)


@router.get("/{project_id}", response_model=ProjectRead)
async def get_project(
    project_id: uuid.UUID,
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
) -> ProjectRead:
    """Get one of the current user's projects by ID."""
    project = await project_service.get_project(session, project_id, current_user)
    return ProjectRead.from_project(project)


@router.put("/{project_id}", response_model=ProjectRead)
async def update_project(
    project_id: uuid.UUID,
    project_in: ProjectRequest,
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
) -> ProjectRead:
    """Replace a project's name, description, due date and status."""
    project = await project_service.update_project(session, project_id, project_in, current_user)
    return ProjectRead.from_project(project)


@router.delete("/{project_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_project(
    project_id: uuid.UUID,
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
) -> Response:
    """Delete a project and all its tasks."""
    await project_service.delete_project(session, project_id, current_user)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# =============================================================================
# Tasks nested under a project
# =============================================================================

@router.post(
    "/{project_id}/tasks",
    response_model=TaskRead,
    status_code=status.HTTP_201_CREATED,
)
async def create_task(
    project_id: uuid.UUID,
    task_in: TaskRequest,
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
) -> TaskRead:
    """Create a task in one of the current user's projects."""
    task = await task_service.create_task(session, project_id, task_in, current_user)
    return TaskRead.from_task(task)


@router.get("/{project_id}/tasks", response_model=PagedResponse[TaskRead])
async def list_tasks(
    project_id: uuid.UUID,
    page: int = Query(DEFAULT_PAGE),
    size: int = Query(DEFAULT_PAGE_SIZE),
    sort_by: str = Query(DEFAULT_SORT_BY, alias="sortBy"),
    direction: str = Query(DEFAULT_DIRECTION),
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
) -> PagedResponse[TaskRead]:
    """
    List a project's tasks.

    sortBy accepts createdAt, dueDate, title, status or priority.
    """
    result = await task_service.list_tasks(
        session, project_id, current_user, page, size, sort_by, direction
    )
    return PagedResponse[TaskRead].from_page(result, TaskRead.from_task)
