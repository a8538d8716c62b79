"""
Task routes for the Taskflow API.

Creating and listing tasks happens under /projects/{project_id}/tasks.
"""

import uuid
from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth import get_current_user
from app.database import get_session
from app.models import User
from app.schemas import TaskRequest, TaskRead
from app.services import tasks as task_service

router = APIRouter()


@router.get("/{task_id}", response_model=TaskRead)
async def get_task(
    task_id: uuid.UUID,
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
) -> TaskRead:
    """Get a task by ID."""
    task = await task_service.get_task(session, task_id, current_user)
    return TaskRead.from_task(task)


@router.put("/{task_id}", response_model=TaskRead)
async def update_task(
    task_id: uuid.UUID,
    task_in: TaskRequest,
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
) -> TaskRead:
    """Replace a task's fields."""
    task = await task_service.update_task(session, task_id, task_in, current_user)
    return TaskRead.from_task(task)


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_task(
    task_id: uuid.UUID,
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
) -> Response:
    """Delete a task."""
    await task_service.delete_task(session, task_id, current_user)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
