import uuid
from datetime import date

from app.models import Task, TaskStatus
from app.schemas.common import ApiModel, RequestModel, UtcDatetime


class TaskRequest(RequestModel):
    """Schema for creating or replacing a task."""
    title: str | None = None
    description: str | None = None
    status: str | None = None  # TODO, IN_PROGRESS, DONE
    due_date: date | None = None
    priority: int | None = None  # 1..3, defaults to 2


class TaskRead(ApiModel):
    """Schema for reading a task."""
    id: uuid.UUID
    title: str
    description: str | None
    status: TaskStatus
    due_date: date | None
    priority: int
    project_id: uuid.UUID
    project_name: str | None = None
    created_at: UtcDatetime
    updated_at: UtcDatetime

    model_config = {"from_attributes": True}

    @classmethod
    def from_task(cls, task: Task) -> "TaskRead":
        """Build the response; the task's project must already be loaded."""
        read = cls.model_validate(task)
        if task.project is not None:
            read.project_name = task.project.name
        return read
