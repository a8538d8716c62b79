import uuid
from datetime import date
from enum import Enum
from typing import TYPE_CHECKING

from sqlalchemy import event
from sqlmodel import Field, Relationship

from app.models.base import TimestampMixin, track_timestamps

if TYPE_CHECKING:
    from app.models.project import Project


DEFAULT_PRIORITY = 2


class TaskStatus(str, Enum):
    TODO = "TODO"
    IN_PROGRESS = "IN_PROGRESS"
    DONE = "DONE"


@track_timestamps
class Task(TimestampMixin, table=True):
    """
    Task model. Belongs to one project.

    There is no owner column: a task's owner is its project's owner.
    """

    __tablename__ = "tasks"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    title: str = Field(index=True)
    description: str | None = Field(default=None)
    status: TaskStatus = Field(default=TaskStatus.TODO)
    due_date: date | None = Field(default=None)
    priority: int | None = Field(default=DEFAULT_PRIORITY)  # 1 (high) .. 3 (low)

    # Foreign keys
    project_id: uuid.UUID = Field(foreign_key="projects.id", index=True)

    # Relationships
    project: "Project" = Relationship(back_populates="tasks")


@event.listens_for(Task, "before_insert")
@event.listens_for(Task, "before_update")
def _apply_task_defaults(mapper, connection, target: Task) -> None:
    if target.priority is None:
        target.priority = DEFAULT_PRIORITY
    if target.status is None:
        target.status = TaskStatus.TODO
