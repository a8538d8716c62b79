import uuid
from datetime import date
from enum import Enum
from typing import TYPE_CHECKING
from sqlmodel import Field, Relationship

from app.models.base import TimestampMixin, track_timestamps

if TYPE_CHECKING:
    from app.models.task import Task
    from app.models.user import User


class ProjectStatus(str, Enum):
    OPEN = "OPEN"
    IN_PROGRESS = "IN_PROGRESS"
    DONE = "DONE"


@track_timestamps
class Project(TimestampMixin, table=True):
    """Project model - groups tasks together. Owned by exactly one user."""

    __tablename__ = "projects"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    name: str = Field(index=True)
    description: str | None = Field(default=None)
    due_date: date | None = Field(default=None)
    status: ProjectStatus = Field(default=ProjectStatus.OPEN)

    # Set once at creation, never reassigned
    owner_id: uuid.UUID = Field(foreign_key="users.id", index=True)

    # Relationships
    owner: "User" = Relationship()
    tasks: list["Task"] = Relationship(
        back_populates="project",
        sa_relationship_kwargs={"cascade": "all, delete-orphan"},
    )
