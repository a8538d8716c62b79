import uuid
from datetime import date

from app.models import Project, ProjectStatus
from app.schemas.common import ApiModel, RequestModel, UtcDatetime


class ProjectRequest(RequestModel):
    """
    Schema for creating or replacing a project.

    Field values are checked by the project service so that every rejection
    surfaces as a 400 with a specific message.
    """
    name: str | None = None
    description: str | None = None
    due_date: date | None = None
    status: str | None = None  # OPEN, IN_PROGRESS, DONE


class ProjectRead(ApiModel):
    """Schema for reading a project."""
    id: uuid.UUID
    name: str
    description: str | None
    due_date: date | None
    status: ProjectStatus
    owner_id: uuid.UUID
    owner_email: str | None = None
    created_at: UtcDatetime
    updated_at: UtcDatetime

    model_config = {"from_attributes": True}

    @classmethod
    def from_project(cls, project: Project) -> "ProjectRead":
        """Build the response; the project's owner must already be loaded."""
        read = cls.model_validate(project)
        if project.owner is not None:
            read.owner_email = project.owner.email
        return read
