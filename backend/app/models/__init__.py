from app.models.user import User, UserRole
from app.models.project import Project, ProjectStatus
from app.models.task import Task, TaskStatus

__all__ = [
    "User",
    "UserRole",
    "Project",
    "ProjectStatus",
    "Task",
    "TaskStatus",
]
