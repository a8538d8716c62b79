from app.schemas.common import PagedResponse
from app.schemas.user import UserCreate, LoginRequest, AuthResponse, UserRead
from app.schemas.project import ProjectRequest, ProjectRead
from app.schemas.task import TaskRequest, TaskRead

__all__ = [
    "PagedResponse",
    "UserCreate",
    "LoginRequest",
    "AuthResponse",
    "UserRead",
    "ProjectRequest",
    "ProjectRead",
    "TaskRequest",
    "TaskRead",
]
