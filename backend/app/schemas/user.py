import uuid

from app.models import UserRole
from app.schemas.common import ApiModel, RequestModel, UtcDatetime


class UserCreate(RequestModel):
    """Schema for registering a new user."""
    username: str | None = None
    email: str | None = None
    password: str | None = None


class LoginRequest(RequestModel):
    """Schema for logging in with email and password."""
    email: str | None = None
    password: str | None = None


class UserRead(ApiModel):
    """Schema for reading the current user."""
    id: uuid.UUID
    username: str
    email: str
    role: UserRole
    created_at: UtcDatetime

    model_config = {"from_attributes": True}


class AuthResponse(ApiModel):
    """Identity returned by register and login, with a session token."""
    user_id: uuid.UUID
    username: str
    email: str
    role: UserRole
    access_token: str
    token_type: str = "bearer"
