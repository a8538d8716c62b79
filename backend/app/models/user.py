import uuid
from enum import Enum

from sqlmodel import Field

from app.models.base import TimestampMixin, track_timestamps


class UserRole(str, Enum):
    USER = "USER"
    ADMIN = "ADMIN"


@track_timestamps
class User(TimestampMixin, table=True):
    """Registered account. The email is the login identifier."""

    __tablename__ = "users"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    username: str = Field(index=True)
    email: str = Field(unique=True, index=True)
    password_hash: str
    role: UserRole = Field(default=UserRole.USER)
