"""
Registration and login.
"""

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth import get_user_by_email
from app.exceptions import BadRequestError, UnauthorizedError
from app.logging_config import get_logger
from app.models import User, UserRole
from app.schemas import LoginRequest, UserCreate
from app.security import hash_password, verify_password
from app.services.validation import require_text

logger = get_logger(__name__)


async def register_user(session: AsyncSession, user_in: UserCreate) -> User:
    """
    Create a USER-role account.

    Raises:
        BadRequestError: On a blank field or an email that is already taken.
    """
    username = require_text(user_in.username, "username")
    email = require_text(user_in.email, "email").strip()
    password = require_text(user_in.password, "password")

    if await get_user_by_email(session, email) is not None:
        raise BadRequestError("Email already registered", field="email")

    user = User(
        username=username,
        email=email,
        password_hash=hash_password(password),
        role=UserRole.USER,
    )
    session.add(user)
    try:
        await session.flush()
    except IntegrityError as e:
        # Lost a race with a concurrent registration for the same email
        await session.rollback()
        raise BadRequestError("Email already registered", field="email") from e

    logger.info(f"Registered user: id={user.id} email='{user.email}'")

    return user


async def authenticate_user(session: AsyncSession, credentials: LoginRequest) -> User:
    """Return the user for an email/password pair, or raise UnauthorizedError."""
    email = (credentials.email or "").strip()
    user = await get_user_by_email(session, email) if email else None
    if user is None or not verify_password(credentials.password or "", user.password_hash):
        logger.warning(f"Failed login for email '{email}'")
        raise UnauthorizedError("Invalid credentials")
    return user
