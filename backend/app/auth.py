"""
Bearer-token authentication for FastAPI.

Resolves the session token on a request to the stored User. The resolved user
is handed to services explicitly as an argument.
"""

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from app.database import get_session
from app.exceptions import UnauthorizedError
from app.logging_config import get_logger
from app.models import User
from app.security import decode_access_token

logger = get_logger(__name__)

# auto_error=False so a missing header becomes our own 401 rather than FastAPI's
bearer_scheme = HTTPBearer(auto_error=False)


async def get_user_by_email(session: AsyncSession, email: str) -> User | None:
    result = await session.execute(select(User).where(User.email == email))
    return result.scalars().first()


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    session: AsyncSession = Depends(get_session),
) -> User:
    """
    Return the user identified by the request's bearer token.

    Raises:
        UnauthorizedError: If no token is sent, the token is invalid or
            expired, or its email no longer resolves to a user.
    """
    if credentials is None:
        raise UnauthorizedError("Not authenticated")

    email = decode_access_token(credentials.credentials)
    if email is None:
        logger.warning("Invalid or expired session token")
        raise UnauthorizedError("Invalid authentication token")

    user = await get_user_by_email(session, email)
    if user is None:
        logger.warning(f"Session token for unknown user: {email}")
        raise UnauthorizedError(f"User not found for email: {email}")

    logger.debug(f"Authenticated user: {user.id} ({user.email})")
    return user
