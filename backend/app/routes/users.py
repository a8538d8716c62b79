"""
User administration routes for the Taskflow API.
"""

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_session
from app.schemas import UserCreate
from app.services.users import register_user

router = APIRouter()


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_user(
    user_in: UserCreate,
    session: AsyncSession = Depends(get_session),
) -> Response:
    """Create a user without issuing a session token."""
    await register_user(session, user_in)
    return Response(status_code=status.HTTP_201_CREATED)
