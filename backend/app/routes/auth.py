"""
Authentication routes for the Taskflow API.
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth import get_current_user
from app.database import get_session
from app.models import User
from app.schemas import AuthResponse, LoginRequest, UserCreate, UserRead
from app.security import create_access_token
from app.services.users import authenticate_user, register_user

router = APIRouter()


def _auth_response(user: User) -> AuthResponse:
    return AuthResponse(
        user_id=user.id,
        username=user.username,
        email=user.email,
        role=user.role,
        access_token=create_access_token(user.email),
    )


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(
    user_in: UserCreate,
    session: AsyncSession = Depends(get_session),
) -> AuthResponse:
    """Register a new account and return its identity with a session token."""
    user = await register_user(session, user_in)
    return _auth_response(user)


@router.post("/login", response_model=AuthResponse)
async def login(
    credentials: LoginRequest,
    session: AsyncSession = Depends(get_session),
) -> AuthResponse:
    """Exchange email and password for a session token."""
    user = await authenticate_user(session, credentials)
    return _auth_response(user)


@router.get("/me", response_model=UserRead)
async def read_current_user(current_user: User = Depends(get_current_user)) -> User:
    """Get the authenticated user."""
    return current_user
