"""
Registration and login endpoints.

Login answers with the user's identity only; there are no tokens or
sessions.  Both an unknown e-mail and a wrong password produce the
same 401 "invalid credentials" response.
"""

from fastapi import APIRouter, status

from series_tracker_api.app.schemas.user import LoginInput, RegisterInput, UserRead
from series_tracker_api.app.services.user_service import UserService

router = APIRouter()


@router.post("/register", response_model=UserRead, status_code=status.HTTP_201_CREATED)
async def register_user(user: RegisterInput) -> UserRead:
    """Register a new user.

    The e-mail is stored lowercased and must be unique (409 otherwise);
    the password needs at least 6 characters.
    """
    return await UserService.register(user)


@router.post("/login", response_model=UserRead)
async def login_user(credentials: LoginInput) -> UserRead:
    """Check e-mail and password and return the matching identity."""
    return await UserService.authenticate(credentials)
