# bookr/api/v1/endpoints/auth.py
"""
Authentication endpoints.

Login is by email only; the returned bearer token identifies the user on
later requests.
"""

import logging

from fastapi import APIRouter, Depends, status

from bookr.core.config import settings
from bookr.db.store import InMemoryStore, get_store
from bookr.services.user_service import user_service
from bookr.schemas.user_schema import (
    LoginRequest,
    TokenResponse,
    UserRegister,
    UserResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(
    tags=["Authentication"],
    prefix=f"{settings.API_V1_STR}/auth",
)


@router.post(
    "/login",
    response_model=TokenResponse,
    status_code=status.HTTP_200_OK,
    summary="Log in by email",
    description="Look up the account registered with the email and issue an access token",
    responses={401: {"description": "No account with this email"}},
)
async def login(
    *,
    db: InMemoryStore = Depends(get_store),
    credentials: LoginRequest,
):
    return await user_service.login(db, email=credentials.email)


@router.post(
    "/register",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register new user",
    description="Create a regular user account with a personal invite link",
    responses={409: {"description": "Email already registered"}},
)
async def register(
    *,
    db: InMemoryStore = Depends(get_store),
    user_data: UserRegister,
):
    """
    Register a new user account.

    - **name**: Display name (required)
    - **email**: Email address used to log in (required, unique)
    - **major**, **phone**, **expertise**: Optional profile fields
    """
    return await user_service.register(db, user_in=user_data)
