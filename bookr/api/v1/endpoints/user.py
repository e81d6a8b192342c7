import logging

from fastapi import APIRouter, Depends, status

from bookr.core.config import settings
from bookr.utils.deps import get_current_user
from bookr.schemas.user_schema import UserResponse
from bookr.models.user_model import User

logger = logging.getLogger(__name__)

router = APIRouter(
    tags=["User"],
    prefix=f"{settings.API_V1_STR}/users",
)


@router.get(
    "/me",
    response_model=UserResponse,
    status_code=status.HTTP_200_OK,
    summary="Get current user profile",
    description="Get profile information for the authenticated user, including the invite link",
)
async def get_my_profile(current_user: User = Depends(get_current_user)):
    return current_user
