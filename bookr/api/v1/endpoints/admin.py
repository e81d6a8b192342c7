import logging
from typing import Dict

from fastapi import APIRouter, Depends, Query, status

from bookr.core.config import settings
from bookr.db.store import InMemoryStore, get_store
from bookr.utils.deps import require_admin
from bookr.schemas.book_schema import BookListResponse
from bookr.schemas.stats_schema import StatsResponse
from bookr.schemas.user_schema import (
    UserCreate,
    UserListResponse,
    UserResponse,
    UserUpdate,
)
from bookr.models.user_model import User
from bookr.services.book_service import book_service
from bookr.services.stats_service import stats_service
from bookr.services.user_service import user_service

logger = logging.getLogger(__name__)

router = APIRouter(
    tags=["Admin"],
    prefix=f"{settings.API_V1_STR}/admin",
)


# ------ User management ------
@router.get(
    "/users",
    status_code=status.HTTP_200_OK,
    response_model=UserListResponse,
    summary="List users",
    description="All registered users (admin only)",
)
async def get_users(
    *,
    db: InMemoryStore = Depends(get_store),
    current_user: User = Depends(require_admin),
):
    users = await user_service.get_users(db, current_user=current_user)
    return UserListResponse(items=users, total=len(users))


@router.post(
    "/users",
    status_code=status.HTTP_201_CREATED,
    response_model=UserResponse,
    summary="Add a user",
    description="Create an account with any role (admin only)",
)
async def add_user(
    *,
    db: InMemoryStore = Depends(get_store),
    user_data: UserCreate,
    current_user: User = Depends(require_admin),
):
    return await user_service.add_user(db, user_in=user_data, current_user=current_user)


@router.patch(
    "/users/{user_id}",
    status_code=status.HTTP_200_OK,
    response_model=UserResponse,
    summary="Update a user",
    description="Update any profile field or the role of a user (admin only)",
)
async def update_user(
    *,
    db: InMemoryStore = Depends(get_store),
    user_id: str,
    user_data: UserUpdate,
    current_user: User = Depends(require_admin),
):
    """Only provided fields will be updated. The invite link never changes."""
    return await user_service.update_user(
        db,
        user_id_to_update=user_id,
        user_data=user_data,
        current_user=current_user,
    )


@router.delete(
    "/users/{user_id}",
    status_code=status.HTTP_200_OK,
    response_model=Dict[str, str],
    summary="Delete a user",
    description="Delete a user account; their books stay in the catalogue",
)
async def delete_user(
    *,
    db: InMemoryStore = Depends(get_store),
    user_id: str,
    current_user: User = Depends(require_admin),
):
    await user_service.delete_user(
        db, user_id_to_delete=user_id, current_user=current_user
    )
    logger.info(
        f"Admin {current_user.id} deleted user {user_id}",
        extra={"admin_id": current_user.id, "target_user_id": user_id},
    )
    return {"message": "User deleted successfully"}


# ------ Books & statistics ------
@router.get(
    "/books",
    status_code=status.HTTP_200_OK,
    response_model=BookListResponse,
    summary="List all books",
    description="Every book in the catalogue, optionally filtered (admin only)",
)
async def get_books(
    *,
    db: InMemoryStore = Depends(get_store),
    current_user: User = Depends(require_admin),
    q: str = Query("", max_length=200),
):
    return await book_service.get_books(db, current_user=current_user, query=q)


@router.get(
    "/stats",
    status_code=status.HTTP_200_OK,
    response_model=StatsResponse,
    summary="Platform statistics",
    description="User and book counts and recommendations per user (admin only)",
    dependencies=[Depends(require_admin)],
)
async def get_stats(*, db: InMemoryStore = Depends(get_store)):
    return await stats_service.get_stats(db)
