# bookr/services/user_service.py
"""
User service module.

Registration, email login, and the administrator's user management.
Deleting a user leaves their books in place: each book already carries
the recommender's id and name.
"""

import logging
import uuid
from typing import List, Optional

from bookr.db.store import InMemoryStore
from bookr.crud.user_crud import user_repository
from bookr.core.config import settings
from bookr.core.security import token_manager, TokenType
from bookr.schemas.user_schema import (
    TokenResponse,
    UserCreate,
    UserRegister,
    UserResponse,
    UserUpdate,
)
from bookr.models.user_model import User, UserRole
from bookr.core.exception_utils import raise_for_status
from bookr.core.exceptions import (
    InvalidCredentials,
    NotAuthorized,
    ResourceAlreadyExists,
    ResourceNotFound,
)

logger = logging.getLogger(__name__)


def generate_unique_link() -> str:
    return f"{settings.INVITE_BASE_URL.rstrip('/')}/{uuid.uuid4()}"


class UserService:
    def __init__(self):
        self.user_repository = user_repository
        self._logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    def _check_admin(self, current_user: User, action: str) -> None:
        raise_for_status(
            condition=not current_user.is_admin,
            exception=NotAuthorized,
            detail=f"Only administrators can {action} users.",
        )

    async def _ensure_email_available(
        self, db: InMemoryStore, email: str, exclude_user_id: Optional[str] = None
    ) -> None:
        existing = await self.user_repository.get_by_email(db, email=email)
        raise_for_status(
            condition=existing is not None and existing.id != exclude_user_id,
            exception=ResourceAlreadyExists,
            resource_type="User",
            detail=f"A user with email {email} already exists.",
        )

    # ======= AUTH =======
    async def authenticate(self, db: InMemoryStore, *, email: str) -> User:
        """Find the account registered with ``email``."""
        user = await self.user_repository.get_by_email(db, email=email)
        raise_for_status(condition=user is None, exception=InvalidCredentials)
        return user

    async def login(self, db: InMemoryStore, *, email: str) -> TokenResponse:
        user = await self.authenticate(db, email=email)
        access_token = token_manager.create_token(
            subject=user.id, token_type=TokenType.ACCESS
        )
        self._logger.info(f"User logged in: {user.id}")
        return TokenResponse(
            access_token=access_token,
            expires_in=token_manager.expires_in_seconds,
            user=UserResponse.model_validate(user),
        )

    async def get_user_for_auth(self, db: InMemoryStore, *, user_id: str) -> Optional[User]:
        return await self.user_repository.get(db, obj_id=user_id)

    # ======= REGISTRATION =======
    async def register(self, db: InMemoryStore, *, user_in: UserRegister) -> User:
        """Self-service sign-up. New accounts are always regular users."""
        await self._ensure_email_available(db, user_in.email)
        user = User(
            **user_in.model_dump(),
            role=UserRole.USER,
            unique_link=generate_unique_link(),
        )
        created = await self.user_repository.create(db, obj_in=user)
        self._logger.info(f"User registered: {created.id}")
        return created

    # ======= ADMIN =======
    async def get_users(self, db: InMemoryStore, *, current_user: User) -> List[User]:
        self._check_admin(current_user, "list")
        return await self.user_repository.list(db)

    async def get_user_by_id(self, db: InMemoryStore, *, user_id: str) -> User:
        user = await self.user_repository.get(db, obj_id=user_id)
        raise_for_status(
            condition=user is None,
            exception=ResourceNotFound,
            resource_type="User",
            detail=f"User with id {user_id} not found.",
        )
        return user

    async def add_user(
        self, db: InMemoryStore, *, user_in: UserCreate, current_user: User
    ) -> User:
        self._check_admin(current_user, "create")
        await self._ensure_email_available(db, user_in.email)
        user = User(**user_in.model_dump(), unique_link=generate_unique_link())
        created = await self.user_repository.create(db, obj_in=user)
        self._logger.info(
            f"User created by admin: {created.id}",
            extra={"created_by": current_user.id, "role": created.role.value},
        )
        return created

    async def update_user(
        self,
        db: InMemoryStore,
        *,
        user_id_to_update: str,
        user_data: UserUpdate,
        current_user: User,
    ) -> User:
        """Partial update. ``unique_link`` is not part of ``UserUpdate``."""
        self._check_admin(current_user, "update")
        await self.get_user_by_id(db, user_id=user_id_to_update)

        update_dict = user_data.model_dump(exclude_unset=True, exclude_none=True)
        if "email" in update_dict:
            await self._ensure_email_available(
                db, update_dict["email"], exclude_user_id=user_id_to_update
            )

        updated = await self.user_repository.update(
            db, obj_id=user_id_to_update, fields_to_update=update_dict
        )
        self._logger.info(
            f"User updated: {user_id_to_update}",
            extra={"changes": list(update_dict.keys()), "updated_by": current_user.id},
        )
        return updated

    async def delete_user(
        self, db: InMemoryStore, *, user_id_to_delete: str, current_user: User
    ) -> None:
        """Delete a user account. Their books stay in the catalogue."""
        self._check_admin(current_user, "delete")
        raise_for_status(
            condition=user_id_to_delete == current_user.id,
            exception=NotAuthorized,
            detail="Administrators cannot delete their own account.",
        )
        await self.get_user_by_id(db, user_id=user_id_to_delete)
        await self.user_repository.delete(db, obj_id=user_id_to_delete)
        self._logger.info(
            f"User deleted: {user_id_to_delete}",
            extra={"deleted_by": current_user.id},
        )


user_service = UserService()
