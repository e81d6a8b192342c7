# bookr/utils/deps.py
"""
FastAPI dependencies for authentication, authorization and the shared
per-process resources (store, cover extractor).
"""

import logging
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from bookr.core.security import token_manager, TokenType
from bookr.db.store import InMemoryStore, get_store
from bookr.models.user_model import User, UserRole
from bookr.core.exceptions import InvalidToken, NotAuthorized
from bookr.services.cover_recognition import BookInfoExtractor
from bookr.services.user_service import user_service

logger = logging.getLogger(__name__)

# Bearer scheme for token extraction; a missing header is reported as InvalidToken
bearer_scheme = HTTPBearer(auto_error=False, description="JWT Access Token")


# ================== RESOURCES ==================
def get_book_info_extractor(request: Request) -> BookInfoExtractor:
    """The cover extractor chosen at startup."""
    return request.app.state.book_info_extractor


# ================== CORE AUTHENTICATION DEPENDENCIES ==================
async def get_current_user(
    request: Request,
    db: InMemoryStore = Depends(get_store),
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> User:
    """
    Primary authentication dependency. Validates the JWT and returns the
    user it names.
    """
    if credentials is None:
        raise InvalidToken("Not authenticated.")

    payload = token_manager.verify_token(
        credentials.credentials, expected_type=TokenType.ACCESS
    )
    user_id = payload.get("sub")

    user = await user_service.get_user_for_auth(db, user_id=user_id)
    if not user:
        # Account was deleted after the token was issued
        raise InvalidToken(f"User with id {user_id} no longer exists.")

    request.state.user = user
    return user


# ================== AUTHORIZATION DEPENDENCIES ==================
class RoleChecker:
    """Lets the request through only for users at or above ``minimum`` role."""

    def __init__(self, minimum: UserRole):
        self.minimum = minimum

    def __call__(
        self, request: Request, current_user: User = Depends(get_current_user)
    ) -> User:
        if not current_user.role < self.minimum:
            return current_user

        logger.warning(
            f"{current_user.role.value} {current_user.id} denied {request.method} {request.url.path}",
            extra={"required_role": self.minimum.value},
        )
        raise NotAuthorized(f"This action requires the '{self.minimum.value}' role.")


require_admin = RoleChecker(UserRole.ADMIN)


__all__ = [
    "get_book_info_extractor",
    "get_current_user",
    "RoleChecker",
    "require_admin",
]
