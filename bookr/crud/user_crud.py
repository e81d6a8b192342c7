from typing import List, Optional

from bookr.db.store import InMemoryStore
from bookr.core.exception_utils import handle_exceptions
from bookr.core.exceptions import InternalServerError
from bookr.crud.base_crud import BaseRepository
from bookr.models.user_model import User

DB_ERROR = InternalServerError(detail="An unexpected store error occurred.")


class UserRepository(BaseRepository[User]):
    """Repository for all store operations related to the User model."""

    resource_type = "User"

    def __init__(self):
        super().__init__(User)

    def _collection(self, db: InMemoryStore) -> List[User]:
        return db.users

    @handle_exceptions(default_exception=DB_ERROR)
    async def get_by_email(self, db: InMemoryStore, *, email: str) -> Optional[User]:
        """Retrieves a user by their email address (case-insensitive)."""
        wanted = email.strip().lower()
        return next((u for u in db.users if u.email.lower() == wanted), None)


user_repository = UserRepository()
