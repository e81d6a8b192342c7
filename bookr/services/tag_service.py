import logging
from typing import List

from bookr.db.store import InMemoryStore
from bookr.crud.book_crud import book_repository
from bookr.crud.tag_crud import tag_repository
from bookr.models.tag_model import Tag
from bookr.models.user_model import User
from bookr.schemas.tag_schema import TagOverviewResponse
from bookr.services import tag_registry
from bookr.core.exception_utils import raise_for_status
from bookr.core.exceptions import NotAuthorized

logger = logging.getLogger(__name__)


class TagService:
    """
    System tag management and the reconciled tag views.

    The registry functions do the actual tag logic; this service reads the
    current collections from the store and writes system tag changes back.
    """

    def __init__(self):
        self.tag_repository = tag_repository
        self.book_repository = book_repository
        self._logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    def _check_admin(self, current_user: User, action: str) -> None:
        raise_for_status(
            condition=not current_user.is_admin,
            exception=NotAuthorized,
            detail=f"Only administrators can {action} system tags.",
        )

    # ======= READ OPERATIONS =======
    async def get_system_tags(self, db: InMemoryStore) -> List[Tag]:
        return await self.tag_repository.list(db)

    async def get_all_tags(self, db: InMemoryStore) -> List[Tag]:
        """System tags reconciled with every tag carried by a book."""
        system_tags = await self.tag_repository.list(db)
        books = await self.book_repository.list(db)
        book_tags = [tag for book in books for tag in book.tags]
        return tag_registry.reconcile(system_tags, book_tags)

    async def get_user_generated_tags(self, db: InMemoryStore) -> List[Tag]:
        system_tags = await self.tag_repository.list(db)
        all_tags = await self.get_all_tags(db)
        return tag_registry.user_generated(all_tags, system_tags)

    async def get_tag_overview(self, db: InMemoryStore) -> TagOverviewResponse:
        system_tags = await self.tag_repository.list(db)
        all_tags = await self.get_all_tags(db)
        return TagOverviewResponse(
            system_tags=system_tags,
            user_generated_tags=tag_registry.user_generated(all_tags, system_tags),
            all_tags=all_tags,
        )

    # ======= WRITE OPERATIONS =======
    async def add_system_tag(
        self, db: InMemoryStore, *, name: str, current_user: User
    ) -> Tag:
        """Create a system tag. Names that already exist are allowed."""
        self._check_admin(current_user, "create")
        tag = tag_registry.make_system_tag(name)
        created = await self.tag_repository.create(db, obj_in=tag)
        self._logger.info(
            f"System tag added: {created.name}",
            extra={"tag_id": created.id, "created_by": current_user.id},
        )
        return created

    async def delete_system_tag(
        self, db: InMemoryStore, *, tag_id: str, current_user: User
    ) -> None:
        """
        Remove a system tag if present. Books keep their own copy of the
        tag, so nothing else changes.
        """
        self._check_admin(current_user, "delete")
        await self.tag_repository.delete(db, obj_id=tag_id)
        self._logger.info(
            f"System tag deleted: {tag_id}",
            extra={"tag_id": tag_id, "deleted_by": current_user.id},
        )


tag_service = TagService()
