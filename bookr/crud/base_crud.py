import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Generic, List, Optional, TypeVar

from pydantic import BaseModel

from bookr.db.store import InMemoryStore
from bookr.core.exception_utils import handle_exceptions, raise_for_status
from bookr.core.exceptions import InternalServerError, ResourceNotFound

T = TypeVar("T", bound=BaseModel)


class BaseRepository(ABC, Generic[T]):
    """
    Uniform list/get/create/update/delete contract over one store collection.

    Subclasses only name the collection; the operations are shared.
    Writes take the store lock.
    """

    resource_type: str = "Resource"

    def __init__(self, model: type[T]):
        self.model = model
        self._logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    @abstractmethod
    def _collection(self, db: InMemoryStore) -> List[T]:
        """Return the live list backing this repository."""

    @handle_exceptions(
        default_exception=InternalServerError,
        message="An unexpected store error occurred.",
    )
    async def list(self, db: InMemoryStore) -> List[T]:
        """Return all entities in store order."""
        return list(self._collection(db))

    @handle_exceptions(
        default_exception=InternalServerError,
        message="An unexpected store error occurred.",
    )
    async def get(self, db: InMemoryStore, *, obj_id: str) -> Optional[T]:
        """Get entity by its id."""
        return next((obj for obj in self._collection(db) if obj.id == obj_id), None)

    @handle_exceptions(
        default_exception=InternalServerError,
        message="An unexpected store error occurred.",
    )
    async def create(self, db: InMemoryStore, *, obj_in: T) -> T:
        """Store a new entity."""
        async with db.lock:
            self._insert(self._collection(db), obj_in)
        self._logger.info(f"{self.resource_type} created: {obj_in.id}")
        return obj_in

    @handle_exceptions(
        default_exception=InternalServerError,
        message="An unexpected store error occurred.",
    )
    async def update(
        self, db: InMemoryStore, *, obj_id: str, fields_to_update: Dict[str, Any]
    ) -> T:
        """Merge ``fields_to_update`` into the stored entity."""
        async with db.lock:
            collection = self._collection(db)
            index = next(
                (i for i, obj in enumerate(collection) if obj.id == obj_id), None
            )
            raise_for_status(
                condition=index is None,
                exception=ResourceNotFound,
                detail=f"{self.resource_type} with id {obj_id} not found.",
                resource_type=self.resource_type,
            )
            updated = collection[index].model_copy(update=fields_to_update)
            collection[index] = updated

        self._logger.info(
            f"{self.resource_type} fields updated for {obj_id}: "
            f"{list(fields_to_update.keys())}"
        )
        return updated

    @handle_exceptions(
        default_exception=InternalServerError,
        message="An unexpected store error occurred.",
    )
    async def delete(self, db: InMemoryStore, *, obj_id: str) -> None:
        """Delete an entity by id. Missing ids are ignored."""
        async with db.lock:
            collection = self._collection(db)
            collection[:] = [obj for obj in collection if obj.id != obj_id]
        self._logger.info(f"{self.resource_type} deleted: {obj_id}")

    def _insert(self, collection: List[T], obj: T) -> None:
        collection.append(obj)
