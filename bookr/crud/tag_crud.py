from typing import List

from bookr.db.store import InMemoryStore
from bookr.crud.base_crud import BaseRepository
from bookr.models.tag_model import Tag


class TagRepository(BaseRepository[Tag]):
    """Repository for the system tag collection."""

    resource_type = "Tag"

    def __init__(self):
        super().__init__(Tag)

    def _collection(self, db: InMemoryStore) -> List[Tag]:
        return db.system_tags


tag_repository = TagRepository()
