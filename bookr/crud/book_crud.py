from typing import List

from bookr.db.store import InMemoryStore
from bookr.core.exception_utils import handle_exceptions
from bookr.core.exceptions import InternalServerError
from bookr.crud.base_crud import BaseRepository
from bookr.models.book_model import Book


class BookRepository(BaseRepository[Book]):
    """Repository for all store operations related to the Book model."""

    resource_type = "Book"

    def __init__(self):
        super().__init__(Book)

    def _collection(self, db: InMemoryStore) -> List[Book]:
        return db.books

    def _insert(self, collection: List[Book], obj: Book) -> None:
        # Newest recommendations come first.
        collection.insert(0, obj)

    @handle_exceptions(
        default_exception=InternalServerError,
        message="An unexpected store error occurred.",
    )
    async def list_by_recommender(
        self, db: InMemoryStore, *, recommender_id: str
    ) -> List[Book]:
        """Books recommended by one user, in store order."""
        return [b for b in db.books if b.recommender_id == recommender_id]


book_repository = BookRepository()
