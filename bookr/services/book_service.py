import logging
import uuid
from typing import Optional, List

from bookr.db.store import InMemoryStore
from bookr.crud.book_crud import book_repository
from bookr.schemas.book_schema import (
    BookCreate,
    BookUpdate,
    BookListResponse,
    ExtractedBookInfo,
)
from bookr.models.user_model import User
from bookr.models.book_model import Book
from bookr.services import tag_registry
from bookr.services.catalog_filter import filter_books
from bookr.services.cover_recognition import BookInfoExtractor
from bookr.utils.validators import is_valid_isbn
from bookr.core.config import settings
from bookr.core.exception_utils import raise_for_status
from bookr.core.exceptions import (
    ExternalServiceError,
    NotAuthorized,
    ResourceNotFound,
    ValidationError,
)

logger = logging.getLogger(__name__)


def default_cover_url() -> str:
    return f"https://picsum.photos/seed/{uuid.uuid4()}/300/400"


class BookService:
    """
    Book recommendations: listing and search, create/update/delete with
    ownership checks, and cover recognition.
    """

    def __init__(self):
        self.book_repository = book_repository
        self._logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    def _check_authorization(self, current_user: User, book: Book, action: str) -> None:
        """
        Check if user is authorized to perform action on book.
        """
        # Admins can do anything
        if current_user.is_admin:
            return

        # Users can only modify their own Books
        raise_for_status(
            condition=book.recommender_id != current_user.id,
            exception=NotAuthorized,
            detail=f"You are not authorized to {action} this book.",
        )

    def _validate_isbn(self, isbn: Optional[str]) -> None:
        if isbn is not None and not is_valid_isbn(isbn):
            raise ValidationError(
                "Invalid ISBN: expected 10 or 13 digits (ISBN-10 may end in X)."
            )

    def _to_list_response(self, books: List[Book], query: str) -> BookListResponse:
        return BookListResponse(items=books, total=len(books), query=query)

    # ======= READ OPERATIONS =======
    async def get_book_by_id(self, db: InMemoryStore, *, book_id: str) -> Book:
        book = await self.book_repository.get(db, obj_id=book_id)
        raise_for_status(
            condition=book is None,
            exception=ResourceNotFound,
            resource_type="Book",
            detail=f"Book with id {book_id} not found.",
        )
        return book

    async def get_public_books(self, db: InMemoryStore, *, query: str = "") -> BookListResponse:
        """The shared catalogue, visible without logging in."""
        books = filter_books(await self.book_repository.list(db), query)
        self._logger.info(f"Book list retrieved : {len(books)} books returned")
        return self._to_list_response(books, query)

    async def get_user_books(
        self, db: InMemoryStore, *, user_id: str, query: str = ""
    ) -> BookListResponse:
        """Books the given user recommended."""
        books = await self.book_repository.list_by_recommender(db, recommender_id=user_id)
        books = filter_books(books, query)
        self._logger.info(f"User book list retrieved : {len(books)} books returned")
        return self._to_list_response(books, query)

    async def get_books(
        self, db: InMemoryStore, *, current_user: User, query: str = ""
    ) -> BookListResponse:
        """All books, for administrators."""
        raise_for_status(
            condition=not current_user.is_admin,
            exception=NotAuthorized,
            detail="Only administrators can list every book.",
        )
        return await self.get_public_books(db, query=query)

    # ======= WRITE OPERATIONS =======
    async def create_book(
        self, db: InMemoryStore, *, book_data: BookCreate, current_user: User
    ) -> Book:
        """
        Save a new recommendation. The recommender is the current user and
        their name is copied onto the book.
        """
        self._validate_isbn(book_data.isbn)

        payload = book_data.model_dump(exclude={"tags"})
        payload["tags"] = tag_registry.dedupe_by_name(
            tag.model_copy() for tag in book_data.tags
        )
        payload["cover_url"] = book_data.cover_url or default_cover_url()

        book = Book(
            **payload,
            recommender_id=current_user.id,
            recommender_name=current_user.name,
        )
        created = await self.book_repository.create(db, obj_in=book)
        self._logger.info(
            f"Book recommended: {created.title}",
            extra={"book_id": created.id, "user_id": current_user.id},
        )
        return created

    async def update_book(
        self,
        db: InMemoryStore,
        *,
        book_id: str,
        book_data: BookUpdate,
        current_user: User,
    ) -> Book:
        """Apply only the fields present in ``book_data``."""
        book = await self.get_book_by_id(db, book_id=book_id)
        self._check_authorization(current_user, book, "update")

        update_dict = book_data.model_dump(
            exclude_unset=True, exclude_none=True, exclude={"tags"}
        )
        self._validate_isbn(update_dict.get("isbn"))
        if book_data.tags is not None:
            update_dict["tags"] = tag_registry.dedupe_by_name(
                tag.model_copy() for tag in book_data.tags
            )

        if not update_dict:
            return book

        updated = await self.book_repository.update(
            db, obj_id=book_id, fields_to_update=update_dict
        )
        self._logger.info(
            f"Book updated: {book_id}",
            extra={"changes": list(update_dict.keys()), "updated_by": current_user.id},
        )
        return updated

    async def delete_book(
        self, db: InMemoryStore, *, book_id: str, current_user: User
    ) -> None:
        book = await self.get_book_by_id(db, book_id=book_id)
        self._check_authorization(current_user, book, "delete")
        await self.book_repository.delete(db, obj_id=book_id)
        self._logger.info(
            f"Book deleted: {book_id}", extra={"deleted_by": current_user.id}
        )

    # ======= COVER RECOGNITION =======
    async def recognize_cover(
        self,
        *,
        extractor: BookInfoExtractor,
        image: bytes,
        mime_type: str = "image/jpeg",
    ) -> Optional[ExtractedBookInfo]:
        """
        Read book details off a cover image. Failures of the extractor are
        logged and reported as ``None`` so the caller can fall back to
        manual entry.
        """
        if not image:
            raise ValidationError("Cover image is empty.")
        if len(image) > settings.MAX_REQUEST_SIZE:
            raise ValidationError(
                f"Cover image exceeds {settings.MAX_REQUEST_SIZE} bytes."
            )

        try:
            info = await extractor.extract_book_info(image, mime_type)
        except ExternalServiceError as e:
            self._logger.warning(
                f"Cover recognition failed: {e.detail}",
                extra={"extractor": extractor.name},
            )
            return None

        if info is None or info.is_empty:
            return None
        if info.isbn and not is_valid_isbn(info.isbn):
            self._logger.info(f"Recognized ISBN looks malformed: {info.isbn}")
        return info


book_service = BookService()
