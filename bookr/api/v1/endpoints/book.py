import logging
from typing import Dict

from fastapi import APIRouter, Depends, File, Query, UploadFile, status

from bookr.core.config import settings
from bookr.db.store import InMemoryStore, get_store
from bookr.utils.deps import get_book_info_extractor, get_current_user
from bookr.schemas.book_schema import (
    BookCreate,
    BookListResponse,
    BookResponse,
    BookUpdate,
    CoverRecognitionResponse,
)
from bookr.models.user_model import User
from bookr.services.book_service import book_service
from bookr.services.cover_recognition import BookInfoExtractor

logger = logging.getLogger(__name__)

router = APIRouter(
    tags=["Books"],
    prefix=f"{settings.API_V1_STR}/books",
)


@router.get(
    "",
    response_model=BookListResponse,
    status_code=status.HTTP_200_OK,
    summary="Browse the catalogue",
    description="All recommended books, newest first, optionally filtered by a search query",
)
async def get_public_books(
    *,
    db: InMemoryStore = Depends(get_store),
    q: str = Query("", max_length=200, description="Matches title, author, recommender or tag name"),
):
    return await book_service.get_public_books(db, query=q)


@router.get(
    "/mine",
    response_model=BookListResponse,
    status_code=status.HTTP_200_OK,
    summary="My recommendations",
    description="Books recommended by the authenticated user",
)
async def get_my_books(
    *,
    db: InMemoryStore = Depends(get_store),
    current_user: User = Depends(get_current_user),
    q: str = Query("", max_length=200),
):
    return await book_service.get_user_books(db, user_id=current_user.id, query=q)


@router.post(
    "/recognize-cover",
    response_model=CoverRecognitionResponse,
    status_code=status.HTTP_200_OK,
    summary="Recognize a book cover",
    description="Extract title, author, publisher and ISBN from a cover photo",
)
async def recognize_cover(
    *,
    current_user: User = Depends(get_current_user),
    extractor: BookInfoExtractor = Depends(get_book_info_extractor),
    image: UploadFile = File(..., description="Cover image"),
):
    """
    Read book details off an uploaded cover image.

    When nothing could be extracted, ``recognized`` is false and the form
    should be filled in manually.
    """
    # Read one byte past the limit so oversize uploads are detectable
    content = await image.read(settings.MAX_REQUEST_SIZE + 1)
    info = await book_service.recognize_cover(
        extractor=extractor,
        image=content,
        mime_type=image.content_type or "image/jpeg",
    )
    logger.info(
        "Cover recognition finished",
        extra={"user_id": current_user.id, "recognized": info is not None},
    )
    return CoverRecognitionResponse(recognized=info is not None, info=info)


@router.post(
    "",
    response_model=BookResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Recommend a book",
    description="Create a new book recommendation",
)
async def create_book(
    *,
    db: InMemoryStore = Depends(get_store),
    current_user: User = Depends(get_current_user),
    book_data: BookCreate,
):
    """
    Create a new book recommendation.

    - **title**, **author**: required
    - **isbn**: optional, ISBN-10 or ISBN-13 (hyphens allowed)
    - **tags**: system tags and free-form user tags

    The authenticated user becomes the recommender.
    """
    return await book_service.create_book(
        db, book_data=book_data, current_user=current_user
    )


@router.get(
    "/{book_id}",
    response_model=BookResponse,
    status_code=status.HTTP_200_OK,
    summary="Get book by id",
)
async def get_book_by_id(*, db: InMemoryStore = Depends(get_store), book_id: str):
    return await book_service.get_book_by_id(db, book_id=book_id)


@router.patch(
    "/{book_id}",
    response_model=BookResponse,
    status_code=status.HTTP_200_OK,
    summary="Update a book",
    description="Update a book by its ID",
)
async def update_book(
    *,
    db: InMemoryStore = Depends(get_store),
    book_id: str,
    book_data: BookUpdate,
    current_user: User = Depends(get_current_user),
):
    """
    Update a book.

    Only the recommender or an admin can update a book.
    Only provided fields will be updated.
    """
    return await book_service.update_book(
        db, book_id=book_id, book_data=book_data, current_user=current_user
    )


@router.delete(
    "/{book_id}",
    response_model=Dict[str, str],
    status_code=status.HTTP_200_OK,
    summary="Delete a book",
    description="Delete a book by its ID",
)
async def delete_book(
    *,
    db: InMemoryStore = Depends(get_store),
    book_id: str,
    current_user: User = Depends(get_current_user),
):
    """Only the recommender or an admin can delete a book."""
    await book_service.delete_book(db, book_id=book_id, current_user=current_user)
    return {"message": "Book deleted successfully"}
