# bookr/schemas/book_schema.py
"""
Book schemas for request/response models.

ISBN format is checked by the book service rather than here so that a
malformed value surfaces as the application's ``ValidationError``.
"""

from typing import Optional, List, Dict, Any

from pydantic import BaseModel, Field, ConfigDict, field_validator, model_validator

from bookr.models.book_model import BookBase
from bookr.models.tag_model import Tag
from bookr.schemas.tag_schema import TagResponse


class BookCreate(BookBase):
    """Schema for recommending a new book."""

    @field_validator("title", "author", "publisher", "isbn", "publish_date", mode="before")
    @classmethod
    def strip_whitespace(cls, v):
        return v.strip() if isinstance(v, str) else v


class BookUpdate(BaseModel):
    """Partial update: only fields that are sent change."""

    model_config = ConfigDict(validate_assignment=True)

    title: Optional[str] = Field(None, min_length=1, max_length=255)
    author: Optional[str] = Field(None, min_length=1, max_length=255)
    publisher: Optional[str] = Field(None, max_length=255)
    isbn: Optional[str] = Field(None, max_length=32)
    publish_date: Optional[str] = Field(None, max_length=32)
    reason: Optional[str] = Field(None, max_length=2000)
    tags: Optional[List[Tag]] = None
    cover_url: Optional[str] = None

    @field_validator("title", "author", "publisher", "isbn", "publish_date", mode="before")
    @classmethod
    def strip_whitespace(cls, v):
        return v.strip() if isinstance(v, str) else v

    @model_validator(mode="before")
    @classmethod
    def validate_at_least_one_field(cls, values: Dict[str, Any]) -> Dict[str, Any]:
        """Ensure at least one field is provided for update."""
        if isinstance(values, dict) and not any(
            v is not None for v in values.values()
        ):
            raise ValueError("At least one field must be provided for update")
        return values


class BookResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    author: str
    publisher: str
    isbn: str
    publish_date: str
    reason: str
    tags: List[TagResponse]
    cover_url: Optional[str] = None
    recommender_id: str
    recommender_name: str


class BookListResponse(BaseModel):
    items: List[BookResponse] = Field(..., description="Matching books")
    total: int = Field(..., ge=0, description="Number of matching books")
    query: str = Field("", description="Search query that produced this list")


class ExtractedBookInfo(BaseModel):
    """Fields read off a cover image; any of them may be missing."""

    title: Optional[str] = None
    author: Optional[str] = None
    publisher: Optional[str] = None
    isbn: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        return all(v is None for v in self.model_dump().values())


class CoverRecognitionResponse(BaseModel):
    recognized: bool = Field(..., description="Whether any field was extracted")
    info: Optional[ExtractedBookInfo] = None


__all__ = [
    "BookCreate",
    "BookUpdate",
    "BookResponse",
    "BookListResponse",
    "ExtractedBookInfo",
    "CoverRecognitionResponse",
]
