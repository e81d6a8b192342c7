# bookr/models/book_model.py
"""
Book model definition.

A book stores its own copies of the tags it was saved with. Removing a
system tag later does not touch books that already carry it.
"""

import uuid
from typing import List, Optional

from pydantic import BaseModel, Field

from bookr.models.tag_model import Tag


class BookBase(BaseModel):
    title: str = Field(
        min_length=1,
        max_length=255,
        description="The title of the book",
        examples=["深入理解计算机系统"],
    )
    author: str = Field(
        min_length=1,
        max_length=255,
        description="The author of the book",
        examples=["Randal E. Bryant"],
    )
    publisher: str = Field(
        default="",
        max_length=255,
        description="The publisher of the book",
        examples=["机械工业出版社"],
    )
    isbn: str = Field(
        default="",
        max_length=32,
        description="ISBN-10 or ISBN-13, hyphens allowed",
        examples=["9787111562286"],
    )
    publish_date: str = Field(
        default="",
        max_length=32,
        description="Publication date as entered",
        examples=["2016-11-01"],
    )
    reason: str = Field(
        default="",
        max_length=2000,
        description="Why the book is recommended",
    )
    tags: List[Tag] = Field(default_factory=list)
    cover_url: Optional[str] = Field(default=None, description="Cover image URL")


class Book(BookBase):
    id: str = Field(
        default_factory=lambda: str(uuid.uuid4()),
        description="Opaque book identifier",
    )
    recommender_id: str = Field(..., description="Id of the recommending user")
    recommender_name: str = Field(
        ..., description="Name of the recommending user at the time of saving"
    )

    def __repr__(self) -> str:
        return f"<Book(id={self.id}, title='{self.title}', author='{self.author}')>"
