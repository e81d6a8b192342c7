# bookr/models/tag_model.py
"""
Tag model definition.

Tags have two notions of equality. While a book is being edited the user
toggles specific catalogue entries, so tags are compared by ``id``. Once
saved and displayed next to the system tags they collapse by
case-insensitive ``name``. Both comparisons are defined here so callers
never inline either one.
"""

import uuid
from enum import Enum

from pydantic import BaseModel, Field, field_validator


class TagType(str, Enum):
    """Where a tag comes from."""

    SYSTEM = "system"
    USER = "user"


class Tag(BaseModel):
    id: str = Field(
        default_factory=lambda: str(uuid.uuid4()),
        description="Opaque tag identifier",
        examples=["tag-1"],
    )
    name: str = Field(
        ...,
        min_length=1,
        description="Tag name as entered",
        examples=["SciFi"],
    )
    type: TagType = Field(default=TagType.USER, description="Tag origin")

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, v):
        # Blank names then fail min_length
        return v.strip() if isinstance(v, str) else v

    @property
    def name_key(self) -> str:
        """Key used for name-based de-duplication."""
        return self.name.lower()

    def __repr__(self) -> str:
        return f"<Tag(id={self.id}, name='{self.name}', type={self.type.value})>"


def same_tag_identity(a: Tag, b: Tag) -> bool:
    """True when both values are the same catalogue entry."""
    return a.id == b.id


def same_tag_name(a: Tag, b: Tag) -> bool:
    """True when both tags display as the same tag."""
    return a.name_key == b.name_key
