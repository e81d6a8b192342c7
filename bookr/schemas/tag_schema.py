# bookr/schemas/tag_schema.py
"""
Tag schemas for request/response models.

Draft schemas carry the in-progress tag list of a book form so the
client can delegate toggle and add operations to the server.
"""

from typing import List, Annotated

from pydantic import BaseModel, Field, ConfigDict

from bookr.models.tag_model import Tag, TagType


# ------ CRUD Schemas -------
class SystemTagCreate(BaseModel):
    """Schema for creating a system tag (admin only)."""

    name: Annotated[
        str,
        Field(
            max_length=50,
            description="Tag name; surrounding whitespace is trimmed",
            examples=["科幻"],
        ),
    ]


# ------- Response Schemas -------
class TagResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str = Field(..., description="Tag ID")
    name: str = Field(..., description="Tag name")
    type: TagType = Field(..., description="Tag origin")


class TagOverviewResponse(BaseModel):
    """Everything the tag management page shows."""

    system_tags: List[TagResponse] = Field(..., description="Curated tags")
    user_generated_tags: List[TagResponse] = Field(
        ..., description="User tags not matching any current system tag"
    )
    all_tags: List[TagResponse] = Field(..., description="Reconciled tag universe")


# ------ Draft editing ------
class DraftToggleRequest(BaseModel):
    draft_tags: List[Tag] = Field(default_factory=list, description="Current draft")
    tag: Tag = Field(..., description="Tag to toggle by id")


class DraftUserTagRequest(BaseModel):
    draft_tags: List[Tag] = Field(default_factory=list, description="Current draft")
    name: str = Field(..., max_length=50, description="Free-form tag name")


class DraftResponse(BaseModel):
    draft_tags: List[TagResponse]


__all__ = [
    "SystemTagCreate",
    "TagResponse",
    "TagOverviewResponse",
    "DraftToggleRequest",
    "DraftUserTagRequest",
    "DraftResponse",
]
