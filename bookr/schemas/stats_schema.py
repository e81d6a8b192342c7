from typing import List

from pydantic import BaseModel, Field


class RecommendationCount(BaseModel):
    """Number of books one user has recommended."""

    name: str = Field(..., description="User name")
    count: int = Field(..., ge=0, description="Books recommended")


class StatsResponse(BaseModel):
    user_count: int = Field(..., ge=0, description="Registered users")
    book_count: int = Field(..., ge=0, description="Recommended books")
    average_per_user: float = Field(
        ..., ge=0, description="Books per user, 0 when there are no users"
    )
    per_user_counts: List[RecommendationCount] = Field(
        default_factory=list, description="Sorted by count, highest first"
    )
