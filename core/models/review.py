# =============================================================================
# core/models/review.py - Review Schemas
# =============================================================================

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field, model_validator


class Review(BaseModel):
    id: str
    user_id: str
    resource_id: str
    rating: int = Field(..., ge=1, le=5)
    comment: str = ""
    reviewer_name: str | None = Field(
        default=None,
        description="Author's full name from their profile",
    )
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @model_validator(mode="before")
    @classmethod
    def lift_reviewer_name(cls, data: Any) -> Any:
        """Flatten the embedded `profiles(full_name)` join into reviewer_name."""
        if isinstance(data, dict) and data.get("reviewer_name") is None:
            profile = data.get("profiles")
            if isinstance(profile, dict):
                data = {**data, "reviewer_name": profile.get("full_name")}
        return data


class ReviewCreate(BaseModel):
    rating: int = Field(..., ge=1, le=5, description="Star rating, 1 to 5")
    comment: str = Field(default="", max_length=2000)


class ReviewUpdate(BaseModel):
    rating: int | None = Field(default=None, ge=1, le=5)
    comment: str | None = Field(default=None, max_length=2000)

    def to_update_dict(self) -> dict:
        return self.model_dump(exclude_unset=True)


class ReviewStats(BaseModel):
    """
    Aggregate ratings for one resource.

    average_rating is rounded to one decimal and is 0 when there are no
    reviews. rating_distribution maps star value -> number of reviews.
    """

    total_reviews: int = 0
    average_rating: float = 0
    rating_distribution: dict[int, int] = Field(default_factory=dict)
