"""Event review models.

Attendees rate an event from 1 to 5 stars once it is over. Whether a user
may review is decided by the API (GET /reviews/can-review/{event_id}).
"""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator
from pydantic.alias_generators import to_camel

MAX_COMMENT_LENGTH = 500


class ReviewAuthor(BaseModel):
    id: str
    name: str | None = None
    avatar: str | None = None


class Review(BaseModel):
    """A published review."""

    id: str
    event_id: str
    user_id: str
    rating: int = Field(..., ge=1, le=5)
    comment: str | None = None
    user: ReviewAuthor | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    model_config = {"alias_generator": to_camel, "populate_by_name": True}


class ReviewInput(BaseModel):
    """Payload for POST /reviews."""

    event_id: str = Field(..., min_length=1)
    rating: int = Field(..., ge=1, le=5)
    comment: str | None = Field(None, max_length=MAX_COMMENT_LENGTH)

    model_config = {"alias_generator": to_camel, "populate_by_name": True}

    @field_validator("comment")
    @classmethod
    def blank_comment_is_none(cls, value: str | None) -> str | None:
        if value is None:
            return None
        return value.strip() or None

    def to_payload(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class EventReviews(BaseModel):
    """Response of GET /reviews/event/{event_id}."""

    reviews: list[Review]
    average_rating: float = Field(0, ge=0, le=5)
    total_reviews: int = Field(0, ge=0)

    model_config = {"alias_generator": to_camel, "populate_by_name": True}


class ReviewEligibility(BaseModel):
    """Response of GET /reviews/can-review/{event_id}."""

    can_review: bool
    reason: str | None = None

    model_config = {"alias_generator": to_camel, "populate_by_name": True}
