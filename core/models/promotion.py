"""Promotion code models.

A promotion is a percentage discount code with an optional expiry, usage cap
and minimum purchase. Authoritative validation is done by the API. Organizers
manage their own codes with PromotionInput and PromotionUpdate.
"""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field, field_validator
from pydantic.alias_generators import to_camel


class PromotionDescriptor(BaseModel):
    """Discount terms of a promotion, as returned by validation."""

    id: str | None = None
    code: str | None = None
    discount_percent: int = Field(..., ge=1, le=100)
    discount_amount: Decimal | None = None  # Server's own estimate, informational only
    min_purchase: Decimal | None = Field(None, ge=0)
    valid_until: datetime | None = None
    max_uses: int | None = Field(None, ge=0)
    current_uses: int | None = Field(None, ge=0)

    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
        "frozen": True,
    }


class PromotionValidation(BaseModel):
    """Result of POST /promotions/validate."""

    valid: bool
    promotion: PromotionDescriptor | None = None


class PromotionEventRef(BaseModel):
    """Event summary embedded in an organizer's promotion record."""

    id: str
    title: str | None = None


class Promotion(BaseModel):
    """A promotion as its organizer manages it (GET /promotions/my-promotions)."""

    id: str
    code: str
    discount_percent: int = Field(..., ge=1, le=100)
    valid_until: datetime
    max_uses: int | None = Field(None, ge=0)
    current_uses: int = Field(0, ge=0)
    min_purchase: Decimal | None = Field(None, ge=0)
    is_active: bool = True
    event_id: str | None = None
    event: PromotionEventRef | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    model_config = {"alias_generator": to_camel, "populate_by_name": True}

    def applies_to(self, event_id: str) -> bool:
        """A promotion without an event is organizer-wide."""
        scope = self.event.id if self.event is not None else self.event_id
        return scope is None or scope == event_id

    def is_expired(self, now: datetime) -> bool:
        return self.valid_until < now

    @property
    def uses_left(self) -> int | None:
        """Remaining redemptions, or None when uncapped."""
        if self.max_uses is None:
            return None
        return max(self.max_uses - self.current_uses, 0)


class PromotionInput(BaseModel):
    """Payload for POST /promotions."""

    code: str = Field(..., min_length=1, max_length=50)
    discount_percent: int = Field(..., ge=1, le=100)
    valid_until: datetime
    max_uses: int | None = Field(None, ge=1)
    min_purchase: int | None = Field(None, ge=0)  # Whole Rupiah, sent as a JSON number
    event_id: str | None = None

    model_config = {"alias_generator": to_camel, "populate_by_name": True}

    @field_validator("code")
    @classmethod
    def normalize_code(cls, value: str) -> str:
        """Codes are matched upper-cased, so store them that way."""
        code = value.strip().upper()
        if not code:
            raise ValueError("code must not be blank")
        return code

    def to_payload(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class PromotionUpdate(BaseModel):
    """Payload for PUT /promotions/{id}. Only set fields are sent."""

    discount_percent: int | None = Field(None, ge=1, le=100)
    valid_until: datetime | None = None
    max_uses: int | None = Field(None, ge=1)
    min_purchase: int | None = Field(None, ge=0)  # Whole Rupiah, sent as a JSON number

    model_config = {"alias_generator": to_camel, "populate_by_name": True}

    def to_payload(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
