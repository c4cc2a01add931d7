"""Transaction (booking) domain models.

The server is the source of truth for committed bookings. The client only
sends a BookingRequest and reads back Transactions.
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel


class TransactionStatus(str, Enum):
    """Booking lifecycle status as reported by the API."""

    WAITING_PAYMENT = "WAITING_PAYMENT"
    WAITING_CONFIRM = "WAITING_CONFIRM"
    DONE = "DONE"
    REJECTED = "REJECTED"
    EXPIRED = "EXPIRED"
    CANCELLED = "CANCELLED"


class BookingRequest(BaseModel):
    """Payload for POST /transactions."""

    event_id: str = Field(..., min_length=1)
    quantity: int = Field(1, ge=1)
    points_used: int | None = Field(None, ge=1)
    promo_code: str | None = Field(None, min_length=1)
    payment_method: str | None = None

    model_config = {"alias_generator": to_camel, "populate_by_name": True}

    def to_payload(self) -> dict:
        """Wire form: camelCase keys, unset optionals omitted."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class Transaction(BaseModel):
    """A booking as stored by the API."""

    id: str
    event_id: str
    user_id: str | None = None
    status: TransactionStatus
    quantity: int | None = None
    total_amount: Decimal = Field(Decimal(0), ge=0)
    points_used: int = Field(0, ge=0)
    final_amount: Decimal = Field(Decimal(0), ge=0)
    payment_method: str | None = None
    payment_proof: str | None = None
    payment_deadline: datetime | None = None
    notes: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    model_config = {"alias_generator": to_camel, "populate_by_name": True}

    @property
    def awaiting_payment(self) -> bool:
        """Whether the customer still has to upload a payment proof."""
        return self.status == TransactionStatus.WAITING_PAYMENT

    @property
    def is_free(self) -> bool:
        return self.final_amount == 0
