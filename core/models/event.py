"""Event domain models as served by the EventHub API.

Prices are Rupiah amounts. The API speaks camelCase; models accept either
the wire name or the Python name.
"""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

from core.models.promotion import PromotionDescriptor


class EventOrganizer(BaseModel):
    """Organizer summary embedded in event payloads."""

    id: str
    name: str | None = None
    email: str | None = None


class Event(BaseModel):
    """A bookable event."""

    id: str
    title: str
    description: str = ""
    category: str | None = None
    location: str | None = None
    start_date: datetime
    end_date: datetime
    price: Decimal = Field(Decimal(0), ge=0)
    total_seats: int = Field(0, ge=0)
    available_seats: int = Field(0, ge=0)  # Missing on some payloads - treat as sold out
    is_free: bool = False
    image: str | None = None
    status: str | None = None
    tags: list[str] = Field(default_factory=list)
    organizer_id: str | None = None
    organizer: EventOrganizer | None = None
    promotion: PromotionDescriptor | None = None
    average_rating: float | None = None

    model_config = {"alias_generator": to_camel, "populate_by_name": True}

    @property
    def unit_price(self) -> Decimal:
        """Per-ticket price used for quotes. Free events cost nothing."""
        if self.is_free:
            return Decimal(0)
        return self.price

    def max_quantity(self, per_booking_cap: int = 10) -> int:
        """Most tickets one booking may request: min(cap, available seats)."""
        return min(per_booking_cap, self.available_seats)


class EventPagination(BaseModel):
    """Paging block of GET /events."""

    page: int = 1
    limit: int = 10
    total: int = 0
    pages: int = 0


class EventPage(BaseModel):
    """One page of events from GET /events."""

    events: list[Event]
    pagination: EventPagination
