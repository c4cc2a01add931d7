"""
Client-side filtering of event listings.

The listing page fetches a page of events and narrows it locally as the user
types. A zero price bound or a missing date bound means "unbounded"; the
"All ..." sentinels mean no category/location filter.
"""

from datetime import date
from decimal import Decimal

from pydantic import BaseModel, Field

from core.models import Event

ALL_CATEGORIES = "All Categories"
ALL_LOCATIONS = "All Locations"


class PriceRange(BaseModel):
    min: Decimal = Field(Decimal(0), ge=0)
    max: Decimal = Field(Decimal(0), ge=0)  # 0 = no upper bound


class DateRange(BaseModel):
    start: date | None = None
    end: date | None = None


class EventFilters(BaseModel):
    """Filter state of the event listing."""

    search_term: str = ""
    category: str = ALL_CATEGORIES
    location: str = ALL_LOCATIONS
    price_range: PriceRange = Field(default_factory=PriceRange)
    date_range: DateRange = Field(default_factory=DateRange)
    promotion_only: bool = False
    page: int | None = Field(None, ge=1)
    limit: int | None = Field(None, ge=1, le=100)

    def to_query_params(self) -> dict:
        """Query string for GET /events. Local-only filters are not sent."""
        params = {}
        if self.category and self.category != ALL_CATEGORIES:
            params["category"] = self.category
        if self.location and self.location != ALL_LOCATIONS:
            params["location"] = self.location
        if self.search_term.strip():
            params["search"] = self.search_term.strip()
        if self.page is not None:
            params["page"] = str(self.page)
        if self.limit is not None:
            params["limit"] = str(self.limit)
        return params


def _matches_search(event: Event, term: str) -> bool:
    if not term:
        return True
    haystacks = [event.title, event.description, *event.tags]
    return any(term in text.lower() for text in haystacks if text)


def matches(event: Event, filters: EventFilters) -> bool:
    """Whether one event passes every active filter."""
    if not _matches_search(event, filters.search_term.strip().lower()):
        return False

    if filters.category and filters.category != ALL_CATEGORIES:
        if event.category != filters.category:
            return False

    if filters.location and filters.location != ALL_LOCATIONS:
        if filters.location.lower() not in (event.location or "").lower():
            return False

    price_range = filters.price_range
    if price_range.min and event.price < price_range.min:
        return False
    if price_range.max and event.price > price_range.max:
        return False

    date_range = filters.date_range
    if date_range.start and event.start_date.date() < date_range.start:
        return False
    if date_range.end and event.end_date.date() > date_range.end:
        return False

    if filters.promotion_only and event.promotion is None:
        return False

    return True


def filter_events(events: list[Event], filters: EventFilters) -> list[Event]:
    """Events passing all filters, in their original order."""
    return [event for event in events if matches(event, filters)]
