"""Tests for event listing filters."""

from datetime import date, datetime, timezone
from decimal import Decimal

import pytest

from core.event_filters import (
    ALL_CATEGORIES,
    DateRange,
    EventFilters,
    PriceRange,
    filter_events,
    matches,
)
from factories import make_event, make_promotion


@pytest.fixture
def events():
    return [
        make_event(id="e1", title="Jazz Night", category="Music", location="Jakarta Selatan",
                   price=Decimal("150000"), tags=["outdoor"]),
        make_event(id="e2", title="Startup Summit", category="Technology", location="Bandung",
                   price=Decimal("500000"), promotion=make_promotion()),
        make_event(id="e3", title="Community Run", category="Sports", location="Surabaya",
                   price=Decimal(0), is_free=True,
                   start_date=datetime(2026, 12, 5, 0, 0, tzinfo=timezone.utc),
                   end_date=datetime(2026, 12, 5, 4, 0, tzinfo=timezone.utc)),
    ]


def ids(events):
    return [event.id for event in events]


class TestQueryParams:

    def test_defaults_send_nothing(self):
        assert EventFilters().to_query_params() == {}

    def test_server_side_filters(self):
        filters = EventFilters(search_term="  jazz ", category="Music", location="Jakarta", page=2, limit=12)
        assert filters.to_query_params() == {
            "category": "Music",
            "location": "Jakarta",
            "search": "jazz",
            "page": "2",
            "limit": "12",
        }

    def test_local_only_filters_not_sent(self):
        filters = EventFilters(price_range=PriceRange(min=Decimal(1)), promotion_only=True)
        assert filters.to_query_params() == {}


class TestMatching:

    def test_no_filters_keeps_everything_in_order(self, events):
        assert ids(filter_events(events, EventFilters())) == ["e1", "e2", "e3"]

    def test_search_matches_title_description_and_tags(self, events):
        assert ids(filter_events(events, EventFilters(search_term="SUMMIT"))) == ["e2"]
        assert ids(filter_events(events, EventFilters(search_term="Outdoor"))) == ["e1"]
        assert ids(filter_events(events, EventFilters(search_term="bay"))) == ["e1", "e2", "e3"]

    def test_category_exact(self, events):
        assert ids(filter_events(events, EventFilters(category="Sports"))) == ["e3"]
        assert ids(filter_events(events, EventFilters(category=ALL_CATEGORIES))) == ["e1", "e2", "e3"]

    def test_location_substring_case_insensitive(self, events):
        assert ids(filter_events(events, EventFilters(location="jakarta"))) == ["e1"]

    def test_price_range_zero_max_is_unbounded(self, events):
        filters = EventFilters(price_range=PriceRange(min=Decimal("100000")))
        assert ids(filter_events(events, filters)) == ["e1", "e2"]

    def test_price_range_bounds(self, events):
        filters = EventFilters(price_range=PriceRange(min=Decimal("100000"), max=Decimal("200000")))
        assert ids(filter_events(events, filters)) == ["e1"]

    def test_date_range(self, events):
        filters = EventFilters(date_range=DateRange(start=date(2026, 12, 1)))
        assert ids(filter_events(events, filters)) == ["e3"]

        filters = EventFilters(date_range=DateRange(end=date(2026, 11, 30)))
        assert ids(filter_events(events, filters)) == ["e1", "e2"]

    def test_promotion_only(self, events):
        assert ids(filter_events(events, EventFilters(promotion_only=True))) == ["e2"]

    def test_filters_combine(self, events):
        filters = EventFilters(category="Technology", search_term="jazz")
        assert matches(events[1], filters) is False
