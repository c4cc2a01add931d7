"""Tests for booking event models."""

from dataclasses import FrozenInstanceError
from datetime import datetime

import pytest

from core.events import (
    BookingCreated,
    BookingEvent,
    BookingFailed,
    PromotionApplied,
    PromotionServiceUnavailable,
)
from factories import make_transaction


class TestBookingEventBase:

    def test_event_id_and_timestamp_generated(self):
        event = BookingFailed(booked_event_id="evt-1")
        assert isinstance(event.event_id, str) and event.event_id
        assert isinstance(event.occurred_at, datetime)
        assert event.occurred_at.tzinfo is not None

    def test_each_event_gets_unique_id(self):
        assert BookingFailed().event_id != BookingFailed().event_id

    def test_events_are_frozen(self):
        event = PromotionServiceUnavailable(code="SAVE10")
        with pytest.raises(FrozenInstanceError):
            event.code = "OTHER"

    def test_subclasses_share_base(self):
        for event_class in (BookingCreated, BookingFailed, PromotionApplied):
            assert issubclass(event_class, BookingEvent)


class TestPayloads:

    def test_message_and_payload_are_keyword_fields(self):
        transaction = make_transaction()
        event = BookingCreated(message="Booking successful!", transaction=transaction)
        assert event.message == "Booking successful!"
        assert event.transaction is transaction

    def test_message_defaults_to_empty(self):
        assert PromotionApplied(code="SAVE10").message == ""
