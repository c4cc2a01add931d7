"""
Booking domain events.

Immutable event objects describing what happened in a booking form. The form
publishes them; notification handlers (toasts, analytics) subscribe without
the form knowing who is listening.

Each event carries the user-facing message the form chose, so every handler
shows the same wording.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any
from uuid import uuid4

from utils.timezone import now_utc


@dataclass(frozen=True, kw_only=True)
class BookingEvent:
    """Base class for all booking form events."""
    event_id: str = field(default_factory=lambda: str(uuid4()))
    occurred_at: datetime = field(default_factory=now_utc)
    message: str = ""


# =============================================================================
# PROMOTION EVENTS
# =============================================================================


@dataclass(frozen=True)
class PromotionApplied(BookingEvent):
    """A promotion code validated and is now applied to the quote."""
    code: str = ""
    promotion: Any = None  # PromotionDescriptor


@dataclass(frozen=True)
class PromotionRejected(BookingEvent):
    """The API reported the code as invalid, expired or not applicable."""
    code: str = ""


@dataclass(frozen=True)
class PromotionServiceUnavailable(BookingEvent):
    """Validation could not reach the API. Applied state was left unchanged."""
    code: str = ""


# =============================================================================
# SUBMISSION EVENTS
# =============================================================================


@dataclass(frozen=True)
class BookingCreated(BookingEvent):
    """The API accepted the booking."""
    transaction: Any = None  # Transaction


@dataclass(frozen=True)
class BookingFailed(BookingEvent):
    """Booking submission failed. The form stays editable."""
    booked_event_id: str = ""
