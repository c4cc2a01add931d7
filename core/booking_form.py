"""
Booking form state.

Owns quantity, points-to-use and promo code for one booking and recomputes
the BookingQuote on every setter call. Inputs are clamped before they reach
the calculator:

- quantity: 1 .. min(max tickets per booking, available seats)
- points:   0 .. min(points balance, original total), re-clamped when
            quantity changes

All failures (invalid code, unreachable API, rejected booking) end up in
`error`/`notice` and as events on the bus. Nothing is raised to the caller.
"""

import logging
from typing import Callable

from clients.eventhub_client import (
    EventHubAuthError,
    EventHubError,
    EventHubRequestError,
    EventHubUnavailableError,
)
from core import messages
from core.event_bus import EventBus
from core.events import (
    BookingCreated,
    BookingEvent,
    BookingFailed,
    PromotionApplied,
    PromotionRejected,
    PromotionServiceUnavailable,
)
from core.models import BookingQuote, BookingRequest, Event, Transaction
from core.pricing import calculate_quote, max_points_usable
from core.promotion_gate import PromotionGate, PromotionOutcome
from utils.currency import format_idr

logger = logging.getLogger(__name__)


class BookingForm:
    """State for booking tickets to a single event."""

    def __init__(
        self,
        event: Event,
        points_available: int,
        gate: PromotionGate,
        submit_booking: Callable[[BookingRequest], Transaction],
        event_bus: EventBus | None = None,
        max_tickets_per_booking: int = 10,
    ):
        """
        Args:
            event: Event being booked (unit price, seats, free flag)
            points_available: User's loyalty balance
            gate: Promotion gate wired to the validation endpoint
            submit_booking: create_booking(request) -> Transaction
            event_bus: Optional bus for notification events
            max_tickets_per_booking: Per-booking ticket cap
        """
        self.event = event
        self._points_available = max(0, int(points_available or 0))
        self._gate = gate
        self._submit_booking = submit_booking
        self._event_bus = event_bus
        self._ticket_cap = max_tickets_per_booking

        self._quantity = 1
        self._points_to_use = 0
        self._is_submitting = False
        self._quote: BookingQuote | None = None

        self.error: str | None = None
        self.notice: str | None = None
        self.transaction: Transaction | None = None

        self._recompute()

    # =========================================================================
    # DERIVED STATE
    # =========================================================================

    @property
    def quote(self) -> BookingQuote:
        return self._quote

    @property
    def quantity(self) -> int:
        return self._quantity

    @property
    def points_to_use(self) -> int:
        return self._points_to_use

    @property
    def points_available(self) -> int:
        return self._points_available

    @property
    def promo_code(self) -> str:
        return self._gate.code

    @property
    def max_quantity(self) -> int:
        """Upper quantity bound. Never below 1 so the form always has a value."""
        return max(1, self.event.max_quantity(self._ticket_cap))

    @property
    def max_points(self) -> int:
        return max_points_usable(self._points_available, self._quote.original_total)

    @property
    def points_enabled(self) -> bool:
        """Points input is shown only for paid events and a positive balance."""
        return not self.event.is_free and self._points_available > 0

    @property
    def promo_enabled(self) -> bool:
        return not self.event.is_free

    @property
    def is_validating_promo(self) -> bool:
        return self._gate.is_validating

    @property
    def is_submitting(self) -> bool:
        return self._is_submitting

    @property
    def insufficient_seats(self) -> bool:
        return self.event.available_seats < self._quantity

    @property
    def promotion_below_minimum(self) -> bool:
        """A validated promotion is active but points pushed the amount under its minimum."""
        promotion = self._gate.active_promotion
        return (
            promotion is not None
            and self.promo_enabled
            and promotion.min_purchase is not None
            and self._quote.after_points < promotion.min_purchase
        )

    @property
    def can_increment(self) -> bool:
        return self._quantity < self.max_quantity

    @property
    def can_decrement(self) -> bool:
        return self._quantity > 1

    @property
    def can_submit(self) -> bool:
        return not (
            self.is_validating_promo
            or self._is_submitting
            or self.insufficient_seats
            or self.transaction is not None
        )

    # =========================================================================
    # INPUTS
    # =========================================================================

    def set_quantity(self, value) -> None:
        try:
            quantity = int(value)
        except (TypeError, ValueError):
            quantity = 1
        self._quantity = min(max(quantity, 1), self.max_quantity)
        self._recompute()

    def increment(self) -> None:
        if self.can_increment:
            self.set_quantity(self._quantity + 1)

    def decrement(self) -> None:
        if self.can_decrement:
            self.set_quantity(self._quantity - 1)

    def set_points_to_use(self, value) -> None:
        try:
            points = int(value)
        except (TypeError, ValueError):
            points = 0
        self._points_to_use = min(max(points, 0), self.max_points)
        self._recompute()

    def use_all_points(self) -> None:
        self.set_points_to_use(self.max_points)

    def set_promo_code(self, text: str | None) -> None:
        """Edit the promo code. Drops an applied promotion if the text no longer matches."""
        self._gate.set_code(text)
        self._recompute()

    def apply_promo_code(self) -> PromotionOutcome:
        """Validate the current promo code (explicit user action only)."""
        if not self.promo_enabled:
            return PromotionOutcome.SKIPPED

        code = self._gate.code.strip()
        self.notice = None

        try:
            outcome = self._gate.apply(self.event.id, self._quote.original_total)
        except EventHubAuthError:
            self.error = messages.BOOKING_SESSION_EXPIRED
            self._recompute()
            return PromotionOutcome.UNAVAILABLE

        if outcome == PromotionOutcome.APPLIED:
            promotion = self._gate.active_promotion
            self.error = None
            self.notice = messages.PROMO_APPLIED.format(percent=promotion.discount_percent)
            self._publish(PromotionApplied(message=self.notice, code=code, promotion=promotion))
        elif outcome == PromotionOutcome.INVALID:
            self.error = messages.PROMO_INVALID
            self._publish(PromotionRejected(message=self.error, code=code))
        elif outcome == PromotionOutcome.UNAVAILABLE:
            self.error = messages.PROMO_UNAVAILABLE
            self._publish(PromotionServiceUnavailable(message=self.error, code=code))

        self._recompute()
        if self.promotion_below_minimum:
            self.notice = messages.PROMO_NOT_APPLICABLE.format(
                minimum=format_idr(self._gate.active_promotion.min_purchase)
            )
        return outcome

    # =========================================================================
    # SUBMISSION
    # =========================================================================

    def booking_request(self) -> BookingRequest:
        """
        Request for the current inputs.

        The promo code is sent only when the quote actually applies it, so the
        server sees the same discount the user was shown.
        """
        points_used = self._quote.points_used
        promo_code = self._gate.active_code if self._quote.promotion_applied else None
        return BookingRequest(
            event_id=self.event.id,
            quantity=self._quantity,
            points_used=points_used if points_used > 0 else None,
            promo_code=promo_code,
        )

    def submit(self) -> Transaction | None:
        """
        Submit the booking.

        Returns the created Transaction, or None if submission was blocked or
        failed (see `error`).
        """
        if self.insufficient_seats:
            self.error = messages.INSUFFICIENT_SEATS.format(available=self.event.available_seats)
            return None
        if not self.can_submit:
            return None

        request = self.booking_request()
        self._is_submitting = True
        self.error = None
        try:
            transaction = self._submit_booking(request)
        except EventHubError as e:
            self.error = self._submission_error_message(e)
            logger.warning(f"Booking for event {self.event.id} failed: {e}")
            self._publish(BookingFailed(message=self.error, booked_event_id=self.event.id))
            return None
        finally:
            self._is_submitting = False

        self.transaction = transaction
        if self._quote.final_total > 0:
            self.notice = messages.BOOKING_CREATED_PAID
        else:
            self.notice = messages.BOOKING_CREATED_FREE
        self._publish(BookingCreated(message=messages.BOOKING_CREATED, transaction=transaction))
        return transaction

    @staticmethod
    def _submission_error_message(error: EventHubError) -> str:
        if isinstance(error, EventHubRequestError) and error.message:
            return error.message
        if isinstance(error, EventHubAuthError):
            return messages.BOOKING_SESSION_EXPIRED
        if isinstance(error, EventHubUnavailableError):
            return messages.BOOKING_SERVICE_UNAVAILABLE
        return messages.BOOKING_FAILED

    # =========================================================================
    # INTERNALS
    # =========================================================================

    def _recompute(self) -> None:
        """Re-clamp points for the current total and rebuild the quote."""
        unit_price = self.event.unit_price
        original_total = unit_price * self._quantity
        self._points_to_use = min(
            self._points_to_use,
            max_points_usable(self._points_available, original_total),
        )
        promotion = self._gate.active_promotion if self.promo_enabled else None
        self._quote = calculate_quote(
            unit_price,
            self._quantity,
            self._points_available,
            self._points_to_use,
            promotion,
        )

    def _publish(self, event: BookingEvent) -> None:
        if self._event_bus is not None:
            self._event_bus.publish(event)
