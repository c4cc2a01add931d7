"""
Promotion code gate.

Decides when a typed code is worth sending for validation and how to treat
the answer. The API is authoritative; the gate only guards the call and
keeps track of which code the applied promotion belongs to.

A promotion stays applied only while the input text still equals the code
that was validated. Editing the text drops it, and nothing re-validates
until the user explicitly applies again.
"""

import logging
from decimal import Decimal
from enum import Enum
from typing import Callable

from clients.eventhub_client import EventHubResponseError, EventHubUnavailableError
from core.models import PromotionDescriptor, PromotionValidation

logger = logging.getLogger(__name__)

PromotionValidator = Callable[[str, str, Decimal], PromotionValidation]


class PromotionOutcome(str, Enum):
    """Result of one apply() attempt."""

    APPLIED = "applied"          # Valid, now applied
    INVALID = "invalid"          # API says invalid/expired/not applicable; cleared
    UNAVAILABLE = "unavailable"  # Could not validate; previous state kept
    SKIPPED = "skipped"          # Empty code, no call made; cleared
    STALE = "stale"              # Code text changed while validating; response discarded
    BUSY = "busy"                # A validation is already in flight; no call made


class PromotionGate:
    """Holds promo code text and the promotion validated for it."""

    def __init__(self, validator: PromotionValidator):
        """
        Args:
            validator: validate(code, event_id, subtotal) -> PromotionValidation,
                e.g. EventHubClient.validate_promotion
        """
        self._validator = validator
        self._code = ""
        self._applied_code: str | None = None
        self._applied: PromotionDescriptor | None = None
        self._is_validating = False

    @property
    def code(self) -> str:
        """Current input text."""
        return self._code

    @property
    def is_validating(self) -> bool:
        return self._is_validating

    @property
    def active_promotion(self) -> PromotionDescriptor | None:
        """Applied promotion, only while the input still matches the validated code."""
        if self._applied is None or self._code.strip() != self._applied_code:
            return None
        return self._applied

    @property
    def active_code(self) -> str | None:
        return self._applied_code if self.active_promotion is not None else None

    def set_code(self, text: str | None) -> None:
        """Update input text. Codes are upper-cased. Never triggers validation."""
        self._code = (text or "").upper()
        if self._applied_code is not None and self._code.strip() != self._applied_code:
            self.clear()

    def clear(self) -> None:
        """Drop the applied promotion (input text is kept)."""
        self._applied_code = None
        self._applied = None

    def apply(self, event_id: str, subtotal: Decimal) -> PromotionOutcome:
        """
        Validate the current code once.

        Args:
            event_id: Event the booking is for
            subtotal: Pre-points total sent to the API for its own checks

        Returns:
            PromotionOutcome describing what happened to the applied state
        """
        if self._is_validating:
            return PromotionOutcome.BUSY

        requested = self._code.strip()
        if not requested:
            self.clear()
            return PromotionOutcome.SKIPPED

        self._is_validating = True
        try:
            result = self._validator(requested, event_id, subtotal)
        except (EventHubUnavailableError, EventHubResponseError) as e:
            logger.warning(f"Promotion {requested} could not be validated: {e}")
            return PromotionOutcome.UNAVAILABLE
        finally:
            self._is_validating = False

        # The input may have changed while the request was in flight
        if self._code.strip() != requested:
            logger.info(f"Discarding stale validation for {requested}")
            return PromotionOutcome.STALE

        if result.valid and result.promotion is not None:
            self._applied_code = requested
            self._applied = result.promotion
            logger.info(f"Promotion {requested} applied for event {event_id}")
            return PromotionOutcome.APPLIED

        self.clear()
        return PromotionOutcome.INVALID
