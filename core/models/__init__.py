"""Core domain models."""

from core.models.promotion import (
    Promotion,
    PromotionDescriptor,
    PromotionEventRef,
    PromotionInput,
    PromotionUpdate,
    PromotionValidation,
)
from core.models.event import Event, EventOrganizer, EventPage, EventPagination
from core.models.transaction import BookingRequest, Transaction, TransactionStatus
from core.models.quote import BookingQuote
from core.models.review import EventReviews, Review, ReviewAuthor, ReviewEligibility, ReviewInput

__all__ = [
    # Promotion
    "Promotion", "PromotionDescriptor", "PromotionEventRef", "PromotionInput",
    "PromotionUpdate", "PromotionValidation",
    # Event
    "Event", "EventOrganizer", "EventPage", "EventPagination",
    # Transaction
    "BookingRequest", "Transaction", "TransactionStatus",
    # Quote
    "BookingQuote",
    # Review
    "EventReviews", "Review", "ReviewAuthor", "ReviewEligibility", "ReviewInput",
]
