"""BookingQuote: the price breakdown shown before a booking is submitted.

Ephemeral. Recomputed from form inputs on every change and never persisted.
Amounts keep full Decimal precision; payable_total is the rounded figure
used for display and submission.
"""

from decimal import Decimal

from pydantic import BaseModel

from utils.currency import round_amount


class BookingQuote(BaseModel):
    """Derived price breakdown for one booking."""

    unit_price: Decimal
    quantity: int
    original_total: Decimal
    points_discount: Decimal
    after_points: Decimal
    promo_discount: Decimal
    final_total: Decimal
    promotion_applied: bool = False

    model_config = {"frozen": True}

    @property
    def payable_total(self) -> Decimal:
        """Final total rounded to whole Rupiah."""
        return round_amount(self.final_total)

    @property
    def points_used(self) -> int:
        """Points actually redeemed (1 point = 1 Rupiah)."""
        return int(self.points_discount)
