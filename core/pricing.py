"""
Booking price calculation.

Pure functions, safe to call on every keystroke. Inputs are clamped, never
rejected:
- negative, missing or non-numeric values count as zero
- redeemed points are capped by the balance and by the purchase amount
- discount percentages are capped to 0..100

Order matters: points come off first, the promotion percentage applies to
what is left. A promotion's min_purchase is checked against the post-points
amount, so points cannot push a purchase below the promotion's minimum and
still keep the discount.
"""

from decimal import Decimal

from core.models import BookingQuote, PromotionDescriptor
from utils.currency import to_decimal

_HUNDRED = Decimal(100)


def _to_count(value) -> int:
    """Whole non-negative count (tickets, points). Fractions are truncated."""
    return int(to_decimal(value))


def max_points_usable(points_available, original_total) -> int:
    """Largest number of points that may be redeemed against original_total."""
    return int(min(to_decimal(points_available), to_decimal(original_total)))


def promotion_discount(after_points: Decimal, promotion: PromotionDescriptor | None) -> Decimal:
    """
    Discount a promotion grants on the post-points amount.

    Zero when there is no promotion or when after_points is below the
    promotion's min_purchase.
    """
    if promotion is None:
        return Decimal(0)

    if promotion.min_purchase is not None and after_points < promotion.min_purchase:
        return Decimal(0)

    percent = min(to_decimal(promotion.discount_percent), _HUNDRED)
    return after_points * percent / _HUNDRED


def calculate_quote(
    unit_price,
    quantity,
    points_available,
    points_requested,
    promotion: PromotionDescriptor | None = None,
) -> BookingQuote:
    """
    Compute the booking price breakdown.

    Args:
        unit_price: Price per ticket (0 for free events)
        quantity: Number of tickets
        points_available: User's loyalty point balance
        points_requested: Points the user asked to redeem (clamped)
        promotion: Validated promotion, if one is applied

    Returns:
        BookingQuote with original_total, points_discount, promo_discount
        and final_total, all non-negative
    """
    price = to_decimal(unit_price)
    count = _to_count(quantity)

    original_total = price * count
    points_discount = min(
        Decimal(_to_count(points_requested)),
        Decimal(_to_count(points_available)),
        original_total,
    )
    after_points = original_total - points_discount

    promo_discount = promotion_discount(after_points, promotion)
    final_total = max(Decimal(0), after_points - promo_discount)

    return BookingQuote(
        unit_price=price,
        quantity=count,
        original_total=original_total,
        points_discount=points_discount,
        after_points=after_points,
        promo_discount=promo_discount,
        final_total=final_total,
        promotion_applied=promo_discount > 0,
    )
