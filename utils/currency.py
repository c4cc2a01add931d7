"""Money helpers for Indonesian Rupiah.

IDR has no minor unit in practice, so amounts are displayed and submitted
with zero decimal places. Arithmetic elsewhere keeps full Decimal precision;
rounding happens here, at the display/submission boundary.
"""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

CURRENCY_CODE = "IDR"
CURRENCY_SYMBOL = "Rp"
MINOR_UNIT = Decimal("1")


def to_decimal(value) -> Decimal:
    """
    Coerce a user or API supplied amount to a non-negative Decimal.

    None, non-numeric, non-finite and negative values all become zero.
    Floats go through str() so 0.1 stays 0.1.
    """
    if value is None or isinstance(value, bool):
        return Decimal(0)
    if isinstance(value, float):
        value = str(value)
    try:
        amount = Decimal(value)
    except (InvalidOperation, TypeError, ValueError):
        return Decimal(0)
    if not amount.is_finite() or amount < 0:
        return Decimal(0)
    return amount


def round_amount(amount: Decimal) -> Decimal:
    """Round to the currency's minor unit (whole Rupiah, half up)."""
    return amount.quantize(MINOR_UNIT, rounding=ROUND_HALF_UP)


def format_idr(amount) -> str:
    """
    Format an amount the way id-ID locale renders IDR: 'Rp 1.250.000'.

    Grouping uses '.', no decimals.
    """
    rounded = round_amount(to_decimal(amount))
    grouped = f"{int(rounded):,}".replace(",", ".")
    return f"{CURRENCY_SYMBOL} {grouped}"
