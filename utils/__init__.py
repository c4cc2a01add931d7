"""Utility modules for cross-cutting concerns."""

from utils.timezone import (
    now_utc,
    to_utc,
    to_local,
    parse_iso,
    format_event_date,
    format_event_time,
)
from utils.currency import to_decimal, round_amount, format_idr
