"""Payment deadline countdown for bookings awaiting payment proof."""

from dataclasses import dataclass
from datetime import datetime

from core.models import Transaction
from utils.timezone import now_utc, to_utc

CRITICAL_MINUTES = 30
WARNING_MINUTES = 60


@dataclass(frozen=True)
class Countdown:
    """Time left until a payment deadline, split for display."""

    hours: int
    minutes: int
    seconds: int
    expired: bool

    @property
    def total_minutes(self) -> int:
        return self.hours * 60 + self.minutes

    @property
    def urgency(self) -> str:
        """'expired', 'critical' (<=30 min), 'warning' (<=60 min) or 'normal'."""
        if self.expired:
            return "expired"
        if self.total_minutes <= CRITICAL_MINUTES:
            return "critical"
        if self.total_minutes <= WARNING_MINUTES:
            return "warning"
        return "normal"

    def display(self) -> str:
        """HH:MM:SS. Hours are not wrapped at 24."""
        return f"{self.hours:02d}:{self.minutes:02d}:{self.seconds:02d}"


def time_remaining(deadline: datetime, now: datetime | None = None) -> Countdown:
    """
    Countdown to deadline.

    Raises ValueError if either datetime is naive.
    """
    current = to_utc(now) if now is not None else now_utc()
    remaining = int((to_utc(deadline) - current).total_seconds())

    if remaining <= 0:
        return Countdown(hours=0, minutes=0, seconds=0, expired=True)

    hours, rest = divmod(remaining, 3600)
    minutes, seconds = divmod(rest, 60)
    return Countdown(hours=hours, minutes=minutes, seconds=seconds, expired=False)


def payment_countdown(transaction: Transaction, now: datetime | None = None) -> Countdown | None:
    """Countdown for a transaction still waiting for payment, else None."""
    if not transaction.awaiting_payment or transaction.payment_deadline is None:
        return None
    return time_remaining(transaction.payment_deadline, now)
