"""UTC-everywhere time handling, plus Indonesian display formatting for event dates."""

from datetime import datetime, timezone
from zoneinfo import ZoneInfo

DEFAULT_DISPLAY_TZ = "Asia/Jakarta"

_DAY_NAMES = ("Senin", "Selasa", "Rabu", "Kamis", "Jumat", "Sabtu", "Minggu")
_MONTH_NAMES = (
    "Januari", "Februari", "Maret", "April", "Mei", "Juni",
    "Juli", "Agustus", "September", "Oktober", "November", "Desember",
)


def now_utc() -> datetime:
    """
    Current time in UTC.

    Use this instead of datetime.now() everywhere.
    """
    return datetime.now(timezone.utc)


def to_utc(dt: datetime) -> datetime:
    """
    Convert a datetime to UTC.

    Raises ValueError if datetime is naive (no timezone).
    """
    if dt.tzinfo is None:
        raise ValueError(
            "Cannot convert naive datetime to UTC. Datetime must be timezone-aware."
        )
    return dt.astimezone(timezone.utc)


def to_local(dt: datetime, tz_name: str = DEFAULT_DISPLAY_TZ) -> datetime:
    """
    Convert UTC datetime to local timezone for display.

    ONLY use this at display boundaries. The API speaks UTC.

    Raises:
        ValueError: If datetime is naive or timezone name is invalid
    """
    if dt.tzinfo is None:
        raise ValueError(
            "Cannot convert naive datetime. Datetime must be timezone-aware."
        )

    try:
        local_tz = ZoneInfo(tz_name)
    except KeyError:
        raise ValueError(f"Unknown timezone: {tz_name}")

    return dt.astimezone(local_tz)


def parse_iso(iso_string: str) -> datetime:
    """
    Parse ISO 8601 datetime string from the API to UTC datetime.

    Accepts the trailing 'Z' the API emits. Raises ValueError if the string
    carries no timezone info.
    """
    if iso_string.endswith("Z"):
        iso_string = iso_string[:-1] + "+00:00"
    dt = datetime.fromisoformat(iso_string)
    if dt.tzinfo is None:
        raise ValueError(
            "Cannot parse naive datetime string. "
            "Include timezone offset (e.g., 'Z' or '+00:00')."
        )
    return to_utc(dt)


def format_event_date(dt: datetime, tz_name: str = DEFAULT_DISPLAY_TZ) -> str:
    """Long Indonesian date, e.g. 'Senin, 19 Oktober 2026'."""
    local = to_local(dt, tz_name)
    day = _DAY_NAMES[local.weekday()]
    month = _MONTH_NAMES[local.month - 1]
    return f"{day}, {local.day:02d} {month} {local.year}"


def format_event_time(dt: datetime, tz_name: str = DEFAULT_DISPLAY_TZ) -> str:
    """24-hour clock time, e.g. '19:30'."""
    return to_local(dt, tz_name).strftime("%H:%M")
