"""
Time utilities for bid timestamps and load calendar dates.

Bid timestamps are instants and are always kept as aware UTC datetimes.
Load dates (pickup, delivery, appointment) are plain calendar dates and are
never converted between time zones.
"""

from datetime import UTC, date, datetime
from typing import Optional


def utc_now() -> datetime:
    """Current wall-clock time as an aware UTC datetime."""
    return datetime.now(UTC)


def format_timestamp(ts: datetime) -> str:
    """
    Format an instant for the wire.

    Args:
        ts: Aware datetime (naive values are assumed to be UTC)

    Returns:
        ISO8601 string in UTC with a trailing "Z"
    """
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=UTC)
    return ts.astimezone(UTC).isoformat().replace("+00:00", "Z")


def parse_timestamp(value: str) -> datetime:
    """
    Parse a wire timestamp into an aware UTC datetime.

    Raises:
        ValueError: If the value is not an ISO8601 timestamp
    """
    if not isinstance(value, str):
        raise ValueError(f"Timestamp must be a string, got {type(value).__name__}")

    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed.astimezone(UTC)


def format_date(value: date) -> str:
    """Format a calendar date as YYYY-MM-DD."""
    return value.isoformat()


def parse_date(value: str) -> date:
    """
    Parse a YYYY-MM-DD calendar date.

    Raises:
        ValueError: If the value is not an ISO calendar date
    """
    if not isinstance(value, str):
        raise ValueError(f"Date must be a string, got {type(value).__name__}")
    return date.fromisoformat(value)


def format_display_date(value: Optional[date], long_month: bool = True) -> str:
    """
    Human-readable date for notices, e.g. "August 1, 2024" or "Aug 1, 2024".

    Returns "N/A" when no date is set.
    """
    if value is None:
        return "N/A"
    month = value.strftime("%B" if long_month else "%b")
    return f"{month} {value.day}, {value.year}"


def format_display_time(value: Optional[str]) -> str:
    """Convert a 24h "HH:MM" appointment time to "h:MM AM/PM"."""
    if not value:
        return ""
    hours_text, _, minutes_text = value.partition(":")
    hours = int(hours_text)
    minutes = int(minutes_text or 0)
    suffix = "PM" if hours >= 12 else "AM"
    display_hours = 12 if hours % 12 == 0 else hours % 12
    return f"{display_hours}:{minutes:02d} {suffix}"
