"""UTC timestamp helpers."""

from datetime import date, datetime, timezone
from typing import Optional, Union


def utc_now() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def ensure_utc(dt: Optional[datetime]) -> Optional[datetime]:
    """Make ``dt`` timezone-aware UTC.

    Naive datetimes are taken to already be UTC; aware ones are converted.

    Example:
        >>> ensure_utc(datetime(2025, 11, 4, 12, 0)).tzinfo == timezone.utc
        True
    """
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def format_timestamp(dt: datetime) -> str:
    """ISO 8601 with a ``Z`` suffix, second precision."""
    return ensure_utc(dt).strftime("%Y-%m-%dT%H:%M:%SZ")


def format_letter_date(value: Union[date, datetime, None] = None) -> str:
    """Date line for letters, e.g. ``October 19, 2026``. Defaults to today (UTC)."""
    if value is None:
        value = utc_now()
    return f"{value.strftime('%B')} {value.day}, {value.year}"
