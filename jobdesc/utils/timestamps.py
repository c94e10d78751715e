"""UTC timestamp helpers used for storage and reports."""

from datetime import datetime, timezone
from typing import Optional

STORAGE_FORMAT = "%Y-%m-%dT%H:%M:%S.%fZ"


def utc_now() -> datetime:
    """Current UTC time as a timezone-aware datetime."""
    return datetime.now(timezone.utc)


def ensure_utc(dt: Optional[datetime]) -> Optional[datetime]:
    """Make a datetime timezone-aware UTC; naive values are taken as UTC.

    Example:
        >>> ensure_utc(datetime(2026, 3, 1, 12, 0)).tzinfo == timezone.utc
        True
    """
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def parse_iso_datetime(iso_string: Optional[str]) -> Optional[datetime]:
    """Parse an ISO 8601 string (with or without 'Z', or date only) to UTC.

    Returns:
        Timezone-aware datetime in UTC, or None if the string is empty or invalid
    """
    if not iso_string or not iso_string.strip():
        return None

    cleaned = iso_string.strip()
    if cleaned.endswith("Z"):
        cleaned = cleaned[:-1] + "+00:00"
    try:
        return ensure_utc(datetime.fromisoformat(cleaned))
    except ValueError:
        pass
    try:
        return ensure_utc(datetime.strptime(cleaned, "%Y-%m-%d"))
    except ValueError:
        return None


def format_timestamp(dt: Optional[datetime], include_microseconds: bool = False) -> str:
    """Format a datetime as ISO 8601 UTC with a 'Z' suffix ("" for None).

    Example:
        >>> format_timestamp(datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc))
        '2026-03-01T12:00:00Z'
    """
    dt_utc = ensure_utc(dt)
    if dt_utc is None:
        return ""
    if include_microseconds:
        return dt_utc.strftime(STORAGE_FORMAT)
    return dt_utc.strftime("%Y-%m-%dT%H:%M:%SZ")
