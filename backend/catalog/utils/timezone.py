"""
Timezone utilities for the catalog service.
Provides consistent UTC datetime handling for recency windows.
"""
from datetime import date, datetime, timezone
from typing import Optional, Union

DateLike = Union[datetime, date, str, None]


def utc_now() -> datetime:
    """
    Get current UTC datetime with timezone info.
    Replacement for deprecated datetime.utcnow().
    """
    return datetime.now(timezone.utc)


def ensure_utc(dt: Optional[datetime]) -> Optional[datetime]:
    """
    Ensure a datetime is UTC and timezone-aware.
    If timezone-naive, assumes it's already UTC and adds UTC timezone.
    If timezone-aware, converts to UTC.
    """
    if dt is None:
        return None

    if dt.tzinfo is None:
        # Assume naive datetime is already UTC
        return dt.replace(tzinfo=timezone.utc)
    else:
        return dt.astimezone(timezone.utc)


def to_utc_datetime(value: DateLike) -> Optional[datetime]:
    """
    Coerce a datetime, a date or an ISO string (YYYY-MM-DD or full ISO) into
    an aware UTC datetime. Returns None for missing or unparseable values.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return ensure_utc(value)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day, tzinfo=timezone.utc)
    if isinstance(value, str):
        raw = value.strip()
        if not raw:
            return None
        try:
            return ensure_utc(datetime.fromisoformat(raw.replace("Z", "+00:00")))
        except ValueError:
            return None
    return None


def safe_datetime_diff_days(dt1: DateLike, dt2: DateLike) -> Optional[float]:
    """
    Difference dt1 - dt2 in days.
    Handles timezone-naive and timezone-aware datetimes consistently.
    Returns None if either side is missing.
    """
    dt1_utc = to_utc_datetime(dt1)
    dt2_utc = to_utc_datetime(dt2)

    if dt1_utc is None or dt2_utc is None:
        return None

    diff = dt1_utc - dt2_utc
    return diff.total_seconds() / (24 * 3600)  # Convert to days


def is_within_past_days(value: DateLike, now: datetime, days: int) -> bool:
    """True when value lies between `days` days before now and now (inclusive)."""
    diff = safe_datetime_diff_days(now, value)
    if diff is None:
        return False
    return 0 <= diff <= days


def format_iso_utc(dt: Optional[datetime]) -> str:
    """
    Format datetime as ISO string in UTC.
    Returns empty string if datetime is None.
    """
    if dt is None:
        return ""

    utc_dt = ensure_utc(dt)
    if utc_dt is None:
        return ""

    return utc_dt.isoformat()
