"""
release_status.py

Release timing signals for movies and shows, derived from already-loaded
dates and an explicit `now`.
"""
from datetime import datetime
from enum import Enum
from typing import Iterable, Optional

from catalog.utils.timezone import DateLike, is_within_past_days, to_utc_datetime

NEW_RELEASE_WINDOW_DAYS = 14
NEW_ON_STREAMING_DAYS = 14
IN_THEATERS_DAYS = 45
NEW_SEASON_DAYS = 14
NEW_EPISODE_DAYS = 7


class ReleaseStatus(str, Enum):
    UPCOMING = "upcoming"
    IN_THEATERS = "in_theaters"
    NEW_ON_STREAMING = "new_on_streaming"
    RELEASED = "released"


def compute_release_status(
    release_date: DateLike,
    theatrical_release_date: DateLike,
    digital_release_date: DateLike,
    now: datetime,
    in_theaters_days: int = IN_THEATERS_DAYS,
    new_on_streaming_days: int = NEW_ON_STREAMING_DAYS,
) -> Optional[ReleaseStatus]:
    """
    Digital availability wins over theatrical; a movie with no known date has
    no status at all.
    """
    digital = to_utc_datetime(digital_release_date)
    theatrical = to_utc_datetime(theatrical_release_date) or to_utc_datetime(release_date)
    now = to_utc_datetime(now)

    if digital is not None and digital <= now:
        if is_within_past_days(digital, now, new_on_streaming_days):
            return ReleaseStatus.NEW_ON_STREAMING
        return ReleaseStatus.RELEASED

    if theatrical is not None and theatrical <= now:
        if is_within_past_days(theatrical, now, in_theaters_days):
            return ReleaseStatus.IN_THEATERS
        return ReleaseStatus.RELEASED

    if digital is not None or theatrical is not None:
        return ReleaseStatus.UPCOMING

    return None


def latest_date(dates: Iterable[DateLike]) -> Optional[datetime]:
    latest = None
    for value in dates:
        dt = to_utc_datetime(value)
        if dt is not None and (latest is None or dt > latest):
            latest = dt
    return latest


def is_new_release(
    dates: Iterable[DateLike],
    now: datetime,
    window_days: int = NEW_RELEASE_WINDOW_DAYS,
) -> bool:
    """Latest known release date falls within the last `window_days` days."""
    latest = latest_date(dates)
    if latest is None:
        return False
    return is_within_past_days(latest, now, window_days)


def has_recent_air_date(
    air_date: DateLike,
    now: datetime,
    window_days: int,
) -> bool:
    return is_within_past_days(air_date, now, window_days)
