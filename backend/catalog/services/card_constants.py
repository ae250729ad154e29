"""
card_constants.py

Closed literal sets for catalog cards. Values are bound to client i18n keys,
so they must never be renamed.
"""
from enum import Enum
from typing import Optional


class ListContext(str, Enum):
    """Page or section a card is rendered in."""
    DEFAULT = "DEFAULT"
    TRENDING_LIST = "TRENDING_LIST"
    NEW_RELEASES_LIST = "NEW_RELEASES_LIST"
    IN_THEATERS_LIST = "IN_THEATERS_LIST"
    NEW_ON_STREAMING_LIST = "NEW_ON_STREAMING_LIST"
    USER_LIBRARY = "USER_LIBRARY"
    CONTINUE_LIST = "CONTINUE_LIST"


class BadgeKey(str, Enum):
    NEW_EPISODE = "NEW_EPISODE"
    CONTINUE = "CONTINUE"
    IN_WATCHLIST = "IN_WATCHLIST"
    HIT = "HIT"
    NEW_RELEASE = "NEW_RELEASE"
    TRENDING = "TRENDING"
    RISING = "RISING"
    IN_THEATERS = "IN_THEATERS"
    NEW_ON_STREAMING = "NEW_ON_STREAMING"


# Documentary only (logs/telemetry). Selection order lives in card_selectors.
BADGE_PRIORITY = {
    BadgeKey.NEW_EPISODE: 100,
    BadgeKey.CONTINUE: 90,
    BadgeKey.IN_WATCHLIST: 80,
    BadgeKey.HIT: 70,
    BadgeKey.TRENDING: 60,
    BadgeKey.NEW_RELEASE: 50,
    BadgeKey.IN_THEATERS: 45,
    BadgeKey.NEW_ON_STREAMING: 45,
    BadgeKey.RISING: 40,
}


class PrimaryCta(str, Enum):
    SAVE = "SAVE"
    CONTINUE = "CONTINUE"
    OPEN = "OPEN"


class UserMediaState(str, Enum):
    """Per-user watch state as stored by the user-media collaborator."""
    WATCHING = "watching"
    COMPLETED = "completed"
    PLANNED = "planned"
    DROPPED = "dropped"


class TrendDelta(str, Enum):
    UP = "up"
    DOWN = "down"
    STABLE = "stable"


def parse_user_state(value) -> Optional[UserMediaState]:
    """Map a stored state string to UserMediaState; unknown values become None."""
    if value is None:
        return None
    if isinstance(value, UserMediaState):
        return value
    try:
        return UserMediaState(str(value).strip().lower())
    except ValueError:
        return None


def parse_trend_delta(value) -> Optional[TrendDelta]:
    if value is None:
        return None
    if isinstance(value, TrendDelta):
        return value
    try:
        return TrendDelta(str(value).strip().lower())
    except ValueError:
        return None
