"""
card_selectors.py

Pure selectors for catalog card metadata: continue point, badge, primary CTA.

Badge selection is an ordered rule table evaluated top-down; the first rule
whose predicate matches decides the outcome (a badge, or None to stop).
BADGE_PRIORITY numbers are attached for debugging only and never reorder
the table.
"""
import logging
import math
from dataclasses import dataclass, replace
from typing import Any, Callable, Dict, Mapping, Optional, Tuple

from catalog.services.card_constants import (
    BADGE_PRIORITY,
    BadgeKey,
    ListContext,
    PrimaryCta,
    TrendDelta,
    UserMediaState,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ContinuePoint:
    season: int
    episode: int

    def to_dict(self) -> Dict[str, int]:
        return {"season": self.season, "episode": self.episode}


@dataclass(frozen=True)
class CardSignals:
    has_user_entry: bool = False
    user_state: Optional[UserMediaState] = None
    continue_point: Optional[ContinuePoint] = None
    has_new_episode: bool = False
    is_new_release: bool = False
    is_hit: bool = False
    trend_delta: Optional[TrendDelta] = None
    is_trending: bool = False


@dataclass(frozen=True)
class CardBadge:
    key: BadgeKey
    priority: int
    reason: str


@dataclass(frozen=True)
class CardMeta:
    badge_key: Optional[BadgeKey]
    primary_cta: PrimaryCta
    continue_point: Optional[ContinuePoint]
    list_context: ListContext

    def to_dict(self) -> Dict[str, Any]:
        return {
            "badgeKey": self.badge_key.value if self.badge_key else None,
            "primaryCta": self.primary_cta.value,
            "continue": self.continue_point.to_dict() if self.continue_point else None,
            "listContext": self.list_context.value,
        }


def _positive_int(value: Any) -> Optional[int]:
    """Coerce ints and numeric strings; anything else (bools, fractions, junk) is skipped.

    Numbers too large for a float are junk too.
    """
    if isinstance(value, bool) or not isinstance(value, (int, float, str)):
        return None
    try:
        number = float(value)
    except (ValueError, OverflowError):
        return None
    if not math.isfinite(number) or not number.is_integer() or number < 1:
        return None
    return value if isinstance(value, int) else int(number)


def extract_continue_point(seasons: Optional[Mapping[Any, Any]]) -> Optional[ContinuePoint]:
    """
    Resume pointer from a season -> episode map.

    Picks the numerically largest season key. Keys may be ints or numeric
    strings; entries that do not coerce are ignored rather than raising.
    """
    if not seasons or not isinstance(seasons, Mapping):
        return None

    best: Optional[ContinuePoint] = None
    for raw_season, raw_episode in seasons.items():
        season = _positive_int(raw_season)
        episode = _positive_int(raw_episode)
        if season is None or episode is None:
            continue
        if best is None or season > best.season:
            best = ContinuePoint(season=season, episode=episode)
    return best


def extract_continue_point_from_progress(progress: Optional[Mapping[str, Any]]) -> Optional[ContinuePoint]:
    """Stored progress payloads look like {"seasons": {"1": 8, "2": 3}}."""
    if not progress or not isinstance(progress, Mapping):
        return None
    return extract_continue_point(progress.get("seasons"))


# Rule: (reason, predicate, outcome). Outcome None means "stop, no badge".
BadgeRule = Tuple[str, Callable[[CardSignals, ListContext], bool], Optional[BadgeKey]]

BADGE_RULES: Tuple[BadgeRule, ...] = (
    (
        "watching+hasNewEpisode",
        lambda s, ctx: s.user_state == UserMediaState.WATCHING and s.has_new_episode,
        BadgeKey.NEW_EPISODE,
    ),
    ("continuePoint", lambda s, ctx: s.continue_point is not None, BadgeKey.CONTINUE),
    # Continue sections only ever show continuation badges.
    ("continueListSuppressed", lambda s, ctx: ctx == ListContext.CONTINUE_LIST, None),
    (
        "planned",
        lambda s, ctx: ctx != ListContext.USER_LIBRARY and s.user_state == UserMediaState.PLANNED,
        BadgeKey.IN_WATCHLIST,
    ),
    ("hitQuality", lambda s, ctx: s.is_hit, BadgeKey.HIT),
    ("trendingList", lambda s, ctx: ctx == ListContext.TRENDING_LIST, BadgeKey.TRENDING),
    (
        "newReleasesList+newReleaseWindow",
        lambda s, ctx: ctx == ListContext.NEW_RELEASES_LIST and s.is_new_release,
        BadgeKey.NEW_RELEASE,
    ),
    ("inTheatersList", lambda s, ctx: ctx == ListContext.IN_THEATERS_LIST, BadgeKey.IN_THEATERS),
    (
        "newOnStreamingList",
        lambda s, ctx: ctx == ListContext.NEW_ON_STREAMING_LIST,
        BadgeKey.NEW_ON_STREAMING,
    ),
    (
        "newReleaseWindow",
        lambda s, ctx: ctx == ListContext.DEFAULT and s.is_new_release,
        BadgeKey.NEW_RELEASE,
    ),
    (
        "trendDelta=up",
        lambda s, ctx: ctx == ListContext.DEFAULT and s.trend_delta == TrendDelta.UP,
        BadgeKey.RISING,
    ),
    ("isTrending", lambda s, ctx: ctx == ListContext.DEFAULT and s.is_trending, BadgeKey.TRENDING),
)


def select_badge(signals: CardSignals, context: ListContext = ListContext.DEFAULT) -> Optional[CardBadge]:
    """Single badge for a card, or None."""
    for reason, predicate, outcome in BADGE_RULES:
        if not predicate(signals, context):
            continue
        if outcome is None:
            return None
        return CardBadge(key=outcome, priority=BADGE_PRIORITY[outcome], reason=reason)
    return None


def select_primary_cta(signals: CardSignals, badge_key: Optional[BadgeKey]) -> PrimaryCta:
    if badge_key in (BadgeKey.NEW_EPISODE, BadgeKey.CONTINUE):
        return PrimaryCta.CONTINUE
    if not signals.has_user_entry:
        return PrimaryCta.SAVE
    return PrimaryCta.OPEN


def build_card_meta(signals: CardSignals, context: ListContext = ListContext.DEFAULT) -> CardMeta:
    badge = select_badge(signals, context)
    badge_key = badge.key if badge else None
    if badge is not None:
        logger.debug(f"[CardSelectors] badge={badge.key.value} priority={badge.priority} reason={badge.reason} ctx={context.value}")

    meta = CardMeta(
        badge_key=badge_key,
        primary_cta=select_primary_cta(signals, badge_key),
        continue_point=signals.continue_point,
        list_context=context,
    )

    # Nothing to resume on a title the user has not started.
    if signals.user_state == UserMediaState.PLANNED:
        meta = replace(meta, continue_point=None)
    return meta
