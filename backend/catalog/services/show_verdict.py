"""
show_verdict.py

Verdict for a TV show plus an optional status hint.

- verdict answers "is it worth it?" (quality or warning)
- status hint explains "why now?" (new season, finished series) and is never
  shown next to a warning

Warning branches build their result through `_warning()`, which has no hint
parameter at all; only `_verdict()` can attach a hint.
"""
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional

from catalog.services.card_constants import BadgeKey
from catalog.services.quality import (
    BELOW_AVERAGE_THRESHOLD,
    QualityGate,
    compute_quality_gate,
    is_long_running,
)
from catalog.services.rating_aggregator import (
    ConsensusRating,
    ExternalRatings,
    aggregate_ratings,
    format_rating_context,
)
from catalog.services.release_status import NEW_SEASON_DAYS, has_recent_air_date
from catalog.services.verdict_types import (
    DEFAULT_VERDICT,
    ShowStatusHintKey,
    ShowVerdictMessageKey as Key,
    ShowVerdictResult,
    StatusHint,
    Verdict,
    VerdictHintKey as Hint,
    VerdictType,
)
from catalog.utils.timezone import DateLike


class ShowStatus(str, Enum):
    RETURNING = "returning"
    ENDED = "ended"
    CANCELLED = "cancelled"
    IN_PRODUCTION = "in_production"
    PLANNED = "planned"


_STATUS_ALIASES = {
    "returning series": ShowStatus.RETURNING,
    "returning_series": ShowStatus.RETURNING,
    "continuing": ShowStatus.RETURNING,
    "canceled": ShowStatus.CANCELLED,
    "in production": ShowStatus.IN_PRODUCTION,
}


def parse_show_status(value) -> Optional[ShowStatus]:
    """Accepts our own values and the TMDB/Trakt spellings ("Returning Series", "Canceled")."""
    if value is None:
        return None
    if isinstance(value, ShowStatus):
        return value
    raw = str(value).strip().lower()
    if raw in _STATUS_ALIASES:
        return _STATUS_ALIASES[raw]
    try:
        return ShowStatus(raw)
    except ValueError:
        return None


@dataclass(frozen=True)
class ShowVerdictInput:
    status: Optional[ShowStatus] = None
    external_ratings: Optional[ExternalRatings] = None
    badge_key: Optional[BadgeKey] = None
    popularity: Optional[float] = None
    total_seasons: Optional[int] = None
    last_air_date: DateLike = None


class ShowVerdictService:
    """Computes verdict + status hint for shows."""

    def __init__(self, new_season_days: int = NEW_SEASON_DAYS):
        self.new_season_days = new_season_days

    def compute(
        self,
        data: ShowVerdictInput,
        now: datetime,
        consensus: Optional[ConsensusRating] = None,
    ) -> ShowVerdictResult:
        if consensus is None:
            consensus = aggregate_ratings(data.external_ratings)
        gate = compute_quality_gate(consensus)
        context = format_rating_context(consensus.value, consensus.best_source)
        is_cancelled = data.status == ShowStatus.CANCELLED

        def _warning(key: Key, ctx: Optional[str]) -> ShowVerdictResult:
            return ShowVerdictResult(
                verdict=Verdict(VerdictType.WARNING, key, ctx, Hint.DECIDE_TO_WATCH),
                status_hint=None,
            )

        def _verdict(kind: VerdictType, key: Key, ctx: Optional[str], hint: Hint) -> ShowVerdictResult:
            return ShowVerdictResult(
                verdict=Verdict(kind, key, ctx, hint),
                status_hint=self._status_hint(data, gate, now),
            )

        if is_cancelled:
            return _warning(Key.CANCELLED, None)

        if gate.is_poor_quality:
            return _warning(Key.POOR_RATINGS, context)
        if gate.is_below_average:
            return _warning(Key.BELOW_AVERAGE, context)

        if gate.has_high_spread and consensus.source_count >= 2:
            if gate.has_confident_rating:
                # Plenty of votes and they still disagree.
                return _verdict(VerdictType.GENERAL, Key.MIXED_REVIEWS, context, Hint.DECIDE_TO_WATCH)
            return _verdict(VerdictType.GENERAL, Key.NO_CONSENSUS_YET, context, Hint.DECIDE_TO_WATCH)

        if data.badge_key == BadgeKey.TRENDING:
            return _verdict(VerdictType.POPULARITY, Key.TRENDING_NOW, None, Hint.FOR_LATER)
        if data.badge_key == BadgeKey.HIT:
            return _verdict(VerdictType.QUALITY, Key.CRITICS_LOVED, context, Hint.FOR_LATER)

        if gate.is_good_quality:
            return _verdict(VerdictType.QUALITY, Key.STRONG_RATINGS, context, Hint.FOR_LATER)
        if gate.is_decent_quality:
            return _verdict(VerdictType.QUALITY, Key.DECENT_RATINGS, context, Hint.FOR_LATER)

        if is_long_running(consensus, data.total_seasons, is_cancelled):
            return _verdict(VerdictType.QUALITY, Key.LONG_RUNNING, str(data.total_seasons), Hint.FOR_LATER)

        if data.badge_key == BadgeKey.RISING:
            return _verdict(VerdictType.POPULARITY, Key.RISING_HYPE, None, Hint.DECIDE_TO_WATCH)

        if gate.has_any_rating and not gate.has_confident_rating:
            if consensus.value < BELOW_AVERAGE_THRESHOLD:
                return _warning(Key.BELOW_AVERAGE, context)
            return _verdict(VerdictType.GENERAL, Key.EARLY_REVIEWS, context, Hint.DECIDE_TO_WATCH)

        if gate.is_mixed_quality:
            return _verdict(VerdictType.GENERAL, Key.MIXED_REVIEWS, context, Hint.DECIDE_TO_WATCH)

        # No verdict to explain, so no hint either.
        return ShowVerdictResult(verdict=DEFAULT_VERDICT, status_hint=None)

    def _status_hint(self, data: ShowVerdictInput, gate: QualityGate, now: datetime) -> Optional[StatusHint]:
        if data.status == ShowStatus.RETURNING and has_recent_air_date(
            data.last_air_date, now, self.new_season_days
        ):
            return StatusHint(ShowStatusHintKey.NEW_SEASON)
        if data.status == ShowStatus.ENDED and gate.is_good_quality:
            return StatusHint(ShowStatusHintKey.SERIES_FINALE)
        return None


_service = ShowVerdictService()


def compute_show_verdict(data: ShowVerdictInput, now: datetime) -> ShowVerdictResult:
    """Module-level shortcut over ShowVerdictService.compute()."""
    return _service.compute(data, now)
