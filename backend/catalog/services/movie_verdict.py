"""
movie_verdict.py

Verdict for a movie: one priority cascade over release timing, the median
consensus rating and the badge already chosen for the card.

Cascade (first match wins, do not reorder without product review):
 1. upcoming release
 2. quality warnings (poor, below average)
 3. diverging ratings (high spread, 2+ sources)
 4. trending / hit badge
 5. critics loved
 6. strong, decent ratings
 7. early reviews (a low early score escalates to a warning)
 8. rising badge, then unrated titles in theaters / new on streaming
 9. mixed reviews, then the empty fallback
"""
from dataclasses import dataclass
from typing import Optional

from catalog.services.card_constants import BadgeKey
from catalog.services.quality import BELOW_AVERAGE_THRESHOLD, compute_quality_gate
from catalog.services.rating_aggregator import (
    ConsensusRating,
    ExternalRatings,
    aggregate_ratings,
    format_rating_context,
)
from catalog.services.release_status import ReleaseStatus
from catalog.services.verdict_types import (
    DEFAULT_VERDICT,
    MovieVerdictMessageKey as Key,
    Verdict,
    VerdictHintKey as Hint,
    VerdictType,
)

# Popularity above which an upcoming title is called an "upcoming hit"
RISING_POPULARITY = 50.0


@dataclass(frozen=True)
class MovieVerdictInput:
    release_status: Optional[ReleaseStatus] = None
    external_ratings: Optional[ExternalRatings] = None
    badge_key: Optional[BadgeKey] = None
    popularity: Optional[float] = None


class MovieVerdictService:
    """Computes the verdict shown on movie cards and detail pages."""

    def compute(self, data: MovieVerdictInput, consensus: Optional[ConsensusRating] = None) -> Verdict:
        if consensus is None:
            consensus = aggregate_ratings(data.external_ratings)
        gate = compute_quality_gate(consensus)
        context = format_rating_context(consensus.value, consensus.best_source)

        if data.release_status == ReleaseStatus.UPCOMING:
            hyped = (data.popularity or 0.0) > RISING_POPULARITY
            return Verdict(
                VerdictType.RELEASE,
                Key.UPCOMING_HIT if hyped else None,
                None,
                Hint.NOTIFY_RELEASE,
            )

        if gate.is_poor_quality:
            return Verdict(VerdictType.WARNING, Key.POOR_RATINGS, context, Hint.DECIDE_TO_WATCH)
        if gate.is_below_average:
            return Verdict(VerdictType.WARNING, Key.BELOW_AVERAGE, context, Hint.DECIDE_TO_WATCH)

        if gate.has_high_spread and consensus.source_count >= 2:
            key = Key.MIXED_REVIEWS if gate.has_confident_rating else Key.NO_CONSENSUS_YET
            return Verdict(VerdictType.GENERAL, key, context, Hint.DECIDE_TO_WATCH)

        if data.badge_key == BadgeKey.TRENDING:
            return Verdict(VerdictType.POPULARITY, Key.TRENDING_NOW, None, Hint.FOR_LATER)
        if data.badge_key == BadgeKey.HIT:
            return Verdict(VerdictType.QUALITY, Key.CRITICS_LOVED, context, Hint.FOR_LATER)

        if gate.is_critics_loved:
            return Verdict(VerdictType.QUALITY, Key.CRITICS_LOVED, context, Hint.FOR_LATER)
        if gate.is_good_quality:
            return Verdict(VerdictType.QUALITY, Key.STRONG_RATINGS, context, Hint.FOR_LATER)
        if gate.is_decent_quality:
            return Verdict(VerdictType.QUALITY, Key.DECENT_RATINGS, context, Hint.FOR_LATER)

        if gate.has_any_rating and not gate.has_confident_rating:
            # Few votes, but a clearly low score is still worth flagging.
            if consensus.value < BELOW_AVERAGE_THRESHOLD:
                return Verdict(VerdictType.WARNING, Key.BELOW_AVERAGE, context, Hint.DECIDE_TO_WATCH)
            return Verdict(VerdictType.GENERAL, Key.EARLY_REVIEWS, context, Hint.DECIDE_TO_WATCH)

        # Below here: no ratings at all, or confident ratings in the 6.0-6.5 band.
        if data.badge_key == BadgeKey.RISING:
            return Verdict(VerdictType.POPULARITY, Key.RISING_HYPE, None, Hint.DECIDE_TO_WATCH)

        if not gate.has_any_rating:
            if data.release_status == ReleaseStatus.IN_THEATERS:
                return Verdict(VerdictType.RELEASE, Key.JUST_RELEASED, None, Hint.FOR_LATER)
            if data.release_status == ReleaseStatus.NEW_ON_STREAMING:
                return Verdict(VerdictType.RELEASE, Key.NOW_STREAMING, None, Hint.FOR_LATER)

        if gate.is_mixed_quality:
            return Verdict(VerdictType.GENERAL, Key.MIXED_REVIEWS, context, Hint.DECIDE_TO_WATCH)

        return DEFAULT_VERDICT


_service = MovieVerdictService()


def compute_movie_verdict(data: MovieVerdictInput) -> Verdict:
    """Module-level shortcut over MovieVerdictService.compute()."""
    return _service.compute(data)
