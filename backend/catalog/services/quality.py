"""
quality.py

Quality gate derived from the consensus rating, plus the separate
mean-based "hit" check used only for badge selection.

The two computations are intentionally independent: the badge hit check is a
coarse marketing signal over the mean, verdicts use the median consensus.
"""
from dataclasses import dataclass
from typing import Optional

from catalog.services.rating_aggregator import ConsensusRating, ExternalRatings

# Confidence gates (vote counts)
MIN_VOTES_FOR_CONFIDENCE = 200
MIN_VOTES_FOR_CRITICS_LOVED = 1000
MIN_VOTES_FOR_SPREAD_MATTERS = 1000
MIN_VOTES_FOR_HIT = 1000

# Spread above which optimistic verdicts are withheld
MAX_SPREAD_FOR_OPTIMISTIC = 1.0

# Rating thresholds (0-10 scale)
POOR_THRESHOLD = 5.5
BELOW_AVERAGE_THRESHOLD = 6.0
MIXED_THRESHOLD = 6.5
DECENT_THRESHOLD = 6.5
STRONG_THRESHOLD = 7.0
CRITICS_LOVED_THRESHOLD = 7.5
HIT_THRESHOLD = 7.5

LONG_RUNNING_MIN_SEASONS = 5


@dataclass(frozen=True)
class QualityGate:
    has_any_rating: bool
    has_confident_rating: bool
    has_high_spread: bool
    is_poor_quality: bool
    is_below_average: bool
    is_mixed_quality: bool
    is_decent_quality: bool
    is_good_quality: bool
    is_critics_loved: bool


def has_high_spread(consensus: ConsensusRating) -> bool:
    """Ratings diverge. Needs at least two sources to mean anything."""
    if consensus.source_count < 2:
        return False
    if consensus.spread > MAX_SPREAD_FOR_OPTIMISTIC:
        return True
    return (
        consensus.spread == MAX_SPREAD_FOR_OPTIMISTIC
        and consensus.total_votes >= MIN_VOTES_FOR_SPREAD_MATTERS
    )


def compute_quality_gate(consensus: ConsensusRating) -> QualityGate:
    value = consensus.value
    confident = consensus.total_votes >= MIN_VOTES_FOR_CONFIDENCE
    high_spread = has_high_spread(consensus)
    rated = value is not None

    return QualityGate(
        has_any_rating=rated,
        has_confident_rating=confident,
        has_high_spread=high_spread,
        is_poor_quality=confident and rated and value < POOR_THRESHOLD,
        is_below_average=confident and rated and value < BELOW_AVERAGE_THRESHOLD,
        is_mixed_quality=confident and rated and value < MIXED_THRESHOLD,
        is_decent_quality=confident and rated and DECENT_THRESHOLD <= value < STRONG_THRESHOLD,
        is_good_quality=confident and rated and value >= STRONG_THRESHOLD,
        is_critics_loved=(
            rated
            and value >= CRITICS_LOVED_THRESHOLD
            and consensus.total_votes >= MIN_VOTES_FOR_CRITICS_LOVED
            and not high_spread
        ),
    )


def is_long_running(
    consensus: ConsensusRating,
    total_seasons: Optional[int],
    is_cancelled: bool,
) -> bool:
    return (
        (total_seasons or 0) >= LONG_RUNNING_MIN_SEASONS
        and not is_cancelled
        and (consensus.value or 0.0) >= DECENT_THRESHOLD
    )


@dataclass(frozen=True)
class PureQuality:
    avg_rating: float
    total_votes: int


def calculate_pure_quality(ratings: Optional[ExternalRatings]) -> PureQuality:
    """Mean rating and summed votes across present sources. Never folds in popularity."""
    if ratings is None:
        return PureQuality(avg_rating=0.0, total_votes=0)
    present = ratings.present()
    if not present:
        return PureQuality(avg_rating=0.0, total_votes=0)
    total = sum(rating for _, rating, _ in present)
    return PureQuality(
        avg_rating=total / len(present),
        total_votes=sum(votes for _, _, votes in present),
    )


def is_hit_quality(ratings: Optional[ExternalRatings]) -> bool:
    quality = calculate_pure_quality(ratings)
    return quality.avg_rating >= HIT_THRESHOLD and quality.total_votes >= MIN_VOTES_FOR_HIT
