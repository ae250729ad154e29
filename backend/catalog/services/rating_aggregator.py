"""
rating_aggregator.py

Consensus rating over external providers (IMDb, Trakt, TMDB).

The consensus is the median of whichever sources are present; spread
(max - min) stands in for reviewer disagreement. Absence of every source is
a normal input and yields the empty consensus.
"""
import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional


class RatingSource(str, Enum):
    """External rating providers, in tie-break order."""
    IMDB = "IMDb"
    TRAKT = "Trakt"
    TMDB = "TMDB"


RATING_SOURCE_ORDER = (RatingSource.IMDB, RatingSource.TRAKT, RatingSource.TMDB)

_SOURCE_FIELDS = {
    RatingSource.IMDB: "imdb",
    RatingSource.TRAKT: "trakt",
    RatingSource.TMDB: "tmdb",
}


MAX_RATING = 10.0


def _usable_rating(value: Any) -> Optional[float]:
    try:
        rating = float(value)
    except (TypeError, ValueError, OverflowError):
        return None
    if not math.isfinite(rating) or not 0 < rating <= MAX_RATING:
        return None
    return rating


def _usable_votes(value: Any) -> int:
    try:
        votes = float(value)
    except (TypeError, ValueError, OverflowError):
        return 0
    if not math.isfinite(votes) or votes < 0:
        return 0
    return int(votes)


@dataclass(frozen=True)
class ExternalRating:
    rating: Optional[float] = None
    vote_count: Optional[int] = None


@dataclass(frozen=True)
class ExternalRatings:
    imdb: Optional[ExternalRating] = None
    trakt: Optional[ExternalRating] = None
    tmdb: Optional[ExternalRating] = None

    def get(self, source: RatingSource) -> Optional[ExternalRating]:
        return getattr(self, _SOURCE_FIELDS[source])

    def present(self) -> List[tuple]:
        """(source, rating, votes) for every source with a usable rating, in source order.

        Zero, NaN, infinite and out-of-scale ratings count as an absent source.
        """
        out = []
        for source in RATING_SOURCE_ORDER:
            entry = self.get(source)
            if entry is None:
                continue
            rating = _usable_rating(entry.rating)
            if rating is None:
                continue
            out.append((source, rating, _usable_votes(entry.vote_count)))
        return out


@dataclass(frozen=True)
class ConsensusRating:
    value: Optional[float] = None
    spread: float = 0.0
    total_votes: int = 0
    source_count: int = 0
    best_source: Optional[RatingSource] = None

    @property
    def has_any_rating(self) -> bool:
        return self.value is not None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "value": self.value,
            "spread": self.spread,
            "totalVotes": self.total_votes,
            "sourceCount": self.source_count,
            "bestSource": self.best_source.value if self.best_source else None,
        }


EMPTY_CONSENSUS = ConsensusRating()

# Provider ratings carry one decimal; rounding keeps 7.3 - 6.3 equal to 1.0.
SPREAD_PRECISION = 4


def _median(values: List[float]) -> float:
    ordered = sorted(values)
    mid = len(ordered) // 2
    if len(ordered) % 2:
        return ordered[mid]
    return (ordered[mid - 1] + ordered[mid]) / 2


def aggregate_ratings(ratings: Optional[ExternalRatings]) -> ConsensusRating:
    """Reduce up to three (rating, votes) pairs to a ConsensusRating."""
    if ratings is None:
        return EMPTY_CONSENSUS

    present = ratings.present()
    if not present:
        return EMPTY_CONSENSUS

    values = [rating for _, rating, _ in present]

    # Strict '>' keeps the earlier source on equal votes.
    best_source, _, best_votes = present[0]
    for source, _, votes in present[1:]:
        if votes > best_votes:
            best_source, best_votes = source, votes

    return ConsensusRating(
        value=_median(values),
        spread=round(max(values) - min(values), SPREAD_PRECISION),
        total_votes=sum(votes for _, _, votes in present),
        source_count=len(present),
        best_source=best_source,
    )


def format_rating_context(
    rating: Optional[float],
    source: Optional[RatingSource] = RatingSource.IMDB,
) -> Optional[str]:
    """Display string like "IMDb: 7.5"; None when there is no rating."""
    if rating is None:
        return None
    label = (source or RatingSource.IMDB).value
    return f"{label}: {rating:.1f}"
