"""
verdict_types.py

Verdict payloads returned to clients. Every string here is an i18n key on
the client side.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional


class VerdictType(str, Enum):
    WARNING = "warning"
    RELEASE = "release"
    QUALITY = "quality"
    POPULARITY = "popularity"
    GENERAL = "general"


class VerdictHintKey(str, Enum):
    NEW_EPISODES = "newEpisodes"
    AFTER_ALL_EPISODES = "afterAllEpisodes"
    WHEN_ON_STREAMING = "whenOnStreaming"
    NOTIFY_NEW_EPISODE = "notifyNewEpisode"
    GENERAL = "general"
    FOR_LATER = "forLater"
    NOTIFY_RELEASE = "notifyRelease"
    DECIDE_TO_WATCH = "decideToWatch"


class MovieVerdictMessageKey(str, Enum):
    UPCOMING_HIT = "upcomingHit"
    JUST_RELEASED = "justReleased"
    NOW_STREAMING = "nowStreaming"
    CRITICS_LOVED = "criticsLoved"
    TRENDING_NOW = "trendingNow"
    STRONG_RATINGS = "strongRatings"
    DECENT_RATINGS = "decentRatings"
    RISING_HYPE = "risingHype"
    MIXED_REVIEWS = "mixedReviews"
    NO_CONSENSUS_YET = "noConsensusYet"
    BELOW_AVERAGE = "belowAverage"
    POOR_RATINGS = "poorRatings"
    EARLY_REVIEWS = "earlyReviews"


class ShowVerdictMessageKey(str, Enum):
    CANCELLED = "cancelled"
    POOR_RATINGS = "poorRatings"
    BELOW_AVERAGE = "belowAverage"
    CRITICS_LOVED = "criticsLoved"
    STRONG_RATINGS = "strongRatings"
    DECENT_RATINGS = "decentRatings"
    LONG_RUNNING = "longRunning"
    TRENDING_NOW = "trendingNow"
    RISING_HYPE = "risingHype"
    EARLY_REVIEWS = "earlyReviews"
    MIXED_REVIEWS = "mixedReviews"
    NO_CONSENSUS_YET = "noConsensusYet"


class ShowStatusHintKey(str, Enum):
    NEW_SEASON = "newSeason"
    SERIES_FINALE = "seriesFinale"


@dataclass(frozen=True)
class Verdict:
    type: VerdictType
    message_key: Optional[Enum]
    context: Optional[str]
    hint_key: VerdictHintKey

    @property
    def is_warning(self) -> bool:
        return self.type == VerdictType.WARNING

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type.value,
            "messageKey": self.message_key.value if self.message_key else None,
            "context": self.context,
            "hintKey": self.hint_key.value,
        }


@dataclass(frozen=True)
class StatusHint:
    message_key: ShowStatusHintKey

    def to_dict(self) -> Dict[str, Any]:
        return {"messageKey": self.message_key.value}


@dataclass(frozen=True)
class ShowVerdictResult:
    verdict: Verdict
    status_hint: Optional[StatusHint]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "verdict": self.verdict.to_dict(),
            "statusHint": self.status_hint.to_dict() if self.status_hint else None,
        }


DEFAULT_VERDICT = Verdict(
    type=VerdictType.GENERAL,
    message_key=None,
    context=None,
    hint_key=VerdictHintKey.DECIDE_TO_WATCH,
)
