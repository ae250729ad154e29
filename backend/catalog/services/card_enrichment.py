"""
card_enrichment.py

Attaches card metadata (badge, primary CTA, continue point) and verdicts to
catalog items. Inputs are plain snapshots already loaded by the caller; user
state for a whole list arrives as one pre-fetched mapping so no lookups
happen per item.
"""
import logging
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Iterable, List, Mapping, Optional

from catalog.services.card_constants import (
    ListContext,
    TrendDelta,
    UserMediaState,
)
from catalog.services.card_selectors import (
    CardMeta,
    CardSignals,
    build_card_meta,
    extract_continue_point_from_progress,
)
from catalog.services.movie_verdict import MovieVerdictInput, MovieVerdictService
from catalog.services.quality import is_hit_quality
from catalog.services.rating_aggregator import (
    ConsensusRating,
    ExternalRatings,
    aggregate_ratings,
)
from catalog.services.release_status import (
    IN_THEATERS_DAYS,
    NEW_EPISODE_DAYS,
    NEW_ON_STREAMING_DAYS,
    NEW_RELEASE_WINDOW_DAYS,
    NEW_SEASON_DAYS,
    ReleaseStatus,
    compute_release_status,
    has_recent_air_date,
    is_new_release,
)
from catalog.services.show_verdict import (
    ShowVerdictInput,
    ShowVerdictService,
    parse_show_status,
)
from catalog.services.verdict_types import ShowVerdictResult, Verdict
from catalog.utils.timezone import DateLike, format_iso_utc, to_utc_datetime

logger = logging.getLogger(__name__)


class MediaType(str, Enum):
    MOVIE = "movie"
    SHOW = "show"


@dataclass(frozen=True)
class MediaSnapshot:
    """Everything the engine reads about one title."""
    id: str
    media_type: MediaType
    title: str = ""
    slug: Optional[str] = None
    poster: Optional[str] = None
    external_ratings: Optional[ExternalRatings] = None
    popularity: Optional[float] = None
    trend_delta: Optional[TrendDelta] = None
    is_trending: bool = False
    release_date: DateLike = None
    theatrical_release_date: DateLike = None
    digital_release_date: DateLike = None
    status: Optional[str] = None
    total_seasons: Optional[int] = None
    first_air_date: DateLike = None
    last_air_date: DateLike = None

    def summary(self) -> Dict[str, Any]:
        release = to_utc_datetime(self.release_date)
        return {
            "id": self.id,
            "type": self.media_type.value,
            "title": self.title,
            "slug": self.slug,
            "poster": self.poster,
            "releaseDate": format_iso_utc(release) or None,
        }


@dataclass(frozen=True)
class UserStateSnapshot:
    media_id: str
    state: Optional[UserMediaState] = None
    progress: Optional[Mapping[str, Any]] = None
    rating: Optional[float] = None
    notes: Optional[str] = None


@dataclass(frozen=True)
class UserMediaEntry:
    """One row of a user's library: their state plus the title it refers to."""
    user_state: UserStateSnapshot
    item: MediaSnapshot


@dataclass(frozen=True)
class EnrichedItem:
    item: MediaSnapshot
    card: CardMeta
    user_state: Optional[UserStateSnapshot] = None


@dataclass(frozen=True)
class MovieDetail:
    item: MediaSnapshot
    card: CardMeta
    release_status: Optional[ReleaseStatus]
    consensus: ConsensusRating
    verdict: Verdict
    user_state: Optional[UserStateSnapshot] = None


@dataclass(frozen=True)
class ShowDetail:
    item: MediaSnapshot
    card: CardMeta
    consensus: ConsensusRating
    verdict: ShowVerdictResult
    user_state: Optional[UserStateSnapshot] = None


class CardEnrichmentService:
    """
    Builds card metadata for lists and detail pages.

    Recency windows are configurable; `now` is always passed in so a whole
    list is evaluated against the same instant.
    """

    def __init__(
        self,
        new_release_window_days: int = NEW_RELEASE_WINDOW_DAYS,
        new_episode_days: int = NEW_EPISODE_DAYS,
        new_season_days: int = NEW_SEASON_DAYS,
        in_theaters_days: int = IN_THEATERS_DAYS,
        new_on_streaming_days: int = NEW_ON_STREAMING_DAYS,
    ):
        self.new_release_window_days = new_release_window_days
        self.new_episode_days = new_episode_days
        self.in_theaters_days = in_theaters_days
        self.new_on_streaming_days = new_on_streaming_days
        self.movie_verdicts = MovieVerdictService()
        self.show_verdicts = ShowVerdictService(new_season_days=new_season_days)

    def build_signals(
        self,
        item: MediaSnapshot,
        user_state: Optional[UserStateSnapshot],
        now: datetime,
    ) -> CardSignals:
        has_new_episode = item.media_type == MediaType.SHOW and has_recent_air_date(
            item.last_air_date, now, self.new_episode_days
        )
        release_dates = [item.theatrical_release_date, item.digital_release_date, item.release_date]
        if item.media_type == MediaType.SHOW:
            release_dates.append(item.first_air_date)

        return CardSignals(
            has_user_entry=user_state is not None,
            user_state=user_state.state if user_state else None,
            continue_point=extract_continue_point_from_progress(user_state.progress if user_state else None),
            has_new_episode=has_new_episode,
            is_new_release=is_new_release(release_dates, now, self.new_release_window_days),
            is_hit=is_hit_quality(item.external_ratings),
            trend_delta=item.trend_delta,
            is_trending=bool(item.is_trending),
        )

    def build_card(
        self,
        item: MediaSnapshot,
        user_state: Optional[UserStateSnapshot],
        context: ListContext,
        now: datetime,
    ) -> CardMeta:
        return build_card_meta(self.build_signals(item, user_state, now), context)

    def enrich_catalog_items(
        self,
        items: Iterable[MediaSnapshot],
        context: ListContext,
        user_states: Optional[Mapping[str, UserStateSnapshot]],
        now: datetime,
    ) -> List[EnrichedItem]:
        """Catalog lists. `user_states` is the batched lookup keyed by media id."""
        user_states = user_states or {}
        out: List[EnrichedItem] = []
        for item in items:
            state = user_states.get(item.id)
            out.append(EnrichedItem(item=item, card=self.build_card(item, state, context, now), user_state=state))
        logger.debug(f"[CardEnrichment] catalog ctx={context.value} items={len(out)} with_state={len(user_states)}")
        return out

    def enrich_user_media(
        self,
        entries: Iterable[UserMediaEntry],
        context: ListContext,
        now: datetime,
    ) -> List[EnrichedItem]:
        """Library and continue sections; every entry has a user entry by construction."""
        out = [
            EnrichedItem(
                item=entry.item,
                card=self.build_card(entry.item, entry.user_state, context, now),
                user_state=entry.user_state,
            )
            for entry in entries
        ]
        logger.debug(f"[CardEnrichment] user media ctx={context.value} items={len(out)}")
        return out

    def enrich_movie_detail(
        self,
        item: MediaSnapshot,
        user_state: Optional[UserStateSnapshot],
        now: datetime,
    ) -> MovieDetail:
        card = self.build_card(item, user_state, ListContext.DEFAULT, now)
        consensus = aggregate_ratings(item.external_ratings)
        release_status = compute_release_status(
            item.release_date,
            item.theatrical_release_date,
            item.digital_release_date,
            now,
            in_theaters_days=self.in_theaters_days,
            new_on_streaming_days=self.new_on_streaming_days,
        )
        verdict = self.movie_verdicts.compute(
            MovieVerdictInput(
                release_status=release_status,
                external_ratings=item.external_ratings,
                badge_key=card.badge_key,
                popularity=item.popularity,
            ),
            consensus=consensus,
        )
        logger.debug(f"[CardEnrichment] movie {item.id} status={release_status} verdict={verdict.message_key}")
        return MovieDetail(
            item=item,
            card=card,
            release_status=release_status,
            consensus=consensus,
            verdict=verdict,
            user_state=user_state,
        )

    def enrich_show_detail(
        self,
        item: MediaSnapshot,
        user_state: Optional[UserStateSnapshot],
        now: datetime,
    ) -> ShowDetail:
        card = self.build_card(item, user_state, ListContext.DEFAULT, now)
        consensus = aggregate_ratings(item.external_ratings)
        result = self.show_verdicts.compute(
            ShowVerdictInput(
                status=parse_show_status(item.status),
                external_ratings=item.external_ratings,
                badge_key=card.badge_key,
                popularity=item.popularity,
                total_seasons=item.total_seasons,
                last_air_date=item.last_air_date,
            ),
            now,
            consensus=consensus,
        )
        return ShowDetail(item=item, card=card, consensus=consensus, verdict=result, user_state=user_state)
