from datetime import datetime, timedelta
from typing import Dict, Iterable, List, Optional, Sequence
import logging

from sqlalchemy import and_, or_
from sqlalchemy.orm import Session, joinedload

from catalog import models
from catalog.core.config import settings
from catalog.services.card_constants import (
    ListContext,
    UserMediaState,
    parse_trend_delta,
    parse_user_state,
)
from catalog.services.card_enrichment import (
    MediaSnapshot,
    MediaType,
    UserMediaEntry,
    UserStateSnapshot,
)
from catalog.services.rating_aggregator import ExternalRating, ExternalRatings
from catalog.utils.timezone import ensure_utc

logger = logging.getLogger(__name__)


def _naive_utc(now: datetime) -> datetime:
    # DateTime columns are stored as naive UTC
    return ensure_utc(now).replace(tzinfo=None)


def to_external_ratings(item: models.MediaItem) -> ExternalRatings:
    def _pair(rating, votes) -> Optional[ExternalRating]:
        if rating is None:
            return None
        return ExternalRating(rating=rating, vote_count=votes)

    return ExternalRatings(
        imdb=_pair(item.imdb_rating, item.imdb_votes),
        trakt=_pair(item.trakt_rating, item.trakt_votes),
        tmdb=_pair(item.tmdb_rating, item.tmdb_votes),
    )


def to_media_snapshot(item: models.MediaItem) -> MediaSnapshot:
    return MediaSnapshot(
        id=str(item.id),
        media_type=MediaType(item.media_type),
        title=item.title,
        slug=item.slug,
        poster=item.poster_path,
        external_ratings=to_external_ratings(item),
        popularity=item.popularity,
        trend_delta=parse_trend_delta(item.trend_delta),
        is_trending=bool(item.is_trending),
        release_date=item.release_date,
        theatrical_release_date=item.theatrical_release_date,
        digital_release_date=item.digital_release_date,
        status=item.status,
        total_seasons=item.total_seasons,
        first_air_date=item.first_air_date,
        last_air_date=item.last_air_date,
    )


def to_user_state_snapshot(row: models.UserMediaState) -> UserStateSnapshot:
    state = parse_user_state(row.state)
    if state is None:
        logger.warning(f"[UserMedia] Unknown state '{row.state}' on row {row.id}")
    return UserStateSnapshot(
        media_id=str(row.media_item_id),
        state=state,
        progress=row.progress if isinstance(row.progress, dict) else None,
        rating=row.rating,
        notes=row.notes,
    )


def get_media_item(db: Session, media_id: int, media_type: Optional[MediaType] = None) -> Optional[models.MediaItem]:
    query = db.query(models.MediaItem).filter(models.MediaItem.id == media_id)
    if media_type is not None:
        query = query.filter(models.MediaItem.media_type == media_type.value)
    return query.first()


def list_media_items(
    db: Session,
    kind: MediaType,
    context: ListContext,
    limit: int,
    offset: int,
    now: datetime,
) -> List[models.MediaItem]:
    """Catalog sections. Each list context maps to one date/popularity filter."""
    Item = models.MediaItem
    now_db = _naive_utc(now)
    query = db.query(Item).filter(Item.media_type == kind.value)

    if context == ListContext.TRENDING_LIST:
        query = query.filter(Item.is_trending.is_(True)).order_by(Item.popularity.desc().nullslast())
    elif context == ListContext.NEW_RELEASES_LIST:
        since = now_db - timedelta(days=settings.new_release_window_days)
        query = query.filter(Item.release_date.between(since, now_db)).order_by(Item.release_date.desc())
    elif context == ListContext.IN_THEATERS_LIST:
        since = now_db - timedelta(days=settings.in_theaters_days)
        theatrical = Item.theatrical_release_date
        query = query.filter(
            or_(
                theatrical.between(since, now_db),
                and_(theatrical.is_(None), Item.release_date.between(since, now_db)),
            ),
            or_(Item.digital_release_date.is_(None), Item.digital_release_date > now_db),
        ).order_by(Item.popularity.desc().nullslast())
    elif context == ListContext.NEW_ON_STREAMING_LIST:
        since = now_db - timedelta(days=settings.new_on_streaming_days)
        query = query.filter(Item.digital_release_date.between(since, now_db)).order_by(
            Item.digital_release_date.desc()
        )
    else:
        query = query.order_by(Item.popularity.desc().nullslast())

    items = query.offset(offset).limit(limit).all()
    logger.info(f"[Catalog] {kind.value} {context.value}: {len(items)} items (offset={offset})")
    return items


def get_user_state(db: Session, user_id: int, media_id: int) -> Optional[models.UserMediaState]:
    return (
        db.query(models.UserMediaState)
        .filter(
            models.UserMediaState.user_id == user_id,
            models.UserMediaState.media_item_id == media_id,
        )
        .first()
    )


def get_user_states(db: Session, user_id: int, media_ids: Iterable[int]) -> Dict[str, UserStateSnapshot]:
    """One query for a whole page of items, keyed by media id (as str)."""
    ids = [int(mid) for mid in media_ids]
    if not ids:
        return {}
    rows = (
        db.query(models.UserMediaState)
        .filter(
            models.UserMediaState.user_id == user_id,
            models.UserMediaState.media_item_id.in_(ids),
        )
        .all()
    )
    return {str(row.media_item_id): to_user_state_snapshot(row) for row in rows}


def _library_query(
    db: Session,
    user_id: int,
    states: Optional[Sequence[UserMediaState]] = None,
    with_progress: bool = False,
):
    Row = models.UserMediaState
    query = db.query(Row).filter(Row.user_id == user_id)
    if states:
        query = query.filter(Row.state.in_([s.value for s in states]))
    if with_progress:
        query = query.filter(Row.progress.isnot(None))
    return query


def list_user_library(
    db: Session,
    user_id: int,
    states: Optional[Sequence[UserMediaState]] = None,
    with_progress: bool = False,
    limit: int = 20,
    offset: int = 0,
) -> List[UserMediaEntry]:
    """Most recently updated first. `with_progress` narrows to the continue section."""
    rows = (
        _library_query(db, user_id, states, with_progress)
        .options(joinedload(models.UserMediaState.media_item))
        .order_by(models.UserMediaState.updated_at.desc(), models.UserMediaState.id.desc())
        .offset(offset)
        .limit(limit)
        .all()
    )
    return [
        UserMediaEntry(user_state=to_user_state_snapshot(row), item=to_media_snapshot(row.media_item))
        for row in rows
    ]


def count_user_library(
    db: Session,
    user_id: int,
    states: Optional[Sequence[UserMediaState]] = None,
    with_progress: bool = False,
) -> int:
    return _library_query(db, user_id, states, with_progress).count()
