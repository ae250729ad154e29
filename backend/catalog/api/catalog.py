"""
catalog.py - Catalog list and detail endpoints with card metadata
"""
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from datetime import datetime
from typing import Optional
import logging

from catalog import crud
from catalog.api.deps import get_card_service, get_now, resolve_page
from catalog.core.database import get_db
from catalog.core.metrics import increment, record_badges
from catalog.schemas import (
    CatalogListOut,
    MovieDetailOut,
    ShowDetailOut,
    catalog_item_out,
    movie_detail_out,
    show_detail_out,
)
from catalog.services.card_constants import ListContext
from catalog.services.card_enrichment import CardEnrichmentService, MediaType

logger = logging.getLogger(__name__)
router = APIRouter()

# URL section -> list context, per media type
SECTION_CONTEXTS = {
    MediaType.MOVIE: {
        "trending": ListContext.TRENDING_LIST,
        "in-theaters": ListContext.IN_THEATERS_LIST,
        "new-releases": ListContext.NEW_RELEASES_LIST,
        "new-on-streaming": ListContext.NEW_ON_STREAMING_LIST,
    },
    MediaType.SHOW: {
        "trending": ListContext.TRENDING_LIST,
    },
}


async def _list_section(
    kind: MediaType,
    section: str,
    user_id: Optional[int],
    limit: Optional[int],
    offset: int,
    db: Session,
    cards: CardEnrichmentService,
    now: datetime,
) -> CatalogListOut:
    context = SECTION_CONTEXTS[kind].get(section)
    if context is None:
        raise HTTPException(status_code=400, detail=f"Unknown {kind.value} section: {section}")
    limit, offset = resolve_page(limit, offset)

    rows = crud.list_media_items(db, kind, context, limit, offset, now)
    items = [crud.to_media_snapshot(row) for row in rows]
    # Single batched lookup for the whole page
    user_states = crud.get_user_states(db, user_id, [row.id for row in rows]) if user_id is not None else {}

    enriched = cards.enrich_catalog_items(items, context, user_states, now)
    await record_badges([e.card.badge_key.value if e.card.badge_key else None for e in enriched], context.value)
    return CatalogListOut(
        context=context.value,
        limit=limit,
        offset=offset,
        items=[catalog_item_out(e) for e in enriched],
    )


@router.get("/movies/{media_id:int}", response_model=MovieDetailOut)
async def get_movie(
    media_id: int,
    user_id: Optional[int] = None,
    db: Session = Depends(get_db),
    cards: CardEnrichmentService = Depends(get_card_service),
    now: datetime = Depends(get_now),
):
    row = crud.get_media_item(db, media_id, MediaType.MOVIE)
    if not row:
        raise HTTPException(status_code=404, detail=f"Movie not found: {media_id}")
    state_row = crud.get_user_state(db, user_id, media_id) if user_id is not None else None
    user_state = crud.to_user_state_snapshot(state_row) if state_row else None

    detail = cards.enrich_movie_detail(crud.to_media_snapshot(row), user_state, now)
    logger.info(f"[Catalog] movie {media_id}: verdict={detail.verdict.type.value} badge={detail.card.badge_key}")
    await increment(f"verdict.movie.{detail.verdict.type.value}")
    return movie_detail_out(detail)


@router.get("/shows/{media_id:int}", response_model=ShowDetailOut)
async def get_show(
    media_id: int,
    user_id: Optional[int] = None,
    db: Session = Depends(get_db),
    cards: CardEnrichmentService = Depends(get_card_service),
    now: datetime = Depends(get_now),
):
    row = crud.get_media_item(db, media_id, MediaType.SHOW)
    if not row:
        raise HTTPException(status_code=404, detail=f"Show not found: {media_id}")
    state_row = crud.get_user_state(db, user_id, media_id) if user_id is not None else None
    user_state = crud.to_user_state_snapshot(state_row) if state_row else None

    detail = cards.enrich_show_detail(crud.to_media_snapshot(row), user_state, now)
    verdict = detail.verdict.verdict
    logger.info(f"[Catalog] show {media_id}: verdict={verdict.type.value} hint={detail.verdict.status_hint}")
    await increment(f"verdict.show.{verdict.type.value}")
    return show_detail_out(detail)


@router.get("/movies/{section}", response_model=CatalogListOut)
async def list_movies(
    section: str,
    user_id: Optional[int] = None,
    limit: Optional[int] = None,
    offset: int = 0,
    db: Session = Depends(get_db),
    cards: CardEnrichmentService = Depends(get_card_service),
    now: datetime = Depends(get_now),
):
    """Movie sections: trending, in-theaters, new-releases, new-on-streaming."""
    return await _list_section(MediaType.MOVIE, section, user_id, limit, offset, db, cards, now)


@router.get("/shows/{section}", response_model=CatalogListOut)
async def list_shows(
    section: str,
    user_id: Optional[int] = None,
    limit: Optional[int] = None,
    offset: int = 0,
    db: Session = Depends(get_db),
    cards: CardEnrichmentService = Depends(get_card_service),
    now: datetime = Depends(get_now),
):
    return await _list_section(MediaType.SHOW, section, user_id, limit, offset, db, cards, now)
