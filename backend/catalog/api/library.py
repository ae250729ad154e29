"""
library.py - User library and continue-watching endpoints
"""
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from datetime import datetime
from typing import List, Optional
import logging

from catalog import crud
from catalog.api.deps import get_card_service, get_now, resolve_page
from catalog.core.database import get_db
from catalog.core.metrics import record_badges
from catalog.schemas import LibraryListOut, library_entry_out
from catalog.services.card_constants import ListContext, UserMediaState, parse_user_state
from catalog.services.card_enrichment import CardEnrichmentService

logger = logging.getLogger(__name__)
router = APIRouter()


def _parse_states(raw: Optional[str]) -> Optional[List[UserMediaState]]:
    """Comma-separated filter, e.g. ?state=watching,planned"""
    if not raw:
        return None
    states = []
    for part in raw.split(","):
        if not part.strip():
            continue
        state = parse_user_state(part)
        if state is None:
            raise HTTPException(status_code=400, detail=f"Invalid state: {part.strip()}")
        states.append(state)
    return states or None


async def _library_page(
    context: ListContext,
    user_id: int,
    states: Optional[List[UserMediaState]],
    with_progress: bool,
    limit: Optional[int],
    offset: int,
    db: Session,
    cards: CardEnrichmentService,
    now: datetime,
) -> LibraryListOut:
    limit, offset = resolve_page(limit, offset)
    entries = crud.list_user_library(db, user_id, states, with_progress, limit, offset)
    total = crud.count_user_library(db, user_id, states, with_progress)

    enriched = cards.enrich_user_media(entries, context, now)
    logger.info(f"[Library] user={user_id} ctx={context.value}: {len(enriched)}/{total} entries")
    await record_badges([e.card.badge_key.value if e.card.badge_key else None for e in enriched], context.value)
    return LibraryListOut(
        total=total,
        limit=limit,
        offset=offset,
        items=[library_entry_out(e) for e in enriched],
    )


@router.get("", response_model=LibraryListOut)
async def list_library(
    user_id: int = 1,
    state: Optional[str] = None,
    limit: Optional[int] = None,
    offset: int = 0,
    db: Session = Depends(get_db),
    cards: CardEnrichmentService = Depends(get_card_service),
    now: datetime = Depends(get_now),
):
    """User library, most recently updated first. Watchlist badges are suppressed here."""
    states = _parse_states(state)
    return await _library_page(ListContext.USER_LIBRARY, user_id, states, False, limit, offset, db, cards, now)


@router.get("/continue", response_model=LibraryListOut)
async def list_continue(
    user_id: int = 1,
    limit: Optional[int] = None,
    offset: int = 0,
    db: Session = Depends(get_db),
    cards: CardEnrichmentService = Depends(get_card_service),
    now: datetime = Depends(get_now),
):
    """Entries with stored progress; only continuation badges are shown."""
    return await _library_page(ListContext.CONTINUE_LIST, user_id, None, True, limit, offset, db, cards, now)
