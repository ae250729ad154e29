from datetime import datetime
from typing import Optional

from fastapi import HTTPException

from catalog.core.config import settings
from catalog.services.card_enrichment import CardEnrichmentService
from catalog.utils.timezone import utc_now

_card_service: Optional[CardEnrichmentService] = None


def get_card_service() -> CardEnrichmentService:
    global _card_service
    if _card_service is None:
        _card_service = CardEnrichmentService(
            new_release_window_days=settings.new_release_window_days,
            new_episode_days=settings.new_episode_days,
            new_season_days=settings.new_season_days,
            in_theaters_days=settings.in_theaters_days,
            new_on_streaming_days=settings.new_on_streaming_days,
        )
    return _card_service


def get_now() -> datetime:
    """Request clock. One instant per request so every card uses the same windows."""
    return utc_now()


def resolve_page(limit: Optional[int], offset: int) -> tuple:
    if limit is None:
        limit = settings.default_page_size
    if limit < 1 or offset < 0:
        raise HTTPException(status_code=400, detail="limit must be >= 1 and offset >= 0")
    return min(limit, settings.max_page_size), offset
