"""
schemas.py

Pydantic response schemas for catalog cards, detail pages and the user
library. Client-visible fields are camelCase aliases; the builders at the
bottom convert engine results into these models.
"""
from pydantic import BaseModel, Field
from typing import Any, Dict, List, Optional
import datetime

from catalog.services.card_enrichment import (
    EnrichedItem,
    MovieDetail,
    ShowDetail,
    UserStateSnapshot,
)


class _CamelModel(BaseModel):
    class Config:
        populate_by_name = True


class ContinuePointOut(_CamelModel):
    season: int
    episode: int


class CardMetaOut(_CamelModel):
    badge_key: Optional[str] = Field(None, alias="badgeKey")
    primary_cta: str = Field(..., alias="primaryCta")
    continue_point: Optional[ContinuePointOut] = Field(None, alias="continue")
    list_context: str = Field(..., alias="listContext")


class UserStateOut(_CamelModel):
    state: Optional[str] = None
    progress: Optional[Dict[str, Any]] = None
    rating: Optional[float] = None
    notes: Optional[str] = None


class MediaSummaryOut(_CamelModel):
    id: str
    type: str
    title: str
    slug: Optional[str] = None
    poster: Optional[str] = None
    release_date: Optional[datetime.datetime] = Field(None, alias="releaseDate")
    card: CardMetaOut


class CatalogItemOut(MediaSummaryOut):
    user_state: Optional[UserStateOut] = Field(None, alias="userState")


class CatalogListOut(_CamelModel):
    context: str
    limit: int
    offset: int
    items: List[CatalogItemOut]


class ConsensusOut(_CamelModel):
    value: Optional[float] = None
    spread: float = 0.0
    total_votes: int = Field(0, alias="totalVotes")
    source_count: int = Field(0, alias="sourceCount")
    best_source: Optional[str] = Field(None, alias="bestSource")


class VerdictOut(_CamelModel):
    type: str
    message_key: Optional[str] = Field(None, alias="messageKey")
    context: Optional[str] = None
    hint_key: str = Field(..., alias="hintKey")


class StatusHintOut(_CamelModel):
    message_key: str = Field(..., alias="messageKey")


class MovieDetailOut(CatalogItemOut):
    release_status: Optional[str] = Field(None, alias="releaseStatus")
    consensus: ConsensusOut
    verdict: VerdictOut


class ShowDetailOut(CatalogItemOut):
    status: Optional[str] = None
    total_seasons: Optional[int] = Field(None, alias="totalSeasons")
    consensus: ConsensusOut
    verdict: VerdictOut
    status_hint: Optional[StatusHintOut] = Field(None, alias="statusHint")


class LibraryEntryOut(_CamelModel):
    media_item_id: str = Field(..., alias="mediaItemId")
    state: Optional[str] = None
    progress: Optional[Dict[str, Any]] = None
    rating: Optional[float] = None
    notes: Optional[str] = None
    media_summary: MediaSummaryOut = Field(..., alias="mediaSummary")


class LibraryListOut(_CamelModel):
    total: int
    limit: int
    offset: int
    items: List[LibraryEntryOut]


# Builders

def _user_state_out(state: Optional[UserStateSnapshot]) -> Optional[UserStateOut]:
    if state is None:
        return None
    return UserStateOut(
        state=state.state.value if state.state else None,
        progress=dict(state.progress) if state.progress else None,
        rating=state.rating,
        notes=state.notes,
    )


def _summary_fields(enriched: EnrichedItem) -> Dict[str, Any]:
    fields = enriched.item.summary()
    fields["card"] = CardMetaOut(**enriched.card.to_dict())
    return fields


def catalog_item_out(enriched: EnrichedItem) -> CatalogItemOut:
    return CatalogItemOut(**_summary_fields(enriched), userState=_user_state_out(enriched.user_state))


def library_entry_out(enriched: EnrichedItem) -> LibraryEntryOut:
    state = _user_state_out(enriched.user_state) or UserStateOut()
    return LibraryEntryOut(
        mediaItemId=enriched.item.id,
        state=state.state,
        progress=state.progress,
        rating=state.rating,
        notes=state.notes,
        mediaSummary=MediaSummaryOut(**_summary_fields(enriched)),
    )


def movie_detail_out(detail: MovieDetail) -> MovieDetailOut:
    enriched = EnrichedItem(item=detail.item, card=detail.card, user_state=detail.user_state)
    return MovieDetailOut(
        **_summary_fields(enriched),
        userState=_user_state_out(detail.user_state),
        releaseStatus=detail.release_status.value if detail.release_status else None,
        consensus=ConsensusOut(**detail.consensus.to_dict()),
        verdict=VerdictOut(**detail.verdict.to_dict()),
    )


def show_detail_out(detail: ShowDetail) -> ShowDetailOut:
    enriched = EnrichedItem(item=detail.item, card=detail.card, user_state=detail.user_state)
    payload = detail.verdict.to_dict()
    return ShowDetailOut(
        **_summary_fields(enriched),
        userState=_user_state_out(detail.user_state),
        status=detail.item.status,
        totalSeasons=detail.item.total_seasons,
        consensus=ConsensusOut(**detail.consensus.to_dict()),
        verdict=VerdictOut(**payload["verdict"]),
        statusHint=StatusHintOut(**payload["statusHint"]) if payload["statusHint"] else None,
    )
