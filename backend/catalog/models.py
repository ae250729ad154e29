"""
models.py

SQLAlchemy models for catalog titles and per-user watch state. The service
only reads these tables; ingestion and sync jobs write them.
"""
from sqlalchemy import Column, Integer, String, Boolean, ForeignKey, DateTime, Float, Text, JSON, UniqueConstraint, Index
from sqlalchemy.orm import declarative_base
from sqlalchemy.orm import relationship
from catalog.utils.timezone import utc_now

Base = declarative_base()


class MediaItem(Base):
    __tablename__ = "media_items"
    id = Column(Integer, primary_key=True)
    media_type = Column(String, nullable=False, index=True)  # 'movie' or 'show'
    title = Column(String, nullable=False)
    slug = Column(String, nullable=True, index=True)
    poster_path = Column(String, nullable=True)
    overview = Column(Text, nullable=True)
    # External ratings, one pair per provider
    imdb_rating = Column(Float, nullable=True)
    imdb_votes = Column(Integer, nullable=True)
    trakt_rating = Column(Float, nullable=True)
    trakt_votes = Column(Integer, nullable=True)
    tmdb_rating = Column(Float, nullable=True)
    tmdb_votes = Column(Integer, nullable=True)
    # Popularity signals computed upstream
    popularity = Column(Float, nullable=True, index=True)
    trend_delta = Column(String, nullable=True)  # 'up' | 'down' | 'stable'
    is_trending = Column(Boolean, default=False, index=True)
    # Movie release dates
    release_date = Column(DateTime, nullable=True, index=True)
    theatrical_release_date = Column(DateTime, nullable=True)
    digital_release_date = Column(DateTime, nullable=True)
    # TV-specific fields
    status = Column(String, nullable=True)  # raw provider status, e.g. 'Returning Series'
    total_seasons = Column(Integer, nullable=True)
    first_air_date = Column(DateTime, nullable=True)
    last_air_date = Column(DateTime, nullable=True)
    updated_at = Column(DateTime, default=utc_now)

    user_states = relationship("UserMediaState", back_populates="media_item")


class UserMediaState(Base):
    __tablename__ = "user_media_states"
    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, nullable=False, index=True)
    media_item_id = Column(Integer, ForeignKey("media_items.id"), nullable=False)
    state = Column(String, nullable=False)  # 'watching' | 'completed' | 'planned' | 'dropped'
    progress = Column(JSON(none_as_null=True), nullable=True)  # {"seasons": {"1": 8, "2": 3}}
    rating = Column(Float, nullable=True)
    notes = Column(Text, nullable=True)
    updated_at = Column(DateTime, default=utc_now, onupdate=utc_now, index=True)

    media_item = relationship("MediaItem", back_populates="user_states")

    __table_args__ = (
        UniqueConstraint("user_id", "media_item_id", name="uq_user_media_states_user_item"),
        Index("ix_user_media_states_user_state", "user_id", "state"),
    )
