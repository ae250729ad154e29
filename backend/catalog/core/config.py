import os
from pydantic_settings import BaseSettings



class Settings(BaseSettings):
    db_user: str = os.getenv("POSTGRES_USER", "catalog")
    db_password: str = os.getenv("POSTGRES_PASSWORD", "catalog")
    db_name: str = os.getenv("POSTGRES_DB", "catalog")
    database_url: str = os.getenv(
        "DATABASE_URL",
        f"postgresql+psycopg2://{os.getenv('POSTGRES_USER', 'catalog')}:{os.getenv('POSTGRES_PASSWORD', 'catalog')}@db:5432/{os.getenv('POSTGRES_DB', 'catalog')}",
    )
    redis_url: str = os.getenv("REDIS_URL", "redis://redis:6379/0")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    # Best-effort badge counters in Redis
    metrics_enabled: bool = os.getenv("METRICS_ENABLED", "true").lower() == "true"

    # Recency windows (days)
    new_release_window_days: int = int(os.getenv("NEW_RELEASE_WINDOW_DAYS", "14"))
    new_on_streaming_days: int = int(os.getenv("NEW_ON_STREAMING_DAYS", "14"))
    in_theaters_days: int = int(os.getenv("IN_THEATERS_DAYS", "45"))
    new_season_days: int = int(os.getenv("NEW_SEASON_DAYS", "14"))
    new_episode_days: int = int(os.getenv("NEW_EPISODE_DAYS", "7"))

    # Catalog list paging
    default_page_size: int = int(os.getenv("DEFAULT_PAGE_SIZE", "20"))
    max_page_size: int = int(os.getenv("MAX_PAGE_SIZE", "100"))

settings = Settings()
