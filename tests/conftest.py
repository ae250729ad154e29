import os

# Must be set before catalog.core.config is imported
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("METRICS_ENABLED", "false")
os.environ.setdefault("REDIS_URL", "redis://localhost:6379/15")
