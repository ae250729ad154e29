from __future__ import annotations
import logging
from typing import Dict, Iterable, Optional

from catalog.core.config import settings
from catalog.core.redis_client import get_redis

logger = logging.getLogger(__name__)

COUNTERS_KEY = "metrics:counters"


async def increment(name: str, amount: int = 1) -> None:
    if not settings.metrics_enabled:
        return
    r = get_redis()
    try:
        await r.hincrby(COUNTERS_KEY, name, amount)
    except Exception as e:
        logger.debug(f"[Metrics] increment {name} failed: {e}")


def badge_counter_name(badge_key: Optional[str], context: str) -> str:
    return f"cards.badge.{badge_key or 'none'}.{context}"


async def record_badges(badge_keys: Iterable[Optional[str]], context: str) -> None:
    """One counter bump per badge key served, batched into a single pipeline."""
    if not settings.metrics_enabled:
        return
    totals: Dict[str, int] = {}
    for key in badge_keys:
        name = badge_counter_name(key, context)
        totals[name] = totals.get(name, 0) + 1
    if not totals:
        return
    r = get_redis()
    try:
        pipe = r.pipeline()
        for name, amount in totals.items():
            pipe.hincrby(COUNTERS_KEY, name, amount)
        await pipe.execute()
    except Exception as e:
        logger.debug(f"[Metrics] badge counters failed: {e}")


async def counters_snapshot() -> Dict[str, int]:
    r = get_redis()
    out: Dict[str, int] = {}
    try:
        data = await r.hgetall(COUNTERS_KEY)
        for k, v in (data or {}).items():
            key = k.decode("utf-8") if isinstance(k, bytes) else str(k)
            try:
                out[key] = int(v)
            except (TypeError, ValueError):
                out[key] = 0
    except Exception as e:
        logger.debug(f"[Metrics] snapshot failed: {e}")
    return out
