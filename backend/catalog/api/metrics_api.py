from typing import Any, Dict
from fastapi import APIRouter
import logging

from catalog.core.metrics import counters_snapshot


router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/metrics/snapshot")
async def get_metrics_snapshot() -> Dict[str, Any]:
    counters = await counters_snapshot()
    logger.info(f"[METRICS] Snapshot counters={len(counters)}")
    return {"counters": counters}
