from redis import asyncio as aioredis
from catalog.core.config import settings
import asyncio
from typing import Dict, Optional

# Counter client per event loop; None keys calls made outside a loop
_clients: Dict[Optional[int], aioredis.Redis] = {}

def _loop_id() -> Optional[int]:
	try:
		return id(asyncio.get_running_loop())
	except RuntimeError:
		return None

def get_redis() -> aioredis.Redis:
	"""Client for the metrics counters, bound to the running event loop.

	TestClient and uvicorn each run their own loop, and a client awaited on a
	loop other than its own fails.
	"""
	key = _loop_id()
	client = _clients.get(key)
	if client is None:
		client = aioredis.from_url(
			settings.redis_url,
			decode_responses=True,
			max_connections=10,
			socket_connect_timeout=2,
			socket_timeout=2,
		)
		_clients[key] = client
	return client
