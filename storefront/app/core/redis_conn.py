# storefront/app/core/redis_conn.py
from __future__ import annotations

from typing import Optional

from redis.asyncio import Redis as AsyncRedis  # requires redis>=5

from storefront.app.core.config import settings

# Module-level singleton
_async_client: Optional[AsyncRedis] = None


def get_async_redis(url: Optional[str] = None) -> AsyncRedis:
    """
    Return a singleton asynchronous Redis client.
    """
    global _async_client
    if _async_client is None:
        _async_client = AsyncRedis.from_url(url or settings.redis_url, decode_responses=True)
    return _async_client


async def close_async_redis() -> None:
    global _async_client
    if _async_client is not None:
        await _async_client.aclose()
        _async_client = None
