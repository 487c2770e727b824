"""Redis connection for story storage."""

from __future__ import annotations

from functools import lru_cache

import redis.asyncio as redis

from ..config import get_settings


@lru_cache(maxsize=1)
def get_redis() -> redis.Redis:
    """Shared async client. Connections are pooled and opened lazily."""
    return redis.from_url(get_settings().redis_url, decode_responses=True)


async def close_redis() -> None:
    if get_redis.cache_info().currsize:
        await get_redis().aclose()
        get_redis.cache_clear()
