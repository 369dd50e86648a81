# src/cache/redis_store.py — v1
"""Redis-based cache store (CACHE_BACKEND=redis).

Requires 'redis' package: pip install redis.
Expiry is delegated to Redis (SETEX), so expired entries disappear without
notification; eviction under memory pressure follows the server's
maxmemory-policy.
"""

from __future__ import annotations

import logging

from corpusqa.cache.base_cache_store import BaseCacheStore

logger = logging.getLogger(__name__)

_SCAN_COUNT = 500


class RedisCacheStore(BaseCacheStore):
    """Redis-backed cache store using the asyncio client."""

    def __init__(self, redis_url: str) -> None:
        try:
            import redis.asyncio as aioredis
        except ImportError as e:
            raise ImportError(
                "redis package required: pip install redis"
            ) from e

        self._client = aioredis.from_url(redis_url, decode_responses=True)
        self._redis_url = redis_url

    async def get_string(self, key: str) -> str | None:
        return await self._client.get(key)

    async def set_string_with_expiry(
        self, key: str, value: str, ttl_seconds: int
    ) -> None:
        await self._client.setex(key, ttl_seconds, value)

    async def list_keys_by_prefix(self, prefix: str) -> list[str]:
        """SCAN instead of KEYS so large keyspaces do not block the server."""
        keys: list[str] = []
        async for key in self._client.scan_iter(match=f"{prefix}*", count=_SCAN_COUNT):
            keys.append(key)
        return keys

    async def delete_keys(self, keys: list[str]) -> int:
        if not keys:
            return 0
        return int(await self._client.delete(*keys))

    async def close(self) -> None:
        """Close the Redis connection pool."""
        await self._client.aclose()
        logger.info("Redis connection closed")

    @property
    def backend_name(self) -> str:
        return "redis"
