# src/cache/cache_factory.py — v1
"""Factory for cache store instantiation."""

from __future__ import annotations

import logging

from corpusqa.cache.base_cache_store import BaseCacheStore
from corpusqa.config.settings import Settings

logger = logging.getLogger(__name__)


def create_cache_store(settings: Settings | None = None) -> BaseCacheStore:
    """Instantiate the configured cache backend.

    Args:
        settings: Application settings. Defaults to the in-memory backend.

    Returns:
        Configured BaseCacheStore implementation.
    """
    backend = "memory" if settings is None else settings.cache_backend

    if backend == "memory":
        from corpusqa.cache.memory_store import MemoryCacheStore
        return MemoryCacheStore()

    if backend == "none":
        from corpusqa.cache.memory_store import NullCacheStore
        logger.info("Answer caching is disabled")
        return NullCacheStore()

    if backend == "redis":
        from corpusqa.cache.redis_store import RedisCacheStore
        if settings is None or not settings.cache_redis_url:
            raise ValueError(
                "CACHE_REDIS_URL must be set when CACHE_BACKEND=redis"
            )
        return RedisCacheStore(redis_url=settings.cache_redis_url)

    raise ValueError(f"Unsupported cache backend: {backend!r}")
