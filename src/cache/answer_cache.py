# src/cache/answer_cache.py — v1
"""Cache-aside store for question -> answer mappings.

Every read and write goes through the same fingerprint, so case and
whitespace noise in user questions never splits the key space.

Storage failures are logged and absorbed here: a failed read counts as a
miss, a failed write is dropped. Caching is an optimization and must never
block answer delivery.
"""

from __future__ import annotations

import logging

from corpusqa.cache.base_cache_store import BaseCacheStore
from corpusqa.cache.fingerprint import compute_cache_key
from corpusqa.cache.models import CachedAnswer, CacheStats

logger = logging.getLogger(__name__)

_LOG_PREVIEW = 50


def _preview(question: str) -> str:
    return question[:_LOG_PREVIEW]


class AnswerCache:
    """Question cache with TTL expiry and lifetime hit/miss counters.

    Args:
        store: Backing store (Redis, memory, or null).
        ttl_seconds: Lifetime of a written entry.
        key_prefix: Namespace for all keys owned by this cache.
        max_size: Advisory capacity. Not enforced here; eviction is left to
            the backing store's own capacity policy.
    """

    def __init__(
        self,
        store: BaseCacheStore,
        ttl_seconds: int = 3600,
        key_prefix: str = "corpusqa:",
        max_size: int = 1000,
    ) -> None:
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be > 0")
        self._store = store
        self._ttl = ttl_seconds
        self._prefix = key_prefix
        self._max_size = max_size
        self._hits = 0
        self._misses = 0
        self._size = 0

        logger.info(
            "Answer cache initialized with size=%d, TTL=%ds, backend=%s",
            max_size, ttl_seconds, store.backend_name,
        )

    def _key(self, question: str) -> str:
        return f"{self._prefix}{compute_cache_key(question)}"

    async def get(self, question: str) -> CachedAnswer | None:
        """Return the cached answer for question, or None on miss."""
        key = self._key(question)
        try:
            data = await self._store.get_string(key)
        except Exception:
            logger.exception("Error getting from cache")
            self._misses += 1
            return None

        if data is None:
            self._misses += 1
            return None

        try:
            cached = CachedAnswer.model_validate_json(data)
        except ValueError as e:
            logger.warning("Discarding undecodable cache entry %s: %s", key, e)
            self._misses += 1
            return None

        self._hits += 1
        logger.debug("Cache hit for question: %s", _preview(question))
        return cached

    async def set(self, question: str, answer: CachedAnswer) -> None:
        """Store answer under the question's fingerprint, overwriting."""
        key = self._key(question)
        try:
            await self._store.set_string_with_expiry(
                key, answer.model_dump_json(), self._ttl
            )
        except Exception:
            logger.exception("Error setting cache")
            return
        logger.debug("Cached answer for question: %s", _preview(question))

    async def stats(self) -> CacheStats:
        """Counters plus a size recomputed from the store.

        Entries expire without notification, so size is never tracked
        incrementally. If the recount fails the last known size is reported.
        """
        try:
            keys = await self._store.list_keys_by_prefix(self._prefix)
            self._size = len(keys)
        except Exception:
            logger.exception("Error getting cache stats")
        return CacheStats(hits=self._hits, misses=self._misses, size=self._size)

    async def clear(self) -> None:
        """Remove every entry in this cache's namespace.

        Hit/miss counters are lifetime counters and are left untouched.
        """
        try:
            keys = await self._store.list_keys_by_prefix(self._prefix)
            if keys:
                await self._store.delete_keys(keys)
            self._size = 0
            logger.info("Cleared %d entries from answer cache", len(keys))
        except Exception:
            logger.exception("Error clearing cache")

    @property
    def ttl_seconds(self) -> int:
        return self._ttl

    @property
    def max_size(self) -> int:
        return self._max_size

    async def close(self) -> None:
        await self._store.close()
