# src/cache/memory_store.py — v1
"""In-process cache stores (CACHE_BACKEND=memory / none).

MemoryCacheStore keeps entries in a dict with monotonic-clock expiry and is
meant for single-process deployments and tests. NullCacheStore stores
nothing: every lookup misses.
"""

from __future__ import annotations

import time
from typing import Callable

from corpusqa.cache.base_cache_store import BaseCacheStore


class MemoryCacheStore(BaseCacheStore):
    """Dict-backed store with lazy TTL expiry.

    Args:
        clock: Monotonic time source in seconds (injectable for tests).
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._data: dict[str, tuple[str, float]] = {}

    def _purge_expired(self) -> None:
        now = self._clock()
        expired = [k for k, (_, exp) in self._data.items() if exp <= now]
        for key in expired:
            del self._data[key]

    async def get_string(self, key: str) -> str | None:
        item = self._data.get(key)
        if item is None:
            return None
        value, expires_at = item
        if expires_at <= self._clock():
            del self._data[key]
            return None
        return value

    async def set_string_with_expiry(
        self, key: str, value: str, ttl_seconds: int
    ) -> None:
        self._data[key] = (value, self._clock() + ttl_seconds)

    async def list_keys_by_prefix(self, prefix: str) -> list[str]:
        self._purge_expired()
        return [k for k in self._data if k.startswith(prefix)]

    async def delete_keys(self, keys: list[str]) -> int:
        removed = 0
        for key in keys:
            if self._data.pop(key, None) is not None:
                removed += 1
        return removed

    @property
    def backend_name(self) -> str:
        return "memory"


class NullCacheStore(BaseCacheStore):
    """Caching disabled: reads always miss, writes are dropped."""

    async def get_string(self, key: str) -> str | None:
        return None

    async def set_string_with_expiry(
        self, key: str, value: str, ttl_seconds: int
    ) -> None:
        return None

    async def list_keys_by_prefix(self, prefix: str) -> list[str]:
        return []

    async def delete_keys(self, keys: list[str]) -> int:
        return 0

    @property
    def backend_name(self) -> str:
        return "none"
