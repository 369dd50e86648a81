# src/cache/base_cache_store.py — v1
"""Abstract cache backing store interface.

Stores opaque strings with a per-key TTL. Key namespacing is the caller's
job (see AnswerCache); a store never adds its own prefix.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class BaseCacheStore(ABC):
    """Unified interface for answer cache backends."""

    @abstractmethod
    async def get_string(self, key: str) -> str | None:
        """Return the value for key, or None if absent or expired."""

    @abstractmethod
    async def set_string_with_expiry(
        self, key: str, value: str, ttl_seconds: int
    ) -> None:
        """Store value under key, overwriting, expiring after ttl_seconds."""

    @abstractmethod
    async def list_keys_by_prefix(self, prefix: str) -> list[str]:
        """List live keys starting with prefix."""

    @abstractmethod
    async def delete_keys(self, keys: list[str]) -> int:
        """Delete keys, returning how many existed."""

    async def close(self) -> None:
        """Release connections. Default: nothing to release."""

    @property
    @abstractmethod
    def backend_name(self) -> str:
        """Backend identifier (redis, memory, none)."""
