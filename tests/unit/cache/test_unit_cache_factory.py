# tests/unit/cache/test_unit_cache_factory.py — v1
"""Tests for cache/cache_factory.py."""

from __future__ import annotations

from unittest.mock import patch

import pytest

from corpusqa.cache.cache_factory import create_cache_store
from corpusqa.cache.memory_store import MemoryCacheStore, NullCacheStore
from corpusqa.config.settings import Settings


class TestCreateCacheStore:
    def test_default_is_memory(self):
        assert isinstance(create_cache_store(), MemoryCacheStore)

    def test_memory(self):
        s = Settings(_env_file=None, cache_backend="memory")
        assert isinstance(create_cache_store(s), MemoryCacheStore)

    def test_none(self):
        s = Settings(_env_file=None, cache_backend="none")
        assert isinstance(create_cache_store(s), NullCacheStore)

    def test_redis(self):
        s = Settings(_env_file=None, cache_backend="redis", cache_redis_url="redis://cache:6379")
        with patch("corpusqa.cache.redis_store.RedisCacheStore.__init__", return_value=None) as init:
            store = create_cache_store(s)
        init.assert_called_once_with(redis_url="redis://cache:6379")
        assert store.backend_name == "redis"

    def test_unsupported(self):
        s = Settings(_env_file=None, cache_backend="memory")
        object.__setattr__(s, "cache_backend", "sqlite")
        with pytest.raises(ValueError, match="Unsupported"):
            create_cache_store(s)
