# tests/unit/config/test_settings.py — v1
"""Tests for config/settings.py: typed Settings and validation rules."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from corpusqa.config.settings import ConfigurationError, Settings, load_settings


class TestSettingsDefaults:
    def test_default_server(self):
        s = Settings(_env_file=None)
        assert s.port == 3000

    def test_default_models(self):
        s = Settings(_env_file=None)
        assert s.llm_answer_model == "gpt-4o-mini"
        assert s.llm_description_model == "gpt-3.5-turbo"
        assert s.embedding_model == "text-embedding-ada-002"
        assert s.embedding_dimensions == 1536

    def test_default_cache(self):
        s = Settings(_env_file=None)
        assert s.cache_backend == "redis"
        assert s.cache_ttl_minutes == 60
        assert s.cache_ttl_seconds == 3600
        assert s.cache_max_size == 1000

    def test_default_ingestion(self):
        s = Settings(_env_file=None)
        assert s.ingestion_freshness_hours == 4.0
        assert s.ingestion_freshness_seconds == 4 * 3600
        assert s.ingestion_delay_seconds == 0.5
        assert s.ingestion_schedule == "0 */4 * * *"
        assert s.ingestion_timezone == "Europe/Warsaw"
        assert s.skip_initial_scrape is False

    def test_default_retrieval(self):
        s = Settings(_env_file=None)
        assert s.rag_top_k == 3
        assert s.vector_db_collection == "tax_info"


class TestSettingsValidation:
    def test_redis_without_url(self):
        with pytest.raises(ConfigurationError, match="CACHE_REDIS_URL"):
            Settings(_env_file=None, cache_backend="redis", cache_redis_url="")

    def test_memory_backend_without_url_ok(self):
        s = Settings(_env_file=None, cache_backend="memory", cache_redis_url="")
        assert s.cache_backend == "memory"

    def test_empty_prefix(self):
        with pytest.raises(ConfigurationError, match="CACHE_KEY_PREFIX"):
            Settings(_env_file=None, cache_key_prefix="")

    def test_prefix_host_mismatch(self):
        with pytest.raises(ConfigurationError, match="CRAWL_DOMAIN_PREFIX"):
            Settings(
                _env_file=None,
                sitemap_url="https://a.example/sitemap",
                crawl_domain_prefix="https://b.example/",
            )

    def test_zero_ttl_rejected(self):
        with pytest.raises(ValidationError, match="cache_ttl_minutes"):
            Settings(_env_file=None, cache_ttl_minutes=0)

    def test_negative_freshness_rejected(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, ingestion_freshness_hours=-1)

    def test_bad_schedule_rejected(self):
        with pytest.raises(ValidationError, match="5 parts"):
            Settings(_env_file=None, ingestion_schedule="*/5 * *")

    def test_unknown_cache_backend_rejected(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, cache_backend="sqlite")


class TestLoadSettings:
    def test_overrides(self):
        s = load_settings(_env_file=None, rag_top_k=5)
        assert s.rag_top_k == 5

    def test_env_vars(self, monkeypatch):
        monkeypatch.setenv("CACHE_TTL_MINUTES", "15")
        monkeypatch.setenv("VECTOR_DB_COLLECTION", "pages")
        s = Settings(_env_file=None)
        assert s.cache_ttl_seconds == 900
        assert s.vector_db_collection == "pages"
