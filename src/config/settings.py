# src/config/settings.py — v1
"""Typed configuration loaded from .env via pydantic-settings.

Single source of truth for all deployment-specific settings. Field names map
to upper-case environment variables (``CACHE_TTL_MINUTES``, ``SITEMAP_URL``...).
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal
from urllib.parse import urlparse

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ConfigurationError(Exception):
    """Raised when configuration is internally inconsistent."""


class Settings(BaseSettings):
    """Application settings loaded from .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # === HTTP server ===
    host: str = "0.0.0.0"  # noqa: S104
    port: int = 3000

    # === LLM ===
    llm_provider: str = "openai"
    openai_api_key: str = ""
    llm_answer_model: str = "gpt-4o-mini"
    llm_description_model: str = "gpt-3.5-turbo"
    llm_web_model: str = "gpt-4o-mini"
    llm_temperature: float = 0.3
    llm_answer_max_tokens: int = 1000
    llm_description_max_tokens: int = 100

    # === Embeddings ===
    embedding_provider: str = "openai"
    embedding_model: str = "text-embedding-ada-002"
    embedding_dimensions: int = 1536

    # === Vector database ===
    vector_db_type: Literal["qdrant", "memory"] = "qdrant"
    vector_db_url: str = ""
    vector_db_api_key: str = ""
    vector_db_path: str = ""
    vector_db_collection: str = "tax_info"

    # === Retrieval ===
    rag_top_k: int = 3
    web_source_label: str = "podatki.gov.pl"

    # === Answer cache ===
    cache_backend: Literal["redis", "memory", "none"] = "redis"
    cache_redis_url: str = "redis://localhost:6379"
    cache_key_prefix: str = "corpusqa:"
    cache_max_size: int = 1000
    cache_ttl_minutes: int = 60

    # === Ingestion ===
    sitemap_url: str = "https://www.podatki.gov.pl/mapa-serwisu-podatki-gov-pl/"
    crawl_domain_prefix: str = "https://www.podatki.gov.pl/"
    ingestion_freshness_hours: float = 4.0
    ingestion_delay_seconds: float = 0.5
    ingestion_sitemap_timeout_seconds: float = 60.0
    ingestion_page_timeout_seconds: float = 30.0
    ingestion_user_agent: str = "corpusqa-crawler/0.1"
    ingestion_schedule_enabled: bool = True
    ingestion_schedule: str = "0 */4 * * *"
    ingestion_timezone: str = "Europe/Warsaw"
    skip_initial_scrape: bool = False

    # === Logging ===
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_format: Literal["json", "text"] = "json"
    log_file: Path | None = None
    log_rotation: str = "10MB"
    log_retention: int = 30

    # --- Validators ---

    @field_validator("cache_ttl_minutes", "rag_top_k", "embedding_dimensions")
    @classmethod
    def validate_positive(cls, v: int, info) -> int:  # noqa: N805
        if v <= 0:
            raise ValueError(f"{info.field_name} must be > 0")
        return v

    @field_validator("ingestion_freshness_hours")
    @classmethod
    def validate_freshness(cls, v: float) -> float:  # noqa: N805
        if v <= 0:
            raise ValueError("ingestion_freshness_hours must be > 0")
        return v

    @field_validator("ingestion_schedule")
    @classmethod
    def validate_schedule(cls, v: str) -> str:  # noqa: N805
        if len(v.split()) != 5:
            raise ValueError(
                "ingestion_schedule must have 5 parts: minute hour day month day_of_week"
            )
        return v

    @model_validator(mode="after")
    def validate_config_consistency(self) -> Settings:
        """Cross-field consistency rules."""
        errors: list[str] = []

        if self.cache_backend == "redis" and not self.cache_redis_url:
            errors.append("CACHE_REDIS_URL must be set when CACHE_BACKEND=redis")

        if not self.cache_key_prefix:
            errors.append("CACHE_KEY_PREFIX must not be empty")

        if self.sitemap_url and self.crawl_domain_prefix:
            sitemap_host = urlparse(self.sitemap_url).netloc
            prefix_host = urlparse(self.crawl_domain_prefix).netloc
            if sitemap_host and prefix_host and sitemap_host != prefix_host:
                errors.append(
                    "CRAWL_DOMAIN_PREFIX must share the host of SITEMAP_URL"
                )

        if errors:
            raise ConfigurationError("; ".join(errors))

        return self

    # --- Helpers ---

    @property
    def cache_ttl_seconds(self) -> int:
        return self.cache_ttl_minutes * 60

    @property
    def ingestion_freshness_seconds(self) -> float:
        return self.ingestion_freshness_hours * 3600


def load_settings(**overrides: object) -> Settings:
    """Load settings from .env with optional overrides.

    Args:
        **overrides: Field-level overrides (for testing or CLI flags).

    Returns:
        Validated Settings instance.

    Raises:
        ConfigurationError: If configuration is internally inconsistent.
    """
    return Settings(**overrides)  # type: ignore[arg-type]
