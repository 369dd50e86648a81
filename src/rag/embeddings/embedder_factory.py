# src/rag/embeddings/embedder_factory.py — v1
"""Factory: instantiate embedding provider from configuration."""

from __future__ import annotations

import logging

from corpusqa.config.settings import Settings
from corpusqa.rag.embeddings.base_embedder import BaseEmbedder

logger = logging.getLogger(__name__)

_PROVIDER_REGISTRY: dict[str, str] = {
    "openai": "corpusqa.rag.embeddings.openai_embedder.OpenAIEmbedder",
}


class UnsupportedEmbeddingProviderError(ValueError):
    """Raised when an embedding provider is not registered."""


def create_embedder(settings: Settings) -> BaseEmbedder:
    """Instantiate the configured embedding provider.

    Args:
        settings: Application settings. Uses EMBEDDING_PROVIDER, EMBEDDING_MODEL
            and EMBEDDING_DIMENSIONS.
    """
    provider = settings.embedding_provider
    if provider not in _PROVIDER_REGISTRY:
        raise UnsupportedEmbeddingProviderError(
            f"Unsupported embedding provider: {provider!r}. "
            f"Available: {', '.join(sorted(_PROVIDER_REGISTRY))}"
        )

    cls = _import_class(_PROVIDER_REGISTRY[provider])

    kwargs: dict = {
        "dimensions": settings.embedding_dimensions,
        "model": settings.embedding_model,
    }
    if provider == "openai":
        kwargs["api_key"] = settings.openai_api_key

    logger.debug("Creating embedder: provider=%s", provider)
    return cls(**kwargs)


def register_embedding_provider(name: str, class_path: str) -> None:
    """Register a custom embedding provider."""
    _PROVIDER_REGISTRY[name] = class_path


def _import_class(class_path: str) -> type:
    """Dynamically import a class from its fully qualified path."""
    module_path, class_name = class_path.rsplit(".", 1)
    import importlib
    module = importlib.import_module(module_path)
    return getattr(module, class_name)
