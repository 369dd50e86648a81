# src/rag/vector_store/vector_store_factory.py — v1
"""Factory: instantiate vector store from configuration."""

from __future__ import annotations

import logging

from corpusqa.config.settings import Settings
from corpusqa.rag.vector_store.base_vector_store import BaseVectorStore

logger = logging.getLogger(__name__)


class UnsupportedVectorStoreError(ValueError):
    """Raised when a vector store type is not supported."""


def create_vector_store(settings: Settings) -> BaseVectorStore:
    """Instantiate the configured vector store.

    Args:
        settings: Application settings (VECTOR_DB_TYPE, VECTOR_DB_URL...).

    Raises:
        UnsupportedVectorStoreError: If type is not supported.
    """
    db_type = settings.vector_db_type

    if db_type == "memory":
        from corpusqa.rag.vector_store.memory_store import MemoryVectorStore
        return MemoryVectorStore()

    if db_type == "qdrant":
        from corpusqa.rag.vector_store.qdrant_store import QdrantStore
        if settings.vector_db_url:
            return QdrantStore(
                url=settings.vector_db_url,
                api_key=settings.vector_db_api_key or None,
            )
        if settings.vector_db_path:
            return QdrantStore(path=settings.vector_db_path)
        logger.warning("No VECTOR_DB_URL or VECTOR_DB_PATH set, using in-memory Qdrant")
        return QdrantStore()

    raise UnsupportedVectorStoreError(
        f"Unsupported vector store type: {db_type!r}. "
        f"Available: memory, qdrant"
    )
