# src/rag/vector_store/base_vector_store.py — v1
"""Abstract vector store interface.

Records are appended under fresh ids; several records may share a url.
"Current" is decided by filtering on updated_at, never by uniqueness.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Literal

from corpusqa.core.models import ContentRecord
from corpusqa.rag.models import SearchResult

Distance = Literal["cosine", "dot", "euclid"]


class BaseVectorStore(ABC):
    """Unified interface for vector store backends."""

    @abstractmethod
    async def ensure_collection(
        self, collection: str, dimensions: int, distance: Distance = "cosine"
    ) -> bool:
        """Create collection (and its url/updated_at indexes) if missing.

        Returns:
            True if the collection was created, False if it already existed.
        """

    @abstractmethod
    async def upsert(self, collection: str, records: list[ContentRecord]) -> None:
        """Insert records, replacing any point with the same id."""

    @abstractmethod
    async def search(
        self, collection: str, vector: list[float], top_k: int = 3
    ) -> list[SearchResult]:
        """Top-k most similar records, highest score first."""

    @abstractmethod
    async def find_by_field(
        self,
        collection: str,
        field: str,
        value: str,
        limit: int = 1,
        newest_first: bool = True,
    ) -> list[ContentRecord]:
        """Records whose payload ``field`` equals ``value`` exactly.

        With newest_first, results are ordered by updated_at descending.
        """

    @abstractmethod
    async def count(self, collection: str) -> int:
        """Return number of points in a collection."""

    async def close(self) -> None:
        """Release connections. Default: nothing to release."""

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Provider identifier (qdrant, memory)."""
