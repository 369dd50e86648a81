# src/rag/embeddings/base_embedder.py — v1
"""Abstract embeddings interface."""

from __future__ import annotations

from abc import ABC, abstractmethod

from corpusqa.core.errors import EmbeddingError


class BaseEmbedder(ABC):
    """Unified interface for all embedding providers."""

    @abstractmethod
    async def embed_texts(self, texts: list[str]) -> list[list[float]]:
        """Embed a batch of texts into vectors."""

    @abstractmethod
    async def embed_query(self, query: str) -> list[float]:
        """Embed a single text (question or page description)."""

    async def close(self) -> None:
        """Release HTTP resources. Default: nothing to release."""

    @property
    @abstractmethod
    def dimensions(self) -> int:
        """Output vector dimensions."""

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Provider identifier."""

    @property
    @abstractmethod
    def model_name(self) -> str:
        """Model identifier."""

    def _check_vector(self, vector: list[float] | None) -> list[float]:
        """Reject empty or wrong-sized vectors from the upstream."""
        if not vector:
            raise EmbeddingError(
                f"Invalid response structure from {self.provider_name} embeddings API"
            )
        if len(vector) != self.dimensions:
            raise EmbeddingError(
                f"Expected {self.dimensions}-dim embedding, got {len(vector)}"
            )
        return list(vector)
