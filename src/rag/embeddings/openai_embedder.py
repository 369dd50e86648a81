# src/rag/embeddings/openai_embedder.py — v1
"""OpenAI embedding adapter.

Uses the openai SDK for embedding generation.
Models: text-embedding-ada-002 (1536 dims), text-embedding-3-small/large.
"""

from __future__ import annotations

import logging

from corpusqa.core.errors import EmbeddingError
from corpusqa.rag.embeddings.base_embedder import BaseEmbedder

logger = logging.getLogger(__name__)


class OpenAIEmbedder(BaseEmbedder):
    """Embeddings via OpenAI API."""

    def __init__(
        self,
        model: str = "text-embedding-ada-002",
        api_key: str | None = None,
        dimensions: int = 1536,
    ) -> None:
        self._model = model
        self._api_key = api_key
        self._dimensions = dimensions
        self.__client = None

    @property
    def _client(self):
        if self.__client is None:
            try:
                import openai
            except ImportError as e:
                raise ImportError(
                    "openai package required: pip install openai"
                ) from e
            self.__client = openai.AsyncOpenAI(api_key=self._api_key or None)
        return self.__client

    async def _create(self, texts: list[str]):
        try:
            return await self._client.embeddings.create(input=texts, model=self._model)
        except Exception as e:
            logger.error(
                "Error creating embedding: %s", e,
                extra={"data": {"text": texts[0][:100] if texts else ""}},
            )
            raise EmbeddingError(f"OpenAI embeddings request failed: {e}") from e

    async def embed_texts(self, texts: list[str]) -> list[list[float]]:
        """Embed document texts via OpenAI API."""
        if not texts:
            return []
        response = await self._create(texts)
        data = getattr(response, "data", None) or []
        if len(data) != len(texts):
            raise EmbeddingError(
                f"Expected {len(texts)} embeddings, got {len(data)}"
            )
        return [self._check_vector(item.embedding) for item in data]

    async def embed_query(self, query: str) -> list[float]:
        """Embed a single text (same endpoint, no special instruction)."""
        response = await self._create([query])
        data = getattr(response, "data", None)
        if not data:
            raise EmbeddingError("Invalid response structure from OpenAI embeddings API")
        return self._check_vector(data[0].embedding)

    async def close(self) -> None:
        if self.__client is not None:
            await self.__client.close()
            self.__client = None

    @property
    def dimensions(self) -> int:
        return self._dimensions

    @property
    def provider_name(self) -> str:
        return "openai"

    @property
    def model_name(self) -> str:
        return self._model
