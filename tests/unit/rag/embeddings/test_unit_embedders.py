# tests/unit/rag/embeddings/test_unit_embedders.py — v1
"""Tests for rag/embeddings/openai_embedder.py: mocked SDK, vector checks."""

from __future__ import annotations

import sys
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest

from corpusqa.core.errors import EmbeddingError
from corpusqa.rag.embeddings.openai_embedder import OpenAIEmbedder


def _embedder(response=None, error: Exception | None = None, dimensions: int = 3) -> OpenAIEmbedder:
    e = OpenAIEmbedder(dimensions=dimensions)
    client = MagicMock()
    client.embeddings.create = AsyncMock(return_value=response, side_effect=error)
    e._OpenAIEmbedder__client = client
    return e


def _response(*vectors):
    return SimpleNamespace(data=[SimpleNamespace(embedding=list(v)) for v in vectors])


class TestOpenAIEmbedder:
    def test_properties(self):
        e = OpenAIEmbedder()
        assert e.provider_name == "openai"
        assert e.model_name == "text-embedding-ada-002"
        assert e.dimensions == 1536

    def test_import_error(self):
        mod = sys.modules.get("openai")
        sys.modules["openai"] = None  # type: ignore[assignment]
        try:
            e = OpenAIEmbedder()
            with pytest.raises(ImportError, match="openai"):
                e._client
        finally:
            if mod is not None:
                sys.modules["openai"] = mod
            else:
                sys.modules.pop("openai", None)

    @pytest.mark.asyncio
    async def test_embed_query(self):
        e = _embedder(_response([0.1, 0.2, 0.3]))
        assert await e.embed_query("VAT") == [0.1, 0.2, 0.3]

    @pytest.mark.asyncio
    async def test_embed_texts(self):
        e = _embedder(_response([1, 0, 0], [0, 1, 0]))
        assert await e.embed_texts(["a", "b"]) == [[1, 0, 0], [0, 1, 0]]

    @pytest.mark.asyncio
    async def test_embed_texts_empty(self):
        e = _embedder()
        assert await e.embed_texts([]) == []

    @pytest.mark.asyncio
    async def test_empty_data_rejected(self):
        e = _embedder(SimpleNamespace(data=[]))
        with pytest.raises(EmbeddingError, match="Invalid response"):
            await e.embed_query("VAT")

    @pytest.mark.asyncio
    async def test_empty_vector_rejected(self):
        e = _embedder(_response([]))
        with pytest.raises(EmbeddingError):
            await e.embed_query("VAT")

    @pytest.mark.asyncio
    async def test_wrong_dimensions_rejected(self):
        e = _embedder(_response([0.1, 0.2]))
        with pytest.raises(EmbeddingError, match="3-dim"):
            await e.embed_query("VAT")

    @pytest.mark.asyncio
    async def test_count_mismatch_rejected(self):
        e = _embedder(_response([1, 0, 0]))
        with pytest.raises(EmbeddingError, match="Expected 2"):
            await e.embed_texts(["a", "b"])

    @pytest.mark.asyncio
    async def test_sdk_error_wrapped(self):
        e = _embedder(error=RuntimeError("quota"))
        with pytest.raises(EmbeddingError, match="quota"):
            await e.embed_query("VAT")
