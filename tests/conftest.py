# tests/conftest.py — v1
"""Shared test fixtures for all unit tests.

Provides fake embedding/LLM clients, a fake page fetcher, a broken cache
store and ready-made records. No external dependencies: all I/O is faked.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timedelta, timezone

import pytest
import pytest_asyncio

from corpusqa.cache.answer_cache import AnswerCache
from corpusqa.cache.base_cache_store import BaseCacheStore
from corpusqa.cache.memory_store import MemoryCacheStore
from corpusqa.config.settings import Settings
from corpusqa.core.errors import PageFetchError
from corpusqa.core.models import ContentRecord
from corpusqa.ingestion.crawler.base_page_fetcher import (
    DEFAULT_TEXT_SELECTORS,
    BasePageFetcher,
    PageDocument,
)
from corpusqa.llm.base_client import BaseLLMClient
from corpusqa.llm.models import LLMResponse, Message
from corpusqa.rag.embeddings.base_embedder import BaseEmbedder
from corpusqa.rag.vector_store.memory_store import MemoryVectorStore

DIMS = 4
NOW = datetime(2026, 3, 2, 12, 0, tzinfo=timezone.utc)


# === FAKES ===


class FakeEmbedder(BaseEmbedder):
    """Deterministic 4-dim vectors; known texts can be pinned to a vector."""

    def __init__(self, vectors: dict[str, list[float]] | None = None) -> None:
        self.vectors = vectors or {}
        self.calls: list[str] = []
        self.closed = False

    async def embed_texts(self, texts: list[str]) -> list[list[float]]:
        return [await self.embed_query(t) for t in texts]

    async def embed_query(self, query: str) -> list[float]:
        self.calls.append(query)
        if query in self.vectors:
            return list(self.vectors[query])
        seed = float(sum(map(ord, query)) % 97 + 1)
        return [seed, 1.0, 0.5, 0.25]

    async def close(self) -> None:
        self.closed = True

    @property
    def dimensions(self) -> int:
        return DIMS

    @property
    def provider_name(self) -> str:
        return "fake"

    @property
    def model_name(self) -> str:
        return "fake-embed"


class FakeLLM(BaseLLMClient):
    """Returns canned text; records every call."""

    def __init__(
        self,
        content: str = "Generated answer",
        web_content: str = '{"content": "Web answer", "links": [], "title": "T", "keywords": []}',
        error: Exception | None = None,
    ) -> None:
        self.content = content
        self.web_content = web_content
        self.error = error
        self.calls: list[dict] = []
        self.web_calls: list[str] = []
        self.closed = False

    async def complete(
        self,
        messages: list[Message],
        system: str | None = None,
        max_tokens: int = 1000,
        temperature: float = 0.3,
    ) -> LLMResponse:
        self.calls.append({
            "messages": messages,
            "system": system,
            "max_tokens": max_tokens,
            "temperature": temperature,
        })
        if self.error is not None:
            raise self.error
        return LLMResponse(content=self.content, model="fake", provider="fake")

    async def complete_with_web_search(
        self, question: str, instructions: str | None = None
    ) -> LLMResponse:
        self.web_calls.append(question)
        if self.error is not None:
            raise self.error
        return LLMResponse(content=self.web_content, model="fake", provider="fake")

    async def close(self) -> None:
        self.closed = True

    @property
    def supports_web_search(self) -> bool:
        return True

    @property
    def provider_name(self) -> str:
        return "fake"


class FakePageFetcher(BasePageFetcher):
    """Serves pages from a dict of url -> (text, links). Unknown urls fail."""

    def __init__(
        self,
        pages: dict[str, str] | None = None,
        sitemap: tuple[str, list[str]] | None = None,
        failing: set[str] | None = None,
    ) -> None:
        self.pages = pages or {}
        self.sitemap_url, self.sitemap_links = sitemap or ("", [])
        self.failing = failing or set()
        self.loaded: list[str] = []
        self.opened = 0
        self.closed = 0

    async def open(self) -> None:
        self.opened += 1

    async def close(self) -> None:
        self.closed += 1

    async def load(self, url: str, timeout: float) -> PageDocument:
        self.loaded.append(url)
        if url in self.failing:
            raise PageFetchError(url, "HTTP 500")
        if url == self.sitemap_url:
            return PageDocument(url=url, final_url=url, status=200, html="")
        if url not in self.pages:
            raise PageFetchError(url, "HTTP 404")
        return PageDocument(url=url, final_url=url, status=200, html=self.pages[url])

    def extract_text(
        self, page: PageDocument, selectors: tuple[str, ...] = DEFAULT_TEXT_SELECTORS
    ) -> str:
        return page.html.strip()

    def extract_links(self, page: PageDocument, domain_prefix: str) -> list[str]:
        return [u for u in self.sitemap_links if u.startswith(domain_prefix)]


class BrokenCacheStore(BaseCacheStore):
    """Every operation raises, like an unreachable Redis."""

    async def get_string(self, key: str) -> str | None:
        raise ConnectionError("cache down")

    async def set_string_with_expiry(self, key: str, value: str, ttl_seconds: int) -> None:
        raise ConnectionError("cache down")

    async def list_keys_by_prefix(self, prefix: str) -> list[str]:
        raise ConnectionError("cache down")

    async def delete_keys(self, keys: list[str]) -> int:
        raise ConnectionError("cache down")

    @property
    def backend_name(self) -> str:
        return "broken"


class FakeClock:
    """Monotonic clock advanced by hand."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


# === FIXTURES ===


def make_record(
    url: str,
    content: str = "content",
    vector: list[float] | None = None,
    age: timedelta = timedelta(0),
    record_id: str | None = None,
) -> ContentRecord:
    return ContentRecord(
        id=record_id or str(uuid.uuid4()),
        url=url,
        description=f"About {url}",
        content=content,
        vector=vector or [1.0, 0.0, 0.0, 0.0],
        updated_at=NOW - age,
    )


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        vector_db_type="memory",
        cache_backend="memory",
        embedding_dimensions=DIMS,
        ingestion_delay_seconds=0,
        sitemap_url="https://www.example.gov/sitemap/",
        crawl_domain_prefix="https://www.example.gov/",
    )


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def cache(clock: FakeClock) -> AnswerCache:
    return AnswerCache(MemoryCacheStore(clock=clock), ttl_seconds=3600)


@pytest.fixture
def embedder() -> FakeEmbedder:
    return FakeEmbedder()


@pytest.fixture
def llm() -> FakeLLM:
    return FakeLLM()


@pytest_asyncio.fixture
async def vector_store() -> MemoryVectorStore:
    store = MemoryVectorStore()
    await store.ensure_collection("docs", DIMS)
    return store
