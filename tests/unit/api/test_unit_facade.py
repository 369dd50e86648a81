# tests/unit/api/test_unit_facade.py — v1
"""Tests for api/facade.py: QAService wiring and lifecycle."""

from __future__ import annotations

from unittest.mock import AsyncMock, patch

import pytest

from corpusqa.api.facade import QAService
from corpusqa.cache.answer_cache import AnswerCache
from corpusqa.cache.memory_store import MemoryCacheStore
from corpusqa.core.errors import NoRelevantInfoError
from corpusqa.rag.vector_store.memory_store import MemoryVectorStore
from tests.conftest import FakeEmbedder, FakeLLM, FakePageFetcher, make_record


def _service(settings, **overrides) -> QAService:
    parts = dict(
        settings=settings,
        cache=AnswerCache(MemoryCacheStore()),
        embedder=FakeEmbedder(),
        vector_store=MemoryVectorStore(),
        answer_llm=FakeLLM(content="Answer"),
        description_llm=FakeLLM(content="Description"),
        fetcher=FakePageFetcher(sitemap=(settings.sitemap_url, [])),
    )
    parts.update(overrides)
    return QAService(**parts)


class TestQAServiceLifecycle:
    @pytest.mark.asyncio
    async def test_start_creates_collection(self, settings):
        service = _service(settings)
        await service.start()
        await service.start()
        assert await service._vector_store.count(settings.vector_db_collection) == 0

    @pytest.mark.asyncio
    async def test_close_releases_all_clients(self, settings):
        embedder, answer_llm, description_llm = FakeEmbedder(), FakeLLM(), FakeLLM()
        fetcher = FakePageFetcher()
        service = _service(
            settings,
            embedder=embedder,
            answer_llm=answer_llm,
            description_llm=description_llm,
            fetcher=fetcher,
        )
        await service.close()
        assert embedder.closed and answer_llm.closed and description_llm.closed
        assert fetcher.closed == 1

    @pytest.mark.asyncio
    async def test_close_continues_after_failure(self, settings):
        embedder = FakeEmbedder()
        vector_store = MemoryVectorStore()
        vector_store.close = AsyncMock(side_effect=RuntimeError("boom"))
        service = _service(settings, embedder=embedder, vector_store=vector_store)
        await service.close()
        assert embedder.closed

    def test_from_settings(self, settings):
        with patch("corpusqa.api.facade.create_llm_client", return_value=FakeLLM()) as make_llm:
            service = QAService.from_settings(settings)
        assert make_llm.call_count == 2
        models = [c.args[1] for c in make_llm.call_args_list]
        assert models == [settings.llm_answer_model, settings.llm_description_model]
        assert isinstance(service._vector_store, MemoryVectorStore)
        assert service.settings is settings


class TestQAServiceOperations:
    @pytest.mark.asyncio
    async def test_answer_question(self, settings):
        service = _service(settings)
        await service.start()
        await service._vector_store.upsert(
            settings.vector_db_collection, [make_record("https://www.example.gov/vat/")]
        )
        result = await service.answer_question("What is VAT?")
        assert result.answer == "Answer"
        assert result.source == "https://www.example.gov/vat/"

        stats = await service.cache_stats()
        assert stats.misses == 1
        assert stats.size == 1

        await service.clear_cache()
        assert (await service.cache_stats()).size == 0

    @pytest.mark.asyncio
    async def test_empty_corpus(self, settings):
        service = _service(settings)
        await service.start()
        with pytest.raises(NoRelevantInfoError):
            await service.answer_question("What is VAT?")

    @pytest.mark.asyncio
    async def test_answer_question_with_web(self, settings):
        service = _service(settings)
        result = await service.answer_question_with_web("What is VAT?")
        assert result.source == settings.web_source_label

    @pytest.mark.asyncio
    async def test_run_ingestion_uses_description_client(self, settings):
        prefix = settings.crawl_domain_prefix
        fetcher = FakePageFetcher(
            pages={prefix + "vat/": "VAT text"},
            sitemap=(settings.sitemap_url, [prefix + "vat/"]),
        )
        service = _service(settings, fetcher=fetcher)
        await service.start()

        report = await service.run_ingestion()

        assert report.processed == 1
        records = await service._vector_store.find_by_field(
            settings.vector_db_collection, "url", prefix + "vat/"
        )
        assert records[0].description == "Description"
