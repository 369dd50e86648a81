# src/api/facade.py — v1
"""Public API facade: one object owning every client the service needs.

Usage:
    service = QAService.from_settings(load_settings())
    await service.start()
    result = await service.answer_question("What is the VAT rate?")
    await service.close()

Clients are built once by from_settings() (or injected directly in tests)
and released by close(); nothing is created at import time.
"""

from __future__ import annotations

import logging
from datetime import timedelta
from typing import TYPE_CHECKING

from corpusqa.cache.answer_cache import AnswerCache
from corpusqa.cache.cache_factory import create_cache_store
from corpusqa.config.settings import Settings, load_settings
from corpusqa.ingestion.crawler.http_fetcher import HttpPageFetcher
from corpusqa.ingestion.describer import Describer
from corpusqa.ingestion.freshness import FreshnessChecker
from corpusqa.ingestion.pipeline import IngestionPipeline
from corpusqa.llm.client_factory import create_llm_client
from corpusqa.rag.embeddings.embedder_factory import create_embedder
from corpusqa.rag.retriever.pipeline import AnsweringPipeline
from corpusqa.rag.vector_store.vector_store_factory import create_vector_store

if TYPE_CHECKING:
    from corpusqa.cache.models import CacheStats
    from corpusqa.core.models import AskResult, IngestionReport
    from corpusqa.ingestion.crawler.base_page_fetcher import BasePageFetcher
    from corpusqa.llm.base_client import BaseLLMClient
    from corpusqa.rag.embeddings.base_embedder import BaseEmbedder
    from corpusqa.rag.vector_store.base_vector_store import BaseVectorStore

logger = logging.getLogger(__name__)


class QAService:
    """Question answering and corpus ingestion over shared clients.

    Args:
        settings: Application settings.
        cache: Answer cache.
        embedder: Embedding client shared by answering and ingestion.
        vector_store: Corpus store shared by answering and ingestion.
        answer_llm: Client used for answers (corpus and web mode).
        description_llm: Client used for page descriptions. Defaults to
            answer_llm.
        fetcher: Page fetcher for ingestion.
    """

    def __init__(
        self,
        settings: Settings,
        cache: AnswerCache,
        embedder: BaseEmbedder,
        vector_store: BaseVectorStore,
        answer_llm: BaseLLMClient,
        description_llm: BaseLLMClient | None = None,
        fetcher: BasePageFetcher | None = None,
    ) -> None:
        self._settings = settings
        self._cache = cache
        self._embedder = embedder
        self._vector_store = vector_store
        self._answer_llm = answer_llm
        self._description_llm = description_llm or answer_llm
        self._fetcher = fetcher or HttpPageFetcher(user_agent=settings.ingestion_user_agent)
        self._started = False

        collection = settings.vector_db_collection
        self._answering = AnsweringPipeline(
            cache=cache,
            embedder=embedder,
            vector_store=vector_store,
            llm=answer_llm,
            collection=collection,
            top_k=settings.rag_top_k,
            temperature=settings.llm_temperature,
            max_tokens=settings.llm_answer_max_tokens,
            web_source_label=settings.web_source_label,
        )
        self._ingestion = IngestionPipeline(
            fetcher=self._fetcher,
            embedder=embedder,
            vector_store=vector_store,
            describer=Describer(
                self._description_llm,
                max_tokens=settings.llm_description_max_tokens,
                temperature=settings.llm_temperature,
            ),
            freshness=FreshnessChecker(
                vector_store,
                collection,
                window=timedelta(seconds=settings.ingestion_freshness_seconds),
            ),
            collection=collection,
            sitemap_url=settings.sitemap_url,
            domain_prefix=settings.crawl_domain_prefix,
            page_timeout=settings.ingestion_page_timeout_seconds,
            sitemap_timeout=settings.ingestion_sitemap_timeout_seconds,
            delay=settings.ingestion_delay_seconds,
        )

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> QAService:
        """Build every client from configuration."""
        settings = settings or load_settings()
        cache = AnswerCache(
            create_cache_store(settings),
            ttl_seconds=settings.cache_ttl_seconds,
            key_prefix=settings.cache_key_prefix,
            max_size=settings.cache_max_size,
        )
        answer_llm = create_llm_client(
            settings.llm_provider, settings.llm_answer_model, settings
        )
        description_llm = create_llm_client(
            settings.llm_provider, settings.llm_description_model, settings
        )
        return cls(
            settings=settings,
            cache=cache,
            embedder=create_embedder(settings),
            vector_store=create_vector_store(settings),
            answer_llm=answer_llm,
            description_llm=description_llm,
        )

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def ingestion(self) -> IngestionPipeline:
        return self._ingestion

    async def start(self) -> None:
        """Make sure the corpus collection exists. Idempotent."""
        if self._started:
            return
        created = await self._vector_store.ensure_collection(
            self._settings.vector_db_collection,
            self._embedder.dimensions,
            "cosine",
        )
        if created:
            logger.info("Created collection %s", self._settings.vector_db_collection)
        self._started = True

    async def close(self) -> None:
        """Release every client. Failures are logged so the rest still close."""
        closers = [
            ("cache", self._cache.close),
            ("embedder", self._embedder.close),
            ("vector store", self._vector_store.close),
            ("answer llm", self._answer_llm.close),
            ("page fetcher", self._fetcher.close),
        ]
        if self._description_llm is not self._answer_llm:
            closers.append(("description llm", self._description_llm.close))

        for name, close in closers:
            try:
                await close()
            except Exception as e:
                logger.warning("Error closing %s: %s", name, e)
        self._started = False
        logger.info("Service closed")

    # --- Operations ---

    async def answer_question(self, question: object) -> AskResult:
        return await self._answering.answer(question)

    async def answer_question_with_web(self, question: object) -> AskResult:
        return await self._answering.answer_with_web(question)

    async def run_ingestion(self) -> IngestionReport:
        return await self._ingestion.run()

    async def cache_stats(self) -> CacheStats:
        return await self._cache.stats()

    async def clear_cache(self) -> None:
        await self._cache.clear()
