# src/ingestion/pipeline.py — v1
"""Ingestion run: discover -> filter -> fetch -> describe -> embed -> upsert.

URLs are processed one at a time. A failure on one URL is logged, counted
and never stops the run; the fetcher session is closed on every exit path.
Records are appended under fresh ids, so a refreshed page leaves its
earlier records in place and readers pick the newest by ``updated_at``.
"""

from __future__ import annotations

import asyncio
import logging
import uuid
from datetime import datetime
from typing import TYPE_CHECKING, Callable, Literal

from corpusqa.core.errors import IngestionInProgressError
from corpusqa.core.models import ContentRecord, IngestionReport, utc_now
from corpusqa.ingestion.link_discovery import discover_links
from corpusqa.logging.context import set_run_context, set_step_context

if TYPE_CHECKING:
    from corpusqa.ingestion.crawler.base_page_fetcher import BasePageFetcher
    from corpusqa.ingestion.describer import Describer
    from corpusqa.ingestion.freshness import FreshnessChecker
    from corpusqa.rag.embeddings.base_embedder import BaseEmbedder
    from corpusqa.rag.vector_store.base_vector_store import BaseVectorStore

logger = logging.getLogger(__name__)

Outcome = Literal["processed", "skipped", "empty", "errored"]


class IngestionPipeline:
    """Crawl the corpus site and index stale pages.

    Args:
        fetcher: Page fetcher; opened at run start and closed at teardown.
        embedder: Embeds page descriptions.
        vector_store: Destination of new records.
        describer: Generates the description embedded for each page.
        freshness: Decides which URLs can be skipped.
        collection: Vector store collection name.
        sitemap_url: Crawl root.
        domain_prefix: Scope of followed links.
        page_timeout: Per-page navigation timeout (seconds).
        sitemap_timeout: Navigation timeout for the crawl root (seconds).
        delay: Pause after each processed URL (seconds).
        clock: Source of ``now`` for freshness checks and record timestamps.
    """

    def __init__(
        self,
        fetcher: BasePageFetcher,
        embedder: BaseEmbedder,
        vector_store: BaseVectorStore,
        describer: Describer,
        freshness: FreshnessChecker,
        collection: str,
        sitemap_url: str,
        domain_prefix: str,
        page_timeout: float = 30.0,
        sitemap_timeout: float = 60.0,
        delay: float = 0.5,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._fetcher = fetcher
        self._embedder = embedder
        self._vector_store = vector_store
        self._describer = describer
        self._freshness = freshness
        self._collection = collection
        self._sitemap_url = sitemap_url
        self._domain_prefix = domain_prefix
        self._page_timeout = page_timeout
        self._sitemap_timeout = sitemap_timeout
        self._delay = delay
        self._clock = clock
        self._lock = asyncio.Lock()

    @property
    def is_running(self) -> bool:
        return self._lock.locked()

    async def run(self) -> IngestionReport:
        """Execute one full ingestion run.

        Raises:
            IngestionInProgressError: If a run is already in progress.
            asyncio.CancelledError: If the run is cancelled (after teardown).
        """
        if self._lock.locked():
            raise IngestionInProgressError("An ingestion run is already in progress")

        async with self._lock:
            run_id = uuid.uuid4().hex[:12]
            set_run_context(run_id)
            report = IngestionReport(root_url=self._sitemap_url, started_at=self._clock())
            logger.info("Starting ingestion run %s from %s", run_id, self._sitemap_url)

            try:
                try:
                    set_step_context("discovery", self._sitemap_url)
                    await self._fetcher.open()
                    links = await discover_links(
                        self._fetcher,
                        self._sitemap_url,
                        self._domain_prefix,
                        timeout=self._sitemap_timeout,
                    )
                except asyncio.CancelledError:
                    raise
                except Exception as e:
                    logger.error("Link discovery failed: %s", e, exc_info=True)
                    return report

                report.total_links = len(links)
                for index, url in enumerate(links.urls, start=1):
                    logger.info("Processing %d/%d: %s", index, len(links), url)
                    outcome = await self._process_url(url)
                    _count(report, outcome)
                    if outcome == "processed" and self._delay > 0:
                        await asyncio.sleep(self._delay)
            except asyncio.CancelledError:
                report.aborted = True
                logger.warning("Ingestion run %s cancelled", run_id)
                raise
            finally:
                await self._teardown(report)

            return report

    async def _process_url(self, url: str) -> Outcome:
        try:
            set_step_context("freshness", url)
            if await self._freshness.is_fresh(url, now=self._clock()):
                logger.info("Skipping %s - updated within the last %s", url, self._freshness.window)
                return "skipped"

            set_step_context("fetch", url)
            page = await self._fetcher.load(url, timeout=self._page_timeout)
            content = self._fetcher.extract_text(page)
            if not content:
                logger.warning("No content found for %s", url)
                return "empty"

            set_step_context("describe", url)
            description = await self._describer.describe(content, url)

            set_step_context("embed", url)
            vector = await self._embedder.embed_query(description)

            set_step_context("upsert", url)
            record = ContentRecord(
                id=str(uuid.uuid4()),
                url=url,
                description=description,
                content=content,
                vector=vector,
                updated_at=self._clock(),
            )
            await self._vector_store.upsert(self._collection, [record])
        except Exception as e:
            logger.error("Error processing %s: %s", url, e, exc_info=True)
            return "errored"

        logger.info("Successfully processed and stored %s", url)
        return "processed"

    async def _teardown(self, report: IngestionReport) -> None:
        set_step_context("teardown")
        try:
            await self._fetcher.close()
        except Exception as e:
            logger.error("Error closing page fetcher: %s", e)
        report.finished_at = self._clock()
        set_step_context(None)
        logger.info(
            "Ingestion finished: %d processed, %d skipped, %d errored, %d empty of %d links",
            report.processed, report.skipped, report.errored, report.empty, report.total_links,
            extra={"data": report.model_dump(mode="json")},
        )


def _count(report: IngestionReport, outcome: Outcome) -> None:
    setattr(report, outcome, getattr(report, outcome) + 1)
