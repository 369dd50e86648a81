# src/ingestion/crawler/base_page_fetcher.py — v1
"""Abstract page-fetching interface used by the ingestion pipeline.

A fetcher owns one browsing session between open() and close(). The
pipeline calls close() unconditionally at teardown, so close() must be
safe to call on a session that was never opened.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any

# Content-first preference: main region, then article, then the whole body.
DEFAULT_TEXT_SELECTORS: tuple[str, ...] = ("main", "article", "body")


@dataclass
class PageDocument:
    """A loaded page."""

    url: str
    final_url: str
    status: int
    html: str
    dom: Any = field(default=None, repr=False)


class BasePageFetcher(ABC):
    """Unified interface for page fetchers."""

    async def __aenter__(self) -> BasePageFetcher:
        await self.open()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    @abstractmethod
    async def open(self) -> None:
        """Start the browsing session."""

    @abstractmethod
    async def close(self) -> None:
        """Release the browsing session. Idempotent."""

    @abstractmethod
    async def load(self, url: str, timeout: float) -> PageDocument:
        """Load url within timeout seconds.

        Raises:
            PageFetchError: On HTTP errors, timeouts or connection failures.
        """

    @abstractmethod
    def extract_text(
        self,
        page: PageDocument,
        selectors: tuple[str, ...] = DEFAULT_TEXT_SELECTORS,
    ) -> str:
        """Text of the first selector that matches, stripped. '' if none."""

    @abstractmethod
    def extract_links(self, page: PageDocument, domain_prefix: str) -> list[str]:
        """Absolute anchor targets starting with domain_prefix, without fragments."""
