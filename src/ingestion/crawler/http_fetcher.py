# src/ingestion/crawler/http_fetcher.py — v1
"""aiohttp + BeautifulSoup page fetcher.

Fetches server-rendered HTML; pages that need JavaScript to render their
content are out of reach of this fetcher.
"""

from __future__ import annotations

import asyncio
import logging
from urllib.parse import urljoin

import aiohttp
from bs4 import BeautifulSoup

from corpusqa.core.errors import PageFetchError
from corpusqa.ingestion.crawler.base_page_fetcher import (
    DEFAULT_TEXT_SELECTORS,
    BasePageFetcher,
    PageDocument,
)

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = "corpusqa-crawler/0.1"


class HttpPageFetcher(BasePageFetcher):
    """Page fetcher over a single aiohttp session.

    Args:
        user_agent: User-Agent header sent with every request.
        max_connections: Connection pool size (fetching is sequential, so small).
    """

    def __init__(
        self,
        user_agent: str = DEFAULT_USER_AGENT,
        max_connections: int = 2,
    ) -> None:
        self.user_agent = user_agent
        self.max_connections = max_connections
        self.session: aiohttp.ClientSession | None = None

    async def open(self) -> None:
        if self.session is not None:
            return
        connector = aiohttp.TCPConnector(limit=self.max_connections)
        self.session = aiohttp.ClientSession(
            connector=connector,
            headers={"User-Agent": self.user_agent},
        )
        logger.debug("Browsing session opened")

    async def close(self) -> None:
        if self.session is not None:
            await self.session.close()
            self.session = None
            logger.debug("Browsing session closed")

    async def load(self, url: str, timeout: float) -> PageDocument:
        if self.session is None:
            raise PageFetchError(url, "browsing session is not open")

        try:
            async with self.session.get(
                url,
                timeout=aiohttp.ClientTimeout(total=timeout),
                allow_redirects=True,
            ) as response:
                if response.status >= 400:
                    raise PageFetchError(url, f"HTTP {response.status}")
                html = await response.text(errors="replace")
                final_url = str(response.url)
                status = response.status
        except asyncio.TimeoutError as e:
            raise PageFetchError(url, f"timed out after {timeout:.0f}s") from e
        except aiohttp.ClientError as e:
            raise PageFetchError(url, str(e) or type(e).__name__) from e

        return PageDocument(
            url=url,
            final_url=final_url,
            status=status,
            html=html,
            dom=BeautifulSoup(html, "html.parser"),
        )

    def extract_text(
        self,
        page: PageDocument,
        selectors: tuple[str, ...] = DEFAULT_TEXT_SELECTORS,
    ) -> str:
        soup = page.dom if page.dom is not None else BeautifulSoup(page.html, "html.parser")
        for selector in selectors:
            node = soup.select_one(selector)
            if node is not None:
                return node.get_text(" ", strip=True)
        return ""

    def extract_links(self, page: PageDocument, domain_prefix: str) -> list[str]:
        soup = page.dom if page.dom is not None else BeautifulSoup(page.html, "html.parser")
        links: list[str] = []
        for a in soup.select("a[href]"):
            href = a.get("href", "").strip()
            if not href or href.startswith(("mailto:", "tel:", "javascript:")):
                continue
            absolute = urljoin(page.final_url, href)
            # In-page anchors are never followed, even toward other pages
            if "#" in absolute:
                continue
            if absolute.startswith(domain_prefix):
                links.append(absolute)
        return links
