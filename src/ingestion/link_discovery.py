# src/ingestion/link_discovery.py — v1
"""Sitemap link discovery.

Loads the crawl root, collects in-domain anchor targets and deduplicates
them by exact string, keeping first-seen order.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from corpusqa.core.models import LinkSet

if TYPE_CHECKING:
    from corpusqa.ingestion.crawler.base_page_fetcher import BasePageFetcher

logger = logging.getLogger(__name__)


def dedupe_preserving_order(urls: list[str]) -> list[str]:
    """Drop exact-string duplicates, keeping the first occurrence."""
    return list(dict.fromkeys(urls))


async def discover_links(
    fetcher: BasePageFetcher,
    root_url: str,
    domain_prefix: str,
    timeout: float = 60.0,
) -> LinkSet:
    """Collect the crawl frontier from root_url.

    Args:
        fetcher: Open page fetcher.
        root_url: Sitemap page to read.
        domain_prefix: Only links starting with this prefix are kept.
        timeout: Navigation timeout for the root page, in seconds.

    Raises:
        PageFetchError: If the root page cannot be loaded.
    """
    logger.info("Navigating to sitemap %s", root_url)
    page = await fetcher.load(root_url, timeout=timeout)
    found = fetcher.extract_links(page, domain_prefix)
    urls = dedupe_preserving_order(found)
    logger.info("Found %d unique links (%d before dedup)", len(urls), len(found))
    return LinkSet(root_url=root_url, urls=urls, total_found=len(found))
