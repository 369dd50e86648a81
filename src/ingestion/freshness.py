# src/ingestion/freshness.py — v1
"""Recency filter: skip URLs whose newest record is inside the freshness window."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import TYPE_CHECKING

from corpusqa.core.models import utc_now

if TYPE_CHECKING:
    from corpusqa.rag.vector_store.base_vector_store import BaseVectorStore

logger = logging.getLogger(__name__)

DEFAULT_FRESHNESS = timedelta(hours=4)


class FreshnessChecker:
    """Decide whether a URL was processed recently enough to skip.

    Args:
        vector_store: Store holding the corpus records.
        collection: Collection to query.
        window: Records younger than this are fresh.
    """

    def __init__(
        self,
        vector_store: BaseVectorStore,
        collection: str,
        window: timedelta = DEFAULT_FRESHNESS,
    ) -> None:
        self._store = vector_store
        self._collection = collection
        self._window = window

    @property
    def window(self) -> timedelta:
        return self._window

    async def last_updated(self, url: str) -> datetime | None:
        """Timestamp of the newest record for url, None if there is none."""
        records = await self._store.find_by_field(
            self._collection, "url", url, limit=1, newest_first=True
        )
        if not records:
            return None
        return records[0].updated_at

    async def is_fresh(self, url: str, now: datetime | None = None) -> bool:
        """True if url has a record updated less than ``window`` ago.

        A failed lookup is logged and reported as stale, so the URL is
        processed again rather than silently dropped.
        """
        now = now or utc_now()
        try:
            updated_at = await self.last_updated(url)
        except Exception as e:
            logger.warning("Freshness lookup failed for %s, treating as stale: %s", url, e)
            return False

        if updated_at is None:
            return False
        age = now - updated_at
        fresh = age < self._window
        if fresh:
            logger.debug("%s updated %.1fh ago", url, age.total_seconds() / 3600)
        return fresh
