# src/core/models.py — v1
"""Shared Pydantic domain models used across modules.

No module redefines these types; all imports come from core.models.
"""

from __future__ import annotations

from datetime import datetime, timezone

from pydantic import BaseModel, Field


def utc_now() -> datetime:
    """Timezone-aware current time. Single clock used for all timestamps."""
    return datetime.now(timezone.utc)


# === CORPUS ===


class ContentRecord(BaseModel):
    """One indexed page of the corpus.

    ``url`` is the natural key, but several records may exist per url;
    only those with ``updated_at`` inside the freshness window are current.
    """

    id: str
    url: str
    description: str
    content: str
    vector: list[float] = Field(default_factory=list)
    updated_at: datetime

    def payload(self) -> dict[str, str]:
        """Vector-store payload (everything but id and vector)."""
        return {
            "url": self.url,
            "description": self.description,
            "content": self.content,
            "updated_at": self.updated_at.isoformat(),
        }


class LinkSet(BaseModel):
    """URLs discovered from one crawl root, deduplicated, first-seen order."""

    root_url: str
    urls: list[str] = Field(default_factory=list)
    total_found: int = 0

    def __len__(self) -> int:
        return len(self.urls)


# === ANSWERING ===


class AskResult(BaseModel):
    """Outcome of a successful answering request."""

    answer: str
    source: str
    timestamp: datetime
    served_from_cache: bool = False


# === INGESTION ===


class IngestionReport(BaseModel):
    """Run-level counters emitted at teardown."""

    root_url: str
    total_links: int = 0
    processed: int = 0
    skipped: int = 0
    errored: int = 0
    empty: int = 0
    aborted: bool = False
    started_at: datetime = Field(default_factory=utc_now)
    finished_at: datetime | None = None

    @property
    def duration_seconds(self) -> float:
        if self.finished_at is None:
            return 0.0
        return (self.finished_at - self.started_at).total_seconds()


EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def parse_timestamp(raw: object) -> datetime | None:
    """Parse an ISO 8601 payload timestamp into an aware UTC datetime.

    Accepts the ``Z`` suffix written by JavaScript's toISOString(). Naive
    values are taken as UTC. Returns None when unparseable.
    """
    if isinstance(raw, datetime):
        parsed = raw
    elif isinstance(raw, str) and raw:
        text = raw[:-1] + "+00:00" if raw.endswith("Z") else raw
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None
    else:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed
