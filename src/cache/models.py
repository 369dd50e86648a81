# src/cache/models.py — v1
"""Answer cache models: CachedAnswer, CacheStats."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel


class CachedAnswer(BaseModel):
    """Answer triple stored under a question fingerprint.

    Serialized as JSON into the backing store and returned unchanged on a hit.
    """

    answer: str
    source: str
    timestamp: datetime


class CacheStats(BaseModel):
    """Lifetime hit/miss counters plus a point-in-time entry count."""

    hits: int = 0
    misses: int = 0
    size: int = 0
