# src/api/models.py — v1
"""HTTP request/response bodies for the question-answering API."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel

from corpusqa.cache.models import CacheStats


class AskRequest(BaseModel):
    """Body of /api/ask and /api/ask-gpt.

    ``question`` is left untyped so that a wrong type reaches question
    validation and gets the same 400 as a blank one.
    """

    question: Any = None


class AskResponse(BaseModel):
    answer: str
    source: str
    timestamp: datetime
    cached: bool | None = None


class HealthResponse(BaseModel):
    status: str = "ok"
    timestamp: datetime
    uptime: float


class MetricsResponse(HealthResponse):
    memory: dict[str, int]
    cpu: dict[str, float]


class CacheStatsResponse(BaseModel):
    stats: CacheStats
    timestamp: datetime


class CacheClearResponse(BaseModel):
    message: str = "Cache cleared successfully"
    timestamp: datetime
