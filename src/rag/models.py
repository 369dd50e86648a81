# src/rag/models.py — v1
"""Retrieval models: SearchResult, RetrievedContext."""

from __future__ import annotations

from pydantic import BaseModel, Field

from corpusqa.core.models import ContentRecord


class SearchResult(BaseModel):
    """One similarity-search hit. Lists are ordered by descending score."""

    record: ContentRecord
    score: float


class RetrievedContext(BaseModel):
    """Context blob handed to answer generation, plus its attributed source."""

    text: str
    source: str
    urls: list[str] = Field(default_factory=list)
