# src/rag/vector_store/memory_store.py — v1
"""In-process vector store (VECTOR_DB_TYPE=memory).

Brute-force similarity with numpy. Meant for tests and local development;
nothing is persisted.
"""

from __future__ import annotations

import logging

import numpy as np

from corpusqa.core.errors import VectorStoreError
from corpusqa.core.models import ContentRecord
from corpusqa.rag.models import SearchResult
from corpusqa.rag.vector_store.base_vector_store import BaseVectorStore, Distance

logger = logging.getLogger(__name__)


class MemoryVectorStore(BaseVectorStore):
    """Dict of collections, each mapping point id -> ContentRecord."""

    def __init__(self) -> None:
        self._collections: dict[str, dict[str, ContentRecord]] = {}
        self._meta: dict[str, tuple[int, Distance]] = {}

    def _get(self, collection: str) -> dict[str, ContentRecord]:
        try:
            return self._collections[collection]
        except KeyError:
            raise VectorStoreError(f"Collection not found: {collection}") from None

    async def ensure_collection(
        self, collection: str, dimensions: int, distance: Distance = "cosine"
    ) -> bool:
        if collection in self._collections:
            return False
        self._collections[collection] = {}
        self._meta[collection] = (dimensions, distance)
        logger.info("Created %s collection in memory store", collection)
        return True

    async def upsert(self, collection: str, records: list[ContentRecord]) -> None:
        points = self._get(collection)
        dimensions, _ = self._meta[collection]
        for record in records:
            if len(record.vector) != dimensions:
                raise VectorStoreError(
                    f"Vector size {len(record.vector)} does not match collection size {dimensions}"
                )
            points[record.id] = record.model_copy(deep=True)

    async def search(
        self, collection: str, vector: list[float], top_k: int = 3
    ) -> list[SearchResult]:
        points = list(self._get(collection).values())
        if not points or top_k <= 0:
            return []

        _, distance = self._meta[collection]
        matrix = np.asarray([p.vector for p in points], dtype=np.float64)
        query = np.asarray(vector, dtype=np.float64)
        scores = _score(matrix, query, distance)

        order = np.argsort(-scores, kind="stable")[:top_k]
        return [
            SearchResult(record=points[i], score=float(scores[i])) for i in order
        ]

    async def find_by_field(
        self,
        collection: str,
        field: str,
        value: str,
        limit: int = 1,
        newest_first: bool = True,
    ) -> list[ContentRecord]:
        matches = [
            r for r in self._get(collection).values()
            if r.payload().get(field) == value
        ]
        if newest_first:
            matches.sort(key=lambda r: r.updated_at, reverse=True)
        return matches[:limit]

    async def count(self, collection: str) -> int:
        return len(self._get(collection))

    @property
    def provider_name(self) -> str:
        return "memory"


def _score(matrix: np.ndarray, query: np.ndarray, distance: Distance) -> np.ndarray:
    """Higher is more similar for every metric."""
    if distance == "dot":
        return matrix @ query
    if distance == "euclid":
        return -np.linalg.norm(matrix - query, axis=1)
    norms = np.linalg.norm(matrix, axis=1) * np.linalg.norm(query)
    norms = np.maximum(norms, 1e-10)
    return (matrix @ query) / norms
