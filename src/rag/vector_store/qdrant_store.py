# src/rag/vector_store/qdrant_store.py — v1
"""Qdrant vector store adapter.

Uses the qdrant-client async SDK for local or cloud vector storage.
Requires: pip install qdrant-client.

Payload layout per point: url, description, content, updated_at (ISO 8601).
``url`` gets a keyword index and ``updated_at`` a datetime index so the
freshness lookup (filter on url, order by updated_at) stays cheap.
"""

from __future__ import annotations

import logging

from corpusqa.core.errors import VectorStoreError
from corpusqa.core.models import EPOCH, ContentRecord, parse_timestamp
from corpusqa.rag.models import SearchResult
from corpusqa.rag.vector_store.base_vector_store import BaseVectorStore, Distance

logger = logging.getLogger(__name__)


class QdrantStore(BaseVectorStore):
    """Vector store backed by Qdrant."""

    def __init__(
        self,
        url: str | None = None,
        api_key: str | None = None,
        path: str | None = None,
    ) -> None:
        try:
            from qdrant_client import AsyncQdrantClient
        except ImportError as e:
            raise ImportError(
                "qdrant-client package required: pip install qdrant-client"
            ) from e

        if url:
            self._client = AsyncQdrantClient(url=url, api_key=api_key)
        elif path:
            self._client = AsyncQdrantClient(path=path)
        else:
            self._client = AsyncQdrantClient(location=":memory:")

    async def ensure_collection(
        self, collection: str, dimensions: int, distance: Distance = "cosine"
    ) -> bool:
        from qdrant_client.models import Distance as QDistance
        from qdrant_client.models import PayloadSchemaType, VectorParams

        distances = {
            "cosine": QDistance.COSINE,
            "dot": QDistance.DOT,
            "euclid": QDistance.EUCLID,
        }
        try:
            created = False
            if not await self._client.collection_exists(collection):
                await self._client.create_collection(
                    collection_name=collection,
                    vectors_config=VectorParams(size=dimensions, distance=distances[distance]),
                )
                created = True
                logger.info("Created %s collection in Qdrant", collection)
            # Collections created elsewhere may lack these; re-creating is a no-op
            await self._client.create_payload_index(
                collection_name=collection,
                field_name="url",
                field_schema=PayloadSchemaType.KEYWORD,
            )
            await self._client.create_payload_index(
                collection_name=collection,
                field_name="updated_at",
                field_schema=PayloadSchemaType.DATETIME,
            )
            logger.info("Ensured payload indexes for 'url', 'updated_at' in %s", collection)
        except Exception as e:
            raise VectorStoreError(f"Error initializing Qdrant collection {collection}: {e}") from e
        return created

    async def upsert(self, collection: str, records: list[ContentRecord]) -> None:
        from qdrant_client.models import PointStruct

        points = [
            PointStruct(id=r.id, vector=r.vector, payload=r.payload()) for r in records
        ]
        try:
            await self._client.upsert(collection_name=collection, points=points)
        except Exception as e:
            raise VectorStoreError(f"Error storing {len(points)} points: {e}") from e

    async def search(
        self, collection: str, vector: list[float], top_k: int = 3
    ) -> list[SearchResult]:
        """Query by embedding similarity via query_points()."""
        try:
            response = await self._client.query_points(
                collection_name=collection,
                query=vector,
                limit=top_k,
                with_payload=True,
            )
        except Exception as e:
            raise VectorStoreError(f"Error searching for relevant information: {e}") from e

        return [
            SearchResult(
                record=_to_record(hit.id, hit.payload or {}),
                score=float(hit.score) if hit.score is not None else 0.0,
            )
            for hit in response.points
        ]

    async def find_by_field(
        self,
        collection: str,
        field: str,
        value: str,
        limit: int = 1,
        newest_first: bool = True,
    ) -> list[ContentRecord]:
        from qdrant_client.models import (
            Direction,
            FieldCondition,
            Filter,
            MatchValue,
            OrderBy,
        )

        kwargs: dict = {
            "collection_name": collection,
            "scroll_filter": Filter(
                must=[FieldCondition(key=field, match=MatchValue(value=value))]
            ),
            "limit": limit,
            "with_payload": True,
        }
        if newest_first:
            kwargs["order_by"] = OrderBy(key="updated_at", direction=Direction.DESC)
        try:
            points, _ = await self._client.scroll(**kwargs)
        except Exception as e:
            raise VectorStoreError(f"Error looking up {field}={value!r}: {e}") from e

        return [_to_record(p.id, p.payload or {}) for p in points]

    async def count(self, collection: str) -> int:
        result = await self._client.count(collection_name=collection, exact=True)
        return result.count

    async def close(self) -> None:
        await self._client.close()

    @property
    def provider_name(self) -> str:
        return "qdrant"


def _to_record(point_id: object, payload: dict) -> ContentRecord:
    """Payload -> ContentRecord. An unparseable updated_at reads as the epoch (stale)."""
    updated_at = parse_timestamp(payload.get("updated_at"))
    if updated_at is None:
        logger.warning(
            "Invalid or missing updated_at payload for URL: %s", payload.get("url")
        )
        updated_at = EPOCH
    return ContentRecord(
        id=str(point_id),
        url=payload.get("url", ""),
        description=payload.get("description", ""),
        content=payload.get("content", "No content available"),
        updated_at=updated_at,
    )
