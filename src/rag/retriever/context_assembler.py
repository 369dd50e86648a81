# src/rag/retriever/context_assembler.py — v1
"""Context assembler: join retrieved page contents into one context blob.

Results arrive sorted by similarity (highest first) and keep that order.
The top result's url is the attributed source.
"""

from __future__ import annotations

from corpusqa.rag.models import RetrievedContext, SearchResult

CONTEXT_SEPARATOR = "\n\n"
UNKNOWN_SOURCE = "Unknown source"
MISSING_CONTENT = "No content available"


class ContextAssembler:
    """Build a RetrievedContext from ranked search results."""

    def assemble(self, results: list[SearchResult]) -> RetrievedContext:
        parts = [r.record.content or MISSING_CONTENT for r in results]
        text = CONTEXT_SEPARATOR.join(parts)

        source = results[0].record.url if results and results[0].record.url else UNKNOWN_SOURCE
        return RetrievedContext(
            text=text,
            source=source,
            urls=[r.record.url for r in results],
        )
