# src/core/errors.py — v1
"""Exception hierarchy shared by the answering and ingestion pipelines.

Only InvalidQuestionError, NoRelevantInfoError and ProcessingError cross the
public boundary. UpstreamError subclasses are raised by adapters and wrapped
into ProcessingError by the answering pipeline.
"""

from __future__ import annotations


class CorpusQAError(Exception):
    """Base class for all corpusqa errors."""


class InvalidQuestionError(CorpusQAError, ValueError):
    """Question is missing, not a string, or blank."""


class NoRelevantInfoError(CorpusQAError):
    """Similarity search returned no records for the question."""

    def __init__(self, question: str) -> None:
        self.question = question
        super().__init__("No relevant information found to answer the question")


class ProcessingError(CorpusQAError):
    """Opaque failure of a single answering request.

    The underlying cause is chained as ``__cause__`` and logged; callers
    only see the generic message.
    """

    def __init__(self, message: str = "Failed to process the question") -> None:
        super().__init__(message)


class UpstreamError(CorpusQAError):
    """An embedding, generation or vector-store call failed."""


class EmbeddingError(UpstreamError):
    """Embedding provider returned an error or a malformed/empty vector."""


class GenerationError(UpstreamError):
    """Language model call failed or returned no usable text."""


class VectorStoreError(UpstreamError):
    """Vector store operation failed."""


class IngestionInProgressError(CorpusQAError):
    """An ingestion run was requested while another one is still running."""


class PageFetchError(CorpusQAError):
    """A page could not be loaded (HTTP error, timeout, closed session)."""

    def __init__(self, url: str, reason: str) -> None:
        self.url = url
        self.reason = reason
        super().__init__(f"Failed to load {url}: {reason}")
