# src/rag/retriever/pipeline.py — v1
"""Answering pipeline: cache -> embed -> search -> generate -> cache.

Two modes share one cache key space:
  - answer(): retrieval over the indexed corpus in the vector store;
  - answer_with_web(): the LLM provider retrieves live web context itself.

Only InvalidQuestionError and NoRelevantInfoError are distinguished;
every other failure reaches the caller as ProcessingError with the cause
chained and logged.
"""

from __future__ import annotations

import logging
import time
import uuid
from typing import TYPE_CHECKING, Awaitable, Callable

from corpusqa.cache.models import CachedAnswer
from corpusqa.core.errors import (
    GenerationError,
    InvalidQuestionError,
    NoRelevantInfoError,
    ProcessingError,
)
from corpusqa.core.models import AskResult, utc_now
from corpusqa.llm.models import Message, parse_web_answer
from corpusqa.llm.prompts import (
    ANSWER_SYSTEM_PROMPT,
    WEB_ANSWER_INSTRUCTIONS,
    build_answer_prompt,
)
from corpusqa.logging.context import set_request_context, set_step_context
from corpusqa.rag.retriever.context_assembler import ContextAssembler

if TYPE_CHECKING:
    from corpusqa.cache.answer_cache import AnswerCache
    from corpusqa.llm.base_client import BaseLLMClient
    from corpusqa.rag.embeddings.base_embedder import BaseEmbedder
    from corpusqa.rag.vector_store.base_vector_store import BaseVectorStore

logger = logging.getLogger(__name__)

DEFAULT_TOP_K = 3
FALLBACK_ANSWER = "Sorry, I could not generate an answer."


def validate_question(question: object) -> str:
    """Return the question if it is a non-blank string.

    Raises:
        InvalidQuestionError: For non-strings and blank strings.
    """
    if not isinstance(question, str) or not question.strip():
        raise InvalidQuestionError(
            "Invalid request. Please provide a question as a string."
        )
    return question


class AnsweringPipeline:
    """Answer one question at a time; safe to run many concurrently.

    Args:
        cache: Answer cache (fail-open).
        embedder: Embeds the question.
        vector_store: Corpus to search.
        llm: Answer generation client.
        collection: Vector store collection name.
        top_k: Number of records retrieved as context.
        temperature: Sampling temperature for answers.
        max_tokens: Answer token limit.
        web_source_label: Source attributed to web-mode answers.
    """

    def __init__(
        self,
        cache: AnswerCache,
        embedder: BaseEmbedder,
        vector_store: BaseVectorStore,
        llm: BaseLLMClient,
        collection: str,
        top_k: int = DEFAULT_TOP_K,
        temperature: float = 0.3,
        max_tokens: int = 1000,
        web_source_label: str = "podatki.gov.pl",
    ) -> None:
        self._cache = cache
        self._embedder = embedder
        self._vector_store = vector_store
        self._llm = llm
        self._collection = collection
        self._top_k = top_k
        self._temperature = temperature
        self._max_tokens = max_tokens
        self._web_source_label = web_source_label
        self._assembler = ContextAssembler()

    async def answer(self, question: object) -> AskResult:
        """Answer from the indexed corpus."""
        return await self._run(question, self._answer_from_corpus, mode="corpus")

    async def answer_with_web(self, question: object) -> AskResult:
        """Answer via the provider's own web retrieval."""
        return await self._run(question, self._answer_from_web, mode="web")

    async def _run(
        self,
        question: object,
        produce: Callable[[str, dict[str, float]], Awaitable[tuple[str, str]]],
        mode: str,
    ) -> AskResult:
        start = time.perf_counter()
        timings: dict[str, float] = {}

        text = validate_question(question)
        set_request_context(uuid.uuid4().hex[:12])
        timings["validation"] = _ms(start)
        logger.info("Received question: %s", text)

        t0 = time.perf_counter()
        set_step_context("cache_check")
        cached = await self._cache.get(text)
        timings["cache_check"] = _ms(t0)
        if cached is not None:
            timings["total"] = _ms(start)
            logger.info(
                "Question answered from cache in %.0fms", timings["total"],
                extra={"data": {"question": text, "timings": timings, "cached": True, "mode": mode}},
            )
            return AskResult(**cached.model_dump(), served_from_cache=True)

        logger.debug("Cache miss, generating answer")
        try:
            answer, source = await produce(text, timings)
        except NoRelevantInfoError:
            timings["total"] = _ms(start)
            logger.warning(
                "No relevant information found for question",
                extra={"data": {"question": text, "timings": timings}},
            )
            raise
        except Exception as e:
            timings["total"] = _ms(start)
            logger.error(
                "Error processing question: %s", e,
                exc_info=True,
                extra={"data": {"question": text, "timings": timings, "mode": mode}},
            )
            raise ProcessingError() from e

        t0 = time.perf_counter()
        set_step_context("cache_write")
        result = CachedAnswer(answer=answer, source=source, timestamp=utc_now())
        await self._cache.set(text, result)
        timings["cache_write"] = _ms(t0)
        timings["total"] = _ms(start)

        logger.info(
            "Question answered in %.0fms", timings["total"],
            extra={"data": {"question": text, "timings": timings, "source": source, "cached": False, "mode": mode}},
        )
        return AskResult(**result.model_dump(), served_from_cache=False)

    async def _answer_from_corpus(
        self, question: str, timings: dict[str, float]
    ) -> tuple[str, str]:
        t0 = time.perf_counter()
        set_step_context("embedding")
        vector = await self._embedder.embed_query(question)
        timings["embedding"] = _ms(t0)

        t0 = time.perf_counter()
        set_step_context("vector_search")
        results = await self._vector_store.search(
            self._collection, vector, top_k=self._top_k
        )
        timings["vector_search"] = _ms(t0)
        if not results:
            raise NoRelevantInfoError(question)

        context = self._assembler.assemble(results)

        t0 = time.perf_counter()
        set_step_context("answer_generation")
        response = await self._llm.complete(
            [Message(role="user", content=build_answer_prompt(question, context.text))],
            system=ANSWER_SYSTEM_PROMPT,
            max_tokens=self._max_tokens,
            temperature=self._temperature,
        )
        timings["answer_generation"] = _ms(t0)
        return response.content or FALLBACK_ANSWER, context.source

    async def _answer_from_web(
        self, question: str, timings: dict[str, float]
    ) -> tuple[str, str]:
        t0 = time.perf_counter()
        set_step_context("answer_generation")
        response = await self._llm.complete_with_web_search(
            question, instructions=WEB_ANSWER_INSTRUCTIONS
        )
        timings["answer_generation"] = _ms(t0)
        if not response.content:
            raise GenerationError("Web search returned no text")

        parsed = parse_web_answer(response.content)
        if parsed is not None:
            logger.debug("Web answer '%s' cites %d links", parsed.title, len(parsed.links))
        return response.content, self._web_source_label


def _ms(since: float) -> float:
    return round((time.perf_counter() - since) * 1000, 1)
