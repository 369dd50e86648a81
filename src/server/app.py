# src/server/app.py — v1
"""FastAPI transport over QAService.

Maps InvalidQuestionError -> 400, NoRelevantInfoError -> 404 and
ProcessingError -> 500. Error bodies are ``{"error": message}``; causes
stay in the logs.
"""

from __future__ import annotations

import logging
import time
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

import psutil
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from corpusqa.api.models import (
    AskRequest,
    AskResponse,
    CacheClearResponse,
    CacheStatsResponse,
    HealthResponse,
    MetricsResponse,
)
from corpusqa.core.errors import (
    InvalidQuestionError,
    NoRelevantInfoError,
    ProcessingError,
)
from corpusqa.core.models import AskResult, utc_now
from corpusqa.version import __version__

if TYPE_CHECKING:
    from corpusqa.api.facade import QAService
    from corpusqa.ingestion.scheduler import IngestionScheduler

logger = logging.getLogger(__name__)

INVALID_QUESTION_MESSAGE = "Invalid request. Please provide a question as a string."
NO_INFO_MESSAGE = "No relevant information found to answer your question."
PROCESSING_MESSAGE = "Failed to process your question"


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def _to_response(result: AskResult) -> dict:
    body = AskResponse(
        answer=result.answer,
        source=result.source,
        timestamp=result.timestamp,
        cached=True if result.served_from_cache else None,
    )
    return body.model_dump(mode="json", exclude_none=True)


def _uptime(process: psutil.Process) -> float:
    return round(time.time() - process.create_time(), 3)


def create_app(
    service: QAService,
    scheduler: IngestionScheduler | None = None,
) -> FastAPI:
    """Build the application.

    Args:
        service: Started (or startable) service; the lifespan starts and
            closes it.
        scheduler: Optional ingestion scheduler started with the app.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        await service.start()
        if scheduler is not None:
            scheduler.start()
        logger.info("Server ready")
        try:
            yield
        finally:
            if scheduler is not None:
                await scheduler.shutdown()
            await service.close()

    app = FastAPI(title="corpusqa", version=__version__, lifespan=lifespan)
    process = psutil.Process()

    @app.exception_handler(RequestValidationError)
    async def invalid_body(request: Request, exc: RequestValidationError) -> JSONResponse:
        logger.warning("Invalid request to %s", request.url.path)
        return _error(400, INVALID_QUESTION_MESSAGE)

    async def _ask(question: object, web: bool) -> JSONResponse | dict:
        try:
            if web:
                result = await service.answer_question_with_web(question)
            else:
                result = await service.answer_question(question)
        except InvalidQuestionError:
            logger.warning("Invalid question received")
            return _error(400, INVALID_QUESTION_MESSAGE)
        except NoRelevantInfoError:
            return _error(404, NO_INFO_MESSAGE)
        except ProcessingError:
            return _error(500, PROCESSING_MESSAGE)
        return _to_response(result)

    @app.post("/api/ask")
    async def ask(body: AskRequest):
        return await _ask(body.question, web=False)

    @app.post("/api/ask-gpt")
    async def ask_gpt(body: AskRequest):
        return await _ask(body.question, web=True)

    @app.get("/health", response_model=HealthResponse)
    async def health():
        return HealthResponse(timestamp=utc_now(), uptime=_uptime(process))

    @app.get("/metrics")
    async def metrics():
        try:
            with process.oneshot():
                memory = process.memory_info()._asdict()
                cpu = process.cpu_times()._asdict()
                uptime = _uptime(process)
        except psutil.Error as e:
            logger.error("Error fetching metrics: %s", e)
            return _error(500, "Failed to retrieve metrics")
        body = MetricsResponse(
            timestamp=utc_now(),
            uptime=uptime,
            memory={k: int(v) for k, v in memory.items()},
            cpu={k: float(v) for k, v in cpu.items()},
        )
        return body.model_dump(mode="json")

    @app.get("/api/cache/stats", response_model=CacheStatsResponse)
    async def cache_stats():
        stats = await service.cache_stats()
        return CacheStatsResponse(stats=stats, timestamp=utc_now())

    @app.post("/api/cache/clear", response_model=CacheClearResponse)
    async def cache_clear():
        await service.clear_cache()
        logger.info("Cache cleared via API request")
        return CacheClearResponse(timestamp=utc_now())

    return app
