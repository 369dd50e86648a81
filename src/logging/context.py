# src/logging/context.py — v1
"""Contextual logging support: attach request_id, run_id, url, step to log records."""

from __future__ import annotations

import contextvars
from dataclasses import dataclass
from typing import Any

# Set per answering request or per ingestion run. asyncio tasks copy the
# current context, so concurrent requests never see each other's values.
_request_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "request_id", default=None
)
_run_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "run_id", default=None
)
_url: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "url", default=None
)
_step: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "step", default=None
)


@dataclass
class LogContext:
    """Immutable snapshot of current logging context."""

    request_id: str | None = None
    run_id: str | None = None
    url: str | None = None
    step: str | None = None

    def as_dict(self) -> dict[str, Any]:
        """Return non-None fields as dict for JSON log injection."""
        return {k: v for k, v in self.__dict__.items() if v is not None}


def get_context() -> LogContext:
    """Snapshot current context variables."""
    return LogContext(
        request_id=_request_id.get(),
        run_id=_run_id.get(),
        url=_url.get(),
        step=_step.get(),
    )


def set_request_context(request_id: str) -> None:
    """Set request-level context (once per answering request)."""
    _request_id.set(request_id)


def set_run_context(run_id: str) -> None:
    """Set ingestion-run context (once per crawl run)."""
    _run_id.set(run_id)


def set_step_context(step: str | None, url: str | None = None) -> None:
    """Set the current pipeline step and, during ingestion, the URL being handled."""
    _step.set(step)
    _url.set(url)


def clear_context() -> None:
    """Reset all context variables."""
    _request_id.set(None)
    _run_id.set(None)
    _url.set(None)
    _step.set(None)
