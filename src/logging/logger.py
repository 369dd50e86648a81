# src/logging/logger.py — v1
"""Logger factory with JSON and text formatters."""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Iterable, TextIO

from corpusqa.logging.context import get_context

SERVICE_NAME = "corpusqa"


def _event_time(record: logging.LogRecord) -> datetime:
    return datetime.fromtimestamp(record.created, tz=timezone.utc)


class JsonFormatter(logging.Formatter):
    """One JSON object per line.

    Request, run, url and step context fields are top-level keys; per-call
    fields go under ``data``.
    """

    def format(self, record: logging.LogRecord) -> str:
        log_entry: dict[str, Any] = {
            "timestamp": _event_time(record).isoformat(timespec="milliseconds"),
            "level": record.levelname.lower(),
            "service": SERVICE_NAME,
            "logger": record.name,
            "message": record.getMessage(),
        }
        log_entry.update(get_context().as_dict())

        data = getattr(record, "data", None)
        if data:
            log_entry["data"] = data

        if record.exc_info and record.exc_info[1] is not None:
            log_entry["error"] = str(record.exc_info[1])
            log_entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_entry, default=str)


class TextFormatter(logging.Formatter):
    """Human-readable text formatter for one-shot CLI commands."""

    def format(self, record: logging.LogRecord) -> str:
        ctx = get_context()
        parts = [
            _event_time(record).strftime("%Y-%m-%d %H:%M:%S"),
            f"[{record.levelname:8s}]",
            record.name,
        ]
        if ctx.request_id:
            parts.append(f"[req={ctx.request_id}]")
        if ctx.run_id:
            parts.append(f"[run={ctx.run_id}]")
        if ctx.step:
            parts.append(f"({ctx.step})")
        if ctx.url:
            parts.append(f"<{ctx.url}>")
        parts.append(f"- {record.getMessage()}")
        data = getattr(record, "data", None)
        if data:
            parts.append(json.dumps(data, default=str))
        line = " ".join(parts)
        if record.exc_info and record.exc_info[1] is not None:
            line += "\n" + self.formatException(record.exc_info)
        return line


def get_logger(name: str) -> logging.Logger:
    """Get a named logger. Configuration is applied by setup_logging()."""
    return logging.getLogger(f"corpusqa.{name}")


_QUIET_LOGGERS = ("httpx", "httpcore", "openai", "apscheduler")


def setup_logging(
    level: str = "INFO",
    log_format: str = "json",
    log_file: str | None = None,
    rotation: str = "10MB",
    retention: int = 30,
    stream: TextIO | None = None,
    adopt: Iterable[str] = (),
) -> None:
    """Configure the corpusqa logger tree.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR).
        log_format: Output format ("json" or "text").
        log_file: Path to log file (None = console only).
        rotation: Max file size before rotation (e.g. "10MB").
        retention: Number of rotated files to keep.
        stream: Console stream. Defaults to stdout; CLI commands that print
            results pass stderr.
        adopt: Third-party loggers (e.g. ``uvicorn``) that should share the
            same handlers instead of their own configuration.
    """
    formatter: logging.Formatter = (
        JsonFormatter() if log_format == "json" else TextFormatter()
    )
    handlers: list[logging.Handler] = []

    console_handler = logging.StreamHandler(stream or sys.stdout)
    console_handler.setFormatter(formatter)
    handlers.append(console_handler)

    if log_file:
        from corpusqa.logging.handlers import create_rotating_handler

        file_handler = create_rotating_handler(
            log_file, rotation=rotation, retention=retention
        )
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    log_level = getattr(logging, level.upper(), logging.INFO)
    for name in (SERVICE_NAME, *adopt):
        target = logging.getLogger(name)
        target.setLevel(log_level)
        # Re-init replaces handlers rather than stacking them
        target.handlers[:] = handlers
    for name in adopt:
        logging.getLogger(name).propagate = False

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
