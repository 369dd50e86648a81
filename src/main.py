# src/main.py — v1
"""CLI entry point: serve, ask, ingest, cache-stats, cache-clear.

Usage:
    corpusqa serve [--host HOST] [--port PORT]
    corpusqa ask "<question>" [--web]
    corpusqa ingest
    corpusqa cache-stats
    corpusqa cache-clear

Exit codes: 0 ok, 1 error, 2 no relevant information, 130 interrupted.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys

from corpusqa.config.settings import ConfigurationError, Settings, load_settings
from corpusqa.version import __version__

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_NO_INFO = 2
EXIT_INTERRUPTED = 130


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if not hasattr(args, "func"):
        parser.print_help()
        return EXIT_ERROR

    try:
        settings = load_settings()
    except (ConfigurationError, ValueError) as exc:
        print(f"Invalid configuration: {exc}", file=sys.stderr)
        return EXIT_ERROR

    _setup_logging(settings, args.verbose, server=args.command == "serve")

    try:
        return asyncio.run(args.func(args, settings))
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return EXIT_INTERRUPTED
    except Exception as exc:
        logger.error("Fatal error: %s", exc, exc_info=args.verbose)
        return EXIT_ERROR


def _build_parser() -> argparse.ArgumentParser:
    """Build CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="corpusqa",
        description=f"corpusqa v{__version__} - question answering over a crawled site",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command")

    # --- serve ---
    p_serve = subparsers.add_parser("serve", help="Run the HTTP API and ingestion schedule")
    p_serve.add_argument("--host", default=None, help="Bind address (default: HOST setting)")
    p_serve.add_argument("--port", type=int, default=None, help="Port (default: PORT setting)")
    p_serve.add_argument(
        "--no-schedule", action="store_true",
        help="Do not run scheduled ingestion",
    )
    p_serve.set_defaults(func=_cmd_serve)

    # --- ask ---
    p_ask = subparsers.add_parser("ask", help="Answer a single question")
    p_ask.add_argument("question", help="Question text")
    p_ask.add_argument(
        "--web", action="store_true",
        help="Let the model search the web instead of the indexed corpus",
    )
    p_ask.set_defaults(func=_cmd_ask)

    # --- ingest ---
    p_ingest = subparsers.add_parser("ingest", help="Run one ingestion pass now")
    p_ingest.set_defaults(func=_cmd_ingest)

    # --- cache ---
    p_stats = subparsers.add_parser("cache-stats", help="Show answer cache statistics")
    p_stats.set_defaults(func=_cmd_cache_stats)
    p_clear = subparsers.add_parser("cache-clear", help="Remove all cached answers")
    p_clear.set_defaults(func=_cmd_cache_clear)

    return parser


async def _cmd_serve(args: argparse.Namespace, settings: Settings) -> int:
    """Run the API server until interrupted."""
    import uvicorn

    from corpusqa.api.facade import QAService
    from corpusqa.ingestion.scheduler import IngestionScheduler
    from corpusqa.server.app import create_app

    service = QAService.from_settings(settings)
    scheduler = None
    if settings.ingestion_schedule_enabled and not args.no_schedule:
        scheduler = IngestionScheduler(
            service.run_ingestion,
            schedule=settings.ingestion_schedule,
            timezone=settings.ingestion_timezone,
            run_initial=not settings.skip_initial_scrape,
        )

    app = create_app(service, scheduler=scheduler)
    config = uvicorn.Config(
        app,
        host=args.host or settings.host,
        port=args.port or settings.port,
        log_config=None,
    )
    logger.info("Server listening on %s:%d", config.host, config.port)
    await uvicorn.Server(config).serve()
    return EXIT_OK


async def _cmd_ask(args: argparse.Namespace, settings: Settings) -> int:
    """Answer one question and print it."""
    from corpusqa.api.facade import QAService
    from corpusqa.core.errors import InvalidQuestionError, NoRelevantInfoError

    service = QAService.from_settings(settings)
    try:
        await service.start()
        if args.web:
            result = await service.answer_question_with_web(args.question)
        else:
            result = await service.answer_question(args.question)
    except InvalidQuestionError as exc:
        logger.error("%s", exc)
        return EXIT_ERROR
    except NoRelevantInfoError as exc:
        print(str(exc), file=sys.stderr)
        return EXIT_NO_INFO
    finally:
        await service.close()

    print(result.answer)
    print(f"\nSource: {result.source}{' (cached)' if result.served_from_cache else ''}")
    return EXIT_OK


async def _cmd_ingest(args: argparse.Namespace, settings: Settings) -> int:
    """Run a single ingestion pass and print its counters."""
    from corpusqa.api.facade import QAService

    service = QAService.from_settings(settings)
    try:
        await service.start()
        report = await service.run_ingestion()
    finally:
        await service.close()

    print("\nIngestion complete:")
    print(f"  Links found:  {report.total_links}")
    print(f"  Processed:    {report.processed}")
    print(f"  Skipped:      {report.skipped}")
    print(f"  Empty:        {report.empty}")
    print(f"  Errors:       {report.errored}")
    print(f"  Duration:     {report.duration_seconds:.1f}s")
    return EXIT_OK


async def _cmd_cache_stats(args: argparse.Namespace, settings: Settings) -> int:
    from corpusqa.api.facade import QAService

    service = QAService.from_settings(settings)
    try:
        stats = await service.cache_stats()
    finally:
        await service.close()

    print(f"Hits:   {stats.hits}")
    print(f"Misses: {stats.misses}")
    print(f"Size:   {stats.size}")
    return EXIT_OK


async def _cmd_cache_clear(args: argparse.Namespace, settings: Settings) -> int:
    from corpusqa.api.facade import QAService

    service = QAService.from_settings(settings)
    try:
        await service.clear_cache()
    finally:
        await service.close()
    print("Cache cleared successfully")
    return EXIT_OK


def _setup_logging(settings: Settings, verbose: bool, server: bool = False) -> None:
    """Configure logging. One-shot commands log as text to stderr; serve also
    routes uvicorn's loggers through the service handlers.
    """
    from corpusqa.logging.logger import setup_logging

    setup_logging(
        level="DEBUG" if verbose else settings.log_level,
        log_format=settings.log_format if server else "text",
        log_file=str(settings.log_file) if settings.log_file else None,
        rotation=settings.log_rotation,
        retention=settings.log_retention,
        stream=None if server else sys.stderr,
        adopt=("uvicorn", "uvicorn.error", "uvicorn.access") if server else (),
    )


if __name__ == "__main__":
    sys.exit(main())
