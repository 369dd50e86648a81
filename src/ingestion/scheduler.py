# src/ingestion/scheduler.py — v1
"""Cron-driven ingestion trigger on top of APScheduler's asyncio scheduler.

The pipeline knows nothing about scheduling; this class only decides when
IngestionPipeline.run() is called and keeps failed or overlapping ticks
from killing the scheduler.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger

from corpusqa.core.errors import IngestionInProgressError
from corpusqa.core.models import IngestionReport

logger = logging.getLogger(__name__)

JOB_ID = "corpus_ingestion"


class IngestionScheduler:
    """Run ingestion on a cron schedule, plus once at start-up.

    Args:
        run_ingestion: Coroutine function performing one run.
        schedule: 5-field crontab expression.
        timezone: IANA timezone the schedule is evaluated in.
        run_initial: Start one run in the background when started.
    """

    def __init__(
        self,
        run_ingestion: Callable[[], Awaitable[IngestionReport]],
        schedule: str = "0 */4 * * *",
        timezone: str = "Europe/Warsaw",
        run_initial: bool = True,
    ) -> None:
        self._run_ingestion = run_ingestion
        self._schedule = schedule
        self._timezone = timezone
        self._run_initial = run_initial
        self._scheduler: AsyncIOScheduler | None = None
        self._initial_task: asyncio.Task | None = None

    @property
    def running(self) -> bool:
        return self._scheduler is not None and self._scheduler.running

    def start(self) -> None:
        """Register the cron job and start the scheduler. Needs a running loop."""
        if self.running:
            return
        trigger = CronTrigger.from_crontab(self._schedule, timezone=self._timezone)
        self._scheduler = AsyncIOScheduler(timezone=self._timezone)
        self._scheduler.add_job(
            self.tick,
            trigger,
            id=JOB_ID,
            max_instances=1,
            coalesce=True,
            replace_existing=True,
        )
        self._scheduler.start()
        logger.info("Ingestion scheduled with '%s' (%s)", self._schedule, self._timezone)

        if self._run_initial:
            self._initial_task = asyncio.create_task(self.tick())
            logger.info("Initial ingestion started in the background")

    async def tick(self) -> IngestionReport | None:
        """One scheduled run. Errors are logged; the schedule keeps going."""
        try:
            return await self._run_ingestion()
        except IngestionInProgressError:
            logger.warning("Previous ingestion still running, skipping this tick")
        except Exception as e:
            logger.error("Scheduled ingestion failed: %s", e, exc_info=True)
        return None

    async def shutdown(self) -> None:
        """Stop the scheduler and cancel a still-running initial run."""
        if self._scheduler is not None and self._scheduler.running:
            self._scheduler.shutdown(wait=False)
        self._scheduler = None

        task, self._initial_task = self._initial_task, None
        if task is not None and not task.done():
            task.cancel()
            try:
                await task
            except asyncio.CancelledError:
                logger.info("Initial ingestion cancelled at shutdown")
        logger.info("Ingestion scheduler stopped")
