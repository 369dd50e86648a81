# tests/unit/ingestion/test_scheduler.py — v1
"""Tests for ingestion/scheduler.py: APScheduler wiring and tick error handling."""

from __future__ import annotations

import asyncio
from unittest.mock import AsyncMock

import pytest

from corpusqa.core.errors import IngestionInProgressError
from corpusqa.core.models import IngestionReport
from corpusqa.ingestion.scheduler import JOB_ID, IngestionScheduler


def _report() -> IngestionReport:
    return IngestionReport(root_url="https://www.example.gov/sitemap/", processed=1)


class TestIngestionScheduler:
    @pytest.mark.asyncio
    async def test_start_registers_cron_job_and_runs_initial(self):
        run = AsyncMock(return_value=_report())
        scheduler = IngestionScheduler(run, schedule="0 */4 * * *", timezone="Europe/Warsaw")

        scheduler.start()
        try:
            assert scheduler.running is True
            job = scheduler._scheduler.get_job(JOB_ID)
            assert job is not None
            assert job.next_run_time is not None
            await asyncio.sleep(0)
            await asyncio.sleep(0)
            run.assert_awaited_once()
        finally:
            await scheduler.shutdown()
        assert scheduler.running is False

    @pytest.mark.asyncio
    async def test_skip_initial_run(self):
        run = AsyncMock(return_value=_report())
        scheduler = IngestionScheduler(run, run_initial=False)
        scheduler.start()
        await asyncio.sleep(0)
        await scheduler.shutdown()
        run.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_tick_returns_report(self):
        run = AsyncMock(return_value=_report())
        scheduler = IngestionScheduler(run)
        report = await scheduler.tick()
        assert report.processed == 1

    @pytest.mark.asyncio
    async def test_tick_skips_overlapping_run(self):
        run = AsyncMock(side_effect=IngestionInProgressError("busy"))
        assert await IngestionScheduler(run).tick() is None

    @pytest.mark.asyncio
    async def test_tick_survives_failure(self):
        run = AsyncMock(side_effect=RuntimeError("boom"))
        assert await IngestionScheduler(run).tick() is None

    @pytest.mark.asyncio
    async def test_shutdown_cancels_initial_run(self):
        started = asyncio.Event()
        cancelled = asyncio.Event()

        async def slow_run() -> IngestionReport:
            started.set()
            try:
                await asyncio.sleep(60)
            except asyncio.CancelledError:
                cancelled.set()
                raise
            return _report()

        scheduler = IngestionScheduler(slow_run)
        scheduler.start()
        await started.wait()
        await scheduler.shutdown()
        assert cancelled.is_set()

    @pytest.mark.asyncio
    async def test_shutdown_without_start(self):
        await IngestionScheduler(AsyncMock()).shutdown()
