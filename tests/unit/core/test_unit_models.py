# tests/unit/core/test_unit_models.py — v1
"""Tests for core/models.py and core/errors.py."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from corpusqa.core.errors import (
    CorpusQAError,
    EmbeddingError,
    InvalidQuestionError,
    NoRelevantInfoError,
    ProcessingError,
    UpstreamError,
)
from corpusqa.core.models import (
    ContentRecord,
    IngestionReport,
    LinkSet,
    parse_timestamp,
)


class TestParseTimestamp:
    def test_z_suffix(self):
        ts = parse_timestamp("2026-03-01T10:00:00.000Z")
        assert ts == datetime(2026, 3, 1, 10, 0, tzinfo=timezone.utc)

    def test_offset(self):
        ts = parse_timestamp("2026-03-01T12:00:00+02:00")
        assert ts == datetime(2026, 3, 1, 10, 0, tzinfo=timezone.utc)

    def test_naive_is_utc(self):
        ts = parse_timestamp("2026-03-01T10:00:00")
        assert ts.tzinfo == timezone.utc

    def test_datetime_passthrough(self):
        dt = datetime(2026, 3, 1, tzinfo=timezone.utc)
        assert parse_timestamp(dt) is dt

    @pytest.mark.parametrize("raw", [None, "", "yesterday", 12345])
    def test_unparseable(self, raw):
        assert parse_timestamp(raw) is None


class TestContentRecord:
    def test_payload_has_no_id_or_vector(self):
        rec = ContentRecord(
            id="r1",
            url="https://www.example.gov/a",
            description="d",
            content="c",
            vector=[0.1],
            updated_at=datetime(2026, 3, 1, tzinfo=timezone.utc),
        )
        payload = rec.payload()
        assert set(payload) == {"url", "description", "content", "updated_at"}
        assert payload["updated_at"] == "2026-03-01T00:00:00+00:00"


class TestReports:
    def test_linkset_len(self):
        links = LinkSet(root_url="r", urls=["a", "b"], total_found=3)
        assert len(links) == 2

    def test_duration(self):
        start = datetime(2026, 3, 1, tzinfo=timezone.utc)
        report = IngestionReport(root_url="r", started_at=start)
        assert report.duration_seconds == 0.0
        report.finished_at = start + timedelta(seconds=90)
        assert report.duration_seconds == 90.0


class TestErrors:
    def test_invalid_question_is_value_error(self):
        assert issubclass(InvalidQuestionError, ValueError)
        assert issubclass(InvalidQuestionError, CorpusQAError)

    def test_upstream_hierarchy(self):
        assert issubclass(EmbeddingError, UpstreamError)

    def test_no_relevant_info_keeps_question(self):
        err = NoRelevantInfoError("what?")
        assert err.question == "what?"

    def test_processing_error_default_message(self):
        assert str(ProcessingError()) == "Failed to process the question"
