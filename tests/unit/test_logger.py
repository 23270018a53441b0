"""Tests for structlog helpers."""

from __future__ import annotations

from typing import Any

import pytest
import structlog

from badgerelay.utils.logger import bind_request_id, log_duration, unbind_request_id


class _RecordingLogger:
    def __init__(self) -> None:
        self.records: list[tuple[str, str, dict[str, Any]]] = []

    def _record(self, level: str) -> Any:
        def log(event: str, **kw: Any) -> None:
            self.records.append((level, event, kw))

        return log

    def __getattr__(self, level: str) -> Any:
        return self._record(level)


def _merged() -> dict[str, Any]:
    return structlog.contextvars.merge_contextvars(None, "info", {"event": "x"})  # type: ignore[arg-type]


class TestRequestIdBinding:
    def test_bound_request_id_is_merged_into_events(self) -> None:
        bind_request_id("01TESTREQUEST")
        try:
            event = _merged()
        finally:
            unbind_request_id()
        assert event["request_id"] == "01TESTREQUEST"

    def test_unbind_removes_request_id(self) -> None:
        bind_request_id("01TESTREQUEST")
        unbind_request_id()
        assert "request_id" not in _merged()

    def test_unbind_without_bind_is_harmless(self) -> None:
        unbind_request_id()
        assert "request_id" not in structlog.contextvars.get_contextvars()


class TestLogDuration:
    def test_fast_operation_logged_at_debug(self) -> None:
        recorder = _RecordingLogger()
        with log_duration("github_api_call", recorder, slow_ms=10_000, path="/x"):  # type: ignore[arg-type]
            pass
        level, event, kw = recorder.records[0]
        assert level == "debug"
        assert event == "github_api_call completed"
        assert kw["path"] == "/x"
        assert kw["duration_ms"] >= 0

    def test_slow_operation_logged_at_warning(self) -> None:
        recorder = _RecordingLogger()
        with log_duration("github_api_call", recorder, slow_ms=-1):  # type: ignore[arg-type]
            pass
        assert recorder.records[0][0] == "warning"

    def test_failure_logged_at_error_and_reraised(self) -> None:
        recorder = _RecordingLogger()
        with pytest.raises(ValueError):
            with log_duration("github_api_call", recorder):  # type: ignore[arg-type]
                raise ValueError("bad")
        assert len(recorder.records) == 1
        level, event, kw = recorder.records[0]
        assert level == "error"
        assert event == "github_api_call failed"
        assert kw["error"] == "bad"
