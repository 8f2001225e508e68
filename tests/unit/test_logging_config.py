"""Tests for reqlog.logging_config and reqlog.sink."""

import logging

import pytest
import structlog

from src.reqlog.logging_config import build_formatter, setup_logging
from src.reqlog.record import Severity
from src.reqlog.sink import StdlibLogSink


def _record(msg: str, fields: dict | None = None, level: int = logging.INFO) -> logging.LogRecord:
    record = logging.LogRecord("reqlog.request", level, __file__, 1, msg, None, None)
    if fields is not None:
        record.fields = fields
    return record


class TestFormatter:
    def test_leading_keys_in_order(self) -> None:
        line = build_formatter().format(_record("hello"))
        assert line.startswith("timestamp=")
        assert " level=info logger=reqlog.request event=hello" in line

    def test_fields_appended(self) -> None:
        fields = {"request_id": "req-1", "hostname": "web-1", "status_code": 200, "latency": 7}
        line = build_formatter().format(_record("m", fields))
        assert line.endswith(" request_id=req-1 hostname=web-1 status_code=200 latency=7")

    def test_message_with_spaces_quoted(self) -> None:
        line = build_formatter().format(
            _record("[2024-01-01T00:00:00Z] 404 /users/42 (3ms)", level=logging.WARNING)
        )
        assert ' level=warning ' in line
        assert 'event="[2024-01-01T00:00:00Z] 404 /users/42 (3ms)"' in line

    def test_fields_do_not_override_leading_keys(self) -> None:
        line = build_formatter().format(_record("m", {"level": "bogus", "status_code": 500}))
        assert " level=info " in line
        assert "bogus" not in line


class TestSetupLogging:
    def test_idempotent(self) -> None:
        root = logging.getLogger()
        saved_handlers, saved_level = root.handlers[:], root.level
        try:
            root.handlers = []
            setup_logging(level="WARNING")
            setup_logging(level="WARNING")
            ours = [
                h for h in root.handlers
                if isinstance(h.formatter, structlog.stdlib.ProcessorFormatter)
            ]
            assert len(ours) == 1
            assert root.level == logging.WARNING
        finally:
            root.handlers = saved_handlers
            root.setLevel(saved_level)


class TestStdlibLogSink:
    @pytest.mark.parametrize(
        ("severity", "level"),
        [
            (Severity.INFO, logging.INFO),
            (Severity.WARNING, logging.WARNING),
            (Severity.ERROR, logging.ERROR),
        ],
    )
    def test_severity_maps_to_level(
        self, caplog: pytest.LogCaptureFixture, severity: Severity, level: int
    ) -> None:
        sink = StdlibLogSink(logging.getLogger("reqlog.test"))
        with caplog.at_level(logging.INFO, logger="reqlog.test"):
            sink.emit(severity, "[2024-01-01T00:00:00Z] 200 /health (7ms)", {"latency": 7})
        assert len(caplog.records) == 1
        assert caplog.records[0].levelno == level
        assert caplog.records[0].fields == {"latency": 7}

    def test_percent_in_message_not_interpolated(self, caplog: pytest.LogCaptureFixture) -> None:
        sink = StdlibLogSink(logging.getLogger("reqlog.test"))
        with caplog.at_level(logging.INFO, logger="reqlog.test"):
            sink.emit(Severity.INFO, "[t] 200 /a%sb (1ms)", {})
        assert caplog.records[0].getMessage() == "[t] 200 /a%sb (1ms)"

    def test_default_logger_name(self) -> None:
        assert StdlibLogSink().logger.name == "reqlog.request"
