"""Logging setup for the application.

Loggers stay stdlib (`logging.getLogger(...)`); structlog's ProcessorFormatter
renders every record as logfmt. Request records carry their structured
fields on `record.fields`, which are lifted into the line:

    timestamp=2024-01-01T00:00:00.000123Z level=info logger=reqlog.request event="[2024-01-01T00:00:00Z] 200 /health (7ms)" request_id= hostname=web-1 status_code=200 latency=7 data_length=15
"""

import logging
import sys

import structlog
from structlog.typing import EventDict, WrappedLogger

_KEY_ORDER = ["timestamp", "level", "logger", "event"]


def lift_record_fields(_: WrappedLogger, __: str, event_dict: EventDict) -> EventDict:
    """Copy `record.fields` (set via `extra={"fields": ...}`) into the event dict."""
    record = event_dict.get("_record")
    fields = getattr(record, "fields", None)
    if fields:
        for key, value in fields.items():
            event_dict.setdefault(key, value)
    return event_dict


def build_formatter() -> structlog.stdlib.ProcessorFormatter:
    return structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=[
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            lift_record_fields,
        ],
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            structlog.processors.format_exc_info,
            structlog.processors.LogfmtRenderer(key_order=_KEY_ORDER, drop_missing=True),
        ],
    )


def setup_logging(*, level: int | str = logging.INFO) -> None:
    """Install a stdout handler with the logfmt formatter on the root logger."""
    root = logging.getLogger()
    root.setLevel(level)
    # Avoid duplicate handlers on repeated calls (e.g. tests, reload)
    if any(isinstance(h.formatter, structlog.stdlib.ProcessorFormatter) for h in root.handlers):
        return

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(build_formatter())
    root.addHandler(handler)
