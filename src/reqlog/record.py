"""Request log record — fixed-shape fields, severity buckets and message format.

One record per logged request:
    fields:  request_id, hostname, status_code, latency, data_length[, errors]
    message: "[2024-01-01T00:00:00Z] 200 /health (7ms)"

The message format is parsed by downstream log tooling; keep it byte-exact.
"""

from collections.abc import Sized
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any

MESSAGE_FORMAT = "[%s] %d %s (%dms)"

_NS_PER_MS = 1_000_000


class Severity(str, Enum):
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


def severity_for_status(status_code: int) -> Severity:
    """>=500 → ERROR, 400-499 → WARNING, anything else → INFO."""
    if status_code >= 500:
        return Severity.ERROR
    if status_code >= 400:
        return Severity.WARNING
    return Severity.INFO


def elapsed_ms(start_ns: int, end_ns: int) -> int:
    """Whole milliseconds between two perf_counter_ns readings, truncated."""
    return max(end_ns - start_ns, 0) // _NS_PER_MS


def format_rfc3339(timestamp: datetime) -> str:
    """Render as RFC3339 in UTC with second precision, e.g. 2024-01-01T00:00:00Z.

    Naive datetimes are taken to already be UTC.
    """
    if timestamp.tzinfo is None:
        timestamp = timestamp.replace(tzinfo=timezone.utc)
    return timestamp.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def format_message(timestamp: datetime, status_code: int, path: str, latency_ms: int) -> str:
    return MESSAGE_FORMAT % (format_rfc3339(timestamp), status_code, path, latency_ms)


def _is_empty(errors: Any) -> bool:
    if errors is None:
        return True
    return isinstance(errors, Sized) and len(errors) == 0


@dataclass(frozen=True, slots=True)
class RequestLogFields:
    request_id: str
    hostname: str
    status_code: int
    latency: int
    data_length: int
    # opaque: whatever the error accumulator held, never unpacked
    errors: Any = None

    def as_dict(self) -> dict[str, Any]:
        """Structured fields in emission order; `errors` only when non-empty."""
        fields: dict[str, Any] = {
            "request_id": self.request_id,
            "hostname": self.hostname,
            "status_code": self.status_code,
            "latency": self.latency,
            "data_length": self.data_length,
        }
        if not _is_empty(self.errors):
            fields["errors"] = self.errors
        return fields
