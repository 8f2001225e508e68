"""LogSink Protocol — the logging backend the middleware writes to.

The middleware never reaches for a global logger; it is handed a sink at
construction. Unit tests inject a recording fake that conforms to this Protocol.
"""

import logging
from typing import Any, Protocol

from src.reqlog.record import Severity

_LEVELS = {
    Severity.INFO: logging.INFO,
    Severity.WARNING: logging.WARNING,
    Severity.ERROR: logging.ERROR,
}


class LogSink(Protocol):
    def emit(self, severity: Severity, message: str, fields: dict[str, Any]) -> None: ...


class StdlibLogSink:
    """Concrete LogSink backed by a stdlib `logging.Logger`.

    Structured fields travel on the LogRecord as `record.fields`, where
    the logfmt formatter (see logging_config) picks them up.
    """

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self._logger = logger or logging.getLogger("reqlog.request")

    @property
    def logger(self) -> logging.Logger:
        return self._logger

    def emit(self, severity: Severity, message: str, fields: dict[str, Any]) -> None:
        # message is pre-formatted; pass it as an argument so a literal "%" in
        # the path is never re-interpreted by logging
        self._logger.log(_LEVELS[severity], "%s", message, extra={"fields": fields})
