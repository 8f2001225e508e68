"""Request logging middleware.

Emits one structured record per request after the downstream app has
finished, at a severity picked from the status code:

    ERROR   [2024-01-01T00:00:00Z] 503 /upstream (12ms)  request_id=… hostname=… status_code=503 …
    WARNING [2024-01-01T00:00:00Z] 404 /users/42 (3ms)
    INFO    [2024-01-01T00:00:00Z] 200 /health (7ms)

Requests whose *route template* is in `skip_paths` pass straight through.

Written as a plain ASGI middleware (rather than BaseHTTPMiddleware) so the
body byte count is exact and the response messages are forwarded untouched.
"""

import logging
import socket
import time
from collections.abc import Callable
from datetime import datetime, timezone

from starlette.datastructures import Headers
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from src.reqlog.config import RequestLoggerConfig, RequestLoggerParams
from src.reqlog.errors import collect_errors, with_exception
from src.reqlog.record import (
    RequestLogFields,
    elapsed_ms,
    format_message,
    severity_for_status,
)
from src.reqlog.routing import resolve_route_pattern
from src.reqlog.sink import LogSink, StdlibLogSink

logger = logging.getLogger("reqlog.middleware")

REQUEST_ID_HEADER = "X-Request-ID"


class RequestLoggerMiddleware:
    def __init__(
        self,
        app: ASGIApp,
        params: RequestLoggerParams | None = None,
        sink: LogSink | None = None,
        hostname_lookup: Callable[[], str] = socket.gethostname,
    ) -> None:
        self.app = app
        self.config = RequestLoggerConfig.build(params, hostname_lookup)
        self.sink: LogSink = sink or StdlibLogSink()

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        if self.config.should_skip(resolve_route_pattern(scope)):
            await self.app(scope, receive, send)
            return

        start_ns = time.perf_counter_ns()
        request_id = Headers(scope=scope).get(REQUEST_ID_HEADER, "")
        path = scope["path"]
        status_code: int | None = None
        data_length = 0

        async def send_wrapper(message: Message) -> None:
            nonlocal status_code, data_length
            if message["type"] == "http.response.start":
                status_code = message["status"]
            elif message["type"] == "http.response.body":
                data_length += len(message.get("body", b""))
            await send(message)

        raised: BaseException | None = None
        try:
            await self.app(scope, receive, send_wrapper)
        except BaseException as exc:
            raised = exc
            raise
        finally:
            end_ns = time.perf_counter_ns()
            try:
                # no response started: the server error handler will answer 500
                final_status = status_code if status_code is not None else 500
                errors = collect_errors(scope)
                if raised is not None:
                    errors = with_exception(errors, raised)

                fields = RequestLogFields(
                    request_id=request_id,
                    hostname=self.config.hostname,
                    status_code=final_status,
                    latency=elapsed_ms(start_ns, end_ns),
                    data_length=data_length,
                    errors=errors,
                )
                self._emit(path, fields)
            except Exception:
                logger.exception("request log emission failed for %s", path)

    def _emit(self, path: str, fields: RequestLogFields) -> None:
        message = format_message(datetime.now(timezone.utc), fields.status_code, path, fields.latency)
        self.sink.emit(severity_for_status(fields.status_code), message, fields.as_dict())
