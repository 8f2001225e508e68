"""Middleware configuration.

RequestLoggerParams is what callers pass in; RequestLoggerConfig is the
immutable form built once at construction and shared read-only by every
request (no locking needed).
"""

import logging
import socket
from collections.abc import Callable
from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict, Field

logger = logging.getLogger("reqlog.config")

UNKNOWN_HOSTNAME = "unknown"


class RequestLoggerParams(BaseModel):
    """Options for RequestLoggerMiddleware."""

    model_config = ConfigDict(frozen=True)

    # route templates to skip logging for, e.g. "/health" or "/users/{user_id}"
    skip_paths: list[str] = Field(default_factory=list)


def resolve_hostname(lookup: Callable[[], str] = socket.gethostname) -> str:
    """Resolve the process hostname, substituting "unknown" on failure."""
    try:
        hostname = lookup()
    except OSError as exc:
        logger.warning("hostname lookup failed, using %r: %s", UNKNOWN_HOSTNAME, exc)
        return UNKNOWN_HOSTNAME
    return hostname or UNKNOWN_HOSTNAME


@dataclass(frozen=True, slots=True)
class RequestLoggerConfig:
    skip_paths: frozenset[str]
    hostname: str

    @classmethod
    def build(
        cls,
        params: RequestLoggerParams | None = None,
        hostname_lookup: Callable[[], str] = socket.gethostname,
    ) -> "RequestLoggerConfig":
        params = params or RequestLoggerParams()
        return cls(
            skip_paths=frozenset(params.skip_paths),
            hostname=resolve_hostname(hostname_lookup),
        )

    def should_skip(self, route_pattern: str) -> bool:
        return route_pattern in self.skip_paths
