"""Application errors raised by route handlers.

Each carries its HTTP status; the app-level handler in src/main.py turns them
into the ApiResponse envelope and records them on the request so the
request log picks them up in its `errors` field.
"""


class AppError(Exception):
    """Base application error."""

    def __init__(
        self,
        code: int,
        message: str,
        http_status: int = 500,
    ) -> None:
        self.code = code
        self.message = message
        self.http_status = http_status
        super().__init__(message)

    def __str__(self) -> str:
        return f"{self.code}: {self.message}"


class NotFoundError(AppError):
    def __init__(self, resource: str, key: str) -> None:
        super().__init__(4004, f"{resource} not found: {key}", 404)


class UpstreamUnavailableError(AppError):
    def __init__(self, upstream: str) -> None:
        super().__init__(5003, f"Upstream unavailable: {upstream}", 503)
