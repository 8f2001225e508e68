"""Per-request error accumulator.

Handlers (and exception handlers) record errors on `request.state.errors`;
the request logger forwards whatever is stored there as the `errors` field
without interpreting it.
"""

from typing import Any

from starlette.requests import Request
from starlette.types import Scope

STATE_KEY = "errors"


def record_error(request: Request, error: Any) -> None:
    """Append `error` to the request's error accumulator."""
    errors = getattr(request.state, STATE_KEY, None)
    if errors is None:
        errors = []
        setattr(request.state, STATE_KEY, errors)
    errors.append(error)


def collect_errors(scope: Scope) -> Any:
    """The value stored for this request, as-is, or None if nothing was recorded."""
    # request.state is a view over scope["state"]
    state = scope.get("state") or {}
    return state.get(STATE_KEY)


def with_exception(errors: Any, exc: BaseException) -> Any:
    """Add an unhandled exception to a list-shaped accumulator.

    Opaque values (anything other than a list or tuple) are returned unchanged.
    """
    if errors is None:
        return [repr(exc)]
    if isinstance(errors, (list, tuple)):
        return [*errors, repr(exc)]
    return errors
