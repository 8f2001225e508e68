"""Route template lookup for the current request.

Skip rules are written against the template the route was registered with
(`/users/{user_id}`), not the concrete path (`/users/42`). Middleware runs
before the router has dispatched, so the template is found by asking each
route whether it matches the scope, the same way Starlette's Router does.
"""

from collections.abc import Sequence
from typing import Any

from starlette.routing import BaseRoute, Match, Mount
from starlette.types import Scope

NO_ROUTE = ""


def resolve_route_pattern(scope: Scope) -> str:
    """Return the matched route template, or "" when nothing matches."""
    app = scope.get("app")
    router = getattr(app, "router", None)
    routes = getattr(router, "routes", None)
    if not routes:
        return NO_ROUTE
    return _match_routes(routes, scope) or NO_ROUTE


def _match_routes(routes: Sequence[BaseRoute], scope: Scope) -> str | None:
    partial: tuple[BaseRoute, dict[str, Any]] | None = None

    for route in routes:
        match, child_scope = route.matches(scope)
        if match == Match.FULL:
            return _template_for(route, {**scope, **child_scope})
        if match == Match.PARTIAL and partial is None:
            partial = (route, child_scope)

    # method mismatch: the router answers 405 from the first partial match
    if partial is not None:
        route, child_scope = partial
        return _template_for(route, {**scope, **child_scope})
    return None


def _template_for(route: BaseRoute, scope: Scope) -> str | None:
    path = getattr(route, "path", NO_ROUTE)
    if not isinstance(route, Mount):
        return path

    # mounted static apps have no routes; the mount prefix is the template
    if not route.routes:
        return path

    child = _match_routes(route.routes, scope)
    if child is None:
        return None
    return path + child
