"""
Route visibility.

Endpoints are protected unless explicitly marked with ``allow_anonymous``.
The marks are read once, as routers are registered, into a lookup table
keyed by endpoint. The authentication gate consults it after routing, using
the endpoint the router selected, so nesting of routers does not matter.
"""

from typing import Any, Callable, Dict, Iterable, MutableMapping, Optional, TypeVar

from fastapi.routing import APIRoute
from starlette.routing import BaseRoute

F = TypeVar("F", bound=Callable[..., Any])

ALLOW_ANONYMOUS_ATTR = "__allow_anonymous__"


def allow_anonymous(endpoint: F) -> F:
    """Mark an endpoint as publicly accessible. Apply below the route decorator."""
    setattr(endpoint, ALLOW_ANONYMOUS_ATTR, True)
    return endpoint


def is_anonymous_allowed(endpoint: Callable[..., Any]) -> bool:
    return bool(getattr(endpoint, ALLOW_ANONYMOUS_ATTR, False))


class RouteVisibilityTable:
    """Endpoint -> public? table. Unregistered endpoints are protected."""

    def __init__(self):
        self._entries: Dict[Callable[..., Any], bool] = {}

    @classmethod
    def from_routes(cls, routes: Iterable[BaseRoute]) -> "RouteVisibilityTable":
        table = cls()
        table.register(routes)
        return table

    def register(self, routes: Iterable[BaseRoute]) -> None:
        """
        Record the visibility of every API route.

        Pass a router's own ``routes`` before or after it is included; route
        containers and non-API routes are skipped.
        """
        for route in routes:
            if isinstance(route, APIRoute):
                self._entries[route.endpoint] = is_anonymous_allowed(route.endpoint)

    def is_public(self, endpoint: Callable[..., Any]) -> bool:
        return self._entries.get(endpoint, False)

    def resolve(self, scope: MutableMapping[str, Any]) -> Optional[bool]:
        """
        Return True (public) or False (protected) for the endpoint the router
        selected, or None when the request has not been routed yet.
        """
        endpoint = scope.get("endpoint")
        if endpoint is None:
            return None
        return self.is_public(endpoint)

    def __len__(self) -> int:
        return len(self._entries)
