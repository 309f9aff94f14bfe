"""Ordered route table with first-match lookup.

Declaration order is a hard contract: the first route whose pattern
and method both match wins. A later duplicate is simply unreachable.
"""

import logging

from waypoint._internal.types import Handler
from waypoint.http.query import QueryParams
from waypoint.routing.pattern import CompiledPattern, compile_pattern
from waypoint.routing.route import Route, RouteMatch

logger = logging.getLogger("waypoint.routing")


class RouteTable:
    """Ordered list of routes. Append-only during setup, read-only after.

    Usage::

        table = RouteTable()
        table.register("/users/:id", "GET", handler)
        table.freeze()
        match = table.find("/users/42", "GET")
    """

    __slots__ = ("_frozen", "_routes")

    def __init__(self) -> None:
        self._routes: list[Route] = []
        self._frozen = False

    def register(
        self,
        pattern: str | CompiledPattern,
        method: str,
        handler: Handler,
    ) -> Route:
        """Append a route. Duplicates are accepted, never rejected."""
        if self._frozen:
            msg = "Cannot register routes after the table is frozen."
            raise RuntimeError(msg)
        if isinstance(pattern, str):
            pattern = compile_pattern(pattern)
        route = Route(pattern=pattern, method=method.upper(), handler=handler)
        self._routes.append(route)
        logger.debug("Registered %s %s", route.method, route.path)
        return route

    def find(
        self,
        path: str,
        method: str,
        query: QueryParams | None = None,
    ) -> RouteMatch | None:
        """Return the first route matching both *path* and *method*.

        A pattern that matches under another method does not stop the
        scan; it is treated exactly like a non-matching pattern.
        """
        method = method.upper()
        for route in self._routes:
            if route.method != method:
                continue
            captures = route.pattern.match(path)
            if captures is not None:
                return RouteMatch(
                    route=route,
                    captures=captures,
                    query=query if query is not None else QueryParams(),
                )
        return None

    def freeze(self) -> None:
        """Make the table read-only."""
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    @property
    def routes(self) -> tuple[Route, ...]:
        """All registered routes in registration order."""
        return tuple(self._routes)

    def __len__(self) -> int:
        return len(self._routes)
