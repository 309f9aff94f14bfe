"""Route and RouteMatch frozen dataclasses."""

from dataclasses import dataclass

from waypoint._internal.types import Handler
from waypoint.http.query import QueryParams
from waypoint.routing.pattern import CompiledPattern


@dataclass(frozen=True, slots=True)
class Route:
    """A frozen (pattern, method, handler) registration."""

    pattern: CompiledPattern
    method: str
    handler: Handler

    @property
    def path(self) -> str:
        """The pattern source as registered."""
        return self.pattern.source


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of a successful lookup. Scoped to one request."""

    route: Route
    captures: tuple[str | None, ...]
    query: QueryParams

    @property
    def params(self) -> dict[str, str | None]:
        """Captures keyed by their names in the pattern."""
        return dict(zip(self.route.pattern.names, self.captures, strict=True))
