"""Waypoint exception hierarchy.

Shared across the route table, the dispatcher and the app builder so
every module raises and catches the same types.
"""

from dataclasses import dataclass


class WaypointError(Exception):
    """Base for all waypoint-specific errors."""


class ConfigurationError(WaypointError):
    """Raised when app configuration is invalid.

    Typically raised by ``AppConfig.from_env()`` or while compiling a
    route pattern at registration time.
    """


@dataclass(frozen=True, slots=True)
class HTTPError(WaypointError):
    """An error that maps directly to an HTTP status code.

    Handlers and middleware may raise it; the dispatcher turns it into a
    response with ``status`` and ``detail`` as the body.
    """

    status: int
    detail: str = ""

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class RouteNotFound(HTTPError):  # noqa: N818
    """404 — no pattern+method pair matched the request.

    Absorbed by the dispatcher, never surfaced to the host application.
    """

    def __init__(self, detail: str = "Resource not found") -> None:
        super().__init__(status=404, detail=detail)


class MiddlewareRejected(WaypointError):  # noqa: N818
    """A middleware failed; the request is aborted before the handler runs.

    ``reason`` becomes the response body. ``status`` is optional: when
    ``None`` the transport default is used.
    """

    def __init__(self, reason: str, status: int | None = None) -> None:
        super().__init__(reason)
        self.reason = reason
        self.status = status


class HandlerFailure(HTTPError):
    """500 — the matched handler raised.

    The original exception is chained as ``__cause__``.
    """

    def __init__(self, detail: str = "Internal Server Error") -> None:
        super().__init__(status=500, detail=detail)
