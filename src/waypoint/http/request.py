"""Immutable HTTP request.

Only the request line and headers are captured; bodies are never read
by the router.
"""

from dataclasses import dataclass, field

from waypoint._internal.asgi import Scope
from waypoint.http.headers import Headers
from waypoint.http.query import QueryParams


@dataclass(frozen=True, slots=True)
class Request:
    """An immutable HTTP request as seen by middleware.

    Built once per ASGI scope; never shared between requests.
    """

    method: str
    path: str
    query: QueryParams = field(default_factory=QueryParams)
    headers: Headers = field(default_factory=Headers)
    client: tuple[str, int] | None = None

    @classmethod
    def from_asgi(cls, scope: Scope) -> "Request":
        """Build a Request from a raw ASGI ``http`` scope."""
        client = scope.get("client")
        return cls(
            method=scope["method"].upper(),
            path=scope["path"],
            query=QueryParams(scope.get("query_string", b"")),
            headers=Headers(tuple(scope.get("headers", ()))),
            client=tuple(client) if client else None,
        )

    @property
    def url(self) -> str:
        """Path plus query string."""
        qs = self.query.raw
        if qs:
            return f"{self.path}?{qs.decode('latin-1')}"
        return self.path
