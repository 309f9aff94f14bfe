"""Middleware — value-producing callables run before the handler.

A middleware is any callable matching::

    def mw(request: Request) -> Any            # or
    async def mw(request: Request) -> Any

No base class required. The resolved value is forwarded to the handler
after the captures and query; raising aborts the request.

Middleware is scoped either globally (``"*"``) or to one exact path.
"""

from waypoint.middleware.registry import GLOBAL_SCOPE, MiddlewareEntry, MiddlewareRegistry

__all__ = [
    "GLOBAL_SCOPE",
    "MiddlewareEntry",
    "MiddlewareRegistry",
]
