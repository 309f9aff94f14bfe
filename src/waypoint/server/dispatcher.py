"""Request dispatcher — the per-request state machine.

States::

    RECEIVED -> UNMATCHED -> RESPONSE_SENT (404)
    RECEIVED -> MATCHED -> MIDDLEWARE_RUNNING -> HANDLER_RUNNING -> RESPONSE_SENT

Middleware for a request run concurrently in an anyio task group. Their
results are stored by registration position, so the handler sees them
in scope order (global first) no matter which finished first. One
failing middleware cancels the rest and aborts the request before the
handler is invoked.
"""

import enum
import logging
from collections.abc import Sequence
from typing import Any

import anyio

from waypoint._internal.asgi import Receive, Scope, Send
from waypoint._internal.invoke import invoke
from waypoint.errors import HandlerFailure, HTTPError, MiddlewareRejected, RouteNotFound
from waypoint.http.request import Request
from waypoint.http.response import DEFAULT_STATUS, Response
from waypoint.middleware.registry import MiddlewareEntry, MiddlewareRegistry
from waypoint.routing.route import RouteMatch
from waypoint.routing.table import RouteTable
from waypoint.server.sender import send_response
from waypoint.server.shaper import shape

logger = logging.getLogger("waypoint.dispatch")

NOT_FOUND_BODY = "Resource not found"


class DispatchState(enum.Enum):
    RECEIVED = "received"
    MATCHED = "matched"
    UNMATCHED = "unmatched"
    MIDDLEWARE_RUNNING = "middleware_running"
    HANDLER_RUNNING = "handler_running"
    RESPONSE_SENT = "response_sent"


def _transition(state: DispatchState, request: Request) -> None:
    logger.debug("%s %s %s", state.name, request.method, request.path)


async def run_middleware(
    entries: Sequence[MiddlewareEntry],
    request: Request,
) -> list[Any]:
    """Run every middleware concurrently and join on all of them.

    Returns results in the order of *entries*. Raises
    ``MiddlewareRejected`` for the first failure; the remaining
    middleware are cancelled.
    """
    results: list[Any] = [None] * len(entries)
    failure: Exception | None = None

    async def _run(index: int, entry: MiddlewareEntry) -> None:
        nonlocal failure
        try:
            results[index] = await invoke(entry.fn, request)
        except Exception as exc:
            if failure is None:
                failure = exc
            tg.cancel_scope.cancel()

    async with anyio.create_task_group() as tg:
        for index, entry in enumerate(entries):
            tg.start_soon(_run, index, entry)

    if failure is not None:
        if isinstance(failure, MiddlewareRejected):
            raise failure
        if isinstance(failure, HTTPError):
            reason = failure.detail or str(failure)
            raise MiddlewareRejected(reason, status=failure.status) from failure
        raise MiddlewareRejected(str(failure)) from failure

    return results


class RequestDispatcher:
    """Dispatches requests against a frozen route table and registry.

    Usage::

        dispatcher = RequestDispatcher(routes, middleware)
        response = await dispatcher.dispatch(Request("GET", "/users/42"))
    """

    __slots__ = ("middleware", "routes")

    def __init__(self, routes: RouteTable, middleware: MiddlewareRegistry) -> None:
        self.routes = routes
        self.middleware = middleware

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """Serve one ASGI ``http`` scope."""
        if scope["type"] != "http":
            return
        request = Request.from_asgi(scope)
        response = await self.dispatch(request)
        await send_response(response, send)
        _transition(DispatchState.RESPONSE_SENT, request)

    async def dispatch(self, request: Request) -> Response:
        """Run the full pipeline for *request* and return its Response.

        Never raises for route, middleware or handler failures: each is
        absorbed into a response.
        """
        _transition(DispatchState.RECEIVED, request)
        try:
            match = self.routes.find(request.path, request.method, request.query)
            if match is None:
                _transition(DispatchState.UNMATCHED, request)
                raise RouteNotFound()
            _transition(DispatchState.MATCHED, request)
            results = await self._gather(request)
            return await self._invoke_handler(match, request, results)
        except RouteNotFound as exc:
            return Response(
                body=exc.detail,
                status=exc.status,
                content_type="text/plain; charset=utf-8",
            )
        except MiddlewareRejected as exc:
            logger.warning(
                "Middleware rejected %s %s: %s", request.method, request.path, exc.reason
            )
            return Response(body=exc.reason, status=exc.status or DEFAULT_STATUS)
        except HTTPError as exc:
            return Response(body=exc.detail or str(exc.status), status=exc.status)

    async def _gather(self, request: Request) -> list[Any]:
        entries = self.middleware.resolve(request.path)
        if not entries:
            return []
        _transition(DispatchState.MIDDLEWARE_RUNNING, request)
        return await run_middleware(entries, request)

    async def _invoke_handler(
        self,
        match: RouteMatch,
        request: Request,
        results: list[Any],
    ) -> Response:
        """Call the handler with ``(*captures, query, *results)`` and shape its value."""
        _transition(DispatchState.HANDLER_RUNNING, request)
        try:
            value = await invoke(match.route.handler, *match.captures, match.query, *results)
            return shape(value)
        except HTTPError:
            raise
        except Exception as exc:
            logger.exception("500 %s %s", request.method, request.path)
            raise HandlerFailure() from exc
