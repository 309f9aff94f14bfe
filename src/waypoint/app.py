"""Waypoint application class.

Mutable during setup (route and middleware registration).
Frozen at runtime when app.run() or __call__() is first invoked.
"""

import logging
import threading
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any, overload

from waypoint._internal.asgi import Receive, Scope, Send
from waypoint._internal.invoke import invoke
from waypoint._internal.types import Handler, MiddlewareFn
from waypoint.config import AppConfig
from waypoint.middleware.registry import GLOBAL_SCOPE, MiddlewareRegistry
from waypoint.routing.pattern import CompiledPattern, compile_pattern
from waypoint.routing.table import RouteTable
from waypoint.server.dispatcher import RequestDispatcher

logger = logging.getLogger("waypoint.server")


@dataclass(slots=True)
class _PendingRoute:
    """A route waiting to be frozen into the table."""

    pattern: CompiledPattern
    method: str
    handler: Handler


class App:
    """The waypoint application — a builder for the route table and middleware.

    Mutable during setup, frozen on first request (or ``run()``). Routes
    are tried in registration order; middleware runs global scope first,
    then the exact-path scope.

    Usage::

        app = App()

        @app.get("/users/:id")
        def user(id, query):
            return json({"id": id, **query})

        app.use(load_session)
        app.run()

    Thread safety:
        The freeze transition uses a Lock + double-check so exactly one
        thread compiles the app even if several workers receive their
        first request at once.
    """

    __slots__ = (
        "_dispatcher",
        "_freeze_lock",
        "_frozen",
        "_middleware_list",
        "_pending_routes",
        "_shutdown_hooks",
        "_startup_hooks",
        "config",
    )

    def __init__(self, config: AppConfig | None = None) -> None:
        self.config: AppConfig = config or AppConfig.from_env()
        self._pending_routes: list[_PendingRoute] = []
        self._middleware_list: list[tuple[str, MiddlewareFn]] = []
        self._startup_hooks: list[Callable[..., Any]] = []
        self._shutdown_hooks: list[Callable[..., Any]] = []
        self._frozen: bool = False
        self._freeze_lock: threading.Lock = threading.Lock()

        # Compiled state, set during _freeze()
        self._dispatcher: RequestDispatcher | None = None

    # -- Route registration --

    def add_route(self, pattern: str, method: str, handler: Handler) -> Handler:
        """Register *handler* for *method* requests matching *pattern*.

        The pattern is compiled immediately so malformed patterns fail at
        registration, not on the first request.
        """
        self._check_not_frozen()
        self._pending_routes.append(
            _PendingRoute(compile_pattern(pattern), method.upper(), handler)
        )
        return handler

    def route(
        self,
        pattern: str,
        *,
        methods: list[str] | None = None,
    ) -> Callable[[Handler], Handler]:
        """Register a route handler via decorator.

        Args:
            pattern: URL path pattern. Use ``:name`` or ``{name}`` for captures.
            methods: HTTP methods. Defaults to ``["GET"]``.
        """

        def decorator(func: Handler) -> Handler:
            for method in methods or ["GET"]:
                self.add_route(pattern, method, func)
            return func

        return decorator

    @overload
    def get(self, pattern: str) -> Callable[[Handler], Handler]: ...
    @overload
    def get(self, pattern: str, handler: Handler) -> Handler: ...
    def get(self, pattern: str, handler: Handler | None = None) -> Any:
        """Register a GET route. Call directly or use as a decorator."""
        return self._method("GET", pattern, handler)

    @overload
    def post(self, pattern: str) -> Callable[[Handler], Handler]: ...
    @overload
    def post(self, pattern: str, handler: Handler) -> Handler: ...
    def post(self, pattern: str, handler: Handler | None = None) -> Any:
        """Register a POST route. Call directly or use as a decorator."""
        return self._method("POST", pattern, handler)

    @overload
    def put(self, pattern: str) -> Callable[[Handler], Handler]: ...
    @overload
    def put(self, pattern: str, handler: Handler) -> Handler: ...
    def put(self, pattern: str, handler: Handler | None = None) -> Any:
        """Register a PUT route. Call directly or use as a decorator."""
        return self._method("PUT", pattern, handler)

    @overload
    def delete(self, pattern: str) -> Callable[[Handler], Handler]: ...
    @overload
    def delete(self, pattern: str, handler: Handler) -> Handler: ...
    def delete(self, pattern: str, handler: Handler | None = None) -> Any:
        """Register a DELETE route. Call directly or use as a decorator."""
        return self._method("DELETE", pattern, handler)

    def _method(self, method: str, pattern: str, handler: Handler | None) -> Any:
        if handler is not None:
            return self.add_route(pattern, method, handler)

        def decorator(func: Handler) -> Handler:
            return self.add_route(pattern, method, func)

        return decorator

    def set_routes(self, routes: Iterable[tuple[str, str, Handler]]) -> None:
        """Replace every registered route with ``(pattern, method, handler)`` triples.

        Order of *routes* becomes the match order.
        """
        self._check_not_frozen()
        pending = [
            _PendingRoute(compile_pattern(pattern), method.upper(), handler)
            for pattern, method, handler in routes
        ]
        self._pending_routes = pending

    # -- Middleware --

    def use(self, scope: str | MiddlewareFn, fn: MiddlewareFn | None = None) -> None:
        """Register a middleware globally or for one exact path.

        ``app.use(fn)`` and ``app.use("*", fn)`` are global;
        ``app.use("/admin", fn)`` applies only when the request path is
        exactly ``/admin``.
        """
        self._check_not_frozen()
        if fn is None:
            if isinstance(scope, str):
                msg = "use() requires a middleware callable."
                raise TypeError(msg)
            scope, fn = GLOBAL_SCOPE, scope
        if not isinstance(scope, str):
            msg = f"Middleware scope must be a string, got {type(scope).__name__}."
            raise TypeError(msg)
        if not callable(fn):
            msg = f"Middleware must be callable, got {type(fn).__name__}."
            raise TypeError(msg)
        self._middleware_list.append((scope, fn))

    # -- Lifecycle hooks --

    def on_startup(self, func: Callable[..., Any]) -> Callable[..., Any]:
        """Register an async or sync startup hook via decorator.

        Hooks run in registration order during ASGI lifespan startup,
        before the server begins accepting HTTP requests.
        """
        self._check_not_frozen()
        self._startup_hooks.append(func)
        return func

    def on_shutdown(self, func: Callable[..., Any]) -> Callable[..., Any]:
        """Register an async or sync shutdown hook via decorator."""
        self._check_not_frozen()
        self._shutdown_hooks.append(func)
        return func

    # -- Server --

    def run(self, host: str | None = None, port: int | None = None) -> None:
        """Freeze the app and serve it until interrupted.

        Args:
            host: Override bind host.
            port: Override bind port.
        """
        from waypoint.server.dev import run_server

        self._ensure_frozen()

        run_server(
            self,
            self.config.host if host is None else host,
            self.config.port if port is None else port,
            log_level=self.config.effective_log_level,
        )

    # -- ASGI interface --

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point."""
        if scope["type"] == "lifespan":
            await self._handle_lifespan(scope, receive, send)
            return

        self._ensure_frozen()
        assert self._dispatcher is not None
        await self._dispatcher(scope, receive, send)

    async def _handle_lifespan(
        self,
        scope: Scope,
        receive: Receive,
        send: Send,
    ) -> None:
        """Run the ASGI lifespan protocol.

        The app is frozen before any hook runs, so the route table and
        middleware registry are fixed by the time the server accepts
        its first request.
        """
        self._ensure_frozen()

        while True:
            message = await receive()

            match message["type"]:
                case "lifespan.startup":
                    try:
                        await self._run_hooks(self._startup_hooks)
                    except Exception as exc:
                        logger.exception("Startup hook failed")
                        await send({"type": "lifespan.startup.failed", "message": str(exc)})
                        return
                    await send({"type": "lifespan.startup.complete"})
                case "lifespan.shutdown":
                    await self._run_hooks(self._shutdown_hooks)
                    await send({"type": "lifespan.shutdown.complete"})
                    return

    @staticmethod
    async def _run_hooks(hooks: list[Callable[..., Any]]) -> None:
        for hook in hooks:
            await invoke(hook)

    # -- Introspection --

    @property
    def routes(self) -> RouteTable:
        """The frozen route table. Freezes the app if needed."""
        self._ensure_frozen()
        assert self._dispatcher is not None
        return self._dispatcher.routes

    @property
    def middleware(self) -> MiddlewareRegistry:
        """The frozen middleware registry. Freezes the app if needed."""
        self._ensure_frozen()
        assert self._dispatcher is not None
        return self._dispatcher.middleware

    # -- Internal --

    def _ensure_frozen(self) -> None:
        """Thread-safe freeze with double-check locking."""
        if self._frozen:
            return
        with self._freeze_lock:
            if self._frozen:
                return
            self._freeze()

    def _freeze(self) -> None:
        """Compile the app into its frozen runtime state.

        MUST only be called while holding _freeze_lock.
        """
        table = RouteTable()
        for pending in self._pending_routes:
            table.register(pending.pattern, pending.method, pending.handler)
        table.freeze()

        registry = MiddlewareRegistry()
        for scope, fn in self._middleware_list:
            registry.register(scope, fn)
        registry.freeze()

        self._dispatcher = RequestDispatcher(table, registry)
        self._frozen = True
        logger.debug(
            "Frozen with %d route(s) and %d middleware", len(table), len(registry)
        )

    def _check_not_frozen(self) -> None:
        if self._frozen:
            msg = (
                "Cannot modify the app after it has started serving requests. "
                "Register routes and middleware before calling app.run()."
            )
            raise RuntimeError(msg)
