"""Waypoint — a minimal first-match HTTP request router.

Routes are tried in registration order; middleware runs concurrently
before the handler and its results are passed along as arguments.

Basic usage::

    from waypoint import App, json

    app = App()

    @app.get("/users/:id")
    def user(id, query):
        return json({"id": id, **query})

    app.run()
"""

__version__ = "0.1.0"
__all__ = [
    "App",
    "AppConfig",
    "ConfigurationError",
    "Descriptor",
    "HTTPError",
    "HandlerFailure",
    "MiddlewareRejected",
    "Plain",
    "Request",
    "Response",
    "RouteNotFound",
    "WaypointError",
    "error",
    "json",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import waypoint`` fast while providing a clean top-level API.
    """
    if name == "App":
        from waypoint.app import App

        return App

    if name == "AppConfig":
        from waypoint.config import AppConfig

        return AppConfig

    if name == "Request":
        from waypoint.http.request import Request

        return Request

    if name in ("Response", "Plain", "Descriptor", "json", "error"):
        from waypoint.http import response as _resp

        return getattr(_resp, name)

    if name in (
        "ConfigurationError",
        "HTTPError",
        "HandlerFailure",
        "MiddlewareRejected",
        "RouteNotFound",
        "WaypointError",
    ):
        from waypoint import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
