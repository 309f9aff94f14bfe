"""Shared type aliases used across waypoint modules."""

from collections.abc import Callable
from typing import Any, TypeAlias

# Route handler, called positionally with (*captures, query, *middleware_results)
Handler: TypeAlias = Callable[..., Any]

# Middleware, called with the Request, resolves to a value forwarded to the handler
MiddlewareFn: TypeAlias = Callable[..., Any]
