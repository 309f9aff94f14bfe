"""Scope-keyed middleware registry.

Global middleware always precedes path-specific middleware; within a
scope, registration order is preserved. Path scopes compare by exact
string equality, unlike route patterns.
"""

from dataclasses import dataclass

from waypoint._internal.types import MiddlewareFn

# Scope key for middleware that applies to every request
GLOBAL_SCOPE = "*"


@dataclass(frozen=True, slots=True)
class MiddlewareEntry:
    """One registered middleware and the scope it was registered under."""

    scope: str
    fn: MiddlewareFn

    @property
    def name(self) -> str:
        return getattr(self.fn, "__qualname__", None) or repr(self.fn)


class MiddlewareRegistry:
    """Mapping from scope to an ordered list of middleware.

    Usage::

        registry = MiddlewareRegistry()
        registry.register("*", load_user)
        registry.register("/admin", check_admin)
        registry.resolve("/admin")  # (load_user entry, check_admin entry)
    """

    __slots__ = ("_frozen", "_scopes")

    def __init__(self) -> None:
        self._scopes: dict[str, list[MiddlewareEntry]] = {}
        self._frozen = False

    def register(self, scope: str, fn: MiddlewareFn) -> MiddlewareEntry:
        """Append *fn* to the list at *scope*, creating it if absent."""
        if self._frozen:
            msg = "Cannot register middleware after the registry is frozen."
            raise RuntimeError(msg)
        if not callable(fn):
            msg = f"Middleware must be callable, got {type(fn).__name__}."
            raise TypeError(msg)
        entry = MiddlewareEntry(scope=scope, fn=fn)
        self._scopes.setdefault(scope, []).append(entry)
        return entry

    def resolve(self, path: str) -> tuple[MiddlewareEntry, ...]:
        """Global entries followed by the entries registered for exactly *path*."""
        global_entries = self._scopes.get(GLOBAL_SCOPE, [])
        if path == GLOBAL_SCOPE:
            return tuple(global_entries)
        return (*global_entries, *self._scopes.get(path, ()))

    def freeze(self) -> None:
        """Make the registry read-only."""
        self._frozen = True

    @property
    def scopes(self) -> tuple[str, ...]:
        """Registered scopes in first-registration order."""
        return tuple(self._scopes)

    def __len__(self) -> int:
        return sum(len(entries) for entries in self._scopes.values())
