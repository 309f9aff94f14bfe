"""Route pattern compilation.

A pattern compiles into an anchored regex plus the ordered names of its
captures. Matching a concrete path yields the captured strings in the
pattern's own order, or ``None``.

Supported syntax::

    "/users/:id"              -> one segment named ``id``
    "/files/*rest"            -> everything after ``/files/``
    "/posts(/:slug)"          -> optional group
    "/users/{id}"             -> brace form of ``:id``
    "/users/{id:int}"         -> typed brace capture (str, int, float, path)
"""

import re
from dataclasses import dataclass

from waypoint.errors import ConfigurationError
from waypoint.routing.params import CONVERTERS, SPLAT

_TOKEN = re.compile(
    r"""
    \{(?P<brace>[A-Za-z_]\w*)(?::(?P<conv>\w+))?\}
    | :(?P<param>[A-Za-z_]\w*)
    | \*(?P<splat>[A-Za-z_]\w*)?
    | (?P<open>\()
    | (?P<close>\))
    | (?P<literal>[^{}:*()]+)
    """,
    re.VERBOSE,
)


@dataclass(frozen=True, slots=True)
class CompiledPattern:
    """A compiled route pattern. Immutable, safe to share across requests."""

    source: str
    regex: re.Pattern[str]
    names: tuple[str, ...]

    def match(self, path: str) -> tuple[str | None, ...] | None:
        """Match *path* against this pattern.

        Returns the captures in pattern order (``None`` for an optional
        group that did not participate), or ``None`` when the path does
        not match.
        """
        m = self.regex.fullmatch(path)
        if m is None:
            return None
        return m.groups()

    def __str__(self) -> str:
        return self.source


def compile_pattern(pattern: str) -> CompiledPattern:
    """Compile a route pattern string.

    Raises ``ConfigurationError`` on malformed patterns: unbalanced
    parentheses, unknown converters, or Flask-style ``<param>`` syntax.
    """
    if "<" in pattern and ">" in pattern:
        msg = (
            f"Route pattern {pattern!r} uses <param> syntax. "
            "Use :param or {param} instead."
        )
        raise ConfigurationError(msg)

    text = pattern
    if len(text) > 1 and text.endswith("/"):
        text = text[:-1]

    parts: list[str] = []
    names: list[str] = []
    depth = 0
    pos = 0

    while pos < len(text):
        token = _TOKEN.match(text, pos)
        if token is None:
            msg = f"Invalid route pattern {pattern!r} at position {pos}."
            raise ConfigurationError(msg)
        pos = token.end()

        if token["brace"] is not None:
            conv = token["conv"] or "str"
            if conv not in CONVERTERS:
                msg = f"Unknown converter {conv!r} in route pattern {pattern!r}."
                raise ConfigurationError(msg)
            names.append(token["brace"])
            parts.append(f"({CONVERTERS[conv]})")
        elif token["param"] is not None:
            names.append(token["param"])
            parts.append(f"({CONVERTERS['str']})")
        elif token["open"] is not None:
            depth += 1
            parts.append("(?:")
        elif token["close"] is not None:
            depth -= 1
            if depth < 0:
                msg = f"Unbalanced ')' in route pattern {pattern!r}."
                raise ConfigurationError(msg)
            parts.append(")?")
        elif token["literal"] is not None:
            parts.append(re.escape(token["literal"]))
        else:
            names.append(token["splat"] or "splat")
            parts.append(f"({SPLAT})")

    if depth != 0:
        msg = f"Unbalanced '(' in route pattern {pattern!r}."
        raise ConfigurationError(msg)

    body = "".join(parts)
    if text != "/":
        body += "/?"

    return CompiledPattern(source=pattern, regex=re.compile(body), names=tuple(names))
