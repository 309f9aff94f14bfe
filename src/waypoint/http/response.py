"""Response values and the final HTTP response.

Handlers return a ``ResponseValue``, either ``Plain`` (body written
verbatim with transport defaults) or ``Descriptor`` (body plus optional
status and content type). The shaper turns either into a ``Response``,
which the sender writes exactly once.
"""

from __future__ import annotations

import json as json_module
from dataclasses import dataclass, replace
from typing import Any, TypeAlias

# Status used when nothing else sets one (the transport default)
DEFAULT_STATUS = 200

JSON_CONTENT_TYPE = "application/json"


@dataclass(frozen=True, slots=True)
class Plain:
    """A body written verbatim with default status and no content type."""

    body: str | bytes = ""


@dataclass(frozen=True, slots=True)
class Descriptor:
    """A structured response value.

    ``status`` defaults to 200 when ``None``. ``content_type`` is omitted
    from the response when ``None`` and ``body`` is text or bytes; any
    other ``body`` is a structured payload and gets JSON-encoded.
    """

    body: Any = ""
    status: int | None = None
    content_type: str | None = None


ResponseValue: TypeAlias = Plain | Descriptor


@dataclass(frozen=True, slots=True)
class Response:
    """A shaped HTTP response: status line, headers and body bytes.

    ``content_type`` of ``None`` means no ``content-type`` header is sent.
    """

    body: str | bytes = ""
    status: int = DEFAULT_STATUS
    content_type: str | None = None
    headers: tuple[tuple[str, str], ...] = ()

    def with_status(self, status: int) -> Response:
        """Return a new Response with a different status code."""
        return replace(self, status=status)

    def with_header(self, name: str, value: str) -> Response:
        """Return a new Response with an additional header."""
        return replace(self, headers=(*self.headers, (name, value)))

    def with_content_type(self, content_type: str | None) -> Response:
        """Return a new Response with a different content type."""
        return replace(self, content_type=content_type)

    @property
    def body_bytes(self) -> bytes:
        """Body as bytes."""
        if isinstance(self.body, str):
            return self.body.encode("utf-8")
        return self.body

    @property
    def text(self) -> str:
        """Body as string."""
        if isinstance(self.body, bytes):
            return self.body.decode("utf-8")
        return self.body

    def json(self) -> Any:
        """Decode the body as JSON."""
        return json_module.loads(self.body_bytes)


def dumps(data: Any) -> str:
    """Compact JSON encoding used by every JSON-producing helper."""
    return json_module.dumps(data, separators=(",", ":"), default=str)


def json(data: Any, status: int | None = None) -> Descriptor:
    """Serialize *data* as a JSON response value.

    Usage::

        @app.get("/users/:id")
        def user(id, query):
            return json({"id": id, **query})
    """
    return Descriptor(body=dumps(data), status=status, content_type=JSON_CONTENT_TYPE)


def error(message: str, status: int) -> Descriptor:
    """Serialize an error message with an arbitrary status code.

    The body is ``{"error": message}`` encoded as JSON.
    """
    return Descriptor(
        body=dumps({"error": message}),
        status=status,
        content_type=JSON_CONTENT_TYPE,
    )
