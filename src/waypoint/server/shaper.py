"""Response shaping — maps handler return values to Responses.

Two steps: ``to_response_value`` tags whatever the handler returned as
``Plain`` or ``Descriptor``, then ``shape`` resolves defaults. Both are
pure, so shaping the same value twice gives equal responses.
"""

from typing import Any

from waypoint.http.response import (
    DEFAULT_STATUS,
    JSON_CONTENT_TYPE,
    Descriptor,
    Plain,
    Response,
    ResponseValue,
    dumps,
)


def to_response_value(value: Any) -> ResponseValue | Response:
    """Tag a raw handler return value.

    1. ``Plain`` / ``Descriptor`` / ``Response`` -> pass through
    2. ``str`` / ``bytes``                       -> ``Plain``
    3. ``None``                                  -> empty ``Plain``
    4. anything else                             -> structured ``Descriptor``
    """
    match value:
        case Plain() | Descriptor() | Response():
            return value
        case str() | bytes():
            return Plain(value)
        case None:
            return Plain()
        case _:
            return Descriptor(body=value)


def shape(value: Any) -> Response:
    """Resolve a handler value into the single Response sent to the client."""
    match to_response_value(value):
        case Response() as response:
            return response
        case Plain(body=body):
            return Response(body=body)
        case Descriptor(body=str() | bytes() as body, status=status, content_type=ct):
            return Response(
                body=body,
                status=DEFAULT_STATUS if status is None else status,
                content_type=ct,
            )
        case Descriptor(body=body, status=status, content_type=ct):
            return Response(
                body=dumps(body),
                status=DEFAULT_STATUS if status is None else status,
                content_type=ct or JSON_CONTENT_TYPE,
            )
    msg = f"Cannot shape response value of type {type(value).__name__}"
    raise TypeError(msg)
