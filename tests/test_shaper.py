"""Tests for waypoint.server.shaper — handler value to Response."""

import pytest

from waypoint.http.response import Descriptor, Plain, Response
from waypoint.server.shaper import shape, to_response_value


class TestToResponseValue:
    def test_str_is_plain(self) -> None:
        assert to_response_value("hi") == Plain("hi")

    def test_bytes_is_plain(self) -> None:
        assert to_response_value(b"\x00\x01") == Plain(b"\x00\x01")

    def test_none_is_empty_plain(self) -> None:
        assert to_response_value(None) == Plain("")

    def test_dict_is_structured_descriptor(self) -> None:
        assert to_response_value({"a": 1}) == Descriptor(body={"a": 1})

    def test_variants_pass_through(self) -> None:
        descriptor = Descriptor(body="x", status=201)
        assert to_response_value(descriptor) is descriptor


class TestShapePlain:
    def test_str_uses_transport_defaults(self) -> None:
        response = shape("hello")
        assert response.status == 200
        assert response.content_type is None
        assert response.body == "hello"

    def test_bytes_verbatim(self) -> None:
        response = shape(b"\xff\xfe")
        assert response.body_bytes == b"\xff\xfe"


class TestShapeDescriptor:
    def test_status_and_content_type(self) -> None:
        response = shape(Descriptor(body="<p>hi</p>", status=201, content_type="text/html"))
        assert response.status == 201
        assert response.content_type == "text/html"
        assert response.text == "<p>hi</p>"

    def test_missing_status_defaults_to_200(self) -> None:
        assert shape(Descriptor(body="x", content_type="text/plain")).status == 200

    def test_text_body_without_content_type_omits_header(self) -> None:
        assert shape(Descriptor(body="x", status=202)).content_type is None

    def test_structured_body_gets_generic_type(self) -> None:
        response = shape(Descriptor(body={"ok": True}))
        assert response.content_type == "application/json"
        assert response.text == '{"ok":true}'

    def test_structured_body_keeps_declared_type(self) -> None:
        response = shape(Descriptor(body=[1, 2], content_type="application/vnd.api+json"))
        assert response.content_type == "application/vnd.api+json"
        assert response.text == "[1,2]"

    def test_raw_list_return(self) -> None:
        response = shape([1, 2, 3])
        assert response.status == 200
        assert response.json() == [1, 2, 3]


class TestShapeResponse:
    def test_response_passes_through(self) -> None:
        response = Response("x", status=204)
        assert shape(response) is response


class TestIdempotence:
    @pytest.mark.parametrize(
        "value",
        [
            "text",
            b"bytes",
            Plain("plain"),
            Descriptor(body="d", status=418, content_type="text/plain"),
            Descriptor(body={"nested": {"a": [1, 2]}}),
        ],
    )
    def test_shaping_twice_is_equal(self, value) -> None:
        first = shape(value)
        second = shape(value)
        assert (first.status, first.content_type, first.headers, first.body) == (
            second.status,
            second.content_type,
            second.headers,
            second.body,
        )
