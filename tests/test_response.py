"""Tests for waypoint.http.response — Response and payload helpers."""

import pytest

from waypoint.http.response import Descriptor, Plain, Response, error, json


class TestResponse:
    def test_defaults(self) -> None:
        response = Response()
        assert response.status == 200
        assert response.content_type is None
        assert response.headers == ()

    def test_chaining_returns_new_instances(self) -> None:
        base = Response("x")
        changed = base.with_status(201).with_header("X-A", "1").with_content_type("text/plain")
        assert base.status == 200
        assert changed.status == 201
        assert changed.headers == (("X-A", "1"),)
        assert changed.content_type == "text/plain"

    def test_body_conversions(self) -> None:
        assert Response("é").body_bytes == "é".encode()
        assert Response("é".encode()).text == "é"

    def test_frozen(self) -> None:
        with pytest.raises(AttributeError):
            Response().status = 500  # type: ignore[misc]


class TestVariants:
    def test_plain_default_body(self) -> None:
        assert Plain().body == ""

    def test_descriptor_defaults(self) -> None:
        d = Descriptor()
        assert d.status is None
        assert d.content_type is None


class TestJsonHelper:
    def test_content_type_and_compact_body(self) -> None:
        d = json({"id": "42", "active": "true"})
        assert d.content_type == "application/json"
        assert d.body == '{"id":"42","active":"true"}'
        assert d.status is None

    def test_explicit_status(self) -> None:
        assert json([], status=201).status == 201

    def test_non_ascii(self) -> None:
        assert json({"name": "José"}).body == '{"name":"Jos\\u00e9"}'


class TestErrorHelper:
    def test_status_and_body(self) -> None:
        d = error("not allowed", 403)
        assert d.status == 403
        assert d.content_type == "application/json"
        assert d.body == '{"error":"not allowed"}'
