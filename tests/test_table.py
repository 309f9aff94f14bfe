"""Tests for waypoint.routing.table — ordered first-match route table."""

import pytest

from waypoint.http.query import QueryParams
from waypoint.routing.pattern import compile_pattern
from waypoint.routing.table import RouteTable


def _first() -> str:
    return "first"


def _second() -> str:
    return "second"


class TestRegister:
    def test_appends_in_order(self) -> None:
        table = RouteTable()
        table.register("/a", "GET", _first)
        table.register("/b", "POST", _second)

        assert [r.path for r in table.routes] == ["/a", "/b"]
        assert len(table) == 2

    def test_method_is_uppercased(self) -> None:
        table = RouteTable()
        route = table.register("/a", "get", _first)
        assert route.method == "GET"

    def test_accepts_compiled_pattern(self) -> None:
        table = RouteTable()
        pattern = compile_pattern("/users/:id")
        route = table.register(pattern, "GET", _first)
        assert route.pattern is pattern

    def test_duplicates_are_accepted(self) -> None:
        table = RouteTable()
        table.register("/a", "GET", _first)
        table.register("/a", "GET", _second)
        assert len(table) == 2

    def test_register_after_freeze_fails(self) -> None:
        table = RouteTable()
        table.freeze()
        assert table.frozen is True
        with pytest.raises(RuntimeError, match="frozen"):
            table.register("/a", "GET", _first)


class TestFind:
    def test_no_routes(self) -> None:
        assert RouteTable().find("/anything", "GET") is None

    def test_captures_and_query(self) -> None:
        table = RouteTable()
        table.register("/users/:id", "GET", _first)
        query = QueryParams(b"active=true")

        match = table.find("/users/42", "GET", query)

        assert match is not None
        assert match.captures == ("42",)
        assert match.query is query
        assert match.params == {"id": "42"}

    def test_default_query_is_empty(self) -> None:
        table = RouteTable()
        table.register("/a", "GET", _first)
        match = table.find("/a", "GET")
        assert match is not None
        assert len(match.query) == 0

    def test_first_registered_wins(self) -> None:
        table = RouteTable()
        table.register("/users/:id", "GET", _first)
        table.register("/users/me", "GET", _second)

        match = table.find("/users/me", "GET")
        assert match is not None
        assert match.route.handler is _first

    def test_duplicate_is_shadowed(self) -> None:
        table = RouteTable()
        table.register("/a", "GET", _first)
        table.register("/a", "GET", _second)

        match = table.find("/a", "GET")
        assert match is not None
        assert match.route.handler is _first

    def test_method_mismatch_falls_through(self) -> None:
        table = RouteTable()
        table.register("/items", "POST", _first)
        table.register("/items", "GET", _second)

        match = table.find("/items", "GET")
        assert match is not None
        assert match.route.handler is _second

    def test_method_mismatch_only_is_not_found(self) -> None:
        table = RouteTable()
        table.register("/items", "POST", _first)
        assert table.find("/items", "GET") is None

    def test_method_is_case_insensitive(self) -> None:
        table = RouteTable()
        table.register("/a", "GET", _first)
        assert table.find("/a", "get") is not None

    def test_find_works_after_freeze(self) -> None:
        table = RouteTable()
        table.register("/a", "GET", _first)
        table.freeze()
        assert table.find("/a", "GET") is not None
