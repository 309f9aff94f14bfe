"""Parsed query string, handed to every handler right after the captures."""

from collections.abc import Iterator, Mapping
from urllib.parse import parse_qs


class QueryParams(Mapping[str, str]):
    """Immutable view over a parsed query string.

    Repeated keys keep all their values (``get_list``); plain indexing,
    iteration and ``**`` unpacking see the first one.
    """

    __slots__ = ("_parsed", "_raw")

    def __init__(self, query_string: bytes | str = b"") -> None:
        raw = query_string.encode("latin-1") if isinstance(query_string, str) else query_string
        self._raw = raw
        self._parsed: dict[str, list[str]] = parse_qs(
            raw.decode("latin-1"), keep_blank_values=True
        )

    def __getitem__(self, key: str) -> str:
        return self._parsed[key][0]

    def __iter__(self) -> Iterator[str]:
        return iter(self._parsed)

    def __len__(self) -> int:
        return len(self._parsed)

    def __repr__(self) -> str:
        return f"QueryParams({self.to_dict()!r})"

    def get(self, key: str, default: str | None = None) -> str | None:  # type: ignore[override]
        values = self._parsed.get(key)
        return values[0] if values else default

    def get_list(self, key: str) -> list[str]:
        """All values for *key*, in query-string order."""
        return list(self._parsed.get(key, ()))

    def to_dict(self) -> dict[str, str]:
        """First value per key, ready for JSON encoding."""
        return {key: values[0] for key, values in self._parsed.items()}

    @property
    def raw(self) -> bytes:
        """The query string exactly as received."""
        return self._raw
