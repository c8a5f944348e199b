"""Query string codec.

``QueryParams`` is the parsed, immutable view of a query string.
``query()`` marks a route dataclass field as coming from the query string
instead of the path::

    @dataclass(frozen=True, kw_only=True)
    class Search:
        q: str = query()                      # required
        page: int | None = query(optional=True)
        size: int = query(default=20)

Parsing ignores keys nobody declared. Serialisation omits optional fields
set to ``None`` and defaulted fields equal to their default.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any
from urllib.parse import parse_qs, urlencode

from sentier.routing.matcher import FailureReason, Mismatch
from sentier.routing.params import convert_param, field_types, format_param

QUERY_METADATA_KEY = "sentier.query"


class QueryParams(Mapping[str, str]):
    """Immutable query string parameters, read by every level of a route.

    Keeps the raw string (``raw``) next to the parsed values. Indexing
    gives the first value for a key and ``get_list`` gives all of them.
    A key without ``=`` is present with an empty value; ``+`` is a space.
    """

    _data: dict[str, list[str]]
    _raw: str

    __slots__ = ("_data", "_raw")

    def __init__(self, query_string: str | bytes = "") -> None:
        if isinstance(query_string, bytes):
            query_string = query_string.decode("latin-1")
        object.__setattr__(self, "_raw", query_string)
        parsed = parse_qs(query_string, keep_blank_values=True)
        object.__setattr__(self, "_data", parsed)

    def __getitem__(self, key: str) -> str:
        return self._data[key][0]

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        items = ", ".join(f"{k!r}: {self[k]!r}" for k in self)
        return f"QueryParams({{{items}}})"

    @property
    def raw(self) -> str:
        return self._raw

    def get(self, key: str, default: str | None = None) -> str | None:  # type: ignore[override]
        """Return the first value for *key*, or *default* if missing."""
        values = self._data.get(key)
        if values:
            return values[0]
        return default

    def get_list(self, key: str) -> list[str]:
        """Return all values for *key*."""
        return list(self._data.get(key, []))


class QueryKind(Enum):
    REQUIRED = "required"
    OPTIONAL = "optional"
    DEFAULT = "default"


@dataclass(frozen=True, slots=True)
class QueryField:
    """A declared query string field of a route variant."""

    name: str
    kind: QueryKind
    annotation: Any = str
    default: Any = None


def query(*, optional: bool = False, default: Any = dataclasses.MISSING) -> Any:
    """Declare a dataclass field as a query string parameter.

    With neither argument the parameter is required. ``optional=True``
    makes a missing key ``None``; ``default=`` supplies a value instead.
    """
    if optional and default is not dataclasses.MISSING:
        msg = "A query field is either optional or has a default, not both"
        raise TypeError(msg)

    if optional:
        return dataclasses.field(default=None, metadata={QUERY_METADATA_KEY: QueryKind.OPTIONAL})
    if default is not dataclasses.MISSING:
        return dataclasses.field(default=default, metadata={QUERY_METADATA_KEY: QueryKind.DEFAULT})
    return dataclasses.field(metadata={QUERY_METADATA_KEY: QueryKind.REQUIRED})


def query_fields(cls: type) -> tuple[QueryField, ...]:
    """Collect the ``query()`` fields of dataclass *cls*, in field order."""
    hints = field_types(cls)
    result: list[QueryField] = []
    for f in dataclasses.fields(cls):
        kind = f.metadata.get(QUERY_METADATA_KEY)
        if kind is None:
            continue
        default = f.default if f.default is not dataclasses.MISSING else None
        result.append(QueryField(f.name, kind, hints.get(f.name, str), default))
    return tuple(result)


def parse_query_fields(
    fields: Iterable[QueryField],
    params: QueryParams,
    *,
    path: str = "",
    strict_bool: bool = True,
) -> dict[str, Any] | Mismatch:
    """Read *fields* out of *params*.

    Returns the converted values by field name, or a ``QUERY`` mismatch
    for a missing required key or a value that fails to convert.
    """
    values: dict[str, Any] = {}
    for f in fields:
        raw = params.get(f.name)
        if raw is None:
            if f.kind is QueryKind.REQUIRED:
                return Mismatch(
                    FailureReason.QUERY, path, f"missing required query parameter {f.name!r}"
                )
            values[f.name] = f.default
            continue
        try:
            values[f.name] = convert_param(raw, f.annotation, strict_bool=strict_bool)
        except ValueError as exc:
            return Mismatch(
                FailureReason.QUERY, path, f"query parameter {f.name!r}: {exc}"
            )
    return values


def query_pairs(fields: Iterable[QueryField], value: object) -> list[tuple[str, str]]:
    """Formatted ``(key, value)`` pairs for the query fields of *value*."""
    pairs: list[tuple[str, str]] = []
    for f in fields:
        current = getattr(value, f.name)
        if f.kind is QueryKind.OPTIONAL and current is None:
            continue
        if f.kind is QueryKind.DEFAULT and current == f.default:
            continue
        pairs.append((f.name, format_param(current)))
    return pairs


def serialize_query(pairs: Iterable[tuple[str, str]]) -> str:
    """Encode *pairs* as ``k=v&k=v`` (space as ``+``, ``+`` as ``%2B``)."""
    return urlencode(list(pairs))
