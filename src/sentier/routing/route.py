"""Route, Alternative and RouteMatch frozen dataclasses."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from sentier.http.query import QueryField
    from sentier.routing.router import Router
    from sentier.routing.segments import Pattern


@dataclass(frozen=True, slots=True)
class Alternative:
    """One pattern of a route variant, e.g. the French spelling.

    ``fields`` lists the dataclass fields bound by the pattern's captures,
    in capture order (parameters first, then the sub-route).
    ``locales`` is empty when the alternative serves every locale.
    """

    pattern: Pattern
    fields: tuple[str, ...]
    locales: tuple[str, ...] = ()
    sub: Router | None = None

    def field_for(self, key: str | int) -> str:
        """The field bound by capture *key* (a name or a position)."""
        if isinstance(key, str):
            return key
        return self.fields[key]

    @property
    def sub_field(self) -> str | None:
        """The field holding the nested route value, if any."""
        if self.pattern.sub_route is None:
            return None
        return self.fields[-1]


@dataclass(frozen=True, slots=True)
class Route:
    """A route variant and its alternatives, in priority order.

    Created by ``Router.add()``; replaced, never mutated, when another
    alternative is declared for the same variant.
    """

    variant: type
    alternatives: tuple[Alternative, ...]
    query: tuple[QueryField, ...] = ()
    types: dict[str, Any] | None = None

    @property
    def name(self) -> str:
        return self.variant.__name__


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of a successful route match.

    ``value`` is the variant instance. ``locales`` lists the locales of
    the alternative that matched (empty when none apply).
    """

    value: Any
    locales: tuple[str, ...] = ()

    @property
    def variant(self) -> type:
        return type(self.value)
