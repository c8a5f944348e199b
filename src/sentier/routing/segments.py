"""Compiled pattern segments.

A pattern such as ``/hello/:name/..sub`` compiles to::

    Pattern((Literal("hello"), Param("name"), SubRoute("sub")))

``TrailingSlash`` and ``SubRoute`` only ever appear as the last segment.
"""

from dataclasses import dataclass, field
from typing import TypeAlias


@dataclass(frozen=True, slots=True)
class Literal:
    """Static text that must equal the path segment exactly."""

    text: str


@dataclass(frozen=True, slots=True)
class Param:
    """A single path segment captured as a string.

    ``name`` is ``None`` for an anonymous ``:`` parameter, which is keyed
    by its position among the pattern's captures.
    """

    name: str | None = None


@dataclass(frozen=True, slots=True)
class TrailingSlash:
    """The path must end with ``/``."""


@dataclass(frozen=True, slots=True)
class SubRoute:
    """The rest of the path is delegated to a nested router."""

    name: str | None = None


Segment: TypeAlias = Literal | Param | TrailingSlash | SubRoute


@dataclass(frozen=True, slots=True)
class Pattern:
    """An immutable, compiled route pattern.

    ``source`` is kept for messages only; two patterns compare equal when
    their segments do.
    """

    segments: tuple[Segment, ...]
    source: str = field(default="", compare=False)

    @property
    def terminal(self) -> TrailingSlash | SubRoute | None:
        """The closing ``TrailingSlash`` or ``SubRoute``, if any."""
        if self.segments and isinstance(self.segments[-1], (TrailingSlash, SubRoute)):
            return self.segments[-1]
        return None

    @property
    def body(self) -> tuple[Segment, ...]:
        """Segments that consume exactly one path segment each."""
        if self.terminal is not None:
            return self.segments[:-1]
        return self.segments

    @property
    def params(self) -> tuple[Param, ...]:
        return tuple(s for s in self.segments if isinstance(s, Param))

    @property
    def sub_route(self) -> SubRoute | None:
        terminal = self.terminal
        return terminal if isinstance(terminal, SubRoute) else None

    @property
    def has_trailing_slash(self) -> bool:
        return isinstance(self.terminal, TrailingSlash)

    @property
    def captures(self) -> tuple[Param | SubRoute, ...]:
        """Params followed by the sub-route, in binding order."""
        sub = self.sub_route
        return self.params + ((sub,) if sub is not None else ())

    @property
    def field_names(self) -> tuple[str, ...]:
        """Names of the named captures, in order."""
        return tuple(c.name for c in self.captures if c.name is not None)

    @property
    def is_anonymous(self) -> bool:
        """True if at least one capture has no name."""
        return any(c.name is None for c in self.captures)

    def __str__(self) -> str:
        return self.source or render_pattern(self)


def render_pattern(pattern: Pattern) -> str:
    """Render *pattern* back to its canonical source form."""
    out: list[str] = []
    for seg in pattern.segments:
        match seg:
            case Literal(text):
                out.append(f"/{text}")
            case Param(name):
                out.append(f"/:{name or ''}")
            case TrailingSlash():
                out.append("/")
            case SubRoute(name):
                out.append(f"/..{name or ''}")
    return "".join(out)
