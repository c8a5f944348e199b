"""Route pattern grammar.

Formally, a pattern is either exactly ``/`` (the root), or a sequence of
``/segment`` tokens optionally closed by a trailing ``/`` or ``/..field``::

    pattern   := "/" | ( "/" segment )+ [ "/" | "/.." field? ]
    segment   := ":" field? | static
    static    := [A-Za-z0-9.\\-_~!$&'()*+,;=:@]+
    field     := Python identifier

Examples::

    "/"                   -> (TrailingSlash(),)
    "/about"              -> (Literal("about"),)
    "/about/"             -> (Literal("about"), TrailingSlash())
    "/hello/:name"        -> (Literal("hello"), Param("name"))
    "/color/:/:/:"        -> (Literal("color"), Param(), Param(), Param())
    "/select/..sub"       -> (Literal("select"), SubRoute("sub"))

Compilation happens once per distinct source string; the result is cached
and immutable.
"""

import logging
import re
from functools import lru_cache

from sentier.errors import PatternError
from sentier.routing.segments import Literal, Param, Pattern, Segment, SubRoute, TrailingSlash

logger = logging.getLogger("sentier.routing")

STATIC_CHARS = re.compile(r"[A-Za-z0-9.\-_~!$&'()*+,;=:@]+")

SUB_ROUTE_PREFIX = ".."
PARAM_PREFIX = ":"


@lru_cache(maxsize=None)
def compile_pattern(source: str) -> Pattern:
    """Compile *source* into a ``Pattern``.

    ``""`` is accepted as a synonym for the root ``/``.

    Raises ``PatternError`` if the source is malformed.
    """
    if source in ("", "/"):
        return Pattern((TrailingSlash(),), source)

    if not source.startswith("/"):
        raise PatternError(source, "a pattern must start with '/'")

    tokens = source[1:].split("/")
    last = len(tokens) - 1
    segments: list[Segment] = []

    for index, token in enumerate(tokens):
        if token.startswith(SUB_ROUTE_PREFIX):
            if index != last:
                raise PatternError(
                    source, "a '..' sub-route is only allowed as the last segment", index
                )
            name = token[len(SUB_ROUTE_PREFIX) :] or None
            _check_field_name(source, name, index)
            segments.append(SubRoute(name))
        elif token.startswith(PARAM_PREFIX):
            name = token[len(PARAM_PREFIX) :] or None
            _check_field_name(source, name, index)
            segments.append(Param(name))
        elif not token:
            if index != last:
                raise PatternError(source, "empty segment ('//')", index)
            segments.append(TrailingSlash())
        elif STATIC_CHARS.fullmatch(token):
            segments.append(Literal(token))
        else:
            bad = sorted({c for c in token if not STATIC_CHARS.fullmatch(c)})
            raise PatternError(
                source,
                f"static segment {token!r} contains disallowed characters {''.join(bad)!r}",
                index,
            )

    pattern = Pattern(tuple(segments), source)
    _check_captures(pattern)
    logger.debug("Compiled route pattern %r -> %r", source, pattern.segments)
    return pattern


def _check_field_name(source: str, name: str | None, index: int) -> None:
    if name is not None and not name.isidentifier():
        raise PatternError(source, f"{name!r} is not a valid field name", index)


def _check_captures(pattern: Pattern) -> None:
    """Reject duplicate names and named/anonymous mixes."""
    captures = pattern.captures
    names = pattern.field_names

    seen: set[str] = set()
    for name in names:
        if name in seen:
            raise PatternError(pattern.source, f"duplicate field name {name!r}")
        seen.add(name)

    if names and len(names) != len(captures):
        raise PatternError(
            pattern.source, "a pattern cannot mix named and anonymous captures"
        )
