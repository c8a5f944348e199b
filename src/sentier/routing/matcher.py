"""Pattern matching against tokenized paths.

Matching is a lockstep walk: each body segment of the pattern consumes
exactly one path segment, then the terminal segment (if any) decides what
happens to the rest. There is no backtracking inside a pattern. Across
alternatives, ``first_match`` tries candidates strictly in order and the
first complete success wins.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from enum import Enum
from typing import TypeAlias, TypeVar

from sentier.routing.segments import Literal, Param, Pattern, SubRoute, TrailingSlash
from sentier.routing.tokenize import PathTokens

logger = logging.getLogger("sentier.routing")


class FailureReason(Enum):
    """Why a path was rejected."""

    MALFORMED_PATH = "malformed_path"
    SEGMENT_COUNT = "segment_count"
    LITERAL_MISMATCH = "literal_mismatch"
    MISSING_TRAILING_SLASH = "missing_trailing_slash"
    UNEXPECTED_TRAILING_SLASH = "unexpected_trailing_slash"
    CONVERSION = "conversion"
    SUB_ROUTE = "sub_route"
    QUERY = "query"
    LOCALE = "locale"
    NO_MATCH = "no_match"


@dataclass(frozen=True, slots=True)
class Captures:
    """A successful walk of one pattern.

    ``params`` maps each parameter name, or its position for anonymous
    parameters, to the raw (still percent-encoded) segment.
    ``remainder`` is the unconsumed tail handed to a sub-route, else ``None``.
    """

    params: dict[str | int, str]
    remainder: str | None = None


@dataclass(frozen=True, slots=True)
class Mismatch:
    """A failed match. Always falsy, so callers can write::

        result = router.match(url)
        if not result:
            ...

    ``path`` is the path (or sub-route remainder) that was rejected.
    ``cause`` links to the underlying failure for ``SUB_ROUTE`` and
    ``NO_MATCH``; ``attempts`` lists every alternative's failure for
    ``NO_MATCH``.
    """

    reason: FailureReason
    path: str
    detail: str = ""
    cause: Mismatch | None = None
    attempts: tuple[Mismatch, ...] = field(default=())

    def __bool__(self) -> bool:
        return False

    def __str__(self) -> str:
        text = f"{self.reason.value} at {self.path!r}"
        if self.detail:
            text = f"{text}: {self.detail}"
        return text

    @property
    def root_cause(self) -> Mismatch:
        """Follow ``cause`` links down to the innermost failure."""
        current = self
        while current.cause is not None:
            current = current.cause
        return current


MatchResult: TypeAlias = Captures | Mismatch


def match_pattern(pattern: Pattern, tokens: PathTokens) -> MatchResult:
    """Walk *pattern* against *tokens*.

    Returns ``Captures`` on success, or a ``Mismatch`` naming the first
    segment that failed.
    """
    path = tokens.remainder(0)
    segments = tokens.segments
    params: dict[str | int, str] = {}
    position = 0

    for index, seg in enumerate(pattern.body):
        if index >= len(segments):
            return Mismatch(
                FailureReason.SEGMENT_COUNT,
                path,
                f"expected at least {len(pattern.body)} segments, got {len(segments)}",
            )
        part = segments[index]
        match seg:
            case Literal(text):
                if part != text:
                    return Mismatch(
                        FailureReason.LITERAL_MISMATCH,
                        path,
                        f"segment {index} is {part!r}, expected {text!r}",
                    )
            case Param(name):
                params[name if name is not None else position] = part
                position += 1

    consumed = len(pattern.body)
    terminal = pattern.terminal

    if isinstance(terminal, SubRoute):
        remainder = tokens.remainder(consumed)
        if not remainder:
            return Mismatch(FailureReason.SEGMENT_COUNT, path, "nothing left for the sub-route")
        return Captures(params, remainder)

    if len(segments) != consumed:
        return Mismatch(
            FailureReason.SEGMENT_COUNT,
            path,
            f"expected {consumed} segments, got {len(segments)}",
        )

    if isinstance(terminal, TrailingSlash) and not tokens.trailing_slash:
        return Mismatch(FailureReason.MISSING_TRAILING_SLASH, path)

    if terminal is None and tokens.trailing_slash:
        return Mismatch(FailureReason.UNEXPECTED_TRAILING_SLASH, path)

    return Captures(params)


T = TypeVar("T")


def first_match(
    candidates: Iterable[tuple[Pattern, Callable[[Captures], T | Mismatch]]],
    tokens: PathTokens,
) -> T | Mismatch:
    """Try each ``(pattern, build)`` candidate in order.

    *build* turns the raw captures into the caller's value and may itself
    reject them (conversion, sub-route or query failure) by returning a
    ``Mismatch``. A rejected candidate never affects the next one, which
    re-walks the path from the start. The first value built wins.
    """
    attempts: list[Mismatch] = []

    for pattern, build in candidates:
        captures = match_pattern(pattern, tokens)
        if isinstance(captures, Mismatch):
            attempts.append(captures)
            continue
        result = build(captures)
        if isinstance(result, Mismatch):
            attempts.append(result)
            continue
        return result

    path = tokens.remainder(0)
    logger.debug("No pattern matched %r after %d attempt(s)", path, len(attempts))
    return Mismatch(
        FailureReason.NO_MATCH,
        path,
        f"{len(attempts)} alternative(s) tried",
        cause=attempts[-1] if attempts else None,
        attempts=tuple(attempts),
    )
