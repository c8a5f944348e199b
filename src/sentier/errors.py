"""Sentier exception hierarchy.

Shared across the grammar compiler, Router, and query codec so every
module raises and catches the same types.

Only declaration-time problems and URL generation raise. A path that
simply does not match is an ordinary result (``Mismatch``), not an error.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from sentier.routing.matcher import Mismatch


class SentierError(Exception):
    """Base for all sentier-specific errors."""


class ConfigurationError(SentierError):
    """Raised when a route declaration is invalid.

    Typically raised by ``Router.add()`` at import or startup time.
    """


class PatternError(ConfigurationError):
    """A pattern string does not follow the route grammar.

    Carries the offending source and, where known, the index of the
    ``/``-delimited token that was rejected.
    """

    def __init__(self, source: str, message: str, token: int | None = None) -> None:
        self.source = source
        self.message = message
        self.token = token
        where = f" (token {token})" if token is not None else ""
        super().__init__(f"Invalid route pattern {source!r}{where}: {message}")


class GenerationError(SentierError):
    """A URL could not be generated for a route value."""


@dataclass(frozen=True, slots=True)
class HTTPError(SentierError):
    """An error that maps directly to an HTTP status code.

    Only raised on request by ``Router.resolve()``; adapters catch it and
    turn it into a response.
    """

    status: int
    detail: str = ""

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class NotFound(HTTPError):  # noqa: N818 (conventional name in web frameworks)
    """404: no route matched the request path.

    ``mismatch`` holds the structured failure the router produced.
    """

    mismatch: Mismatch | None

    def __init__(self, detail: str = "Not Found", mismatch: Mismatch | None = None) -> None:
        super().__init__(status=404, detail=detail)
        object.__setattr__(self, "mismatch", mismatch)
