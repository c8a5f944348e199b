"""Sentier: an enum-style router that parses and generates URLs.

Declare each route as a dataclass and its URL shape as a pattern; the same
declaration drives both directions.

Basic usage::

    from dataclasses import dataclass

    from sentier import Router, query

    router = Router("app")

    @router.route("/")
    @dataclass(frozen=True)
    class Home: ...

    @router.route("/about", locales=("en", "en-US"))
    @router.route("/a-propos", locales="fr")
    @dataclass(frozen=True)
    class About: ...

    @router.route("/hello/:name")
    @dataclass(frozen=True)
    class Hello:
        name: str
        age: int | None = query(optional=True)

    router.match("/hello/John%20Doe?age=30").value  # Hello("John Doe", 30)
    router.url_for(Hello("John Doe"))               # "/hello/John%20Doe"
    router.url_for(About(), locale="fr")            # "/a-propos"

Sub-routes delegate the rest of the path to another router::

    admin = Router("admin")

    @router.route("/admin/..page", sub=admin)
    @dataclass(frozen=True)
    class Admin:
        page: object
"""

__version__ = "0.1.0"
__all__ = [
    "ConfigurationError",
    "FailureReason",
    "GenerationError",
    "HTTPError",
    "Mismatch",
    "NotFound",
    "PatternError",
    "QueryParams",
    "RouteMatch",
    "Router",
    "RouterConfig",
    "SentierError",
    "compile_pattern",
    "query",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import sentier`` fast while providing a clean top-level API.
    """
    if name == "Router":
        from sentier.routing.router import Router

        return Router

    if name == "RouterConfig":
        from sentier.config import RouterConfig

        return RouterConfig

    if name == "RouteMatch":
        from sentier.routing.route import RouteMatch

        return RouteMatch

    if name in ("Mismatch", "FailureReason"):
        from sentier.routing import matcher as _matcher

        return getattr(_matcher, name)

    if name == "compile_pattern":
        from sentier.routing.grammar import compile_pattern

        return compile_pattern

    if name in ("QueryParams", "query"):
        from sentier.http import query as _query

        return getattr(_query, name)

    if name in (
        "ConfigurationError",
        "GenerationError",
        "HTTPError",
        "NotFound",
        "PatternError",
        "SentierError",
    ):
        from sentier import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
