"""Declarative router over route variants.

Each variant is a dataclass; each declared pattern is an alternative for
that variant. Parsing tries variants in declaration order and, inside a
variant, alternatives in declaration order. The first alternative that
fully succeeds wins, with no best-match search.
"""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Callable, Iterable, Iterator
from functools import partial
from typing import Any

from sentier.config import RouterConfig
from sentier.errors import ConfigurationError, GenerationError, NotFound
from sentier.http.query import (
    QueryField,
    QueryParams,
    parse_query_fields,
    query_fields,
    query_pairs,
    serialize_query,
)
from sentier.routing import locales as _locales
from sentier.routing.generator import decode_param, generate_path
from sentier.routing.grammar import compile_pattern
from sentier.routing.matcher import Captures, FailureReason, Mismatch, first_match
from sentier.routing.params import convert_param, field_types, format_param
from sentier.routing.route import Alternative, Route, RouteMatch
from sentier.routing.segments import Pattern
from sentier.routing.tokenize import PathTokens, tokenize_path

logger = logging.getLogger("sentier.routing")


class Router:
    """Router over a set of route variants.

    Usage::

        router = Router("app")

        @router.route("/")
        @dataclass(frozen=True)
        class Home: ...

        @router.route("/hello/:name")
        @dataclass(frozen=True)
        class Hello:
            name: str

        router.match("/hello/world").value   # Hello(name="world")
        router.url_for(Hello("world"))       # "/hello/world"
    """

    __slots__ = ("_compiled", "_routes", "config", "name")

    def __init__(self, name: str | None = None, *, config: RouterConfig | None = None) -> None:
        self.name = name
        self.config = config or RouterConfig()
        self._routes: dict[type, Route] = {}
        self._compiled = False

    def __repr__(self) -> str:
        return f"Router({self.name!r}, routes={len(self._routes)})"

    # -- Declaration --

    def add(
        self,
        variant: type,
        pattern: str,
        *,
        locales: str | Iterable[str] = (),
        sub: Router | None = None,
    ) -> None:
        """Add *pattern* as the lowest-priority alternative of *variant*.

        Must be called before compile(). Raises ``PatternError`` for a
        malformed pattern and ``ConfigurationError`` when the pattern's
        captures do not fit the dataclass fields.
        """
        self._register(variant, pattern, locales, sub, first=False)

    def route(
        self,
        pattern: str,
        *,
        locales: str | Iterable[str] = (),
        sub: Router | None = None,
    ) -> Callable[[type], type]:
        """Class decorator form of ``add()``.

        Stacked decorators read top-down: the topmost pattern has the
        highest priority.
        """

        def decorator(variant: type) -> type:
            self._register(variant, pattern, locales, sub, first=True)
            return variant

        return decorator

    def _register(
        self,
        variant: type,
        source: str,
        locales: str | Iterable[str],
        sub: Router | None,
        *,
        first: bool,
    ) -> None:
        if self._compiled:
            msg = "Cannot add routes after compilation."
            raise ConfigurationError(msg)

        if not isinstance(variant, type) or not dataclasses.is_dataclass(variant):
            msg = f"Route variants must be dataclasses, got {variant!r}"
            raise ConfigurationError(msg)

        pattern = compile_pattern(source)
        locale_codes = _locale_codes(locales)
        query = query_fields(variant)
        alternative = Alternative(
            pattern=pattern,
            fields=_bind_fields(variant, pattern, query),
            locales=locale_codes,
            sub=_check_sub(variant, pattern, sub),
        )

        existing = self._routes.get(variant)
        if existing is None:
            self._routes[variant] = Route(
                variant=variant,
                alternatives=(alternative,),
                query=query,
                types=field_types(variant),
            )
        else:
            self._routes[variant] = dataclasses.replace(
                existing,
                alternatives=_merge(existing.alternatives, alternative, first=first),
            )

        logger.debug(
            "Router %r: %s <- %r (locales=%s)",
            self.name,
            variant.__name__,
            source,
            ",".join(locale_codes) or "*",
        )

    @property
    def routes(self) -> list[Route]:
        """Return all declared routes, in matching order."""
        return list(self._routes.values())

    def __iter__(self) -> Iterator[Route]:
        return iter(self.routes)

    def __len__(self) -> int:
        return len(self._routes)

    def compile(self) -> None:
        """Freeze the router. No more routes can be added.

        Sub-routers are frozen along with it.
        """
        if self._compiled:
            return
        self._compiled = True
        for route in self._routes.values():
            for alternative in route.alternatives:
                if alternative.sub is not None:
                    alternative.sub.compile()
        logger.debug("Router %r compiled with %d route(s)", self.name, len(self._routes))

    # -- Parsing --

    def match(
        self, url: str, *, locales: str | Iterable[str] | None = None
    ) -> RouteMatch | Mismatch:
        """Parse *url* (path plus optional query string) into a route value.

        *locales* (one code or several) restricts which localized
        alternatives may match; ``None`` accepts all of them.

        Returns a ``RouteMatch`` on success, or a falsy ``Mismatch``.
        """
        self.compile()
        path, _, query_string = url.partition("?")
        if not path.startswith("/"):
            return Mismatch(FailureReason.MALFORMED_PATH, path, "a path must start with '/'")

        accepted = None if locales is None else _locale_codes(locales)
        result = self._match_tokens(tokenize_path(path), QueryParams(query_string), accepted)
        if isinstance(result, Mismatch):
            logger.debug("Router %r: no route for %r (%s)", self.name, url, result.root_cause)
        return result

    def resolve(self, url: str, *, locales: str | Iterable[str] | None = None) -> RouteMatch:
        """Like ``match()``, but raise ``NotFound`` instead of returning a mismatch."""
        result = self.match(url, locales=locales)
        if isinstance(result, Mismatch):
            raise NotFound(f"No route matches {url!r}", mismatch=result)
        return result

    def _match_tokens(
        self,
        tokens: PathTokens,
        params: QueryParams,
        accepted: tuple[str, ...] | None,
    ) -> RouteMatch | Mismatch:
        path = tokens.remainder(0)
        candidates = [
            (alternative.pattern, partial(self._build, route, alternative, params, accepted, path))
            for route in self._routes.values()
            for alternative in route.alternatives
        ]
        return first_match(candidates, tokens)

    def _build(
        self,
        route: Route,
        alternative: Alternative,
        params: QueryParams,
        accepted: tuple[str, ...] | None,
        path: str,
        captures: Captures,
    ) -> RouteMatch | Mismatch:
        """Turn the captures of one alternative into a route value."""
        if not _locales.accepts(accepted, alternative.locales):
            return Mismatch(
                FailureReason.LOCALE,
                path,
                f"{route.name} is only served for {', '.join(alternative.locales)}",
            )

        types = route.types or {}
        kwargs: dict[str, Any] = {}
        for key, raw in captures.params.items():
            name = alternative.field_for(key)
            try:
                text = decode_param(raw) if self.config.decode_params else raw
                kwargs[name] = convert_param(
                    text, types.get(name, str), strict_bool=self.config.strict_bool
                )
            except ValueError as exc:
                return Mismatch(FailureReason.CONVERSION, path, f"{route.name}.{name}: {exc}")

        sub_field = alternative.sub_field
        if alternative.sub is not None and sub_field is not None and captures.remainder is not None:
            nested = alternative.sub._match_tokens(
                tokenize_path(captures.remainder),
                params,
                _locales.narrow(accepted, alternative.locales),
            )
            if isinstance(nested, Mismatch):
                return Mismatch(
                    FailureReason.SUB_ROUTE,
                    captures.remainder,
                    f"{route.name}.{sub_field}",
                    cause=nested,
                )
            kwargs[sub_field] = nested.value
            result_locales = nested.locales
        else:
            result_locales = _locales.resulting(accepted, alternative.locales)

        query = parse_query_fields(
            route.query, params, path=path, strict_bool=self.config.strict_bool
        )
        if isinstance(query, Mismatch):
            return query
        kwargs.update(query)

        try:
            value = route.variant(**kwargs)
        except ValueError as exc:
            return Mismatch(FailureReason.CONVERSION, path, f"{route.name}: {exc}")

        return RouteMatch(value=value, locales=result_locales)

    # -- Generation --

    def url_for(self, value: object, *, locale: str | None = None) -> str:
        """Generate the URL of route *value* for *locale*.

        Query fields declared anywhere along a sub-route chain share one
        query string, outermost first.

        Raises ``GenerationError`` if *value* is not a declared variant or
        no alternative serves *locale*.
        """
        self.compile()
        pairs: list[tuple[str, str]] = []
        path = self._generate(value, locale, pairs)
        query_string = serialize_query(pairs)
        return f"{path}?{query_string}" if query_string else path

    def _generate(self, value: object, locale: str | None, pairs: list[tuple[str, str]]) -> str:
        route = self._routes.get(type(value))
        if route is None:
            msg = f"{type(value).__name__} is not a route of router {self.name!r}"
            raise GenerationError(msg)

        alternative = next(
            (alt for alt in route.alternatives if _locales.serves(alt.locales, locale)),
            None,
        )
        if alternative is None:
            msg = f"{route.name} has no alternative for locale {locale!r}"
            raise GenerationError(msg)

        values: dict[str | int, str] = {}
        for position, param in enumerate(alternative.pattern.params):
            key: str | int = param.name if param.name is not None else position
            values[key] = format_param(getattr(value, alternative.field_for(key)))

        pairs.extend(query_pairs(route.query, value))

        sub_path = None
        sub_field = alternative.sub_field
        if alternative.sub is not None and sub_field is not None:
            sub_path = alternative.sub._generate(getattr(value, sub_field), locale, pairs)

        return generate_path(
            alternative.pattern,
            values,
            encode=self.config.encode_params,
            sub_path=sub_path,
        )


def _locale_codes(locales: str | Iterable[str]) -> tuple[str, ...]:
    return (locales,) if isinstance(locales, str) else tuple(locales)


def _bind_fields(variant: type, pattern: Pattern, query: tuple[QueryField, ...]) -> tuple[str, ...]:
    """Map the pattern's captures onto the fields of *variant*.

    Named captures bind by name. Anonymous captures bind by position to
    the init fields that are not query fields, and must cover all of them.
    """
    query_names = {f.name for f in query}
    init_fields = [f for f in dataclasses.fields(variant) if f.init]
    path_fields = [f for f in init_fields if f.name not in query_names]
    path_names = [f.name for f in path_fields]
    source = pattern.source or str(pattern)

    if pattern.is_anonymous:
        if len(pattern.captures) != len(path_fields):
            msg = (
                f"Route {source!r} has {len(pattern.captures)} anonymous capture(s), "
                f"but {variant.__name__} has {len(path_fields)} path field(s)"
            )
            raise ConfigurationError(msg)
        return tuple(path_names)

    names = pattern.field_names
    for name in names:
        if name in query_names:
            msg = f"Route {source!r}: {variant.__name__}.{name} is declared as a query field"
            raise ConfigurationError(msg)
        if name not in path_names:
            msg = f"Route {source!r}: {variant.__name__} has no field {name!r}"
            raise ConfigurationError(msg)

    unbound = [
        f.name
        for f in path_fields
        if f.name not in names
        and f.default is dataclasses.MISSING
        and f.default_factory is dataclasses.MISSING
    ]
    if unbound:
        msg = (
            f"Route {source!r} does not bind {variant.__name__} "
            f"field(s) {', '.join(unbound)}"
        )
        raise ConfigurationError(msg)
    return names


def _check_sub(variant: type, pattern: Pattern, sub: Router | None) -> Router | None:
    source = pattern.source or str(pattern)
    if pattern.sub_route is not None and sub is None:
        msg = f"Route {source!r} of {variant.__name__} delegates to a sub-route; pass sub=<Router>"
        raise ConfigurationError(msg)
    if pattern.sub_route is None and sub is not None:
        msg = f"Route {source!r} of {variant.__name__} has no '..' segment for sub={sub!r}"
        raise ConfigurationError(msg)
    return sub


def _merge(
    alternatives: tuple[Alternative, ...],
    new: Alternative,
    *,
    first: bool,
) -> tuple[Alternative, ...]:
    """Add *new*, folding its locales into an alternative with the same pattern."""
    for index, existing in enumerate(alternatives):
        if existing.pattern == new.pattern and existing.sub is new.sub:
            if not existing.locales or not new.locales:
                merged_locales: tuple[str, ...] = ()
            else:
                merged_locales = existing.locales + tuple(
                    code for code in new.locales if code not in existing.locales
                )
            merged = dataclasses.replace(existing, locales=merged_locales)
            return alternatives[:index] + (merged,) + alternatives[index + 1 :]
    return (new, *alternatives) if first else (*alternatives, new)
