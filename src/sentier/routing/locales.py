"""Locale filtering for route alternatives.

An alternative declared without locales serves every locale. During
parsing the caller may restrict the acceptable locales; ``None`` means
anything goes. Locale codes are the usual ``"en"``, ``"en-US"``, ``"fr-FR"``.
"""

from typing import TypeAlias

Locales: TypeAlias = tuple[str, ...]


def accepts(accepted: Locales | None, route_locales: Locales) -> bool:
    """True if an alternative with *route_locales* may match."""
    if accepted is None or not route_locales:
        return True
    return any(locale in accepted for locale in route_locales)


def narrow(accepted: Locales | None, route_locales: Locales) -> Locales | None:
    """The locales a sub-route may match once this alternative matched."""
    if not route_locales:
        return accepted
    if accepted is None:
        return route_locales
    return tuple(locale for locale in route_locales if locale in accepted)


def resulting(accepted: Locales | None, route_locales: Locales) -> Locales:
    """The locales reported for a successful match of a leaf alternative."""
    if not route_locales:
        return accepted or ()
    if accepted is None:
        return route_locales
    return tuple(locale for locale in route_locales if locale in accepted)


def serves(route_locales: Locales, locale: str | None) -> bool:
    """True if an alternative can be used to generate a URL for *locale*.

    Locale-free alternatives serve everything, including ``None``.
    """
    if not route_locales:
        return True
    return locale is not None and locale in route_locales
