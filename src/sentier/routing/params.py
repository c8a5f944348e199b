"""Parameter parsing and formatting.

Built-in converters for captured path segments and query values, keyed by
the annotated field type. Any other type is called with the string
(``uuid.UUID``, ``decimal.Decimal``, ...).
"""

import dataclasses
import logging
import re
import types
from enum import Enum
from typing import Any, Union, get_args, get_origin, get_type_hints

# (regex_pattern, python_type) for each type with a textual shape
CONVERTERS: dict[type, tuple[str, type]] = {
    int: (r"[+-]?\d+", int),
    float: (r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?|[+-]?(?:inf|nan)", float),
}

TRUE_VALUES = frozenset({"true", "1", "yes", "on"})
FALSE_VALUES = frozenset({"false", "0", "no", "off"})

logger = logging.getLogger("sentier.routing")


def unwrap_optional(annotation: Any) -> Any:
    """Return ``X`` for ``X | None`` / ``Optional[X]``, else *annotation*."""
    if get_origin(annotation) in (Union, types.UnionType):
        args = [a for a in get_args(annotation) if a is not type(None)]
        if len(args) == 1:
            return args[0]
    return annotation


def convert_param(value: str, annotation: Any, *, strict_bool: bool = True) -> Any:
    """Convert a captured string to the *annotation* type.

    Raises ``ValueError`` if the string cannot be converted.
    """
    target = unwrap_optional(annotation)

    if target in (str, Any, object) or not callable(target):
        return value

    if target is bool:
        lowered = value.lower()
        if lowered in TRUE_VALUES:
            return True
        if lowered in FALSE_VALUES or not strict_bool:
            return False
        msg = f"{value!r} is not a boolean"
        raise ValueError(msg)

    if target in CONVERTERS:
        pattern, target_type = CONVERTERS[target]
        if not re.fullmatch(pattern, value):
            msg = f"{value!r} is not a valid {target_type.__name__}"
            raise ValueError(msg)
        return target_type(value)

    if isinstance(target, type) and issubclass(target, Enum):
        for member in target:
            if format_param(member.value) == value:
                return member
        msg = f"{value!r} is not a valid {target.__name__}"
        raise ValueError(msg)

    try:
        return target(value)
    except (TypeError, ArithmeticError) as exc:
        raise ValueError(str(exc)) from exc


def format_param(value: Any) -> str:
    """Format a field value as the string ``convert_param`` parses back."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        return format_param(value.value)
    return str(value)


def field_types(cls: type) -> dict[str, Any]:
    """Resolve the annotated type of every dataclass field of *cls*.

    Annotations that cannot be evaluated (forward references to names
    not importable from the class's module) fall back to the builtin
    named by the string, or to ``str`` with a debug record naming the
    field.
    """
    try:
        return get_type_hints(cls)
    except NameError:
        return {f.name: _resolve_field_type(cls, f) for f in dataclasses.fields(cls)}


def _resolve_field_type(cls: type, field: dataclasses.Field[Any]) -> Any:
    resolved = _resolve_type(field.type)
    if isinstance(field.type, str) and field.type != "str" and resolved is str:
        logger.debug(
            "%s.%s: cannot resolve annotation %r, treating it as str",
            cls.__name__,
            field.name,
            field.type,
        )
    return resolved


def _resolve_type(annotation: Any) -> Any:
    """Resolve common type names from string annotations."""
    if not isinstance(annotation, str):
        return annotation
    _builtins: dict[str, type] = {
        "str": str,
        "int": int,
        "float": float,
        "bool": bool,
    }
    return _builtins.get(annotation, str)
