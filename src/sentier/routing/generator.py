"""URL path generation: the inverse of the matcher.

``generate_path`` joins segments with ``/`` exactly the way
``tokenize_path`` splits them, so a generated path is always accepted by
the pattern it was generated from.
"""

from collections.abc import Mapping
from urllib.parse import quote, unquote

from sentier.errors import GenerationError
from sentier.routing.segments import Literal, Param, Pattern, SubRoute, TrailingSlash

# RFC 3986 sub-delims; unreserved characters are never quoted by ``quote``.
SAFE_PARAM_CHARS = "!$&'()*+,;="


def encode_param(value: str) -> str:
    """Percent-encode *value* for use as a single path segment.

    Unreserved and sub-delim characters pass through; everything else,
    ``/``, ``%``, ``?``, ``#``, spaces and non-ASCII included, is
    UTF-8 percent-encoded.
    """
    return quote(value, safe=SAFE_PARAM_CHARS)


def decode_param(raw: str) -> str:
    """Percent-decode a captured path segment.

    Raises ``ValueError`` (``UnicodeDecodeError``) if the escapes are not
    valid UTF-8.
    """
    return unquote(raw, errors="strict")


def generate_path(
    pattern: Pattern,
    values: Mapping[str | int, str],
    *,
    encode: bool = True,
    sub_path: str | None = None,
) -> str:
    """Render *pattern* with *values*.

    *values* maps parameter names (or positions, for anonymous
    parameters) to already-formatted strings. *sub_path* is the nested
    router's path for a ``SubRoute`` pattern and must start with ``/``.

    Raises ``GenerationError`` if a value or the sub-path is missing, or
    if the final segment is a parameter with an empty value (it would
    render as a trailing slash).
    """
    out: list[str] = []
    position = 0
    last = len(pattern.segments) - 1

    for index, seg in enumerate(pattern.segments):
        match seg:
            case Literal(text):
                out.append(f"/{text}")
            case Param(name):
                key = name if name is not None else position
                position += 1
                if key not in values:
                    msg = f"No value for parameter {key!r} of pattern {str(pattern)!r}"
                    raise GenerationError(msg)
                value = values[key]
                if not value and index == last:
                    msg = (
                        f"Parameter {key!r} of pattern {str(pattern)!r} is the last segment "
                        "and cannot be empty"
                    )
                    raise GenerationError(msg)
                out.append("/" + (encode_param(value) if encode else value))
            case TrailingSlash():
                out.append("/")
            case SubRoute():
                if sub_path is None or not sub_path.startswith("/"):
                    msg = f"Pattern {str(pattern)!r} needs a sub-route path starting with '/'"
                    raise GenerationError(msg)
                out.append(sub_path)

    return "".join(out)
