"""Runtime path splitting.

The tokenizer does not percent-decode; captured parameters are decoded
by the matcher's caller and literals never need decoding.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class PathTokens:
    """A request path split on ``/``.

    ``"/"``      -> segments=(),             trailing_slash=True
    ``"/a"``     -> segments=("a",),         trailing_slash=False
    ``"/a/"``    -> segments=("a",),         trailing_slash=True
    ``"/a//b"``  -> segments=("a", "", "b"), trailing_slash=False
    """

    segments: tuple[str, ...]
    trailing_slash: bool

    def remainder(self, start: int) -> str:
        """Re-render the unconsumed tail from segment *start* onward.

        Returns ``""`` when nothing is left, including no trailing slash.
        """
        rest = self.segments[start:]
        if not rest:
            return "/" if self.trailing_slash else ""
        tail = "/" + "/".join(rest)
        return tail + "/" if self.trailing_slash else tail


def tokenize_path(path: str) -> PathTokens:
    """Split *path* into segments and a trailing-slash flag.

    Raises ``ValueError`` if *path* does not start with ``/``.
    """
    if not path.startswith("/"):
        msg = f"Path must start with '/': {path!r}"
        raise ValueError(msg)

    body = path[1:]
    if not body:
        return PathTokens((), trailing_slash=True)

    trailing_slash = body.endswith("/")
    if trailing_slash:
        body = body[:-1]
    return PathTokens(tuple(body.split("/")), trailing_slash)
