"""Path codec — canonical string keys for taxonomy paths.

A path is a tuple of domain names descending from the root; ``()`` is
the root itself.  Keys are built by prefixing every segment with ``/``
and escaping inside segments::

    ()              -> ""
    ("A", "B")      -> "/A/B"
    ("a/b",)        -> "/a\\/b"
    ("x\\y",)       -> "/x\\\\y"

Only ``\\\\`` and ``\\/`` are valid escapes, so every key decodes to
exactly one path and names containing the separator never collide.

INVARIANT: ``decode_path(encode_path(p)) == p`` for every path.
"""

from __future__ import annotations

from collections.abc import Sequence

from taxctl.domain.errors import MalformedKeyError

Path = tuple[str, ...]

ROOT: Path = ()
ROOT_KEY = ""
SEPARATOR = "/"
ESCAPE = "\\"


def _escape(segment: str) -> str:
    return segment.replace(ESCAPE, ESCAPE * 2).replace(SEPARATOR, ESCAPE + SEPARATOR)


def _split(text: str, key: str) -> list[str]:
    """Split *text* on unescaped separators, resolving escapes."""
    segments: list[str] = []
    current: list[str] = []
    chars = iter(text)
    for ch in chars:
        if ch == ESCAPE:
            nxt = next(chars, None)
            if nxt is None:
                raise MalformedKeyError(key, "dangling escape at end of key")
            if nxt not in (ESCAPE, SEPARATOR):
                raise MalformedKeyError(key, f"invalid escape sequence {ESCAPE}{nxt}")
            current.append(nxt)
        elif ch == SEPARATOR:
            segments.append("".join(current))
            current = []
        else:
            current.append(ch)
    segments.append("".join(current))
    return segments


def encode_path(path: Sequence[str]) -> str:
    """Encode *path* into its canonical key."""
    return "".join(SEPARATOR + _escape(segment) for segment in path)


def decode_path(key: str) -> Path:
    """Decode a key produced by :func:`encode_path`.

    Raises:
        MalformedKeyError: If *key* could not have been produced by
            :func:`encode_path`.
    """
    if key == ROOT_KEY:
        return ROOT
    if not key.startswith(SEPARATOR):
        raise MalformedKeyError(key, f"key must start with {SEPARATOR!r}")
    return tuple(_split(key[1:], key))


def parse_path(text: str) -> Path:
    """Parse a user-typed path such as ``Physics/Quantum``.

    A leading ``/`` is optional and ``""`` or ``/`` mean the root.
    Uses the same escapes as keys; empty segments are rejected.
    """
    stripped = text.strip()
    if stripped in ("", SEPARATOR):
        return ROOT
    body = stripped[1:] if stripped.startswith(SEPARATOR) else stripped
    segments = _split(body, text)
    if any(not segment for segment in segments):
        raise MalformedKeyError(text, "empty domain name in path")
    return tuple(segments)


def format_path(path: Sequence[str]) -> str:
    """Render *path* for display; the inverse of :func:`parse_path`."""
    if not path:
        return SEPARATOR
    return SEPARATOR.join(_escape(segment) for segment in path)
