"""Backslash escape handling.

Before any other processing, every backslash-escaped ASCII punctuation
character is replaced by a two-character marker: ``ESCAPE_MARK`` followed by
a private-use code point identifying the character. No handler pattern
matches either character, so ``\\*`` can never open emphasis and ``\\[`` can
never start a link.

Two reverse transforms exist:

- ``unescape`` yields the bare punctuation, for prose and attribute values.
- ``restore`` yields the original ``\\`` + punctuation, for code content
  where backslashes are literal.

    >>> escape("\\\\*not emphasis\\\\*") == "\\x1a\\ue009not emphasis\\x1a\\ue009"
    True
    >>> unescape(escape("\\\\*"))
    '*'
    >>> restore(escape("\\\\*"))
    '\\\\*'
"""

from __future__ import annotations

import re

# ASCII punctuation that can be backslash-escaped
ESCAPABLE_CHARS = "!\"#$%&'()*+,-./:;<=>?@[\\]^_`{|}~"

# First character of every escape marker (ASCII SUB)
ESCAPE_MARK = "\x1a"

# Private-use block that encodes which character was escaped
_CODE_BASE = 0xE000

_ESCAPE_PATTERN = re.compile(r"\\([!\"#$%&'()*+,\-./:;<=>?@\[\\\]^_`{|}~])")
_MARKER_PATTERN = re.compile(
    ESCAPE_MARK + "([" + chr(_CODE_BASE) + "-" + chr(_CODE_BASE + len(ESCAPABLE_CHARS) - 1) + "])"
)


def _encode(match: re.Match[str]) -> str:
    return ESCAPE_MARK + chr(_CODE_BASE + ESCAPABLE_CHARS.index(match.group(1)))


def _decode(match: re.Match[str]) -> str:
    return ESCAPABLE_CHARS[ord(match.group(1)) - _CODE_BASE]


def escape(text: str) -> str:
    """Replace backslash escapes with private markers.

    Idempotent: already escaped text contains no backslash-punctuation pairs
    that were not present in the input.
    """
    if "\\" not in text:
        return text
    return _ESCAPE_PATTERN.sub(_encode, text)


def unescape(text: str) -> str:
    """Turn markers into the bare punctuation they stand for."""
    if ESCAPE_MARK not in text:
        return text
    return _MARKER_PATTERN.sub(_decode, text)


def restore(text: str) -> str:
    """Exact inverse of ``escape``: markers become ``\\`` + punctuation."""
    if ESCAPE_MARK not in text:
        return text
    return _MARKER_PATTERN.sub(lambda m: "\\" + _decode(m), text)


__all__ = [
    "ESCAPABLE_CHARS",
    "ESCAPE_MARK",
    "escape",
    "restore",
    "unescape",
]
