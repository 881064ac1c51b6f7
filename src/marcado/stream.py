"""Line-oriented token stream for block parsing.

A ``TokenStream`` is an immutable list of lines plus a single cursor. Block
handlers look ahead with ``peek`` (any offset, including negative ones, never
moves the cursor) and claim lines with ``consume``.

    >>> stream = TokenStream("# Title\\n\\nBody")
    >>> stream.peek().match(r"^#+ ").group(0)
    '# '
    >>> stream.peek(1).is_empty()
    True
    >>> stream.consume()
    '# Title'
    >>> stream.line()
    1

Thread Safety:
A fresh stream is created for every parse and sub-parse. Cursors are never
shared between instances.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

_NEWLINES = re.compile(r"\r\n?")


@dataclass(frozen=True, slots=True)
class LineView:
    """Read-only view of one line at a lookahead offset.

    ``text`` is None when the offset falls outside the input.
    """

    text: str | None

    def match(self, pattern: str | re.Pattern[str]) -> re.Match[str] | None:
        """Match ``pattern`` at the start of the line (``re.match`` semantics)."""
        if self.text is None:
            return None
        if isinstance(pattern, str):
            return re.match(pattern, self.text)
        return pattern.match(self.text)

    def is_empty(self) -> bool:
        """True for missing lines and lines holding only whitespace."""
        return self.text is None or not self.text.strip()

    def is_eos(self) -> bool:
        """True when the view lies past the end of the input."""
        return self.text is None


class TokenStream:
    """Cursor over the lines of a markdown source."""

    __slots__ = ("_lines", "_pos")

    def __init__(self, text: str) -> None:
        self._lines: tuple[str, ...] = tuple(_NEWLINES.sub("\n", text).split("\n"))
        self._pos = 0

    def peek(self, offset: int = 0) -> LineView:
        """View the line ``offset`` lines away from the cursor."""
        index = self._pos + offset
        if 0 <= index < len(self._lines):
            return LineView(self._lines[index])
        return LineView(None)

    def consume(self, extra: int = 0) -> str:
        """Advance past ``1 + extra`` lines and return them joined by newlines."""
        start = self._pos
        self._pos = min(self._pos + 1 + extra, len(self._lines))
        return "\n".join(self._lines[start : self._pos])

    def line(self) -> int:
        """Index of the current line (0 for the first line of input)."""
        return self._pos

    def is_eos(self) -> bool:
        """True once every line has been consumed."""
        return self._pos >= len(self._lines)

    def __len__(self) -> int:
        return len(self._lines)


__all__ = ["LineView", "TokenStream"]
