"""Link and image handlers.

Handles inline links ``[text](href "title")``, reference links
``[text][id]``, ``[text][]`` and ``[text]``, and their image forms.

Link text is located by balanced-bracket matching, so ``[a[b]c](d)`` is a
single link. The text is parsed again with a ``link`` (or ``image``) context
tag; link handlers opt out of the ``link`` context, so links never nest,
while images inside link text still work.

Input text is already escaped: backslash escapes appear as markers, so the
scanners below never see a backslash-escaped bracket or parenthesis.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Literal as LiteralType

from marcado.nodes import Image, LineBreak, Link, Literal, Node
from marcado.parser import PLACEHOLDER_END, PLACEHOLDER_START
from marcado.parsing.inline.core import apply_inlines

if TYPE_CHECKING:
    from marcado.parser import Parser, ParserState

LinkKind = LiteralType["link", "image"]

_PLACEHOLDER = re.compile(PLACEHOLDER_START + r"(\d+)" + PLACEHOLDER_END)

_TITLE_CLOSERS = {'"': '"', "'": "'", "(": ")"}


def _matching_bracket(text: str, pos: int) -> int:
    """Index of the ``]`` balancing the ``[`` at ``pos``, or -1."""
    depth = 0
    for i in range(pos, len(text)):
        char = text[i]
        if char == "[":
            depth += 1
        elif char == "]":
            depth -= 1
            if depth == 0:
                return i
    return -1


def _skip_whitespace(text: str, pos: int) -> int:
    while pos < len(text) and text[pos] in " \t\n":
        pos += 1
    return pos


def _parse_destination(text: str, pos: int) -> tuple[str, int] | None:
    """Parse a link destination starting at ``pos``.

    Either angle-bracket delimited (``<url with spaces>``) or a raw run of
    non-space characters with balanced parentheses.
    """
    if pos < len(text) and text[pos] == "<":
        end = text.find(">", pos + 1)
        if end == -1 or "\n" in text[pos + 1 : end]:
            return None
        return text[pos + 1 : end], end + 1

    start = pos
    depth = 0
    while pos < len(text):
        char = text[pos]
        if char in " \t\n":
            break
        if char == "(":
            depth += 1
        elif char == ")":
            if depth == 0:
                break
            depth -= 1
        pos += 1

    if depth:
        return None
    return text[start:pos], pos


def _parse_target(text: str, pos: int) -> tuple[str, str | None, int] | None:
    """Parse ``(href "title")`` starting at the opening parenthesis.

    Returns:
        (href, title, end_pos) or None if invalid
    """
    if pos >= len(text) or text[pos] != "(":
        return None

    pos = _skip_whitespace(text, pos + 1)
    destination = _parse_destination(text, pos)
    if destination is None:
        return None
    href, pos = destination

    title = None
    after_href = pos
    pos = _skip_whitespace(text, pos)
    closer = _TITLE_CLOSERS.get(text[pos]) if pos < len(text) else None
    if closer is not None and pos > after_href:
        end = text.find(closer, pos + 1)
        if end == -1:
            return None
        title = text[pos + 1 : end]
        pos = _skip_whitespace(text, end + 1)

    if pos >= len(text) or text[pos] != ")":
        return None
    return href, title, pos + 1


def _plain_text(node: Node | str) -> str:
    if isinstance(node, str):
        return node
    if isinstance(node, Literal):
        return node.value
    if isinstance(node, LineBreak):
        return "\n"
    return "".join(_plain_text(child) for child in getattr(node, "children", ()))


def source_text(parser: Parser, raw: str, state: ParserState) -> str:
    """Raw span of a construct, with nested constructs flattened to text."""

    def flatten(m: re.Match[str]) -> str:
        return _plain_text(state.nodes[int(m.group(1))])

    return parser.unescape(_PLACEHOLDER.sub(flatten, raw))


class InlineLinkHandler:
    """Inline link or image: ``[text](href "title")``, ``![alt](src)``."""

    def __init__(self, kind: LinkKind = "link") -> None:
        self.kind = kind
        self._opener = "![" if kind == "image" else "["
        self._node_class = Image if kind == "image" else Link

    def parse(self, parser: Parser, text: str, state: ParserState) -> list[Node | str]:
        if self._opener not in text:
            return parser.parse_inlines(text, state)

        parts: list[str] = []
        pos = 0
        while True:
            start = text.find(self._opener, pos)
            if start == -1:
                break

            bracket = start + len(self._opener) - 1
            close = _matching_bracket(text, bracket)
            target = _parse_target(text, close + 1) if close != -1 else None
            if target is None:
                parts.append(text[pos : bracket + 1])
                pos = bracket + 1
                continue

            href, title, end = target
            node = self._node_class(
                children=parser.parse_inlines(text[bracket + 1 : close], state, self.kind),
                href=source_text(parser, href, state),
                title=source_text(parser, title, state) if title is not None else None,
                source=source_text(parser, text[start:end], state),
            )
            parts.append(text[pos:start])
            parts.append(parser.add_inline(state, node))
            pos = end

        parts.append(text[pos:])
        return parser.parse_inlines("".join(parts), state)

    def exclude_from_subparse(self, context: tuple[str, ...]) -> bool:
        return self.kind == "link" and "link" in context


# Footnote references ([^id]) are left to the footnotes plugin
_REFERENCE_LINK = re.compile(r"\[(?!\^)([^\[\]]+)\](?:[ ]?\[([^\[\]]*)\])?")
_REFERENCE_IMAGE = re.compile(r"!\[([^\[\]]+)\](?:[ ]?\[([^\[\]]*)\])?")


class InlineRefImageAndLinkHandler:
    """Reference link or image: ``[text][id]``, ``[text][]`` or ``[text]``.

    The id defaults to the text. Nodes are created with ``subtype="ref"``
    and completed by ``Parser.resolve_links`` once the whole document has
    been parsed.
    """

    def __init__(self, kind: LinkKind = "link") -> None:
        self.kind = kind
        self._pattern = _REFERENCE_IMAGE if kind == "image" else _REFERENCE_LINK
        self._node_class = Image if kind == "image" else Link

    def parse(self, parser: Parser, text: str, state: ParserState) -> list[Node | str]:
        if "[" not in text:
            return parser.parse_inlines(text, state)

        def build(m: re.Match[str]) -> Node:
            label = m.group(2) or m.group(1)
            return self._node_class(
                children=parser.parse_inlines(m.group(1), state, self.kind),
                subtype="ref",
                id=source_text(parser, label, state),
                source=source_text(parser, m.group(0), state),
            )

        return apply_inlines(parser, self._pattern, build, text, state)

    def exclude_from_subparse(self, context: tuple[str, ...]) -> bool:
        return self.kind == "link" and "link" in context


__all__ = ["InlineLinkHandler", "InlineRefImageAndLinkHandler", "source_text"]
