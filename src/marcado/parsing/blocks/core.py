"""Core block handlers: headings, quotes, code, rules, definitions, HTML, paragraphs.

Each handler inspects the stream at the cursor and either claims the
position (consuming lines and appending to the AST) or returns False without
touching anything. The list handler lives in ``marcado.parsing.blocks.list``.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from marcado.nodes import (
    BlockQuote,
    Code,
    Heading,
    HorizontalRule,
    Html,
    LinkDefinition,
    Literal,
    Node,
    Paragraph,
)

if TYPE_CHECKING:
    from marcado.parser import Parser
    from marcado.stream import TokenStream


# =============================================================================
# Headings
# =============================================================================

_SETEXT_UNDERLINE = re.compile(r"^(?:=+|-+)[ \t]*$")

# Lines that open another construct cannot be setext heading content
_NOT_HEADING_TEXT = re.compile(
    r"^ {0,3}(?:#{1,6}(?:[ \t]|$)|>|`{3}|~{3}|[*+-][ \t]|[0-9]+\.[ \t]|(?:[*_-][ \t]*){3,}$)"
)

_ATX_HEADING = re.compile(r"^(#{1,6})[ \t]+(.+?)(?:[ \t]*#+)?[ \t]*$")


class SetextHeaderHandler:
    """Setext heading: a line underlined with ``=`` (level 1) or ``-`` (level 2).

    Not valid inside list items, where ``-`` lines belong to the list.
    """

    def parse(self, parser: Parser, stream: TokenStream, ast: list[Node]) -> bool:
        underline = stream.peek(1).match(_SETEXT_UNDERLINE)
        if not underline:
            return False

        current = stream.peek()
        if current.is_empty() or current.match(_NOT_HEADING_TEXT):
            return False

        ast.append(
            Heading(
                level=1 if underline.group(0)[0] == "=" else 2,
                children=parser.parse_inlines(current.text.strip(), None, "setext-header"),
            )
        )
        stream.consume(1)
        return True

    def exclude_from_subparse(self, context: tuple[str, ...]) -> bool:
        return "list" in context


class AtxHeaderHandler:
    """ATX heading: ``# Title`` through ``###### Title``.

    An optional closing run of ``#`` is stripped. Like setext headings, ATX
    headings are not recognized inside list items.
    """

    def parse(self, parser: Parser, stream: TokenStream, ast: list[Node]) -> bool:
        m = stream.peek().match(_ATX_HEADING)
        if not m:
            return False
        assert m.lastindex == 2, "ATX heading pattern must capture marker and text"

        ast.append(
            Heading(
                level=len(m.group(1)),
                children=parser.parse_inlines(m.group(2), None, "atx-header"),
            )
        )
        stream.consume()
        return True

    def exclude_from_subparse(self, context: tuple[str, ...]) -> bool:
        return "list" in context


# =============================================================================
# Block quotes
# =============================================================================

_QUOTE_LINE = re.compile(r"^ {0,3}> ?(.*)$")


class BlockquoteHandler:
    """Block quote: consecutive ``>`` lines plus lazy continuation lines.

    The quote ends at the first blank line. A quote directly following
    another one (separated only by blank lines) extends the earlier node.
    """

    def parse(self, parser: Parser, stream: TokenStream, ast: list[Node]) -> bool:
        if not stream.peek().match(_QUOTE_LINE):
            return False

        lines: list[str] = []
        while not stream.peek().is_empty():
            view = stream.peek()
            m = view.match(_QUOTE_LINE)
            lines.append(m.group(1) if m else view.text.strip())
            stream.consume()

        children = parser.subparser("blockquote").parse("\n".join(lines))

        previous = ast[-1] if ast else None
        if isinstance(previous, BlockQuote):
            previous.children.extend(children)
        else:
            ast.append(BlockQuote(children=list(children)))
        return True


# =============================================================================
# Code blocks
# =============================================================================

_INDENTED_LINE = re.compile(r"^(?:\t| {4})(.*)$")
_FENCE_OPEN = re.compile(r"^ {0,3}(`{3,}|~{3,})(.*)$")


class CodeHandler:
    """Indented code block: lines starting with a tab or four spaces.

    Only starts after a blank line (or at the start of input), so indented
    paragraph continuation lines stay in their paragraph. Blank lines inside
    the block are kept when another indented line follows them.
    """

    def parse(self, parser: Parser, stream: TokenStream, ast: list[Node]) -> bool:
        if not stream.peek().match(_INDENTED_LINE) or not stream.peek(-1).is_empty():
            return False

        lines: list[str] = []
        while True:
            view = stream.peek()
            if view.is_empty():
                if view.is_eos() or not stream.peek(1).match(_INDENTED_LINE):
                    break
                lines.append("")
            else:
                m = view.match(_INDENTED_LINE)
                if not m:
                    break
                lines.append(m.group(1))
            stream.consume()

        ast.append(Code(children=[Literal(value=parser.restore("\n".join(lines)))]))
        return True


class FencedCodeHandler:
    """Fenced code block delimited by ``````` or ``~~~``.

    The first word of the info string becomes ``Code.source``. The closing
    fence uses the same character and is at least as long as the opening
    one. An unterminated block runs to the end of the input.
    """

    def parse(self, parser: Parser, stream: TokenStream, ast: list[Node]) -> bool:
        m = stream.peek().match(_FENCE_OPEN)
        if not m:
            return False

        fence, info = m.group(1), m.group(2).strip()
        if fence[0] == "`" and "`" in info:
            return False

        closing = re.compile(rf"^ {{0,3}}{re.escape(fence[0])}{{{len(fence)},}}[ \t]*$")
        stream.consume()

        lines: list[str] = []
        while not stream.is_eos():
            if stream.peek().match(closing):
                stream.consume()
                break
            lines.append(stream.consume())

        language = info.split()[0] if info else ""
        ast.append(
            Code(
                children=[Literal(value=parser.restore("\n".join(lines)))],
                source=parser.unescape(language),
            )
        )
        return True


# =============================================================================
# Horizontal rules
# =============================================================================

_RULE = re.compile(r"^ {0,3}(?:[*_-][ \t]*){3,}$")


class HorizontalRulerHandler:
    """Horizontal rule: three or more ``*``, ``_`` or ``-``, spaces allowed."""

    def parse(self, parser: Parser, stream: TokenStream, ast: list[Node]) -> bool:
        if not stream.peek().match(_RULE):
            return False
        ast.append(HorizontalRule())
        stream.consume()
        return True


# =============================================================================
# Reference link definitions
# =============================================================================

_TITLE = r"""(?:"([^"]*)"|'([^']*)'|\(([^)]*)\))"""
_DEFINITION = re.compile(
    r"^ {0,3}\[(?!\^)([^\]]+)\]:[ \t]*<?([^\s>]+)>?(?:[ \t]+" + _TITLE + r")?[ \t]*$"
)
_TITLE_LINE = re.compile(r"^[ \t]+" + _TITLE + r"[ \t]*$")


def _title_of(m: re.Match[str], first_group: int) -> str | None:
    for group in range(first_group, first_group + 3):
        if m.group(group) is not None:
            return m.group(group)
    return None


class ReferenceLinkDefinitionHandler:
    """Reference definition: ``[id]: href "title"``.

    The title may use double quotes, single quotes or parentheses, and may
    sit alone on the following line. Definitions are only recognized at the
    top level of a document. ``[^id]:`` lines belong to the footnotes plugin.
    """

    def parse(self, parser: Parser, stream: TokenStream, ast: list[Node]) -> bool:
        m = stream.peek().match(_DEFINITION)
        if not m:
            return False
        stream.consume()

        title = _title_of(m, 3)
        if title is None:
            title_line = stream.peek().match(_TITLE_LINE)
            if title_line:
                title = _title_of(title_line, 1)
                stream.consume()

        ast.append(
            LinkDefinition(
                id=parser.unescape(m.group(1)),
                href=parser.unescape(m.group(2)),
                title=parser.unescape(title) if title is not None else None,
            )
        )
        return True

    def exclude_from_subparse(self, context: tuple[str, ...]) -> bool:
        return True


# =============================================================================
# Raw HTML
# =============================================================================

_HTML_OPEN = re.compile(r"^<([a-z][a-z0-9]*)(?:\s[^>]*)?>?[ \t]*$")
_COMMENT_OPEN = re.compile(r"^ {0,3}<!--")


class HtmlHandler:
    """HTML block from a line holding only an opening tag to its closing line.

    The block closes on ``<tag />`` or ``</tag>`` at the start of a line.
    Content is kept verbatim; an unclosed block runs to the end of input.
    """

    def parse(self, parser: Parser, stream: TokenStream, ast: list[Node]) -> bool:
        m = stream.peek().match(_HTML_OPEN)
        if not m:
            return False

        tag = re.escape(m.group(1))
        closing = re.compile(rf"^\s*(?:<{tag}\b[^>]*/>|</{tag}\s*>)\s*$")

        lines = [stream.consume()]
        if not closing.match(lines[0]):
            while not stream.is_eos():
                line = stream.consume()
                lines.append(line)
                if closing.match(line):
                    break

        ast.append(Html(html=parser.restore("\n".join(lines))))
        return True


class CommentHandler:
    """HTML comment from ``<!--`` to the line containing ``-->``."""

    def parse(self, parser: Parser, stream: TokenStream, ast: list[Node]) -> bool:
        m = stream.peek().match(_COMMENT_OPEN)
        if not m:
            return False

        lines = [stream.consume()]
        if "-->" not in lines[0][m.end() :]:
            while not stream.is_eos():
                line = stream.consume()
                lines.append(line)
                if "-->" in line:
                    break

        ast.append(Html(html=parser.restore("\n".join(lines)) + "\n", subtype="comment"))
        return True


# =============================================================================
# Paragraphs
# =============================================================================


class ParagraphHandler:
    """Fallback handler: consecutive non-blank lines form a paragraph.

    Always claims the position, so it must be the last block handler. From
    the second line on, every other handler gets a chance to interrupt the
    paragraph; the interrupting handler appends its node after this one.
    """

    def parse(self, parser: Parser, stream: TokenStream, ast: list[Node]) -> bool:
        node = Paragraph()
        ast.append(node)

        lines: list[str] = []
        while not stream.peek().is_empty():
            if lines and self._interrupted(parser, stream, ast):
                break
            lines.append(stream.consume().lstrip())

        # Trailing spaces on the last line are not a hard break
        text = "\n".join(lines).rstrip(" \t")
        node.children = parser.parse_inlines(text, None, "paragraph")
        return True

    def _interrupted(self, parser: Parser, stream: TokenStream, ast: list[Node]) -> bool:
        for handler in parser.block_handlers:
            if isinstance(handler, ParagraphHandler):
                continue
            if handler.parse(parser, stream, ast):
                return True
        return False


__all__ = [
    "AtxHeaderHandler",
    "BlockquoteHandler",
    "CodeHandler",
    "CommentHandler",
    "FencedCodeHandler",
    "HorizontalRulerHandler",
    "HtmlHandler",
    "ParagraphHandler",
    "ReferenceLinkDefinitionHandler",
    "SetextHeaderHandler",
]
