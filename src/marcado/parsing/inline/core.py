"""Simple inline handlers: code spans, autolinks, hard line breaks.

Every handler follows the same shape: replace the constructs it recognizes
by placeholders registered with ``parser.add_inline`` and pass the rewritten
text on to the next pipeline stage.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from typing import TYPE_CHECKING

from marcado.nodes import Code, LineBreak, Link, Literal, Node

if TYPE_CHECKING:
    from marcado.parser import Parser, ParserState


def apply_inlines(
    parser: Parser,
    pattern: re.Pattern[str],
    build: Callable[[re.Match[str]], Node | None],
    text: str,
    state: ParserState,
) -> list[Node | str]:
    """Substitute every match of ``pattern`` by a placeholder, then continue.

    ``build`` may return None to leave a match untouched.
    """

    def substitute(match: re.Match[str]) -> str:
        node = build(match)
        if node is None:
            return match.group(0)
        return parser.add_inline(state, node)

    return parser.parse_inlines(pattern.sub(substitute, text), state)


# A run of n backticks closes at the next run of exactly n
_CODE_SPAN = re.compile(r"(?<!`)(`+)(?!`)(.+?)(?<!`)\1(?!`)", re.DOTALL)


class InlineCodeHandler:
    """Code span: ```code``` or ````with ` inside````."""

    def parse(self, parser: Parser, text: str, state: ParserState) -> list[Node | str]:
        if "`" not in text:
            return parser.parse_inlines(text, state)

        def build(m: re.Match[str]) -> Node:
            content = m.group(2)
            if len(content) > 2 and content[0] == " " and content[-1] == " ":
                content = content[1:-1]
            return Code(children=[Literal(value=parser.restore(content))], inline=True)

        return apply_inlines(parser, _CODE_SPAN, build, text, state)


_AUTOLINK = re.compile(
    r"<(?:(?P<url>(?:https?|ftp|mailto):[^'\"<>\s\x02\x03]+)"
    r"|(?P<email>[\w.+-]+@[\w-]+(?:\.[\w-]+)+))>"
)


class InlineAutolinksHandler:
    """Autolink: ``<https://example.com>`` or ``<user@example.com>``."""

    def parse(self, parser: Parser, text: str, state: ParserState) -> list[Node | str]:
        if "<" not in text:
            return parser.parse_inlines(text, state)

        def build(m: re.Match[str]) -> Node:
            if m.group("email"):
                address = parser.unescape(m.group("email"))
                return Link(children=[address], href="mailto:" + address)
            url = parser.unescape(m.group("url"))
            return Link(children=[url], href=url)

        return apply_inlines(parser, _AUTOLINK, build, text, state)


_TRAILING_SPACES = re.compile(r" +$", re.MULTILINE)
_SPACE_BREAK = re.compile(r" {2,}(?=\n)")
_BACKSLASH_BREAK = re.compile(r" *\\(?=\n)")


class InlineLineBreakHandler:
    """Hard line break: two or more trailing spaces or a trailing backslash.

    The last line of a block never ends in a break. Inside headings the
    trailing spaces are dropped instead.
    """

    def parse(self, parser: Parser, text: str, state: ParserState) -> list[Node | str]:
        if "atx-header" in state.context or "setext-header" in state.context:
            return parser.parse_inlines(_TRAILING_SPACES.sub("", text), state)

        if "\n" not in text:
            return parser.parse_inlines(text, state)

        text = _SPACE_BREAK.sub(lambda m: parser.add_inline(state, LineBreak()), text)
        return apply_inlines(parser, _BACKSLASH_BREAK, lambda m: LineBreak(), text, state)


__all__ = [
    "InlineAutolinksHandler",
    "InlineCodeHandler",
    "InlineLineBreakHandler",
    "apply_inlines",
]
