"""Footnotes plugin for marcado.

Adds support for footnote references and definitions.

Usage:
    >>> md = Markdown(plugins=["footnotes"])
    >>> md("Text with footnote[^1].\n\n[^1]: Footnote content.")
    '<p>Text with footnote<sup class="footnote-ref">...'

Syntax:
Reference: [^identifier]
Definition: [^identifier]: Content here

Multi-line definitions:
[^note]: First paragraph of footnote.

    Second paragraph with indent.

Features:
- Numeric or named identifiers: [^1], [^note]
- Definitions only at the top level of a document
- Multi-paragraph footnotes with indentation

Thread Safety:
This plugin is stateless and thread-safe.

"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from marcado.nodes import FootnoteDefinition, FootnoteReference, Node
from marcado.parsing.inline.core import apply_inlines
from marcado.parsing.inline.links import source_text
from marcado.plugins import register_plugin

if TYPE_CHECKING:
    from marcado.parser import Parser, ParserState
    from marcado.stream import TokenStream

_REFERENCE = re.compile(r"\[\^([^\]\s]+)\]")
_DEFINITION = re.compile(r"^ {0,3}\[\^([^\]\s]+)\]:[ \t]*(.*)$")
_CONTINUATION = re.compile(r"^(?:\t| {4})(.*)$")


class FootnoteReferenceHandler:
    """Inline ``[^id]`` reference."""

    def parse(self, parser: Parser, text: str, state: ParserState) -> list[Node | str]:
        if "[^" not in text:
            return parser.parse_inlines(text, state)

        def build(m: re.Match[str]) -> Node:
            return FootnoteReference(
                id=source_text(parser, m.group(1), state),
                source=source_text(parser, m.group(0), state),
            )

        return apply_inlines(parser, _REFERENCE, build, text, state)


class FootnoteDefinitionHandler:
    """Block ``[^id]: content`` definition with indented continuation lines."""

    def parse(self, parser: Parser, stream: TokenStream, ast: list[Node]) -> bool:
        m = stream.peek().match(_DEFINITION)
        if not m:
            return False
        stream.consume()

        lines = [m.group(2)]
        while not stream.is_eos():
            view = stream.peek()
            if view.is_empty():
                if not stream.peek(1).match(_CONTINUATION):
                    break
                lines.append("")
            else:
                continuation = view.match(_CONTINUATION)
                if not continuation:
                    break
                lines.append(continuation.group(1))
            stream.consume()

        ast.append(
            FootnoteDefinition(
                id=parser.unescape(m.group(1)),
                children=parser.subparser("footnote").parse("\n".join(lines)),
            )
        )
        return True

    def exclude_from_subparse(self, context: tuple[str, ...]) -> bool:
        return True


@register_plugin("footnotes")
class FootnotesPlugin:
    """Plugin adding [^1] footnote support.

    Footnotes are:
    1. Parsed as inline references [^id]
    2. Defined as block elements [^id]: content
    3. Rendered as a footnotes section at document end

    """

    @property
    def name(self) -> str:
        return "footnotes"

    def block_handlers(self) -> tuple[FootnoteDefinitionHandler, ...]:
        return (FootnoteDefinitionHandler(),)

    def inline_handlers(self) -> tuple[FootnoteReferenceHandler, ...]:
        return (FootnoteReferenceHandler(),)


__all__ = ["FootnoteDefinitionHandler", "FootnoteReferenceHandler", "FootnotesPlugin"]
