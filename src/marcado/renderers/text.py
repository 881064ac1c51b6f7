"""Plain text renderer: the readable text of a document, no markup.

Headings, paragraphs and list items keep their text; emphasis, links and
images are reduced to their content (image alt text); code blocks, raw HTML,
rules and definitions are dropped. Blocks are separated by blank lines.

Example:
    >>> from marcado import parse
    >>> PlainTextRenderer().render(parse("# Hello **World**\\n\\n- [docs](http://e.com)"))
    'Hello World\\n\\ndocs'
"""

from __future__ import annotations

from collections.abc import Sequence

from marcado.nodes import (
    BlockQuote,
    Code,
    FootnoteDefinition,
    FootnoteReference,
    Heading,
    HorizontalRule,
    Html,
    Item,
    LineBreak,
    LinkDefinition,
    List,
    Literal,
    Node,
    Paragraph,
)
from marcado.renderers.html import is_block


class PlainTextRenderer:
    """Render AST to plain text."""

    __slots__ = ()

    def render(self, ast: Sequence[Node]) -> str:
        """Render an AST to plain text with blocks separated by blank lines."""
        blocks: list[str] = []
        for node in ast:
            self._render_block(node, blocks)
        return "\n\n".join(block for block in blocks if block.strip()).strip()

    def _render_block(self, block: Node | str, out: list[str]) -> None:
        match block:
            case Heading() | Paragraph():
                out.append(self._inline_text(block.children))
            case BlockQuote() | FootnoteDefinition():
                for child in block.children:
                    self._render_block(child, out)
            case List():
                items = [self._item_text(item) for item in block.children]
                out.append("\n".join(item for item in items if item))
            case Item():
                out.append(self._item_text(block))
            case Code(inline=False) | Html() | HorizontalRule() | LinkDefinition():
                pass
            case _:
                out.append(self._inline_text([block]))

    def _item_text(self, item: Item) -> str:
        parts: list[str] = []
        inline: list[Node | str] = []
        for child in item.children:
            if is_block(child):
                parts.append(self._inline_text(inline))
                inline = []
                nested: list[str] = []
                self._render_block(child, nested)
                parts.extend(nested)
            else:
                inline.append(child)
        parts.append(self._inline_text(inline))
        return "\n".join(part for part in parts if part)

    def _inline_text(self, inlines: Sequence[Node | str]) -> str:
        parts: list[str] = []
        for inline in inlines:
            match inline:
                case str():
                    parts.append(inline)
                case Literal():
                    parts.append(inline.value)
                case Code():
                    parts.append(inline.text)
                case LineBreak():
                    pass  # The newline that follows stays in the text
                case FootnoteReference():
                    pass
                case Node():
                    parts.append(self._inline_text(getattr(inline, "children", ())))
        return "".join(parts)


__all__ = ["PlainTextRenderer"]
