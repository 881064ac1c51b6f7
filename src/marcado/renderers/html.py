"""HTML renderer using StringBuilder pattern.

Renders a marcado AST (a list of block nodes) to HTML. Every block ends with
a newline; inline content is written without separators.

Thread Safety:
All per-render state is encapsulated in RenderContext, created fresh for each
render() call. Multiple threads can safely share a single HtmlRenderer instance
and call render() concurrently without synchronization.

Footnotes:
Footnote definitions are collected before rendering. Referenced definitions
are emitted in a footnotes section after the document, in order of first
reference; unreferenced ones are dropped.
"""

from __future__ import annotations

import html
from collections.abc import Sequence
from dataclasses import dataclass, field
from urllib.parse import quote as url_quote

from marcado.nodes import (
    BlockQuote,
    Code,
    Emphasis,
    FootnoteDefinition,
    FootnoteReference,
    Heading,
    HorizontalRule,
    Html,
    Image,
    Item,
    LineBreak,
    Link,
    LinkDefinition,
    List,
    Literal,
    Node,
    Paragraph,
    Strong,
)
from marcado.stringbuilder import StringBuilder
from marcado.utils.logger import get_logger
from marcado.utils.text import escape_attribute, escape_html

logger = get_logger(__name__)

_BLOCK_TYPES = (
    Paragraph,
    Heading,
    BlockQuote,
    List,
    Html,
    HorizontalRule,
    LinkDefinition,
    FootnoteDefinition,
)


def is_block(node: Node | str) -> bool:
    """True for block-level nodes (code blocks included, code spans not)."""
    if isinstance(node, Code):
        return not node.inline
    return isinstance(node, _BLOCK_TYPES)


def _encode_url(url: str) -> str:
    """Percent-encode a URL for an href or src attribute.

    HTML entities are decoded first; already encoded sequences and reserved
    URL characters are kept.
    """
    return url_quote(html.unescape(url), safe="/:?#[]@!$&'()*+,;=-_.~%")


@dataclass(slots=True)
class RenderContext:
    """Per-render mutable state.

    Created fresh for each render, ensuring thread safety when sharing
    HtmlRenderer instances across threads.
    """

    footnote_defs: dict[str, FootnoteDefinition] = field(default_factory=dict)
    footnote_refs: list[str] = field(default_factory=list)


class HtmlRenderer:
    """Render AST to HTML using StringBuilder pattern.

    Usage:
        >>> from marcado import parse
        >>> renderer = HtmlRenderer()
        >>> renderer.render(parse("# Hello **World**"))
        '<h1>Hello <strong>World</strong></h1>\\n'

    Unresolved reference links and images render as their raw source text.
    Nodes of unknown types are logged and skipped.
    """

    __slots__ = ()

    def render(self, ast: Sequence[Node]) -> str:
        """Render an AST to an HTML string.

        Thread Safety:
            Creates independent RenderContext per call.
            Safe for concurrent execution from multiple threads.
        """
        ctx = RenderContext()
        for node in ast:
            if isinstance(node, FootnoteDefinition):
                ctx.footnote_defs.setdefault(node.id, node)

        sb = StringBuilder()
        for node in ast:
            self._render_block(node, sb, ctx)

        if ctx.footnote_refs:
            self._render_footnotes_section(sb, ctx)
        return sb.build()

    # =========================================================================
    # Block rendering
    # =========================================================================

    def _render_block(self, block: Node | str, sb: StringBuilder, ctx: RenderContext) -> None:
        """Render a block node."""
        match block:
            case Heading():
                sb.append(f"<h{block.level}>")
                self._render_inlines(block.children, sb, ctx)
                sb.append(f"</h{block.level}>\n")
            case Paragraph():
                self._render_paragraph(block, sb, ctx)
            case Code(inline=False):
                self._render_code_block(block, sb)
            case BlockQuote():
                sb.append("<blockquote>\n")
                self._render_blocks(block.children, sb, ctx)
                sb.append("</blockquote>\n")
            case List():
                tag = "ol" if block.subtype == "ordered" else "ul"
                sb.append(f"<{tag}>\n")
                for item in block.children:
                    self._render_item(item, sb, ctx)
                sb.append(f"</{tag}>\n")
            case Item():
                self._render_item(block, sb, ctx)
            case HorizontalRule():
                sb.append("<hr />\n")
            case Html():
                sb.append(block.html.rstrip("\n")).append("\n")
            case LinkDefinition() | FootnoteDefinition():
                pass  # Definitions produce no output in place
            case Node() | str():
                # Inline content at block level, e.g. from a hand-built AST
                self._render_inline(block, sb, ctx)
            case _:
                logger.warning("Cannot render %r, skipping it", block)

    def _render_blocks(
        self, blocks: Sequence[Node | str], sb: StringBuilder, ctx: RenderContext
    ) -> None:
        for block in blocks:
            self._render_block(block, sb, ctx)

    def _render_paragraph(self, para: Paragraph, sb: StringBuilder, ctx: RenderContext) -> None:
        """Render paragraph, skipping paragraphs without visible content."""
        content = StringBuilder()
        self._render_inlines(para.children, content, ctx)
        text = content.build().rstrip("\n")
        if text.strip():
            sb.append("<p>").append(text).append("</p>\n")

    def _render_code_block(self, code: Code, sb: StringBuilder) -> None:
        lang_class = f' class="language-{escape_attribute(code.source)}"' if code.source else ""
        sb.append(f"<pre><code{lang_class}>")
        content = code.text
        if content:
            sb.append(escape_html(content, escape_all=True)).append("\n")
        sb.append("</code></pre>\n")

    def _render_item(self, item: Item, sb: StringBuilder, ctx: RenderContext) -> None:
        """Render list item.

        Tight items hold inline content directly, possibly followed by nested
        blocks; loose items hold only blocks. A block that starts the item or
        follows inline content goes on its own line.
        """
        sb.append("<li>")
        after_inline = False
        for i, child in enumerate(item.children):
            if is_block(child):
                if i == 0 or after_inline:
                    sb.append("\n")
                self._render_block(child, sb, ctx)
                after_inline = False
            else:
                self._render_inline(child, sb, ctx)
                after_inline = True
        sb.append("</li>\n")

    # =========================================================================
    # Inline rendering
    # =========================================================================

    def _render_inlines(
        self, inlines: Sequence[Node | str], sb: StringBuilder, ctx: RenderContext
    ) -> None:
        """Render a sequence of inline nodes."""
        for inline in inlines:
            self._render_inline(inline, sb, ctx)

    def _render_inline(self, inline: Node | str, sb: StringBuilder, ctx: RenderContext) -> None:
        """Render an inline node."""
        match inline:
            case str():
                sb.append(escape_html(inline))
            case Literal():
                sb.append(escape_html(inline.value, escape_all=True))
            case Emphasis():
                sb.append("<em>")
                self._render_inlines(inline.children, sb, ctx)
                sb.append("</em>")
            case Strong():
                sb.append("<strong>")
                self._render_inlines(inline.children, sb, ctx)
                sb.append("</strong>")
            case Code():
                sb.append("<code>")
                sb.append(escape_html(inline.text, escape_all=True))
                sb.append("</code>")
            case Link() if inline.href is not None:
                href = escape_attribute(_encode_url(inline.href))
                sb.append(f'<a href="{href}"{self._title_attribute(inline.title)}>')
                self._render_inlines(inline.children, sb, ctx)
                sb.append("</a>")
            case Image() if inline.href is not None:
                src = escape_attribute(_encode_url(inline.href))
                alt = escape_attribute(extract_text(inline.children))
                sb.append(f'<img src="{src}" alt="{alt}"{self._title_attribute(inline.title)} />')
            case Link() | Image():
                # Unresolved reference: keep the markdown the author wrote
                sb.append(escape_html(inline.source or extract_text(inline.children)))
            case LineBreak():
                sb.append("<br />")
            case FootnoteReference():
                self._render_footnote_reference(inline, sb, ctx)
            case _:
                node_type = getattr(inline, "type", inline)
                logger.warning("Unsupported node type %r, skipping it", node_type)

    @staticmethod
    def _title_attribute(title: str | None) -> str:
        return f' title="{escape_attribute(title)}"' if title else ""

    # =========================================================================
    # Footnotes
    # =========================================================================

    def _render_footnote_reference(
        self, ref: FootnoteReference, sb: StringBuilder, ctx: RenderContext
    ) -> None:
        if ref.id not in ctx.footnote_defs:
            sb.append(escape_html(ref.source or f"[^{ref.id}]"))
            return

        if ref.id not in ctx.footnote_refs:
            ctx.footnote_refs.append(ref.id)
        number = ctx.footnote_refs.index(ref.id) + 1
        esc_id = escape_attribute(ref.id)
        sb.append('<sup class="footnote-ref">')
        sb.append(f'<a href="#fn-{esc_id}" id="fnref-{esc_id}">{number}</a></sup>')

    def _render_footnotes_section(self, sb: StringBuilder, ctx: RenderContext) -> None:
        """Render footnotes section at end of document."""
        sb.append('<section class="footnotes">\n')
        sb.append("<ol>\n")

        # Definitions may reference further footnotes, which extends the list
        i = 0
        while i < len(ctx.footnote_refs):
            identifier = ctx.footnote_refs[i]
            esc_id = escape_attribute(identifier)
            sb.append(f'<li id="fn-{esc_id}">\n')
            self._render_blocks(ctx.footnote_defs[identifier].children, sb, ctx)
            sb.append(f'<a href="#fnref-{esc_id}">↩</a>\n')
            sb.append("</li>\n")
            i += 1

        sb.append("</ol>\n")
        sb.append("</section>\n")


def extract_text(inlines: Sequence[Node | str]) -> str:
    """Extract plain text from inline nodes (for alt attributes)."""
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
                parts.append(" ")
            case Node():
                parts.append(extract_text(getattr(inline, "children", ())))
    return "".join(parts)


__all__ = ["HtmlRenderer", "RenderContext", "extract_text", "is_block"]
