"""Parser orchestrator: block loop, inline pipeline, link resolution.

Parsing happens in two phases. The block loop walks a ``TokenStream`` and
lets the first matching block handler claim each position. Handlers that
hold inline content (paragraphs, headings, list items through sub-parsers)
push their text through the inline pipeline, which turns it into a list of
nodes and plain strings. Finally, a top-level parse resolves reference links
against the collected definitions.

Placeholders:
Inline handlers that recognize a construct replace it in the still-unparsed
text by a placeholder (``\\x02<index>\\x03``) pointing into the append-only
``ParserState.nodes`` list. Later stages only match markdown syntax, so a
placeholder is never reinterpreted. The last stage splits the text on
placeholders and substitutes the real nodes.

Sub-parsers:
``subparser(tag)`` returns a Parser over the same catalogs with a longer
context stack. Each block handler decides, through
``exclude_from_subparse(context)``, whether it remains valid in the nested
context (setext headings are not, inside lists).

Thread Safety:
A Parser holds only immutable handler tuples. All per-parse state lives in
the ``TokenStream`` and ``ParserState`` objects created for each call, so a
Parser may be shared between threads as long as its handlers are stateless.
"""

from __future__ import annotations

import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from marcado.escaping import ESCAPE_MARK, escape, restore, unescape
from marcado.nodes import Image, Link, LinkDefinition, Node
from marcado.parsing.protocols import is_excluded
from marcado.stream import TokenStream
from marcado.utils.logger import get_logger
from marcado.visitor import walk

if TYPE_CHECKING:
    from marcado.parsing.protocols import BlockParser, InlineParser

logger = get_logger(__name__)

PLACEHOLDER_START = "\x02"
PLACEHOLDER_END = "\x03"

_PLACEHOLDER_PATTERN = re.compile(PLACEHOLDER_START + r"(\d+)" + PLACEHOLDER_END)

# Control characters with internal meaning, replaced in top-level input
_RESERVED = re.compile(f"[{PLACEHOLDER_START}{PLACEHOLDER_END}{ESCAPE_MARK}]")


@dataclass(frozen=True, slots=True)
class ParserState:
    """Inline pipeline state for one block's worth of text.

    Derived states share ``nodes``; only the index and context change.

    Attributes:
        pipeline_index: Next inline handler to run
        nodes: Nodes referenced by placeholders, in creation order
        context: Context tags (``paragraph``, ``list``, ``link``, ...)
    """

    pipeline_index: int = 0
    nodes: list[Node] = field(default_factory=list)
    context: tuple[str, ...] = ()


class Parser:
    """Markdown parser over a block handler catalog and an inline pipeline.

    Usage:
        >>> from marcado.engine import MarkdownEngine
        >>> parser = MarkdownEngine().parser("strict")
        >>> parser.parse("# Hello")
        [Heading(level=1, children=['Hello'])]

    Instances are normally built by ``MarkdownEngine.parser``, which also
    appends the terminal paragraph handler. A catalog without one silently
    skips lines no handler claims.
    """

    __slots__ = ("_block", "_inline", "_flags", "_context")

    def __init__(
        self,
        block: Sequence[BlockParser],
        inline: Sequence[InlineParser],
        flags: Mapping[str, Any] | None = None,
        context: Sequence[str] = (),
    ) -> None:
        """Initialize parser.

        Args:
            block: Block handlers in precedence order
            inline: Inline handlers in pipeline order
            flags: Free-form settings readable by handlers
            context: Context tags of this (sub-)parser; empty at top level
        """
        self._block: tuple[BlockParser, ...] = tuple(block)
        self._inline: tuple[InlineParser, ...] = tuple(inline)
        self._flags: Mapping[str, Any] = MappingProxyType(dict(flags or {}))
        self._context: tuple[str, ...] = tuple(context)

    @property
    def block_handlers(self) -> tuple[BlockParser, ...]:
        """Block handlers valid in this parser's context."""
        return self._block

    @property
    def inline_handlers(self) -> tuple[InlineParser, ...]:
        """The full inline pipeline."""
        return self._inline

    @property
    def flags(self) -> Mapping[str, Any]:
        """Read-only settings shared with sub-parsers."""
        return self._flags

    @property
    def context(self) -> tuple[str, ...]:
        """Context tags, outermost first."""
        return self._context

    # =========================================================================
    # Block phase
    # =========================================================================

    def parse(self, text: str) -> list[Node]:
        """Parse markdown text into a list of block nodes.

        A top-level parser (empty context) also resolves reference links
        over the whole result before returning it.
        """
        if not self._context:
            text = _RESERVED.sub("\ufffd", text)
        stream = TokenStream(escape(text))
        ast: list[Node] = []

        while not stream.is_eos():
            if stream.peek().is_empty():
                stream.consume()
                continue

            before = stream.line()
            for handler in self._block:
                if handler.parse(self, stream, ast):
                    assert stream.line() > before, (
                        f"{type(handler).__name__} claimed line {before} without consuming it"
                    )
                    break
            else:
                logger.debug("No block handler claimed line %d, skipping it", before)
                stream.consume()

        if not self._context:
            self.resolve_links(ast)
        return ast

    def subparser(self, tag: str | None = None) -> Parser:
        """Create a parser for nested content.

        Args:
            tag: Context tag to push (``list``, ``blockquote``, ...)

        Returns:
            Parser whose block catalog excludes handlers that opt out of the
            extended context
        """
        context = self._context if tag is None else (*self._context, tag)
        block = [handler for handler in self._block if not is_excluded(handler, context)]
        return Parser(block, self._inline, self._flags, context)

    # =========================================================================
    # Inline phase
    # =========================================================================

    def parse_inlines(
        self,
        text: str,
        state: ParserState | None = None,
        *tags: str,
    ) -> list[Node | str]:
        """Run ``text`` through the inline pipeline.

        Args:
            text: Text to parse (escaped, may contain placeholders)
            state: Pipeline position to continue from. None starts a fresh
                pipeline for a new block.
            *tags: Context tags for a nested span (link text, emphasis
                content). With a state, the span restarts the pipeline at
                the first handler while sharing the state's nodes.

        Returns:
            Nodes and plain strings, with every placeholder resolved
        """
        if state is None:
            state = ParserState(context=(*self._context, *tags))
        elif tags:
            state = ParserState(nodes=state.nodes, context=(*state.context, *tags))

        index = state.pipeline_index
        while index < len(self._inline) and is_excluded(self._inline[index], state.context):
            index += 1

        if index >= len(self._inline):
            return self._resolve_placeholders(text, state)

        return self._inline[index].parse(self, text, replace(state, pipeline_index=index + 1))

    def add_inline(self, state: ParserState, node: Node) -> str:
        """Register a parsed inline node and return its placeholder."""
        state.nodes.append(node)
        return f"{PLACEHOLDER_START}{len(state.nodes) - 1}{PLACEHOLDER_END}"

    def _resolve_placeholders(self, text: str, state: ParserState) -> list[Node | str]:
        result: list[Node | str] = []
        pos = 0
        for match in _PLACEHOLDER_PATTERN.finditer(text):
            if match.start() > pos:
                result.append(unescape(text[pos : match.start()]))
            result.append(state.nodes[int(match.group(1))])
            pos = match.end()
        if pos < len(text):
            result.append(unescape(text[pos:]))
        return result

    # =========================================================================
    # Reference links
    # =========================================================================

    def resolve_links(self, ast: Sequence[Node]) -> None:
        """Complete reference links and images from link definitions.

        The first pass collects definitions by id (the first definition of
        an id wins). The second pass copies ``href`` and ``title`` onto every
        reference node with a matching id and clears its ``ref`` subtype.
        Nodes without a definition stay unresolved.
        """
        definitions: dict[str, LinkDefinition] = {}
        for node in walk(ast):
            if isinstance(node, LinkDefinition):
                definitions.setdefault(node.id, node)

        if not definitions:
            return

        for node in walk(ast):
            if not isinstance(node, (Link, Image)) or node.subtype != "ref":
                continue
            definition = definitions.get(node.id or "")
            if definition is None:
                continue
            node.href = definition.href
            node.title = definition.title
            node.subtype = None
            node.source = None

    # =========================================================================
    # Escaping
    # =========================================================================

    @staticmethod
    def escape(text: str) -> str:
        """Replace backslash escapes with private markers."""
        return escape(text)

    @staticmethod
    def unescape(text: str) -> str:
        """Turn escape markers into bare punctuation."""
        return unescape(text)

    @staticmethod
    def restore(text: str) -> str:
        """Turn escape markers back into backslash escapes (for code)."""
        return restore(text)


__all__ = ["PLACEHOLDER_END", "PLACEHOLDER_START", "Parser", "ParserState"]
