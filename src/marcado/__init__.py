"""
marcado — extensible Markdown-to-AST engine

Parses Markdown into a tree of plain dataclass nodes through an ordered
catalog of block handlers and a pipeline of inline handlers, both open to
extension without touching the core.

Quick Start:
    >>> from marcado import parse, render
    >>> ast = parse("# Hello, World!")
    >>> ast
    [Heading(level=1, children=['Hello, World!'])]
    >>> render(ast)
    '<h1>Hello, World!</h1>\\n'

    >>> # Or use the high-level Markdown class
    >>> from marcado import Markdown
    >>> md = Markdown(plugins=["footnotes"])
    >>> html = md("Text[^1]\\n\\n[^1]: A note.")

Custom Grammar:
    >>> from marcado import MarkdownEngine, ParserConfiguration
    >>>
    >>> engine = MarkdownEngine()
    >>> engine.register_parser(
    ...     "notes", ParserConfiguration(block=(NoteHandler(),), parent="strict")
    ... )
    >>> engine.parser("notes").parse("%%% remember")

Installation:
    pip install marcado              # Core engine (zero deps)
"""

from collections.abc import Iterable, Sequence

from marcado.config import ParserConfiguration
from marcado.engine import DEFAULT_PRESET, MarkdownEngine
from marcado.errors import MarcadoError, PluginError, PresetError
from marcado.nodes import (
    NODE_TYPES,
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
from marcado.parser import Parser, ParserState
from marcado.parsing.protocols import BlockParser, InlineParser
from marcado.renderers import ASTRenderer, HtmlRenderer, PlainTextRenderer
from marcado.serialization import from_dict, from_json, to_dict, to_json
from marcado.stream import TokenStream
from marcado.visitor import BaseVisitor, walk

__version__ = "0.1.0"

# Shared engine behind the module-level functions
_default_engine = MarkdownEngine()


def parse(source: str, *, preset: str = DEFAULT_PRESET) -> list[Node]:
    """Parse Markdown source into an AST.

    Args:
        source: Markdown source text
        preset: Name of a preset registered on the default engine

    Returns:
        Block nodes, with reference links resolved

    Raises:
        PresetError: If the preset is unknown

    Example:
        >>> parse("# H\\n\\nText")
        [Heading(level=1, children=['H']), Paragraph(children=['Text'])]
    """
    return _default_engine.parser(preset).parse(source)


def render(ast: Sequence[Node]) -> str:
    """Render an AST to HTML.

    Example:
        >>> render(parse("*hi*"))
        '<p><em>hi</em></p>\\n'
    """
    return HtmlRenderer().render(ast)


# Name used by the engine for the same operation
to_html = render


def markdown_to_html(source: str, preset: str = DEFAULT_PRESET) -> str:
    """Parse and render Markdown to HTML in one call."""
    return render(parse(source, preset=preset))


def markdown_to_plain_text(source: str) -> str:
    """Return the readable text of a Markdown document, without markup.

    Example:
        >>> markdown_to_plain_text("# Title\\n\\nSome **bold** [link](http://e.com)")
        'Title\\n\\nSome bold link'
    """
    return PlainTextRenderer().render(parse(source))


class Markdown:
    """High-level Markdown processor combining parser and renderer.

    Usage:
        >>> md = Markdown()
        >>> md("# Hello **World**")
        '<h1>Hello <strong>World</strong></h1>\\n'

        >>> # Access the AST
        >>> ast = md.parse("# Heading")
        >>> ast[0].level
        1

    Thread Safety:
        The parser and renderer hold no per-call state. Safe to share one
        Markdown instance between threads.

    """

    __slots__ = ("_parser", "_renderer")

    def __init__(
        self,
        preset: str = DEFAULT_PRESET,
        *,
        plugins: Iterable[str] | None = None,
        configuration: ParserConfiguration | None = None,
        engine: MarkdownEngine | None = None,
    ) -> None:
        """Initialize Markdown processor.

        Args:
            preset: Preset name
            plugins: Plugin names to enable (e.g., ["footnotes"]).
                Use ["all"] to enable all built-in plugins. Plugins the
                preset already includes are not added twice.
            configuration: Extra handlers and flags layered on top
            engine: Engine holding the presets (the shared default if None)

        Raises:
            PresetError: If the preset is unknown
            KeyError: If a plugin name is unknown
        """
        self._parser = (engine or _default_engine).parser(
            preset, configuration, plugins=plugins or ()
        )
        self._renderer = HtmlRenderer()

    def __call__(self, source: str) -> str:
        """Parse and render Markdown in one call."""
        return self.render(self.parse(source))

    def parse(self, source: str) -> list[Node]:
        """Parse Markdown source into an AST."""
        return self._parser.parse(source)

    def render(self, ast: Sequence[Node]) -> str:
        """Render an AST to HTML."""
        return self._renderer.render(ast)


__all__ = [  # noqa: RUF022 (grouped by category)
    # Version
    "__version__",
    # Core API
    "parse",
    "render",
    "to_html",
    "markdown_to_html",
    "markdown_to_plain_text",
    "Markdown",
    # Engine
    "MarkdownEngine",
    "Parser",
    "ParserConfiguration",
    "ParserState",
    "TokenStream",
    "BlockParser",
    "InlineParser",
    # Errors
    "MarcadoError",
    "PluginError",
    "PresetError",
    # Nodes
    "NODE_TYPES",
    "Node",
    "BlockQuote",
    "Code",
    "Heading",
    "HorizontalRule",
    "Html",
    "Item",
    "LinkDefinition",
    "List",
    "Paragraph",
    "Emphasis",
    "FootnoteDefinition",
    "FootnoteReference",
    "Image",
    "LineBreak",
    "Link",
    "Literal",
    "Strong",
    # Rendering
    "ASTRenderer",
    "HtmlRenderer",
    "PlainTextRenderer",
    # Traversal and serialization
    "BaseVisitor",
    "walk",
    "from_dict",
    "from_json",
    "to_dict",
    "to_json",
]
