"""Preset registry and parser factory.

``MarkdownEngine`` keeps named ``ParserConfiguration`` presets and builds a
``Parser`` from one of them on request. Two presets are registered by
default:

- ``strict``: the core block catalog and inline pipeline
- ``extended``: ``strict`` plus the footnotes plugin

A preset may name a ``parent``; the parent chain is resolved first and each
layer's handlers are appended after its parent's. The terminal
``ParagraphHandler`` is always appended last by ``parser``.

Example:
    >>> engine = MarkdownEngine()
    >>> engine.parser("extended").parse("Text[^1]\\n\\n[^1]: Note")
    [Paragraph(children=['Text', FootnoteReference(...)]), FootnoteDefinition(...)]

"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from marcado.config import ParserConfiguration
from marcado.errors import MarcadoError, PresetError
from marcado.nodes import Node
from marcado.parser import Parser
from marcado.parsing.blocks import (
    AtxHeaderHandler,
    BlockquoteHandler,
    CodeHandler,
    CommentHandler,
    FencedCodeHandler,
    HorizontalRulerHandler,
    HtmlHandler,
    ListHandler,
    ParagraphHandler,
    ReferenceLinkDefinitionHandler,
    SetextHeaderHandler,
)
from marcado.parsing.inline import (
    InlineAutolinksHandler,
    InlineCodeHandler,
    InlineEmphasisHandler,
    InlineLineBreakHandler,
    InlineLinkHandler,
    InlineRefImageAndLinkHandler,
)
from marcado.plugins import plugin_configuration
from marcado.renderers.html import HtmlRenderer
from marcado.utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_PRESET = "strict"


def strict_configuration() -> ParserConfiguration:
    """Core block catalog and inline pipeline, most specific rules first."""
    return ParserConfiguration(
        block=(
            SetextHeaderHandler(),
            AtxHeaderHandler(),
            BlockquoteHandler(),
            CodeHandler(),
            FencedCodeHandler(),
            ListHandler(),
            HorizontalRulerHandler(),
            ReferenceLinkDefinitionHandler(),
            HtmlHandler(),
            CommentHandler(),
        ),
        inline=(
            InlineCodeHandler(),
            InlineLinkHandler("image"),
            InlineLinkHandler("link"),
            InlineRefImageAndLinkHandler("image"),
            InlineRefImageAndLinkHandler("link"),
            InlineAutolinksHandler(),
            InlineEmphasisHandler("*"),
            InlineEmphasisHandler("_"),
            InlineLineBreakHandler(),
        ),
    )


def extended_configuration() -> ParserConfiguration:
    """``strict`` plus footnotes."""
    plugins = plugin_configuration(["footnotes"])
    return ParserConfiguration(
        block=plugins.block,
        inline=plugins.inline,
        parent=DEFAULT_PRESET,
    )


def _validate(configuration: ParserConfiguration) -> None:
    for handler in (*configuration.block, *configuration.inline):
        if not callable(getattr(handler, "parse", None)):
            raise TypeError(f"{type(handler).__name__} is not a handler: it has no parse() method")


class MarkdownEngine:
    """Registry of parser presets.

    Thread Safety:
        Registration mutates the engine; register presets before sharing it.
        ``parser`` only reads the registry and returns a new Parser per call.

    """

    __slots__ = ("_presets",)

    def __init__(self) -> None:
        self._presets: dict[str, ParserConfiguration] = {}
        self.register_parser("strict", strict_configuration())
        self.register_parser("extended", extended_configuration())

    @property
    def presets(self) -> tuple[str, ...]:
        """Registered preset names, in registration order."""
        return tuple(self._presets)

    def register_parser(
        self,
        name: str,
        configuration: ParserConfiguration | Mapping[str, Any],
    ) -> None:
        """Register (or replace) a preset.

        Args:
            name: Preset name used with ``parser``
            configuration: Preset description, or a dict accepted by
                ``ParserConfiguration.from_dict``

        Raises:
            TypeError: If a handler has no callable ``parse``
        """
        if not isinstance(configuration, ParserConfiguration):
            configuration = ParserConfiguration.from_dict(configuration)
        _validate(configuration)
        self._presets[name] = configuration

    def parser(
        self,
        name: str = DEFAULT_PRESET,
        configuration: ParserConfiguration | None = None,
        *,
        plugins: Iterable[str] = (),
    ) -> Parser:
        """Build a parser for a preset.

        Args:
            name: Preset name
            configuration: Extra handlers and flags layered on top of the
                preset
            plugins: Plugin names layered on the preset before
                ``configuration``. Plugins the preset already carries are
                skipped.

        Returns:
            A top-level Parser whose block catalog ends with the paragraph
            handler

        Raises:
            PresetError: If ``name`` or a parent in its chain is unknown
            KeyError: If a plugin name is unknown
        """
        merged = self._resolve(name, ())
        if plugins:
            merged = merged.merged(plugin_configuration(plugins, installed=merged))
        if configuration is not None:
            _validate(configuration)
            merged = merged.merged(configuration)

        logger.debug(
            "Building %r parser: %d block handlers, %d inline handlers",
            name,
            len(merged.block) + 1,
            len(merged.inline),
        )
        return Parser((*merged.block, ParagraphHandler()), merged.inline, merged.flags)

    def _resolve(self, name: str, chain: tuple[str, ...]) -> ParserConfiguration:
        configuration = self._presets.get(name)
        if configuration is None:
            raise PresetError(name, list(self._presets))
        if name in chain:
            raise MarcadoError(f"Preset inheritance cycle: {' -> '.join((*chain, name))}")

        if configuration.parent is None:
            return ParserConfiguration().merged(configuration)
        return self._resolve(configuration.parent, (*chain, name)).merged(configuration)

    def to_html(self, ast: Sequence[Node]) -> str:
        """Render an AST to HTML."""
        return HtmlRenderer().render(ast)


__all__ = [
    "DEFAULT_PRESET",
    "MarkdownEngine",
    "extended_configuration",
    "strict_configuration",
]
