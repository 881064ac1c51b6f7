"""Parser configuration for marcado.

A ``ParserConfiguration`` describes one preset: the block handlers, the
inline handlers and free-form flags it contributes, plus an optional parent
preset it extends. ``MarkdownEngine`` resolves the parent chain and merges
the layers in order, concatenating handler sequences and overlaying flags.

Usage:
    >>> from marcado import MarkdownEngine
    >>> from marcado.config import ParserConfiguration
    >>> engine = MarkdownEngine()
    >>> engine.register_parser(
    ...     "notes",
    ...     ParserConfiguration(block=(NoteHandler(),), parent="strict"),
    ... )
    >>> parser = engine.parser("notes")

Thread Safety:
    Configurations are frozen. Handler objects inside them are shared by
    every parser built from the configuration and must be stateless.

"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from marcado.parsing.protocols import BlockParser, InlineParser


@dataclass(frozen=True, slots=True)
class ParserConfiguration:
    """Immutable preset description.

    Attributes:
        block: Block handlers, tried in order
        inline: Inline handlers, run in order
        flags: Settings made available to handlers through ``Parser.flags``
        parent: Name of the preset this one extends

    """

    block: tuple[BlockParser, ...] = ()
    inline: tuple[InlineParser, ...] = ()
    flags: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))
    parent: str | None = None

    def __post_init__(self) -> None:
        # Accept any sequence or mapping, store immutable copies
        object.__setattr__(self, "block", tuple(self.block))
        object.__setattr__(self, "inline", tuple(self.inline))
        object.__setattr__(self, "flags", MappingProxyType(dict(self.flags)))

    @classmethod
    def from_dict(cls, config_dict: Mapping[str, Any]) -> ParserConfiguration:
        """Create a configuration from a dictionary.

        Only keys naming a ``ParserConfiguration`` field are used; unknown
        keys are silently ignored.

        Example:
            >>> config = ParserConfiguration.from_dict({
            ...     "flags": {"footnotes": True},
            ...     "unknown_key": "ignored",
            ... })
            >>> config.flags["footnotes"]
            True

        """
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in config_dict.items() if k in valid_fields}
        return cls(**filtered)

    def merged(self, other: ParserConfiguration) -> ParserConfiguration:
        """Layer ``other`` on top of this configuration.

        Handlers of ``other`` run after the handlers of ``self``; flags of
        ``other`` win. The result has no parent.
        """
        return ParserConfiguration(
            block=(*self.block, *other.block),
            inline=(*self.inline, *other.inline),
            flags={**self.flags, **other.flags},
        )


__all__ = ["ParserConfiguration"]
