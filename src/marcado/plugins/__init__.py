"""Plugin system for marcado.

Plugins extend a preset with additional syntax:
- footnotes: [^1] references and [^1]: definitions

Usage:
    >>> from marcado import Markdown
    >>>
    >>> # Enable specific plugins
    >>> md = Markdown(plugins=["footnotes"])
    >>> html = md("Text[^1]\n\n[^1]: Note.")
    >>>
    >>> # Enable all plugins
    >>> md = Markdown(plugins=["all"])

Plugin Architecture:
A plugin contributes handler objects to the two extension points of the
parser:

1. Block handlers: appended to the block catalog, before the terminal
   paragraph handler
2. Inline handlers: appended to the end of the inline pipeline

Thread Safety:
All plugins are stateless. State is stored in AST nodes or passed as arguments.
Multiple threads can use the same plugin instances concurrently.

"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from marcado.config import ParserConfiguration
from marcado.errors import PluginError
from marcado.utils.logger import get_logger

if TYPE_CHECKING:
    from marcado.parsing.protocols import BlockParser, InlineParser

__all__ = [
    "BUILTIN_PLUGINS",
    "MarcadoPlugin",
    "get_plugin",
    "plugin_configuration",
    "register_plugin",
]

logger = get_logger(__name__)


@runtime_checkable
class MarcadoPlugin(Protocol):
    """Protocol for marcado plugins.

    Thread Safety:
        Plugins must be stateless. All state should be in AST nodes.

    """

    @property
    def name(self) -> str:
        """Plugin identifier."""
        ...

    def block_handlers(self) -> Sequence[BlockParser]:
        """Block handlers to add to the catalog."""
        ...

    def inline_handlers(self) -> Sequence[InlineParser]:
        """Inline handlers to add to the pipeline."""
        ...


# Registry of built-in plugins
BUILTIN_PLUGINS: dict[str, type[MarcadoPlugin]] = {}


def register_plugin(
    name: str,
) -> Callable[[type[MarcadoPlugin]], type[MarcadoPlugin]]:
    """Decorator to register a plugin.

    Args:
        name: Plugin name for lookup

    Returns:
        Decorator function that registers and returns the class

    Usage:
        @register_plugin("footnotes")
        class FootnotesPlugin:
                ...

    """

    def decorator(cls: type[MarcadoPlugin]) -> type[MarcadoPlugin]:
        BUILTIN_PLUGINS[name] = cls
        return cls

    return decorator


def get_plugin(name: str) -> MarcadoPlugin:
    """Get a plugin instance by name.

    Args:
        name: Plugin name (e.g., "footnotes")

    Returns:
        Plugin instance

    Raises:
        KeyError: If plugin name is not recognized

    """
    if name not in BUILTIN_PLUGINS:
        available = ", ".join(sorted(BUILTIN_PLUGINS.keys()))
        raise KeyError(f"Unknown plugin: {name!r}. Available: {available}")
    return BUILTIN_PLUGINS[name]()


def plugin_configuration(
    plugins: Iterable[str],
    installed: ParserConfiguration | None = None,
) -> ParserConfiguration:
    """Collect the handlers of the named plugins into one configuration.

    ``"all"`` selects every registered plugin. Each plugin is applied once,
    in the order given.

    Args:
        plugins: Plugin names, or ``"all"``
        installed: Configuration the result will be layered on. A plugin
            whose handler types are all present there is skipped.

    Raises:
        KeyError: If a plugin name is not recognized
        PluginError: If a plugin contributes an object without ``parse``

    """
    names: list[str] = []
    for name in plugins:
        for candidate in sorted(BUILTIN_PLUGINS) if name == "all" else [name]:
            if candidate not in names:
                names.append(candidate)

    present: set[type] = set()
    if installed is not None:
        present = {type(handler) for handler in (*installed.block, *installed.inline)}

    configuration = ParserConfiguration()
    for name in names:
        plugin = get_plugin(name)
        block = tuple(plugin.block_handlers())
        inline = tuple(plugin.inline_handlers())
        for handler in (*block, *inline):
            if not callable(getattr(handler, "parse", None)):
                raise PluginError(name, f"{type(handler).__name__} has no parse() method")
        if present and present.issuperset(type(handler) for handler in (*block, *inline)):
            logger.debug("Plugin %r is already installed, skipping it", name)
            continue
        configuration = configuration.merged(ParserConfiguration(block=block, inline=inline))
    return configuration


# Import built-in plugins to register them
# These imports trigger the @register_plugin decorators
from marcado.plugins.footnotes import FootnotesPlugin  # noqa: E402

__all__ += ["FootnotesPlugin"]
