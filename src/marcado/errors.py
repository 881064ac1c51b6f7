"""Exception classes for marcado.

Malformed markdown never raises: every construct degrades to literal text or
partial structure. Exceptions are reserved for configuration mistakes made by
the code assembling a parser.
"""

from __future__ import annotations


class MarcadoError(Exception):
    """Base exception for all marcado errors.

    Subclass this for specific error categories.
    """

    pass


class PresetError(MarcadoError):
    """Error when a parser preset cannot be built.

    Raised when an unknown preset is requested, directly or through the
    ``parent`` chain of another preset.
    """

    def __init__(self, preset: str, available: list[str] | None = None) -> None:
        """Initialize preset error.

        Args:
            preset: Name of the requested preset
            available: Names of the registered presets (optional)
        """
        self.preset = preset
        self.available = sorted(available or [])

        message = f"Unknown parser type: {preset}"
        if self.available:
            message += f" (available: {', '.join(self.available)})"
        super().__init__(message)


class PluginError(MarcadoError):
    """Error in plugin initialization.

    Raised when a plugin contributes handlers that do not satisfy the
    handler protocols.
    """

    def __init__(self, plugin_name: str, message: str) -> None:
        """Initialize plugin error.

        Args:
            plugin_name: Name of the failing plugin
            message: Description of the error
        """
        self.plugin_name = plugin_name
        super().__init__(f"Plugin '{plugin_name}': {message}")
