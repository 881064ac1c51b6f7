"""Utility modules for marcado.

Provides:
- text: escape_html, escape_attribute for rendering
- logger: get_logger for logging
"""

from marcado.utils.logger import get_logger
from marcado.utils.text import escape_attribute, escape_html

__all__ = [
    "escape_attribute",
    "escape_html",
    "get_logger",
]
