"""Text processing utilities for marcado renderers.

Example:
    >>> from marcado.utils.text import escape_html
    >>> escape_html("Fish & Chips <b>")
    'Fish &amp; Chips <b>'
"""

from __future__ import annotations

import re

# & that does not already start an entity such as &amp; or &#42;
_BARE_AMPERSAND = re.compile(r"&(?!#?[a-zA-Z0-9]+;)")

# < that does not start a tag
_BARE_LESS_THAN = re.compile(r"<(?!/?[a-zA-Z]+)")


def escape_html(text: str, escape_all: bool = False) -> str:
    """Escape HTML special characters in rendered text.

    By default existing entities and inline tags are preserved, so raw HTML
    written in markdown prose passes through. With ``escape_all`` every ``<``
    and ``>`` is escaped, which is what code content needs.

    Args:
        text: Text to escape
        escape_all: Escape every angle bracket, not only stray ones

    Returns:
        Escaped text

    Examples:
        >>> escape_html("a < b")
        'a &lt; b'
        >>> escape_html("<em>x</em>", escape_all=True)
        '&lt;em&gt;x&lt;/em&gt;'
    """
    if not text:
        return ""

    result = _BARE_AMPERSAND.sub("&amp;", text)
    if escape_all:
        return result.replace("<", "&lt;").replace(">", "&gt;")
    return _BARE_LESS_THAN.sub("&lt;", result)


def escape_attribute(text: str) -> str:
    """Escape a value for use inside a double-quoted HTML attribute.

    Examples:
        >>> escape_attribute('say "hi"')
        'say &quot;hi&quot;'
    """
    return escape_html(text, escape_all=True).replace('"', "&quot;")
