"""Inline handlers for marcado.

Provides the default inline pipeline, in order:
- Code spans (`)
- Inline images and links
- Reference images and links
- Autolinks (<url>, <email>)
- Emphasis and strong (*, _)
- Hard line breaks

Architecture:
Each handler rewrites the constructs it recognizes into placeholders and
hands the remaining text to the next stage, so later stages never see the
syntax of earlier ones. Emphasis resolution is a scored search, see
``marcado.parsing.inline.emphasis``.

"""

from __future__ import annotations

from marcado.parsing.inline.core import (
    InlineAutolinksHandler,
    InlineCodeHandler,
    InlineLineBreakHandler,
    apply_inlines,
)
from marcado.parsing.inline.emphasis import InlineEmphasisHandler, Span, resolve_spans
from marcado.parsing.inline.links import (
    InlineLinkHandler,
    InlineRefImageAndLinkHandler,
    source_text,
)

__all__ = [
    "InlineAutolinksHandler",
    "InlineCodeHandler",
    "InlineEmphasisHandler",
    "InlineLineBreakHandler",
    "InlineLinkHandler",
    "InlineRefImageAndLinkHandler",
    "Span",
    "apply_inlines",
    "resolve_spans",
    "source_text",
]
