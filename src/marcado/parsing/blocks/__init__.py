"""Block handlers for marcado.

Provides the default block catalog:
- Headings (setext and ATX)
- Block quotes
- Code blocks (indented and fenced)
- Lists (ordered and unordered)
- Horizontal rules
- Reference link definitions
- Raw HTML blocks and comments
- Paragraphs (terminal fallback)

Architecture:
Block handlers are split into logical modules:
- core: every single-construct handler
- list: item collection, looseness and tight unwrapping

"""

from marcado.parsing.blocks.core import (
    AtxHeaderHandler,
    BlockquoteHandler,
    CodeHandler,
    CommentHandler,
    FencedCodeHandler,
    HorizontalRulerHandler,
    HtmlHandler,
    ParagraphHandler,
    ReferenceLinkDefinitionHandler,
    SetextHeaderHandler,
)
from marcado.parsing.blocks.list import ListHandler

__all__ = [
    "AtxHeaderHandler",
    "BlockquoteHandler",
    "CodeHandler",
    "CommentHandler",
    "FencedCodeHandler",
    "HorizontalRulerHandler",
    "HtmlHandler",
    "ListHandler",
    "ParagraphHandler",
    "ReferenceLinkDefinitionHandler",
    "SetextHeaderHandler",
]
