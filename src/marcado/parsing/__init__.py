"""Grammar rules for marcado.

Block handlers claim whole lines from a ``TokenStream``; inline handlers
transform text spans inside a claimed block. Both are plain objects
satisfying the protocols in ``marcado.parsing.protocols`` and are combined
into catalogs by ``marcado.engine.MarkdownEngine``.

Public API:
BlockParser: Protocol for line-level rules
InlineParser: Protocol for span-level rules
is_excluded: Ask a handler whether it opts out of a context

"""

from marcado.parsing.protocols import BlockParser, InlineParser, is_excluded

__all__ = [
    "BlockParser",
    "InlineParser",
    "is_excluded",
]
