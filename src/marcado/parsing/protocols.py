"""Protocols defining the grammar extension interface.

Block and inline handlers are plain objects with a ``parse`` method and an
optional ``exclude_from_subparse`` method. No base class is required; the
protocols below only document and type-check the contract.

Block handlers are tried in registration order at every input position and
the first one returning True claims it. Inline handlers form a fixed-order
pipeline: every handler runs, each receiving the text the previous stages
left behind and responsible for passing its remainder on with
``parser.parse_inlines(text, state)``.

Example — a block handler for ``%%% note`` lines::

    class NoteHandler:
        def parse(self, parser, stream, ast):
            m = stream.peek().match(r"^%%% (.*)$")
            if not m:
                return False
            stream.consume()
            ast.append(Paragraph(children=parser.parse_inlines(m.group(1))))
            return True

        def exclude_from_subparse(self, context):
            return "list" in context
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from marcado.nodes import Node
    from marcado.parser import Parser, ParserState
    from marcado.stream import TokenStream


@runtime_checkable
class BlockParser(Protocol):
    """Grammar rule operating on whole lines."""

    def parse(self, parser: Parser, stream: TokenStream, ast: list[Node]) -> bool:
        """Claim the current position.

        Returns True after consuming at least one line and appending to
        ``ast``; returns False without touching the stream otherwise.
        """
        ...


@runtime_checkable
class InlineParser(Protocol):
    """Grammar rule operating on a text span inside a claimed block."""

    def parse(self, parser: Parser, text: str, state: ParserState) -> list[Node | str]:
        """Transform ``text`` and hand the result to the next pipeline stage."""
        ...


def is_excluded(handler: object, context: Sequence[str]) -> bool:
    """Ask a handler whether it opts out of the given context.

    Handlers without ``exclude_from_subparse`` are valid everywhere.
    """
    exclude = getattr(handler, "exclude_from_subparse", None)
    if exclude is None:
        return False
    return bool(exclude(tuple(context)))


__all__ = ["BlockParser", "InlineParser", "is_excluded"]
