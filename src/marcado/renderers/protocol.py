"""ASTRenderer protocol — stable interface for AST renderers.

Any renderer that implements ``render(ast) -> str`` conforms to this protocol.
The built-in ``HtmlRenderer`` is the reference implementation.

Example:
    from marcado.renderers.protocol import ASTRenderer

    def render_page(renderer: ASTRenderer, ast: list[Node]) -> str:
        return renderer.render(ast)

"""

from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from marcado.nodes import Node


@runtime_checkable
class ASTRenderer(Protocol):
    """Protocol for AST renderers.

    Implementations must accept a list of block nodes and return a rendered
    string. ``HtmlRenderer`` and ``PlainTextRenderer`` conform to it.

    """

    def render(self, ast: Sequence[Node]) -> str:
        """Render an AST to a string.

        Args:
            ast: Block nodes returned by a parser.

        Returns:
            Rendered string output.

        """
        ...
