"""marcado renderers.

Renderers convert AST nodes into output formats.

Available Renderers:
- HtmlRenderer: Renders AST to HTML using StringBuilder pattern
- PlainTextRenderer: Renders the readable text of an AST, no markup

Thread Safety:
All renderers keep per-render state local to each render() call.
Safe for concurrent use from multiple threads.

"""

from marcado.renderers.html import HtmlRenderer
from marcado.renderers.protocol import ASTRenderer
from marcado.renderers.text import PlainTextRenderer

__all__ = ["ASTRenderer", "HtmlRenderer", "PlainTextRenderer"]
