"""AST walking and visiting for marcado.

Provides a depth-first ``walk`` generator and a base visitor class with
dispatch on the node ``type`` tag.

Example — collect all headings:

    class HeadingCollector(BaseVisitor[None]):
        def __init__(self) -> None:
            self.headings: list[Heading] = []

        def visit_heading(self, node: Heading) -> None:
            self.headings.append(node)

    collector = HeadingCollector()
    collector.visit_all(parse(text))

Example — count unresolved reference links:

    sum(1 for n in walk(ast) if isinstance(n, Link) and n.subtype == "ref")

Thread Safety:
    ``walk`` keeps its state in local variables. Visitors may accumulate
    state; create one per thread.

"""

from collections.abc import Iterable, Iterator, Sequence
from typing import Generic, TypeVar

from marcado.nodes import Node


def children_of(node: Node) -> Sequence[Node | str]:
    """Children of a node, or an empty sequence for leaves."""
    children = getattr(node, "children", None)
    return children if children is not None else ()


def walk(nodes: Iterable[Node | str]) -> Iterator[Node]:
    """Yield every node of a tree in depth-first pre-order.

    Plain strings are skipped. Iterative, so deeply nested input does not
    hit the recursion limit.
    """
    stack: list[Iterator[Node | str]] = [iter(nodes)]
    while stack:
        child = next(stack[-1], None)
        if child is None:
            stack.pop()
            continue
        if isinstance(child, Node):
            yield child
            stack.append(iter(children_of(child)))


T = TypeVar("T")


class BaseVisitor(Generic[T]):
    """Base AST visitor dispatching on the node type tag.

    ``visit`` calls ``visit_<type>`` with dashes turned into underscores
    (``link-definition`` becomes ``visit_link_definition``), falling back to
    ``visit_default``. Children are walked automatically afterwards.

    """

    def visit(self, node: Node) -> T:
        """Dispatch to the matching ``visit_*`` method, then walk children."""
        method = getattr(self, "visit_" + node.type.replace("-", "_"), self.visit_default)
        result = method(node)
        for child in children_of(node):
            if isinstance(child, Node):
                self.visit(child)
        return result

    def visit_all(self, nodes: Iterable[Node | str]) -> None:
        """Visit every top-level node of an AST."""
        for node in nodes:
            if isinstance(node, Node):
                self.visit(node)

    def visit_default(self, node: Node) -> T:
        """Called for node types without a specific ``visit_*`` method.

        Default returns None (suitable for ``BaseVisitor[None]``).

        """
        return None  # type: ignore[return-value]


__all__ = ["BaseVisitor", "children_of", "walk"]
