"""AST nodes for marcado.

Every node is a mutable dataclass with slots. The parser builds the tree in
place: list items are post-processed for looseness, consecutive blockquotes
are merged, and reference links are completed by the resolution pass, so the
nodes are deliberately not frozen.

Each class carries a ``type`` tag (a ``ClassVar``) so callers can dispatch on
either the class or the tag string:

    >>> from marcado import parse
    >>> ast = parse("# Hello")
    >>> ast[0].type
    'heading'

Node kinds:
Node (base)
├── Paragraph, Heading, BlockQuote, List, Item        block containers
├── Code                                              block or inline code
├── Html, HorizontalRule, LinkDefinition              block leaves
├── Link, Image                                       inline, possibly unresolved
├── Emphasis, Strong                                  inline containers
├── LineBreak, Literal                                inline leaves
└── FootnoteReference, FootnoteDefinition             footnotes plugin

Composite nodes hold ``children: list[Node | str]``; plain strings are text.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar, Literal as LiteralType


@dataclass(slots=True)
class Node:
    """Base class for all AST nodes."""

    type: ClassVar[str] = "node"


# =============================================================================
# Block Nodes
# =============================================================================


@dataclass(slots=True)
class Paragraph(Node):
    """Paragraph of inline content."""

    type: ClassVar[str] = "paragraph"
    children: list[Node | str] = field(default_factory=list)


@dataclass(slots=True)
class Heading(Node):
    """ATX (``# Title``) or setext (``Title\\n=====``) heading."""

    type: ClassVar[str] = "heading"
    level: int = 1
    children: list[Node | str] = field(default_factory=list)


@dataclass(slots=True)
class BlockQuote(Node):
    """Block quote. Children are block nodes."""

    type: ClassVar[str] = "blockquote"
    children: list[Node | str] = field(default_factory=list)


@dataclass(slots=True)
class Item(Node):
    """List item.

    ``loose`` items keep their paragraphs; tight items have the inline
    content of a leading paragraph spliced in directly.
    """

    type: ClassVar[str] = "item"
    children: list[Node | str] = field(default_factory=list)
    loose: bool = False
    contains_empty: bool = False
    followed_by_empty: bool = False


@dataclass(slots=True)
class List(Node):
    """Ordered or unordered list. Children are always ``Item`` nodes."""

    type: ClassVar[str] = "list"
    subtype: LiteralType["ordered", "unordered"] = "unordered"
    children: list[Item] = field(default_factory=list)


@dataclass(slots=True)
class Code(Node):
    """Code block (fenced or indented) or inline code span.

    The content is a single ``Literal`` child. ``source`` is the language
    tag of a fenced block, empty otherwise.
    """

    type: ClassVar[str] = "code"
    children: list[Node | str] = field(default_factory=list)
    inline: bool = False
    source: str = ""

    @property
    def text(self) -> str:
        """Verbatim code content."""
        return "".join(
            child.value if isinstance(child, Literal) else child
            for child in self.children
            if isinstance(child, (Literal, str))
        )


@dataclass(slots=True)
class Html(Node):
    """Raw HTML block or comment, passed through unchanged."""

    type: ClassVar[str] = "html"
    html: str = ""
    subtype: str | None = None


@dataclass(slots=True)
class HorizontalRule(Node):
    """Thematic break (``***``, ``---``, ``___``)."""

    type: ClassVar[str] = "hr"


@dataclass(slots=True)
class LinkDefinition(Node):
    """Reference link definition: ``[id]: href "title"``."""

    type: ClassVar[str] = "link-definition"
    id: str = ""
    href: str = ""
    title: str | None = None


# =============================================================================
# Inline Nodes
# =============================================================================


@dataclass(slots=True)
class _LinkTarget(Node):
    """Fields shared by links and images.

    Reference forms start with ``subtype="ref"`` and no ``href``; the
    resolution pass copies the matching definition onto the node.
    """

    children: list[Node | str] = field(default_factory=list)
    href: str | None = None
    title: str | None = None
    subtype: str | None = None
    id: str | None = None
    source: str | None = None

    @property
    def resolved(self) -> bool:
        return self.href is not None


@dataclass(slots=True)
class Link(_LinkTarget):
    """Hyperlink: ``[text](href "title")``, ``[text][id]`` or ``<url>``."""

    type: ClassVar[str] = "link"


@dataclass(slots=True)
class Image(_LinkTarget):
    """Image: ``![alt](src "title")`` or ``![alt][id]``."""

    type: ClassVar[str] = "image"


@dataclass(slots=True)
class Emphasis(Node):
    """Emphasized text: ``*text*`` or ``_text_``."""

    type: ClassVar[str] = "emphasis"
    children: list[Node | str] = field(default_factory=list)


@dataclass(slots=True)
class Strong(Node):
    """Strong text: ``**text**`` or ``__text__``."""

    type: ClassVar[str] = "strong"
    children: list[Node | str] = field(default_factory=list)


@dataclass(slots=True)
class LineBreak(Node):
    """Hard line break (two trailing spaces or a trailing backslash)."""

    type: ClassVar[str] = "line-break"


@dataclass(slots=True)
class Literal(Node):
    """Verbatim text that no renderer should reinterpret."""

    type: ClassVar[str] = "literal"
    value: str = ""


# =============================================================================
# Plugin Nodes
# =============================================================================


@dataclass(slots=True)
class FootnoteReference(Node):
    """Footnote reference: ``[^id]``."""

    type: ClassVar[str] = "footnote"
    id: str = ""
    subtype: str = "ref"
    source: str | None = None


@dataclass(slots=True)
class FootnoteDefinition(Node):
    """Footnote definition: ``[^id]: content``."""

    type: ClassVar[str] = "footnote-definition"
    id: str = ""
    children: list[Node | str] = field(default_factory=list)


# Type tag -> class, used by serialization and visitors
NODE_TYPES: dict[str, type[Node]] = {
    cls.type: cls
    for cls in (
        Paragraph,
        Heading,
        BlockQuote,
        Item,
        List,
        Code,
        Html,
        HorizontalRule,
        LinkDefinition,
        Link,
        Image,
        Emphasis,
        Strong,
        LineBreak,
        Literal,
        FootnoteReference,
        FootnoteDefinition,
    )
}


__all__ = [
    "NODE_TYPES",
    "BlockQuote",
    "Code",
    "Emphasis",
    "FootnoteDefinition",
    "FootnoteReference",
    "Heading",
    "HorizontalRule",
    "Html",
    "Image",
    "Item",
    "LineBreak",
    "Link",
    "LinkDefinition",
    "List",
    "Literal",
    "Node",
    "Paragraph",
    "Strong",
]
