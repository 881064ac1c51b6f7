"""List block handler.

Items are collected line by line and their content is parsed by a
``subparser("list")``. The marker indent ``l`` of the first item fixes two
patterns for the rest of the list:

- a new item at the same level: exactly ``l`` spaces, then a marker
- continuation inside the current item: ``l + 1`` spaces or a tab

An item ends at the next same-level marker, or at a blank line that is not
followed by a continuation line. A blank line followed by neither a marker
nor a continuation line ends the list.

Looseness:
An item is loose when it contains a blank line or is followed by one (the
last item never counts as followed). Looseness also propagates to the item
after a blank line, so both sides of a separating blank are loose. A tight
item starting with a paragraph has the paragraph's children spliced in
directly.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from marcado.nodes import Item, List, Node, Paragraph

if TYPE_CHECKING:
    from marcado.parser import Parser
    from marcado.stream import TokenStream

# A "- - -" or "* * *" line is a horizontal rule, not a list
_LIST_START = re.compile(r"^( {0,3})([*+-](?!\s?[*+-])|[0-9]+\.) (.*)")
_BULLET = re.compile(r"[*+-]")
_TRIM_LEFT = re.compile(r"^(\t| {0,4})")


class ListHandler:
    """Ordered (``1.``) and unordered (``*``, ``+``, ``-``) lists."""

    def parse(self, parser: Parser, stream: TokenStream, ast: list[Node]) -> bool:
        first = stream.peek().match(_LIST_START)
        if not first:
            return False

        indent = len(first.group(1))
        item_start = re.compile(rf"^( {{{indent}}})([*+-]|[0-9]+\.) (.*)")
        continuation = re.compile(rf"^( {{{indent + 1}}}|\t)")
        subtype = "unordered" if _BULLET.match(first.group(2)) else "ordered"

        items: list[Item] = []
        content = ""
        contains_empty = False
        line_match: re.Match[str] | None = first

        while True:
            current = stream.peek()
            following = stream.peek(1)

            completed = content.strip() != "" and (
                line_match is not None
                or (current.is_empty() and not following.match(continuation))
            )
            if completed:
                items.append(
                    Item(
                        children=parser.subparser("list").parse(content),
                        contains_empty=contains_empty,
                        followed_by_empty=current.is_empty(),
                    )
                )
                content = ""
                contains_empty = False

            if current.is_empty():
                if not following.match(item_start) and not following.match(continuation):
                    break
                content += "\n"
                contains_empty = True
            elif line_match is not None:
                content += _TRIM_LEFT.sub("", line_match.group(3), count=1)
            else:
                content += "\n" + _TRIM_LEFT.sub("", current.text, count=1)

            stream.consume()
            line_match = stream.peek().match(item_start)

        if content.strip():
            items.append(
                Item(
                    children=parser.subparser("list").parse(content),
                    contains_empty=contains_empty,
                )
            )

        _mark_loose(items)
        for item in items:
            if not item.loose:
                _unwrap_paragraph(item)

        ast.append(List(subtype=subtype, children=items))
        return True


def _mark_loose(items: list[Item]) -> None:
    if items:
        items[-1].followed_by_empty = False

    for item in items:
        item.loose = item.contains_empty or item.followed_by_empty

    for i in range(len(items) - 1, 0, -1):
        items[i].loose = items[i].loose or items[i - 1].followed_by_empty


def _unwrap_paragraph(item: Item) -> None:
    if item.children and isinstance(item.children[0], Paragraph):
        item.children[0:1] = item.children[0].children


__all__ = ["ListHandler"]
