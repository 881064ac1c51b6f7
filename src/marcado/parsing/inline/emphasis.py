"""Emphasis and strong resolution for one delimiter symbol (``*`` or ``_``).

Every delimiter character of the symbol is assigned one of three roles:
open/close a span (two adjacent characters for strong, one for emphasis) or
stay literal. An assignment is valid when:

- every opened span is closed, in stack order (no crossing spans)
- no span is empty (literal delimiters do not count as content)
- a span never directly nests a span of the same kind
- openers are not followed by whitespace, closers are not preceded by it
- underscores neither open after nor close before an alphanumeric character

Each literal delimiter costs one point. The resolver picks the cheapest
valid assignment; among equally cheap ones it picks the first in
exploration order: strong before emphasis, close before open, literal last.
``****`` has no valid span at all and stays literal.

Search:
The open spans form a stack of distinct kinds, so at most two deep. Together
with a "current span has content" flag that makes ten states per delimiter,
and a backward dynamic program over (delimiter, state) finds the best
assignment in linear time instead of enumerating every combination.

Only outermost spans become nodes. Their content goes back through the full
pipeline with an ``emphasis`` or ``strong`` context tag, which resolves the
nested spans on its own.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Literal as LiteralType, TypeAlias

from marcado.nodes import Emphasis, Node, Strong

if TYPE_CHECKING:
    from marcado.parser import Parser, ParserState

SpanKind = LiteralType["emphasis", "strong"]

_EMPHASIS: SpanKind = "emphasis"
_STRONG: SpanKind = "strong"

_STACKS: tuple[tuple[SpanKind, ...], ...] = (
    (),
    (_EMPHASIS,),
    (_STRONG,),
    (_EMPHASIS, _STRONG),
    (_STRONG, _EMPHASIS),
)

# Score for states with no valid completion
_INVALID = float("inf")

_State: TypeAlias = tuple[tuple[SpanKind, ...], bool]


@dataclass(frozen=True, slots=True)
class _Operation:
    """Open or close of one span, covering ``text[start:end]``."""

    action: LiteralType["open", "close"]
    kind: SpanKind
    start: int
    end: int


@dataclass(frozen=True, slots=True)
class Span:
    """An outermost resolved span: delimiters and content boundaries."""

    kind: SpanKind
    start: int
    content_start: int
    content_end: int
    end: int


class _Resolver:
    __slots__ = ("_text", "_symbol", "_positions")

    def __init__(self, text: str, symbol: str) -> None:
        self._text = text
        self._symbol = symbol
        self._positions = [i for i, char in enumerate(text) if char == symbol]

    def _can_open(self, start: int, end: int) -> bool:
        text = self._text
        if end >= len(text) or text[end].isspace():
            return False
        return not (self._symbol == "_" and start > 0 and text[start - 1].isalnum())

    def _can_close(self, start: int, end: int) -> bool:
        text = self._text
        if start == 0 or text[start - 1].isspace():
            return False
        return not (self._symbol == "_" and end < len(text) and text[end].isalnum())

    def _moves(self, j: int, stack: tuple[SpanKind, ...], filled: bool):
        """Yield ``(cost, operation, consumed)`` in exploration order."""
        pos = self._positions[j]
        top = stack[-1] if stack else None

        pair = j + 1 < len(self._positions) and self._positions[j + 1] == pos + 1
        if pair:
            if top == _STRONG and filled:
                if self._can_close(pos, pos + 2):
                    yield 0, _Operation("close", _STRONG, pos, pos + 2), 2
            elif _STRONG not in stack and self._can_open(pos, pos + 2):
                yield 0, _Operation("open", _STRONG, pos, pos + 2), 2

        if top == _EMPHASIS and filled:
            if self._can_close(pos, pos + 1):
                yield 0, _Operation("close", _EMPHASIS, pos, pos + 1), 1
        elif _EMPHASIS not in stack and self._can_open(pos, pos + 1):
            yield 0, _Operation("open", _EMPHASIS, pos, pos + 1), 1

        yield 1, None, 1

    def _advance(
        self,
        j: int,
        stack: tuple[SpanKind, ...],
        filled: bool,
        op: _Operation | None,
        consumed: int,
    ) -> tuple[int, _State]:
        """Delimiter index and state after applying ``op`` at delimiter ``j``."""
        if op is not None:
            if op.action == "open":
                stack, filled = (*stack, op.kind), False
            else:
                stack, filled = stack[:-1], True

        following = j + consumed
        positions = self._positions
        if following < len(positions) and positions[following] > positions[following - 1] + 1:
            filled = True
        return following, (stack, filled and bool(stack))

    def resolve(self) -> list[_Operation]:
        """Operations of the best assignment, in text order."""
        count = len(self._positions)
        best: list[dict[_State, tuple[float, tuple | None]]] = [{} for _ in range(count + 1)]
        best[count] = {((), False): (0, None)}

        for j in range(count - 1, -1, -1):
            for stack in _STACKS:
                for filled in (False, True) if stack else (False,):
                    chosen: tuple[float, tuple | None] = (_INVALID, None)
                    for cost, op, consumed in self._moves(j, stack, filled):
                        following, state = self._advance(j, stack, filled, op, consumed)
                        rest = best[following].get(state, (_INVALID, None))[0]
                        if cost + rest < chosen[0]:
                            chosen = (cost + rest, (op, following, state))
                    best[j][(stack, filled)] = chosen

        operations: list[_Operation] = []
        j, state = 0, ((), False)
        while j < count:
            score, step = best[j][state]
            assert step is not None and score != _INVALID, "all-literal is always valid"
            op, j, state = step
            if op is not None:
                operations.append(op)
        return operations


def resolve_spans(text: str, symbol: str) -> list[Span]:
    """Outermost emphasis/strong spans of ``text`` for one delimiter symbol."""
    if text.count(symbol) < 2:
        return []

    spans: list[Span] = []
    depth = 0
    opener: _Operation | None = None
    for op in _Resolver(text, symbol).resolve():
        if op.action == "open":
            if depth == 0:
                opener = op
            depth += 1
        else:
            depth -= 1
            if depth == 0:
                assert opener is not None and opener.kind == op.kind
                spans.append(Span(op.kind, opener.start, opener.end, op.start, op.end))
    return spans


class InlineEmphasisHandler:
    """Emphasis (``*a*``, ``_a_``) and strong (``**a**``, ``__a__``)."""

    def __init__(self, symbol: str = "*") -> None:
        if symbol not in ("*", "_"):
            raise ValueError(f"Emphasis symbol must be '*' or '_', got {symbol!r}")
        self.symbol = symbol

    def parse(self, parser: Parser, text: str, state: ParserState) -> list[Node | str]:
        spans = resolve_spans(text, self.symbol)
        if not spans:
            return parser.parse_inlines(text, state)

        parts: list[str] = []
        pos = 0
        for span in spans:
            content = text[span.content_start : span.content_end]
            node_class = Strong if span.kind == _STRONG else Emphasis
            node = node_class(children=parser.parse_inlines(content, state, span.kind))
            parts.append(text[pos : span.start])
            parts.append(parser.add_inline(state, node))
            pos = span.end

        parts.append(text[pos:])
        return parser.parse_inlines("".join(parts), state)


__all__ = ["InlineEmphasisHandler", "Span", "resolve_spans"]
