"""Depth-first traversal of a token tree, filling gaps from span deltas."""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from tokenweave.emit import Emitter
from tokenweave.errors import NoSpanInfo, SpanInconsistent
from tokenweave.gaps import SpanTracker, resolve_gap
from tokenweave.tokens import Group, Node, Position, Span, Token, TokenKind


class TreeWalker:
    """Emit a token tree through an Emitter, one node at a time.

    The traversal keeps an explicit stack of child iterators and does not
    recurse; group nesting depth is not limited by the recursion limit.
    """

    def __init__(self, tracker: SpanTracker, emitter: Emitter) -> None:
        self._tracker = tracker
        self._emitter = emitter
        self.visited = 0

    def walk(self, nodes: Iterable[Node]) -> None:
        """Emit *nodes* and everything nested in them, in source order."""
        stack: list[tuple[Iterator[Node], Group | None]] = [(iter(nodes), None)]
        while stack:
            children, group = stack[-1]
            node = next(children, None)
            if node is None:
                stack.pop()
                if group is not None:
                    self._close(group)
                continue

            self.visited += 1
            if isinstance(node, Token):
                self._token(node)
            elif isinstance(node, Group):
                self._open(node)
                stack.append((iter(node.children), node))
            else:
                raise TypeError(f"expected Token or Group, got {type(node).__name__}")

    # ------------------------------------------------------------------
    # Node handlers
    # ------------------------------------------------------------------

    def _token(self, token: Token) -> None:
        span = token.span
        if span is None:
            raise NoSpanInfo(
                f"token {token.text!r} has no source position", self._tracker.cursor
            )
        if span.end < span.start:
            raise SpanInconsistent(f"token {token.text!r} ends before it starts", span.start)
        if not token.text:
            raise SpanInconsistent(f"{token.kind.name.lower()} token has no text", span.start)

        newlines = token.text.count("\n")
        if newlines:
            if token.kind is not TokenKind.LITERAL:
                raise SpanInconsistent(
                    f"{token.kind.name.lower()} token {token.text!r} contains a newline",
                    span.start,
                )
            if newlines != span.end.line - span.start.line:
                raise SpanInconsistent(
                    f"literal spans {span.end.line - span.start.line} line breaks "
                    f"but its text contains {newlines}",
                    span.start,
                )

        self._fill(span.start)
        self._emitter.emit(token.text, span.start)
        self._tracker.advance_to(span.end)

    def _open(self, group: Group) -> None:
        # Invisible groups splice their children into the surrounding
        # sequence; their own spans are never consulted.
        if group.delimiter.visible:
            self._delimiter("opening", group.delimiter.open_char, group.span_open)

    def _close(self, group: Group) -> None:
        if group.delimiter.visible:
            self._delimiter("closing", group.delimiter.close_char, group.span_close)

    def _delimiter(self, side: str, char: str, span: Span | None) -> None:
        if span is None:
            raise NoSpanInfo(
                f"{side} {char!r} has no source position", self._tracker.cursor
            )
        if span.end < span.start:
            raise SpanInconsistent(f"{side} {char!r} ends before it starts", span.start)
        if span.end != Position(span.start.line, span.start.column + 1):
            raise SpanInconsistent(
                f"{side} {char!r} must span exactly one character", span.start
            )
        self._fill(span.start)
        self._emitter.emit(char, span.start)
        self._tracker.advance_to(span.end)

    def _fill(self, start: Position) -> None:
        self._emitter.emit(resolve_gap(self._tracker.cursor, start))


def first_start(nodes: Iterable[Node]) -> Position | None:
    """Return where the first emitted character of *nodes* starts.

    Invisible groups are looked through. Returns None when nothing in *nodes*
    emits text. Raises NoSpanInfo if the first emitting node has no position.
    """
    stack: list[Iterator[Node]] = [iter(nodes)]
    while stack:
        node = next(stack[-1], None)
        if node is None:
            stack.pop()
        elif isinstance(node, Token):
            if node.span is None:
                raise NoSpanInfo(f"token {node.text!r} has no source position")
            return node.span.start
        elif node.delimiter.visible:
            if node.span_open is None:
                raise NoSpanInfo(
                    f"opening {node.delimiter.open_char!r} has no source position"
                )
            return node.span_open.start
        else:
            stack.append(iter(node.children))
    return None
