"""Cursor tracking and whitespace synthesis from position deltas."""

from __future__ import annotations

from tokenweave.errors import NoSpanInfo, SpanInconsistent
from tokenweave.tokens import Position


class SpanTracker:
    """Position reached by the output emitted so far."""

    def __init__(self, start: Position | None = None) -> None:
        self.cursor = start if start is not None else Position(1, 0)

    def advance_to(self, end: Position) -> None:
        self.cursor = end


def resolve_gap(cursor: Position | None, next_start: Position | None) -> str:
    """Return the whitespace that separates *cursor* from *next_start*.

    Algorithm:
    1. A line delta of N emits N newlines followed by the target column in
       spaces, so indentation and blank lines come back exactly.
    2. On the same line, emit the column delta in spaces. Zero is valid and
       keeps adjacent punctuation such as ``::`` or ``()`` joined.
    3. A target before the cursor means the tree is out of order.

    Raises NoSpanInfo if either position is unknown and SpanInconsistent if
    the target precedes the cursor.
    """
    if cursor is None or next_start is None:
        raise NoSpanInfo("token has no source position", cursor or next_start)

    if next_start < cursor:
        raise SpanInconsistent(
            f"token starts at {next_start.line}:{next_start.column}, "
            f"before the preceding token ends at {cursor.line}:{cursor.column}",
            next_start,
        )

    if next_start.line > cursor.line:
        return "\n" * (next_start.line - cursor.line) + " " * next_start.column
    return " " * (next_start.column - cursor.column)
