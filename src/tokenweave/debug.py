"""--debug token tree dump to stderr."""

from __future__ import annotations

import sys
from collections.abc import Iterable
from typing import TextIO

from tokenweave.tokens import Group, Node, Span, Token


def dump_tree(nodes: Iterable[Node], *, file: TextIO = sys.stderr) -> None:
    """Print a human-readable token tree to *file*."""
    file.write("TokenStream\n")
    # (node, depth) pairs; children are pushed in reverse to keep source order
    pending: list[tuple[Node, int]] = [(n, 1) for n in reversed(tuple(nodes))]
    while pending:
        node, depth = pending.pop()
        if isinstance(node, Token):
            _dump_token(node, depth, file)
        elif isinstance(node, Group):
            _dump_group(node, depth, file)
            pending.extend((c, depth + 1) for c in reversed(node.children))


def _indent(depth: int) -> str:
    return "  " * depth


def _fmt_span(span: Span | None) -> str:
    if span is None:
        return "?"
    return f"{span.start.line}:{span.start.column}-{span.end.line}:{span.end.column}"


def _dump_token(token: Token, depth: int, f: TextIO) -> None:
    f.write(f"{_indent(depth)}{token.kind.name} {token.text!r} @ {_fmt_span(token.span)}\n")


def _dump_group(group: Group, depth: int, f: TextIO) -> None:
    delims = group.delimiter.open_char + group.delimiter.close_char or "None"
    f.write(
        f"{_indent(depth)}Group {delims} "
        f"@ {_fmt_span(group.span_open)} .. {_fmt_span(group.span_close)}\n"
    )
