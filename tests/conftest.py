"""Shared test fixtures and helpers."""

from __future__ import annotations

import pytest

from tokenweave.lexer import tokenize
from tokenweave.tokens import (
    Delimiter,
    Group,
    Node,
    Position,
    Span,
    Token,
    TokenKind,
    single_column_span,
)


@pytest.fixture
def lex():
    """Return a helper that tokenizes source and returns the top-level nodes."""

    def _lex(source: str) -> list[Node]:
        return list(tokenize(source))

    return _lex


def tok(
    text: str,
    line: int,
    column: int,
    kind: TokenKind = TokenKind.IDENT,
    end: tuple[int, int] | None = None,
) -> Token:
    """Build a token at line:column; single-line tokens end after their text."""
    end_pos = Position(*end) if end is not None else Position(line, column + len(text))
    return Token(kind, text, Span(Position(line, column), end_pos))


def unknown(text: str, kind: TokenKind = TokenKind.IDENT) -> Token:
    """Build a token with no source position."""
    return Token(kind, text, None)


def group(
    delimiter: Delimiter,
    open_at: tuple[int, int] | None,
    close_at: tuple[int, int] | None,
    *children: Node,
) -> Group:
    """Build a group whose delimiters sit at the given line:column pairs."""
    span_open = single_column_span(*open_at) if open_at is not None else None
    span_close = single_column_span(*close_at) if close_at is not None else None
    return Group(delimiter, tuple(children), span_open, span_close)


def invisible(*children: Node) -> Group:
    """Build a None-delimited group with unknown spans."""
    return Group(Delimiter.NONE, tuple(children), None, None)


def assert_kinds(nodes: list[Node], expected: list[TokenKind]) -> None:
    """Assert that the nodes are tokens whose kinds match the expected list."""
    actual = [n.kind if isinstance(n, Token) else type(n).__name__ for n in nodes]
    assert actual == expected, f"Expected {expected}, got {actual}"


def assert_texts(nodes: list[Node], expected: list[str]) -> None:
    """Assert that the nodes are tokens whose texts match the expected list."""
    actual = [n.text if isinstance(n, Token) else type(n).__name__ for n in nodes]
    assert actual == expected, f"Expected {expected}, got {actual}"
