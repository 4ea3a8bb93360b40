"""Token tree types: positions, spans, leaf tokens, delimited groups."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum, auto


class TokenKind(Enum):
    IDENT = auto()  # foo, r#type
    LITERAL = auto()  # 42, "text", 'c', r#"raw"#
    PUNCT = auto()  # single punctuation character
    LIFETIME = auto()  # 'a


class Delimiter(Enum):
    PARENTHESIS = ("(", ")")
    BRACKET = ("[", "]")
    BRACE = ("{", "}")
    NONE = ("", "")  # invisible grouping, never rendered

    @property
    def open_char(self) -> str:
        return self.value[0]

    @property
    def close_char(self) -> str:
        return self.value[1]

    @property
    def visible(self) -> bool:
        return self is not Delimiter.NONE


@dataclass(frozen=True, slots=True, order=True)
class Position:
    """Source position, 1-based line, 0-based column in characters."""

    line: int
    column: int


@dataclass(frozen=True, slots=True)
class Span:
    """Source range from start to end position."""

    start: Position
    end: Position


@dataclass(frozen=True, slots=True)
class Token:
    """A leaf token; span is None when the token has no source position."""

    kind: TokenKind
    text: str
    span: Span | None


@dataclass(frozen=True, slots=True)
class Group:
    """A delimited sequence of child nodes."""

    delimiter: Delimiter
    children: tuple[Token | Group, ...]
    span_open: Span | None
    span_close: Span | None


Node = Token | Group


@dataclass(frozen=True, slots=True)
class TokenStream:
    """Top-level token tree in source order."""

    nodes: tuple[Node, ...] = ()

    def __iter__(self) -> Iterator[Node]:
        return iter(self.nodes)

    def __len__(self) -> int:
        return len(self.nodes)

    def to_code(self) -> str:
        """Render the stream back to source text with its original whitespace."""
        from tokenweave.reconstruct import reconstruct

        return reconstruct(self)


def single_column_span(line: int, column: int) -> Span:
    """Span covering exactly one character, as delimiters do."""
    return Span(Position(line, column), Position(line, column + 1))
