"""Reference lexer: converts Rust-like source text into a token tree."""

from __future__ import annotations

from dataclasses import dataclass, field

from tokenweave.errors import LexError
from tokenweave.tokens import (
    Delimiter,
    Group,
    Node,
    Position,
    Span,
    Token,
    TokenKind,
    TokenStream,
    single_column_span,
)

_OPENERS = {"(": Delimiter.PARENTHESIS, "[": Delimiter.BRACKET, "{": Delimiter.BRACE}
_CLOSERS = {")": Delimiter.PARENTHESIS, "]": Delimiter.BRACKET, "}": Delimiter.BRACE}

# Every other ASCII punctuation character is a single-character PUNCT token
_PUNCT = frozenset("+-*/%^!&|=<>@.,;:#$?~\\")

_WHITESPACE = frozenset(" \t\n\r\f\v")

_RAW_STRING_PREFIXES = frozenset({"r", "br", "cr"})
_STRING_PREFIXES = frozenset({"b", "c"})


def is_ident_start(ch: str) -> bool:
    """Return True if ch can begin an identifier."""
    return ch == "_" or ch.isalpha()


def is_ident_char(ch: str) -> bool:
    """Return True if ch can continue an identifier."""
    return ch == "_" or ch.isalnum()


@dataclass(slots=True)
class _OpenGroup:
    delimiter: Delimiter
    span_open: Span
    children: list[Node] = field(default_factory=list)


class Lexer:
    """Tokenize source text into a TokenStream of Token and Group nodes."""

    def __init__(self, source: str, filename: str = "<input>") -> None:
        self._source = source
        self._filename = filename
        self._pos = 0
        self._line = 1
        self._col = 0
        self._top: list[Node] = []
        self._open: list[_OpenGroup] = []

    def tokenize(self) -> TokenStream:
        """Tokenize the full source and return the top-level stream."""
        while self._pos < len(self._source):
            self._lex_one()

        if self._open:
            group = self._open[-1]
            raise self._error(
                f"unclosed delimiter '{group.delimiter.open_char}'", group.span_open.start
            )
        return TokenStream(tuple(self._top))

    # ------------------------------------------------------------------
    # Position helpers
    # ------------------------------------------------------------------

    def _current_pos(self) -> Position:
        return Position(self._line, self._col)

    def _peek(self, offset: int = 0) -> str:
        idx = self._pos + offset
        if idx < len(self._source):
            return self._source[idx]
        return ""

    def _at_end(self) -> bool:
        return self._pos >= len(self._source)

    def _advance(self) -> str:
        ch = self._source[self._pos]
        self._pos += 1
        if ch == "\n":
            self._line += 1
            self._col = 0
        else:
            self._col += 1
        return ch

    def _children(self) -> list[Node]:
        return self._open[-1].children if self._open else self._top

    def _emit(self, kind: TokenKind, begin: int, start: Position) -> Token:
        text = self._source[begin : self._pos]
        tok = Token(kind, text, Span(start, self._current_pos()))
        self._children().append(tok)
        return tok

    def _error(self, message: str, pos: Position | None = None) -> LexError:
        if pos is None:
            pos = self._current_pos()
        return LexError(message, pos, self._source)

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def _lex_one(self) -> None:
        ch = self._peek()

        if ch in _WHITESPACE:
            self._advance()
            return

        if ch == "/" and self._peek(1) == "/":
            self._skip_line_comment()
            return

        if ch == "/" and self._peek(1) == "*":
            self._skip_block_comment()
            return

        if ch in _OPENERS:
            self._open_group(_OPENERS[ch])
            return

        if ch in _CLOSERS:
            self._close_group(_CLOSERS[ch])
            return

        start = self._current_pos()
        begin = self._pos

        if ch == '"':
            self._lex_string(begin, start)
            return

        if ch == "'":
            self._lex_quote(begin, start)
            return

        if ch.isdigit():
            self._lex_number(begin, start)
            return

        if is_ident_start(ch):
            self._lex_word(begin, start)
            return

        if ch in _PUNCT:
            self._advance()
            self._emit(TokenKind.PUNCT, begin, start)
            return

        raise self._error(f"unexpected character {ch!r}")

    # ------------------------------------------------------------------
    # Comments
    # ------------------------------------------------------------------

    def _skip_line_comment(self) -> None:
        while not self._at_end() and self._peek() != "\n":
            self._advance()

    def _skip_block_comment(self) -> None:
        start = self._current_pos()
        self._advance()
        self._advance()
        depth = 1
        while depth:
            if self._at_end():
                raise self._error("unterminated block comment", start)
            if self._peek() == "/" and self._peek(1) == "*":
                self._advance()
                self._advance()
                depth += 1
            elif self._peek() == "*" and self._peek(1) == "/":
                self._advance()
                self._advance()
                depth -= 1
            else:
                self._advance()

    # ------------------------------------------------------------------
    # Delimited groups
    # ------------------------------------------------------------------

    def _open_group(self, delimiter: Delimiter) -> None:
        span = single_column_span(self._line, self._col)
        self._advance()
        self._open.append(_OpenGroup(delimiter, span))

    def _close_group(self, delimiter: Delimiter) -> None:
        if not self._open:
            raise self._error(f"unexpected closing delimiter '{delimiter.close_char}'")
        group = self._open[-1]
        if group.delimiter is not delimiter:
            raise self._error(
                f"mismatched closing delimiter '{delimiter.close_char}', "
                f"expected '{group.delimiter.close_char}'"
            )
        span = single_column_span(self._line, self._col)
        self._advance()
        self._open.pop()
        self._children().append(
            Group(group.delimiter, tuple(group.children), group.span_open, span)
        )

    # ------------------------------------------------------------------
    # Identifiers, raw identifiers, prefixed literals
    # ------------------------------------------------------------------

    def _lex_word(self, begin: int, start: Position) -> None:
        while not self._at_end() and is_ident_char(self._peek()):
            self._advance()
        word = self._source[begin : self._pos]
        nxt = self._peek()

        if word in _RAW_STRING_PREFIXES and self._raw_string_hashes() >= 0:
            self._lex_raw_string(begin, start)
            return

        if word == "r" and nxt == "#" and is_ident_start(self._peek(1)):
            self._advance()
            while not self._at_end() and is_ident_char(self._peek()):
                self._advance()
            self._emit(TokenKind.IDENT, begin, start)
            return

        if word in _STRING_PREFIXES and nxt == '"':
            self._lex_string(begin, start)
            return

        if word == "b" and nxt == "'":
            self._lex_char(begin, start)
            return

        self._emit(TokenKind.IDENT, begin, start)

    # ------------------------------------------------------------------
    # Strings and characters
    # ------------------------------------------------------------------

    def _lex_string(self, begin: int, start: Position) -> None:
        """Scan an escaped string literal; the opening quote is next."""
        self._advance()
        while True:
            if self._at_end():
                raise self._error("unterminated string literal", start)
            ch = self._advance()
            if ch == "\\":
                if not self._at_end():
                    self._advance()
            elif ch == '"':
                break
        self._consume_suffix()
        self._emit(TokenKind.LITERAL, begin, start)

    def _raw_string_hashes(self) -> int:
        """Return the number of '#' before an opening quote, or -1 if none follows."""
        idx = self._pos
        while idx < len(self._source) and self._source[idx] == "#":
            idx += 1
        if idx < len(self._source) and self._source[idx] == '"':
            return idx - self._pos
        return -1

    def _lex_raw_string(self, begin: int, start: Position) -> None:
        """Scan for the closing quote followed by the same number of hashes."""
        hashes = self._raw_string_hashes()
        for _ in range(hashes + 1):
            self._advance()

        closing = "#" * hashes
        while True:
            if self._at_end():
                raise self._error(
                    f"unterminated raw string (expected '\"{closing}')", start
                )
            if self._advance() == '"' and self._source.startswith(closing, self._pos):
                for _ in range(hashes):
                    self._advance()
                break
        self._consume_suffix()
        self._emit(TokenKind.LITERAL, begin, start)

    def _lex_quote(self, begin: int, start: Position) -> None:
        # 'a is a lifetime, 'a' is a character literal
        if is_ident_start(self._peek(1)) and self._peek(2) != "'":
            self._advance()
            while not self._at_end() and is_ident_char(self._peek()):
                self._advance()
            self._emit(TokenKind.LIFETIME, begin, start)
            return
        self._lex_char(begin, start)

    def _lex_char(self, begin: int, start: Position) -> None:
        """Scan a character literal; the opening quote is next."""
        self._advance()
        while True:
            if self._at_end() or self._peek() == "\n":
                raise self._error("unterminated character literal", start)
            ch = self._advance()
            if ch == "\\":
                if not self._at_end():
                    self._advance()
            elif ch == "'":
                break
        self._consume_suffix()
        self._emit(TokenKind.LITERAL, begin, start)

    # ------------------------------------------------------------------
    # Numbers
    # ------------------------------------------------------------------

    def _lex_number(self, begin: int, start: Position) -> None:
        if self._peek() == "0" and self._peek(1) in ("x", "o", "b"):
            self._advance()
            self._advance()
            self._consume_suffix()
            self._emit(TokenKind.LITERAL, begin, start)
            return

        self._consume_digits()

        # 1.5 but not 1..2 or 1.foo()
        if self._peek() == "." and self._peek(1).isdigit():
            self._advance()
            self._consume_digits()

        if self._peek() in ("e", "E"):
            sign = 1 if self._peek(1) in ("+", "-") else 0
            if self._peek(1 + sign).isdigit():
                for _ in range(1 + sign):
                    self._advance()
                self._consume_digits()

        self._consume_suffix()
        self._emit(TokenKind.LITERAL, begin, start)

    def _consume_digits(self) -> None:
        while not self._at_end() and (self._peek().isdigit() or self._peek() == "_"):
            self._advance()

    def _consume_suffix(self) -> None:
        while not self._at_end() and is_ident_char(self._peek()):
            self._advance()


def tokenize(source: str, filename: str = "<input>") -> TokenStream:
    """Convenience function: tokenize source text and return the token tree."""
    return Lexer(source, filename).tokenize()
