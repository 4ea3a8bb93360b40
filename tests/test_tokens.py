"""Test the token tree value types."""

from tokenweave.tokens import Delimiter, Position, Span, Token, TokenKind, TokenStream

from tests.conftest import tok


class TestPosition:
    def test_ordering_by_line_first(self):
        assert Position(1, 40) < Position(2, 0)

    def test_ordering_by_column_on_same_line(self):
        assert Position(3, 2) < Position(3, 5)
        assert not Position(3, 5) < Position(3, 5)

    def test_equality(self):
        assert Position(2, 4) == Position(2, 4)
        assert Position(2, 4) <= Position(2, 4)

    def test_hashable(self):
        assert len({Position(1, 0), Position(1, 0), Position(1, 1)}) == 2


class TestDelimiter:
    def test_visible_characters(self):
        assert Delimiter.PARENTHESIS.open_char == "("
        assert Delimiter.PARENTHESIS.close_char == ")"
        assert Delimiter.BRACKET.open_char + Delimiter.BRACKET.close_char == "[]"
        assert Delimiter.BRACE.open_char + Delimiter.BRACE.close_char == "{}"

    def test_none_has_no_characters(self):
        assert Delimiter.NONE.open_char == ""
        assert Delimiter.NONE.close_char == ""
        assert not Delimiter.NONE.visible

    def test_visible_flag(self):
        assert Delimiter.BRACE.visible


class TestToken:
    def test_unknown_span_is_none(self):
        t = Token(TokenKind.IDENT, "x", None)
        assert t.span is None

    def test_span_fields(self):
        t = tok("foo", 2, 4)
        assert t.span == Span(Position(2, 4), Position(2, 7))


class TestTokenStream:
    def test_empty(self):
        stream = TokenStream()
        assert len(stream) == 0
        assert list(stream) == []
        assert stream.to_code() == ""

    def test_iteration_order(self):
        a, b = tok("a", 1, 0), tok("b", 1, 2)
        stream = TokenStream((a, b))
        assert list(stream) == [a, b]
        assert len(stream) == 2

    def test_to_code(self):
        stream = TokenStream((tok("a", 1, 0), tok("b", 1, 2)))
        assert stream.to_code() == "a b"
