"""Unit tests for the lexer."""

import pytest

from gridwire.errors import LexerError, SourceLocation

from .lib import Token, TokenType, tokenize


def _types(source: str) -> list[TokenType]:
    return [t.type for t in tokenize(source)]


def _pairs(source: str) -> list[tuple[TokenType, str]]:
    return [(t.type, t.value) for t in tokenize(source) if t.type is not TokenType.EOF]


class TestBasics:
    """Tests for punctuation, words and end of input."""

    @pytest.mark.unit
    def test_empty_source(self):
        tokens = tokenize("")
        assert tokens == [Token(TokenType.EOF, "", SourceLocation(1, 1, 0))]

    @pytest.mark.unit
    def test_metadata_line(self):
        assert _pairs("ratio: 16:9") == [
            (TokenType.IDENTIFIER, "ratio"),
            (TokenType.COLON, ":"),
            (TokenType.RATIO, "16:9"),
        ]

    @pytest.mark.unit
    def test_grid_literal(self):
        assert _pairs("grid: 4x3")[-1] == (TokenType.GRID, "4x3")
        assert _pairs("grid: 4X3")[-1] == (TokenType.GRID, "4X3")

    @pytest.mark.unit
    def test_numbers(self):
        assert _pairs("gap: 8")[-1] == (TokenType.NUMBER, "8")
        assert _pairs("w: 1.5")[-1] == (TokenType.NUMBER, "1.5")

    @pytest.mark.unit
    def test_punctuation(self):
        assert _types("{ } [ ] , :") == [
            TokenType.LBRACE,
            TokenType.RBRACE,
            TokenType.LBRACKET,
            TokenType.RBRACKET,
            TokenType.COMMA,
            TokenType.COLON,
            TokenType.EOF,
        ]

    @pytest.mark.unit
    def test_hyphenated_identifier(self):
        assert _pairs("col-widths")[0] == (TokenType.IDENTIFIER, "col-widths")


class TestCellReferences:
    """Tests for cell reference and range classification."""

    @pytest.mark.unit
    def test_cell_ref(self):
        assert _pairs("A1:")[0] == (TokenType.CELL_REF, "A1")

    @pytest.mark.unit
    def test_lowercase_keeps_text(self):
        """Case is preserved; decoding is case-insensitive."""
        assert _pairs("b12")[0] == (TokenType.CELL_REF, "b12")

    @pytest.mark.unit
    def test_cell_range(self):
        assert _pairs("A1..B2: {")[0] == (TokenType.CELL_RANGE, "A1..B2")

    @pytest.mark.unit
    def test_multi_letter_ref(self):
        assert _pairs("AA3")[0] == (TokenType.CELL_REF, "AA3")

    @pytest.mark.unit
    @pytest.mark.parametrize("word", ["h1title", "v2_x", "A1-b", "x"])
    def test_cell_like_identifiers(self, word):
        """Words with a letter-digit prefix but more text are identifiers."""
        assert _pairs(word) == [(TokenType.IDENTIFIER, word)]

    @pytest.mark.unit
    def test_identifier_with_digits_then_letters(self):
        assert _pairs("center")[0] == (TokenType.IDENTIFIER, "center")
        assert _pairs("box2")[0] == (TokenType.CELL_REF, "box2")

    @pytest.mark.unit
    def test_broken_range_fails_at_dot(self):
        """A cell ref followed by '..' and a non-cell stops at the dot."""
        with pytest.raises(LexerError) as exc_info:
            tokenize("A1..foo")
        assert exc_info.value.location == SourceLocation(1, 3, 2)


class TestStrings:
    """Tests for quoted and backtick strings."""

    @pytest.mark.unit
    @pytest.mark.parametrize("quote", ['"', "'"])
    def test_quoted(self, quote):
        assert _pairs(f"{quote}Hello World{quote}") == [
            (TokenType.STRING, "Hello World")
        ]

    @pytest.mark.unit
    def test_escapes(self):
        source = r'"a\nb\tc\rd\\e\"f\'g\qh"'
        assert _pairs(source) == [(TokenType.STRING, "a\nb\tc\rd\\e\"f'gqh")]

    @pytest.mark.unit
    def test_backtick_is_verbatim(self):
        source = "`line one\nline \\n two`"
        assert _pairs(source) == [(TokenType.STRING, "line one\nline \\n two")]

    @pytest.mark.unit
    def test_unterminated_points_at_opening_quote(self):
        with pytest.raises(LexerError, match="Unterminated string") as exc_info:
            tokenize('A1: { value: "oops }')
        assert exc_info.value.location == SourceLocation(1, 14, 13)

    @pytest.mark.unit
    def test_unterminated_backtick(self):
        with pytest.raises(LexerError, match="Unterminated string") as exc_info:
            tokenize("x: `never\nclosed")
        assert exc_info.value.location.column == 4

    @pytest.mark.unit
    def test_multiline_string_advances_lines(self):
        tokens = tokenize("`a\nb` c")
        assert tokens[1].location == SourceLocation(2, 4, 6)


class TestColorsAndThemeRefs:
    """Tests for hex colors and theme references."""

    @pytest.mark.unit
    @pytest.mark.parametrize("color", ["#fff", "#A0b1C2"])
    def test_hex_colors(self, color):
        assert _pairs(color) == [(TokenType.HEX_COLOR, color)]

    @pytest.mark.unit
    @pytest.mark.parametrize("color", ["#ff", "#ffff", "#1234567", "#ggg", "#"])
    def test_bad_hex_colors(self, color):
        with pytest.raises(LexerError, match="3 or 6 hex digits") as exc_info:
            tokenize(f"bg: {color}")
        assert exc_info.value.location.column == 5

    @pytest.mark.unit
    def test_theme_ref(self):
        assert _pairs("$brand-primary") == [(TokenType.THEME_REF, "$brand-primary")]

    @pytest.mark.unit
    def test_bare_dollar(self):
        with pytest.raises(LexerError, match="Empty theme reference"):
            tokenize("bg: $ ")


class TestWhitespaceAndComments:
    """Tests for newline collapsing and comment skipping."""

    @pytest.mark.unit
    def test_newlines_collapse(self):
        source = "a\n\n\n  \n// note\n   // another\nb"
        assert _types(source) == [
            TokenType.IDENTIFIER,
            TokenType.NEWLINE,
            TokenType.IDENTIFIER,
            TokenType.EOF,
        ]

    @pytest.mark.unit
    def test_trailing_comment(self):
        assert _types("gap: 4 // pixels\n") == [
            TokenType.IDENTIFIER,
            TokenType.COLON,
            TokenType.NUMBER,
            TokenType.NEWLINE,
            TokenType.EOF,
        ]

    @pytest.mark.unit
    def test_crlf(self):
        assert _types("a\r\nb") == [
            TokenType.IDENTIFIER,
            TokenType.NEWLINE,
            TokenType.IDENTIFIER,
            TokenType.EOF,
        ]

    @pytest.mark.unit
    def test_locations(self):
        tokens = tokenize("ratio: 16:9\n  A1: {")
        assert tokens[0].location == SourceLocation(1, 1, 0)
        assert tokens[2].location == SourceLocation(1, 8, 7)
        assert tokens[3].location == SourceLocation(1, 12, 11)
        assert tokens[4].location == SourceLocation(2, 3, 14)


class TestUnexpectedCharacters:
    """Tests for characters outside the language."""

    @pytest.mark.unit
    @pytest.mark.parametrize(
        ("source", "column"), [("A1 @", 4), ("a / b", 3), ("x = 1", 3), ("é", 1)]
    )
    def test_unexpected(self, source, column):
        with pytest.raises(LexerError, match="Unexpected character") as exc_info:
            tokenize(source)
        assert exc_info.value.location.column == column
