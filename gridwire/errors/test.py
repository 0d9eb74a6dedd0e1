"""Tests for located errors."""

import pytest

from .lib import GridwireError, LexerError, ParseError, SemanticError, SourceLocation


class TestSourceLocation:
    """Tests for SourceLocation."""

    @pytest.mark.unit
    def test_str(self):
        """Location prints as line:column."""
        assert str(SourceLocation(line=3, column=7, offset=20)) == "3:7"

    @pytest.mark.unit
    def test_immutable(self):
        """Locations cannot be modified."""
        loc = SourceLocation(1, 1, 0)
        with pytest.raises(AttributeError):
            loc.line = 2  # type: ignore[misc]


class TestGridwireError:
    """Tests for error messages and excerpts."""

    @pytest.mark.unit
    def test_message_includes_location(self):
        """str() appends the location."""
        err = ParseError("Expected ':'", SourceLocation(2, 4, 10))
        assert str(err) == "Expected ':' at 2:4"
        assert err.message == "Expected ':'"

    @pytest.mark.unit
    def test_format_without_source(self):
        """Without source text, format() is the plain message."""
        err = LexerError("Unterminated string", SourceLocation(1, 1, 0))
        assert err.format() == "Unterminated string at 1:1"

    @pytest.mark.unit
    def test_format_with_caret(self):
        """Excerpt shows the line and a caret under the column."""
        source = "grid: 4x3\nA1 @ { type: txt }"
        err = LexerError("Unexpected character '@'", SourceLocation(2, 4, 13), source)
        lines = err.format().split("\n")
        assert lines[0] == "Unexpected character '@' at 2:4"
        assert lines[1] == "  2 | A1 @ { type: txt }"
        assert lines[2] == "    |    ^"

    @pytest.mark.unit
    def test_format_wide_gutter(self):
        """Gutter widens with the line number."""
        source = "\n" * 11 + "xx"
        err = SemanticError("bad", SourceLocation(12, 2, 12), source)
        lines = err.format(indent=0).split("\n")
        assert lines[1] == "12 | xx"
        assert lines[2] == "   |  ^"

    @pytest.mark.unit
    def test_format_preserves_tabs(self):
        """Tabs before the column are kept so the caret aligns."""
        source = "\tA1: {"
        err = ParseError("oops", SourceLocation(1, 3, 2), source)
        assert err.format().split("\n")[2].endswith("| \t ^")

    @pytest.mark.unit
    def test_with_source(self):
        """with_source attaches text and returns the same error."""
        err = SemanticError("x", SourceLocation(1, 1, 0))
        assert err.with_source("abc") is err
        assert err.source == "abc"

    @pytest.mark.unit
    def test_kinds(self):
        """Each subclass reports its taxonomy kind."""
        assert LexerError.kind == "lexical"
        assert ParseError.kind == "syntax"
        assert SemanticError.kind == "semantic"
        assert issubclass(SemanticError, GridwireError)
