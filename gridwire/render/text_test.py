"""Tests for text wrapping and font fitting."""

import pytest

from .text import (
    MIN_FONT_SIZE,
    char_width,
    fit_text,
    is_wide,
    text_width,
    tokenize_line,
    wrap_text,
)


class TestWidths:
    """Tests for glyph width estimation."""

    @pytest.mark.unit
    def test_width_classes(self):
        """Wide, ASCII and other narrow glyphs use distinct factors."""
        assert char_width("日", 24) == 24
        assert char_width("a", 24) == pytest.approx(13.2)
        assert char_width("é", 24) == pytest.approx(16.8)

    @pytest.mark.unit
    def test_wide_ranges(self):
        """CJK, kana, Hangul and full-width forms are wide."""
        for char in "日テ한Ａ":
            assert is_wide(char)
        assert not is_wide("A")

    @pytest.mark.unit
    def test_text_width_sums_chars(self):
        assert text_width("Hello", 24) == pytest.approx(66)


class TestTokenizeLine:
    """Tests for splitting a line into wrap tokens."""

    @pytest.mark.unit
    def test_words_carry_trailing_space(self):
        assert tokenize_line("Hello big World") == ["Hello ", "big ", "World"]

    @pytest.mark.unit
    def test_wide_glyphs_are_single_tokens(self):
        assert tokenize_line("Hi世界") == ["Hi", "世", "界"]


class TestWrapText:
    """Tests for greedy line wrapping."""

    @pytest.mark.unit
    def test_short_text_single_line(self):
        assert wrap_text("Hello", 200, 24) == ["Hello"]

    @pytest.mark.unit
    def test_hard_breaks(self):
        assert wrap_text("Line 1\nLine 2", 500, 24) == ["Line 1", "Line 2"]

    @pytest.mark.unit
    def test_empty_hard_line_preserved(self):
        assert wrap_text("A\n\nB", 500, 24) == ["A", "", "B"]

    @pytest.mark.unit
    def test_wraps_at_word_boundary(self):
        """'Hello ' fits in 80px but 'Hello World' does not."""
        assert wrap_text("Hello World", 80, 24) == ["Hello", "World"]

    @pytest.mark.unit
    def test_cjk_wraps_per_glyph(self):
        """At 24px two wide glyphs fit in 60px."""
        lines = wrap_text("日本語テスト", 60, 24)
        assert lines == ["日本", "語テ", "スト"]

    @pytest.mark.unit
    def test_mixed_scripts(self):
        """'Hello世' is 90px; the second glyph wraps."""
        assert wrap_text("Hello世界", 100, 24) == ["Hello世", "界"]

    @pytest.mark.unit
    def test_oversized_token_forced(self):
        """A token wider than the line is placed alone, not split."""
        assert wrap_text("Superlongword", 10, 24) == ["Superlongword"]

    @pytest.mark.unit
    def test_oversized_token_gets_own_line(self):
        lines = wrap_text("a Superlongword b", 40, 24)
        assert lines == ["a", "Superlongword", "b"]


class TestFitText:
    """Tests for adaptive font fitting."""

    @pytest.mark.unit
    def test_short_text_keeps_size(self):
        fitted = fit_text("Hi", 320, 240, 16, 24)
        assert fitted.font_size == 24
        assert fitted.lines == ("Hi",)

    @pytest.mark.unit
    def test_wrapped_text_keeps_size_when_it_fits(self):
        assert fit_text("Hello World", 320, 240, 16, 24).font_size == 24

    @pytest.mark.unit
    def test_shrinks_when_too_tall(self):
        text = " ".join(["word"] * 20)
        assert fit_text(text, 80, 40, 8, 24).font_size < 24

    @pytest.mark.unit
    def test_never_below_minimum(self):
        """Overflowing text settles at the minimum size."""
        text = " ".join(["word"] * 100)
        fitted = fit_text(text, 50, 30, 4, 24)
        assert fitted.font_size == MIN_FONT_SIZE
        assert " ".join(fitted.lines).split() == text.split()

    @pytest.mark.unit
    def test_monotonic_as_rect_shrinks(self):
        """Shrinking the rectangle never increases the font size."""
        text = "The quick brown fox jumps over the lazy dog"
        sizes = [
            fit_text(text, width, width / 2, 8, 24).font_size
            for width in range(400, 20, -20)
        ]
        assert sizes == sorted(sizes, reverse=True)
        assert min(sizes) >= MIN_FONT_SIZE

    @pytest.mark.unit
    def test_padding_reduces_space(self):
        text = "Hello World testing wrap behavior here"
        loose = fit_text(text, 200, 100, 4, 24).font_size
        tight = fit_text(text, 200, 100, 40, 24).font_size
        assert tight <= loose

    @pytest.mark.unit
    def test_padding_larger_than_rect(self):
        """Negative available space falls back to the minimum size."""
        fitted = fit_text("Hi", 20, 20, 30, 24)
        assert fitted.font_size == MIN_FONT_SIZE
        assert fitted.lines == ("Hi",)
