"""Unit tests for the cell coordinate codec."""

import pytest

from .lib import (
    CellCoord,
    CellRange,
    CellRefError,
    column_to_letters,
    decode,
    decode_range,
    encode,
    encode_range,
    letters_to_column,
    ranges_overlap,
)


class TestDecode:
    """Tests for single reference decoding."""

    @pytest.mark.unit
    @pytest.mark.parametrize(
        ("ref", "col", "row"),
        [("A1", 0, 0), ("B3", 1, 2), ("Z26", 25, 25), ("d10", 3, 9)],
    )
    def test_valid_refs(self, ref, col, row):
        """References map to zero-based coordinates."""
        assert decode(ref) == CellCoord(col=col, row=row)

    @pytest.mark.unit
    @pytest.mark.parametrize("ref", ["", "A", "1", "1A", "A-1", "A1B", "A 1"])
    def test_malformed(self, ref):
        """Malformed references are rejected."""
        with pytest.raises(CellRefError, match="Invalid cell reference"):
            decode(ref)

    @pytest.mark.unit
    def test_row_zero(self):
        """Row numbers start at 1."""
        with pytest.raises(CellRefError, match="Invalid row number"):
            decode("A0")

    @pytest.mark.unit
    def test_multi_letter_column(self):
        """Letter runs continue past Z."""
        assert decode("AA1").col == 26

    @pytest.mark.unit
    def test_round_trip_all_columns(self):
        """decode(encode(c)) is the identity over the letter range."""
        for col in range(26):
            for row in (0, 1, 9, 99):
                coord = CellCoord(col=col, row=row)
                assert decode(encode(coord)) == coord


class TestColumnLetters:
    """Tests for bijective base-26 column letters."""

    @pytest.mark.unit
    def test_single_letters(self):
        assert column_to_letters(0) == "A"
        assert column_to_letters(25) == "Z"
        assert letters_to_column("z") == 25

    @pytest.mark.unit
    def test_double_letters(self):
        assert column_to_letters(26) == "AA"
        assert letters_to_column("AB") == 27

    @pytest.mark.unit
    def test_negative_column(self):
        with pytest.raises(CellRefError):
            column_to_letters(-1)


class TestDecodeRange:
    """Tests for range decoding and normalization."""

    @pytest.mark.unit
    def test_single_cell(self):
        """A lone reference is a 1x1 range."""
        cell_range = decode_range("C2")
        assert cell_range.start == cell_range.end == CellCoord(col=2, row=1)
        assert cell_range.is_single

    @pytest.mark.unit
    def test_span(self):
        cell_range = decode_range("A1..B2")
        assert cell_range.start == CellCoord(col=0, row=0)
        assert cell_range.end == CellCoord(col=1, row=1)
        assert (cell_range.col_span, cell_range.row_span) == (2, 2)

    @pytest.mark.unit
    def test_reversed_corners_normalize(self):
        """Corner order does not matter."""
        assert decode_range("B2..A1") == decode_range("A1..B2")

    @pytest.mark.unit
    def test_anti_diagonal_corners_normalize(self):
        """Mixed corners normalize per axis."""
        assert decode_range("A3..C1") == decode_range("A1..C3")

    @pytest.mark.unit
    def test_too_many_parts(self):
        with pytest.raises(CellRefError, match="Invalid cell range"):
            decode_range("A1..B2..C3")

    @pytest.mark.unit
    def test_direct_construction_normalizes(self):
        """The model itself normalizes, not just the decoder."""
        cell_range = CellRange(
            start=CellCoord(col=3, row=0), end=CellCoord(col=1, row=2)
        )
        assert cell_range.start == CellCoord(col=1, row=0)
        assert cell_range.end == CellCoord(col=3, row=2)


class TestEncode:
    """Tests for reference encoding."""

    @pytest.mark.unit
    def test_encode_range(self):
        assert encode_range(decode_range("B2..A1")) == "A1..B2"
        assert encode_range(decode_range("C3")) == "C3"
        assert str(decode_range("A1..D3")) == "A1..D3"


class TestOverlap:
    """Tests for the range overlap predicate."""

    CASES = [
        ("A1..B2", "B2", True),
        ("A1..B2", "C1", False),
        ("A1..B2", "A3..B3", False),
        ("A1..D1", "B1..B3", True),
        ("B2", "A1..C3", True),
        ("A1", "B2", False),
    ]

    @pytest.mark.unit
    @pytest.mark.parametrize(("a", "b", "expected"), CASES)
    def test_overlap_is_symmetric(self, a, b, expected):
        """overlaps(a, b) == overlaps(b, a)."""
        ra, rb = decode_range(a), decode_range(b)
        assert ranges_overlap(ra, rb) is expected
        assert ranges_overlap(rb, ra) is expected

    @pytest.mark.unit
    @pytest.mark.parametrize("ref", ["A1", "A1..B2", "C2..D3"])
    def test_self_overlap(self, ref):
        """A range always overlaps itself."""
        cell_range = decode_range(ref)
        assert cell_range.overlaps(cell_range)

    @pytest.mark.unit
    def test_contains_and_cells(self):
        cell_range = decode_range("A1..B2")
        assert cell_range.contains(CellCoord(col=1, row=1))
        assert not cell_range.contains(CellCoord(col=2, row=0))
        assert [encode(c) for c in cell_range.cells()] == ["A1", "B1", "A2", "B2"]
