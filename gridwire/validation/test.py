"""Unit tests for validation module."""

import pytest

from gridwire.cells import decode_range
from gridwire.ir import BoxComponent, Document, Metadata, TxtComponent
from gridwire.validation import (
    bounds_violation,
    find_overlap,
    is_valid,
    unresolved_color,
    validate_document,
)


class TestFindOverlap:
    """Tests for the overlap scan."""

    @pytest.mark.unit
    def test_no_overlap(self):
        accepted = [decode_range("A1"), decode_range("B1..C1")]
        assert find_overlap(decode_range("A2..C3"), accepted) is None

    @pytest.mark.unit
    def test_first_match_index(self):
        accepted = [decode_range("A1"), decode_range("A1..B2")]
        assert find_overlap(decode_range("B2"), accepted) == 1


class TestBoundsViolation:
    """Tests for grid bounds messages."""

    @pytest.mark.unit
    def test_inside(self):
        assert bounds_violation(decode_range("A1..D3"), (4, 3)) is None

    @pytest.mark.unit
    def test_column(self):
        error_type, message = bounds_violation(decode_range("E1"), (4, 3))
        assert error_type == "column_out_of_bounds"
        assert "Column E" in message

    @pytest.mark.unit
    def test_row(self):
        error_type, message = bounds_violation(decode_range("A4"), (4, 3))
        assert error_type == "row_out_of_bounds"
        assert "Row 4" in message

    @pytest.mark.unit
    def test_column_reported_first(self):
        assert bounds_violation(decode_range("E4"), (4, 3))[0] == "column_out_of_bounds"


class TestUnresolvedColor:
    """Tests for theme color reference checks."""

    @pytest.mark.unit
    def test_plain_values_pass(self):
        assert unresolved_color(None, {}) is None
        assert unresolved_color("#fff", {}) is None

    @pytest.mark.unit
    def test_known_and_unknown(self):
        colors = {"brand": "#123456"}
        assert unresolved_color("$brand", colors) is None
        assert unresolved_color("$accent", colors) == "accent"


class TestValidateDocument:
    """Tests for whole-document validation."""

    @pytest.mark.unit
    def test_valid_document(self):
        doc = Document(
            components=[
                TxtComponent(range=decode_range("A1..B1"), value="Title"),
                BoxComponent(range=decode_range("A2..D3")),
            ]
        )
        assert validate_document(doc) == []
        assert is_valid(doc)

    @pytest.mark.unit
    def test_overlap_reported_on_later_component(self):
        doc = Document(
            components=[
                BoxComponent(range=decode_range("A1..B2")),
                BoxComponent(range=decode_range("B2")),
            ]
        )
        issues = validate_document(doc)
        assert len(issues) == 1
        assert issues[0].component_index == 1
        assert issues[0].error_type == "overlap"
        assert "B2 overlaps A1..B2" in issues[0].message

    @pytest.mark.unit
    def test_out_of_bounds(self):
        doc = Document(
            metadata=Metadata(grid=(2, 2)),
            components=[BoxComponent(range=decode_range("C1"))],
        )
        issues = validate_document(doc)
        assert [i.error_type for i in issues] == ["column_out_of_bounds"]
        assert not is_valid(doc)

    @pytest.mark.unit
    def test_unresolved_color(self):
        doc = Document(
            components=[BoxComponent(range=decode_range("A1"), border="$missing")]
        )
        issues = validate_document(doc)
        assert issues[0].error_type == "unresolved_color"
        assert "$missing" in issues[0].message
