"""Tests for the layout calculator."""

import pytest

from gridwire.cells import decode_range

from .lib import (
    AxisSizes,
    CanvasSize,
    LayoutConfig,
    LayoutRect,
    axis_sizes,
    canvas_size,
    cell_rect,
    grid_sizes,
)

CANVAS = CanvasSize(1280, 720)


def _geometry(rect: LayoutRect) -> tuple[float, float, float, float]:
    return rect.x, rect.y, rect.width, rect.height


class TestCanvasSize:
    """Tests for canvas sizing from a ratio."""

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "ratio,expected",
        [
            ((16, 9), CanvasSize(1280, 720)),
            ((9, 16), CanvasSize(720, 1280)),
            ((1, 1), CanvasSize(1280, 1280)),
            ((4, 3), CanvasSize(1280, 960)),
        ],
    )
    def test_known_ratios(self, ratio, expected):
        """Longest edge is always 1280."""
        assert canvas_size(ratio) == expected

    @pytest.mark.unit
    def test_rounds_to_nearest_pixel(self):
        """Non-integral edges round to the nearest pixel."""
        # 1280 * 2 / 3 = 853.33
        assert canvas_size((3, 2)) == CanvasSize(1280, 853)
        assert canvas_size((2, 3)) == CanvasSize(853, 1280)


class TestAxisSizes:
    """Tests for splitting an axis into cells."""

    @pytest.mark.unit
    def test_uniform(self):
        """Without weights every cell gets the same size."""
        assert axis_sizes(1280, 4) == (320, 320, 320, 320)

    @pytest.mark.unit
    def test_uniform_with_gap(self):
        """Gaps are taken out of the available space."""
        sizes = axis_sizes(1000, 4, gap=20)
        assert sizes == (235, 235, 235, 235)
        assert sum(sizes) + 20 * 3 == 1000

    @pytest.mark.unit
    def test_weighted(self):
        """Weights distribute space proportionally."""
        assert axis_sizes(1200, 3, weights=(1, 2, 1)) == (300, 600, 300)

    @pytest.mark.unit
    def test_weight_count_mismatch(self):
        """Weights must match the cell count."""
        with pytest.raises(ValueError, match="Expected 3 weights"):
            axis_sizes(1200, 3, weights=(1, 2))


class TestCellRect:
    """Tests for cell rectangle geometry."""

    @pytest.mark.unit
    def test_first_cell(self):
        """A1 on a 4x3 grid is the top-left quarter-third."""
        rect = cell_rect(decode_range("A1"), (4, 3), CANVAS)
        assert _geometry(rect) == (0, 0, 320, 240)

    @pytest.mark.unit
    def test_last_cell(self):
        """D3 on a 4x3 grid is the bottom-right cell."""
        rect = cell_rect(decode_range("D3"), (4, 3), CANVAS)
        assert _geometry(rect) == (960, 480, 320, 240)

    @pytest.mark.unit
    def test_merged_range(self):
        """A1..B2 covers two columns and two rows."""
        rect = cell_rect(decode_range("A1..B2"), (4, 3), CANVAS)
        assert _geometry(rect) == (0, 0, 640, 480)

    @pytest.mark.unit
    def test_merged_span_includes_one_interior_gap(self):
        """A two-cell span includes exactly one gap."""
        config = LayoutConfig(gap=20)
        single = cell_rect(decode_range("A1"), (4, 3), CANVAS, config)
        merged = cell_rect(decode_range("A1..B1"), (4, 3), CANVAS, config)
        assert merged.width == single.width * 2 + 20

    @pytest.mark.unit
    def test_position_includes_preceding_gaps(self):
        """Cells after the first are offset by size plus gap."""
        config = LayoutConfig(gap=20)
        rect = cell_rect(decode_range("C1"), (4, 3), CANVAS, config)
        assert rect.x == pytest.approx(2 * 305 + 2 * 20)

    @pytest.mark.unit
    def test_padding_default_and_override(self):
        """Per-cell padding overrides the document default."""
        config = LayoutConfig(padding=16)
        assert cell_rect(decode_range("A1"), (4, 3), CANVAS, config).padding == 16
        rect = cell_rect(decode_range("A1"), (4, 3), CANVAS, config, cell_padding=4)
        assert rect.padding == 4

    @pytest.mark.unit
    def test_zero_padding_override(self):
        """A zero override is honoured, not treated as missing."""
        config = LayoutConfig(padding=16)
        rect = cell_rect(decode_range("A1"), (4, 3), CANVAS, config, cell_padding=0)
        assert rect.padding == 0

    @pytest.mark.unit
    def test_precomputed_weighted_sizes(self):
        """Precomputed weighted sizes drive positions and spans."""
        sizes = grid_sizes(CANVAS, (3, 1), col_weights=(1, 2, 1))
        assert sizes == AxisSizes(cols=(320, 640, 320), rows=(720,))
        rect = cell_rect(decode_range("B1..C1"), (3, 1), CANVAS, sizes=sizes)
        assert _geometry(rect) == (320, 0, 960, 720)

    @pytest.mark.unit
    def test_center(self):
        """Center properties sit in the middle of the rect."""
        rect = cell_rect(decode_range("A1"), (2, 2), CANVAS)
        assert (rect.center_x, rect.center_y) == (320, 180)


class TestLayoutConfig:
    """Tests for LayoutConfig validation."""

    @pytest.mark.unit
    def test_negative_gap(self):
        """Negative gaps are rejected."""
        with pytest.raises(ValueError, match="Gap must be non-negative"):
            LayoutConfig(gap=-1)
