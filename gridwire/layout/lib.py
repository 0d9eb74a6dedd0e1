"""Layout calculator turning grid coordinates into pixel rectangles.

All functions are pure. The canvas has a fixed longest edge; columns and rows
divide it uniformly, or proportionally when weights are declared, with a
constant gap between neighbouring cells and none at the canvas edges.
"""

from collections.abc import Sequence
from dataclasses import dataclass

from gridwire.cells import CellRange

LONGEST_EDGE = 1280


@dataclass(frozen=True)
class CanvasSize:
    """Canvas dimensions in pixels."""

    width: int
    height: int


@dataclass(frozen=True)
class LayoutConfig:
    """Document-wide spacing.

    Attributes:
        gap: Pixels between neighbouring cells.
        padding: Default content inset for every cell.
    """

    gap: float = 0
    padding: float = 0

    def __post_init__(self) -> None:
        """Validate configuration values."""
        if self.gap < 0:
            raise ValueError(f"Gap must be non-negative, got {self.gap}")
        if self.padding < 0:
            raise ValueError(f"Padding must be non-negative, got {self.padding}")


@dataclass(frozen=True)
class AxisSizes:
    """Precomputed per-column and per-row pixel sizes."""

    cols: tuple[float, ...]
    rows: tuple[float, ...]


@dataclass(frozen=True)
class LayoutRect:
    """Pixel rectangle of a component plus its effective padding."""

    x: float
    y: float
    width: float
    height: float
    padding: float = 0

    @property
    def center_x(self) -> float:
        return self.x + self.width / 2

    @property
    def center_y(self) -> float:
        return self.y + self.height / 2


def canvas_size(ratio: tuple[int, int]) -> CanvasSize:
    """Size the canvas so its longest edge is LONGEST_EDGE pixels.

    Landscape and square ratios fix the width; portrait ratios fix the height.

    Example:
        >>> canvas_size((16, 9))
        CanvasSize(width=1280, height=720)
    """
    w, h = ratio
    if w >= h:
        return CanvasSize(width=LONGEST_EDGE, height=_round(LONGEST_EDGE * h / w))
    return CanvasSize(width=_round(LONGEST_EDGE * w / h), height=LONGEST_EDGE)


def axis_sizes(
    total: float,
    count: int,
    gap: float = 0,
    weights: Sequence[float] | None = None,
) -> tuple[float, ...]:
    """Split one canvas axis into cell sizes.

    Args:
        total: Axis length in pixels.
        count: Number of cells on the axis.
        gap: Pixels between neighbouring cells.
        weights: Optional relative weights, one per cell.

    Returns:
        Cell sizes; together with the gaps they add up to `total`.
    """
    available = total - gap * (count - 1)
    if weights is None:
        return (available / count,) * count
    if len(weights) != count:
        raise ValueError(f"Expected {count} weights, got {len(weights)}")
    weight_sum = sum(weights)
    return tuple(available * weight / weight_sum for weight in weights)


def grid_sizes(
    canvas: CanvasSize,
    grid: tuple[int, int],
    gap: float = 0,
    col_weights: Sequence[float] | None = None,
    row_weights: Sequence[float] | None = None,
) -> AxisSizes:
    """Compute column and row sizes once for a whole document."""
    cols, rows = grid
    return AxisSizes(
        cols=axis_sizes(canvas.width, cols, gap, col_weights),
        rows=axis_sizes(canvas.height, rows, gap, row_weights),
    )


def cell_rect(
    cell_range: CellRange,
    grid: tuple[int, int],
    canvas: CanvasSize,
    config: LayoutConfig | None = None,
    cell_padding: float | None = None,
    sizes: AxisSizes | None = None,
) -> LayoutRect:
    """Compute the pixel rectangle covered by a cell range.

    A merged span includes the gaps between its own cells but never the gap
    on its outer edges.

    Args:
        cell_range: Normalized range inside the grid.
        grid: (columns, rows).
        canvas: Canvas size.
        config: Gap and default padding; zero for both when omitted.
        cell_padding: Per-component padding override.
        sizes: Precomputed axis sizes, used in place of uniform sizes.

    Returns:
        LayoutRect with the effective padding attached.

    Example:
        >>> cell_rect(decode_range("A1..B2"), (4, 3), CanvasSize(1280, 720))
        LayoutRect(x=0, y=0, width=640.0, height=480.0, padding=0)
    """
    config = config or LayoutConfig()
    if sizes is None:
        sizes = grid_sizes(canvas, grid, config.gap)

    x, width = _span(sizes.cols, cell_range.start.col, cell_range.end.col, config.gap)
    y, height = _span(sizes.rows, cell_range.start.row, cell_range.end.row, config.gap)
    padding = cell_padding if cell_padding is not None else config.padding
    return LayoutRect(x=x, y=y, width=width, height=height, padding=padding)


def _span(
    sizes: Sequence[float], start: int, end: int, gap: float
) -> tuple[float, float]:
    offset = sum(sizes[:start]) + gap * start
    length = sum(sizes[start : end + 1]) + gap * (end - start)
    return offset, length


def _round(value: float) -> int:
    # Half-up; round() would send 0.5 to even
    return int(value + 0.5)
