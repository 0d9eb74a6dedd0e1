"""Grid geometry: canvas sizing and cell rectangles."""

from .lib import (
    LONGEST_EDGE,
    AxisSizes,
    CanvasSize,
    LayoutConfig,
    LayoutRect,
    axis_sizes,
    canvas_size,
    cell_rect,
    grid_sizes,
)

__all__ = [
    "LONGEST_EDGE",
    "AxisSizes",
    "CanvasSize",
    "LayoutConfig",
    "LayoutRect",
    "axis_sizes",
    "canvas_size",
    "cell_rect",
    "grid_sizes",
]
