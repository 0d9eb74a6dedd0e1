"""Core IR models for grid wireframe documents.

A Document is what the parser produces and what the layout calculator and
renderer consume. Models are frozen: a document is built once and only read
afterwards. Components form a closed variant set discriminated on `type`, so
each kind carries exactly the properties that mean something for it.
"""

from enum import Enum
from typing import Annotated, Any, Literal, Union

from pydantic import (
    BaseModel,
    Field,
    PositiveFloat,
    PositiveInt,
    field_validator,
    model_validator,
)

from gridwire.cells import CellRange
from gridwire.themes import get_theme

MAX_GRID_SIZE = 26
DEFAULT_RATIO: tuple[int, int] = (16, 9)
DEFAULT_GRID: tuple[int, int] = (4, 3)


class ComponentType(str, Enum):
    """The five wireframe element kinds."""

    TXT = "txt"
    BOX = "box"
    BTN = "btn"
    INPUT = "input"
    IMG = "img"


class Align(str, Enum):
    """Horizontal text alignment."""

    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


class Metadata(BaseModel):
    """Document-level settings.

    Attributes:
        ratio: Canvas aspect ratio as (width, height) terms.
        grid: Grid size as (columns, rows), each 1..26.
        gap: Pixels between neighbouring cells.
        padding: Default content padding per cell; None means renderer default.
        colors: Named colors referenced as `$name` from bg/border.
        col_widths: Relative column weights, one per column.
        row_heights: Relative row weights, one per row.
        theme: Theme preset name; None means the default preset.
    """

    ratio: tuple[PositiveInt, PositiveInt] = DEFAULT_RATIO
    grid: tuple[int, int] = DEFAULT_GRID
    gap: float = Field(0, ge=0, description="Pixels between cells")
    padding: float | None = Field(None, ge=0, description="Default cell padding")
    colors: dict[str, str] = Field(default_factory=dict)
    col_widths: tuple[PositiveFloat, ...] | None = None
    row_heights: tuple[PositiveFloat, ...] | None = None
    theme: str | None = None

    model_config = {"frozen": True}

    @field_validator("grid")
    @classmethod
    def _check_grid(cls, value: tuple[int, int]) -> tuple[int, int]:
        cols, rows = value
        if not 1 <= cols <= MAX_GRID_SIZE or not 1 <= rows <= MAX_GRID_SIZE:
            raise ValueError(
                f"Grid dimensions must be between 1 and {MAX_GRID_SIZE}, "
                f"got {cols}x{rows}"
            )
        return value

    @field_validator("theme")
    @classmethod
    def _check_theme(cls, value: str | None) -> str | None:
        get_theme(value)
        return value

    @model_validator(mode="after")
    def _check_weights(self) -> "Metadata":
        cols, rows = self.grid
        if self.col_widths is not None and len(self.col_widths) != cols:
            raise ValueError(
                f"col-widths has {len(self.col_widths)} entries, grid has {cols} columns"
            )
        if self.row_heights is not None and len(self.row_heights) != rows:
            raise ValueError(
                f"row-heights has {len(self.row_heights)} entries, grid has {rows} rows"
            )
        return self

    @property
    def cols(self) -> int:
        return self.grid[0]

    @property
    def rows(self) -> int:
        return self.grid[1]


class _ComponentBase(BaseModel):
    range: CellRange
    padding: float | None = Field(
        None, ge=0, description="Per-component padding override"
    )

    model_config = {"frozen": True}


class TxtComponent(_ComponentBase):
    """Text, optionally on a filled or outlined background."""

    type: Literal[ComponentType.TXT] = ComponentType.TXT
    value: str = ""
    align: Align = Align.LEFT
    bg: str | None = None
    border: str | None = None


class BoxComponent(_ComponentBase):
    """Filled rounded rectangle."""

    type: Literal[ComponentType.BOX] = ComponentType.BOX
    bg: str | None = None
    border: str | None = None


class BtnComponent(_ComponentBase):
    """Rounded rectangle with centered text."""

    type: Literal[ComponentType.BTN] = ComponentType.BTN
    value: str = ""
    bg: str | None = None
    border: str | None = None


class InputComponent(_ComponentBase):
    """Label above a bordered field."""

    type: Literal[ComponentType.INPUT] = ComponentType.INPUT
    label: str = ""
    bg: str | None = None
    border: str | None = None


class ImgComponent(_ComponentBase):
    """Embedded image, or a labelled placeholder."""

    type: Literal[ComponentType.IMG] = ComponentType.IMG
    src: str | None = None
    alt: str | None = None
    bg: str | None = None
    border: str | None = None


Component = Annotated[
    Union[TxtComponent, BoxComponent, BtnComponent, InputComponent, ImgComponent],
    Field(discriminator="type"),
]

_COMPONENT_MODELS: dict[ComponentType, type[_ComponentBase]] = {
    ComponentType.TXT: TxtComponent,
    ComponentType.BOX: BoxComponent,
    ComponentType.BTN: BtnComponent,
    ComponentType.INPUT: InputComponent,
    ComponentType.IMG: ImgComponent,
}

# Source property keys meaningful for each kind (excluding type and range)
COMPONENT_PROPERTIES: dict[ComponentType, frozenset[str]] = {
    kind: frozenset(model.model_fields) - {"type", "range"}
    for kind, model in _COMPONENT_MODELS.items()
}


def build_component(
    kind: ComponentType, cell_range: CellRange, props: dict[str, Any]
) -> Component:
    """Construct the variant model for a component kind.

    Args:
        kind: Component type.
        cell_range: Area the component occupies.
        props: Validated property values; keys must belong to the kind.

    Returns:
        The frozen component model.
    """
    return _COMPONENT_MODELS[kind](range=cell_range, **props)


class Document(BaseModel):
    """A parsed wireframe: settings plus components in declaration order.

    Declaration order has no effect on layout (ranges never overlap) but is
    the draw order of the rendered output.
    """

    metadata: Metadata = Field(default_factory=Metadata)
    components: tuple[Component, ...] = ()

    model_config = {"frozen": True}
