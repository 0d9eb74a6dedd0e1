"""Intermediate Representation (IR) models for gridwire documents."""

from gridwire.ir.lib import (
    COMPONENT_PROPERTIES,
    DEFAULT_GRID,
    DEFAULT_RATIO,
    MAX_GRID_SIZE,
    Align,
    BoxComponent,
    BtnComponent,
    Component,
    ComponentType,
    Document,
    ImgComponent,
    InputComponent,
    Metadata,
    TxtComponent,
    build_component,
)

__all__ = [
    # Enums
    "Align",
    "ComponentType",
    # Models
    "Metadata",
    "Document",
    "Component",
    "TxtComponent",
    "BoxComponent",
    "BtnComponent",
    "InputComponent",
    "ImgComponent",
    # Helpers
    "build_component",
    "COMPONENT_PROPERTIES",
    # Constants
    "DEFAULT_GRID",
    "DEFAULT_RATIO",
    "MAX_GRID_SIZE",
]
