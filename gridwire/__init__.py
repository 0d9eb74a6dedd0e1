"""gridwire: compile grid wireframe sources to SVG."""

from pathlib import Path

from gridwire.errors import (
    GridwireError,
    LexerError,
    ParseError,
    SemanticError,
    SourceLocation,
)
from gridwire.ir import ComponentType, Document, Metadata
from gridwire.layout import canvas_size, cell_rect
from gridwire.parser import parse
from gridwire.render import FileImageLoader, ImageLoader, render
from gridwire.validation import is_valid, validate_document

__version__ = "0.1.0"


def compile_source(
    source: str,
    base_path: Path | str | None = None,
    image_loader: ImageLoader | None = None,
) -> str:
    """Parse source text and render it to SVG in one step.

    Raises:
        GridwireError: Any lexical, syntax or semantic error in the source.
    """
    return render(parse(source), base_path=base_path, image_loader=image_loader)


__all__ = [
    # Pipeline
    "parse",
    "render",
    "compile_source",
    # Document model
    "Document",
    "Metadata",
    "ComponentType",
    # Geometry
    "canvas_size",
    "cell_rect",
    # Images
    "ImageLoader",
    "FileImageLoader",
    # Validation
    "validate_document",
    "is_valid",
    # Errors
    "GridwireError",
    "LexerError",
    "ParseError",
    "SemanticError",
    "SourceLocation",
]
