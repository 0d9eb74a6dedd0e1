"""Located error types for the gridwire compilation pipeline."""

from .lib import (
    GridwireError,
    LexerError,
    ParseError,
    SemanticError,
    SourceLocation,
)

__all__ = [
    "GridwireError",
    "LexerError",
    "ParseError",
    "SemanticError",
    "SourceLocation",
]
