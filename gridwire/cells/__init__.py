"""Spreadsheet-style cell coordinates and ranges."""

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

__all__ = [
    "CellCoord",
    "CellRange",
    "CellRefError",
    "column_to_letters",
    "letters_to_column",
    "decode",
    "decode_range",
    "encode",
    "encode_range",
    "ranges_overlap",
]
