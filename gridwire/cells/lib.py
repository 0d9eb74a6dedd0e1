"""Cell coordinate codec.

Converts between spreadsheet-style references ("A1", "D10", "B2..C4") and
zero-based column/row coordinates. Columns use bijective base-26 letters
(A=0 ... Z=25, AA=26), rows are 1-based in text and 0-based in memory.
"""

from __future__ import annotations

import re
from collections.abc import Iterator
from typing import Any

from pydantic import BaseModel, Field, model_validator

_CELL_REF_PATTERN = re.compile(r"^([A-Z]+)(\d+)$")
RANGE_SEPARATOR = ".."


class CellRefError(ValueError):
    """Raised when a cell reference or range string is malformed."""


class CellCoord(BaseModel):
    """Zero-based grid coordinate.

    Attributes:
        col: Column index (A=0).
        row: Row index (1=0).
    """

    col: int = Field(..., ge=0, description="Zero-based column index")
    row: int = Field(..., ge=0, description="Zero-based row index")

    model_config = {"frozen": True}

    def __str__(self) -> str:
        return encode(self)


class CellRange(BaseModel):
    """Rectangular span of cells, inclusive on both ends.

    Corners are normalized on construction so that `start` is always the
    top-left and `end` the bottom-right cell, whatever order they were given.

    Example:
        >>> CellRange(start=decode("B2"), end=decode("A1")).start
        CellCoord(col=0, row=0)
    """

    start: CellCoord
    end: CellCoord

    model_config = {"frozen": True}

    @model_validator(mode="before")
    @classmethod
    def _normalize_corners(cls, data: Any) -> Any:
        if not isinstance(data, dict) or "start" not in data or "end" not in data:
            return data
        a = CellCoord.model_validate(data["start"])
        b = CellCoord.model_validate(data["end"])
        return {
            **data,
            "start": CellCoord(col=min(a.col, b.col), row=min(a.row, b.row)),
            "end": CellCoord(col=max(a.col, b.col), row=max(a.row, b.row)),
        }

    @classmethod
    def single(cls, coord: CellCoord) -> CellRange:
        """Range covering exactly one cell."""
        return cls(start=coord, end=coord)

    @property
    def col_span(self) -> int:
        """Number of columns covered."""
        return self.end.col - self.start.col + 1

    @property
    def row_span(self) -> int:
        """Number of rows covered."""
        return self.end.row - self.start.row + 1

    @property
    def is_single(self) -> bool:
        return self.start == self.end

    def contains(self, coord: CellCoord) -> bool:
        """Check whether a cell lies inside this range."""
        return (
            self.start.col <= coord.col <= self.end.col
            and self.start.row <= coord.row <= self.end.row
        )

    def overlaps(self, other: CellRange) -> bool:
        """Check whether two ranges share at least one cell.

        Two ranges are disjoint only when one lies entirely before the other
        on the column axis or on the row axis.
        """
        disjoint = (
            self.end.col < other.start.col
            or other.end.col < self.start.col
            or self.end.row < other.start.row
            or other.end.row < self.start.row
        )
        return not disjoint

    def cells(self) -> Iterator[CellCoord]:
        """Iterate covered cells row by row."""
        for row in range(self.start.row, self.end.row + 1):
            for col in range(self.start.col, self.end.col + 1):
                yield CellCoord(col=col, row=row)

    def __str__(self) -> str:
        return encode_range(self)


def letters_to_column(letters: str) -> int:
    """Convert column letters to a zero-based index ("A" -> 0, "AA" -> 26)."""
    if not letters or not letters.isalpha() or not letters.isascii():
        raise CellRefError(f"Invalid column letters: {letters!r}")
    index = 0
    for ch in letters.upper():
        index = index * 26 + (ord(ch) - ord("A") + 1)
    return index - 1


def column_to_letters(col: int) -> str:
    """Convert a zero-based column index to letters (0 -> "A", 26 -> "AA")."""
    if col < 0:
        raise CellRefError(f"Column index must be non-negative, got {col}")
    letters = ""
    n = col + 1
    while n > 0:
        n, rem = divmod(n - 1, 26)
        letters = chr(ord("A") + rem) + letters
    return letters


def decode(ref: str) -> CellCoord:
    """Decode a single cell reference.

    Args:
        ref: Reference such as "A1" or "c12" (case-insensitive).

    Returns:
        Zero-based coordinate.

    Raises:
        CellRefError: If the reference is malformed or the row is below 1.
    """
    match = _CELL_REF_PATTERN.match(ref.strip().upper())
    if not match:
        raise CellRefError(f"Invalid cell reference: {ref}")
    row = int(match.group(2)) - 1
    if row < 0:
        raise CellRefError(f"Invalid row number in cell reference: {ref}")
    return CellCoord(col=letters_to_column(match.group(1)), row=row)


def decode_range(text: str) -> CellRange:
    """Decode "X" or "X..Y" into a normalized range.

    Raises:
        CellRefError: If either side is malformed or there are extra parts.
    """
    parts = text.split(RANGE_SEPARATOR)
    if len(parts) == 1:
        return CellRange.single(decode(parts[0]))
    if len(parts) == 2:
        return CellRange(start=decode(parts[0]), end=decode(parts[1]))
    raise CellRefError(f"Invalid cell range: {text}")


def encode(coord: CellCoord) -> str:
    """Encode a coordinate as a reference string."""
    return f"{column_to_letters(coord.col)}{coord.row + 1}"


def encode_range(cell_range: CellRange) -> str:
    """Encode a range, collapsing single cells to a plain reference."""
    if cell_range.is_single:
        return encode(cell_range.start)
    return f"{encode(cell_range.start)}{RANGE_SEPARATOR}{encode(cell_range.end)}"


def ranges_overlap(a: CellRange, b: CellRange) -> bool:
    """Symmetric overlap test between two ranges."""
    return a.overlaps(b)
