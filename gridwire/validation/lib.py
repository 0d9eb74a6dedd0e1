"""Document validation and static analysis.

The parser enforces these rules incrementally, one component at a time, and
fails on the first violation. `validate_document` applies the same checks to
a whole Document, which matters for documents assembled in code rather than
parsed from text.
"""

from collections.abc import Sequence
from dataclasses import dataclass

from gridwire.cells import CellRange, column_to_letters, encode_range
from gridwire.ir import Document

THEME_PREFIX = "$"


@dataclass
class ValidationIssue:
    """Represents a rule violation in a document.

    Attributes:
        component_index: Position of the offending component.
        message: Human-readable error description.
        error_type: Category of the error.
    """

    component_index: int
    message: str
    error_type: str


def find_overlap(cell_range: CellRange, accepted: Sequence[CellRange]) -> int | None:
    """Return the index of the first accepted range that overlaps, if any.

    This is a linear scan; documents hold dozens of components, not thousands.
    """
    for index, other in enumerate(accepted):
        if other.overlaps(cell_range):
            return index
    return None


def bounds_violation(
    cell_range: CellRange, grid: tuple[int, int]
) -> tuple[str, str] | None:
    """Check a range against the grid.

    Args:
        cell_range: Normalized range to check.
        grid: (columns, rows).

    Returns:
        (error_type, message) for the first violated axis, column first, or
        None when the range fits.
    """
    cols, rows = grid
    if cell_range.end.col >= cols:
        return (
            "column_out_of_bounds",
            f"Column {column_to_letters(cell_range.end.col)} is outside the grid "
            f"(columns A-{column_to_letters(cols - 1)})",
        )
    if cell_range.end.row >= rows:
        return (
            "row_out_of_bounds",
            f"Row {cell_range.end.row + 1} is outside the grid (rows 1-{rows})",
        )
    return None


def unresolved_color(value: str | None, colors: dict[str, str]) -> str | None:
    """Return the theme color name if `value` is an unresolved `$name`."""
    if value is None or not value.startswith(THEME_PREFIX):
        return None
    name = value[len(THEME_PREFIX) :]
    return None if name in colors else name


def validate_document(document: Document) -> list[ValidationIssue]:
    """Validate a Document for overlap, bounds and color issues.

    Performs the following checks per component, in declaration order:
        - Overlap with any earlier component
        - Range inside the grid (column and row reported separately)
        - bg/border theme references that were never resolved

    Args:
        document: Document to check.

    Returns:
        list[ValidationIssue]: Issues found (empty if valid).

    Example:
        >>> issues = validate_document(doc)
        >>> for issue in issues:
        ...     print(f"#{issue.component_index}: {issue.message}")
    """
    issues: list[ValidationIssue] = []
    accepted: list[CellRange] = []
    metadata = document.metadata

    for index, component in enumerate(document.components):
        other = find_overlap(component.range, accepted)
        if other is not None:
            issues.append(
                ValidationIssue(
                    component_index=index,
                    message=(
                        f"Cell overlap: {encode_range(component.range)} overlaps "
                        f"{encode_range(accepted[other])}"
                    ),
                    error_type="overlap",
                )
            )

        violation = bounds_violation(component.range, metadata.grid)
        if violation is not None:
            error_type, message = violation
            issues.append(ValidationIssue(index, message, error_type))

        for key in ("bg", "border"):
            name = unresolved_color(getattr(component, key, None), metadata.colors)
            if name is not None:
                issues.append(
                    ValidationIssue(
                        component_index=index,
                        message=f"Unknown theme color '${name}' in {key}",
                        error_type="unresolved_color",
                    )
                )

        accepted.append(component.range)

    return issues


def is_valid(document: Document) -> bool:
    """Check if a document passes every rule.

    Args:
        document: Document to check.

    Returns:
        bool: True if no issues exist.
    """
    return not validate_document(document)
