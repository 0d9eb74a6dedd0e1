"""Document rule checks shared by the parser and standalone validation."""

from gridwire.validation.lib import (
    ValidationIssue,
    bounds_violation,
    find_overlap,
    is_valid,
    unresolved_color,
    validate_document,
)

__all__ = [
    "ValidationIssue",
    "bounds_violation",
    "find_overlap",
    "is_valid",
    "unresolved_color",
    "validate_document",
]
