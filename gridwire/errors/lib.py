"""Source locations and the located error hierarchy.

Every failure raised by the lexer and parser carries the exact position of
the offending text. Callers can print `str(error)` for a one-line report or
`error.format()` for a caret excerpt of the source line.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class SourceLocation:
    """Position of a character in source text.

    Attributes:
        line: 1-indexed line number.
        column: 1-indexed column number.
        offset: 0-indexed character offset from the start of the text.
    """

    line: int
    column: int
    offset: int

    def __str__(self) -> str:
        return f"{self.line}:{self.column}"


class GridwireError(Exception):
    """Base class for located compilation errors.

    Attributes:
        message: Human-readable description without location suffix.
        location: Where the problem was detected.
        source: Full source text, attached by `parse` for excerpts.
    """

    kind = "error"

    def __init__(
        self,
        message: str,
        location: SourceLocation,
        source: str | None = None,
    ):
        super().__init__(f"{message} at {location}")
        self.message = message
        self.location = location
        self.source = source

    def with_source(self, source: str) -> GridwireError:
        """Attach the source text and return self for re-raising."""
        self.source = source
        return self

    def format(self, indent: int = 2) -> str:
        """Render the error with the offending line and a caret.

        Args:
            indent: Spaces before the line-number gutter.

        Returns:
            Multi-line report, or the plain message when no source is attached.

        Example:
            >>> print(err.format())
            Unexpected character '@' at 2:5
              2 | A1 @ { type: txt }
                |    ^
        """
        text = str(self)
        if self.source is None:
            return text

        lines = self.source.split("\n")
        index = self.location.line - 1
        error_line = lines[index].rstrip("\r") if 0 <= index < len(lines) else ""

        gutter = str(self.location.line)
        pad = " " * indent
        # Keep tabs so the caret lines up with the rendered line
        lead = "".join(
            ch if ch == "\t" else " "
            for ch in error_line[: max(self.location.column - 1, 0)]
        )
        return (
            f"{text}\n"
            f"{pad}{gutter} | {error_line}\n"
            f"{pad}{' ' * len(gutter)} | {lead}^"
        )


class LexerError(GridwireError):
    """Invalid character sequence in source text."""

    kind = "lexical"


class ParseError(GridwireError):
    """Token stream does not match the grammar."""

    kind = "syntax"


class SemanticError(GridwireError):
    """Well-formed input that violates a document rule."""

    kind = "semantic"
