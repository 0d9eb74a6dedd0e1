"""Lexical scanner for gridwire source files.

Converts raw source text into a flat list of tokens, each tagged with the
line, column and offset where it starts. Horizontal whitespace and `//`
comments are dropped, and any run of newlines collapses to one NEWLINE token
so blank lines and stacked comments never reach the parser.
"""

import re
from dataclasses import dataclass
from enum import Enum

from gridwire.errors import LexerError, SourceLocation


class TokenType(str, Enum):
    """All token kinds produced by the scanner."""

    IDENTIFIER = "identifier"
    STRING = "string"
    NUMBER = "number"
    COLON = "':'"
    COMMA = "','"
    LBRACE = "'{'"
    RBRACE = "'}'"
    LBRACKET = "'['"
    RBRACKET = "']'"
    CELL_REF = "cell reference"
    CELL_RANGE = "cell range"
    RATIO = "ratio"
    GRID = "grid size"
    HEX_COLOR = "hex color"
    THEME_REF = "theme color reference"
    NEWLINE = "newline"
    EOF = "end of input"


@dataclass(frozen=True)
class Token:
    """A lexical token with its source location.

    Attributes:
        type: The kind of token.
        value: Literal text, or decoded content for STRING tokens.
        location: Where the token starts.
    """

    type: TokenType
    value: str
    location: SourceLocation


_PUNCTUATION = {
    ":": TokenType.COLON,
    ",": TokenType.COMMA,
    "{": TokenType.LBRACE,
    "}": TokenType.RBRACE,
    "[": TokenType.LBRACKET,
    "]": TokenType.RBRACKET,
}

_ESCAPES = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "\\": "\\",
    '"': '"',
    "'": "'",
}

_WORD = re.compile(r"[A-Za-z_][A-Za-z0-9_-]*")
_CELL_REF = re.compile(r"[A-Za-z]+[0-9]+")
_NUMERIC = re.compile(r"[0-9]+(?::[0-9]+|[xX][0-9]+|\.[0-9]+)?")
_ALNUM_RUN = re.compile(r"[A-Za-z0-9]*")
_THEME_NAME = re.compile(r"[A-Za-z0-9_-]+")
_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")


def tokenize(source: str) -> list[Token]:
    """Tokenize gridwire source text.

    Args:
        source: Full text of a document.

    Returns:
        Tokens in source order; the last one is always EOF.

    Raises:
        LexerError: On an unexpected character, an unterminated string, a hex
            color without exactly 3 or 6 digits, or a bare `$`.
    """
    return _Lexer(source).tokenize()


class _Lexer:
    """Single-pass scanner state."""

    def __init__(self, source: str):
        self.source = source
        self.pos = 0
        self.line = 1
        self.column = 1
        self.tokens: list[Token] = []

    # -------------------------------------------------------------------------
    # Cursor helpers
    # -------------------------------------------------------------------------

    def _peek(self, ahead: int = 0) -> str:
        index = self.pos + ahead
        return self.source[index] if index < len(self.source) else ""

    def _location(self) -> SourceLocation:
        return SourceLocation(line=self.line, column=self.column, offset=self.pos)

    def _advance(self, count: int = 1) -> str:
        text = self.source[self.pos : self.pos + count]
        for ch in text:
            if ch == "\n":
                self.line += 1
                self.column = 1
            else:
                self.column += 1
        self.pos += len(text)
        return text

    def _emit(self, kind: TokenType, value: str, location: SourceLocation) -> None:
        self.tokens.append(Token(kind, value, location))

    # -------------------------------------------------------------------------
    # Main loop
    # -------------------------------------------------------------------------

    def tokenize(self) -> list[Token]:
        while self.pos < len(self.source):
            ch = self._peek()

            if ch in " \t\r":
                self._advance()
            elif ch == "/" and self._peek(1) == "/":
                self._skip_comment()
            elif ch == "\n":
                location = self._location()
                self._advance()
                if not self.tokens or self.tokens[-1].type is not TokenType.NEWLINE:
                    self._emit(TokenType.NEWLINE, "\n", location)
            elif ch in _PUNCTUATION:
                self._emit(_PUNCTUATION[ch], ch, self._location())
                self._advance()
            elif ch in "\"'":
                self._read_string(ch)
            elif ch == "`":
                self._read_backtick_string()
            elif ch == "#":
                self._read_hex_color()
            elif ch == "$":
                self._read_theme_ref()
            elif ch.isascii() and (ch.isalpha() or ch == "_"):
                self._read_word()
            elif ch.isascii() and ch.isdigit():
                self._read_numeric()
            else:
                raise LexerError(f"Unexpected character {ch!r}", self._location())

        self._emit(TokenType.EOF, "", self._location())
        return self.tokens

    # -------------------------------------------------------------------------
    # Scanners
    # -------------------------------------------------------------------------

    def _skip_comment(self) -> None:
        end = self.source.find("\n", self.pos)
        self._advance((len(self.source) if end == -1 else end) - self.pos)

    def _read_string(self, quote: str) -> None:
        location = self._location()
        self._advance()
        chars: list[str] = []
        while self.pos < len(self.source) and self._peek() != quote:
            ch = self._advance()
            if ch == "\\" and self.pos < len(self.source):
                escaped = self._advance()
                chars.append(_ESCAPES.get(escaped, escaped))
            else:
                chars.append(ch)
        if self.pos >= len(self.source):
            raise LexerError("Unterminated string", location)
        self._advance()
        self._emit(TokenType.STRING, "".join(chars), location)

    def _read_backtick_string(self) -> None:
        location = self._location()
        end = self.source.find("`", self.pos + 1)
        if end == -1:
            raise LexerError("Unterminated string", location)
        self._advance()
        value = self._advance(end - self.pos)
        self._advance()
        self._emit(TokenType.STRING, value, location)

    def _read_hex_color(self) -> None:
        location = self._location()
        run = _ALNUM_RUN.match(self.source, self.pos + 1).group()
        if len(run) not in (3, 6) or not set(run) <= _HEX_DIGITS:
            raise LexerError(
                f"Invalid hex color '#{run}': expected 3 or 6 hex digits", location
            )
        text = self._advance(len(run) + 1)
        self._emit(TokenType.HEX_COLOR, text, location)

    def _read_theme_ref(self) -> None:
        location = self._location()
        match = _THEME_NAME.match(self.source, self.pos + 1)
        if match is None:
            raise LexerError(
                "Empty theme reference: '$' must be followed by a name", location
            )
        text = self._advance(len(match.group()) + 1)
        self._emit(TokenType.THEME_REF, text, location)

    def _read_word(self) -> None:
        """Scan one word and classify it as identifier, cell ref or range.

        The whole word is captured once; a cell range additionally needs `..`
        and a second cell-shaped word directly after it.
        """
        location = self._location()
        word = _WORD.match(self.source, self.pos).group()

        if not _CELL_REF.fullmatch(word):
            self._emit(TokenType.IDENTIFIER, self._advance(len(word)), location)
            return

        after = self.pos + len(word)
        if self.source.startswith("..", after):
            second = _WORD.match(self.source, after + 2)
            if second and _CELL_REF.fullmatch(second.group()):
                text = self._advance(len(word) + 2 + len(second.group()))
                self._emit(TokenType.CELL_RANGE, text, location)
                return

        self._emit(TokenType.CELL_REF, self._advance(len(word)), location)

    def _read_numeric(self) -> None:
        location = self._location()
        text = self._advance(len(_NUMERIC.match(self.source, self.pos).group()))
        if ":" in text:
            kind = TokenType.RATIO
        elif "x" in text or "X" in text:
            kind = TokenType.GRID
        else:
            kind = TokenType.NUMBER
        self._emit(kind, text, location)
