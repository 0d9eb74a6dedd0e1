"""Recursive-descent parser for gridwire source text.

Grammar (newlines separate statements; inside braces and brackets they are
insignificant):

    document   := (statement? NEWLINE)* statement? EOF
    statement  := metadata | component
    metadata   := IDENTIFIER ':' value
    component  := (CELL_REF | CELL_RANGE) ':' '{' (prop (',' | NEWLINE))* '}'
    prop       := name ':' (STRING | IDENTIFIER | NUMBER | HEX_COLOR | THEME_REF)

Parsing fails fast: the first lexical, syntax or semantic problem raises a
located error and no partial document is returned.
"""

from __future__ import annotations

import logging
from typing import Any

from gridwire.cells import CellRange, CellRefError, decode_range, encode_range
from gridwire.errors import GridwireError, ParseError, SemanticError, SourceLocation
from gridwire.ir import (
    COMPONENT_PROPERTIES,
    DEFAULT_GRID,
    DEFAULT_RATIO,
    MAX_GRID_SIZE,
    Align,
    Component,
    ComponentType,
    Document,
    Metadata,
    build_component,
)
from gridwire.lexer import Token, TokenType, tokenize
from gridwire.themes import ThemeError, get_theme
from gridwire.validation import bounds_violation, find_overlap, unresolved_color

logger = logging.getLogger(__name__)

_VALUE_TOKENS = frozenset(
    {
        TokenType.STRING,
        TokenType.IDENTIFIER,
        TokenType.CELL_REF,
        TokenType.NUMBER,
        TokenType.HEX_COLOR,
        TokenType.THEME_REF,
    }
)
# Bare words that happen to look like "h1" are still names
_NAME_TOKENS = frozenset({TokenType.IDENTIFIER, TokenType.CELL_REF})
_COLOR_TOKENS = frozenset({TokenType.HEX_COLOR, TokenType.STRING, TokenType.IDENTIFIER})
_PUNCTUATION = frozenset(
    {
        TokenType.COLON,
        TokenType.COMMA,
        TokenType.LBRACE,
        TokenType.RBRACE,
        TokenType.LBRACKET,
        TokenType.RBRACKET,
    }
)
_TEXT_PROPS = frozenset({"value", "label", "src", "alt"})
_COLOR_PROPS = ("bg", "border")
_COMPONENT_TYPES = ", ".join(t.value for t in ComponentType)
_ALIGNS = ", ".join(a.value for a in Align)

_METADATA_KEYS = {
    "ratio": "ratio",
    "grid": "grid",
    "gap": "gap",
    "padding": "padding",
    "colors": "colors",
    "theme": "theme",
    "col-widths": "col_widths",
    "colwidths": "col_widths",
    "row-heights": "row_heights",
    "rowheights": "row_heights",
}


def parse(source: str) -> Document:
    """Parse source text into a validated Document.

    Args:
        source: Full text of a gridwire document.

    Returns:
        Document with metadata (16:9 and 4x3 when undeclared) and components
        in declaration order.

    Raises:
        LexerError: Invalid characters or literals.
        ParseError: Tokens out of grammatical order.
        SemanticError: Rule violations such as overlap or out-of-grid ranges.

    Example:
        >>> doc = parse('grid: 2x2\\nA1: { type: txt, value: "Hi" }')
        >>> doc.components[0].value
        'Hi'
    """
    try:
        return _Parser(tokenize(source)).parse()
    except GridwireError as error:
        error.with_source(source)
        raise


class _Parser:
    """Token cursor plus the document being assembled."""

    def __init__(self, tokens: list[Token]):
        self.tokens = tokens
        self.pos = 0
        self.settings: dict[str, Any] = {
            "ratio": DEFAULT_RATIO,
            "grid": DEFAULT_GRID,
        }
        self.weight_locations: dict[str, SourceLocation] = {}
        self.components: list[Component] = []

    # -------------------------------------------------------------------------
    # Cursor helpers
    # -------------------------------------------------------------------------

    def _peek(self) -> Token:
        return self.tokens[min(self.pos, len(self.tokens) - 1)]

    def _advance(self) -> Token:
        token = self._peek()
        if token.type is not TokenType.EOF:
            self.pos += 1
        return token

    def _skip_newlines(self) -> bool:
        skipped = False
        while self._peek().type is TokenType.NEWLINE:
            self._advance()
            skipped = True
        return skipped

    def _expect(self, kind: TokenType, context: str = "") -> Token:
        token = self._peek()
        if token.type is not kind:
            suffix = f" {context}" if context else ""
            raise ParseError(
                f"Expected {kind.value}{suffix}, got {_describe(token)}",
                token.location,
            )
        return self._advance()

    def _expect_one_of(self, kinds: frozenset[TokenType], what: str) -> Token:
        token = self._peek()
        if token.type not in kinds:
            raise ParseError(f"Expected {what}, got {_describe(token)}", token.location)
        return self._advance()

    # -------------------------------------------------------------------------
    # Document
    # -------------------------------------------------------------------------

    def parse(self) -> Document:
        while True:
            self._skip_newlines()
            token = self._peek()
            if token.type is TokenType.EOF:
                break

            if token.type is TokenType.IDENTIFIER:
                self._parse_metadata()
            elif token.type in (TokenType.CELL_REF, TokenType.CELL_RANGE):
                self._parse_component()
            else:
                raise ParseError(
                    f"Expected metadata key or cell reference, got {_describe(token)}",
                    token.location,
                )

            end = self._peek()
            if end.type not in (TokenType.NEWLINE, TokenType.EOF):
                raise ParseError(
                    f"Expected end of line, got {_describe(end)}", end.location
                )

        self._check_weight_lengths()
        metadata = Metadata(**self.settings)
        logger.debug(
            f"Parsed {len(self.components)} components on "
            f"{metadata.cols}x{metadata.rows} grid"
        )
        return Document(metadata=metadata, components=tuple(self.components))

    # -------------------------------------------------------------------------
    # Metadata
    # -------------------------------------------------------------------------

    def _parse_metadata(self) -> None:
        key_token = self._advance()
        field = _METADATA_KEYS.get(key_token.value.lower())
        if field is None:
            raise SemanticError(
                f"Unknown metadata key '{key_token.value}'", key_token.location
            )
        self._expect(TokenType.COLON, f"after '{key_token.value}'")

        if field == "ratio":
            self.settings["ratio"] = self._parse_ratio()
        elif field == "grid":
            self.settings["grid"] = self._parse_grid()
        elif field in ("gap", "padding"):
            number = self._expect(TokenType.NUMBER, f"for {field}")
            self.settings[field] = float(number.value)
        elif field == "colors":
            self.settings["colors"] = self._parse_colors()
        elif field == "theme":
            self.settings["theme"] = self._parse_theme()
        else:
            self.weight_locations[field] = key_token.location
            self.settings[field] = self._parse_weights()

    def _parse_ratio(self) -> tuple[int, int]:
        token = self._expect(TokenType.RATIO, "(e.g. 16:9)")
        width, height = (int(part) for part in token.value.split(":"))
        if width <= 0 or height <= 0:
            raise SemanticError(
                f"Ratio terms must be positive, got {token.value}", token.location
            )
        return width, height

    def _parse_grid(self) -> tuple[int, int]:
        token = self._expect(TokenType.GRID, "(e.g. 4x3)")
        cols, rows = (int(part) for part in token.value.lower().split("x"))
        if not 1 <= cols <= MAX_GRID_SIZE or not 1 <= rows <= MAX_GRID_SIZE:
            raise SemanticError(
                f"Grid columns and rows must be between 1 and {MAX_GRID_SIZE}, "
                f"got {token.value}",
                token.location,
            )
        # Components declared earlier must still fit the new grid
        for component in self.components:
            violation = bounds_violation(component.range, (cols, rows))
            if violation is not None:
                raise SemanticError(
                    f"Grid {cols}x{rows} does not contain component at "
                    f"{encode_range(component.range)}: {violation[1]}",
                    token.location,
                )
        return cols, rows

    def _parse_colors(self) -> dict[str, str]:
        self._expect(TokenType.LBRACE, "to open colors")
        colors: dict[str, str] = {}
        while True:
            self._skip_newlines()
            if self._peek().type is TokenType.RBRACE:
                break
            name = self._expect_one_of(_NAME_TOKENS, "color name")
            self._expect(TokenType.COLON, f"after '{name.value}'")
            value = self._expect_one_of(_COLOR_TOKENS, "color value")
            colors[name.value] = value.value
            if not self._list_separator(TokenType.RBRACE):
                break
        self._expect(TokenType.RBRACE, "to close colors")
        return colors

    def _parse_theme(self) -> str:
        token = self._expect_one_of(
            frozenset({TokenType.IDENTIFIER, TokenType.STRING}), "theme name"
        )
        try:
            get_theme(token.value)
        except ThemeError as e:
            raise SemanticError(str(e), token.location) from e
        return token.value

    def _parse_weights(self) -> tuple[float, ...]:
        self._expect(TokenType.LBRACKET, "to open weight list")
        weights: list[float] = []
        while True:
            self._skip_newlines()
            if self._peek().type is TokenType.RBRACKET:
                break
            token = self._expect(TokenType.NUMBER, "in weight list")
            weight = float(token.value)
            if weight <= 0:
                raise SemanticError(
                    f"Weights must be positive, got {token.value}", token.location
                )
            weights.append(weight)
            if not self._list_separator(TokenType.RBRACKET):
                break
        closing = self._expect(TokenType.RBRACKET, "to close weight list")
        if not weights:
            raise SemanticError("Weight list must not be empty", closing.location)
        return tuple(weights)

    def _check_weight_lengths(self) -> None:
        cols, rows = self.settings["grid"]
        for field, count, axis in (
            ("col_widths", cols, "columns"),
            ("row_heights", rows, "rows"),
        ):
            weights = self.settings.get(field)
            if weights is not None and len(weights) != count:
                raise SemanticError(
                    f"{field.replace('_', '-')} lists {len(weights)} weights "
                    f"but the grid has {count} {axis}",
                    self.weight_locations[field],
                )

    def _list_separator(self, closing: TokenType) -> bool:
        """Consume a list separator; False when the list must end here."""
        saw_newline = self._skip_newlines()
        token = self._peek()
        if token.type is TokenType.COMMA:
            self._advance()
            return True
        if token.type is closing:
            return False
        if saw_newline:
            return True
        raise ParseError(
            f"Expected ',' or {closing.value}, got {_describe(token)}",
            token.location,
        )

    # -------------------------------------------------------------------------
    # Components
    # -------------------------------------------------------------------------

    def _parse_component(self) -> None:
        cell_token = self._advance()
        try:
            cell_range = decode_range(cell_token.value)
        except CellRefError as e:
            raise SemanticError(str(e), cell_token.location) from e

        self._expect(TokenType.COLON, f"after '{cell_token.value}'")
        self._skip_newlines()
        raw = self._parse_props()
        component = self._build(cell_token, cell_range, raw)
        self.components.append(component)

    def _parse_props(self) -> dict[str, Token]:
        self._expect(TokenType.LBRACE, "to open properties")
        props: dict[str, Token] = {}
        while True:
            self._skip_newlines()
            if self._peek().type is TokenType.RBRACE:
                break
            key = self._expect_one_of(_NAME_TOKENS, "property name")
            self._expect(TokenType.COLON, f"after '{key.value}'")
            value = self._peek()
            if value.type not in _VALUE_TOKENS:
                raise ParseError(
                    f"Unexpected {_describe(value)} for property value",
                    value.location,
                )
            props[key.value] = self._advance()
            if not self._list_separator(TokenType.RBRACE):
                break
        self._expect(TokenType.RBRACE, "to close properties")
        return props

    def _build(
        self, cell_token: Token, cell_range: CellRange, raw: dict[str, Token]
    ) -> Component:
        """Apply the semantic checks in order and build the variant model."""
        location = cell_token.location

        # 1. type
        type_token = raw.pop("type", None)
        if type_token is None:
            raise SemanticError("Component missing 'type' property", location)
        try:
            kind = ComponentType(type_token.value)
        except ValueError:
            raise SemanticError(
                f"Invalid component type '{type_token.value}' "
                f"(expected one of: {_COMPONENT_TYPES})",
                location,
            ) from None

        # 2. align
        align = Align.LEFT
        if "align" in raw:
            try:
                align = Align(raw["align"].value)
            except ValueError:
                raise SemanticError(
                    f"Invalid align value '{raw['align'].value}' "
                    f"(expected one of: {_ALIGNS})",
                    location,
                ) from None

        # 3. overlap
        accepted = [c.range for c in self.components]
        index = find_overlap(cell_range, accepted)
        if index is not None:
            raise SemanticError(
                f"Cell overlap: {encode_range(cell_range)} overlaps "
                f"{encode_range(accepted[index])}",
                location,
            )

        # 4. bounds
        violation = bounds_violation(cell_range, self.settings["grid"])
        if violation is not None:
            raise SemanticError(violation[1], location)

        # 5. theme colors
        colors: dict[str, str] = self.settings.get("colors", {})
        resolved: dict[str, str] = {}
        for key in _COLOR_PROPS:
            if key not in raw:
                continue
            value = raw[key].value
            name = unresolved_color(value, colors)
            if name is not None:
                raise SemanticError(f"Unknown theme color '${name}'", location)
            resolved[key] = colors[value[1:]] if value.startswith("$") else value

        return build_component(
            kind, cell_range, self._collect_props(kind, raw, align, resolved)
        )

    def _collect_props(
        self,
        kind: ComponentType,
        raw: dict[str, Token],
        align: Align,
        resolved: dict[str, str],
    ) -> dict[str, Any]:
        allowed = COMPONENT_PROPERTIES[kind]
        props: dict[str, Any] = {}
        for key, token in raw.items():
            if key not in allowed:
                logger.debug(f"Ignoring '{key}' on {kind.value} component")
                continue
            if key == "padding":
                if token.type is not TokenType.NUMBER:
                    raise SemanticError(
                        f"padding must be a number, got {_describe(token)}",
                        token.location,
                    )
                props["padding"] = float(token.value)
            elif key in _TEXT_PROPS:
                props[key] = token.value
        if "align" in allowed:
            props["align"] = align
        props.update({k: v for k, v in resolved.items() if k in allowed})
        return props


def _describe(token: Token) -> str:
    # Punctuation kinds already read as the literal, e.g. ':'
    if token.type in (TokenType.NEWLINE, TokenType.EOF) or token.type in _PUNCTUATION:
        return token.type.value
    return f"{token.type.value} '{token.value}'"
