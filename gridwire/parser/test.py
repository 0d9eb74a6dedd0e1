"""Tests for the gridwire parser."""

import pytest

from gridwire.cells import decode_range
from gridwire.errors import LexerError, ParseError, SemanticError
from gridwire.ir import (
    Align,
    BoxComponent,
    ComponentType,
    ImgComponent,
    InputComponent,
    TxtComponent,
)

from .lib import parse


class TestMetadata:
    """Tests for document-level settings."""

    @pytest.mark.unit
    def test_defaults_when_undeclared(self):
        """Empty source yields 16:9 ratio and a 4x3 grid."""
        doc = parse("")
        assert doc.metadata.ratio == (16, 9)
        assert doc.metadata.grid == (4, 3)
        assert doc.components == ()

    @pytest.mark.unit
    def test_comments_and_blank_lines_only(self):
        """Comment-only documents parse to defaults."""
        doc = parse("// heading\n\n   // another\n")
        assert doc.components == ()

    @pytest.mark.unit
    def test_all_keys(self):
        """Every metadata key is accepted."""
        source = (
            "ratio: 4:3\n"
            "grid: 3x2\n"
            "gap: 8\n"
            "padding: 12.5\n"
            "theme: clean\n"
            "colors: { primary: #336699, muted: \"#eee\" }\n"
            "col-widths: [1, 2, 1]\n"
            "row-heights: [1, 3]\n"
        )
        meta = parse(source).metadata
        assert meta.ratio == (4, 3)
        assert meta.grid == (3, 2)
        assert meta.gap == 8
        assert meta.padding == 12.5
        assert meta.theme == "clean"
        assert meta.colors == {"primary": "#336699", "muted": "#eee"}
        assert meta.col_widths == (1, 2, 1)
        assert meta.row_heights == (1, 3)

    @pytest.mark.unit
    def test_keys_case_insensitive_and_aliases(self):
        """Keys match regardless of case; camelCase weight aliases work."""
        meta = parse("GRID: 2x2\ncolWidths: [1, 3]\nrowHeights: [2, 1]").metadata
        assert meta.grid == (2, 2)
        assert meta.col_widths == (1, 3)
        assert meta.row_heights == (2, 1)

    @pytest.mark.unit
    def test_last_declaration_wins(self):
        """Duplicate metadata keys keep the later value."""
        assert parse("gap: 4\ngap: 10").metadata.gap == 10

    @pytest.mark.unit
    def test_multiline_colors_without_commas(self):
        """Newlines separate color entries."""
        doc = parse("colors: {\n  primary: #000\n  h1: #fff,\n}")
        assert doc.metadata.colors == {"primary": "#000", "h1": "#fff"}

    @pytest.mark.unit
    def test_unknown_key(self):
        """Unknown metadata keys are semantic errors naming the key."""
        with pytest.raises(SemanticError, match="Unknown metadata key 'size'"):
            parse("size: 10")

    @pytest.mark.unit
    def test_unknown_theme(self):
        """Unknown theme names are located semantic errors."""
        with pytest.raises(SemanticError, match='Unknown theme "neon"') as exc:
            parse("theme: neon")
        assert exc.value.location.column == 8

    @pytest.mark.unit
    def test_grid_out_of_range(self):
        """Grid terms above 26 are rejected."""
        with pytest.raises(SemanticError, match="between 1 and 26"):
            parse("grid: 27x3")

    @pytest.mark.unit
    def test_grid_zero(self):
        """Grid terms of zero are rejected."""
        with pytest.raises(SemanticError):
            parse("grid: 0x3")

    @pytest.mark.unit
    def test_weight_length_mismatch(self):
        """Weight lists must match the final grid size."""
        with pytest.raises(SemanticError, match="3 weights but the grid has 4") as exc:
            parse("col-widths: [1, 2, 1]\n")
        assert exc.value.location.line == 1

    @pytest.mark.unit
    def test_weight_checked_against_later_grid(self):
        """A grid declared after the weights is honoured."""
        meta = parse("col-widths: [1, 2]\ngrid: 2x1").metadata
        assert meta.col_widths == (1, 2)

    @pytest.mark.unit
    def test_zero_weight(self):
        """Weights must be positive."""
        with pytest.raises(SemanticError, match="positive"):
            parse("grid: 2x1\ncol-widths: [0, 1]")

    @pytest.mark.unit
    def test_ratio_requires_ratio_token(self):
        """A plain number is not a ratio."""
        with pytest.raises(ParseError, match="Expected ratio"):
            parse("ratio: 16")

    @pytest.mark.unit
    def test_missing_colon(self):
        """Missing ':' is a syntax error."""
        with pytest.raises(ParseError, match="Expected ':'"):
            parse("grid 4x3")


class TestComponents:
    """Tests for component declarations."""

    @pytest.mark.unit
    def test_txt_with_align(self):
        """Txt components keep value and alignment."""
        doc = parse('grid: 2x2\nA1: { type: txt, value: "Hi", align: center }')
        [component] = doc.components
        assert isinstance(component, TxtComponent)
        assert component.value == "Hi"
        assert component.align is Align.CENTER
        assert component.range == decode_range("A1")

    @pytest.mark.unit
    def test_range_declaration(self):
        """Cell ranges are normalized."""
        doc = parse("B2..A1: { type: box }")
        assert doc.components[0].range == decode_range("A1..B2")

    @pytest.mark.unit
    def test_lowercase_refs(self):
        """Cell references are case-insensitive."""
        doc = parse("a1..b2: { type: box }")
        assert doc.components[0].range == decode_range("A1..B2")

    @pytest.mark.unit
    def test_declaration_order_preserved(self):
        """Components come back in source order."""
        doc = parse("C1: { type: box }\nA1: { type: btn }\nB3: { type: img }")
        kinds = [c.type for c in doc.components]
        assert kinds == [ComponentType.BOX, ComponentType.BTN, ComponentType.IMG]

    @pytest.mark.unit
    def test_multiline_props_trailing_comma(self):
        """Properties may span lines; commas are optional and may trail."""
        source = 'A1: {\n  type: input\n  label: "Email",\n  padding: 4,\n}'
        [component] = parse(source).components
        assert isinstance(component, InputComponent)
        assert component.label == "Email"
        assert component.padding == 4

    @pytest.mark.unit
    def test_theme_color_resolved(self):
        """`$name` colors resolve against the colors block."""
        doc = parse("colors: { brand: #f00 }\nA1: { type: box, bg: $brand }")
        [component] = doc.components
        assert isinstance(component, BoxComponent)
        assert component.bg == "#f00"

    @pytest.mark.unit
    def test_literal_colors_kept(self):
        """Hex and named colors pass through unchanged."""
        [component] = parse("A1: { type: box, bg: #abc, border: red }").components
        assert component.bg == "#abc"
        assert component.border == "red"

    @pytest.mark.unit
    def test_irrelevant_props_dropped(self):
        """Properties a kind does not use are ignored."""
        [component] = parse('A1: { type: box, value: "x", foo: 1 }').components
        assert isinstance(component, BoxComponent)
        assert not hasattr(component, "value")

    @pytest.mark.unit
    def test_img_props(self):
        """Img components keep src and alt."""
        [component] = parse('A1: { type: img, src: "a.png", alt: Logo }').components
        assert isinstance(component, ImgComponent)
        assert component.src == "a.png"
        assert component.alt == "Logo"

    @pytest.mark.unit
    def test_img_placeholder_colors(self):
        """Img components keep bg and border, including theme colors."""
        [component] = parse(
            "colors: { frame: #999 }\nA1: { type: img, bg: #eee, border: $frame }"
        ).components
        assert component.bg == "#eee"
        assert component.border == "#999"

    @pytest.mark.unit
    def test_missing_type(self):
        """A component without type fails at its declaration."""
        with pytest.raises(SemanticError, match="missing 'type'") as exc:
            parse('grid: 4x3\n  B2: { value: "x" }')
        assert (exc.value.location.line, exc.value.location.column) == (2, 3)

    @pytest.mark.unit
    def test_invalid_type(self):
        """Unknown component types are rejected."""
        with pytest.raises(SemanticError, match="Invalid component type 'table'"):
            parse("A1: { type: table }")

    @pytest.mark.unit
    def test_invalid_align(self):
        """Unknown align values are rejected."""
        with pytest.raises(SemanticError, match="Invalid align value 'middle'"):
            parse("A1: { type: txt, align: middle }")

    @pytest.mark.unit
    def test_overlap_located_at_second_declaration(self):
        """Overlap is reported at the later component."""
        with pytest.raises(SemanticError, match="overlap") as exc:
            parse("A1..B2: { type: box }\nB2: { type: txt }")
        assert exc.value.location.line == 2
        assert exc.value.location.column == 1

    @pytest.mark.unit
    def test_column_out_of_bounds(self):
        """Column E on a 4x3 grid fails with a column message."""
        with pytest.raises(SemanticError, match="Column E"):
            parse("grid: 4x3\nE1: { type: box }")

    @pytest.mark.unit
    def test_row_out_of_bounds(self):
        """Row 4 on a 4x3 grid fails with a row message."""
        with pytest.raises(SemanticError, match="Row 4"):
            parse("grid: 4x3\nA4: { type: box }")

    @pytest.mark.unit
    def test_grid_shrunk_after_components(self):
        """Redeclaring a smaller grid that no longer fits is rejected."""
        with pytest.raises(SemanticError, match="does not contain"):
            parse("D3: { type: box }\ngrid: 2x2")

    @pytest.mark.unit
    def test_unresolved_theme_color(self):
        """Unknown `$name` references fail."""
        with pytest.raises(SemanticError, match=r"Unknown theme color '\$brand'"):
            parse("A1: { type: box, bg: $brand }")

    @pytest.mark.unit
    def test_padding_must_be_number(self):
        """Non-numeric component padding is rejected."""
        with pytest.raises(SemanticError, match="padding must be a number"):
            parse('A1: { type: box, padding: "wide" }')

    @pytest.mark.unit
    def test_missing_brace(self):
        """Missing '{' is a syntax error."""
        with pytest.raises(ParseError, match=r"Expected '\{'"):
            parse("A1: type: box")

    @pytest.mark.unit
    def test_statements_need_separate_lines(self):
        """Two statements on one line are a syntax error."""
        with pytest.raises(ParseError, match="end of line"):
            parse("A1: { type: box } B1: { type: box }")

    @pytest.mark.unit
    def test_unexpected_top_level_token(self):
        """Statements start with a key or a cell reference."""
        with pytest.raises(ParseError, match="metadata key or cell reference"):
            parse('"hello"')


class TestErrorSource:
    """Tests for source attachment on raised errors."""

    @pytest.mark.unit
    def test_source_attached(self):
        """Raised errors carry the source for excerpts."""
        source = "A1: { type: box }\nA1 @"
        with pytest.raises(LexerError) as exc:
            parse(source)
        assert exc.value.source == source
        assert "2 | A1 @" in exc.value.format()
