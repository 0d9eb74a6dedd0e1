"""Unit tests for IR models."""

import pytest
from pydantic import TypeAdapter, ValidationError

from gridwire.cells import decode_range
from gridwire.ir import (
    COMPONENT_PROPERTIES,
    Align,
    BoxComponent,
    Component,
    ComponentType,
    Document,
    ImgComponent,
    Metadata,
    TxtComponent,
    build_component,
)


class TestComponentType:
    """Tests for ComponentType enum."""

    @pytest.mark.unit
    def test_all_types_exist(self):
        """Exactly the five element kinds are defined."""
        assert {ct.value for ct in ComponentType} == {
            "txt",
            "box",
            "btn",
            "input",
            "img",
        }

    @pytest.mark.unit
    def test_string_values(self):
        assert ComponentType("btn") is ComponentType.BTN
        assert Align("center") is Align.CENTER


class TestMetadata:
    """Tests for Metadata defaults and validation."""

    @pytest.mark.unit
    def test_defaults(self):
        """Undeclared settings fall back to 16:9 and 4x3."""
        meta = Metadata()
        assert meta.ratio == (16, 9)
        assert meta.grid == (4, 3)
        assert (meta.cols, meta.rows) == (4, 3)
        assert meta.gap == 0
        assert meta.padding is None
        assert meta.colors == {}
        assert meta.theme is None

    @pytest.mark.unit
    @pytest.mark.parametrize("grid", [(0, 3), (4, 27), (27, 1)])
    def test_grid_bounds(self, grid):
        with pytest.raises(ValidationError, match="between 1 and 26"):
            Metadata(grid=grid)

    @pytest.mark.unit
    def test_ratio_must_be_positive(self):
        with pytest.raises(ValidationError):
            Metadata(ratio=(0, 9))

    @pytest.mark.unit
    def test_unknown_theme(self):
        with pytest.raises(ValidationError, match="Unknown theme"):
            Metadata(theme="neon")

    @pytest.mark.unit
    def test_weights_must_match_grid(self):
        Metadata(grid=(3, 2), col_widths=(1, 2, 1), row_heights=(1, 1))
        with pytest.raises(ValidationError, match="col-widths has 2 entries"):
            Metadata(grid=(3, 2), col_widths=(1, 2))
        with pytest.raises(ValidationError, match="row-heights has 3 entries"):
            Metadata(grid=(3, 2), row_heights=(1, 1, 1))

    @pytest.mark.unit
    def test_weights_must_be_positive(self):
        with pytest.raises(ValidationError):
            Metadata(grid=(2, 1), col_widths=(1, 0))

    @pytest.mark.unit
    def test_frozen(self):
        meta = Metadata()
        with pytest.raises(ValidationError):
            meta.gap = 4  # type: ignore[misc]


class TestComponents:
    """Tests for the component variants."""

    @pytest.mark.unit
    def test_txt_defaults(self):
        comp = TxtComponent(range=decode_range("A1"))
        assert comp.type is ComponentType.TXT
        assert comp.value == ""
        assert comp.align is Align.LEFT
        assert comp.bg is None
        assert comp.padding is None

    @pytest.mark.unit
    def test_discriminated_union(self):
        """Raw dicts validate into the matching variant."""
        adapter = TypeAdapter(Component)
        comp = adapter.validate_python(
            {
                "type": ComponentType.IMG,
                "range": {"start": {"col": 0, "row": 0}, "end": {"col": 1, "row": 1}},
                "alt": "Logo",
            }
        )
        assert isinstance(comp, ImgComponent)
        assert comp.alt == "Logo"

    @pytest.mark.unit
    def test_negative_padding_rejected(self):
        with pytest.raises(ValidationError):
            BoxComponent(range=decode_range("A1"), padding=-1)

    @pytest.mark.unit
    def test_properties_per_kind(self):
        """Each kind accepts only its own keys."""
        assert COMPONENT_PROPERTIES[ComponentType.TXT] == {
            "value",
            "align",
            "bg",
            "border",
            "padding",
        }
        assert COMPONENT_PROPERTIES[ComponentType.BOX] == {"bg", "border", "padding"}
        assert COMPONENT_PROPERTIES[ComponentType.INPUT] == {
            "label",
            "bg",
            "border",
            "padding",
        }
        assert COMPONENT_PROPERTIES[ComponentType.IMG] == {
            "src",
            "alt",
            "bg",
            "border",
            "padding",
        }

    @pytest.mark.unit
    def test_btn_has_no_align(self):
        """Buttons always center their label."""
        assert COMPONENT_PROPERTIES[ComponentType.BTN] == {
            "value",
            "bg",
            "border",
            "padding",
        }

    @pytest.mark.unit
    def test_build_component(self):
        comp = build_component(
            ComponentType.BOX, decode_range("B2..C3"), {"bg": "#fff"}
        )
        assert isinstance(comp, BoxComponent)
        assert comp.range == decode_range("B2..C3")
        assert comp.bg == "#fff"


class TestDocument:
    """Tests for the Document container."""

    @pytest.mark.unit
    def test_empty_document(self):
        doc = Document()
        assert doc.metadata == Metadata()
        assert doc.components == ()

    @pytest.mark.unit
    def test_components_keep_order(self):
        first = TxtComponent(range=decode_range("A1"), value="one")
        second = BoxComponent(range=decode_range("B1"))
        doc = Document(components=[first, second])
        assert doc.components == (first, second)
