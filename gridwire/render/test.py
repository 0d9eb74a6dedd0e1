"""Tests for the rendering engine and component renderers."""

import re

import pytest

from gridwire.cells import decode_range
from gridwire.ir import (
    BoxComponent,
    ComponentType,
    Document,
    ImgComponent,
    Metadata,
    TxtComponent,
)
from gridwire.layout import LayoutRect
from gridwire.parser import parse
from gridwire.themes import get_theme

from . import svg
from .images import ImageLoadError
from .lib import (
    ComponentRenderer,
    RenderContext,
    get_renderer,
    list_renderers,
    render,
)

CONTEXT = RenderContext(theme=get_theme())


def _doc(*components, **metadata) -> Document:
    return Document(metadata=Metadata(**metadata), components=components)


class _FailingLoader:
    def load(self, src: str) -> str:
        raise ImageLoadError(f"cannot load {src}", src)


class _BrokenLoader:
    def load(self, src: str) -> str:
        raise ValueError("bad image data")


class _StaticLoader:
    def load(self, src: str) -> str:
        return "data:image/png;base64,AAAA"


# =============================================================================
# SVG primitives
# =============================================================================


class TestSvgPrimitives:
    """Tests for markup helpers."""

    @pytest.mark.unit
    def test_fmt(self):
        assert svg.fmt(320.0) == "320"
        assert svg.fmt(213.333333) == "213.33"
        assert svg.fmt(-0.001) == "0"

    @pytest.mark.unit
    def test_rect_skips_stroke_width_without_stroke(self):
        markup = svg.rect(0, 0, 10, 10, fill="red", stroke_width=2)
        assert markup == '<rect x="0" y="0" width="10" height="10" fill="red"/>'

    @pytest.mark.unit
    def test_text_escapes(self):
        markup = svg.text(["<a & b>"], 0, [10], font_size=12)
        assert "&lt;a &amp; b&gt;" in markup

    @pytest.mark.unit
    def test_control_characters_dropped(self):
        """Characters illegal in XML never reach the markup."""
        markup = svg.text(["a\x01b\x1fc"], 0, [10], font_size=12)
        assert ">abc</text>" in markup
        assert svg.escape("tab\there\nnext") == "tab\there\nnext"

    @pytest.mark.unit
    def test_control_characters_dropped_from_attributes(self):
        markup = svg.rect(0, 0, 1, 1, fill="re\x02d")
        assert 'fill="red"' in markup

    @pytest.mark.unit
    def test_multiline_text_uses_tspans(self):
        markup = svg.text(["one", "two"], 5, [10, 20], font_size=12)
        assert markup.count("<tspan") == 2
        assert '<tspan x="5" y="20">two</tspan>' in markup


# =============================================================================
# Renderer registry
# =============================================================================


class TestRegistry:
    """Tests for the renderer registry."""

    @pytest.mark.unit
    def test_every_kind_has_a_renderer(self):
        assert set(list_renderers()) == set(ComponentType)

    @pytest.mark.unit
    def test_get_renderer_by_name(self):
        renderer = get_renderer("box")
        assert isinstance(renderer, ComponentRenderer)
        assert renderer.component_type is ComponentType.BOX

    @pytest.mark.unit
    def test_unknown_kind(self):
        with pytest.raises(ValueError):
            get_renderer("table")


# =============================================================================
# Document rendering
# =============================================================================


class TestRender:
    """Tests for whole-document rendering."""

    @pytest.mark.unit
    def test_empty_document(self):
        out = render(Document())
        assert out.startswith('<?xml version="1.0" encoding="UTF-8"?>\n<svg ')
        assert 'width="1280" height="720" viewBox="0 0 1280 720"' in out
        assert '<rect x="0" y="0" width="1280" height="720" fill="white"/>' in out
        assert out.rstrip().endswith("</svg>")

    @pytest.mark.unit
    def test_portrait_canvas(self):
        out = render(_doc(ratio=(9, 16)))
        assert 'viewBox="0 0 720 1280"' in out

    @pytest.mark.unit
    def test_end_to_end_centered_text(self):
        """Centered txt in A1 of a 2x2 grid sits in the top-left quadrant."""
        doc = parse('ratio: 16:9\ngrid: 2x2\nA1: { type: txt, value: "Hi", align: center }')
        [component] = doc.components
        assert component.type is ComponentType.TXT
        out = render(doc)
        assert (
            '<text x="320" y="188" font-size="24" font-family="sans-serif" '
            'text-anchor="middle" fill="black">Hi</text>'
        ) in out

    @pytest.mark.unit
    def test_components_in_declaration_order(self):
        doc = parse('B1: { type: btn, value: "Second" }\nA1: { type: btn, value: "First" }')
        out = render(doc)
        assert out.index("Second") < out.index("First")

    @pytest.mark.unit
    def test_all_kinds(self, dashboard_source):
        out = render(parse(dashboard_source))
        assert "Dashboard" in out
        assert 'fill="#336699"' in out
        assert "Save" in out
        assert "Email" in out
        # No base path: placeholder
        assert "[IMG: Logo]" in out

    @pytest.mark.unit
    def test_theme_applies(self):
        out = render(_doc(BoxComponent(range=decode_range("A1")), theme="bold"))
        assert 'rx="12"' in out
        assert 'fill="#d0d0d0"' in out

    @pytest.mark.unit
    def test_padding_defaults_to_16(self):
        doc = _doc(TxtComponent(range=decode_range("A1"), value="Hi"), grid=(2, 2))
        assert '<text x="16"' in render(doc)

    @pytest.mark.unit
    def test_declared_padding_and_override(self):
        doc = _doc(
            TxtComponent(range=decode_range("A1"), value="Hi"),
            TxtComponent(range=decode_range("B1"), value="Yo", padding=0),
            grid=(2, 2),
            padding=4,
        )
        out = render(doc)
        assert '<text x="4"' in out
        assert '<text x="640"' in out

    @pytest.mark.unit
    def test_weighted_columns(self):
        doc = _doc(
            BoxComponent(range=decode_range("B1")),
            grid=(2, 1),
            col_widths=(1, 3),
        )
        assert '<rect x="320" y="0" width="960" height="720"' in render(doc)


# =============================================================================
# Component renderers
# =============================================================================


class TestTxtRenderer:
    """Tests for txt rendering."""

    RECT = LayoutRect(x=0, y=0, width=400, height=100, padding=10)

    @pytest.mark.unit
    def test_alignment_positions(self):
        renderer = get_renderer(ComponentType.TXT)
        for align, x, anchor in (
            ("left", "10", "start"),
            ("center", "200", "middle"),
            ("right", "390", "end"),
        ):
            comp = TxtComponent(range=decode_range("A1"), value="x", align=align)
            out = renderer.render(comp, self.RECT, CONTEXT)
            assert f'x="{x}"' in out
            assert f'text-anchor="{anchor}"' in out

    @pytest.mark.unit
    def test_background_drawn_first(self):
        comp = TxtComponent(range=decode_range("A1"), value="x", border="#000")
        out = get_renderer(ComponentType.TXT).render(comp, self.RECT, CONTEXT)
        assert out.index("<rect") < out.index("<text")
        assert 'fill="none" stroke="#000" stroke-width="2"' in out

    @pytest.mark.unit
    def test_plain_text_has_no_shape(self):
        comp = TxtComponent(range=decode_range("A1"), value="x")
        out = get_renderer(ComponentType.TXT).render(comp, self.RECT, CONTEXT)
        assert "<rect" not in out

    @pytest.mark.unit
    def test_multiline_centered_vertically(self):
        comp = TxtComponent(range=decode_range("A1"), value="a\nb")
        out = get_renderer(ComponentType.TXT).render(comp, self.RECT, CONTEXT)
        baselines = [float(y) for y in re.findall(r'<tspan x="[^"]+" y="([^"]+)"', out)]
        assert len(baselines) == 2
        # Midpoint of the two line centers is the rect center
        line_centers = [b - 8 for b in baselines]
        assert sum(line_centers) / 2 == pytest.approx(50, abs=0.01)


class TestBoxAndBtnRenderer:
    """Tests for box and btn rendering."""

    RECT = LayoutRect(x=10, y=20, width=100, height=50, padding=8)

    @pytest.mark.unit
    def test_box_default_fill(self):
        comp = BoxComponent(range=decode_range("A1"))
        out = get_renderer(ComponentType.BOX).render(comp, self.RECT, CONTEXT)
        assert out == (
            '<rect x="10" y="20" width="100" height="50" rx="8" fill="#e0e0e0"/>'
        )

    @pytest.mark.unit
    def test_btn_text_always_ink(self):
        doc = parse('A1: { type: btn, value: "Go", bg: black }')
        out = render(doc)
        assert 'fill="black">Go</text>' in out
        assert 'text-anchor="middle"' in out


class TestInputRenderer:
    """Tests for input rendering."""

    @pytest.mark.unit
    def test_field_minimum_height(self):
        rect = LayoutRect(x=0, y=0, width=200, height=50, padding=16)
        comp = parse('A1: { type: input, label: "Name" }').components[0]
        out = get_renderer(ComponentType.INPUT).render(comp, rect, CONTEXT)
        assert 'font-size="18"' in out
        assert '<rect x="16" y="48" width="168" height="40" rx="4" fill="white"' in out

    @pytest.mark.unit
    def test_field_fills_cell(self):
        rect = LayoutRect(x=0, y=0, width=200, height=200, padding=16)
        comp = parse('A1: { type: input, label: "Name" }').components[0]
        out = get_renderer(ComponentType.INPUT).render(comp, rect, CONTEXT)
        # 200 - 32 - 24 - 8
        assert 'height="136"' in out


class TestImgRenderer:
    """Tests for img rendering and placeholder fallback."""

    RECT = LayoutRect(x=0, y=0, width=300, height=200, padding=16)

    @pytest.mark.unit
    def test_embeds_loaded_image(self):
        comp = ImgComponent(range=decode_range("A1"), src="a.png")
        context = RenderContext(theme=get_theme(), image_loader=_StaticLoader())
        out = get_renderer(ComponentType.IMG).render(comp, self.RECT, context)
        assert out.startswith('<image href="data:image/png;base64,AAAA"')
        assert 'preserveAspectRatio="xMidYMid meet"' in out

    @pytest.mark.unit
    def test_label_precedence(self):
        renderer = get_renderer(ComponentType.IMG)
        cases = [
            (ImgComponent(range=decode_range("A1"), src="a.png", alt="Alt"), "Alt"),
            (ImgComponent(range=decode_range("A1"), src="a.png"), "a.png"),
            (ImgComponent(range=decode_range("A1")), "image"),
        ]
        for comp, label in cases:
            out = renderer.render(comp, self.RECT, CONTEXT)
            assert f"[IMG: {label}]" in out
            assert 'fill="#f0f0f0" stroke="#ccc"' in out

    @pytest.mark.unit
    def test_failure_matches_missing_source(self, caplog):
        """A failed load renders exactly like an img without src."""
        renderer = get_renderer(ComponentType.IMG)
        failing = RenderContext(theme=get_theme(), image_loader=_FailingLoader())
        with_src = ImgComponent(range=decode_range("A1"), src="gone.png", alt="Logo")
        without = ImgComponent(range=decode_range("A1"), alt="Logo")
        with caplog.at_level("WARNING"):
            failed = renderer.render(with_src, self.RECT, failing)
        assert failed == renderer.render(without, self.RECT, CONTEXT)
        assert "gone.png" in caplog.text

    @pytest.mark.integration
    def test_missing_file_falls_back(self, image_dir):
        doc = parse('A1: { type: img, src: "nope.png", alt: "Logo" }')
        fallback = render(doc, base_path=image_dir)
        placeholder = render(parse('A1: { type: img, alt: "Logo" }'))
        assert fallback == placeholder

    @pytest.mark.integration
    def test_base_path_embeds(self, image_dir):
        doc = parse('A1: { type: img, src: "logo.png" }')
        assert "data:image/png;base64," in render(doc, base_path=image_dir)

    @pytest.mark.integration
    def test_explicit_loader_wins(self, image_dir):
        doc = parse('A1: { type: img, src: "logo.png" }')
        out = render(doc, base_path=image_dir, image_loader=_FailingLoader())
        assert "[IMG: logo.png]" in out

    @pytest.mark.integration
    def test_escape_falls_back(self, image_dir):
        doc = parse('A1: { type: img, src: "../outside.png" }')
        out = render(doc, base_path=image_dir)
        assert "[IMG: ../outside.png]" in out

    @pytest.mark.unit
    def test_any_loader_error_falls_back(self):
        """Loader failures of any type render the placeholder."""
        doc = parse('A1: { type: img, src: "a.png", alt: "Logo" }')
        out = render(doc, image_loader=_BrokenLoader())
        assert "[IMG: Logo]" in out

    @pytest.mark.integration
    def test_null_byte_source_falls_back(self, image_dir):
        doc = parse('A1: { type: img, src: "a\x00.png", alt: "Logo" }')
        out = render(doc, base_path=image_dir)
        assert "[IMG: Logo]" in out

    @pytest.mark.unit
    def test_placeholder_colors(self):
        """bg and border override the placeholder frame."""
        doc = parse('A1: { type: img, alt: "Logo", bg: "#eee", border: "#999" }')
        out = render(doc)
        assert 'fill="#eee" stroke="#999"' in out
        assert "[IMG: Logo]" in out
