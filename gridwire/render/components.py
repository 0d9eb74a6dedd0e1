"""Renderers for the five component kinds."""

import logging

from gridwire.ir import (
    Align,
    BoxComponent,
    BtnComponent,
    ComponentType,
    ImgComponent,
    InputComponent,
    TxtComponent,
)
from gridwire.layout import LayoutRect

from . import svg
from .lib import ComponentRenderer, RenderContext, register_renderer
from .text import LINE_HEIGHT, fit_text

logger = logging.getLogger(__name__)

LABEL_SCALE = 0.75
LABEL_GAP = 8
FIELD_MIN_HEIGHT = 40
FIELD_FILL = "white"

PLACEHOLDER_FILL = "#f0f0f0"
PLACEHOLDER_STROKE = "#ccc"
PLACEHOLDER_INK = "#666"


def draw_text(
    value: str,
    rect: LayoutRect,
    context: RenderContext,
    align: Align = Align.LEFT,
    fill: str = svg.INK,
) -> str:
    """Fit text into rect and position it by alignment, vertically centered.

    Returns an empty string for empty text.
    """
    if not value:
        return ""

    fitted = fit_text(
        value, rect.width, rect.height, rect.padding, context.theme.font_size
    )
    size = fitted.font_size

    if align is Align.CENTER:
        x = rect.center_x
    elif align is Align.RIGHT:
        x = rect.x + rect.width - rect.padding
    else:
        x = rect.x + rect.padding

    line_height = size * LINE_HEIGHT
    top = rect.center_y - len(fitted.lines) * line_height / 2
    baselines = [
        top + line_height * (index + 0.5) + size / 3
        for index in range(len(fitted.lines))
    ]
    return svg.text(fitted.lines, x, baselines, font_size=size, align=align, fill=fill)


def _shape(
    rect: LayoutRect, context: RenderContext, fill: str, stroke: str | None
) -> str:
    return svg.rect(
        rect.x,
        rect.y,
        rect.width,
        rect.height,
        fill=fill,
        rx=context.theme.border_radius,
        stroke=stroke,
        stroke_width=context.theme.stroke_width,
    )


@register_renderer
class TxtRenderer(ComponentRenderer):
    """Text with an optional background shape."""

    component_type = ComponentType.TXT

    def render(
        self, component: TxtComponent, rect: LayoutRect, context: RenderContext
    ) -> str:
        background = ""
        if component.bg or component.border:
            background = _shape(rect, context, component.bg or "none", component.border)
        label = draw_text(component.value, rect, context, component.align)
        if background and label:
            return svg.group(background, label)
        return background or label


@register_renderer
class BoxRenderer(ComponentRenderer):
    """Filled rounded rectangle."""

    component_type = ComponentType.BOX

    def render(
        self, component: BoxComponent, rect: LayoutRect, context: RenderContext
    ) -> str:
        return _shape(
            rect, context, component.bg or context.theme.default_bg, component.border
        )


@register_renderer
class BtnRenderer(ComponentRenderer):
    """Rounded rectangle with centered ink-colored text."""

    component_type = ComponentType.BTN

    def render(
        self, component: BtnComponent, rect: LayoutRect, context: RenderContext
    ) -> str:
        return svg.group(
            _shape(
                rect,
                context,
                component.bg or context.theme.default_bg,
                component.border,
            ),
            draw_text(component.value, rect, context, Align.CENTER),
        )


@register_renderer
class InputRenderer(ComponentRenderer):
    """Small label line above a bordered field."""

    component_type = ComponentType.INPUT

    def render(
        self, component: InputComponent, rect: LayoutRect, context: RenderContext
    ) -> str:
        theme = context.theme
        padding = rect.padding
        field_top = rect.y + padding + theme.font_size + LABEL_GAP
        field_height = max(
            rect.height - 2 * padding - theme.font_size - LABEL_GAP, FIELD_MIN_HEIGHT
        )

        label = ""
        if component.label:
            label = svg.text(
                [component.label],
                rect.x + padding,
                [rect.y + padding + theme.font_size / 2],
                font_size=theme.font_size * LABEL_SCALE,
            )
        field = svg.rect(
            rect.x + padding,
            field_top,
            max(rect.width - 2 * padding, 0),
            field_height,
            fill=component.bg or FIELD_FILL,
            rx=theme.border_radius / 2,
            stroke=component.border or svg.INK,
            stroke_width=theme.stroke_width,
        )
        return svg.group(label, field)


@register_renderer
class ImgRenderer(ComponentRenderer):
    """Embedded image, or a labelled placeholder when it cannot be loaded."""

    component_type = ComponentType.IMG

    def render(
        self, component: ImgComponent, rect: LayoutRect, context: RenderContext
    ) -> str:
        if component.src and context.image_loader is not None:
            try:
                href = context.image_loader.load(component.src)
            except Exception as e:
                logger.warning(f"Image '{component.src}' replaced by placeholder: {e}")
            else:
                return svg.image(href, rect.x, rect.y, rect.width, rect.height)
        return self.placeholder(component, rect, context)

    def placeholder(
        self, component: ImgComponent, rect: LayoutRect, context: RenderContext
    ) -> str:
        name = component.alt or component.src or "image"
        return svg.group(
            svg.rect(
                rect.x,
                rect.y,
                rect.width,
                rect.height,
                fill=component.bg or PLACEHOLDER_FILL,
                rx=context.theme.border_radius,
                stroke=component.border or PLACEHOLDER_STROKE,
                stroke_width=context.theme.stroke_width,
            ),
            draw_text(
                f"[IMG: {name}]", rect, context, Align.CENTER, fill=PLACEHOLDER_INK
            ),
        )
