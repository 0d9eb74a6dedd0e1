"""Rendering engine: Document to SVG text.

Each component kind has a renderer registered under its ComponentType. The
engine lays out every component, hands it to its renderer together with the
shared RenderContext, and wraps the fragments in the SVG root in document
order.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path

from gridwire.ir import Component, ComponentType, Document
from gridwire.layout import LayoutConfig, LayoutRect, canvas_size, cell_rect, grid_sizes
from gridwire.themes import Theme, get_theme

from . import svg
from .images import FileImageLoader, ImageLoader

logger = logging.getLogger(__name__)

DEFAULT_PADDING = 16


@dataclass(frozen=True)
class RenderContext:
    """Per-render state shared by all component renderers.

    Attributes:
        theme: Resolved theme constants.
        image_loader: Capability for embedding img sources, or None to always
            draw placeholders.
    """

    theme: Theme
    image_loader: ImageLoader | None = None


class ComponentRenderer(ABC):
    """Abstract base class for per-kind component renderers.

    Subclasses must implement:
        - component_type: The ComponentType handled
        - render: Component plus rectangle to an SVG fragment

    Renderers must not raise for any valid component.

    Example:
        >>> @register_renderer
        ... class BoxRenderer(ComponentRenderer):
        ...     component_type = ComponentType.BOX
        ...     def render(self, component, rect, context):
        ...         return svg.rect(rect.x, rect.y, rect.width, rect.height, fill="red")
    """

    @property
    @abstractmethod
    def component_type(self) -> ComponentType:
        """Component kind this renderer draws."""
        ...

    @abstractmethod
    def render(
        self, component: Component, rect: LayoutRect, context: RenderContext
    ) -> str:
        """Render one component.

        Args:
            component: Component to draw.
            rect: Its pixel rectangle and effective padding.
            context: Theme and image capability.

        Returns:
            str: SVG fragment, possibly empty.
        """
        ...


# Renderer registry - populated by the components module on import
_registry: dict[ComponentType, type[ComponentRenderer]] = {}


def register_renderer(
    renderer_cls: type[ComponentRenderer],
) -> type[ComponentRenderer]:
    """Register a renderer class for its component type.

    Args:
        renderer_cls: The renderer class to register.

    Returns:
        The renderer class (for decorator chaining).
    """
    _registry[ComponentType(renderer_cls().component_type)] = renderer_cls
    return renderer_cls


def get_renderer(component_type: ComponentType | str) -> ComponentRenderer:
    """Get a renderer instance for a component type.

    Raises:
        KeyError: If no renderer is registered for the type.
    """
    kind = ComponentType(component_type)
    if kind not in _registry:
        _import_renderers()
        if kind not in _registry:
            raise KeyError(f"No renderer registered for '{kind.value}'")
    return _registry[kind]()


def list_renderers() -> list[ComponentType]:
    """List component types that have a renderer."""
    _import_renderers()
    return list(_registry.keys())


def _import_renderers() -> None:
    """Import renderer modules to trigger registration."""
    import importlib

    importlib.import_module("gridwire.render.components")


def render(
    document: Document,
    base_path: Path | str | None = None,
    image_loader: ImageLoader | None = None,
) -> str:
    """Render a document to SVG text.

    Never raises for a valid Document: image problems downgrade the affected
    component to its placeholder.

    Args:
        document: Parsed document.
        base_path: Directory for relative img sources. Ignored when
            image_loader is given.
        image_loader: Explicit image capability.

    Returns:
        Complete SVG document text.

    Example:
        >>> svg_text = render(parse('A1: { type: btn, value: "OK" }'))
        >>> svg_text.startswith('<?xml')
        True
    """
    metadata = document.metadata
    canvas = canvas_size(metadata.ratio)
    padding = metadata.padding if metadata.padding is not None else DEFAULT_PADDING
    config = LayoutConfig(gap=metadata.gap, padding=padding)
    sizes = grid_sizes(
        canvas, metadata.grid, metadata.gap, metadata.col_widths, metadata.row_heights
    )

    if image_loader is None and base_path is not None:
        image_loader = FileImageLoader(base_path)
    context = RenderContext(theme=get_theme(metadata.theme), image_loader=image_loader)

    fragments = []
    for component in document.components:
        rect = cell_rect(
            component.range,
            metadata.grid,
            canvas,
            config,
            component.padding,
            sizes,
        )
        fragments.append(get_renderer(component.type).render(component, rect, context))

    logger.debug(
        f"Rendered {len(fragments)} components on {canvas.width}x{canvas.height} canvas"
    )
    return svg.document(canvas.width, canvas.height, fragments)
