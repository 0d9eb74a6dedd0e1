"""SVG rendering of gridwire documents.

Example:
    >>> from gridwire.parser import parse
    >>> from gridwire.render import render
    >>> svg_text = render(parse(source), base_path="docs/")
"""

from .images import FileImageLoader, ImageLoader, ImageLoadError
from .lib import (
    DEFAULT_PADDING,
    ComponentRenderer,
    RenderContext,
    get_renderer,
    list_renderers,
    register_renderer,
    render,
)
from .text import FittedText, fit_text, wrap_text

__all__ = [
    # Engine
    "render",
    "RenderContext",
    "DEFAULT_PADDING",
    # Renderer registry
    "ComponentRenderer",
    "register_renderer",
    "get_renderer",
    "list_renderers",
    # Images
    "ImageLoader",
    "ImageLoadError",
    "FileImageLoader",
    # Text fitting
    "FittedText",
    "fit_text",
    "wrap_text",
]
