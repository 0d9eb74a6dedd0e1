"""Theme presets.

A theme bundles the stroke width, corner radius, starting font size and
default fill used by every component renderer. The set is closed.
"""

from dataclasses import dataclass
from types import MappingProxyType


@dataclass(frozen=True)
class Theme:
    """Visual constants shared by all renderers.

    Attributes:
        stroke_width: Outline width in pixels.
        border_radius: Rounded corner radius in pixels.
        font_size: Starting font size before text fitting.
        default_bg: Fill used by box and button when no bg is given.
    """

    stroke_width: float
    border_radius: float
    font_size: float
    default_bg: str


class ThemeError(ValueError):
    """Raised for an unknown theme name."""


DEFAULT_THEME = "default"

THEMES: MappingProxyType[str, Theme] = MappingProxyType(
    {
        "default": Theme(
            stroke_width=2, border_radius=8, font_size=24, default_bg="#e0e0e0"
        ),
        "clean": Theme(
            stroke_width=1, border_radius=4, font_size=20, default_bg="#f0f0f0"
        ),
        "bold": Theme(
            stroke_width=3, border_radius=12, font_size=28, default_bg="#d0d0d0"
        ),
    }
)


def get_theme(name: str | None = None) -> Theme:
    """Resolve a theme name.

    Args:
        name: Theme name, or None/empty for the default preset.

    Returns:
        The matching Theme.

    Raises:
        ThemeError: If the name is not a known preset.
    """
    if not name:
        return THEMES[DEFAULT_THEME]
    theme = THEMES.get(name)
    if theme is None:
        raise ThemeError(
            f'Unknown theme "{name}". Available themes: {", ".join(THEMES)}'
        )
    return theme


def list_themes() -> list[str]:
    """List known theme names."""
    return list(THEMES)
