"""Named visual presets for rendering."""

from .lib import DEFAULT_THEME, THEMES, Theme, ThemeError, get_theme, list_themes

__all__ = [
    "DEFAULT_THEME",
    "THEMES",
    "Theme",
    "ThemeError",
    "get_theme",
    "list_themes",
]
