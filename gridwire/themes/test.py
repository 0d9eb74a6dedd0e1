"""Unit tests for theme presets."""

import pytest

from .lib import THEMES, Theme, ThemeError, get_theme, list_themes


class TestGetTheme:
    """Tests for theme resolution."""

    @pytest.mark.unit
    def test_absent_name_is_default(self):
        """None and empty string both resolve to the default preset."""
        assert get_theme() is THEMES["default"]
        assert get_theme("") is THEMES["default"]

    @pytest.mark.unit
    def test_default_values(self):
        theme = get_theme("default")
        assert theme == Theme(
            stroke_width=2, border_radius=8, font_size=24, default_bg="#e0e0e0"
        )

    @pytest.mark.unit
    @pytest.mark.parametrize("name", ["clean", "bold"])
    def test_named_presets(self, name):
        assert get_theme(name) is THEMES[name]

    @pytest.mark.unit
    def test_unknown_lists_valid_names(self):
        """Unknown names fail and mention every valid preset."""
        with pytest.raises(ThemeError) as exc_info:
            get_theme("neon")
        message = str(exc_info.value)
        assert '"neon"' in message
        for name in ("default", "clean", "bold"):
            assert name in message

    @pytest.mark.unit
    def test_theme_error_is_value_error(self):
        assert issubclass(ThemeError, ValueError)

    @pytest.mark.unit
    def test_table_is_read_only(self):
        with pytest.raises(TypeError):
            THEMES["custom"] = get_theme()  # type: ignore[index]

    @pytest.mark.unit
    def test_list_themes(self):
        assert list_themes() == ["default", "clean", "bold"]
