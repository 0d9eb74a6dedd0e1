"""Tests for configuration management."""

from pathlib import Path

import pytest

from .lib import EnvConfig, EnvVar, get_environment, get_image_base_dir

# =============================================================================
# Tests for get_environment (main interface)
# =============================================================================


class TestGetEnvironment:
    """Tests for the unified get_environment interface."""

    @pytest.mark.unit
    def test_returns_default_when_not_set(self, monkeypatch):
        """Returns default value when env var is not set."""
        monkeypatch.delenv("GRIDWIRE_LOG_LEVEL", raising=False)
        assert get_environment(EnvVar.LOG_LEVEL) == "INFO"

    @pytest.mark.unit
    def test_override_takes_priority(self, monkeypatch):
        """Override parameter takes highest priority."""
        monkeypatch.setenv("GRIDWIRE_OUTPUT_SUFFIX", ".txt")
        assert get_environment(EnvVar.OUTPUT_SUFFIX, override=".xml") == ".xml"

    @pytest.mark.unit
    def test_env_var_overrides_default(self, monkeypatch):
        """Environment variable overrides default value."""
        monkeypatch.setenv("GRIDWIRE_LOG_LEVEL", "DEBUG")
        assert get_environment(EnvVar.LOG_LEVEL) == "DEBUG"

    @pytest.mark.unit
    def test_int_type_conversion(self, monkeypatch):
        """Integer type conversion from string."""
        monkeypatch.setenv("GRIDWIRE_EXCERPT_INDENT", "4")
        result = get_environment(EnvVar.EXCERPT_INDENT)
        assert result == 4
        assert isinstance(result, int)

    @pytest.mark.unit
    def test_invalid_int_returns_default(self, monkeypatch):
        """Invalid integer value returns default."""
        monkeypatch.setenv("GRIDWIRE_EXCERPT_INDENT", "wide")
        assert get_environment(EnvVar.EXCERPT_INDENT) == 2

    @pytest.mark.unit
    def test_bool_type_conversion(self, monkeypatch):
        """Boolean values are recognised case-insensitively."""
        for value in ("true", "1", "yes", "TRUE"):
            monkeypatch.setenv("GRIDWIRE_EMBED_IMAGES", value)
            assert get_environment(EnvVar.EMBED_IMAGES) is True
        for value in ("false", "0", "No"):
            monkeypatch.setenv("GRIDWIRE_EMBED_IMAGES", value)
            assert get_environment(EnvVar.EMBED_IMAGES) is False

    @pytest.mark.unit
    def test_unrecognised_bool_returns_default(self, monkeypatch):
        """Garbage boolean values fall back to the default."""
        monkeypatch.setenv("GRIDWIRE_EMBED_IMAGES", "maybe")
        assert get_environment(EnvVar.EMBED_IMAGES) is True

    @pytest.mark.unit
    def test_path_type_conversion(self, monkeypatch, tmp_path):
        """Path variables are converted to Path objects."""
        monkeypatch.setenv("GRIDWIRE_IMAGE_BASE_DIR", str(tmp_path))
        result = get_environment(EnvVar.IMAGE_BASE_DIR)
        assert isinstance(result, Path)
        assert result == tmp_path


class TestEnvVar:
    """Tests for the declared variables."""

    @pytest.mark.unit
    def test_names_are_prefixed(self):
        """Every variable lives in the GRIDWIRE_ namespace."""
        for var in EnvVar:
            assert isinstance(var.value, EnvConfig)
            assert var.value.name.startswith("GRIDWIRE_")

    @pytest.mark.unit
    def test_defaults_match_types(self):
        """Defaults are instances of the declared type, or None."""
        for var in EnvVar:
            config = var.value
            assert config.default is None or isinstance(config.default, config.var_type)


class TestGetImageBaseDir:
    """Tests for image base directory resolution."""

    @pytest.mark.unit
    def test_override_wins(self, monkeypatch, tmp_path):
        """Explicit override beats environment and source path."""
        monkeypatch.setenv("GRIDWIRE_IMAGE_BASE_DIR", "/elsewhere")
        assert get_image_base_dir("doc.gw", override=tmp_path) == tmp_path

    @pytest.mark.unit
    def test_environment_beats_source(self, monkeypatch):
        """Environment variable beats the source file directory."""
        monkeypatch.setenv("GRIDWIRE_IMAGE_BASE_DIR", "/assets")
        assert get_image_base_dir("doc.gw") == Path("/assets")

    @pytest.mark.unit
    def test_source_directory_fallback(self, monkeypatch, tmp_path):
        """Falls back to the directory holding the source file."""
        monkeypatch.delenv("GRIDWIRE_IMAGE_BASE_DIR", raising=False)
        source = tmp_path / "doc.gw"
        assert get_image_base_dir(source) == tmp_path.resolve()

    @pytest.mark.unit
    def test_nothing_known(self, monkeypatch):
        """Returns None without any hint."""
        monkeypatch.delenv("GRIDWIRE_IMAGE_BASE_DIR", raising=False)
        assert get_image_base_dir() is None
