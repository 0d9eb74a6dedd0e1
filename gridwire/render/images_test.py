"""Tests for file system image loading."""

import base64
from pathlib import Path

import pytest

from .images import FileImageLoader, ImageLoadError


class TestResolve:
    """Tests for source path resolution."""

    @pytest.mark.unit
    def test_absolute_path_as_is(self):
        loader = FileImageLoader("/some/base")
        assert loader.resolve("/absolute/image.png") == Path("/absolute/image.png")

    @pytest.mark.unit
    def test_absolute_path_without_base(self):
        loader = FileImageLoader()
        assert loader.resolve("/absolute/image.png") == Path("/absolute/image.png")

    @pytest.mark.unit
    def test_relative_needs_base(self):
        with pytest.raises(ImageLoadError, match="without base path"):
            FileImageLoader().resolve("./image.png")

    @pytest.mark.unit
    def test_relative_against_base(self, tmp_path):
        loader = FileImageLoader(tmp_path)
        base = tmp_path.resolve()
        assert loader.resolve("./image.png") == base / "image.png"
        assert loader.resolve("sub/image.png") == base / "sub" / "image.png"

    @pytest.mark.unit
    def test_inner_parent_reference_allowed(self, tmp_path):
        """'..' that stays inside the base is fine."""
        loader = FileImageLoader(tmp_path)
        resolved = loader.resolve("foo/../bar/image.png")
        assert resolved == tmp_path.resolve() / "bar" / "image.png"

    @pytest.mark.unit
    @pytest.mark.parametrize("src", ["../../etc/passwd", "./foo/../../secret.png"])
    def test_escape_rejected(self, tmp_path, src):
        with pytest.raises(ImageLoadError, match="escapes base directory"):
            FileImageLoader(tmp_path / "base").resolve(src)

    @pytest.mark.unit
    def test_null_byte_path_rejected(self, tmp_path):
        """OS-level path errors surface as ImageLoadError."""
        with pytest.raises(ImageLoadError) as exc:
            FileImageLoader(tmp_path).load("a\x00.png")
        assert exc.value.src == "a\x00.png"


class TestLoad:
    """Tests for reading images into data URIs."""

    @pytest.mark.integration
    def test_png_data_uri(self, image_dir, png_bytes):
        uri = FileImageLoader(image_dir).load("logo.png")
        assert uri == "data:image/png;base64," + base64.b64encode(png_bytes).decode()

    @pytest.mark.integration
    def test_mime_from_extension(self, tmp_path):
        (tmp_path / "icon.SVG").write_text("<svg/>")
        uri = FileImageLoader(tmp_path).load("icon.SVG")
        assert uri.startswith("data:image/svg+xml;base64,")

    @pytest.mark.integration
    def test_absolute_source(self, image_dir):
        uri = FileImageLoader().load(str(image_dir / "logo.png"))
        assert uri.startswith("data:image/png;base64,")

    @pytest.mark.integration
    def test_unsupported_format(self, tmp_path):
        (tmp_path / "notes.txt").write_text("hi")
        with pytest.raises(ImageLoadError, match="Unsupported image format: .txt"):
            FileImageLoader(tmp_path).load("notes.txt")

    @pytest.mark.integration
    def test_missing_file(self, tmp_path):
        with pytest.raises(ImageLoadError, match="not found") as exc:
            FileImageLoader(tmp_path).load("missing.png")
        assert exc.value.src == "missing.png"
