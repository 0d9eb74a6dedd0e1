"""Tests for the command line entry point."""

import subprocess
import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).parent.parent.parent


def _run(*args: str, cwd: Path = PROJECT_ROOT) -> subprocess.CompletedProcess:
    return subprocess.run(
        [sys.executable, str(PROJECT_ROOT), *args],
        capture_output=True,
        text=True,
        cwd=cwd,
        timeout=60,
    )


@pytest.mark.integration
class TestCompileCommand:
    """Tests for `python . compile`."""

    def test_writes_svg_beside_source(self, sample_file):
        """Default output path swaps the suffix for .svg."""
        result = _run("compile", str(sample_file))
        assert result.returncode == 0, result.stderr
        output = sample_file.with_suffix(".svg")
        assert output.read_text(encoding="utf-8").startswith("<?xml")

    def test_stdout(self, sample_file):
        """'-o -' writes the SVG to stdout."""
        result = _run("compile", str(sample_file), "-o", "-")
        assert result.returncode == 0
        assert "Sign in" in result.stdout
        assert result.stdout.rstrip().endswith("</svg>")

    def test_explicit_output(self, sample_file, tmp_path):
        out = tmp_path / "nested.svg"
        result = _run("compile", str(sample_file), "-o", str(out))
        assert result.returncode == 0
        assert out.exists()

    def test_embeds_images_from_source_dir(self, tmp_path):
        """Relative img sources resolve against the source directory."""
        (tmp_path / "pic.svg").write_text("<svg xmlns='http://www.w3.org/2000/svg'/>")
        source = tmp_path / "page.gw"
        source.write_text('A1: { type: img, src: "pic.svg" }\n', encoding="utf-8")
        result = _run("compile", str(source), "-o", "-")
        assert "data:image/svg+xml;base64," in result.stdout

    def test_no_images_flag(self, tmp_path):
        (tmp_path / "pic.svg").write_text("<svg/>")
        source = tmp_path / "page.gw"
        source.write_text('A1: { type: img, src: "pic.svg" }\n', encoding="utf-8")
        result = _run("compile", str(source), "-o", "-", "--no-images")
        assert "[IMG: pic.svg]" in result.stdout

    def test_error_excerpt(self, tmp_path):
        """Errors print the offending line with a caret and exit 1."""
        source = tmp_path / "bad.gw"
        source.write_text("grid: 4x3\nE1: { type: box }\n", encoding="utf-8")
        result = _run("compile", str(source))
        assert result.returncode == 1
        assert "semantic error: Column E" in result.stderr
        assert "2 | E1: { type: box }" in result.stderr
        assert not source.with_suffix(".svg").exists()

    def test_missing_file(self, tmp_path):
        result = _run("compile", str(tmp_path / "absent.gw"))
        assert result.returncode == 1


@pytest.mark.integration
class TestOtherCommands:
    """Tests for check, tokens and themes."""

    def test_check_ok(self, sample_file):
        result = _run("check", str(sample_file))
        assert result.returncode == 0
        assert "OK (3 components, 4x3 grid, 16:9)" in result.stdout

    def test_check_syntax_error(self, tmp_path):
        source = tmp_path / "bad.gw"
        source.write_text("A1 { type: box }\n", encoding="utf-8")
        result = _run("check", str(source))
        assert result.returncode == 1
        assert "syntax error: Expected ':'" in result.stderr

    def test_tokens(self, sample_file):
        result = _run("tokens", str(sample_file))
        assert result.returncode == 0
        assert "CELL_RANGE" in result.stdout
        assert "EOF" in result.stdout

    def test_themes(self):
        result = _run("themes")
        assert result.returncode == 0
        for name in ("default", "clean", "bold"):
            assert name in result.stdout

    def test_unknown_command(self):
        result = _run("frobnicate")
        assert result.returncode == 1
        assert "Usage: python . {command}" in result.stdout
