"""Render module test fixtures."""

from __future__ import annotations

import base64
from pathlib import Path

import pytest

# 1x1 transparent PNG
_PNG_BYTES = base64.b64decode(
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNkYPhfDwAChwGA60e6kgAAAABJRU5ErkJggg=="
)


@pytest.fixture
def image_dir(tmp_path: Path) -> Path:
    """Directory holding a tiny PNG named logo.png.

    Returns:
        Path to the directory.
    """
    (tmp_path / "logo.png").write_bytes(_PNG_BYTES)
    return tmp_path


@pytest.fixture
def png_bytes() -> bytes:
    """Raw bytes of the tiny PNG written by image_dir."""
    return _PNG_BYTES


@pytest.fixture
def dashboard_source() -> str:
    """A document using every component kind.

    Returns:
        Valid gridwire source text.
    """
    return """
ratio: 16:9
grid: 4x3
gap: 8
colors: { brand: #336699 }

A1..D1: { type: txt, value: "Dashboard", align: center, bg: $brand }
A2: { type: box, border: #000 }
B2: { type: btn, value: "Save" }
C2..D2: { type: input, label: "Email" }
A3..D3: { type: img, src: "logo.png", alt: "Logo" }
"""
