"""Root pytest configuration and fixtures.

This module provides:
- Environment setup (loads .env)
- Isolation from GRIDWIRE_* variables set in the developer's shell
- Shared source and document fixtures
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import TYPE_CHECKING

import pytest
from dotenv import load_dotenv

if TYPE_CHECKING:
    from gridwire.ir import Document

# Load environment variables from .env file
load_dotenv()

PROJECT_ROOT = Path(__file__).parent


# =============================================================================
# Pytest Hooks
# =============================================================================


@pytest.hookimpl(tryfirst=True)
def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]):
    """Mark tests without a tier marker as unit tests.

    Keeps `python . test --unit` inclusive of simple helper tests.
    """
    unit = pytest.mark.unit
    for item in items:
        if "unit" not in item.keywords and "integration" not in item.keywords:
            item.add_marker(unit)


@pytest.fixture(autouse=True)
def _isolate_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Drop GRIDWIRE_* variables so defaults apply in every test."""
    for name in list(os.environ):
        if name.startswith("GRIDWIRE_"):
            monkeypatch.delenv(name, raising=False)


# =============================================================================
# Common Test Fixtures
# =============================================================================


@pytest.fixture
def sample_source() -> str:
    """A small, valid gridwire document.

    Returns:
        Source text with metadata and three components.
    """
    return (
        "// Login screen\n"
        "ratio: 16:9\n"
        "grid: 4x3\n"
        "gap: 8\n"
        "\n"
        'A1..D1: { type: txt, value: "Sign in", align: center }\n'
        'B2..C2: { type: input, label: "Email" }\n'
        'B3..C3: { type: btn, value: "Continue" }\n'
    )


@pytest.fixture
def sample_document(sample_source: str) -> Document:
    """Parsed form of sample_source.

    Returns:
        Document with three components.
    """
    from gridwire.parser import parse

    return parse(sample_source)


@pytest.fixture
def sample_file(tmp_path: Path, sample_source: str) -> Path:
    """sample_source written to a file.

    Returns:
        Path to login.gw inside a temporary directory.
    """
    path = tmp_path / "login.gw"
    path.write_text(sample_source, encoding="utf-8")
    return path
