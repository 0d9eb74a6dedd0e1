"""Tests for the top-level gridwire API."""

import pytest

import gridwire


class TestCompileSource:
    """Tests for one-step compilation."""

    @pytest.mark.unit
    def test_compiles_to_svg(self, sample_source):
        out = gridwire.compile_source(sample_source)
        assert out.startswith("<?xml")
        assert "Sign in" in out
        assert "Continue" in out

    @pytest.mark.unit
    def test_errors_propagate(self):
        with pytest.raises(gridwire.SemanticError, match="overlap"):
            gridwire.compile_source("A1..B2: { type: box }\nB2: { type: txt }")

    @pytest.mark.unit
    def test_parsed_documents_are_valid(self, sample_document):
        assert gridwire.is_valid(sample_document)
        assert gridwire.validate_document(sample_document) == []

    @pytest.mark.integration
    def test_base_path(self, tmp_path):
        (tmp_path / "a.svg").write_text("<svg/>")
        out = gridwire.compile_source(
            'A1: { type: img, src: "a.svg" }', base_path=tmp_path
        )
        assert "data:image/svg+xml;base64," in out
