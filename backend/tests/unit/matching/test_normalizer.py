"""Unit tests for request line normalization

Tests cover:
- Size parsing (mm, inches, bare numbers)
- Material detection including FRPP before PP
- Gauge and color canonicalization
- Raw tokens taking precedence over existing normalized values
"""

import pytest

from matching.normalizer import (
    normalize_color,
    normalize_gauge,
    normalize_line,
    normalize_material,
    normalize_size_mm,
)
from matching.ports import NormalizedAttributes, RequestLine
from fixtures.lines import make_line


class TestNormalizeSize:
    """Test size token conversion to millimeters"""

    @pytest.mark.parametrize("token,expected", [
        ("25mm", 25.0),
        ("25 MM", 25.0),
        ("32", 32.0),
        ("20.5mm", 20.5),
        ('1"', 25.4),
        ("1 inch", 25.4),
        ("2 inches", 50.8),
        ("0.5in", 12.7),
        ("size 20mm", 20.0),
        ("25 mm OD", 25.0),
        ("size 32", 32.0),
    ])
    def test_parses_size(self, token, expected):
        assert normalize_size_mm(token) == pytest.approx(expected)

    @pytest.mark.parametrize("token", [None, "", "abc", "mm", "25cm", "2 m", "3 ft", "1/2 inch"])
    def test_unparseable_size_is_none(self, token):
        assert normalize_size_mm(token) is None


class TestNormalizeMaterial:
    """Test material text to canonical code"""

    @pytest.mark.parametrize("token,expected", [
        ("PP", "PP"),
        ("pvc", "PVC"),
        ("FR PP", "FRPP"),
        ("fr-pp", "FRPP"),
        ("FRPP", "FRPP"),
        ("Polypropylene", "PP"),
        ("GI", "MS"),
        ("galvanized steel", "MS"),
        ("Nylon 6", "NYLON"),
        ("HDPE", "HDPE"),
        ("fr", "FR"),
    ])
    def test_detects_material(self, token, expected):
        assert normalize_material(token) == expected

    @pytest.mark.parametrize("token", [None, "", "   ", "wood"])
    def test_unknown_material_is_none(self, token):
        assert normalize_material(token) is None


class TestNormalizeGaugeAndColor:

    @pytest.mark.parametrize("token,expected", [
        ("Medium", "M"),
        ("med", "M"),
        ("h", "H"),
        ("light", "L"),
    ])
    def test_gauge(self, token, expected):
        assert normalize_gauge(token) == expected

    def test_unknown_gauge_is_none(self):
        assert normalize_gauge("extra heavy duty") is None
        assert normalize_gauge(None) is None

    def test_color_is_trimmed_lowercase(self):
        assert normalize_color("  Black ") == "black"

    def test_blank_color_is_none(self):
        assert normalize_color("   ") is None
        assert normalize_color(None) is None


class TestNormalizeLine:
    """Test the normalized projection of a whole line"""

    def test_fills_normalized_from_raw_tokens(self):
        line = make_line("25mm pvc conduit", size="25mm", material="pvc", gauge="medium", color="Grey")

        normalized = normalize_line(line)

        assert normalized.normalized == NormalizedAttributes(
            size_mm=25.0, material="PVC", gauge="M", color="grey"
        )
        assert normalized.input_text == line.input_text

    def test_does_not_mutate_input(self):
        line = make_line("25mm pipe", size="25mm")

        normalize_line(line)

        assert line.normalized.size_mm is None

    def test_raw_tokens_take_precedence(self):
        line = RequestLine(
            input_text="pvc pipe",
            raw_tokens=make_line("pvc pipe", material="pvc").raw_tokens,
            normalized=NormalizedAttributes(material="PP"),
        )

        assert normalize_line(line).normalized.material == "PVC"

    def test_canonicalizes_existing_normalized_values(self):
        line = RequestLine(
            input_text="corrugated pipe",
            normalized=NormalizedAttributes(size_mm=32.0, material="frpp", gauge="heavy", color="BLACK"),
        )

        result = normalize_line(line).normalized

        assert result.size_mm == 32.0
        assert result.material == "FRPP"
        assert result.gauge == "H"
        assert result.color == "black"

    def test_no_tokens_leaves_attributes_unset(self):
        result = normalize_line(RequestLine(input_text="something")).normalized

        assert result == NormalizedAttributes()
