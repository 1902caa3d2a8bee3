"""
Tests for text_utils and source parsing.
"""

import pytest

from exceptions import UnknownSourceError
from models.mercuriale import SourceTag, parse_source
from utils.text_utils import format_number, normalize_query, stringify_value


class TestStringifyValue:

    @pytest.mark.parametrize("value,expected", [
        (None, ""),
        ("", ""),
        ("A1", "A1"),
        (" A1 ", " A1 "),
        (12, "12"),
        (12.0, "12"),
        (12.5, "12.5"),
        (0, "0"),
        (True, "true"),
        (False, "false"),
    ])
    def test_values(self, value, expected):
        assert stringify_value(value) == expected

    def test_non_finite_float(self):
        assert stringify_value(float("inf")) == "Infinity"
        assert stringify_value(float("-inf")) == "-Infinity"
        assert stringify_value(float("nan")) == "NaN"


class TestFormatNumber:

    @pytest.mark.parametrize("value,expected", [
        (12.0, "12"),
        (-12.0, "-12"),
        (-0.0, "0"),
        (0.5, "0.5"),
        (1.2, "1.2"),
        (123456.789, "123456.789"),
        (0.000001, "0.000001"),
        (1e-7, "1e-7"),
        (1.5e-7, "1.5e-7"),
        (1e16, "10000000000000000"),
        (1e21, "1e+21"),
        (1.25e22, "1.25e+22"),
    ])
    def test_values(self, value, expected):
        assert format_number(value) == expected


class TestNormalizeQuery:

    def test_trims_and_lowercases(self):
        assert normalize_query("  PaIn ") == "pain"

    def test_none(self):
        assert normalize_query(None) == ""

    def test_keeps_accents(self):
        assert normalize_query("CRÈME") == "crème"


class TestParseSource:

    def test_known_sources(self):
        assert parse_source("vendome") == SourceTag.VENDOME
        assert parse_source(SourceTag.WASHINGTON) == SourceTag.WASHINGTON

    def test_unknown_source(self):
        with pytest.raises(UnknownSourceError) as exc_info:
            parse_source("Vendome")
        assert exc_info.value.code == "UNKNOWN_SOURCE"
        assert exc_info.value.details == {"source": "Vendome"}
