"""
Unit tests for merchant name normalization.
"""

import pytest

from subscription_savings.utils.merchant_utils import normalize_merchant


class TestNormalizeMerchant:
    """Test suite for normalize_merchant."""

    @pytest.mark.parametrize("raw,expected", [
        ("Netflix.com", "NETFLIX COM"),
        ("NETFLIX.COM", "NETFLIX COM"),
        ("spotify", "SPOTIFY"),
        ("  AT&T   Mobility ", "AT T MOBILITY"),
        ("AMZN*Prime  Video", "AMZN PRIME VIDEO"),
        ("Planet Fitness #1234", "PLANET FITNESS 1234"),
        ("a--b__c", "A B C"),
        ("tab\tseparated\nname", "TAB SEPARATED NAME"),
    ])
    def test_normalizes_case_punctuation_and_spacing(self, raw, expected):
        assert normalize_merchant(raw) == expected

    def test_empty_string(self):
        assert normalize_merchant("") == ""

    def test_only_punctuation(self):
        assert normalize_merchant("*** ---") == ""

    def test_non_ascii_letters_become_spaces(self):
        assert normalize_merchant("Café Zürich") == "CAF Z RICH"

    @pytest.mark.parametrize("raw", [
        "Netflix.com",
        "  weird   ++ spacing ..",
        "Café Zürich",
        "straße",
        "",
        "123-456/789",
        "ǅemal",
    ])
    def test_idempotent(self, raw):
        once = normalize_merchant(raw)
        assert normalize_merchant(once) == once

    def test_output_alphabet(self):
        result = normalize_merchant("Hulu*LLC (Ads) 2024!")
        assert all(ch.isupper() or ch.isdigit() or ch == " " for ch in result)
        assert "  " not in result
        assert result == result.strip()
