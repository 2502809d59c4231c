"""
Unit tests for the anonymized pattern builder.
"""

from decimal import Decimal

from subscription_savings.models.recurring_charge import RecurrenceFrequency
from subscription_savings.utils.anonymize import (
    MAX_PATTERNS_PER_REQUEST,
    build_anonymized_pattern,
    build_anonymized_patterns,
)
from tests.fixtures.savings_fixtures import create_recurring_charge


class TestAnonymizedPatterns:
    """Test suite for build_anonymized_patterns."""

    def test_pattern_format(self):
        charge = create_recurring_charge("Netflix.com", Decimal("15.49"))
        assert build_anonymized_pattern(charge) == "NETFLIX COM $15.49 - occurs monthly (3 times)"

    def test_amount_rounded_to_cents(self):
        charge = create_recurring_charge(
            "Dropbox", Decimal("11.995"), frequency=RecurrenceFrequency.QUARTERLY
        )
        assert build_anonymized_pattern(charge) == "DROPBOX $12.00 - occurs quarterly (3 times)"

    def test_raw_descriptor_not_included(self):
        charge = create_recurring_charge("Spotify USA*P0123456789", Decimal("11.99"))
        pattern = build_anonymized_pattern(charge)
        assert "*" not in pattern
        assert "2024" not in pattern

    def test_preserves_order(self):
        charges = [
            create_recurring_charge("Hulu", Decimal("17.99")),
            create_recurring_charge("Spotify", Decimal("11.99")),
        ]
        patterns = build_anonymized_patterns(charges)
        assert patterns[0].startswith("HULU ")
        assert patterns[1].startswith("SPOTIFY ")

    def test_clipped_to_limit(self):
        charges = [create_recurring_charge(f"Service {i}", Decimal("1.00")) for i in range(5)]
        assert len(build_anonymized_patterns(charges, limit=2)) == 2
        assert build_anonymized_patterns(charges, limit=0) == []

    def test_default_limit(self):
        charges = [create_recurring_charge("Service", Decimal("1.00"))] * (MAX_PATTERNS_PER_REQUEST + 5)
        assert len(build_anonymized_patterns(charges)) == MAX_PATTERNS_PER_REQUEST

    def test_empty(self):
        assert build_anonymized_patterns([]) == []
