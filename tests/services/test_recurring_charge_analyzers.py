"""
Unit tests for the frequency analyzer and confidence score calculator.
"""

import pytest
from datetime import date
from decimal import Decimal

from subscription_savings.models.recurring_charge import RecurrenceFrequency
from subscription_savings.services.recurring_charges.analyzers import (
    ConfidenceScoreCalculator,
    FrequencyAnalyzer,
)
from subscription_savings.services.recurring_charges.config import (
    ConfidenceConfig,
    FrequencyThresholds,
)
from tests.fixtures.savings_fixtures import create_series, create_transaction


class TestFrequencyAnalyzer:
    """Test suite for FrequencyAnalyzer."""

    @pytest.fixture
    def analyzer(self):
        return FrequencyAnalyzer(FrequencyThresholds().to_dict())

    @pytest.mark.parametrize("intervals,expected", [
        ([30.0], RecurrenceFrequency.MONTHLY),
        ([25.0], RecurrenceFrequency.MONTHLY),
        ([35.0], RecurrenceFrequency.MONTHLY),
        ([28.0, 31.0, 30.0], RecurrenceFrequency.MONTHLY),
        ([91.0, 92.0], RecurrenceFrequency.QUARTERLY),
        ([80.0], RecurrenceFrequency.QUARTERLY),
        ([110.0], RecurrenceFrequency.QUARTERLY),
        ([365.0], RecurrenceFrequency.ANNUAL),
        ([330.0], RecurrenceFrequency.ANNUAL),
        ([400.0], RecurrenceFrequency.ANNUAL),
    ])
    def test_classifies_mean_interval(self, analyzer, intervals, expected):
        assert analyzer.detect_frequency(intervals) == expected

    @pytest.mark.parametrize("intervals", [
        [7.0],
        [14.0, 14.0],
        [24.9],
        [35.1],
        [60.0],
        [111.0],
        [200.0],
        [401.0],
    ])
    def test_unknown_outside_ranges(self, analyzer, intervals):
        assert analyzer.detect_frequency(intervals) == RecurrenceFrequency.UNKNOWN

    def test_uses_mean_not_individual_gaps(self, analyzer):
        # 5 and 55 days average to 30
        assert analyzer.detect_frequency([5.0, 55.0]) == RecurrenceFrequency.MONTHLY

    def test_no_intervals(self, analyzer):
        assert analyzer.detect_frequency([]) == RecurrenceFrequency.UNKNOWN

    def test_calculate_intervals(self, analyzer):
        transactions = [
            create_transaction(date(2024, 6, 1), "X", Decimal("1")),
            create_transaction(date(2024, 7, 1), "X", Decimal("1")),
            create_transaction(date(2024, 8, 2), "X", Decimal("1")),
        ]
        assert analyzer.calculate_intervals(transactions) == [30.0, 32.0]

    def test_calculate_intervals_single_transaction(self, analyzer):
        transactions = create_series("X", Decimal("1"), date(2024, 1, 1), 30, 1)
        assert analyzer.calculate_intervals(transactions) == []

    def test_interval_statistics(self, analyzer):
        stats = analyzer.get_interval_statistics([30.0, 32.0])
        assert stats == {'mean': 31.0, 'std': 1.0, 'min': 30.0, 'max': 32.0}

    def test_interval_statistics_empty(self, analyzer):
        assert analyzer.get_interval_statistics([])['mean'] == 0.0


class TestConfidenceScoreCalculator:
    """Test suite for ConfidenceScoreCalculator."""

    @pytest.fixture
    def calculator(self):
        return ConfidenceScoreCalculator()

    def test_regular_three_occurrences_hits_cap(self, calculator):
        score = calculator.calculate(3, [30.0, 30.0], RecurrenceFrequency.MONTHLY)
        assert score == 0.98

    def test_two_occurrences(self, calculator):
        score = calculator.calculate(2, [30.0], RecurrenceFrequency.MONTHLY)
        assert score == pytest.approx(0.8)

    def test_spread_reduces_stability(self, calculator):
        score = calculator.calculate(3, [30.0, 32.0], RecurrenceFrequency.MONTHLY)
        assert score == pytest.approx(0.97)

    def test_large_spread_removes_bonus(self, calculator):
        assert calculator.calculate(3, [10.0, 50.0], RecurrenceFrequency.MONTHLY) == pytest.approx(0.7)
        assert calculator.calculate(2, [5.0, 55.0], RecurrenceFrequency.MONTHLY) == pytest.approx(0.5)

    def test_spread_at_window_edge(self, calculator):
        assert calculator.calculate(3, [20.0, 40.0], RecurrenceFrequency.MONTHLY) == pytest.approx(0.7)

    def test_no_intervals_uses_default_spread(self, calculator):
        # default spread 30 > window 20, so no stability bonus
        assert calculator.calculate(3, [], RecurrenceFrequency.MONTHLY) == pytest.approx(0.7)

    def test_unknown_frequency_scores_zero(self, calculator):
        assert calculator.calculate(5, [30.0, 30.0], RecurrenceFrequency.UNKNOWN) == 0.0

    @pytest.mark.parametrize("count", [2, 3, 12])
    def test_never_reaches_one(self, calculator, count):
        intervals = [30.0] * (count - 1)
        assert calculator.calculate(count, intervals, RecurrenceFrequency.MONTHLY) <= 0.98

    def test_custom_config(self):
        calculator = ConfidenceScoreCalculator(ConfidenceConfig(max_confidence=0.9, multi_occurrence_threshold=4))
        assert calculator.calculate(3, [30.0, 30.0], RecurrenceFrequency.MONTHLY) == pytest.approx(0.8)
        assert calculator.calculate(4, [30.0] * 3, RecurrenceFrequency.MONTHLY) == pytest.approx(0.9)
