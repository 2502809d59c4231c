"""
Frequency analyzer for recurring charge detection.

Analyzes transaction intervals to detect recurrence frequency.
"""

import logging
from typing import List, Dict, Tuple

import numpy as np

from subscription_savings.models.transaction import Transaction
from subscription_savings.models.recurring_charge import RecurrenceFrequency

logger = logging.getLogger(__name__)

SECONDS_PER_DAY = 60 * 60 * 24


class FrequencyAnalyzer:
    """
    Analyzes transaction intervals to detect recurrence frequency.

    Calculates mean interval between transactions and matches it to
    the monthly, quarterly and annual ranges.
    """

    def __init__(self, frequency_thresholds: Dict[RecurrenceFrequency, Tuple[float, float]]):
        """
        Initialize the frequency analyzer.

        Args:
            frequency_thresholds: Dictionary mapping RecurrenceFrequency to (min_days, max_days) tuples
        """
        self.frequency_thresholds = frequency_thresholds

    def detect_frequency(self, intervals: List[float]) -> RecurrenceFrequency:
        """
        Detect recurrence frequency from the mean interval.

        Args:
            intervals: Day gaps between consecutive occurrences

        Returns:
            RecurrenceFrequency enum indicating the detected frequency
        """
        if not intervals:
            return RecurrenceFrequency.UNKNOWN

        mean_interval = float(np.mean(intervals))
        return self._match_to_frequency(mean_interval)

    def calculate_intervals(self, transactions: List[Transaction]) -> List[float]:
        """
        Calculate day intervals between consecutive transactions.

        Args:
            transactions: Chronologically sorted transactions

        Returns:
            List of absolute intervals in (possibly fractional) days
        """
        intervals = []
        for i in range(len(transactions) - 1):
            delta = transactions[i + 1].date - transactions[i].date
            intervals.append(abs(delta.total_seconds()) / SECONDS_PER_DAY)
        return intervals

    def _match_to_frequency(self, mean_interval: float) -> RecurrenceFrequency:
        """
        Match mean interval to frequency category.

        Args:
            mean_interval: Mean interval in days

        Returns:
            First RecurrenceFrequency whose range contains the interval
        """
        for frequency, (min_days, max_days) in self.frequency_thresholds.items():
            if min_days <= mean_interval <= max_days:
                return frequency

        return RecurrenceFrequency.UNKNOWN

    def get_interval_statistics(self, intervals: List[float]) -> Dict[str, float]:
        """
        Calculate detailed interval statistics.

        Args:
            intervals: Day gaps between consecutive occurrences

        Returns:
            Dictionary with mean, std, min, max intervals
        """
        if not intervals:
            return {
                'mean': 0.0,
                'std': 0.0,
                'min': 0.0,
                'max': 0.0
            }

        return {
            'mean': float(np.mean(intervals)),
            'std': float(np.std(intervals)),
            'min': float(min(intervals)),
            'max': float(max(intervals))
        }
