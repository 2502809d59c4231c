"""
Confidence score calculator for recurring charge detection.

Scores how much a detected cadence can be trusted from the number of
occurrences and how regular the intervals between them are.
"""

import logging
from typing import List, Optional

from subscription_savings.models.recurring_charge import RecurrenceFrequency
from subscription_savings.services.recurring_charges.config import ConfidenceConfig

logger = logging.getLogger(__name__)


def clamp(value: float, minimum: float, maximum: float) -> float:
    return min(max(value, minimum), maximum)


class ConfidenceScoreCalculator:
    """
    Calculates confidence scores for recurring charges.

    Considers:
    - Sample size (a base score that is higher from three occurrences on)
    - Interval stability (spread between the longest and shortest gap)

    The result is a heuristic in [0, max_confidence], not a calibrated
    probability.
    """

    def __init__(self, config: Optional[ConfidenceConfig] = None):
        """
        Initialize the confidence score calculator.

        Args:
            config: Optional heuristic parameters. If None, uses defaults.
        """
        self.config = config or ConfidenceConfig()

    def calculate(
        self,
        occurrence_count: int,
        intervals: List[float],
        frequency: RecurrenceFrequency
    ) -> float:
        """
        Calculate confidence score.

        Args:
            occurrence_count: Number of transactions in the group
            intervals: Day gaps between consecutive occurrences
            frequency: Detected frequency

        Returns:
            Confidence score between 0.0 and max_confidence
        """
        if frequency == RecurrenceFrequency.UNKNOWN:
            return 0.0

        base = self._calculate_base_score(occurrence_count)
        stability = self._calculate_stability(intervals)

        return clamp(
            base + stability * self.config.stability_weight,
            0.0,
            self.config.max_confidence
        )

    def _calculate_base_score(self, occurrence_count: int) -> float:
        if occurrence_count >= self.config.multi_occurrence_threshold:
            return self.config.multi_base
        return self.config.single_base

    def _calculate_stability(self, intervals: List[float]) -> float:
        """
        Calculate interval stability.

        A spread of zero days gives full stability; it decreases linearly to
        zero at ``spread_window`` days.

        Args:
            intervals: Day gaps between consecutive occurrences

        Returns:
            Stability score (0.0-1.0)
        """
        if intervals:
            spread = max(intervals) - min(intervals)
        else:
            spread = self.config.default_spread
        return clamp(1 - spread / self.config.spread_window, 0.0, 1.0)
