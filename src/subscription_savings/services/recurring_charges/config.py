"""
Configuration classes for savings analysis.

Centralizes all thresholds and weights used by recurring charge detection and
catalog matching.
"""

import os
from dataclasses import dataclass
from typing import Dict, Tuple, Optional

from subscription_savings.models.recurring_charge import MAX_RECURRENCE_CONFIDENCE, RecurrenceFrequency


@dataclass
class FrequencyThresholds:
    """
    Day range thresholds for frequency classification.

    Each threshold is a tuple of (min_days, max_days), inclusive on both ends,
    compared against the mean interval between occurrences.
    """

    monthly: Tuple[float, float] = (25, 35)
    """Monthly recurrence: 25 to 35 days between occurrences."""

    quarterly: Tuple[float, float] = (80, 110)
    """Quarterly recurrence: 80 to 110 days between occurrences."""

    annual: Tuple[float, float] = (330, 400)
    """Annual recurrence: 330 to 400 days between occurrences."""

    def to_dict(self) -> Dict[RecurrenceFrequency, Tuple[float, float]]:
        """
        Convert thresholds to a dictionary mapping frequency enum to ranges.

        Returns:
            Dictionary mapping RecurrenceFrequency to (min_days, max_days) tuple,
            in classification order
        """
        return {
            RecurrenceFrequency.MONTHLY: self.monthly,
            RecurrenceFrequency.QUARTERLY: self.quarterly,
            RecurrenceFrequency.ANNUAL: self.annual,
        }


@dataclass
class ConfidenceConfig:
    """
    Parameters of the recurrence confidence heuristic.

    confidence = clamp(base + stability * stability_weight, 0, max_confidence)
    where stability = clamp(1 - spread / spread_window, 0, 1) and spread is
    the difference between the longest and shortest interval.
    """

    single_base: float = 0.5
    """Base score for charges seen fewer than multi_occurrence_threshold times."""

    multi_base: float = 0.7
    """Base score for charges seen at least multi_occurrence_threshold times."""

    multi_occurrence_threshold: int = 3

    spread_window: float = 20.0
    """Interval spread (days) at which the stability bonus drops to zero."""

    stability_weight: float = 0.3

    max_confidence: float = MAX_RECURRENCE_CONFIDENCE
    """Cap below 1.0: a short history never proves a subscription."""

    default_spread: float = 30.0
    """Spread assumed when no intervals are available."""

    def __post_init__(self):
        """Validate ranges."""
        if not 0.0 <= self.max_confidence <= MAX_RECURRENCE_CONFIDENCE:
            raise ValueError(
                f"max_confidence must be between 0 and {MAX_RECURRENCE_CONFIDENCE}, got {self.max_confidence}"
            )
        if self.spread_window <= 0:
            raise ValueError(f"spread_window must be positive, got {self.spread_window}")
        if self.multi_occurrence_threshold < 1:
            raise ValueError(
                f"multi_occurrence_threshold must be at least 1, got {self.multi_occurrence_threshold}"
            )


@dataclass
class MatchingConfig:
    """Configuration for merchant-to-catalog matching."""

    min_match_score: float = 0.78
    """Acceptance threshold: best scores below this leave the charge unmatched."""

    def __post_init__(self):
        if not 0.0 <= self.min_match_score <= 1.0:
            raise ValueError(f"min_match_score must be between 0 and 1, got {self.min_match_score}")


class DetectionConfig:
    """
    Master configuration for savings analysis.

    Aggregates all configuration classes into a single configuration object.
    """

    def __init__(
        self,
        frequency_thresholds: Optional[FrequencyThresholds] = None,
        confidence: Optional[ConfidenceConfig] = None,
        matching: Optional[MatchingConfig] = None,
        min_occurrences: int = 2
    ):
        """
        Initialize analysis configuration.

        Args:
            frequency_thresholds: Frequency thresholds config (creates default if None)
            confidence: Confidence heuristic config (creates default if None)
            matching: Catalog matching config (creates default if None)
            min_occurrences: Minimum transactions per merchant to consider it recurring
        """
        if min_occurrences < 2:
            raise ValueError(f"min_occurrences must be at least 2, got {min_occurrences}")
        self.frequency_thresholds = frequency_thresholds or FrequencyThresholds()
        self.confidence = confidence or ConfidenceConfig()
        self.matching = matching or MatchingConfig()
        self.min_occurrences = min_occurrences

    @classmethod
    def from_environment(cls) -> 'DetectionConfig':
        """
        Create configuration from environment variables with fallback to defaults.

        Environment variables:
        - SAVINGS_MIN_MATCH_SCORE
        - SAVINGS_MIN_OCCURRENCES
        """
        return cls(
            matching=MatchingConfig(
                min_match_score=float(os.getenv('SAVINGS_MIN_MATCH_SCORE', 0.78))
            ),
            min_occurrences=int(os.getenv('SAVINGS_MIN_OCCURRENCES', 2))
        )


# Default configuration instance
DEFAULT_CONFIG = DetectionConfig()
