"""
Pattern analyzers for recurring charge detection.

This package provides the analyzers that classify the cadence of a merchant
group and score how regular it is.
"""

from subscription_savings.services.recurring_charges.analyzers.frequency import FrequencyAnalyzer
from subscription_savings.services.recurring_charges.analyzers.confidence import (
    ConfidenceScoreCalculator,
    clamp,
)

__all__ = [
    'FrequencyAnalyzer',
    'ConfidenceScoreCalculator',
    'clamp',
]
