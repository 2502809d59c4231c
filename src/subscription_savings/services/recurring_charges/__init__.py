"""
Recurring Charge Detection.

Public API:
    - RecurringChargeDetectionService: groups transactions by merchant and
      classifies their cadence
    - DetectionConfig: Configuration for detection and matching parameters
    - DEFAULT_CONFIG: Default configuration instance
"""

from subscription_savings.services.recurring_charges.detection_service import RecurringChargeDetectionService
from subscription_savings.services.recurring_charges.config import (
    DetectionConfig,
    DEFAULT_CONFIG,
    ConfidenceConfig,
    FrequencyThresholds,
    MatchingConfig,
)
from subscription_savings.services.recurring_charges.analyzers import (
    FrequencyAnalyzer,
    ConfidenceScoreCalculator,
)

__all__ = [
    'RecurringChargeDetectionService',
    'DetectionConfig',
    'DEFAULT_CONFIG',
    'ConfidenceConfig',
    'FrequencyThresholds',
    'MatchingConfig',
    'FrequencyAnalyzer',
    'ConfidenceScoreCalculator',
]
