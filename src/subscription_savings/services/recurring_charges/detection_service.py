"""
Recurring Charge Detection Service.

Groups transactions by normalized merchant and keeps the groups that repeat on
a monthly, quarterly or annual cadence.

## Detection Pipeline

```mermaid
graph TD
    A[Transactions] --> B[Drop non-positive amounts]
    B --> C[Group by normalized merchant]
    C --> D{>= min occurrences?}
    D -->|No| X[Discard]
    D -->|Yes| E[Sort by date, compute intervals]
    E --> F[FrequencyAnalyzer]
    F --> G{Unknown?}
    G -->|Yes| X
    G -->|No| H[ConfidenceScoreCalculator]
    H --> I[Sort by confidence]
    I --> J[RecurringCharges]
```
"""

import logging
from decimal import Decimal
from typing import Dict, List, Optional, Sequence

from subscription_savings.models.transaction import Transaction
from subscription_savings.models.recurring_charge import (
    RecurrenceFrequency,
    RecurringCharge,
)
from subscription_savings.services.recurring_charges.analyzers import (
    ConfidenceScoreCalculator,
    FrequencyAnalyzer,
)
from subscription_savings.services.recurring_charges.config import (
    DEFAULT_CONFIG,
    DetectionConfig,
)
from subscription_savings.utils.merchant_utils import normalize_merchant

logger = logging.getLogger(__name__)


class RecurringChargeDetectionService:
    """
    Detects recurring charges in a transaction batch.

    Stateless apart from its configuration; safe to share between callers.
    """

    def __init__(self, config: Optional[DetectionConfig] = None):
        """
        Initialize the detection service.

        Args:
            config: Optional detection configuration. If None, uses DEFAULT_CONFIG.
        """
        self.config = config or DEFAULT_CONFIG

        self.frequency_analyzer = FrequencyAnalyzer(
            frequency_thresholds=self.config.frequency_thresholds.to_dict()
        )
        self.confidence_calculator = ConfidenceScoreCalculator(
            config=self.config.confidence
        )

    def detect_recurring_charges(self, transactions: Sequence[Transaction]) -> List[RecurringCharge]:
        """
        Detect recurring charges in transaction history.

        Args:
            transactions: Transactions in input order

        Returns:
            RecurringCharges sorted by confidence, highest first. Charges with
            equal confidence keep the order in which their merchant first
            appeared in the input.
        """
        groups = self._group_by_merchant(transactions)

        recurring: List[RecurringCharge] = []
        for normalized_name, items in groups.items():
            charge = self._analyze_group(normalized_name, items)
            if charge is not None:
                recurring.append(charge)

        recurring.sort(key=lambda charge: charge.confidence, reverse=True)

        logger.info(
            f"Detected {len(recurring)} recurring charges from {len(transactions)} transactions "
            f"across {len(groups)} merchants"
        )
        return recurring

    def _group_by_merchant(self, transactions: Sequence[Transaction]) -> Dict[str, List[Transaction]]:
        """
        Group positive-amount transactions by normalized merchant name.

        Group order follows first appearance; members keep input order.
        """
        grouped: Dict[str, List[Transaction]] = {}
        skipped = 0

        for txn in transactions:
            if txn.amount <= 0:
                skipped += 1
                continue
            grouped.setdefault(normalize_merchant(txn.merchant), []).append(txn)

        if skipped:
            logger.debug(f"Skipped {skipped} transactions with non-positive amounts")
        return grouped

    def _analyze_group(self, normalized_name: str, items: List[Transaction]) -> Optional[RecurringCharge]:
        """
        Turn a merchant group into a RecurringCharge.

        Args:
            normalized_name: Grouping key
            items: Transactions of the group in input order

        Returns:
            RecurringCharge, or None if the group is too small or has no
            classifiable cadence
        """
        if len(items) < self.config.min_occurrences:
            return None

        occurrences = sorted(items, key=lambda txn: txn.date)
        intervals = self.frequency_analyzer.calculate_intervals(occurrences)

        frequency = self.frequency_analyzer.detect_frequency(intervals)
        if frequency == RecurrenceFrequency.UNKNOWN:
            logger.debug(
                f"Discarding {normalized_name}: no recognizable cadence "
                f"(intervals={self.frequency_analyzer.get_interval_statistics(intervals)})"
            )
            return None

        average_amount = sum((txn.amount for txn in occurrences), Decimal("0")) / len(occurrences)
        confidence = self.confidence_calculator.calculate(len(occurrences), intervals, frequency)

        return RecurringCharge(
            merchant=occurrences[0].merchant,
            normalized_name=normalized_name,
            average_amount=average_amount,
            frequency=frequency,
            occurrences=occurrences,
            confidence=confidence
        )
