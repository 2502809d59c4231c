"""
Savings Analysis Service.

Runs the full pipeline: recurring charge detection, catalog matching, the
optional external match overlay and report aggregation.

## Pipeline

```mermaid
graph TD
    A[Transactions] --> B[RecurringChargeDetectionService]
    B --> C[CatalogMatchingService]
    C --> D{External suggestions?}
    D -->|Yes| E[ExternalMatchService]
    D -->|No| F[build_savings_report]
    E --> F
    F --> G[SavingsAnalysis]
```
"""

import logging
from typing import List, Optional, Sequence

from subscription_savings.models.catalog import SubscriptionCatalog
from subscription_savings.models.recurring_charge import RecurringCharge
from subscription_savings.models.savings import (
    ExternalMatchSuggestion,
    MatchedService,
    SavingsAnalysis,
)
from subscription_savings.models.transaction import Transaction
from subscription_savings.services.catalog_matching_service import CatalogMatchingService
from subscription_savings.services.external_match_service import ExternalMatchService
from subscription_savings.services.recurring_charges import (
    DEFAULT_CONFIG,
    DetectionConfig,
    RecurringChargeDetectionService,
)
from subscription_savings.services.savings_report_service import build_savings_report
from subscription_savings.utils.anonymize import build_anonymized_patterns
from subscription_savings.utils.performance import AnalysisPerformanceTracker

logger = logging.getLogger(__name__)


class SavingsAnalysisService:
    """
    Orchestrates a savings analysis run against one catalog snapshot.

    Holds no per-run state, so one instance can serve concurrent callers.
    """

    def __init__(self, catalog: SubscriptionCatalog, config: Optional[DetectionConfig] = None):
        """
        Initialize the analysis service.

        Args:
            catalog: Catalog snapshot
            config: Optional configuration. If None, uses DEFAULT_CONFIG.
        """
        self.catalog = catalog
        self.config = config or DEFAULT_CONFIG

        self.detection_service = RecurringChargeDetectionService(config=self.config)
        self.matching_service = CatalogMatchingService(catalog, config=self.config)
        self.external_match_service = ExternalMatchService(catalog)

    def analyze(
        self,
        transactions: Sequence[Transaction],
        external_suggestions: Optional[Sequence[ExternalMatchSuggestion]] = None
    ) -> SavingsAnalysis:
        """
        Analyze a transaction batch.

        Args:
            transactions: Parsed transactions
            external_suggestions: Already-resolved suggestions from the external
                matcher, indexed by position in the matcher output. Pass None
                when the collaborator was unavailable.

        Returns:
            SavingsAnalysis with recurring charges, matches and the report.
            Empty input yields empty collections and a zero report.
        """
        with AnalysisPerformanceTracker("savings_analysis") as tracker:
            tracker.set_transaction_count(len(transactions))

            with tracker.stage("detection"):
                recurring = self.detection_service.detect_recurring_charges(transactions)
            tracker.set_recurring_charges_detected(len(recurring))

            with tracker.stage("matching"):
                matches = self.matching_service.match_recurring_charges(recurring)

            external_applied = False
            if external_suggestions:
                with tracker.stage("external_merge"):
                    merged = self.external_match_service.merge_external_matches(matches, external_suggestions)
                changed = sum(1 for before, after in zip(matches, merged) if before is not after)
                tracker.set_external_matches_applied(changed)
                external_applied = changed > 0
                matches = merged
            tracker.set_services_matched(sum(1 for match in matches if match.is_matched))

            with tracker.stage("report"):
                report = build_savings_report(matches)

        if not recurring:
            logger.info("No recurring charges found in transaction batch")

        return SavingsAnalysis(
            recurring_charges=recurring,
            matches=matches,
            report=report,
            external_matches_applied=external_applied
        )

    def build_external_patterns(self, recurring: Sequence[RecurringCharge]) -> List[str]:
        """
        Anonymized patterns to hand to the external matcher.

        The pattern list is positionally aligned with the matcher output for
        the same charges, so suggestion indices map back directly.
        """
        return build_anonymized_patterns(recurring)

    def merge_external_matches(
        self,
        matches: Sequence[MatchedService],
        external_suggestions: Sequence[ExternalMatchSuggestion]
    ) -> List[MatchedService]:
        """Apply external suggestions to an existing match list."""
        return self.external_match_service.merge_external_matches(matches, external_suggestions)
