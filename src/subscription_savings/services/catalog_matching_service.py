"""
Catalog Matching Service.

Matches recurring charges to known subscription services using fuzzy
merchant-name scoring.
"""

import logging
from typing import List, Optional, Sequence, Tuple

from subscription_savings.models.catalog import (
    SubscriptionCatalog,
    SubscriptionCategory,
    SubscriptionItem,
)
from subscription_savings.models.recurring_charge import RecurringCharge
from subscription_savings.models.savings import MatchedService
from subscription_savings.services.recurring_charges.config import DEFAULT_CONFIG, DetectionConfig
from subscription_savings.utils.merchant_utils import normalize_merchant
from subscription_savings.utils.similarity import best_alias_match, similarity

logger = logging.getLogger(__name__)


class CatalogMatchingService:
    """
    Matches each recurring charge against the whole catalog.

    Every item of every category is scored (no early exit per category).
    The first item reaching the best score wins ties, in catalog scan order.
    Cost is O(charges x catalog size), fine for catalogs of a few hundred
    services.
    """

    def __init__(self, catalog: SubscriptionCatalog, config: Optional[DetectionConfig] = None):
        """
        Initialize the matching service.

        Args:
            catalog: Catalog snapshot used for the whole run
            config: Optional configuration. If None, uses DEFAULT_CONFIG.
        """
        self.catalog = catalog
        self.config = config or DEFAULT_CONFIG

    @property
    def min_match_score(self) -> float:
        return self.config.matching.min_match_score

    def score_item(self, normalized_merchant: str, item: SubscriptionItem) -> float:
        """
        Score a catalog item against an already normalized merchant name.

        The score is the better of the alias match over ``[name, *aliases]``
        and the direct similarity between the normalized item name and the
        merchant.
        """
        alias_match = best_alias_match(normalized_merchant, [item.name, *item.aliases])
        name_score = similarity(normalize_merchant(item.name), normalized_merchant)
        return max(alias_match.score, name_score)

    def find_best_match(
        self,
        merchant: str
    ) -> Optional[Tuple[SubscriptionItem, SubscriptionCategory, float]]:
        """
        Find the highest scoring catalog item for a merchant.

        Args:
            merchant: Raw merchant name

        Returns:
            Tuple of (item, category, score), or None if the catalog is empty
        """
        normalized_merchant = normalize_merchant(merchant)
        best: Optional[Tuple[SubscriptionItem, SubscriptionCategory, float]] = None

        for _, category, item in self.catalog.iter_items():
            score = self.score_item(normalized_merchant, item)
            if best is None or score > best[2]:
                best = (item, category, score)

        return best

    def match_recurring_charge(self, charge: RecurringCharge) -> MatchedService:
        """
        Match a single recurring charge.

        Returns:
            MatchedService with subscription/category set when the best score
            is at least the acceptance threshold, otherwise an unmatched
            entry carrying the best score (0.0 for an empty catalog)
        """
        best = self.find_best_match(charge.merchant)

        if best is not None and best[2] >= self.min_match_score:
            item, category, score = best
            logger.debug(f"Matched {charge.normalized_name} to {item.name} ({score:.3f})")
            return MatchedService(
                recurring=charge,
                subscription=item,
                category=category,
                match_confidence=score
            )

        score = best[2] if best is not None else 0.0
        logger.debug(f"No catalog match for {charge.normalized_name} (best score {score:.3f})")
        return MatchedService(recurring=charge, match_confidence=score)

    def match_recurring_charges(self, charges: Sequence[RecurringCharge]) -> List[MatchedService]:
        """
        Match recurring charges against the catalog.

        Args:
            charges: Recurring charges from detection

        Returns:
            Exactly one MatchedService per charge, in input order
        """
        if self.catalog.is_empty:
            logger.warning("Catalog is empty; all recurring charges will be unmatched")

        matches = [self.match_recurring_charge(charge) for charge in charges]

        matched = sum(1 for match in matches if match.is_matched)
        logger.info(f"Matched {matched} of {len(matches)} recurring charges to catalog services")
        return matches
