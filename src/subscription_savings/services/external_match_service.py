"""
External Match Service.

Overlays matches suggested by the external pattern-matching collaborator on
top of the local catalog matches. The collaborator's answer arrives already
resolved; when it is missing, failed or timed out the caller simply skips this
step and the local matches stand.
"""

import logging
from typing import Any, Iterable, List, Optional, Sequence

from pydantic import ValidationError

from subscription_savings.models.catalog import SubscriptionCatalog
from subscription_savings.models.savings import ExternalMatchSuggestion, MatchedService

logger = logging.getLogger(__name__)


def parse_external_suggestions(raw_entries: Optional[Iterable[Any]]) -> List[ExternalMatchSuggestion]:
    """
    Convert the collaborator's raw answer into suggestions.

    Entries that are not objects or fail validation (missing index,
    confidence outside [0, 1]...) are dropped and logged.

    Args:
        raw_entries: Decoded JSON list, e.g.
            ``[{"index": 0, "service_name": "Netflix", "confidence": 0.92}]``

    Returns:
        Valid suggestions in their original order
    """
    if not raw_entries:
        return []

    suggestions: List[ExternalMatchSuggestion] = []
    for position, entry in enumerate(raw_entries):
        if isinstance(entry, ExternalMatchSuggestion):
            suggestions.append(entry)
            continue
        if not isinstance(entry, dict):
            logger.warning(f"Dropping external suggestion #{position}: expected an object, got {type(entry).__name__}")
            continue
        try:
            suggestions.append(ExternalMatchSuggestion.model_validate(entry))
        except ValidationError as e:
            logger.warning(f"Dropping malformed external suggestion #{position}: {e.error_count()} validation errors")
    return suggestions


class ExternalMatchService:
    """
    Merges external suggestions into catalog matches.

    The merge only ever improves an entry: a suggestion is applied when its
    service resolves in the catalog and its confidence is not lower than the
    entry's current confidence. Suggestions are applied in order, so for
    duplicate indices the last applicable one wins.
    """

    def __init__(self, catalog: SubscriptionCatalog):
        self.catalog = catalog

    def merge_external_matches(
        self,
        matches: Sequence[MatchedService],
        suggestions: Iterable[ExternalMatchSuggestion]
    ) -> List[MatchedService]:
        """
        Apply external suggestions on top of local matches.

        Args:
            matches: Catalog matcher output
            suggestions: External suggestions keyed by position in ``matches``

        Returns:
            New list of MatchedService, same length and order as ``matches``
        """
        merged = list(matches)
        applied = 0

        for suggestion in suggestions:
            if self._apply_suggestion(merged, suggestion):
                applied += 1

        logger.info(f"Applied {applied} external match suggestions to {len(merged)} matches")
        return merged

    def _apply_suggestion(self, merged: List[MatchedService], suggestion: ExternalMatchSuggestion) -> bool:
        """
        Apply one suggestion in place on the working list.

        Returns:
            True if the entry at ``suggestion.index`` was replaced
        """
        if not 0 <= suggestion.index < len(merged):
            logger.debug(f"Ignoring external suggestion with out-of-range index {suggestion.index}")
            return False

        if not suggestion.service_name or not suggestion.service_name.strip():
            return False

        found = self.catalog.find_by_name(suggestion.service_name)
        if found is None:
            logger.debug(f"Ignoring external suggestion for unknown service {suggestion.service_name!r}")
            return False

        current = merged[suggestion.index]
        if suggestion.confidence < current.match_confidence:
            logger.debug(
                f"Keeping match at index {suggestion.index}: external confidence "
                f"{suggestion.confidence:.3f} < {current.match_confidence:.3f}"
            )
            return False

        item, category = found
        merged[suggestion.index] = MatchedService(
            recurring=current.recurring,
            subscription=item,
            category=category,
            match_confidence=max(current.match_confidence, suggestion.confidence)
        )
        return True
