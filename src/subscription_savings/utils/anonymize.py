"""
Anonymized pattern builder.

The external matching collaborator never sees raw transactions. It receives
one summary line per recurring charge; the position of a line in the list is
the ``index`` the collaborator uses when it suggests a match.
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import List, Sequence

from subscription_savings.models.recurring_charge import RecurringCharge

MAX_PATTERNS_PER_REQUEST = 60

_CENTS = Decimal("0.01")


def build_anonymized_pattern(charge: RecurringCharge) -> str:
    """
    Summarize a recurring charge without dates, raw descriptors or categories.

    Example:
        ``"NETFLIX COM $15.49 - occurs monthly (3 times)"``
    """
    amount = charge.average_amount.quantize(_CENTS, rounding=ROUND_HALF_UP)
    return (
        f"{charge.normalized_name} ${amount} - occurs {charge.frequency.value} "
        f"({len(charge.occurrences)} times)"
    )


def build_anonymized_patterns(
    charges: Sequence[RecurringCharge],
    limit: int = MAX_PATTERNS_PER_REQUEST
) -> List[str]:
    """
    Build the pattern list sent to the external matcher.

    Args:
        charges: Recurring charges in catalog-matcher order
        limit: Maximum number of patterns to include

    Returns:
        List of summary lines, clipped to ``limit``
    """
    return [build_anonymized_pattern(charge) for charge in charges[:max(limit, 0)]]
