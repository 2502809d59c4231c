"""
Savings Report Service.

Aggregates matched services into a savings report: current annual spend on
recurring charges, the potential annual savings and the best option per
catalog-matched service.
"""

import logging
from decimal import Decimal
from typing import Dict, List, Optional, Sequence, Tuple

from subscription_savings.models.catalog import SavingsOption
from subscription_savings.models.recurring_charge import RecurrenceFrequency
from subscription_savings.models.savings import (
    MatchedService,
    SavingsReport,
    SavingsReportItem,
)

logger = logging.getLogger(__name__)

ANNUALIZATION_MULTIPLIERS: Dict[RecurrenceFrequency, int] = {
    RecurrenceFrequency.MONTHLY: 12,
    RecurrenceFrequency.QUARTERLY: 4,
    RecurrenceFrequency.ANNUAL: 1,
}

# Unknown-frequency charges are dropped by detection, so this default only
# applies to charges built by hand
DEFAULT_ANNUALIZATION_MULTIPLIER = 12


def annualize(amount: Decimal, frequency: RecurrenceFrequency) -> Decimal:
    """
    Convert a per-occurrence amount to a yearly cost.

    Args:
        amount: Average amount per occurrence
        frequency: Cadence of the charge

    Returns:
        Annual cost
    """
    multiplier = ANNUALIZATION_MULTIPLIERS.get(frequency, DEFAULT_ANNUALIZATION_MULTIPLIER)
    return amount * multiplier


def select_best_option(options: Sequence[SavingsOption]) -> Optional[SavingsOption]:
    """
    Pick the option with the highest annual savings.

    Linear scan with a strict comparison: the first option reaching the
    maximum wins ties.

    Returns:
        Best option, or None when there are no options
    """
    best: Optional[SavingsOption] = None
    for option in options:
        if best is None or option.savings_annual > best.savings_annual:
            best = option
    return best


def build_savings_report(matches: Sequence[MatchedService]) -> SavingsReport:
    """
    Build a savings report from matched services.

    Every match contributes its annualized cost to the current annual total.
    Only matches resolved to a catalog subscription produce report items and
    contribute to potential savings; negative savings are reported as zero.

    Args:
        matches: Matched services (catalog-matched or not)

    Returns:
        SavingsReport with items in the same order as ``matches``
    """
    items: List[SavingsReportItem] = []
    total_current_annual = Decimal("0")
    total_potential_savings = Decimal("0")

    for match in matches:
        recurring = match.recurring
        total_current_annual += annualize(recurring.average_amount, recurring.frequency)

        if match.subscription is None:
            continue

        options = list(match.subscription.savings_options)
        best_option = select_best_option(options)
        annual_savings = max(best_option.savings_annual, Decimal("0")) if best_option else Decimal("0")
        total_potential_savings += annual_savings

        items.append(SavingsReportItem(
            service=match.subscription.name,
            category=match.category.label if match.category else "",
            current_cost_monthly=recurring.average_amount,
            annual_savings=annual_savings,
            best_option=best_option,
            options=options
        ))

    logger.info(
        f"Built savings report: {len(items)} items, current annual {total_current_annual:.2f}, "
        f"potential savings {total_potential_savings:.2f}"
    )
    return SavingsReport(
        total_current_annual=total_current_annual,
        total_potential_savings=total_potential_savings,
        items=items
    )


def group_items_by_category(report: SavingsReport) -> List[Tuple[str, List[SavingsReportItem]]]:
    """
    Group report items by category label.

    Returns:
        ``(category, items)`` pairs; categories in order of first appearance,
        items in report order
    """
    grouped: Dict[str, List[SavingsReportItem]] = {}
    for item in report.items:
        grouped.setdefault(item.category, []).append(item)
    return list(grouped.items())


def top_savings_items(report: SavingsReport, limit: int = 3) -> List[SavingsReportItem]:
    """
    Items with the largest annual savings, for previews.

    Stable: items with equal savings keep report order.
    """
    ranked = sorted(report.items, key=lambda item: item.annual_savings, reverse=True)
    return ranked[:max(limit, 0)]
