"""
Models package for the subscription savings analysis.
"""

from .transaction import Transaction

from .recurring_charge import (
    RecurrenceFrequency,
    RecurringCharge,
)

from .catalog import (
    CatalogMeta,
    EffortLevel,
    SavingsOption,
    SubscriptionCatalog,
    SubscriptionCategory,
    SubscriptionItem,
)

from .savings import (
    ExternalMatchSuggestion,
    MatchedService,
    SavingsAnalysis,
    SavingsReport,
    SavingsReportItem,
)

__all__ = [
    'Transaction',
    'RecurrenceFrequency',
    'RecurringCharge',
    'CatalogMeta',
    'EffortLevel',
    'SavingsOption',
    'SubscriptionCatalog',
    'SubscriptionCategory',
    'SubscriptionItem',
    'ExternalMatchSuggestion',
    'MatchedService',
    'SavingsAnalysis',
    'SavingsReport',
    'SavingsReportItem',
]
