"""
Savings Models.

Pydantic models for catalog matches, external match suggestions and the
savings report built from them. All of them are plain value structures meant
to be serialized with ``model_dump(by_alias=True)`` and handed to the
presentation layer.
"""

import logging
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from subscription_savings.models.catalog import (
    SavingsOption,
    SubscriptionCategory,
    SubscriptionItem,
)
from subscription_savings.models.recurring_charge import RecurringCharge

logger = logging.getLogger(__name__)


class MatchedService(BaseModel):
    """
    A recurring charge paired with its best catalog candidate.

    ``subscription`` and ``category`` are only set when the match cleared the
    acceptance threshold (or was supplied by an external suggestion).
    ``match_confidence`` is always reported, even for unmatched charges.
    """
    recurring: RecurringCharge
    subscription: Optional[SubscriptionItem] = None
    category: Optional[SubscriptionCategory] = None
    match_confidence: float = Field(alias="matchConfidence", ge=0.0, le=1.0)

    model_config = ConfigDict(
        populate_by_name=True,
        frozen=True
    )

    @property
    def is_matched(self) -> bool:
        return self.subscription is not None


class ExternalMatchSuggestion(BaseModel):
    """
    A match suggested by the external pattern-matching collaborator.

    ``index`` points into the catalog matcher's output list.
    """
    index: int
    service_name: Optional[str] = None
    confidence: float = Field(ge=0.0, le=1.0)

    model_config = ConfigDict(frozen=True)


class SavingsReportItem(BaseModel):
    """One catalog-matched service with its savings options."""
    service: str
    category: str
    current_cost_monthly: Decimal = Field(alias="currentCostMonthly")
    annual_savings: Decimal = Field(alias="annualSavings", ge=0)
    best_option: Optional[SavingsOption] = Field(default=None, alias="bestOption")
    options: List[SavingsOption] = Field(default_factory=list)

    model_config = ConfigDict(
        populate_by_name=True,
        frozen=True,
        json_encoders={
            Decimal: str
        }
    )


class SavingsReport(BaseModel):
    """
    Aggregate savings report.

    ``total_current_annual`` covers every analysed recurring charge, matched
    or not. ``total_potential_savings`` and ``items`` only cover charges that
    resolved to a catalog subscription.
    """
    total_current_annual: Decimal = Field(default=Decimal("0"), alias="totalCurrentAnnual")
    total_potential_savings: Decimal = Field(default=Decimal("0"), alias="totalPotentialSavings")
    items: List[SavingsReportItem] = Field(default_factory=list)

    model_config = ConfigDict(
        populate_by_name=True,
        frozen=True,
        json_encoders={
            Decimal: str
        }
    )


class SavingsAnalysis(BaseModel):
    """Result of a full analysis run, including the intermediate stages."""
    recurring_charges: List[RecurringCharge] = Field(default_factory=list, alias="recurringCharges")
    matches: List[MatchedService] = Field(default_factory=list)
    report: SavingsReport = Field(default_factory=SavingsReport)
    external_matches_applied: bool = Field(default=False, alias="externalMatchesApplied")

    model_config = ConfigDict(
        populate_by_name=True,
        frozen=True
    )
