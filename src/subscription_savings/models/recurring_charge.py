"""
Recurring Charge Models.

This module provides Pydantic models for detected recurring charges and the
frequency enum used to classify them.
"""

import logging
from decimal import Decimal
from enum import Enum
from typing import List

from pydantic import BaseModel, ConfigDict, Field

from subscription_savings.models.transaction import Transaction

logger = logging.getLogger(__name__)

# Upper bound of RecurringCharge.confidence
MAX_RECURRENCE_CONFIDENCE = 0.98


class RecurrenceFrequency(str, Enum):
    """Frequency of recurring charges."""
    MONTHLY = "monthly"       # ~30 day intervals
    QUARTERLY = "quarterly"   # ~90 day intervals
    ANNUAL = "annual"         # ~365 day intervals
    UNKNOWN = "unknown"       # No classifiable cadence


class RecurringCharge(BaseModel):
    """
    A set of same-merchant transactions that repeat on a detectable cadence.

    Created once per detection run and never mutated afterwards. The
    ``merchant`` field keeps the display form of the earliest occurrence while
    ``normalized_name`` is the grouping key.
    """
    merchant: str
    normalized_name: str = Field(alias="normalizedName")
    average_amount: Decimal = Field(alias="averageAmount")
    frequency: RecurrenceFrequency
    occurrences: List[Transaction]  # Chronological
    confidence: float = Field(ge=0.0, le=MAX_RECURRENCE_CONFIDENCE)

    model_config = ConfigDict(
        populate_by_name=True,
        frozen=True,
        json_encoders={
            Decimal: str
        },
        use_enum_values=False  # Preserve enum objects (not strings) for type safety
    )

    @property
    def occurrence_count(self) -> int:
        return len(self.occurrences)
