"""
Transaction model consumed by the savings analysis pipeline.

Transactions are produced by the statement parsers (CSV/PDF) and arrive here
already normalized: amounts are stored as positive magnitudes regardless of
whether the source row was a debit or a credit.
"""

import logging
import datetime
from decimal import Decimal
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from subscription_savings.models.money import to_decimal

logger = logging.getLogger(__name__)


class Transaction(BaseModel):
    """
    A single dated charge as extracted from a bank or card statement.
    """
    date: datetime.date
    merchant: str = Field(max_length=1000)
    amount: Decimal
    category: Optional[str] = Field(default=None, max_length=100)
    raw: str = ""  # Original source record, kept for display

    model_config = ConfigDict(
        frozen=True,
        json_encoders={
            Decimal: str
        }
    )

    @field_validator('amount', mode='before')
    @classmethod
    def ensure_amount_is_decimal(cls, v: Any) -> Decimal:
        return to_decimal(v)

    def __str__(self) -> str:
        return f"{self.date.isoformat()} {self.merchant} {self.amount}"
