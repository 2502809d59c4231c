"""
Subscription catalog models.

The catalog is static reference data: a mapping from category key to a
category holding known subscription services, their aliases as they show up
on statements, and the ways a user can pay less for them.
"""

import logging
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, Iterator, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

from subscription_savings.models.money import to_decimal

logger = logging.getLogger(__name__)


class EffortLevel(str, Enum):
    """How much work a savings option asks of the user."""
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


class SavingsOption(BaseModel):
    """A cheaper alternative for a subscription (downgrade, switch, negotiate...)."""
    method: str
    new_price: Decimal
    savings_monthly: Decimal
    savings_annual: Decimal
    effort: EffortLevel
    link: Optional[str] = None
    affiliate: bool = False
    affiliate_id: Optional[str] = None
    instructions: Optional[str] = None
    negotiation_script: Optional[str] = None
    note: Optional[str] = None

    model_config = ConfigDict(
        frozen=True,
        json_encoders={
            Decimal: str
        },
        use_enum_values=False
    )

    @field_validator('new_price', 'savings_monthly', 'savings_annual', mode='before')
    @classmethod
    def ensure_decimal(cls, v: Any) -> Decimal:
        return to_decimal(v)


class SubscriptionItem(BaseModel):
    """
    A known subscription service.

    ``aliases`` is ordered: when two aliases score the same against a merchant
    the one listed first wins.
    """
    name: str
    aliases: List[str] = Field(default_factory=list)
    typical_price: Decimal
    tier: str = ""
    savings_options: List[SavingsOption] = Field(default_factory=list)

    model_config = ConfigDict(
        frozen=True,
        json_encoders={
            Decimal: str
        }
    )

    @field_validator('typical_price', mode='before')
    @classmethod
    def ensure_decimal(cls, v: Any) -> Decimal:
        return to_decimal(v)


class SubscriptionCategory(BaseModel):
    """A group of related services (streaming, music, phone...)."""
    label: str
    icon: str = ""
    items: List[SubscriptionItem] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)


class CatalogMeta(BaseModel):
    """Catalog document header."""
    last_updated: Optional[str] = Field(default=None, alias="lastUpdated")
    version: Optional[str] = None
    total_services: Optional[int] = Field(default=None, alias="totalServices", ge=0)
    categories: List[str] = Field(default_factory=list)

    model_config = ConfigDict(
        populate_by_name=True,
        frozen=True
    )


class SubscriptionCatalog(BaseModel):
    """
    Immutable snapshot of the subscription catalog indexed by category key.

    Category insertion order defines the scan order used by matching, so it is
    preserved exactly as loaded.
    """
    meta: Optional[CatalogMeta] = None
    categories: Dict[str, SubscriptionCategory] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True)

    def iter_items(self) -> Iterator[Tuple[str, SubscriptionCategory, SubscriptionItem]]:
        """
        Flatten the catalog into ``(category_key, category, item)`` triples.

        Yields categories in insertion order and items in list order.
        """
        for category_key, category in self.categories.items():
            for item in category.items:
                yield category_key, category, item

    def find_by_name(self, name: str) -> Optional[Tuple[SubscriptionItem, SubscriptionCategory]]:
        """
        Look up a service by exact, case-insensitive name.

        Args:
            name: Service name as suggested by a caller

        Returns:
            Tuple of (item, category) for the first match in scan order, or None
        """
        target = name.strip().lower()
        for _, category, item in self.iter_items():
            if item.name.lower() == target:
                return item, category
        return None

    @property
    def service_count(self) -> int:
        return sum(len(category.items) for category in self.categories.values())

    @property
    def is_empty(self) -> bool:
        return self.service_count == 0
