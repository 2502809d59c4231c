"""
Monetary value helpers shared by the models.
"""

from decimal import Decimal
from typing import Any


def to_decimal(v: Any) -> Decimal:
    """
    Coerce a monetary value to Decimal.

    Floats go through ``str`` so that 15.49 becomes Decimal("15.49") rather
    than its binary expansion.

    Raises:
        ValueError: If the value cannot be represented as a Decimal
    """
    if isinstance(v, Decimal):
        return v
    try:
        return Decimal(str(v))
    except Exception as e:
        raise ValueError(f"Invalid monetary value: {v}. Could not convert to Decimal.") from e
