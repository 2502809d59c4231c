"""
Merchant name utility functions.

Statement descriptors for the same merchant differ in case, punctuation and
spacing ("Netflix.com", "NETFLIX COM", "netflix*com "). These helpers reduce
them to a canonical form that can be used as a grouping key and compared
against catalog aliases.
"""

import re

_NON_ALPHANUMERIC = re.compile(r"[^A-Z0-9 ]+")
_WHITESPACE = re.compile(r"\s+")


def normalize_merchant(name: str) -> str:
    """
    Canonicalize a merchant name for comparison.

    Uppercases the name, replaces every run of characters outside
    ``[A-Z0-9 ]`` with a single space, collapses whitespace and trims.
    The function is total and idempotent.

    Args:
        name: Raw merchant string

    Returns:
        Canonical merchant key

    Examples:
        >>> normalize_merchant("Netflix.com")
        'NETFLIX COM'

        >>> normalize_merchant("  AT&T   Mobility ")
        'AT T MOBILITY'
    """
    if not name:
        return ""
    upper = name.upper()
    cleaned = _NON_ALPHANUMERIC.sub(" ", upper)
    return _WHITESPACE.sub(" ", cleaned).strip()
