"""
String similarity helpers for merchant matching.

Edit distance comes from rapidfuzz; the scoring rules on top of it (length
normalization, alias containment, tie-breaks) are defined here.
"""

from typing import Iterable, NamedTuple

from rapidfuzz.distance import Levenshtein

from subscription_savings.utils.merchant_utils import normalize_merchant


class AliasMatch(NamedTuple):
    """Best alias for a merchant and its score (0.0-1.0)."""
    alias: str
    score: float


def levenshtein(a: str, b: str) -> int:
    """
    Classic edit distance over code points (insert/delete/substitute cost 1).

    Args:
        a: First string
        b: Second string

    Returns:
        Number of single-character edits turning ``a`` into ``b``
    """
    if a == b:
        return 0
    return int(Levenshtein.distance(a, b))


def similarity(a: str, b: str) -> float:
    """
    Length-normalized edit similarity.

    ``1 - distance / max(len(a), len(b), 1)``. Returns 0.0 when either string
    is empty and 1.0 for identical strings.
    """
    if not a or not b:
        return 0.0
    distance = levenshtein(a, b)
    return 1 - distance / max(len(a), len(b), 1)


def best_alias_match(merchant: str, aliases: Iterable[str]) -> AliasMatch:
    """
    Find the alias that best matches a merchant name.

    The merchant is normalized once and each alias is normalized before
    comparison. An alias contained in the merchant scores 1.0, otherwise its
    edit similarity is used; an alias that normalizes to the empty string is
    contained in every merchant. Aliases are scanned left to right and only a
    strictly higher score replaces the current best, so the first alias
    reaching the maximum wins.

    Args:
        merchant: Merchant name (raw or already normalized)
        aliases: Candidate aliases in priority order

    Returns:
        AliasMatch with the winning alias (as given) and its score.
        ``AliasMatch("", 0.0)`` when nothing scores above zero.
    """
    normalized = normalize_merchant(merchant)
    best_score = 0.0
    best_alias = ""

    for alias in aliases:
        normalized_alias = normalize_merchant(alias)
        if normalized_alias in normalized:
            score = 1.0
        else:
            score = similarity(normalized, normalized_alias)
        if score > best_score:
            best_score = score
            best_alias = alias

    return AliasMatch(alias=best_alias, score=best_score)
