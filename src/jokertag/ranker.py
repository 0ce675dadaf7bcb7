"""Ordering of scored synergy pairs."""

from typing import Iterable, List, Tuple

from .models import SynergyPair


def _sort_key(pair: SynergyPair) -> Tuple[int, str, str]:
    # Ties fall back to the pair's two names in lexicographic order
    first, second = sorted((pair.card_a, pair.card_b))
    return (-pair.shared_count, first, second)


def rank_all(pairs: Iterable[SynergyPair]) -> List[SynergyPair]:
    """
    Sort pairs by descending shared tag count.

    Pairs with equal counts are ordered by their card names, so the order of
    the unordered pairs does not depend on input order. Each pair keeps the
    card_a, card_b orientation it was scored with (catalog order); compare
    pairs by name set when catalogs list the same cards in different orders.

    Args:
        pairs: Scored pairs

    Returns:
        New sorted list
    """
    return sorted(pairs, key=_sort_key)


def top_k(pairs: Iterable[SynergyPair], k: int) -> List[SynergyPair]:
    """
    Return the k highest-ranked pairs.

    k <= 0 gives an empty list; k past the pair count gives every pair.
    """
    if k <= 0:
        return []
    return rank_all(pairs)[:k]
