"""
Pairwise synergy scoring.

Every unordered pair of distinct cards is scored by the number of tags the two
cards share. Pairs are enumerated with i over 0..n-2 and j over i+1..n-1 in
catalog order, so each pair appears once with card_a ahead of card_b.

For larger catalogs the outer index range can be split into contiguous blocks
and scored in a process pool. Blocks are concatenated in block order, so the
result is identical to the serial pass.
"""

from concurrent.futures import ProcessPoolExecutor
from typing import FrozenSet, Iterable, List, Sequence, Tuple, Union
import logging

from tqdm import tqdm

from .catalog import Catalog
from .exceptions import DuplicateKeyError, InvalidCardError
from .models import Card, SynergyPair

logger = logging.getLogger(__name__)


def _check_cards(cards: Sequence[Card]) -> None:
    """
    Reject card lists that a Catalog would not hold.

    Raises:
        DuplicateKeyError: If two cards share a name
        InvalidCardError: If a card has not been tagged
    """
    seen = set()
    for card in cards:
        if card.name in seen:
            raise DuplicateKeyError(card.name)
        seen.add(card.name)
        if not card.tags:
            raise InvalidCardError(f"Card '{card.name}' has not been tagged", details={"name": card.name})


def shared_tags(card_a: Card, card_b: Card) -> FrozenSet[str]:
    """Return the tags two cards have in common."""
    return card_a.tags & card_b.tags


def _score_block(
    names: Sequence[str],
    tag_sets: Sequence[FrozenSet[str]],
    start: int,
    stop: int
) -> List[SynergyPair]:
    """Score all pairs whose first index lies in [start, stop)."""
    n = len(names)
    pairs = []
    for i in range(start, stop):
        tags_i = tag_sets[i]
        for j in range(i + 1, n):
            pairs.append(SynergyPair(names[i], names[j], len(tags_i & tag_sets[j])))
    return pairs


def _partition_outer_range(n: int, workers: int) -> List[Tuple[int, int]]:
    """
    Split outer indices 0..n-2 into contiguous blocks of similar pair counts.

    Row i contributes n-1-i pairs, so early blocks are narrower than late ones.
    """
    outer = n - 1
    if outer <= 0:
        return []
    total = n * (n - 1) // 2
    target = total / workers
    blocks = []
    start = 0
    acc = 0
    for i in range(outer):
        acc += n - 1 - i
        if acc >= target and len(blocks) < workers - 1:
            blocks.append((start, i + 1))
            start = i + 1
            acc = 0
    if start < outer:
        blocks.append((start, outer))
    return blocks


def score_pairs(
    cards: Union[Catalog, Iterable[Card]],
    workers: int = 1,
    show_progress: bool = False
) -> List[SynergyPair]:
    """
    Score every unordered pair of cards by shared tag count.

    Args:
        cards: Catalog or sequence of tagged cards
        workers: Number of worker processes (1 scores in-process)
        show_progress: Show a progress bar over the outer loop

    Returns:
        List of n*(n-1)/2 SynergyPair objects in enumeration order

    Raises:
        DuplicateKeyError: If a card sequence repeats a name
        InvalidCardError: If a card in the sequence has no tags
    """
    if isinstance(cards, Catalog):
        card_list = cards.all()
    else:
        card_list = list(cards)
        _check_cards(card_list)
    names = [card.name for card in card_list]
    tag_sets = [card.tags for card in card_list]
    n = len(card_list)

    if n < 2:
        logger.info(f"Nothing to score for {n} card(s)")
        return []

    expected = n * (n - 1) // 2
    logger.info(f"Scoring {expected} pairs across {n} cards")

    if workers <= 1:
        pairs: List[SynergyPair] = []
        for i in tqdm(range(n - 1), desc="Scoring pairs", disable=not show_progress):
            pairs.extend(_score_block(names, tag_sets, i, i + 1))
    else:
        blocks = _partition_outer_range(n, workers)
        logger.info(f"Scoring in {len(blocks)} blocks with {workers} workers")
        pairs = []
        with ProcessPoolExecutor(max_workers=workers) as executor:
            futures = [
                executor.submit(_score_block, names, tag_sets, start, stop)
                for start, stop in blocks
            ]
            # Collect in submission order so the merged list matches the serial pass
            for future in tqdm(futures, desc="Scoring blocks", disable=not show_progress):
                pairs.extend(future.result())

    if len(pairs) != expected:
        logger.warning(f"Scored {len(pairs)} pairs, expected {expected}")

    return pairs
