"""Report tables and charts built from a tagged catalog and its scored pairs."""

from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Union
import logging

import numpy as np
import pandas as pd
from sklearn.preprocessing import MultiLabelBinarizer

from .catalog import Catalog
from .config import DEFAULT_CONFIG
from .models import Card, SynergyPair
from .rules import PatternRuleSet
from .scorer import shared_tags

logger = logging.getLogger(__name__)

PAIR_COLUMNS = ["card_a", "card_b", "shared_count"]

CardsLike = Union[Catalog, Iterable[Card]]


def _as_list(cards: CardsLike) -> List[Card]:
    return cards.all() if isinstance(cards, Catalog) else list(cards)


def tag_matrix(cards: CardsLike, rule_set: Optional[PatternRuleSet] = None) -> pd.DataFrame:
    """
    Build the card by tag indicator matrix.

    Args:
        cards: Catalog or tagged cards
        rule_set: When given, columns follow rule order (only tags that occur)

    Returns:
        DataFrame of 0/1 values indexed by card name
    """
    card_list = _as_list(cards)
    if rule_set is None and isinstance(cards, Catalog):
        rule_set = cards.tagger.rule_set

    present = set().union(*(card.tags for card in card_list)) if card_list else set()
    if rule_set is not None:
        classes = [t for t in rule_set.tags if t in present]
        classes += sorted(present.difference(classes))
    else:
        classes = sorted(present)

    if not card_list:
        return pd.DataFrame(np.zeros((0, 0), dtype=int))

    mlb = MultiLabelBinarizer(classes=classes)
    encoded = mlb.fit_transform([sorted(card.tags) for card in card_list])
    return pd.DataFrame(encoded, columns=list(mlb.classes_), index=[card.name for card in card_list])


def tag_census(cards: CardsLike) -> pd.Series:
    """
    Count how many cards carry each tag.

    Returns:
        Series of tag -> count, descending, ties by tag name
    """
    matrix = tag_matrix(cards)
    counts = matrix.sum(axis=0).astype(int)
    counts = counts.sort_index().sort_values(ascending=False, kind="mergesort")
    counts.name = "count"
    counts.index.name = "tag"
    return counts


def synergy_less_cards(cards: CardsLike) -> List[Card]:
    """Return cards whose only tag is the universal fallback."""
    return [card for card in _as_list(cards) if card.is_synergy_less]


def pairs_to_frame(pairs: Sequence[SynergyPair], catalog: Optional[Catalog] = None) -> pd.DataFrame:
    """
    Convert scored pairs to a table, keeping their order.

    Args:
        pairs: Scored (usually ranked) pairs
        catalog: When given, a "shared_tags" column is added

    Returns:
        DataFrame with card_a, card_b, shared_count[, shared_tags]
    """
    df = pd.DataFrame.from_records(list(pairs), columns=PAIR_COLUMNS)
    df["shared_count"] = df["shared_count"].astype(int)
    if catalog is not None:
        df["shared_tags"] = [
            ",".join(catalog.tagger.ordered_tags(shared_tags(catalog.get(a), catalog.get(b))))
            for a, b in zip(df["card_a"], df["card_b"])
        ]
    return df


def synergy_matrix(cards: CardsLike, pairs: Iterable[SynergyPair]) -> pd.DataFrame:
    """
    Arrange pair scores as a symmetric card by card matrix.

    Args:
        cards: Catalog or tagged cards (fixes row and column order)
        pairs: Scored pairs over those cards

    Returns:
        DataFrame of shared counts with a zero diagonal
    """
    names = [card.name for card in _as_list(cards)]
    position = {name: i for i, name in enumerate(names)}
    values = np.zeros((len(names), len(names)), dtype=int)
    for pair in pairs:
        i, j = position[pair.card_a], position[pair.card_b]
        values[i, j] = values[j, i] = pair.shared_count
    return pd.DataFrame(values, index=names, columns=names)


def plot_tag_census(census: pd.Series, output_path: Path, top_n: Optional[int] = None) -> Optional[Path]:
    """
    Save a horizontal bar chart of the most common tags.

    Args:
        census: Output of tag_census
        output_path: PNG path to write
        top_n: Number of tags to show (default from config)

    Returns:
        The written path, or None when there is nothing to draw
    """
    if census.empty:
        logger.warning(f"No tags to chart, skipping {output_path}")
        return None

    import matplotlib
    matplotlib.use("Agg")
    import matplotlib.pyplot as plt
    import seaborn as sns

    plot_config = DEFAULT_CONFIG["plots"]
    top_n = top_n or plot_config["top_tags"]
    data = census.head(top_n).reset_index()
    data.columns = ["tag", "count"]

    fig, ax = plt.subplots(figsize=plot_config["figsize"])
    sns.barplot(data=data, x="count", y="tag", ax=ax, color="steelblue")
    ax.set_title("Jokers per tag")
    ax.set_xlabel("Number of jokers")
    ax.set_ylabel("")
    fig.tight_layout()

    output_path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(output_path, dpi=plot_config["dpi"])
    plt.close(fig)
    logger.info(f"Saved tag census chart to {output_path}")
    return output_path


def plot_synergy_heatmap(matrix: pd.DataFrame, output_path: Path, max_cards: Optional[int] = None) -> Optional[Path]:
    """
    Save a heatmap of shared tag counts.

    Only the cards with the highest total overlap are drawn so the chart stays
    readable.

    Args:
        matrix: Output of synergy_matrix
        output_path: PNG path to write
        max_cards: Number of cards to keep (default from config)

    Returns:
        The written path, or None when there is nothing to draw
    """
    if matrix.empty:
        logger.warning(f"No cards to chart, skipping {output_path}")
        return None

    import matplotlib
    matplotlib.use("Agg")
    import matplotlib.pyplot as plt
    import seaborn as sns

    plot_config = DEFAULT_CONFIG["plots"]
    max_cards = max_cards or plot_config["heatmap_max_cards"]
    if len(matrix) > max_cards:
        totals = matrix.sum(axis=1).sort_index().sort_values(ascending=False, kind="mergesort")
        keep = totals.index[:max_cards]
        matrix = matrix.loc[keep, keep]

    fig, ax = plt.subplots(figsize=plot_config["figsize"])
    sns.heatmap(matrix, ax=ax, cmap="viridis", square=True, cbar_kws={"label": "Shared tags"})
    ax.set_title("Shared tags between jokers")
    fig.tight_layout()

    output_path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(output_path, dpi=plot_config["dpi"])
    plt.close(fig)
    logger.info(f"Saved synergy heatmap to {output_path}")
    return output_path
