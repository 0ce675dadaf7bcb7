"""Synergy ranking module for JokerTag pipeline."""

import argparse
from pathlib import Path
from typing import Optional
import logging

import pandas as pd

from ..utils.logging import setup_logging
from ..utils.data import load_joker_table, save_processed_data
from ..catalog import Catalog
from ..config import DEFAULT_CONFIG, JOKER_TABLE_PATH, SYNERGY_PAIRS_PATH, TAG_RULES_PATH
from ..models import UNIVERSAL_TAG
from ..ranker import rank_all, top_k
from ..report import (
    pairs_to_frame,
    plot_synergy_heatmap,
    plot_tag_census,
    synergy_less_cards,
    synergy_matrix,
    tag_census,
)
from ..rules import load_rule_set
from ..scorer import score_pairs
from ..tagger import Tagger


def rank_synergies(
    table_path: Path,
    output_path: Path = SYNERGY_PAIRS_PATH,
    rules_path: Path = TAG_RULES_PATH,
    k: int = None,
    workers: int = None,
    exclude_universal: bool = None,
    plots_dir: Optional[Path] = None
) -> pd.DataFrame:
    """
    Score and rank every joker pair by shared tags.

    Args:
        table_path: Path to joker CSV file
        output_path: Path to save ranked pairs CSV
        rules_path: Path to tag rules JSON file
        k: Number of top pairs to report
        workers: Worker processes for pair scoring
        exclude_universal: Leave jokers that matched no rule out of scoring
        plots_dir: Directory for census and heatmap charts (optional)

    Returns:
        Ranked pairs DataFrame
    """
    logger = logging.getLogger(__name__)

    # Use config defaults if not specified
    config = DEFAULT_CONFIG["synergy"]
    k = config["top_k"] if k is None else k
    workers = workers or config["workers"]
    if exclude_universal is None:
        exclude_universal = config["exclude_universal"]

    logger.info("Starting synergy ranking...")
    rule_set = load_rule_set(rules_path)
    df = load_joker_table(table_path)
    catalog = Catalog.from_frame(df, tagger=Tagger(rule_set))

    loners = synergy_less_cards(catalog)
    logger.info(f"{len(loners)} of {len(catalog)} jokers matched no rule")

    if exclude_universal:
        # Re-tagging the kept cards gives the same tag sets
        cards = Catalog(catalog.filter_excluding(UNIVERSAL_TAG), tagger=catalog.tagger)
        logger.info(f"Scoring {len(cards)} jokers with at least one matched rule")
    else:
        cards = catalog

    pairs = score_pairs(cards, workers=workers, show_progress=True)
    ranked = rank_all(pairs)

    logger.info(f"\nTop {k} synergies:")
    for pair in top_k(ranked, k):
        logger.info(f"  {pair.card_a} + {pair.card_b}: {pair.shared_count} shared tags")

    result = pairs_to_frame(ranked, catalog)
    logger.info(f"\nSaving ranked pairs to {output_path}")
    save_processed_data(result, output_path)

    if plots_dir is not None:
        logger.info(f"Writing charts to {plots_dir}")
        plot_tag_census(tag_census(catalog), plots_dir / "tag_census.png")
        plot_synergy_heatmap(synergy_matrix(cards, pairs), plots_dir / "synergy_heatmap.png")

    logger.info("Synergy ranking complete!")
    return result


def main():
    """Main entry point for synergy ranking."""
    parser = argparse.ArgumentParser(
        description="Rank joker pairs by number of shared tags"
    )
    parser.add_argument(
        "joker_table",
        type=Path,
        nargs="?",
        default=JOKER_TABLE_PATH,
        help="Path to joker CSV file"
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=SYNERGY_PAIRS_PATH,
        help="Path to save ranked pairs CSV"
    )
    parser.add_argument(
        "--rules",
        type=Path,
        default=TAG_RULES_PATH,
        help="Path to tag rules JSON file"
    )
    parser.add_argument(
        "--top-k",
        type=int,
        default=None,
        help="Number of top pairs to report (default: 5)"
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Worker processes for pair scoring (default: 1)"
    )
    parser.add_argument(
        "--exclude-universal",
        action="store_true",
        default=None,
        help="Leave jokers that matched no rule out of pair scoring"
    )
    parser.add_argument(
        "--plots-dir",
        type=Path,
        default=None,
        help="Directory to write tag census and heatmap charts"
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level"
    )

    args = parser.parse_args()

    setup_logging(level=args.log_level)
    logger = logging.getLogger(__name__)

    if not args.joker_table.exists():
        logger.error(f"Joker table not found: {args.joker_table}")
        return 1

    try:
        rank_synergies(
            args.joker_table,
            args.output,
            args.rules,
            args.top_k,
            args.workers,
            args.exclude_universal,
            args.plots_dir
        )
        return 0
    except Exception as e:
        logger.error(f"Synergy ranking failed: {e}", exc_info=True)
        return 1


if __name__ == "__main__":
    exit(main())
