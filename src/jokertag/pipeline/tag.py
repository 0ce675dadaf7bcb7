"""Tagging module for JokerTag pipeline."""

import argparse
from pathlib import Path
import logging

import pandas as pd

from ..utils.logging import setup_logging
from ..utils.data import load_joker_table, save_processed_data
from ..catalog import Catalog
from ..config import JOKER_TABLE_PATH, TAG_RULES_PATH, TAGGED_TABLE_PATH
from ..report import synergy_less_cards, tag_census
from ..rules import load_rule_set
from ..tagger import Tagger


def tag_jokers(
    table_path: Path,
    output_path: Path = TAGGED_TABLE_PATH,
    rules_path: Path = TAG_RULES_PATH
) -> pd.DataFrame:
    """
    Tag every joker in a table and save the result.

    Args:
        table_path: Path to joker CSV file
        output_path: Path to save the tagged CSV
        rules_path: Path to tag rules JSON file

    Returns:
        Tagged DataFrame
    """
    logger = logging.getLogger(__name__)

    logger.info("Starting joker tagging...")
    rule_set = load_rule_set(rules_path)
    df = load_joker_table(table_path)

    catalog = Catalog.from_frame(df, tagger=Tagger(rule_set))
    tagged = catalog.to_frame()

    loners = synergy_less_cards(catalog)
    avg_tags = tagged['num_tags'].mean() if len(tagged) > 0 else 0

    logger.info(f"\nTagging Statistics:")
    logger.info(f"  Total jokers tagged: {len(tagged)}")
    logger.info(f"  Jokers with no matching rule: {len(loners)}")
    logger.info(f"  Average tags per joker: {avg_tags:.2f}")

    census = tag_census(catalog)
    logger.info("\nMost common tags:")
    for tag, count in census.head(10).items():
        logger.info(f"  {tag}: {count}")

    logger.info(f"\nSaving results to {output_path}")
    save_processed_data(tagged, output_path)

    logger.info("Tagging complete!")
    return tagged


def main():
    """Main entry point for joker tagging."""
    parser = argparse.ArgumentParser(
        description="Tag jokers by matching effect text against pattern rules"
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
        default=TAGGED_TABLE_PATH,
        help="Path to save tagged jokers CSV"
    )
    parser.add_argument(
        "--rules",
        type=Path,
        default=TAG_RULES_PATH,
        help="Path to tag rules JSON file"
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
        tag_jokers(args.joker_table, args.output, args.rules)
        return 0
    except Exception as e:
        logger.error(f"Tagging failed: {e}", exc_info=True)
        return 1


if __name__ == "__main__":
    exit(main())
