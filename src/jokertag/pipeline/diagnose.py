"""Rule-set diagnosis module for JokerTag pipeline."""

import argparse
from pathlib import Path
import logging

from ..utils.logging import setup_logging
from ..utils.data import load_joker_table
from ..catalog import Catalog
from ..config import JOKER_TABLE_PATH, TAG_RULES_PATH
from ..report import synergy_less_cards, tag_census
from ..rules import load_rule_set
from ..tagger import Tagger

def diagnose_rules(
    table_path: Path,
    rules_path: Path = TAG_RULES_PATH
) -> bool:
    """
    Check how a rule set covers a joker table.

    Reports the tag census, rules that never fire and jokers left with only
    the universal tag.

    Args:
        table_path: Path to joker CSV file
        rules_path: Path to tag rules JSON file

    Returns:
        True if every rule fires on at least one joker, False otherwise
    """
    logger = logging.getLogger(__name__)

    logger.info("Loading rules and joker table...")
    try:
        rule_set = load_rule_set(rules_path)
        df = load_joker_table(table_path)
        catalog = Catalog.from_frame(df, tagger=Tagger(rule_set))
    except Exception as e:
        logger.error(f"Failed to load data: {e}")
        return False

    census = tag_census(catalog)
    logger.info(f"Tag census over {len(catalog)} jokers:")
    for tag, count in census.items():
        logger.info(f"  - '{tag}': {count}")

    unused = [tag for tag in rule_set.tags if tag not in census.index]

    loners = synergy_less_cards(catalog)
    if loners:
        logger.info(f"{len(loners)} jokers matched no rule:")
        for card in loners:
            logger.info(f"  - {card.name}")

    if not unused:
        logger.info("✅ Every rule matched at least one joker")
        return True

    logger.warning(f"⚠️ {len(unused)} rules never matched")
    for tag in unused:
        logger.warning(f"  - '{tag}'")
    return False

def main():
    """Main entry point for rule-set diagnosis."""
    parser = argparse.ArgumentParser(
        description="Diagnose tag rule coverage over a joker table"
    )
    parser.add_argument(
        "joker_table",
        type=Path,
        nargs="?",
        default=JOKER_TABLE_PATH,
        help="Path to joker CSV file"
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

    if not args.rules.exists():
        logger.error(f"Tag rules file not found: {args.rules}")
        return 1

    success = diagnose_rules(args.joker_table, args.rules)

    return 0 if success else 1

if __name__ == "__main__":
    exit(main())
