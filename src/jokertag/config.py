"""Configuration management for JokerTag pipeline."""

from pathlib import Path

# Project root directory
PROJECT_ROOT = Path(__file__).parent.parent.parent
DATA_DIR = PROJECT_ROOT / "data"
OUTPUT_DIR = PROJECT_ROOT / "output"

# Packaged default taxonomy
PACKAGE_DATA_DIR = Path(__file__).parent / "data"
TAG_RULES_PATH = PACKAGE_DATA_DIR / "tag_rules.json"

# Data file paths
JOKER_TABLE_PATH = DATA_DIR / "jokers.csv"
TAGGED_TABLE_PATH = OUTPUT_DIR / "jokers_tagged.csv"
SYNERGY_PAIRS_PATH = OUTPUT_DIR / "synergy_pairs.csv"

DEFAULT_CONFIG = {
    "synergy": {
        "top_k": 5,
        "workers": 1,
        "exclude_universal": False,
    },
    "plots": {
        "figsize": (12, 8),
        "dpi": 150,
        "top_tags": 25,
        "heatmap_max_cards": 40,
    },
}
