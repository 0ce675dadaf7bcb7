"""Pytest configuration and sys.path adjustments for local runs."""

# Ensure package imports resolve when running tests without an install
import os
import sys

import pytest

ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
SRC_DIR = os.path.join(ROOT, 'src')

if SRC_DIR not in sys.path:
    sys.path.insert(0, SRC_DIR)

from jokertag.catalog import Catalog  # noqa: E402
from jokertag.rules import PatternRuleSet  # noqa: E402
from jokertag.tagger import Tagger  # noqa: E402


@pytest.fixture
def flush_rules():
    return PatternRuleSet.from_specs([("flush", r"flush")])


@pytest.fixture
def flush_tagger(flush_rules):
    return Tagger(flush_rules)


@pytest.fixture
def abc_catalog(flush_tagger):
    """Three cards: two flush jokers and one with no matching rule."""
    rows = [
        {"name": "A", "effect": "gains mult for each flush"},
        {"name": "B", "effect": "flush bonus"},
        {"name": "C", "effect": "no relation"},
    ]
    return Catalog.from_rows(rows, tagger=flush_tagger)


@pytest.fixture
def suit_rules():
    return PatternRuleSet.from_specs([
        ("flush", r"flush"),
        ("hearts", r"\bhearts?\b"),
        ("mult", r"\bmult\b"),
        ("chips", r"\bchips\b"),
    ])


@pytest.fixture
def joker_rows():
    return [
        {"name": "Lusty Joker", "effect": "Played cards with Heart suit give +3 Mult", "type": "Additive Mult"},
        {"name": "Droll Joker", "effect": "+10 Mult if played hand contains a Flush", "type": "Additive Mult"},
        {"name": "Crafty Joker", "effect": "+80 Chips if played hand contains a Flush", "type": "Chips"},
        {"name": "Bloodstone", "effect": "Played Hearts have a chance to give X1.5 Mult", "type": "Multiplicative Mult"},
        {"name": "Splash", "effect": "Every played card counts in scoring", "type": "Effect"},
        {"name": "Four Fingers", "effect": "All Flushes and Straights can be made with 4 cards", "type": "Effect"},
    ]


@pytest.fixture
def joker_csv(tmp_path, joker_rows):
    import pandas as pd

    path = tmp_path / "jokers.csv"
    pd.DataFrame(joker_rows).to_csv(path, index=False)
    return path
