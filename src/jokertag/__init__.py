"""
JokerTag: rule-based joker tagging and synergy ranking

Tags each joker by matching its effect text against a configurable list of
pattern rules, then ranks every pair of jokers by how many tags they share.
"""

__version__ = "1.0.0"

from .exceptions import CardNotFoundError, DuplicateKeyError, InvalidCardError, InvalidRuleError, JokerTagError
from .models import UNIVERSAL_TAG, Card, JokerType, SynergyPair
from .rules import PatternRuleSet, TagRule, default_rule_set, load_rule_set
from .tagger import Tagger
from .catalog import Catalog
from .scorer import score_pairs
from .ranker import rank_all, top_k
