"""
Pattern rules that map joker effect text to synergy tags.

A rule set is an ordered list of (tag, pattern) entries. Every pattern is
compiled with re.IGNORECASE. A compound rule adds a second ``requires``
pattern that must also be found in the text.

Usage:
    from jokertag.rules import PatternRuleSet

    rules = PatternRuleSet.from_specs([
        ("flush", r"flush"),
        {"tag": "even card synergy",
         "pattern": r"played cards|each card",
         "requires": bounded_token_pattern(["2", "4", "6", "8", "10"])},
    ])
    rules.evaluate("+4 Mult if played hand contains a Flush")  # {"flush"}
"""

import json
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable, Iterator, List, Mapping, Optional, Pattern, Sequence, Set, Tuple, Union
import logging

from .config import TAG_RULES_PATH
from .exceptions import InvalidRuleError
from .models import UNIVERSAL_TAG

logger = logging.getLogger(__name__)

RuleSpec = Union[Mapping[str, Any], Sequence[str]]

EVEN_VALUE_TOKENS: List[str] = ["2", "4", "6", "8", "10"]
ODD_VALUE_TOKENS: List[str] = ["1", "3", "5", "7", "9"]

# Phrases that show a joker reacts to individual card values
CARD_VALUE_CONTEXT: List[str] = [
    "each played",
    "each card",
    "played cards",
    "cards of value",
    "card with value",
]


def bounded_token_pattern(tokens: Iterable[str]) -> str:
    """
    Build a pattern matching any token as a whole word.

    "4" matches "value 4" and "(10, 4, 2)" but not "42" or "+40".

    Args:
        tokens: Literal tokens to alternate

    Returns:
        Regex source string
    """
    # Longest first so "10" is tried before "1"
    ordered = sorted({str(t) for t in tokens}, key=lambda t: (-len(t), t))
    return r"\b(?:" + "|".join(re.escape(t) for t in ordered) + r")\b"


def phrase_pattern(phrases: Iterable[str]) -> str:
    """Build a pattern matching any of the literal phrases."""
    return "|".join(re.escape(p) for p in phrases)


def _compile(source: Any, tag: str, field_name: str) -> Pattern:
    if not isinstance(source, str) or not source:
        raise InvalidRuleError(
            f"Rule '{tag}' has a missing or non-string {field_name}",
            details={"tag": tag, field_name: source},
        )
    try:
        return re.compile(source, re.IGNORECASE)
    except re.error as e:
        raise InvalidRuleError(
            f"Rule '{tag}' has invalid {field_name} syntax: {e}",
            details={"tag": tag, field_name: source},
        ) from e


@dataclass(frozen=True)
class TagRule:
    """A named matcher over effect text."""

    tag: str
    pattern: Pattern
    requires: Optional[Pattern] = None

    def matches(self, text: str) -> bool:
        """Return True when the context pattern and, if set, the value pattern are both found."""
        if not self.pattern.search(text):
            return False
        if self.requires is not None and not self.requires.search(text):
            return False
        return True

    @classmethod
    def from_spec(cls, entry: RuleSpec) -> "TagRule":
        """
        Build a rule from a configuration entry.

        Args:
            entry: Mapping with "tag", "pattern" and optional "requires",
                or a (tag, pattern) / (tag, pattern, requires) tuple

        Returns:
            Compiled TagRule

        Raises:
            InvalidRuleError: If the entry is malformed or a pattern does not compile
        """
        if isinstance(entry, Mapping):
            tag = entry.get("tag")
            pattern = entry.get("pattern")
            requires = entry.get("requires")
        elif isinstance(entry, (list, tuple)) and len(entry) in (2, 3):
            tag, pattern = entry[0], entry[1]
            requires = entry[2] if len(entry) == 3 else None
        else:
            raise InvalidRuleError(f"Unrecognized rule entry: {entry!r}")

        if not isinstance(tag, str) or not tag.strip():
            raise InvalidRuleError("Rule entry has no tag name", details={"entry": entry})
        tag = tag.strip()
        if "," in tag:
            raise InvalidRuleError(
                f"Tag name '{tag}' contains a comma, which separates tags in exported tables",
                details={"entry": entry},
            )
        if tag == UNIVERSAL_TAG:
            raise InvalidRuleError(
                f"'{UNIVERSAL_TAG}' is reserved for cards that match no rule",
                details={"entry": entry},
            )

        return cls(
            tag=tag,
            pattern=_compile(pattern, tag, "pattern"),
            requires=_compile(requires, tag, "requires") if requires is not None else None,
        )

    def to_spec(self) -> dict:
        spec = {"tag": self.tag, "pattern": self.pattern.pattern}
        if self.requires is not None:
            spec["requires"] = self.requires.pattern
        return spec


def card_value_rule(tag: str, tokens: Iterable[str], context: Iterable[str] = CARD_VALUE_CONTEXT) -> TagRule:
    """
    Build a compound rule for jokers keyed on card values.

    The rule fires only when a context phrase such as "played cards" is present
    and one of the value tokens appears as a whole word.

    Args:
        tag: Tag name for the rule
        tokens: Card values, e.g. EVEN_VALUE_TOKENS
        context: Context phrases

    Returns:
        Compiled TagRule
    """
    return TagRule.from_spec({
        "tag": tag,
        "pattern": phrase_pattern(context),
        "requires": bounded_token_pattern(tokens),
    })


class PatternRuleSet:
    """Ordered, read-only collection of tag rules."""

    def __init__(self, rules: Iterable[TagRule]):
        rules = tuple(rules)
        seen: Set[str] = set()
        for rule in rules:
            if not isinstance(rule, TagRule):
                raise InvalidRuleError(f"Expected TagRule, got {type(rule).__name__}")
            if rule.tag in seen:
                raise InvalidRuleError(f"Duplicate rule for tag '{rule.tag}'", details={"tag": rule.tag})
            seen.add(rule.tag)
        self._rules: Tuple[TagRule, ...] = rules

    @classmethod
    def from_specs(cls, entries: Iterable[RuleSpec]) -> "PatternRuleSet":
        """Compile a rule set from configuration entries."""
        return cls(TagRule.from_spec(entry) for entry in entries)

    @property
    def rules(self) -> Tuple[TagRule, ...]:
        return self._rules

    @property
    def tags(self) -> List[str]:
        """Tag names in rule order."""
        return [rule.tag for rule in self._rules]

    def __len__(self) -> int:
        return len(self._rules)

    def __iter__(self) -> Iterator[TagRule]:
        return iter(self._rules)

    def __repr__(self) -> str:
        return f"PatternRuleSet({len(self._rules)} rules)"

    def matching_tags(self, text: Optional[str]) -> List[str]:
        """
        Return the tags of every rule that fires, in rule order.

        Args:
            text: Effect text (None is treated as empty)

        Returns:
            List of matched tag names
        """
        text = text or ""
        return [rule.tag for rule in self._rules if rule.matches(text)]

    def evaluate(self, text: Optional[str]) -> Set[str]:
        """Return the set of tags whose rules fire on the text."""
        return set(self.matching_tags(text))

    def to_specs(self) -> List[dict]:
        return [rule.to_spec() for rule in self._rules]


def load_rule_set(rules_path: Path) -> PatternRuleSet:
    """
    Load and compile a rule set from a JSON file.

    Args:
        rules_path: Path to a JSON list of rule entries

    Returns:
        Compiled PatternRuleSet
    """
    try:
        with open(rules_path, 'r', encoding='utf-8') as f:
            entries = json.load(f)
    except FileNotFoundError:
        logger.error(f"Tag rules file not found: {rules_path}")
        raise
    except json.JSONDecodeError as e:
        logger.error(f"Invalid JSON in tag rules file: {e}")
        raise

    if not isinstance(entries, list):
        raise InvalidRuleError(
            f"Expected a list of rules in {rules_path}, got {type(entries).__name__}"
        )

    rule_set = PatternRuleSet.from_specs(entries)
    logger.info(f"Loaded {len(rule_set)} tag rules from {rules_path}")
    return rule_set


_default_rule_set: Optional[PatternRuleSet] = None


def default_rule_set() -> PatternRuleSet:
    """Return the packaged joker taxonomy, compiled once per process."""
    global _default_rule_set
    if _default_rule_set is None:
        _default_rule_set = load_rule_set(TAG_RULES_PATH)
    return _default_rule_set
