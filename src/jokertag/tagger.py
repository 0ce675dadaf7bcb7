"""Rule-based tagging of joker effect text."""

from typing import FrozenSet, Iterable, List, Optional, Union
import logging

from .models import Card, UNIVERSAL_TAG
from .rules import PatternRuleSet, default_rule_set

logger = logging.getLogger(__name__)

UNIVERSAL_TAGS: FrozenSet[str] = frozenset({UNIVERSAL_TAG})


class Tagger:
    """Applies a rule set to joker cards."""

    def __init__(self, rule_set: Optional[PatternRuleSet] = None):
        """
        Initialize tagger.

        Args:
            rule_set: Rules to apply (default: packaged joker taxonomy)
        """
        self.rule_set = rule_set if rule_set is not None else default_rule_set()

    def tag(self, card: Union[Card, str, None]) -> FrozenSet[str]:
        """
        Compute the tag set for a card or raw effect text.

        Cards matching no rule get exactly {"universal"}.

        Args:
            card: Card, effect string, or None

        Returns:
            Non-empty frozenset of tag names
        """
        text = card.effect if isinstance(card, Card) else card
        matched = self.rule_set.evaluate(text or "")
        if not matched:
            return UNIVERSAL_TAGS
        return frozenset(matched)

    def tag_card(self, card: Card) -> Card:
        """Return a copy of the card with its tag set attached."""
        tags = self.tag(card)
        logger.debug(f"Tagged '{card.name}': {sorted(tags)}")
        return card.with_tags(tags)

    def ordered_tags(self, tags: Iterable[str]) -> List[str]:
        """
        Order tag names for display.

        Tags follow rule order; anything the rule set does not know
        (including "universal") comes last, alphabetically.
        """
        tags = set(tags)
        known = [t for t in self.rule_set.tags if t in tags]
        rest = sorted(tags.difference(known))
        return known + rest
