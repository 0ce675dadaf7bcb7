"""Card and synergy-pair data models."""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, FrozenSet, Iterable, Mapping, NamedTuple, Union
import logging

import pandas as pd

from .exceptions import InvalidCardError

logger = logging.getLogger(__name__)

# Reserved tag for cards that match no rule
UNIVERSAL_TAG = "universal"

CARD_COLUMNS = [
    "name",
    "effect",
    "cost",
    "rarity",
    "unlock_requirement",
    "type",
    "activation",
]


class JokerType(str, Enum):
    """Scoring category of a joker."""

    CHIPS = "Chips"
    ADDITIVE_MULT = "Additive Mult"
    MULTIPLICATIVE_MULT = "Multiplicative Mult"
    CHIPS_AND_ADDITIVE_MULT = "Chips and Additive Mult"
    EFFECT = "Effect"
    RETRIGGER = "Retrigger"
    ECONOMY = "Economy"

    @classmethod
    def parse(cls, value: Any) -> Union["JokerType", Any]:
        """
        Parse a raw type value into a JokerType.

        Unrecognized values are returned unchanged.

        Args:
            value: Raw value from the input table

        Returns:
            Matching JokerType member, or the raw value
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip().lower()
            for member in cls:
                if member.value.lower() == key:
                    return member
        return value


def _clean_field(value: Any) -> Any:
    """Map missing values (None, NaN) to an empty string."""
    if value is None:
        return ""
    try:
        if pd.isna(value):
            return ""
    except (TypeError, ValueError):
        # list-like values make pd.isna return an array
        pass
    return value


@dataclass(frozen=True)
class Card:
    """A joker card and, once tagged, its tag set."""

    name: str
    effect: str = ""
    cost: Any = ""
    rarity: Any = ""
    unlock_requirement: Any = ""
    type: Any = ""
    activation: Any = ""
    tags: FrozenSet[str] = field(default_factory=frozenset)

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "Card":
        """
        Build a card from an input row.

        Args:
            row: Mapping (dict or pandas Series) with the card columns

        Returns:
            Untagged Card

        Raises:
            InvalidCardError: If the row has no usable name
        """
        name = _clean_field(row.get("name"))
        if not isinstance(name, str):
            name = str(name)
        name = name.strip()
        if not name:
            raise InvalidCardError("Card row has an empty name", details={"row": dict(row)})

        effect = _clean_field(row.get("effect"))
        if not isinstance(effect, str):
            logger.debug(f"Non-string effect for '{name}' coerced to text")
            effect = str(effect)

        return cls(
            name=name,
            effect=effect,
            cost=_clean_field(row.get("cost")),
            rarity=_clean_field(row.get("rarity")),
            unlock_requirement=_clean_field(row.get("unlock_requirement")),
            type=JokerType.parse(_clean_field(row.get("type"))),
            activation=_clean_field(row.get("activation")),
        )

    def with_tags(self, tags: Iterable[str]) -> "Card":
        """Return a copy of this card carrying the given tags."""
        return replace(self, tags=frozenset(tags))

    @property
    def type_label(self) -> Any:
        """Type as written in tables."""
        return self.type.value if isinstance(self.type, JokerType) else self.type

    @property
    def is_synergy_less(self) -> bool:
        return self.tags == frozenset({UNIVERSAL_TAG})

    def to_row(self) -> Dict[str, Any]:
        """Return the descriptive columns of this card as a row mapping."""
        return {
            "name": self.name,
            "effect": self.effect,
            "cost": self.cost,
            "rarity": self.rarity,
            "unlock_requirement": self.unlock_requirement,
            "type": self.type_label,
            "activation": self.activation,
        }


class SynergyPair(NamedTuple):
    """Two distinct cards and the number of tags they share."""

    card_a: str
    card_b: str
    shared_count: int
