"""In-memory joker catalog with tag sets attached."""

from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional
import logging

import pandas as pd

from .exceptions import CardNotFoundError, DuplicateKeyError
from .models import CARD_COLUMNS, Card
from .tagger import Tagger
from .utils.data import validate_card_data

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ["name", "effect"]


class Catalog:
    """Tagged joker cards, in input order, indexed by name."""

    def __init__(self, cards: Iterable[Card], tagger: Optional[Tagger] = None):
        """
        Tag every card and index the result.

        Args:
            cards: Cards in input order
            tagger: Tagger to apply (default: packaged joker taxonomy)

        Raises:
            DuplicateKeyError: If two cards share a name
        """
        self.tagger = tagger if tagger is not None else Tagger()
        self._cards: List[Card] = []
        self._index: Dict[str, int] = {}

        for card in cards:
            if card.name in self._index:
                raise DuplicateKeyError(
                    card.name,
                    details={"first_position": self._index[card.name], "second_position": len(self._cards)},
                )
            self._index[card.name] = len(self._cards)
            self._cards.append(self.tagger.tag_card(card))

        logger.info(f"Built catalog with {len(self._cards)} tagged cards")

    @classmethod
    def from_rows(cls, rows: Iterable[Mapping[str, Any]], tagger: Optional[Tagger] = None) -> "Catalog":
        """Build a catalog from row mappings."""
        return cls((Card.from_row(row) for row in rows), tagger=tagger)

    @classmethod
    def from_frame(cls, df: pd.DataFrame, tagger: Optional[Tagger] = None) -> "Catalog":
        """
        Build a catalog from a joker table.

        Args:
            df: DataFrame with at least "name" and "effect" columns
            tagger: Tagger to apply

        Returns:
            Tagged Catalog
        """
        validate_card_data(df, REQUIRED_COLUMNS)
        return cls.from_rows((row for _, row in df.iterrows()), tagger=tagger)

    def all(self) -> List[Card]:
        """Return tagged cards in input order."""
        return list(self._cards)

    def get(self, name: str) -> Card:
        """
        Look up a card by name.

        Raises:
            CardNotFoundError: If no card has that name
        """
        try:
            return self._cards[self._index[name]]
        except KeyError:
            raise CardNotFoundError(name) from None

    def filter_excluding(self, tag: str) -> List[Card]:
        """Return cards whose tag set does not contain the tag, in input order."""
        return [card for card in self._cards if tag not in card.tags]

    @property
    def names(self) -> List[str]:
        return [card.name for card in self._cards]

    def __len__(self) -> int:
        return len(self._cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self._cards)

    def __contains__(self, name: object) -> bool:
        return name in self._index

    def to_frame(self) -> pd.DataFrame:
        """
        Export the catalog as a table.

        Returns:
            DataFrame with the card columns plus "tags" (comma-joined, rule
            order) and "num_tags"
        """
        records = []
        for card in self._cards:
            row = card.to_row()
            row["tags"] = ",".join(self.tagger.ordered_tags(card.tags))
            row["num_tags"] = len(card.tags)
            records.append(row)
        columns = CARD_COLUMNS + ["tags", "num_tags"]
        return pd.DataFrame.from_records(records, columns=columns)
