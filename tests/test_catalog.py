import pandas as pd
import pytest

from jokertag.catalog import Catalog
from jokertag.exceptions import CardNotFoundError, DuplicateKeyError
from jokertag.models import Card, UNIVERSAL_TAG


def test_cards_tagged_in_input_order(abc_catalog):
    assert abc_catalog.names == ["A", "B", "C"]
    assert [card.tags for card in abc_catalog.all()] == [
        frozenset({"flush"}),
        frozenset({"flush"}),
        frozenset({UNIVERSAL_TAG}),
    ]


def test_every_card_has_a_tag(abc_catalog):
    assert all(card.tags for card in abc_catalog)


def test_get_by_name(abc_catalog):
    assert abc_catalog.get("B").effect == "flush bonus"
    assert "B" in abc_catalog
    assert "Z" not in abc_catalog


def test_get_unknown_name_raises(abc_catalog):
    with pytest.raises(CardNotFoundError) as exc_info:
        abc_catalog.get("Z")
    assert exc_info.value.code == "CARD_NOT_FOUND"
    # Also catchable as a plain lookup failure
    with pytest.raises(KeyError):
        abc_catalog.get("Z")


def test_duplicate_name_fails(flush_tagger):
    rows = [
        {"name": "Joker", "effect": "+4 Mult"},
        {"name": "Joker", "effect": "flush"},
    ]
    with pytest.raises(DuplicateKeyError) as exc_info:
        Catalog.from_rows(rows, tagger=flush_tagger)
    assert exc_info.value.name == "Joker"
    assert "Joker" in str(exc_info.value)


def test_filter_excluding(abc_catalog):
    assert [card.name for card in abc_catalog.filter_excluding(UNIVERSAL_TAG)] == ["A", "B"]
    assert [card.name for card in abc_catalog.filter_excluding("flush")] == ["C"]


def test_all_returns_a_copy(abc_catalog):
    cards = abc_catalog.all()
    cards.clear()
    assert len(abc_catalog) == 3


def test_empty_catalog(flush_tagger):
    catalog = Catalog([], tagger=flush_tagger)
    assert len(catalog) == 0
    assert catalog.all() == []


def test_from_frame_handles_missing_effect(flush_tagger):
    df = pd.DataFrame({
        "name": ["A", "B"],
        "effect": ["flush", None],
        "type": ["Chips", "Mystery"],
    })
    catalog = Catalog.from_frame(df, tagger=flush_tagger)
    assert catalog.get("B").effect == ""
    assert catalog.get("B").tags == {UNIVERSAL_TAG}
    assert catalog.get("B").type == "Mystery"


def test_from_frame_requires_columns(flush_tagger):
    with pytest.raises(ValueError):
        Catalog.from_frame(pd.DataFrame({"name": ["A"]}), tagger=flush_tagger)


def test_to_frame(suit_rules, joker_rows):
    from jokertag.tagger import Tagger

    catalog = Catalog.from_rows(joker_rows, tagger=Tagger(suit_rules))
    df = catalog.to_frame()
    assert list(df.columns) == [
        "name", "effect", "cost", "rarity", "unlock_requirement", "type", "activation", "tags", "num_tags",
    ]
    row = df.set_index("name").loc["Droll Joker"]
    assert row["tags"] == "flush,mult"
    assert row["num_tags"] == 2
    assert row["type"] == "Additive Mult"
    assert df.set_index("name").loc["Splash", "tags"] == UNIVERSAL_TAG


def test_catalog_accepts_cards(flush_tagger):
    catalog = Catalog([Card(name="X", effect="Flush")], tagger=flush_tagger)
    assert catalog.get("X").tags == {"flush"}
