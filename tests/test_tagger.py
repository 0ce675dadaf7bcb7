from jokertag.models import Card, UNIVERSAL_TAG
from jokertag.rules import default_rule_set
from jokertag.tagger import Tagger


def test_matched_tags_returned(flush_tagger):
    assert flush_tagger.tag("gains mult for each flush") == frozenset({"flush"})


def test_unmatched_text_gets_only_universal(flush_tagger):
    assert flush_tagger.tag("no relation") == frozenset({UNIVERSAL_TAG})


def test_empty_and_missing_effect_fall_back(flush_tagger):
    assert flush_tagger.tag("") == frozenset({UNIVERSAL_TAG})
    assert flush_tagger.tag(None) == frozenset({UNIVERSAL_TAG})
    assert flush_tagger.tag(Card(name="Blank")) == frozenset({UNIVERSAL_TAG})


def test_universal_never_mixed_with_real_tags(suit_rules):
    tagger = Tagger(suit_rules)
    for text in ["Flush", "Hearts +4 Mult", "nothing here", "", "+50 Chips"]:
        tags = tagger.tag(text)
        assert tags
        assert UNIVERSAL_TAG not in tags or tags == {UNIVERSAL_TAG}


def test_tagging_is_idempotent(suit_rules):
    tagger = Tagger(suit_rules)
    card = Card(name="Droll Joker", effect="+10 Mult if played hand contains a Flush")
    assert tagger.tag(card) == tagger.tag(card)
    assert tagger.tag_card(tagger.tag_card(card)).tags == tagger.tag_card(card).tags


def test_tag_card_returns_new_card(flush_tagger):
    card = Card(name="B", effect="flush bonus")
    tagged = flush_tagger.tag_card(card)
    assert tagged.tags == {"flush"}
    assert card.tags == frozenset()
    assert tagged.name == card.name and tagged.effect == card.effect


def test_ordered_tags_follow_rules_then_unknown(suit_rules):
    tagger = Tagger(suit_rules)
    assert tagger.ordered_tags({"chips", "flush"}) == ["flush", "chips"]
    assert tagger.ordered_tags({UNIVERSAL_TAG}) == [UNIVERSAL_TAG]


def test_default_tagger_uses_packaged_rules():
    tagger = Tagger()
    assert tagger.rule_set is default_rule_set()
    tags = tagger.tag("Played cards with even rank give +4 Mult when scored (10, 8, 6, 4, 2)")
    assert "even card synergy" in tags
    assert "additive mult" in tags
    assert "odd card synergy" not in tags
