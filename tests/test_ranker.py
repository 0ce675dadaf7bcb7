import random

from jokertag.catalog import Catalog
from jokertag.models import SynergyPair
from jokertag.ranker import rank_all, top_k
from jokertag.scorer import score_pairs
from jokertag.tagger import Tagger


def test_abc_top_one(abc_catalog):
    assert top_k(score_pairs(abc_catalog), 1) == [SynergyPair("A", "B", 1)]


def test_rank_all_sorted_descending(suit_rules, joker_rows):
    catalog = Catalog.from_rows(joker_rows, tagger=Tagger(suit_rules))
    ranked = rank_all(score_pairs(catalog))
    counts = [p.shared_count for p in ranked]
    assert counts == sorted(counts, reverse=True)
    assert ranked[0] == SynergyPair("Lusty Joker", "Bloodstone", 2)


def test_ties_broken_by_names(suit_rules, joker_rows):
    catalog = Catalog.from_rows(joker_rows, tagger=Tagger(suit_rules))
    ones = [p for p in rank_all(score_pairs(catalog)) if p.shared_count == 1]
    assert [tuple(sorted((p.card_a, p.card_b))) for p in ones] == [
        ("Bloodstone", "Droll Joker"),
        ("Crafty Joker", "Droll Joker"),
        ("Crafty Joker", "Four Fingers"),
        ("Droll Joker", "Four Fingers"),
        ("Droll Joker", "Lusty Joker"),
    ]


def test_ranking_independent_of_input_order(suit_rules, joker_rows):
    pairs = score_pairs(Catalog.from_rows(joker_rows, tagger=Tagger(suit_rules)))
    expected = rank_all(pairs)
    for seed in range(5):
        shuffled = list(pairs)
        random.Random(seed).shuffle(shuffled)
        assert rank_all(shuffled) == expected


def test_repeated_runs_identical(suit_rules, joker_rows):
    runs = [
        rank_all(score_pairs(Catalog.from_rows(joker_rows, tagger=Tagger(suit_rules))))
        for _ in range(3)
    ]
    assert runs[0] == runs[1] == runs[2]


def test_top_k_zero_and_negative(abc_catalog):
    pairs = score_pairs(abc_catalog)
    assert top_k(pairs, 0) == []
    assert top_k(pairs, -3) == []


def test_top_k_past_pair_count_returns_all(abc_catalog):
    pairs = score_pairs(abc_catalog)
    assert top_k(pairs, len(pairs) + 100) == rank_all(pairs)


def test_empty_input():
    assert rank_all([]) == []
    assert top_k([], 5) == []


def test_rank_all_does_not_mutate_input(abc_catalog):
    pairs = score_pairs(abc_catalog)
    before = list(pairs)
    rank_all(list(reversed(pairs)))
    assert pairs == before


def test_reversed_catalog_ranks_same_pairs(suit_rules, joker_rows):
    forward = Catalog.from_rows(joker_rows, tagger=Tagger(suit_rules))
    backward = Catalog.from_rows(list(reversed(joker_rows)), tagger=Tagger(suit_rules))

    def unordered(ranked):
        return [(frozenset((p.card_a, p.card_b)), p.shared_count) for p in ranked]

    assert unordered(rank_all(score_pairs(backward))) == unordered(rank_all(score_pairs(forward)))


def test_pairs_keep_catalog_orientation(suit_rules, joker_rows):
    backward = Catalog.from_rows(list(reversed(joker_rows)), tagger=Tagger(suit_rules))
    position = {name: i for i, name in enumerate(backward.names)}
    for pair in rank_all(score_pairs(backward)):
        assert position[pair.card_a] < position[pair.card_b]
    assert rank_all(score_pairs(backward))[0] == SynergyPair("Bloodstone", "Lusty Joker", 2)
