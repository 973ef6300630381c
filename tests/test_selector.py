from __future__ import annotations

import random

import pytest

from falling_blocks.game import PieceCatalog, RandomBag


def test_each_round_of_draws_is_a_permutation():
    items = list("ABCDEFG")
    bag = RandomBag(items, seed=1234)
    draws = [bag.next() for _ in range(14)]
    assert sorted(draws[:7]) == items
    assert sorted(draws[7:]) == items


def test_rounds_of_catalog_pieces():
    catalog = PieceCatalog()
    bag = RandomBag(catalog.pieces, rng=random.Random(7))
    for _ in range(3):
        round_ = [next(bag) for _ in range(len(catalog))]
        assert {p.kind for p in round_} == {p.kind for p in catalog}


def test_same_seed_gives_same_sequence():
    a = RandomBag(range(5), seed=3)
    b = RandomBag(range(5), seed=3)
    assert [a.next() for _ in range(15)] == [b.next() for _ in range(15)]


def test_source_sequence_is_not_modified():
    items = [1, 2, 3, 4]
    bag = RandomBag(items, seed=0)
    for _ in range(6):
        bag.next()
    assert items == [1, 2, 3, 4]
    assert len(bag) == 4


def test_single_item_bag_repeats():
    bag = RandomBag(["only"])
    assert [bag.next() for _ in range(3)] == ["only"] * 3


def test_empty_bag_is_rejected():
    with pytest.raises(ValueError):
        RandomBag([])
