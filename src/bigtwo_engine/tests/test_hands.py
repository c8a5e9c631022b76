"""
Tests for hand classification and comparison.
"""

import itertools
import random

import pytest
from bigtwo_engine.constants import (
    HAND_FLUSH, HAND_FOUR_KIND, HAND_FULL_HOUSE, HAND_PAIR, HAND_SINGLE, HAND_STRAIGHT,
    HAND_STRAIGHT_FLUSH,
)
from bigtwo_engine.errors import (
    DOES_NOT_BEAT, INVALID_HAND_SHAPE, MUST_LEAD_OPENING_CARD, SIZE_MISMATCH,
)
from bigtwo_engine.hands import classify, compare

# Sample hands (id = point * 4 + suit)
STRAIGHT = [0, 4, 8, 12, 17]          # 3♣ 4♣ 5♣ 6♣ 7♦
FLUSH = [0, 8, 16, 24, 44]            # all clubs
FULL_HOUSE = [0, 1, 2, 4, 5]          # three 3s, two 4s
FOUR_KIND = [0, 1, 2, 3, 4]           # four 3s and a 4
STRAIGHT_FLUSH = [0, 4, 8, 12, 16]    # 3♣ to 7♣


def test_classify_four_of_a_kind_uses_middle_card():
    info = classify([0, 1, 2, 3, 4])
    assert info.type == HAND_FOUR_KIND
    assert info.power == 2
    assert info.size == 5
    assert info.rank == 4


def test_classify_four_of_a_kind_with_low_kicker():
    info = classify([0, 4, 5, 6, 7])
    assert info.type == HAND_FOUR_KIND
    assert info.power == 5


def test_classify_single_and_pair():
    single = classify([17])
    assert single.type == HAND_SINGLE
    assert single.power == 17
    assert single.rank is None

    pair = classify([7, 4])
    assert pair.type == HAND_PAIR
    assert pair.power == 7


@pytest.mark.parametrize("cards", [
    [],
    [0, 4],             # different points
    [0, 1, 2],          # three cards
    [0, 1, 2, 3],       # four of a kind without kicker
    [0, 1, 2, 3, 4, 5],
    [0, 5, 10, 20, 30], # nothing
    [3, 3],             # repeated id
])
def test_classify_illegal_shapes(cards):
    assert classify(cards) is None


def test_classify_five_card_categories():
    assert classify(STRAIGHT).type == HAND_STRAIGHT
    assert classify(STRAIGHT).power == 17
    assert classify(FLUSH).type == HAND_FLUSH
    assert classify(FLUSH).power == 44
    assert classify(STRAIGHT_FLUSH).type == HAND_STRAIGHT_FLUSH
    assert classify(STRAIGHT_FLUSH).power == 16


def test_classify_full_house_power_comes_from_triple():
    low_triple = classify(FULL_HOUSE)
    assert low_triple.type == HAND_FULL_HOUSE
    assert low_triple.power == 2

    high_triple = classify([0, 1, 4, 5, 6])
    assert high_triple.type == HAND_FULL_HOUSE
    assert high_triple.power == 4


def test_run_through_ace_and_two_is_not_wrapped():
    # A, 2, 3, 4, 5 in mixed suits
    assert classify([45, 48, 0, 4, 8]) is None
    # 10, J, Q, K, A is an ordinary run
    assert classify([28, 32, 36, 40, 45]).type == HAND_STRAIGHT
    # J, Q, K, A, 2 is consecutive in table order
    assert classify([33, 36, 40, 44, 48]).type == HAND_STRAIGHT


def test_classify_is_order_independent_and_repeatable():
    rng = random.Random(7)
    allowed = {None, HAND_STRAIGHT, HAND_FLUSH, HAND_FULL_HOUSE, HAND_FOUR_KIND, HAND_STRAIGHT_FLUSH}
    for _ in range(2000):
        cards = rng.sample(range(52), 5)
        first = classify(cards)
        assert (first.type if first else None) in allowed
        assert classify(list(reversed(cards))) == first
        assert classify(cards) == first


def test_compare_higher_single_is_accepted():
    result = compare([8], [4], is_first_turn=False)
    assert result.accepted
    assert result.info.type == HAND_SINGLE


def test_compare_lower_single_is_rejected():
    result = compare([4], [8], is_first_turn=False)
    assert not result.accepted
    assert result.error_code == DOES_NOT_BEAT


def test_compare_suit_breaks_ties_within_a_point():
    assert compare([5], [4]).accepted
    assert not compare([4], [5]).accepted


def test_first_turn_requires_opening_card():
    result = compare([1], [], is_first_turn=True)
    assert not result.accepted
    assert result.error_code == MUST_LEAD_OPENING_CARD

    assert compare([0, 1], [], is_first_turn=True).accepted
    assert compare(STRAIGHT, None, is_first_turn=True).accepted


def test_free_lead_accepts_any_legal_shape():
    for cards in ([51], [50, 51], FLUSH, FOUR_KIND):
        assert compare(cards, []).accepted


def test_compare_invalid_shape():
    result = compare([0, 4], [])
    assert not result.accepted
    assert result.error_code == INVALID_HAND_SHAPE
    assert result.info is None


def test_compare_size_mismatch():
    result = compare([8, 9], [4])
    assert not result.accepted
    assert result.error_code == SIZE_MISMATCH


@pytest.mark.parametrize("stronger,weaker", [
    (FLUSH, STRAIGHT),
    (FULL_HOUSE, FLUSH),
    (FOUR_KIND, FULL_HOUSE),
    (STRAIGHT_FLUSH, FOUR_KIND),
    (STRAIGHT_FLUSH, [0, 48, 49, 50, 51]),  # four 2s still lose to the lowest straight flush
])
def test_five_card_category_order(stronger, weaker):
    assert compare(stronger, weaker).accepted
    result = compare(weaker, stronger)
    assert not result.accepted
    assert result.error_code == DOES_NOT_BEAT


def test_same_category_compares_power():
    low_straight = [0, 4, 8, 12, 17]
    high_straight = [4, 8, 12, 16, 21]
    assert compare(high_straight, low_straight).accepted
    assert not compare(low_straight, high_straight).accepted

    low_house = [0, 1, 2, 4, 5]
    high_house = [8, 9, 10, 0, 1]
    assert compare(high_house, low_house).accepted


def test_compare_is_antisymmetric_for_singles_and_pairs():
    for a, b in itertools.permutations(range(52), 2):
        assert not (compare([a], [b]).accepted and compare([b], [a]).accepted)

    pairs = [list(p) for p in itertools.combinations(range(52), 2) if p[0] // 4 == p[1] // 4]
    for a, b in itertools.permutations(pairs, 2):
        if set(a) & set(b):
            continue
        assert compare(a, b).accepted != compare(b, a).accepted


def test_compare_equal_power_is_rejected():
    result = compare([12], [12])
    assert not result.accepted
    assert result.error_code == DOES_NOT_BEAT
