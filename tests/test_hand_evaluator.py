from collections import Counter

import pytest
from hypothesis import given, strategies as st

from barlatro.engine.deck import create_standard_deck
from barlatro.engine.hand_evaluator import (
    HandEvaluator, HandRank, compare_hands, evaluate, find_straight,
)
from barlatro.engine.scoring import score
from conftest import cards_from_str

DECK = create_standard_deck()
five_cards = st.lists(st.sampled_from(DECK), min_size=5, max_size=5, unique=True)
some_cards = st.lists(st.sampled_from(DECK), min_size=1, max_size=5, unique=True)

# --- Category Tests ---

def test_empty_selection():
    """An empty selection gives a zero result instead of an error."""
    result = evaluate([])

    assert result.hand_rank == HandRank.HIGH_CARD
    assert result.strength == 0
    assert result.cards == []
    assert result.is_empty


def test_royal_flush():
    """Test identification of a Royal Flush."""
    result = evaluate(cards_from_str("10h Jh Qh Kh Ah"))

    assert result.hand_rank == HandRank.ROYAL_FLUSH
    assert result.strength == 10000
    assert [c.rank for c in result.cards] == ['10', 'J', 'Q', 'K', 'A']
    assert "Hearts" in result.description


def test_straight_flush():
    """Test identification of a Straight Flush (non-royal)."""
    result = evaluate(cards_from_str("9s 8s 7s 6s 5s"))

    assert result.hand_rank == HandRank.STRAIGHT_FLUSH
    assert result.strength == 9009
    assert [c.rank for c in result.cards] == ['5', '6', '7', '8', '9']


def test_steel_wheel():
    """A-2-3-4-5 of one suit is a Straight Flush topped by the 5."""
    result = evaluate(cards_from_str("Ah 2h 3h 4h 5h"))

    assert result.hand_rank == HandRank.STRAIGHT_FLUSH
    assert result.strength == 9005


def test_four_of_a_kind():
    """Test identification of Quads."""
    result = evaluate(cards_from_str("Kc Kd Kh Ks 2c"))

    assert result.hand_rank == HandRank.FOUR_OF_A_KIND
    assert result.strength == 8013
    assert len(result.cards) == 4
    assert all(c.rank == 'K' for c in result.cards)


def test_five_of_one_rank_is_four_of_a_kind():
    """Duplicates beyond four still classify as Quads."""
    result = evaluate(cards_from_str("Qs Qs Qh Qd Qc"))

    assert result.hand_rank == HandRank.FOUR_OF_A_KIND


def test_full_house():
    """Aces full of Kings."""
    result = evaluate(cards_from_str("As Ah Ad Kc Ks"))

    assert result.hand_rank == HandRank.FULL_HOUSE
    assert "A" in result.description and "K" in result.description
    assert [c.rank for c in result.cards] == ['A', 'A', 'A', 'K', 'K']
    assert result.strength == 7000 + 1 * 14 + 13


def test_full_house_prefers_highest_trips():
    result = evaluate(cards_from_str("9s 9h 9d Qc Qs Qh 2c"))

    assert result.hand_rank == HandRank.FULL_HOUSE
    assert [c.rank for c in result.cards] == ['Q', 'Q', 'Q', '9', '9']


def test_full_house_from_five_of_a_rank():
    """Without another pair, the 4th and 5th cards of the trip rank form the pair."""
    cards = cards_from_str("7s 7h 7d 7c 7s")
    ordered = sorted(cards, key=lambda c: c.order)
    result = HandEvaluator()._full_house(ordered, Counter(c.rank for c in ordered))

    assert result.hand_rank == HandRank.FULL_HOUSE
    assert len(result.cards) == 5
    assert "7s over 7s" in result.description


def test_flush():
    """Test identification of a Flush (non-straight)."""
    result = evaluate(cards_from_str("2h 4h 6h 8h 10h"))

    assert result.hand_rank == HandRank.FLUSH
    assert result.strength == 6010
    assert len(result.cards) == 5


def test_flush_takes_five_highest():
    result = evaluate(cards_from_str("2h 4h 6h 8h 10h Qh"))

    assert result.hand_rank == HandRank.FLUSH
    assert [c.rank for c in result.cards] == ['4', '6', '8', '10', 'Q']


def test_straight_standard():
    """Test a standard straight."""
    result = evaluate(cards_from_str("10s 9h 8d 7c 6s"))

    assert result.hand_rank == HandRank.STRAIGHT
    assert result.strength == 5010
    assert [c.rank for c in result.cards] == ['6', '7', '8', '9', '10']


def test_straight_wheel():
    """Test the Ace-low straight: A-2-3-4-5."""
    result = evaluate(cards_from_str("Ac 2d 3s 4h 5c"))

    assert result.hand_rank == HandRank.STRAIGHT
    assert result.strength == 5005
    assert [c.rank for c in result.cards] == ['A', '2', '3', '4', '5']
    assert "A-2-3-4-5" in result.description


def test_unsuited_ace_high_is_not_a_straight():
    """10-J-Q-K-A only counts when suited (Royal Flush)."""
    result = evaluate(cards_from_str("10c Jd Qh Ks Ah"))

    assert result.hand_rank == HandRank.HIGH_CARD
    assert result.cards == cards_from_str("Ks")


def test_three_of_a_kind():
    result = evaluate(cards_from_str("8s 8h 8d 2c 4s"))

    assert result.hand_rank == HandRank.THREE_OF_A_KIND
    assert result.strength == 4008
    assert len(result.cards) == 3


def test_two_pair():
    result = evaluate(cards_from_str("7c 7d 9s 9h Qd"))

    assert result.hand_rank == HandRank.TWO_PAIR
    assert result.strength == 3000 + 9 * 14 + 7
    assert [c.rank for c in result.cards] == ['9', '9', '7', '7']
    assert result.description == "Two Pair: 9s and 7s"


def test_one_pair():
    result = evaluate(cards_from_str("Ks Kh 5c"))

    assert result.hand_rank == HandRank.ONE_PAIR
    assert result.strength == 2013
    assert [c.rank for c in result.cards] == ['K', 'K']


def test_high_card_single():
    result = evaluate(cards_from_str("7h"))

    assert result.hand_rank == HandRank.HIGH_CARD
    assert result.strength == 1007
    assert result.cards == cards_from_str("7h")


def test_ace_counts_low_for_high_card():
    result = evaluate(cards_from_str("Ah 9c"))

    assert result.cards == cards_from_str("9c")


def test_short_selection_never_crashes():
    """Four suited cards cannot make a flush."""
    result = evaluate(cards_from_str("Ah Kh Qh Jh"))

    assert result.hand_rank == HandRank.HIGH_CARD
    assert result.cards == cards_from_str("Kh")


def test_more_than_five_cards_uses_best_straight_flush():
    result = evaluate(cards_from_str("2h 3h 4h 5h 6h 7h"))

    assert result.hand_rank == HandRank.STRAIGHT_FLUSH
    assert result.strength == 9007


def test_find_straight_none():
    assert find_straight(cards_from_str("2h 3c 4d 6s 7h")) is None
    assert find_straight(cards_from_str("2h 3c")) is None

# --- Comparison Tests ---

def test_compare_hands():
    kings = evaluate(cards_from_str("Ks Kh"))
    queens = evaluate(cards_from_str("Qs Qh"))
    also_kings = evaluate(cards_from_str("Kc Kd"))

    assert compare_hands(kings, queens) == 1
    assert compare_hands(queens, kings) == -1
    assert compare_hands(kings, also_kings) == 0


def test_higher_category_always_wins():
    weakest_flush = evaluate(cards_from_str("2h 3h 4h 5h 7h"))
    best_straight = evaluate(cards_from_str("9c 10d Jh Qs Kc"))

    assert weakest_flush.strength > best_straight.strength

# --- Properties ---

@given(five_cards)
def test_strength_band_matches_category(cards):
    result = evaluate(cards)
    assert result.strength // 1000 == result.hand_rank
    assert 1001 <= result.strength <= 10000


@given(five_cards)
def test_category_respects_containment(cards):
    result = evaluate(cards)
    counts = sorted(Counter(c.rank for c in cards).values(), reverse=True)
    suits = {c.suit for c in cards}

    if counts[0] == 4:
        assert result.hand_rank == HandRank.FOUR_OF_A_KIND
    elif counts[:2] == [3, 2]:
        assert result.hand_rank == HandRank.FULL_HOUSE
    elif len(suits) == 1:
        assert result.hand_rank >= HandRank.FLUSH
    elif counts[0] == 3:
        assert result.hand_rank == HandRank.THREE_OF_A_KIND
    elif counts[:2] == [2, 2]:
        assert result.hand_rank == HandRank.TWO_PAIR
    elif counts[0] == 2:
        assert result.hand_rank == HandRank.ONE_PAIR
    else:
        assert result.hand_rank in (HandRank.STRAIGHT, HandRank.HIGH_CARD)


@given(some_cards)
def test_contributing_cards_come_from_selection(cards):
    result = evaluate(cards)
    assert result.cards
    assert all(c in cards for c in result.cards)


@given(five_cards, five_cards)
def test_flush_always_beats_straight(first, second):
    a, b = evaluate(first), evaluate(second)
    if a.hand_rank == HandRank.FLUSH and b.hand_rank == HandRank.STRAIGHT:
        assert a.strength > b.strength


@given(some_cards)
def test_score_total_identity(cards):
    result = evaluate(cards)
    points = score(result.hand_rank, result.cards)
    assert points.total == points.base_points * points.multiplier


@pytest.mark.parametrize("text,expected", [
    ("As Ah Ad Kc Ks", HandRank.FULL_HOUSE),
    ("Ks Kh Kd Kc As", HandRank.FOUR_OF_A_KIND),
    ("2h 4h 6h 8h 10h", HandRank.FLUSH),
    ("Ac 2d 3s 4h 5c", HandRank.STRAIGHT),
    ("10h Jh Qh Kh Ah", HandRank.ROYAL_FLUSH),
])
def test_scenarios(text, expected):
    assert evaluate(cards_from_str(text)).hand_rank == expected
