import random

from barlatro.engine.deck import Hand
from barlatro.engine.game import GameConfig, GameSession, RoundOutcome
from barlatro.engine.strategy import BasicStrategy, simulate_round
from conftest import cards_from_str


def test_plays_best_scoring_combination(stacked_session):
    stacked_session.deal_opening_hand()
    cards = BasicStrategy().select_cards_to_play(stacked_session.hand, stacked_session)

    assert sorted(cards, key=str) == sorted(cards_from_str("As Ah Ad Kc Ks"), key=str)


def test_play_selection_respects_limit(session):
    session.fill_hand()
    cards = BasicStrategy().select_cards_to_play(session.hand, session)

    assert 1 <= len(cards) <= session.config.max_selection
    assert all(c in session.hand for c in cards)


def test_empty_hand_selects_nothing(session):
    assert BasicStrategy().select_cards_to_play(session.hand, session) == []


def test_discards_lonely_low_cards(session):
    hand = Hand(cards_from_str("As Ah 2c 3d 4h 9s Kc Qd"))
    cards = BasicStrategy().select_cards_to_discard(hand, session)

    assert cards == cards_from_str("2c 3d 4h")


def test_no_discard_without_allowance():
    session = GameSession(config=GameConfig(discards_per_round=0))
    hand = Hand(cards_from_str("As Ah 2c 3d 4h 9s Kc Qd"))

    assert BasicStrategy().select_cards_to_discard(hand, session) == []


def test_no_discard_from_small_hand(session):
    hand = Hand(cards_from_str("2c 3d 4h"))
    assert BasicStrategy().select_cards_to_discard(hand, session) == []


def test_simulate_stacked_round(stacked_session):
    result = simulate_round(stacked_session)

    assert result.success
    assert result.hands_used == 1
    assert result.discards_used == 0
    assert result.hands_played == [("Full House", 260)]


def test_simulate_round_terminates():
    for seed in range(10):
        session = GameSession(rng=random.Random(seed))
        result = simulate_round(session)

        assert result.outcome is not RoundOutcome.IN_PROGRESS
        assert result.outcome is session.outcome
        assert result.hands_used == len(result.hands_played)
        assert session.hand.size() + session.deck.size() == 52


def test_simulate_hopeless_round_is_lost():
    session = GameSession(config=GameConfig(starting_goal=1_000_000), rng=random.Random(8))
    result = simulate_round(session)

    assert result.outcome is RoundOutcome.DEFEAT
    assert result.hands_used == 4
    assert result.score == sum(points for _, points in result.hands_played)
