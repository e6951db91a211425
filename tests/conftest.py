import random

import pytest

from barlatro.engine.deck import Card, create_standard_deck
from barlatro.engine.game import GameConfig, GameSession


def cards_from_str(card_str: str):
    """
    Parses a string like 'Ah Kd 10s' into a list of Card objects.
    Ranks: A, 2-10, J, Q, K
    Suits: H, D, C, S
    """
    return [Card.parse(part) for part in card_str.split()]


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def session(rng):
    """A standard shuffled session with a seeded RNG."""
    return GameSession(rng=rng)


@pytest.fixture
def stacked_session(rng):
    """
    A session whose deck is in a known order.

    The first eight cards make a Full House of Aces over Kings plus junk.
    """
    top = cards_from_str("As Ah Ad Kc Ks 2c 3d 4h")
    rest = [c for c in create_standard_deck() if c not in top]
    return GameSession(config=GameConfig(), rng=rng, deck_cards=top + rest, shuffle_deck=False)
