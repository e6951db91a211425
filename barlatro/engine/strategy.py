"""
Simple auto-play strategy.
Picks the highest-scoring play from the hand and discards lonely low cards.
"""

import logging
from collections import Counter
from dataclasses import dataclass, field
from itertools import combinations
from typing import Callable, Optional

from .deck import Card, Hand
from .game import DiscardResult, DrawResult, GameSession, PlayResult, RoundOutcome

logger = logging.getLogger(__name__)


@dataclass
class RoundResult:
    """Result of auto-playing a round."""
    outcome: RoundOutcome
    score: int
    goal: int
    hands_used: int
    discards_used: int
    hands_played: list = field(default_factory=list)  # (hand label, points) tuples

    @property
    def success(self) -> bool:
        return self.outcome is RoundOutcome.VICTORY


class BasicStrategy:
    """
    Greedy strategy.

    Plays whichever subset of the hand scores the most points and discards
    low cards that do not pair with anything.
    """

    def __init__(self, max_discard: int = 3):
        self.max_discard = max_discard

    def select_cards_to_play(self, hand: Hand, session: GameSession) -> list[Card]:
        """Return the cards of the best-scoring play (empty if the hand is empty)."""
        best: tuple = ()
        best_key = None
        limit = min(session.config.max_selection, hand.size())

        for size in range(1, limit + 1):
            for combo in combinations(hand.cards, size):
                evaluation, result = session.preview(combo)
                # Prefer points, then strength, then fewer cards
                key = (result.total, evaluation.strength, -size)
                if best_key is None or key > best_key:
                    best, best_key = combo, key

        return list(best)

    def select_cards_to_discard(self, hand: Hand, session: GameSession) -> list[Card]:
        """Return cards to discard (empty if should not discard)."""
        if session.discards_remaining <= 0 or hand.size() <= 3:
            return []

        rank_counts = Counter(c.rank for c in hand.cards)
        lonely = [c for c in hand.cards if rank_counts[c.rank] == 1]
        lonely.sort(key=lambda c: c.base_value)
        return lonely[:self.max_discard]


def simulate_round(session: GameSession, strategy: BasicStrategy = None,
                   play: Optional[Callable[[list], PlayResult]] = None,
                   discard: Optional[Callable[[list], DiscardResult]] = None,
                   draw: Optional[Callable[[], DrawResult]] = None) -> RoundResult:
    """
    Auto-play the current round until it is won or lost.

    ``play``, ``discard`` and ``draw`` (fill the hand) default to the
    session's own operations; a campaign passes its wrappers so events and
    history are recorded.
    """
    if strategy is None:
        strategy = BasicStrategy()
    play = play or session.play_hand
    discard = discard or session.discard
    draw = draw or session.fill_hand

    hands_at_start = session.hands_remaining
    discards_at_start = session.discards_remaining
    hands_played = []

    while session.outcome is RoundOutcome.IN_PROGRESS:
        _refill(session, draw)
        if session.hand.size() == 0:
            logger.warning("No cards left to play")
            break

        cards = strategy.select_cards_to_play(session.hand, session)
        _, preview = session.preview(cards)
        reaches_goal = session.score + preview.total >= session.goal

        if not reaches_goal and session.discards_remaining > 0 and session.hands_remaining > 1:
            to_discard = strategy.select_cards_to_discard(session.hand, session)
            if to_discard and discard(to_discard).accepted:
                _refill(session, draw)
                cards = strategy.select_cards_to_play(session.hand, session)

        result = play(cards)
        if not result.accepted:
            logger.warning("Auto-play stopped: %s", result.reason)
            break
        hands_played.append((result.evaluation.hand_rank.label, result.points))

    return RoundResult(
        outcome=session.outcome,
        score=session.score,
        goal=session.goal,
        hands_used=hands_at_start - session.hands_remaining,
        discards_used=discards_at_start - session.discards_remaining,
        hands_played=hands_played,
    )


def _refill(session: GameSession, draw: Callable[[], DrawResult]) -> None:
    if session.deck.cards_remaining() < session.hand.free_slots and session.deck.discard_pile:
        session.reshuffle_discard()
    draw()
