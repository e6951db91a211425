"""
Scoring engine for BAR-latro.
Turns an evaluated hand into points: card values × hand multiplier.
"""

from dataclasses import dataclass
from typing import Iterable

from .deck import Card, RANK_VALUES
from .hand_evaluator import EvaluationResult, HandRank

CARD_VALUES = RANK_VALUES

# Multiplier per hand rank, growing with rarity
MULTIPLIERS = {
    HandRank.HIGH_CARD: 1,
    HandRank.ONE_PAIR: 2,
    HandRank.TWO_PAIR: 2,
    HandRank.THREE_OF_A_KIND: 3,
    HandRank.STRAIGHT: 3,
    HandRank.FLUSH: 4,
    HandRank.FULL_HOUSE: 4,
    HandRank.FOUR_OF_A_KIND: 5,
    HandRank.STRAIGHT_FLUSH: 6,
    HandRank.ROYAL_FLUSH: 8,
}

HAND_DESCRIPTIONS = {
    HandRank.HIGH_CARD: "Highest single card",
    HandRank.ONE_PAIR: "Two cards of the same rank",
    HandRank.TWO_PAIR: "Two different pairs",
    HandRank.THREE_OF_A_KIND: "Three cards of the same rank",
    HandRank.STRAIGHT: "Five cards in sequence",
    HandRank.FLUSH: "Five cards of the same suit",
    HandRank.FULL_HOUSE: "Three of a kind plus a pair",
    HandRank.FOUR_OF_A_KIND: "Four cards of the same rank",
    HandRank.STRAIGHT_FLUSH: "Five cards in sequence of the same suit",
    HandRank.ROYAL_FLUSH: "The most powerful sequence of all!",
}


@dataclass(frozen=True)
class ScoreResult:
    """Points earned by one hand."""
    hand_rank: HandRank
    base_points: int
    multiplier: int
    description: str = ""

    @property
    def total(self) -> int:
        return self.base_points * self.multiplier

    @property
    def formatted(self) -> str:
        return f"{self.base_points} × {self.multiplier} = {self.total}"

    def to_dict(self) -> dict:
        return {
            "hand_rank": self.hand_rank.label,
            "base_points": self.base_points,
            "multiplier": self.multiplier,
            "total": self.total,
            "description": self.description,
        }


def card_points(cards: Iterable[Card]) -> int:
    """Sum of the base values of the cards."""
    return sum(c.base_value for c in cards)


def score(hand_rank: HandRank, cards: Iterable[Card]) -> ScoreResult:
    """Score the given cards as a hand of the given rank."""
    return ScoreResult(
        hand_rank=hand_rank,
        base_points=card_points(cards),
        multiplier=MULTIPLIERS[hand_rank],
        description=HAND_DESCRIPTIONS[hand_rank],
    )


class ScoringEngine:
    """
    Calculates hand scores.

    Score = (sum of card values) × (hand multiplier)

    By default only the cards forming the combination are counted. With
    ``score_all_cards`` every selected card contributes its value.
    """

    def __init__(self, score_all_cards: bool = False):
        self.score_all_cards = score_all_cards

    def score_hand(self, evaluation: EvaluationResult,
                   selection: Iterable[Card] = None) -> ScoreResult:
        """
        Calculate the score for an evaluated hand.

        Args:
            evaluation: The evaluated hand
            selection: All selected cards; only used when score_all_cards is set
        """
        if self.score_all_cards and selection is not None:
            cards = list(selection)
        else:
            cards = evaluation.cards
        return score(evaluation.hand_rank, cards)
