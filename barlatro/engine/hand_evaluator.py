"""
Hand evaluation for BAR-latro.
Identifies the best poker hand in a selection of cards and gives it a
comparable strength value.
"""

import logging
from collections import Counter
from dataclasses import dataclass, field
from enum import IntEnum, auto
from typing import Iterable, Optional

from .deck import Card, Suit

logger = logging.getLogger(__name__)


class HandRank(IntEnum):
    """Poker hand categories, weakest first."""
    HIGH_CARD = auto()
    ONE_PAIR = auto()
    TWO_PAIR = auto()
    THREE_OF_A_KIND = auto()
    STRAIGHT = auto()
    FLUSH = auto()
    FULL_HOUSE = auto()
    FOUR_OF_A_KIND = auto()
    STRAIGHT_FLUSH = auto()
    ROYAL_FLUSH = auto()

    @property
    def label(self) -> str:
        return HAND_LABELS[self]


HAND_LABELS = {
    HandRank.HIGH_CARD: "High Card",
    HandRank.ONE_PAIR: "One Pair",
    HandRank.TWO_PAIR: "Two Pair",
    HandRank.THREE_OF_A_KIND: "Three of a Kind",
    HandRank.STRAIGHT: "Straight",
    HandRank.FLUSH: "Flush",
    HandRank.FULL_HOUSE: "Full House",
    HandRank.FOUR_OF_A_KIND: "Four of a Kind",
    HandRank.STRAIGHT_FLUSH: "Straight Flush",
    HandRank.ROYAL_FLUSH: "Royal Flush",
}

CATEGORY_BAND = 1000
# Two-rank tie-breaks are encoded as primary * 14 + secondary, which stays below one band.
TIE_BREAK_BASE = 14
ROYAL_RANKS = ["10", "J", "Q", "K", "A"]
STRAIGHT_LENGTH = 5


@dataclass
class EvaluationResult:
    """Result of hand evaluation."""
    hand_rank: HandRank
    strength: int
    cards: list[Card] = field(default_factory=list)  # Cards that form the combination
    description: str = ""

    @property
    def is_empty(self) -> bool:
        return not self.cards

    def __str__(self) -> str:
        return f"{self.hand_rank.label} [{', '.join(str(c) for c in self.cards)}] ({self.strength})"


def _band(hand_rank: HandRank, tie_break: int = 0) -> int:
    return hand_rank * CATEGORY_BAND + tie_break


def _by_rank(cards: list[Card], rank: str) -> list[Card]:
    return [c for c in cards if c.rank == rank]


def _highest(ranks: Iterable[str], cards: list[Card]) -> Optional[str]:
    """Highest-ordered rank among the candidates, or None."""
    orders = {c.rank: c.order for c in cards}
    return max(ranks, key=lambda r: orders[r], default=None)


def find_straight(cards: list[Card]) -> Optional[tuple[int, list[Card]]]:
    """
    Find the highest run of five consecutive rank values (Ace low).

    Returns (top rank value, run cards from low to high) or None.
    The wheel A-2-3-4-5 is the run topped by 5.
    """
    by_order: dict[int, Card] = {}
    for card in cards:
        by_order.setdefault(card.order, card)

    if len(by_order) < STRAIGHT_LENGTH:
        return None

    for top in range(max(by_order), STRAIGHT_LENGTH - 1, -1):
        run = range(top - STRAIGHT_LENGTH + 1, top + 1)
        if all(o in by_order for o in run):
            return top, [by_order[o] for o in run]
    return None


class HandEvaluator:
    """
    Classifies a selection of cards into its best poker hand.

    Categories are checked from rarest to most common; the first match wins.
    Strength is ``category * 1000 + tie_break`` with the tie-break always
    below 1000, so any higher category outscores any lower one. A Royal Flush
    is exactly 10000.
    """

    def evaluate(self, cards: Iterable[Card]) -> EvaluationResult:
        """Evaluate the best hand in the selection."""
        cards = list(cards)
        if not cards:
            return EvaluationResult(HandRank.HIGH_CARD, 0, [], "No cards to evaluate")

        ordered = sorted(cards, key=lambda c: c.order)
        rank_counts = Counter(c.rank for c in ordered)

        checks = (
            self._straight_flush,
            self._four_of_a_kind,
            self._full_house,
            self._flush,
            self._straight,
            self._three_of_a_kind,
            self._two_pair,
            self._one_pair,
        )
        for check in checks:
            result = check(ordered, rank_counts)
            if result is not None:
                break
        else:
            result = self._high_card(ordered)

        logger.debug("Evaluated %s as %s", cards, result)
        return result

    def _straight_flush(self, cards: list[Card], rank_counts: Counter) -> Optional[EvaluationResult]:
        best = None
        for suit in Suit:
            suited = [c for c in cards if c.suit == suit]
            if len(suited) < STRAIGHT_LENGTH:
                continue

            suited_ranks = {c.rank for c in suited}
            if all(r in suited_ranks for r in ROYAL_RANKS):
                royal = [_by_rank(suited, r)[0] for r in ROYAL_RANKS]
                return EvaluationResult(HandRank.ROYAL_FLUSH, _band(HandRank.ROYAL_FLUSH), royal,
                                        f"Royal Flush of {suit.value}")

            straight = find_straight(suited)
            if straight is None:
                continue
            top, run = straight
            if best is None or top > best[0]:
                best = (top, run, suit)

        if best is None:
            return None
        top, run, suit = best
        return EvaluationResult(HandRank.STRAIGHT_FLUSH, _band(HandRank.STRAIGHT_FLUSH, top), run,
                                f"Straight Flush of {suit.value} to {run[-1].rank}")

    def _four_of_a_kind(self, cards: list[Card], rank_counts: Counter) -> Optional[EvaluationResult]:
        quad = _highest((r for r, n in rank_counts.items() if n >= 4), cards)
        if quad is None:
            return None
        quad_cards = _by_rank(cards, quad)[:4]
        return EvaluationResult(HandRank.FOUR_OF_A_KIND,
                                _band(HandRank.FOUR_OF_A_KIND, quad_cards[0].order),
                                quad_cards, f"Four of a Kind: {quad}s")

    def _full_house(self, cards: list[Card], rank_counts: Counter) -> Optional[EvaluationResult]:
        trips = _highest((r for r, n in rank_counts.items() if n >= 3), cards)
        if trips is None:
            return None

        pair = _highest((r for r, n in rank_counts.items() if r != trips and n >= 2), cards)
        trip_cards = _by_rank(cards, trips)
        if pair is not None:
            pair_cards = _by_rank(cards, pair)[:2]
        elif rank_counts[trips] >= 5:
            # Five of one rank: the extra two stand in as the pair
            pair = trips
            pair_cards = trip_cards[3:5]
        else:
            return None

        trip_cards = trip_cards[:3]
        tie_break = trip_cards[0].order * TIE_BREAK_BASE + pair_cards[0].order
        return EvaluationResult(HandRank.FULL_HOUSE, _band(HandRank.FULL_HOUSE, tie_break),
                                trip_cards + pair_cards, f"Full House: {trips}s over {pair}s")

    def _flush(self, cards: list[Card], rank_counts: Counter) -> Optional[EvaluationResult]:
        best = None
        for suit in Suit:
            suited = [c for c in cards if c.suit == suit]
            if len(suited) < 5:
                continue
            top_five = suited[-5:]
            if best is None or top_five[-1].order > best[0][-1].order:
                best = (top_five, suit)

        if best is None:
            return None
        flush_cards, suit = best
        return EvaluationResult(HandRank.FLUSH, _band(HandRank.FLUSH, flush_cards[-1].order),
                                flush_cards, f"Flush of {suit.value}")

    def _straight(self, cards: list[Card], rank_counts: Counter) -> Optional[EvaluationResult]:
        straight = find_straight(cards)
        if straight is None:
            return None
        top, run = straight
        if run[0].rank == "A":
            description = "Low Straight (A-2-3-4-5)"
        else:
            description = f"Straight to {run[-1].rank}"
        return EvaluationResult(HandRank.STRAIGHT, _band(HandRank.STRAIGHT, top), run, description)

    def _three_of_a_kind(self, cards: list[Card], rank_counts: Counter) -> Optional[EvaluationResult]:
        trips = _highest((r for r, n in rank_counts.items() if n >= 3), cards)
        if trips is None:
            return None
        trip_cards = _by_rank(cards, trips)[:3]
        return EvaluationResult(HandRank.THREE_OF_A_KIND,
                                _band(HandRank.THREE_OF_A_KIND, trip_cards[0].order),
                                trip_cards, f"Three of a Kind: {trips}s")

    def _two_pair(self, cards: list[Card], rank_counts: Counter) -> Optional[EvaluationResult]:
        pairs = [r for r, n in rank_counts.items() if n >= 2]
        if len(pairs) < 2:
            return None
        high = _highest(pairs, cards)
        low = _highest((r for r in pairs if r != high), cards)
        pair_cards = _by_rank(cards, high)[:2] + _by_rank(cards, low)[:2]
        tie_break = pair_cards[0].order * TIE_BREAK_BASE + pair_cards[2].order
        return EvaluationResult(HandRank.TWO_PAIR, _band(HandRank.TWO_PAIR, tie_break),
                                pair_cards, f"Two Pair: {high}s and {low}s")

    def _one_pair(self, cards: list[Card], rank_counts: Counter) -> Optional[EvaluationResult]:
        pair = _highest((r for r, n in rank_counts.items() if n >= 2), cards)
        if pair is None:
            return None
        pair_cards = _by_rank(cards, pair)[:2]
        return EvaluationResult(HandRank.ONE_PAIR, _band(HandRank.ONE_PAIR, pair_cards[0].order),
                                pair_cards, f"Pair of {pair}s")

    def _high_card(self, cards: list[Card]) -> EvaluationResult:
        highest = cards[-1]
        return EvaluationResult(HandRank.HIGH_CARD, _band(HandRank.HIGH_CARD, highest.order),
                                [highest], f"High Card: {highest.rank} of {highest.suit.value}")


def evaluate(cards: Iterable[Card]) -> EvaluationResult:
    """Convenience function to evaluate a hand."""
    return HandEvaluator().evaluate(cards)


def compare_hands(first: EvaluationResult, second: EvaluationResult) -> int:
    """Return 1 if first is stronger, -1 if second is, 0 on a tie."""
    if first.strength > second.strength:
        return 1
    if first.strength < second.strength:
        return -1
    return 0
