"""
Game session state for one BAR-latro round.
Tracks deck, hand, discard pile, allowances and the score against the goal.
"""

import logging
import random
from dataclasses import dataclass, field, asdict
from enum import Enum
from typing import Iterable, Optional

from .deck import Card, Deck, Hand, create_standard_deck, shuffle
from .hand_evaluator import EvaluationResult, HandEvaluator
from .scoring import ScoreResult, ScoringEngine

logger = logging.getLogger(__name__)


class RoundOutcome(Enum):
    IN_PROGRESS = "in_progress"
    VICTORY = "victory"
    DEFEAT = "defeat"


@dataclass
class GameConfig:
    """Configuration for a game session."""
    starting_goal: int = 100
    hands_per_round: int = 4
    discards_per_round: int = 3
    max_hand_size: int = 8
    max_selection: int = 5
    initial_draw: int = 7
    goal_growth: int = 2


@dataclass
class DrawResult:
    """Result of drawing cards into the hand."""
    requested: int
    cards: list[Card] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.cards)

    @property
    def short(self) -> bool:
        """True when fewer cards than requested were drawn."""
        return self.count < self.requested


@dataclass
class DiscardResult:
    """Result of discarding cards from the hand."""
    accepted: bool
    cards: list[Card] = field(default_factory=list)
    not_found: list[Card] = field(default_factory=list)
    discards_remaining: int = 0
    reason: str = ""


@dataclass
class PlayResult:
    """Result of playing a hand."""
    accepted: bool
    cards: list[Card] = field(default_factory=list)
    not_found: list[Card] = field(default_factory=list)
    evaluation: Optional[EvaluationResult] = None
    score: Optional[ScoreResult] = None
    outcome: RoundOutcome = RoundOutcome.IN_PROGRESS
    hands_remaining: int = 0
    reason: str = ""

    @property
    def points(self) -> int:
        return self.score.total if self.score else 0


@dataclass
class SessionStats:
    """Snapshot of the session for display."""
    score: int
    goal: int
    hands_remaining: int
    discards_remaining: int
    hand_size: int
    deck_size: int
    discard_size: int
    max_hand_size: int
    can_draw: bool
    can_discard: bool
    can_play: bool
    outcome: RoundOutcome

    def to_dict(self) -> dict:
        data = asdict(self)
        data["outcome"] = self.outcome.value
        return data


class GameSession:
    """
    State of a single round.

    The caller owns the session; nothing here is global. Cards move between
    deck, hand and discard pile but are never created or destroyed.
    """

    def __init__(self, config: GameConfig = None, rng: random.Random = None,
                 deck_cards: Iterable[Card] = None, shuffle_deck: bool = True,
                 evaluator: HandEvaluator = None, scoring_engine: ScoringEngine = None):
        self.config = config or GameConfig()
        self.rng = rng or random.Random()

        cards = list(deck_cards) if deck_cards is not None else create_standard_deck()
        if shuffle_deck:
            cards = shuffle(cards, self.rng)
        self.total_cards = len(cards)
        self.deck = Deck(cards=cards)
        self.hand = Hand(max_size=self.config.max_hand_size)

        self.evaluator = evaluator or HandEvaluator()
        self.scoring_engine = scoring_engine or ScoringEngine()

        # Round state
        self.score = 0
        self.goal = self.config.starting_goal
        self.hands_remaining = self.config.hands_per_round
        self.discards_remaining = self.config.discards_per_round
        self.outcome = RoundOutcome.IN_PROGRESS

    def draw(self, n: int = 1) -> DrawResult:
        """
        Draw up to n cards from the top of the deck into the hand.

        Bounded by the cards left in the deck and the free hand slots.
        """
        if n <= 0:
            logger.warning("Draw count must be positive, got %d", n)
            return DrawResult(requested=n)

        count = min(n, self.hand.free_slots)
        if count < n:
            logger.warning("Hand can only take %d more cards (limit %d)",
                           count, self.hand.max_size)

        drawn = self.deck.draw(count)
        self.hand.add(drawn)
        logger.debug("Drew %d cards. Hand: %d/%d, deck: %d", len(drawn), self.hand.size(),
                     self.hand.max_size, self.deck.cards_remaining())
        return DrawResult(requested=n, cards=drawn)

    def deal_opening_hand(self) -> DrawResult:
        """Draw the opening hand for the round."""
        return self.draw(max(0, self.config.initial_draw - self.hand.size()))

    def fill_hand(self) -> DrawResult:
        """Draw cards up to hand size."""
        if self.hand.free_slots == 0:
            return DrawResult(requested=0)
        return self.draw(self.hand.free_slots)

    def discard(self, cards: Iterable[Card]) -> DiscardResult:
        """
        Discard selected cards without drawing replacements.

        Consumes one discard. Cards not in hand are skipped.
        """
        cards = list(cards)
        if self.outcome is not RoundOutcome.IN_PROGRESS:
            return self._reject_discard("Round is already over")
        if self.discards_remaining <= 0:
            return self._reject_discard("No discards remaining")
        if not cards:
            return self._reject_discard("No cards selected")

        removed, not_found = self._take_from_hand(cards)
        if not removed:
            return self._reject_discard("None of the selected cards are in hand", not_found)

        self.deck.discard(removed)
        self.discards_remaining -= 1
        logger.info("Discarded %d cards, %d discards left", len(removed), self.discards_remaining)
        return DiscardResult(True, removed, not_found, self.discards_remaining)

    def play_hand(self, cards: Iterable[Card]) -> PlayResult:
        """
        Play selected cards from hand.

        The played cards are evaluated and scored, the points added to the
        round score and one hand consumed. No replacements are drawn.
        """
        cards = list(cards)
        if self.outcome is not RoundOutcome.IN_PROGRESS:
            return self._reject_play("Round is already over")
        if self.hands_remaining <= 0:
            return self._reject_play("No hands remaining")
        if not cards:
            return self._reject_play("No cards selected")
        if len(cards) > self.config.max_selection:
            return self._reject_play(f"At most {self.config.max_selection} cards can be played")

        removed, not_found = self._take_from_hand(cards)
        if not removed:
            return self._reject_play("None of the selected cards are in hand", not_found)
        self.deck.discard(removed)

        evaluation = self.evaluator.evaluate(removed)
        result = self.scoring_engine.score_hand(evaluation, removed)

        self.score += result.total
        self.hands_remaining -= 1
        self.outcome = self.check_outcome()

        logger.info("Played %s: %s (%s). Score %d/%d, %d hands left", removed,
                    evaluation.hand_rank.label, result.formatted, self.score, self.goal,
                    self.hands_remaining)
        return PlayResult(
            accepted=True,
            cards=removed,
            not_found=not_found,
            evaluation=evaluation,
            score=result,
            outcome=self.outcome,
            hands_remaining=self.hands_remaining,
        )

    def preview(self, cards: Iterable[Card]) -> tuple[EvaluationResult, ScoreResult]:
        """Evaluate and score a selection without changing any state."""
        cards = list(cards)
        evaluation = self.evaluator.evaluate(cards)
        return evaluation, self.scoring_engine.score_hand(evaluation, cards)

    def check_outcome(self) -> RoundOutcome:
        if self.score >= self.goal:
            return RoundOutcome.VICTORY
        if self.hands_remaining <= 0:
            return RoundOutcome.DEFEAT
        return RoundOutcome.IN_PROGRESS

    def reset_round(self, new_goal: int = None) -> None:
        """
        Start a fresh round.

        The goal becomes new_goal, or grows by config.goal_growth when omitted.
        Allowances reset, the hand is cleared and every card is shuffled back
        into the deck.
        """
        if new_goal is None:
            new_goal = self.goal * self.config.goal_growth
        if new_goal <= 0:
            raise ValueError(f"Score goal must be positive, got {new_goal}")

        self.goal = new_goal
        self.score = 0
        self.hands_remaining = self.config.hands_per_round
        self.discards_remaining = self.config.discards_per_round
        self.outcome = RoundOutcome.IN_PROGRESS

        self.deck.recombine(self.rng, extra=self.hand.clear())
        logger.info("Round reset, new goal: %d", self.goal)

    def reshuffle_discard(self) -> int:
        """Shuffle the discard pile back under the deck. Returns cards moved."""
        return self.deck.reshuffle_discard(self.rng)

    def get_stats(self) -> SessionStats:
        return SessionStats(
            score=self.score,
            goal=self.goal,
            hands_remaining=self.hands_remaining,
            discards_remaining=self.discards_remaining,
            hand_size=self.hand.size(),
            deck_size=self.deck.cards_remaining(),
            discard_size=len(self.deck.discard_pile),
            max_hand_size=self.hand.max_size,
            can_draw=self.deck.cards_remaining() > 0 and self.hand.free_slots > 0,
            can_discard=(self.hand.size() > 0 and self.discards_remaining > 0
                         and self.outcome is RoundOutcome.IN_PROGRESS),
            can_play=(self.hand.size() > 0 and self.hands_remaining > 0
                      and self.outcome is RoundOutcome.IN_PROGRESS),
            outcome=self.outcome,
        )

    def _take_from_hand(self, cards: list[Card]) -> tuple[list[Card], list[Card]]:
        removed, not_found = self.hand.remove(cards)
        for card in not_found:
            logger.warning("Card not in hand: %s", card)
        return removed, not_found

    def _reject_discard(self, reason: str, not_found: list[Card] = None) -> DiscardResult:
        logger.warning("Discard rejected: %s", reason)
        return DiscardResult(False, not_found=not_found or [],
                             discards_remaining=self.discards_remaining, reason=reason)

    def _reject_play(self, reason: str, not_found: list[Card] = None) -> PlayResult:
        logger.warning("Play rejected: %s", reason)
        return PlayResult(False, not_found=not_found or [], outcome=self.outcome,
                          hands_remaining=self.hands_remaining, reason=reason)
