"""
Round progression for a BAR-latro game.
Owns the session, escalates the goal between rounds and reports progress
through the event bus and the play history.
"""

import json
import logging
import random
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional

from .engine.deck import Card
from .engine.events import (
    EventBus, RoundStarted, CardsDrawn, CardsDiscarded, HandPlayed, RoundWon, RoundLost,
)
from .engine.game import GameConfig, GameSession, DrawResult, DiscardResult, PlayResult, RoundOutcome
from .engine.history import RoundHistory
from .engine.strategy import BasicStrategy, RoundResult, simulate_round
from .presets import build_config

logger = logging.getLogger(__name__)

ROUNDS_PATH = Path(__file__).parent / "data" / "rounds.json"

DEFAULT_DIFFICULTY = {
    1: "Beginner",
    2: "Easy",
    3: "Medium",
    4: "Hard",
    5: "Very Hard",
    6: "Master",
}


@dataclass
class RoundInfo:
    number: int
    goal: int
    difficulty: str


def load_difficulty_labels(path: Path = None) -> dict[int, str]:
    """Load difficulty labels per round number from JSON."""
    path = Path(path) if path else ROUNDS_PATH
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
        labels = {int(k): str(v) for k, v in data["difficulty"].items()}
    except (OSError, ValueError, KeyError, AttributeError) as e:
        logger.warning("Could not load %s (%s), using built-in difficulty labels", path, e)
        return dict(DEFAULT_DIFFICULTY)
    return labels or dict(DEFAULT_DIFFICULTY)


class Campaign:
    """
    A game made of successive rounds.

    Round 1 uses the configured starting goal; every later round resets the
    session and multiplies the goal by ``config.goal_growth``.

    Usage:
        campaign = Campaign(rng=random.Random(7))
        campaign.start_next_round()
        campaign.deal()
        result = campaign.play(campaign.session.hand.cards[:5])
    """

    def __init__(self, config: GameConfig = None, rng: random.Random = None,
                 event_bus: EventBus = None, history: RoundHistory = None,
                 preset_name: str = "standard", rounds_path: Path = None):
        self.config = config or GameConfig()
        self.rng = rng or random.Random()
        self.events = event_bus or EventBus()
        self.history = history or RoundHistory(preset_name=preset_name)
        self.difficulty_labels = load_difficulty_labels(rounds_path)

        self.session = GameSession(self.config, self.rng)
        self.round_number = 0

    @classmethod
    def from_preset(cls, preset: str = "standard", rng: random.Random = None,
                    event_bus: EventBus = None) -> "Campaign":
        return cls(config=build_config(preset), rng=rng, event_bus=event_bus, preset_name=preset)

    @property
    def outcome(self) -> RoundOutcome:
        return self.session.outcome

    @property
    def game_over(self) -> bool:
        return self.session.outcome is RoundOutcome.DEFEAT

    def difficulty_for(self, round_number: int) -> str:
        """Difficulty label for a round; rounds past the table use the last label."""
        if round_number in self.difficulty_labels:
            return self.difficulty_labels[round_number]
        if round_number > max(self.difficulty_labels):
            return self.difficulty_labels[max(self.difficulty_labels)]
        return self.difficulty_labels[min(self.difficulty_labels)]

    def start_next_round(self) -> RoundInfo:
        """Advance to the next round and announce it."""
        if self.round_number > 0:
            self.session.reset_round()
        self.round_number += 1

        info = RoundInfo(
            number=self.round_number,
            goal=self.session.goal,
            difficulty=self.difficulty_for(self.round_number),
        )
        self.history.add_round_start(info.number, info.goal, info.difficulty)
        self.events.publish(RoundStarted(info.number, info.goal, info.difficulty))
        logger.info("Round %d started (%s), goal %d", info.number, info.difficulty, info.goal)
        return info

    def deal(self) -> DrawResult:
        """Deal the opening hand of the round."""
        return self._announce_draw(self.session.deal_opening_hand())

    def draw(self, n: int = 1) -> DrawResult:
        return self._announce_draw(self.session.draw(n))

    def fill_hand(self) -> DrawResult:
        """Draw up to hand size."""
        return self._announce_draw(self.session.fill_hand())

    def discard(self, cards: Iterable[Card]) -> DiscardResult:
        result = self.session.discard(cards)
        if result.accepted:
            self.history.add_discard(self.round_number, result.cards, result.discards_remaining)
            self.events.publish(CardsDiscarded(
                self.round_number, tuple(result.cards), result.discards_remaining))
        return result

    def play(self, cards: Iterable[Card]) -> PlayResult:
        """Play a hand and report the outcome if the round is decided."""
        result = self.session.play_hand(cards)
        if not result.accepted:
            return result

        session = self.session
        self.history.add_hand_played(
            self.round_number, result.cards, result.evaluation.hand_rank.label,
            result.score.base_points, result.score.multiplier, result.score.total, session.score,
        )
        self.events.publish(HandPlayed(
            round_number=self.round_number,
            cards=tuple(result.cards),
            hand_label=result.evaluation.hand_rank.label,
            points=result.points,
            score=session.score,
            goal=session.goal,
            hands_remaining=session.hands_remaining,
        ))

        if result.outcome is RoundOutcome.VICTORY:
            self._end_round(True)
            self.events.publish(RoundWon(self.round_number, session.score, session.goal))
        elif result.outcome is RoundOutcome.DEFEAT:
            self._end_round(False)
            self.events.publish(RoundLost(self.round_number, session.score, session.goal))
        return result

    def auto_play(self, strategy: Optional[BasicStrategy] = None) -> RoundResult:
        """Let the strategy finish the current round."""
        return simulate_round(self.session, strategy, play=self.play, discard=self.discard,
                              draw=self.fill_hand)

    def restart(self) -> None:
        """Start over with a fresh session at round 0."""
        self.session = GameSession(self.config, self.rng)
        self.round_number = 0
        self.events.clear_history()
        logger.info("Game restarted")

    def _announce_draw(self, result: DrawResult) -> DrawResult:
        if result.cards:
            self.events.publish(CardsDrawn(
                self.round_number, tuple(result.cards), self.session.deck.cards_remaining()))
        return result

    def _end_round(self, victory: bool) -> None:
        session = self.session
        self.history.add_round_end(self.round_number, victory, session.score, session.goal)
        logger.info("Round %d %s: %d/%d", self.round_number, "won" if victory else "lost",
                    session.score, session.goal)
