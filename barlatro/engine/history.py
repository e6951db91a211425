"""
Play history tracking.
Captures round starts, plays, discards and round ends for review and export.
"""

import json
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Optional


@dataclass
class RoundEvent:
    """Single event in a game."""
    round_number: int
    event_type: str  # "round_start", "hand_played", "discard", "round_end"
    data: dict
    timestamp: int = 0  # event sequence number


class RoundHistory:
    """Captures what happened across the rounds of a game."""

    def __init__(self, preset_name: str = "standard"):
        self.events: list[RoundEvent] = []
        self.metadata = {"preset": preset_name}
        self._event_counter = 0

    def add_event(self, round_number: int, event_type: str, data: dict):
        """Add an event to the history."""
        self.events.append(RoundEvent(
            round_number=round_number,
            event_type=event_type,
            data=data,
            timestamp=self._event_counter
        ))
        self._event_counter += 1

    def add_round_start(self, round_number: int, goal: int, difficulty: str):
        self.add_event(round_number, "round_start", {"goal": goal, "difficulty": difficulty})

    def add_hand_played(self, round_number: int, cards: list, hand_rank: str,
                        base_points: int, multiplier: int, total: int, score_after: int):
        """Log a played hand."""
        self.add_event(
            round_number,
            "hand_played",
            {
                "cards": [str(c) for c in cards],
                "hand_rank": hand_rank,
                "base_points": base_points,
                "multiplier": multiplier,
                "total": total,
                "score_after": score_after,
            }
        )

    def add_discard(self, round_number: int, cards: list, discards_remaining: int):
        self.add_event(
            round_number,
            "discard",
            {"cards": [str(c) for c in cards], "discards_remaining": discards_remaining}
        )

    def add_round_end(self, round_number: int, victory: bool, score: int, goal: int):
        """Log round completion."""
        self.add_event(
            round_number,
            "round_end",
            {"victory": victory, "score": score, "goal": goal}
        )

    def plays(self, round_number: Optional[int] = None) -> list[RoundEvent]:
        """All hand_played events, optionally for one round."""
        return [e for e in self.events
                if e.event_type == "hand_played"
                and (round_number is None or e.round_number == round_number)]

    def best_hand(self) -> Optional[RoundEvent]:
        """The single highest-scoring play so far."""
        return max(self.plays(), key=lambda e: e.data["total"], default=None)

    def summary(self) -> dict:
        """Generate a quick summary of the game."""
        round_ends = [e for e in self.events if e.event_type == "round_end"]
        plays = self.plays()
        best = self.best_hand()

        hand_counts: dict[str, int] = {}
        for e in plays:
            hand_counts[e.data["hand_rank"]] = hand_counts.get(e.data["hand_rank"], 0) + 1

        return {
            "rounds_played": len(round_ends),
            "rounds_won": sum(1 for e in round_ends if e.data.get("victory")),
            "hands_played": len(plays),
            "discards_used": sum(1 for e in self.events if e.event_type == "discard"),
            "total_points": sum(e.data["total"] for e in plays),
            "best_hand": best.data["hand_rank"] if best else None,
            "best_hand_points": best.data["total"] if best else 0,
            "hand_counts": hand_counts,
        }

    def to_dict(self) -> dict:
        """Convert to dict for JSON serialization."""
        return {
            "metadata": self.metadata,
            "events": [asdict(e) for e in self.events],
            "summary": self.summary()
        }

    def to_dataframe(self):
        """One row per played hand, as a pandas DataFrame."""
        import pandas as pd

        columns = ["round", "hand", "hand_rank", "base_points", "multiplier", "total", "score_after"]
        rows = []
        for i, e in enumerate(self.plays(), start=1):
            rows.append({
                "round": e.round_number,
                "hand": i,
                "hand_rank": e.data["hand_rank"],
                "base_points": e.data["base_points"],
                "multiplier": e.data["multiplier"],
                "total": e.data["total"],
                "score_after": e.data["score_after"],
            })
        return pd.DataFrame(rows, columns=columns)

    def save(self, filepath: str):
        """Save history to JSON."""
        path = Path(filepath)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(self.to_dict(), f, indent=2, ensure_ascii=False)

    @classmethod
    def load(cls, filepath: str) -> 'RoundHistory':
        """Load history from JSON."""
        with open(filepath, encoding='utf-8') as f:
            data = json.load(f)

        history = cls(preset_name=data["metadata"]["preset"])
        history.metadata = data["metadata"]

        for event_data in data["events"]:
            history.events.append(RoundEvent(**event_data))
            history._event_counter = max(history._event_counter, event_data["timestamp"] + 1)

        return history
