"""
Game events and a synchronous event bus.
Lets a UI observe round progress without reaching into game state.
"""

import logging
from collections import deque
from dataclasses import dataclass
from typing import Callable, Optional

from .deck import Card

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GameEvent:
    """Base class for everything published on the bus."""
    round_number: int


@dataclass(frozen=True)
class RoundStarted(GameEvent):
    goal: int
    difficulty: str


@dataclass(frozen=True)
class CardsDrawn(GameEvent):
    cards: tuple[Card, ...]
    deck_size: int


@dataclass(frozen=True)
class CardsDiscarded(GameEvent):
    cards: tuple[Card, ...]
    discards_remaining: int


@dataclass(frozen=True)
class HandPlayed(GameEvent):
    cards: tuple[Card, ...]
    hand_label: str
    points: int
    score: int
    goal: int
    hands_remaining: int


@dataclass(frozen=True)
class RoundWon(GameEvent):
    score: int
    goal: int


@dataclass(frozen=True)
class RoundLost(GameEvent):
    score: int
    goal: int


EventHandler = Callable[[GameEvent], None]


class EventBus:
    """
    Publish/subscribe bus keyed by event class.

    Handlers subscribed to ``GameEvent`` receive every event. Only the most
    recent ``max_history`` events are kept.
    """

    def __init__(self, max_history: int = 1000):
        self._handlers: dict[type, list[EventHandler]] = {}
        self._history: deque[GameEvent] = deque(maxlen=max_history)

    def subscribe(self, event_type: type, handler: EventHandler) -> None:
        if not (isinstance(event_type, type) and issubclass(event_type, GameEvent)):
            raise ValueError(f"Not an event type: {event_type!r}")
        handlers = self._handlers.setdefault(event_type, [])
        if handler not in handlers:
            handlers.append(handler)

    def unsubscribe(self, event_type: type, handler: EventHandler) -> bool:
        handlers = self._handlers.get(event_type, [])
        if handler in handlers:
            handlers.remove(handler)
            return True
        return False

    def publish(self, event: GameEvent) -> None:
        self._history.append(event)
        handlers = list(self._handlers.get(type(event), []))
        if type(event) is not GameEvent:
            handlers += self._handlers.get(GameEvent, [])

        for handler in handlers:
            try:
                handler(event)
            except Exception:
                # Handler errors never reach the publisher
                logger.exception("Event handler %r failed on %s", handler, type(event).__name__)

    def history(self, event_type: Optional[type] = None) -> list[GameEvent]:
        if event_type is None:
            return list(self._history)
        return [e for e in self._history if isinstance(e, event_type)]

    def clear_history(self) -> None:
        self._history.clear()

    def __len__(self) -> int:
        return len(self._history)

    def __repr__(self) -> str:
        count = sum(len(h) for h in self._handlers.values())
        return f"EventBus(handlers={count}, events={len(self._history)})"
