"""
Deck management for BAR-latro.
Handles card creation, shuffling, drawing and the discard pile.
"""

import logging
import random
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Optional

logger = logging.getLogger(__name__)


class InvalidCardError(ValueError):
    """Raised when a card is built from an unknown suit or rank."""


class Suit(Enum):
    DIAMONDS = "Diamonds"
    CLUBS = "Clubs"
    SPADES = "Spades"
    HEARTS = "Hearts"

    @property
    def symbol(self) -> str:
        return SUIT_SYMBOLS[self]

    @classmethod
    def from_name(cls, name: str) -> "Suit":
        """Look up a suit by name, letter or symbol (case-insensitive)."""
        if isinstance(name, cls):
            return name
        key = str(name).strip().lower()
        for suit in cls:
            if key in (suit.value.lower(), suit.name.lower(), suit.value[0].lower(), suit.symbol):
                return suit
        raise InvalidCardError(f"Unknown suit: {name!r}")


SUIT_SYMBOLS = {
    Suit.DIAMONDS: "♦",
    Suit.CLUBS: "♣",
    Suit.SPADES: "♠",
    Suit.HEARTS: "♥",
}

RANKS = ["A", "2", "3", "4", "5", "6", "7", "8", "9", "10", "J", "Q", "K"]
# Ace is low for ordering; royal flushes are matched by face.
RANK_ORDER = {rank: i + 1 for i, rank in enumerate(RANKS)}
RANK_VALUES = {
    "A": 15, "2": 2, "3": 3, "4": 4, "5": 5, "6": 6, "7": 7, "8": 8, "9": 9,
    "10": 10, "J": 10, "Q": 10, "K": 10
}


@dataclass(frozen=True)
class Card:
    rank: str
    suit: Suit

    def __post_init__(self):
        if self.rank not in RANK_ORDER:
            raise InvalidCardError(f"Unknown rank: {self.rank!r}")
        if not isinstance(self.suit, Suit):
            raise InvalidCardError(f"Unknown suit: {self.suit!r}")

    @property
    def order(self) -> int:
        """Numeric order for sorting/straights (A=1 .. K=13)."""
        return RANK_ORDER[self.rank]

    @property
    def base_value(self) -> int:
        """Point value of this card when scored."""
        return RANK_VALUES[self.rank]

    @property
    def is_face_card(self) -> bool:
        return self.rank in ["J", "Q", "K"]

    @classmethod
    def parse(cls, text: str) -> "Card":
        """Build a card from short notation such as 'As', '10h' or 'K♠'."""
        text = str(text).strip()
        if len(text) < 2:
            raise InvalidCardError(f"Cannot parse card: {text!r}")
        return cls(rank=text[:-1].upper(), suit=Suit.from_name(text[-1]))

    @classmethod
    def from_dict(cls, data: dict) -> "Card":
        try:
            rank, suit = data["rank"], data["suit"]
        except (KeyError, TypeError):
            raise InvalidCardError(f"Card record needs 'suit' and 'rank': {data!r}")
        return cls(rank=str(rank).upper(), suit=Suit.from_name(suit))

    def to_dict(self) -> dict:
        return {"suit": self.suit.value.lower(), "rank": self.rank}

    def __str__(self) -> str:
        return f"{self.rank}{self.suit.symbol}"

    def __repr__(self) -> str:
        return self.__str__()


def create_standard_deck() -> list[Card]:
    """Create the 52 standard cards, suit-major then rank-minor."""
    return [Card(rank=rank, suit=suit) for suit in Suit for rank in RANKS]


def shuffle(cards: Iterable[Card], rng: Optional[random.Random] = None) -> list[Card]:
    """Return a shuffled copy of the cards (Fisher-Yates via random.shuffle)."""
    shuffled = list(cards)
    (rng or random).shuffle(shuffled)
    return shuffled


@dataclass
class Deck:
    cards: list[Card] = field(default_factory=list)  # index 0 is the top
    discard_pile: list[Card] = field(default_factory=list)

    @classmethod
    def standard_52(cls, rng: Optional[random.Random] = None) -> "Deck":
        """Create a shuffled standard 52-card deck."""
        return cls(cards=shuffle(create_standard_deck(), rng))

    def draw(self, n: int = 1) -> list[Card]:
        """Draw up to n cards from the top; returns fewer if the deck is short."""
        if n <= 0:
            return []
        if n > len(self.cards):
            logger.warning("Deck has %d cards, %d requested", len(self.cards), n)
        drawn = self.cards[:n]
        del self.cards[:n]
        return drawn

    def discard(self, cards: Iterable[Card]) -> None:
        """Move cards to discard pile."""
        self.discard_pile.extend(cards)

    def reshuffle_discard(self, rng: Optional[random.Random] = None) -> int:
        """Shuffle the discard pile onto the bottom of the deck. Returns cards moved."""
        if not self.discard_pile:
            logger.warning("Discard pile is empty, nothing to reshuffle")
            return 0
        moved = shuffle(self.discard_pile, rng)
        self.cards.extend(moved)
        self.discard_pile = []
        logger.debug("Reshuffled %d discarded cards, deck now %d", len(moved), len(self.cards))
        return len(moved)

    def recombine(self, rng: Optional[random.Random] = None, extra: Iterable[Card] = ()) -> None:
        """Combine deck, discard and any extra cards, then shuffle."""
        self.cards.extend(extra)
        self.cards.extend(self.discard_pile)
        self.discard_pile = []
        self.cards = shuffle(self.cards, rng)

    def size(self) -> int:
        """Total cards in deck + discard."""
        return len(self.cards) + len(self.discard_pile)

    def cards_remaining(self) -> int:
        """Cards left to draw."""
        return len(self.cards)


class Hand:
    """Represents cards currently held in hand."""

    def __init__(self, cards: list[Card] = None, max_size: int = 8):
        self.cards: list[Card] = cards or []
        self.max_size = max_size

    @property
    def free_slots(self) -> int:
        return max(0, self.max_size - len(self.cards))

    def add(self, cards: list[Card]) -> None:
        self.cards.extend(cards)

    def remove(self, cards: Iterable[Card]) -> tuple[list[Card], list[Card]]:
        """
        Remove the given cards, matched by suit and rank.

        Returns (removed, not_found). Missing cards are skipped.
        """
        removed = []
        not_found = []
        for card in cards:
            if card in self.cards:
                self.cards.remove(card)
                removed.append(card)
            else:
                not_found.append(card)
        return removed, not_found

    def select(self, indices: list[int]) -> list[Card]:
        """Get cards at specified indices."""
        return [self.cards[i] for i in indices if 0 <= i < len(self.cards)]

    def clear(self) -> list[Card]:
        """Remove and return all cards."""
        cards = self.cards
        self.cards = []
        return cards

    def size(self) -> int:
        return len(self.cards)

    def __contains__(self, card: Card) -> bool:
        return card in self.cards

    def __str__(self) -> str:
        return ", ".join(str(c) for c in self.cards)

    def __repr__(self) -> str:
        return f"Hand({self.__str__()})"
