"""
BAR-latro: a Balatro-style poker rules engine
"""

from .engine.deck import Card, Deck, Hand, Suit, InvalidCardError, create_standard_deck, shuffle
from .engine.hand_evaluator import HandRank, EvaluationResult, HandEvaluator, evaluate, compare_hands
from .engine.scoring import ScoringEngine, ScoreResult, score
from .engine.game import GameConfig, GameSession, RoundOutcome, DrawResult, DiscardResult, PlayResult
from .campaign import Campaign, RoundInfo

__version__ = "0.1.0"
