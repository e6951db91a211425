"""
BAR-latro engine components.
"""

from .deck import Card, Deck, Hand, Suit, InvalidCardError, RANKS, RANK_VALUES, create_standard_deck, shuffle
from .hand_evaluator import HandRank, EvaluationResult, HandEvaluator, evaluate, compare_hands
from .scoring import ScoringEngine, ScoreResult, CARD_VALUES, MULTIPLIERS, score
from .game import GameConfig, GameSession, RoundOutcome, DrawResult, DiscardResult, PlayResult, SessionStats
