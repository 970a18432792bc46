"""
holdem core - Pure Python Texas Hold'em game logic

Cards, hand evaluation, betting and showdown.  The Table state machine
lives in ``holdem.core.game``.
"""

from holdem.core.card import Card, Deck, Rank, Suit
from holdem.core.errors import (
    PokerError, InsufficientCards, IllegalAction, InvalidBetAmount, InvariantViolation,
)
from holdem.core.hand import HandCategory, HandScore, evaluate_hand, compare_hands
from holdem.core.player import Player
from holdem.core.betting import BettingRound
from holdem.core.rules import RoundPhase, ActionType
from holdem.core.showdown import resolve_showdown, split_pot

__all__ = [
    "Card",
    "Deck",
    "Rank",
    "Suit",
    "PokerError",
    "InsufficientCards",
    "IllegalAction",
    "InvalidBetAmount",
    "InvariantViolation",
    "HandCategory",
    "HandScore",
    "evaluate_hand",
    "compare_hands",
    "Player",
    "BettingRound",
    "RoundPhase",
    "ActionType",
    "resolve_showdown",
    "split_pot",
]
