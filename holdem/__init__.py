"""
holdem - Six-seat Texas Hold'em engine

A turn-based Texas Hold'em table with:
- Pure Python hand evaluation and betting state machine
- Rule-based opponents and a console-driven human seat
- Pydantic snapshots and hand events for presentation layers

Usage:
    from holdem import Table, TableConfig
    from holdem.agents import HumanStrategy, RuleBasedStrategy
"""

__version__ = "0.1.0"

from holdem.core.card import Card, Deck
from holdem.core.player import Player
from holdem.core.hand import HandCategory, HandScore, evaluate_hand
from holdem.core.game import Table
from holdem.schemas import TableConfig, HandResult, HandSettlement, TableState

__all__ = [
    "Card",
    "Deck",
    "Player",
    "HandCategory",
    "HandScore",
    "evaluate_hand",
    "Table",
    "TableConfig",
    "HandResult",
    "HandSettlement",
    "TableState",
    "__version__",
]
