"""
holdem agents - Seat strategies

The decision interface the table calls on every turn, a console-driven
human strategy and the fixed-policy bot.
"""

from holdem.agents.base import Action, BaseStrategy, DecisionContext, HumanStrategy
from holdem.agents.rule_based import RuleBasedStrategy, rank_starting_hand

__all__ = [
    "Action",
    "BaseStrategy",
    "DecisionContext",
    "HumanStrategy",
    "RuleBasedStrategy",
    "rank_starting_hand",
]
