"""
Player class for six-seat Texas Hold'em.

Manages player state including:
- Chips (persist across hands)
- Hole cards
- Amount bet in the current round and in the whole hand
- Fold flag
- The strategy that decides for this seat
"""

from __future__ import annotations
from typing import List, Optional, Dict, Any, TYPE_CHECKING
from dataclasses import dataclass, field

from holdem.core.card import Card

if TYPE_CHECKING:
    from holdem.agents.base import BaseStrategy


@dataclass
class Player:
    """
    A seat at the table.

    Attributes:
        seat: Seat position at the table (0-5), also the player's id
        chips: Current chip count
        strategy: Decides this seat's actions (human or rule-based)
        hole_cards: The player's private cards (0 or 2)
        current_bet: Amount bet in the current betting round
        total_bet: Total amount committed to the pot this hand
        folded: Whether the player is out of the current hand
        last_action: Last action taken, for display
    """
    seat: int
    chips: int
    strategy: Optional[BaseStrategy] = None
    hole_cards: List[Card] = field(default_factory=list)
    current_bet: int = 0
    total_bet: int = 0
    folded: bool = False
    last_action: Optional[str] = None

    def reset_for_new_hand(self) -> None:
        """Clear per-hand state; players without chips sit the hand out."""
        self.hole_cards = []
        self.current_bet = 0
        self.total_bet = 0
        self.last_action = None
        self.folded = self.chips <= 0
        if self.folded:
            self.last_action = "OUT"

    def reset_for_new_round(self) -> None:
        """Reset the per-round bet (flop, turn, river)."""
        self.current_bet = 0

    def deal_cards(self, cards: List[Card]) -> None:
        """Deal hole cards to the player."""
        self.hole_cards = list(cards)

    def commit(self, amount: int) -> int:
        """
        Move chips from the stack towards the pot.

        Args:
            amount: Amount requested

        Returns:
            Actual amount committed (capped at the stack: all-in)
        """
        if amount <= 0:
            return 0

        actual = min(amount, self.chips)
        self.chips -= actual
        self.current_bet += actual
        self.total_bet += actual
        return actual

    def fold(self) -> None:
        """Fold the hand."""
        self.folded = True
        self.last_action = "FOLD"

    @property
    def is_in_hand(self) -> bool:
        """Still contesting the pot."""
        return not self.folded

    @property
    def is_all_in(self) -> bool:
        """In the hand with every chip committed."""
        return not self.folded and self.chips == 0 and self.total_bet > 0

    @property
    def can_act(self) -> bool:
        """Check if player can take an action."""
        return not self.folded and self.chips > 0

    @property
    def is_human(self) -> bool:
        return bool(self.strategy is not None and self.strategy.is_human)

    def to_dict(self, hide_cards: bool = True) -> Dict[str, Any]:
        """
        Convert to dictionary for JSON serialization.

        Args:
            hide_cards: If True, don't include hole cards
        """
        result = {
            "seat": self.seat,
            "chips": self.chips,
            "bet": self.current_bet,
            "total_bet": self.total_bet,
            "folded": self.folded,
            "all_in": self.is_all_in,
            "is_human": self.is_human,
            "last_action": self.last_action,
        }

        if not hide_cards and self.hole_cards:
            result["cards"] = [card.to_dict() for card in self.hole_cards]

        return result

    def __repr__(self) -> str:
        return (
            f"Player({self.seat}, chips={self.chips}, "
            f"bet={self.current_bet}, folded={self.folded})"
        )

    def __str__(self) -> str:
        cards_str = " ".join(str(c) for c in self.hole_cards) if self.hole_cards else "??"
        return f"Player #{self.seat + 1} [{cards_str}] ${self.chips}"
