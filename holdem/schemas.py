"""
Pydantic schemas for table configuration, state snapshots and hand events.
"""

from typing import Annotated, List, Optional, Dict
from pydantic import BaseModel, Field

from holdem.core.rules import (
    DEFAULT_MIN_BET, DEFAULT_STARTING_CHIPS, HUMAN_SEAT,
    MAX_DECISION_ATTEMPTS, NUM_SEATS,
)


# ============= Configuration =============

class TableConfig(BaseModel):
    """Settings for a six-seat table."""
    min_bet: int = Field(ge=2, default=DEFAULT_MIN_BET, description="Big blind; small blind is half")
    starting_chips: int = Field(gt=0, default=DEFAULT_STARTING_CHIPS)
    human_seat: Optional[Annotated[int, Field(ge=0, lt=NUM_SEATS)]] = Field(
        default=HUMAN_SEAT,
        description="Seat whose bankruptcy ends the game; None for bots only",
    )
    max_decision_attempts: int = Field(ge=1, default=MAX_DECISION_ATTEMPTS)


# ============= State Snapshot =============

class CardSchema(BaseModel):
    """Card representation."""
    rank: str
    suit: str
    text: str
    color: str


class PlayerSchema(BaseModel):
    """Player information; cards only when visible to the viewer."""
    seat: int
    chips: int
    bet: int
    total_bet: int
    folded: bool
    all_in: bool = False
    is_human: bool = False
    last_action: Optional[str] = None
    cards: Optional[List[CardSchema]] = None


class TableState(BaseModel):
    """Everything a presentation layer needs to draw the table."""
    hand_number: int
    phase: str
    hand_running: bool
    pot: int
    current_bet: int
    min_bet: int
    board: List[CardSchema]
    dealer_position: Optional[int] = None
    small_blind_position: Optional[int] = None
    big_blind_position: Optional[int] = None
    current_player: Optional[int] = None
    players: List[PlayerSchema]


# ============= Hand Events =============

class RevealedHand(BaseModel):
    """A hand shown at showdown."""
    seat: int
    category: str
    description: str
    primary_ranks: List[int]
    cards: List[str]
    hole_cards: List[str]


class Winner(BaseModel):
    """Chips awarded to one seat."""
    seat: int
    amount: int
    category: Optional[str] = None
    description: Optional[str] = None


class HandResult(BaseModel):
    """Outcome of a hand, emitted at showdown or on an early win."""
    hand_number: int
    phase: str
    early_win: bool
    pot: int
    board: List[str]
    winners: List[Winner]
    revealed_hands: List[RevealedHand] = []

    @property
    def is_split(self) -> bool:
        return len(self.winners) > 1


class HandSettlement(BaseModel):
    """Chip totals after a hand, used to decide whether to deal another."""
    hand_number: int
    chips: Dict[int, int]
    human_seat: Optional[int] = None
    game_over: bool
