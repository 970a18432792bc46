"""
Six-seat Texas Hold'em rules and constants.

The table always has six seats.  Seat arithmetic is clockwise modulo
NUM_SEATS:

1. The dealer button starts on seat 0 and moves one seat every hand.

2. The small blind (half the minimum bet) sits left of the dealer and the
   big blind (the minimum bet) left of the small blind.

3. Preflop the seat left of the big blind acts first.  Every later round
   starts at the seat left of the dealer.

4. A betting round is a single lap: it closes when action comes back to
   the seat that opened it.
"""

from enum import Enum
from typing import Optional, Tuple


class RoundPhase(Enum):
    """Phases of a hand, in order."""
    PREFLOP = "PREFLOP"    # Hole cards dealt, blinds posted
    FLOP = "FLOP"          # 3 community cards
    TURN = "TURN"          # 4th community card
    RIVER = "RIVER"        # 5th community card
    SHOWDOWN = "SHOWDOWN"  # Hands revealed, pot awarded


class ActionType(Enum):
    """Possible player decisions."""
    CHECK = "CHECK"
    CALL = "CALL"
    RAISE = "RAISE"
    FOLD = "FOLD"


# Table settings
NUM_SEATS = 6
HUMAN_SEAT = 0
DEFAULT_MIN_BET = 2
DEFAULT_STARTING_CHIPS = 50
MAX_DECISION_ATTEMPTS = 3

# Cards per phase
HOLE_CARDS = 2
FLOP_CARDS = 3
TURN_CARDS = 1
RIVER_CARDS = 1
BURN_CARDS = 1
TOTAL_COMMUNITY_CARDS = 5

# Hand evaluation
HAND_SIZE = 5  # Best 5-card hand
MAX_HAND_CARDS = HOLE_CARDS + TOTAL_COMMUNITY_CARDS

PHASE_ORDER = [
    RoundPhase.PREFLOP,
    RoundPhase.FLOP,
    RoundPhase.TURN,
    RoundPhase.RIVER,
    RoundPhase.SHOWDOWN,
]

# Community cards revealed when entering each phase
COMMUNITY_CARDS_FOR_PHASE = {
    RoundPhase.FLOP: FLOP_CARDS,
    RoundPhase.TURN: TURN_CARDS,
    RoundPhase.RIVER: RIVER_CARDS,
}


def next_phase(phase: RoundPhase) -> RoundPhase:
    """
    The phase that follows ``phase``.

    Raises:
        ValueError: If phase is SHOWDOWN (terminal)
    """
    index = PHASE_ORDER.index(phase)
    if index == len(PHASE_ORDER) - 1:
        raise ValueError("Showdown is the last phase of a hand")
    return PHASE_ORDER[index + 1]


def next_seat(seat: int, num_seats: int = NUM_SEATS) -> int:
    """The seat to the left (clockwise) of ``seat``."""
    return (seat + 1) % num_seats


def next_dealer_position(previous: Optional[int], num_seats: int = NUM_SEATS) -> int:
    """Seat 0 for the first hand, then one seat clockwise every hand."""
    if previous is None:
        return 0
    return next_seat(previous, num_seats)


def get_blind_positions(dealer_position: int, num_seats: int = NUM_SEATS) -> Tuple[int, int]:
    """
    Calculate small blind and big blind positions.

    Returns:
        Tuple of (small_blind_position, big_blind_position)
    """
    sb_pos = next_seat(dealer_position, num_seats)
    bb_pos = next_seat(sb_pos, num_seats)
    return sb_pos, bb_pos


def get_first_to_act_preflop(dealer_position: int, num_seats: int = NUM_SEATS) -> int:
    """Under the gun: left of the big blind."""
    return (dealer_position + 3) % num_seats


def get_first_to_act_postflop(dealer_position: int, num_seats: int = NUM_SEATS) -> int:
    """Left of the dealer (the small blind seat), whoever acted last before."""
    return next_seat(dealer_position, num_seats)


def get_blind_amounts(min_bet: int) -> Tuple[int, int]:
    """Small blind is half the minimum bet, big blind the minimum bet."""
    return min_bet // 2, min_bet


def clockwise_from(start: int, num_seats: int = NUM_SEATS) -> list:
    """All seats in clockwise order beginning at ``start``."""
    return [(start + i) % num_seats for i in range(num_seats)]
