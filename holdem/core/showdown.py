"""
Showdown: score the hands still in play and split the pot.

The best HandScore wins the whole pot.  Equal scores (same category and
same tie-break ranks) split it: each winner gets ``pot // k`` and the odd
chips go out one at a time, clockwise from the seat left of the dealer.
Chips are never created or lost.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Sequence

from holdem.core.card import Card
from holdem.core.errors import InvariantViolation
from holdem.core.hand import HandScore, evaluate_hand
from holdem.core.player import Player
from holdem.core.rules import NUM_SEATS, clockwise_from, next_seat


logger = logging.getLogger(__name__)


@dataclass
class ShowdownOutcome:
    """Scores of every revealed hand, the winning seats and their awards."""
    scores: Dict[int, HandScore] = field(default_factory=dict)
    winners: List[int] = field(default_factory=list)
    awards: Dict[int, int] = field(default_factory=dict)

    @property
    def is_split(self) -> bool:
        return len(self.winners) > 1


def best_seats(scores: Dict[int, HandScore]) -> List[int]:
    """Seats holding the best score, ascending."""
    if not scores:
        return []
    best = max(scores.values())
    return sorted(seat for seat, score in scores.items() if score == best)


def split_pot(
    pot: int,
    winners: Sequence[int],
    dealer_position: int,
    num_seats: int = NUM_SEATS,
) -> Dict[int, int]:
    """
    Divide the pot among tied winners.

    Returns:
        Mapping of seat -> chips awarded; the values always sum to ``pot``
    """
    if not winners:
        raise InvariantViolation("Cannot split a pot between zero winners")

    share, remainder = divmod(pot, len(winners))
    awards = {seat: share for seat in winners}

    # Odd chips go to winners closest to the left of the dealer button
    for seat in clockwise_from(next_seat(dealer_position, num_seats), num_seats):
        if remainder == 0:
            break
        if seat in awards:
            awards[seat] += 1
            remainder -= 1

    return awards


def resolve_showdown(
    players: Sequence[Player],
    community_cards: Sequence[Card],
    pot: int,
    dealer_position: int,
    num_seats: int = NUM_SEATS,
) -> ShowdownOutcome:
    """
    Score every non-folded player's best hand and award the pot.

    Chips are not moved here; the caller pays out ``outcome.awards``.
    """
    contenders = [p for p in players if not p.folded]
    if not contenders:
        raise InvariantViolation("Showdown reached with no players in the hand")

    outcome = ShowdownOutcome()
    for player in contenders:
        outcome.scores[player.seat] = evaluate_hand(list(player.hole_cards) + list(community_cards))

    outcome.winners = best_seats(outcome.scores)
    outcome.awards = split_pot(pot, outcome.winners, dealer_position, num_seats)

    if outcome.is_split:
        logger.info(f"Split pot of {pot} between seats {outcome.winners}")
    return outcome
