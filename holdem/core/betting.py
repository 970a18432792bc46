"""
Betting round bookkeeping: the pot, the table's current bet and the chip
movements behind check, call, raise and fold.

Every chip that leaves a stack goes through ``place_bet``, which caps the
amount at the player's stack (an all-in) and never fails for lack of
chips.  Illegal requests raise before anything is mutated.
"""

from __future__ import annotations
import logging
from typing import Iterable

from holdem.core.errors import IllegalAction, InvalidBetAmount, InvariantViolation
from holdem.core.player import Player


logger = logging.getLogger(__name__)


def _validate_amount(amount: object) -> int:
    # bool is an int subclass but never a chip count
    if isinstance(amount, bool) or not isinstance(amount, int):
        raise InvalidBetAmount(f"Bet amount must be an integer, got {amount!r}")
    if amount < 0:
        raise InvalidBetAmount(f"Bet amount cannot be negative, got {amount}")
    return amount


class BettingRound:
    """
    The single main pot of a hand and the bet to match in the current round.

    Usage:
        betting = BettingRound()
        betting.place_bet(small_blind, 1)
        betting.place_bet(big_blind, 2)
        betting.call(player)
        betting.raise_by(player, 4)
        betting.reset_for_next_phase(players)
    """

    def __init__(self) -> None:
        self.pot = 0
        self.current_bet = 0

    def reset_for_new_hand(self) -> None:
        self.pot = 0
        self.current_bet = 0

    def amount_to_call(self, player: Player) -> int:
        """Chips the player must add to match the current bet."""
        return max(0, self.current_bet - player.current_bet)

    def place_bet(self, player: Player, requested_amount: int) -> int:
        """
        Commit chips from a player to the pot.

        The committed amount is ``min(requested_amount, player.chips)``.
        The table's current bet rises to the player's round total when
        that total is higher.

        Returns:
            The amount actually committed

        Raises:
            InvalidBetAmount: If the amount is negative or not an integer
        """
        requested_amount = _validate_amount(requested_amount)

        actual = player.commit(requested_amount)
        self.pot += actual
        if player.current_bet > self.current_bet:
            self.current_bet = player.current_bet

        if actual < requested_amount:
            logger.debug(
                f"Seat {player.seat} capped at {actual} (requested {requested_amount}), all-in"
            )
        return actual

    def check(self, player: Player) -> None:
        """
        Pass without betting.

        Raises:
            IllegalAction: If the player folded or has a bet to match
        """
        self._require_in_hand(player)
        owed = self.amount_to_call(player)
        if owed > 0:
            raise IllegalAction(f"Cannot check, must call ${owed}")
        player.last_action = "CHECK"

    def call(self, player: Player) -> int:
        """
        Match the current bet (capped at the player's stack).

        Raises:
            IllegalAction: If the player folded or there is nothing to call
        """
        self._require_in_hand(player)
        owed = self.amount_to_call(player)
        if owed == 0:
            raise IllegalAction("Nothing to call, use CHECK")
        actual = self.place_bet(player, owed)
        player.last_action = f"CALL ${actual}"
        return actual

    def raise_by(self, player: Player, amount: int) -> int:
        """
        Match the current bet and add ``amount`` on top of it.

        Returns:
            The amount actually committed (capped at the player's stack)

        Raises:
            InvalidBetAmount: If amount is not a positive integer
            IllegalAction: If the player folded
        """
        amount = _validate_amount(amount)
        if amount == 0:
            raise InvalidBetAmount("Raise amount must be at least 1")
        self._require_in_hand(player)

        actual = self.place_bet(player, self.amount_to_call(player) + amount)
        if player.chips == 0:
            player.last_action = f"ALL-IN ${player.current_bet}"
        else:
            player.last_action = f"RAISE ${amount}"
        return actual

    def fold(self, player: Player) -> None:
        """
        Leave the hand.  Chips already committed stay in the pot.

        Raises:
            IllegalAction: If the player already folded
        """
        self._require_in_hand(player)
        player.fold()

    def reset_for_next_phase(self, players: Iterable[Player]) -> None:
        """Start a new betting round: nobody owes anything."""
        self.current_bet = 0
        for player in players:
            player.reset_for_new_round()

    def verify(self, players: Iterable[Player]) -> None:
        """
        Check the pot and current bet against the players' bets.

        Raises:
            InvariantViolation: If the bookkeeping disagrees
        """
        players = list(players)
        committed = sum(p.total_bet for p in players)
        if self.pot != committed:
            raise InvariantViolation(f"Pot is {self.pot} but players committed {committed}")

        # Folded players keep their round bet, so they count here too
        highest = max((p.current_bet for p in players), default=0)
        if highest != self.current_bet:
            raise InvariantViolation(
                f"Current bet is {self.current_bet} but the highest round bet is {highest}"
            )

    @staticmethod
    def _require_in_hand(player: Player) -> None:
        if player.folded:
            raise IllegalAction(f"Seat {player.seat} has folded")
