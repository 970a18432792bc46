"""
Exceptions raised by the engine.

Everything except InvariantViolation is recoverable: the table state is left
untouched and the acting player is asked again.
"""


class PokerError(Exception):
    """Base class for all engine errors."""


class InsufficientCards(PokerError, ValueError):
    """The deck does not hold enough cards for a draw."""

    def __init__(self, requested: int, remaining: int):
        super().__init__(f"Cannot draw {requested} cards, only {remaining} remain")
        self.requested = requested
        self.remaining = remaining


class IllegalAction(PokerError):
    """An action that is not allowed in the current table state."""


class InvalidBetAmount(PokerError, ValueError):
    """A bet or raise amount that is negative or not an integer."""


class InvariantViolation(PokerError):
    """Internal state is inconsistent; the current hand must be aborted."""
