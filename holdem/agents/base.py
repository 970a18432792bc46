"""
Strategy interface for the seats at a table.

The table asks a seat's strategy for a decision whenever it is that seat's
turn, handing it a DecisionContext with everything the player can see.
The strategy answers with an Action.

Usage:
    class MyStrategy(BaseStrategy):
        def decide(self, context):
            if context.can_check:
                return Action.check()
            return Action.call()
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, Optional, Tuple, TYPE_CHECKING

from holdem.core.card import Card
from holdem.core.errors import IllegalAction, InvalidBetAmount
from holdem.core.hand import HandScore
from holdem.core.rules import ActionType, RoundPhase

if TYPE_CHECKING:
    from holdem.schemas import HandResult


@dataclass(frozen=True)
class Action:
    """
    A player decision.

    For RAISE, ``amount`` is the raise on top of the current bet; the
    chips needed to call are added automatically.
    """
    type: ActionType
    amount: int = 0

    @classmethod
    def check(cls) -> Action:
        return cls(ActionType.CHECK)

    @classmethod
    def call(cls) -> Action:
        return cls(ActionType.CALL)

    @classmethod
    def fold(cls) -> Action:
        return cls(ActionType.FOLD)

    @classmethod
    def raise_by(cls, amount: int) -> Action:
        return cls(ActionType.RAISE, amount)

    def __str__(self) -> str:
        if self.type == ActionType.RAISE:
            return f"RAISE {self.amount}"
        return self.type.value


@dataclass(frozen=True)
class DecisionContext:
    """
    What a player can observe when it is their turn.

    Attributes:
        seat: The acting seat
        hole_cards: The player's two private cards
        community_cards: Cards on the board so far
        phase: Current round phase
        table_current_bet: Highest bet in this round
        own_current_bet: What this player has bet in this round
        own_chips: Chips left in the player's stack
        pot: Chips in the pot
        min_bet: The table's minimum bet (big blind)
        best_hand: Best hand with the board, None before the flop
        rejection: Why the previous answer was refused, if it was
    """
    seat: int
    hole_cards: Tuple[Card, ...]
    community_cards: Tuple[Card, ...]
    phase: RoundPhase
    table_current_bet: int
    own_current_bet: int
    own_chips: int
    pot: int
    min_bet: int
    best_hand: Optional[HandScore] = None
    rejection: Optional[str] = None

    @property
    def amount_to_call(self) -> int:
        return max(0, self.table_current_bet - self.own_current_bet)

    @property
    def can_check(self) -> bool:
        """Nothing is owed, so checking is legal."""
        return self.table_current_bet == self.own_current_bet


class BaseStrategy(ABC):
    """
    Abstract base class for seat strategies.

    Attributes:
        name: Human-readable name
        is_human: Whether decisions come from a person
    """

    is_human = False

    def __init__(self, name: Optional[str] = None):
        self.name = name or self.__class__.__name__

    @abstractmethod
    def decide(self, context: DecisionContext) -> Action:
        """
        Choose an action for the current turn.

        The table validates the answer.  An illegal answer is not applied;
        the table asks again with ``context.rejection`` set.
        """

    def on_hand_start(self, hand_number: int) -> None:
        """Called when a new hand starts."""
        pass

    def on_hand_end(self, result: HandResult) -> None:
        """Called with the result when a hand ends."""
        pass

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.name})"


class HumanStrategy(BaseStrategy):
    """
    Decisions typed by a person.

    The strategy never touches the terminal itself: ``prompt`` shows a
    question and returns the answer line (``input`` in the console front
    end) and ``output`` shows a message.  Anything that is not a legal
    action is explained and asked again, so the table only ever receives
    valid decisions.

    Accepted answers: ``check``/``k``, ``call``/``c``, ``fold``/``f``,
    ``raise N``/``r N`` (or ``raise`` followed by the amount).
    """

    is_human = True

    def __init__(
        self,
        prompt: Callable[[str], str],
        output: Optional[Callable[[str], None]] = None,
        name: Optional[str] = None,
    ):
        super().__init__(name or "You")
        self.prompt = prompt
        self.output = output

    def decide(self, context: DecisionContext) -> Action:
        if context.rejection:
            self._say(f"Not allowed: {context.rejection}")
        self._say(self._describe(context))

        while True:
            answer = self.prompt(self._question(context))
            try:
                return self.parse_action(answer, context)
            except (IllegalAction, InvalidBetAmount) as e:
                self._say(str(e))

    def parse_action(self, answer: str, context: DecisionContext) -> Action:
        """
        Turn an answer line into a legal Action.

        Raises:
            IllegalAction: Unknown command, or not allowed right now
            InvalidBetAmount: Raise amount missing, malformed or out of range
        """
        words = answer.strip().lower().split()
        if not words:
            raise IllegalAction("Please enter an action")
        command, args = words[0], words[1:]

        if command in ("check", "k"):
            if not context.can_check:
                raise IllegalAction(f"Cannot check, must call ${context.amount_to_call}")
            return Action.check()

        if command in ("call", "c"):
            if context.can_check:
                raise IllegalAction("Nothing to call, use check")
            return Action.call()

        if command in ("fold", "f"):
            return Action.fold()

        if command in ("raise", "r"):
            text = args[0] if args else self.prompt("Amount to raise: $")
            return Action.raise_by(self._parse_amount(text, context))

        raise IllegalAction(f"Unknown action: {answer.strip()}")

    @staticmethod
    def _parse_amount(text: str, context: DecisionContext) -> int:
        text = text.strip().lstrip("$")
        if not text.isdecimal():
            raise InvalidBetAmount(f"Raise amount must be a whole number, got {text!r}")
        amount = int(text)
        if amount < 1 or amount > context.own_chips:
            raise InvalidBetAmount(f"Raise must be between $1 and ${context.own_chips}")
        return amount

    @staticmethod
    def _describe(context: DecisionContext) -> str:
        cards = " ".join(str(c) for c in context.hole_cards)
        line = f"Hole Cards: [ {cards} ]  Chips: ${context.own_chips}"
        if context.best_hand is not None:
            line += f"  Best hand: {context.best_hand.name}"
        return line

    @staticmethod
    def _question(context: DecisionContext) -> str:
        first = "check" if context.can_check else f"call ${context.amount_to_call}"
        return f"What will you do? ({first}/raise/fold): "

    def _say(self, message: str) -> None:
        if self.output is not None:
            self.output(message)
