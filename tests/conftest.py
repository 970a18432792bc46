"""
Pytest configuration and shared fixtures for holdem tests.
"""

import random

import pytest
from holdem.agents.base import Action, BaseStrategy
from holdem.core.card import Card, Deck, Rank, Suit, parse_cards, standard_cards
from holdem.core.game import Table
from holdem.core.player import Player
from holdem.core.rules import NUM_SEATS
from holdem.schemas import TableConfig


class ScriptedStrategy(BaseStrategy):
    """
    Plays a fixed list of actions, then checks or calls.

    Every DecisionContext it sees is kept in ``contexts``.
    """

    def __init__(self, actions=None, name=None):
        super().__init__(name)
        self.actions = list(actions or [])
        self.contexts = []
        self.results = []

    def decide(self, context):
        self.contexts.append(context)
        if self.actions:
            return self.actions.pop(0)
        return Action.check() if context.can_check else Action.call()

    def on_hand_end(self, result):
        self.results.append(result)


class AlwaysFold(BaseStrategy):
    def decide(self, context):
        return Action.fold()


class AlwaysCheck(BaseStrategy):
    """Checks even when it must not."""

    def decide(self, context):
        return Action.check()


def stacked_deck(holes=None, board=""):
    """
    Build a deck dealing the given hands.

    Args:
        holes: Mapping of seat -> hole cards ("As Kd"); other seats get
            the lowest unused cards
        board: Up to five community cards, in flop/turn/river order

    Cards come off in the table's order: two per seat from seat 0, then
    burn + flop, burn + turn, burn + river.
    """
    holes = {seat: parse_cards(cards) for seat, cards in (holes or {}).items()}
    board_cards = parse_cards(board)
    used = set(board_cards)
    for cards in holes.values():
        used.update(cards)
    spare = [c for c in standard_cards() if c not in used]

    order = []
    for seat in range(NUM_SEATS):
        if seat in holes:
            order.extend(holes[seat])
        else:
            order.extend(spare.pop(0) for _ in range(2))

    for street in (board_cards[:3], board_cards[3:4], board_cards[4:5]):
        order.append(spare.pop(0))
        order.extend(street)

    return Deck.from_cards(order + spare)


@pytest.fixture
def deck():
    """Create a fresh shuffled deck."""
    return Deck(shuffle=True, rng=random.Random(7))


@pytest.fixture
def unshuffled_deck():
    """Create a fresh unshuffled deck."""
    return Deck(shuffle=False)


@pytest.fixture
def sample_player():
    """Create a sample player with 50 chips."""
    return Player(seat=0, chips=50)


@pytest.fixture
def passive_strategies():
    """Six strategies that only check or call."""
    return [ScriptedStrategy(name=f"Seat {i}") for i in range(NUM_SEATS)]


@pytest.fixture
def passive_table(passive_strategies):
    """A six-seat table of check/call players with a seeded shuffle."""
    return Table(strategies=passive_strategies, rng=random.Random(42))


@pytest.fixture
def folding_table():
    """A table where everybody folds when asked."""
    return Table(strategies=[AlwaysFold() for _ in range(NUM_SEATS)], rng=random.Random(1))


@pytest.fixture
def bot_config():
    """Six bots, no human seat."""
    return TableConfig(human_seat=None)


@pytest.fixture
def royal_flush():
    """Create a royal flush hand."""
    return [
        Card(Rank.ACE, Suit.SPADES),
        Card(Rank.KING, Suit.SPADES),
        Card(Rank.QUEEN, Suit.SPADES),
        Card(Rank.JACK, Suit.SPADES),
        Card(Rank.TEN, Suit.SPADES),
    ]


@pytest.fixture
def straight_flush():
    """Create a straight flush (9-high)."""
    return [
        Card(Rank.NINE, Suit.HEARTS),
        Card(Rank.EIGHT, Suit.HEARTS),
        Card(Rank.SEVEN, Suit.HEARTS),
        Card(Rank.SIX, Suit.HEARTS),
        Card(Rank.FIVE, Suit.HEARTS),
    ]


@pytest.fixture
def wheel_straight():
    """Create a wheel straight (A-2-3-4-5)."""
    return [
        Card(Rank.ACE, Suit.SPADES),
        Card(Rank.TWO, Suit.HEARTS),
        Card(Rank.THREE, Suit.DIAMONDS),
        Card(Rank.FOUR, Suit.CLUBS),
        Card(Rank.FIVE, Suit.SPADES),
    ]
