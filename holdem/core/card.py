"""
Card and Deck classes for six-seat Texas Hold'em.

Ranks are plain integers from 2 to 14 (Jack..Ace are 11..14), so hand
evaluation can compare and subtract them directly.  Cards are immutable
values; a Deck is created fresh for every hand and only ever shrinks.
"""

from __future__ import annotations
import random
import re
from dataclasses import dataclass
from typing import Iterable, List, Optional
from enum import IntEnum

from holdem.core.errors import InsufficientCards


class Suit(IntEnum):
    """Card suits, in the order a fresh deck is built."""
    HEARTS = 0    # ♥
    CLUBS = 1     # ♣
    SPADES = 2    # ♠
    DIAMONDS = 3  # ♦


class Rank(IntEnum):
    """Card ranks from 2 (lowest) to Ace (14)."""
    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13
    ACE = 14


# String mappings
SUIT_SYMBOLS = {
    Suit.HEARTS: "♥",
    Suit.CLUBS: "♣",
    Suit.SPADES: "♠",
    Suit.DIAMONDS: "♦",
}

SUIT_CHARS = {
    Suit.HEARTS: "h",
    Suit.CLUBS: "c",
    Suit.SPADES: "s",
    Suit.DIAMONDS: "d",
}

RANK_CHARS = {
    Rank.TWO: "2",
    Rank.THREE: "3",
    Rank.FOUR: "4",
    Rank.FIVE: "5",
    Rank.SIX: "6",
    Rank.SEVEN: "7",
    Rank.EIGHT: "8",
    Rank.NINE: "9",
    Rank.TEN: "T",
    Rank.JACK: "J",
    Rank.QUEEN: "Q",
    Rank.KING: "K",
    Rank.ACE: "A",
}

# Text -> value, for parsing ("10" is accepted as well as "T")
RANK_LOOKUP = {char: rank for rank, char in RANK_CHARS.items()}
RANK_LOOKUP["10"] = Rank.TEN
SUIT_LOOKUP = {char: suit for suit, char in SUIT_CHARS.items()}
SUIT_LOOKUP.update({symbol: suit for suit, symbol in SUIT_SYMBOLS.items()})

CARD_PATTERN = re.compile(r"(10|[2-9TJQKA])([hcsd♥♣♠♦])", re.IGNORECASE)
CARDS_PATTERN = re.compile(rf"(?:{CARD_PATTERN.pattern})*", re.IGNORECASE)


@dataclass(frozen=True)
class Card:
    """
    A playing card identified by (rank, suit).

    Cards can be created from:
    - Rank and Suit values: Card(Rank.ACE, Suit.SPADES) or Card(14, Suit.SPADES)
    - String notation: Card.from_string("As"), Card.from_string("10♥")

    Equality and hashing use both rank and suit; ordering (``<``) uses
    rank only, which is what sorting a hand needs.
    """

    rank: Rank
    suit: Suit

    def __post_init__(self) -> None:
        try:
            object.__setattr__(self, "rank", Rank(self.rank))
            object.__setattr__(self, "suit", Suit(self.suit))
        except ValueError:
            raise ValueError(f"Invalid card: rank={self.rank!r} suit={self.suit!r}") from None

    @classmethod
    def from_string(cls, s: str) -> Card:
        """
        Create a card from string notation.

        A rank character (2-9, T/10, J, Q, K, A) followed by a suit letter
        (h, c, s, d) or symbol, case-insensitive: "As", "td", "10♥".

        Raises:
            ValueError: If the text is not exactly one card
        """
        match = CARD_PATTERN.fullmatch(s.strip())
        if match is None:
            raise ValueError(f"Invalid card string: {s!r}")
        rank_text, suit_text = match.groups()
        return cls(RANK_LOOKUP[rank_text.upper()], SUIT_LOOKUP[suit_text.lower()])

    def __lt__(self, other: Card) -> bool:
        """Compare by rank only (for sorting)."""
        return self.rank < other.rank

    def __repr__(self) -> str:
        return f"Card({self.short_str})"

    def __str__(self) -> str:
        return f"{RANK_CHARS[self.rank]}{SUIT_SYMBOLS[self.suit]}"

    @property
    def short_str(self) -> str:
        """Short string like 'As', 'Kh'."""
        return f"{RANK_CHARS[self.rank]}{SUIT_CHARS[self.suit]}"

    @property
    def color(self) -> str:
        """Return 'red' for hearts/diamonds, 'black' for clubs/spades."""
        return "red" if self.suit in (Suit.HEARTS, Suit.DIAMONDS) else "black"

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "rank": RANK_CHARS[self.rank],
            "suit": SUIT_SYMBOLS[self.suit],
            "text": str(self),
            "color": self.color,
        }


def standard_cards() -> List[Card]:
    """All 52 cards in canonical order: rank-major, suits H, C, S, D."""
    return [Card(rank, suit) for rank in Rank for suit in Suit]


class Deck:
    """
    A standard 52-card deck, dealt from the top.

    Usage:
        deck = Deck()
        hole_cards = deck.draw(2)
        deck.burn()
        flop = deck.draw(3)
    """

    def __init__(self, shuffle: bool = True, rng: Optional[random.Random] = None):
        """Initialize a new deck, optionally shuffled with the given RNG."""
        self._rng = rng or random.Random()
        self._cards: List[Card] = standard_cards()
        if shuffle:
            self.shuffle()

    @classmethod
    def from_cards(cls, cards: Iterable[Card]) -> Deck:
        """
        Build a deck whose top card is the first of ``cards``.

        Used for stacked decks in tests and hand replays.
        """
        cards = list(cards)
        if len(set(cards)) != len(cards):
            raise ValueError("Deck cannot contain duplicate cards")
        deck = cls(shuffle=False)
        deck._cards = cards
        return deck

    def shuffle(self) -> None:
        """Shuffle the remaining cards uniformly (Fisher-Yates)."""
        self._rng.shuffle(self._cards)

    def draw(self, n: int = 1) -> List[Card]:
        """
        Remove and return the top n cards.

        Raises:
            InsufficientCards: If fewer than n cards remain.
        """
        if n < 0:
            raise ValueError(f"Cannot draw a negative number of cards ({n})")
        if n > len(self._cards):
            raise InsufficientCards(n, len(self._cards))

        drawn = self._cards[:n]
        self._cards = self._cards[n:]
        return drawn

    def draw_one(self) -> Card:
        """Draw a single card."""
        return self.draw(1)[0]

    def burn(self) -> Card:
        """Burn (discard) the top card."""
        return self.draw_one()

    @property
    def cards(self) -> List[Card]:
        """Copy of the remaining cards, top first."""
        return self._cards.copy()

    @property
    def remaining(self) -> int:
        """Number of cards remaining in the deck."""
        return len(self._cards)

    def __contains__(self, card: object) -> bool:
        return card in self._cards

    def __len__(self) -> int:
        return len(self._cards)

    def __repr__(self) -> str:
        return f"Deck({self.remaining} cards remaining)"


def new_standard_deck() -> Deck:
    """A full, unshuffled deck in canonical order."""
    return Deck(shuffle=False)


def parse_cards(cards_str: str) -> List[Card]:
    """
    Parse a run of cards such as "As Kh Td", "AsKhTd" or "A♠ K♥ 10♦".

    Whitespace is ignored; an empty string gives no cards.
    """
    compact = "".join(cards_str.split())
    if not CARDS_PATTERN.fullmatch(compact):
        raise ValueError(f"Cannot parse cards: {cards_str!r}")
    return [Card.from_string(m.group(0)) for m in CARD_PATTERN.finditer(compact)]
