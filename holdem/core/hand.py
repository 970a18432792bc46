"""
Hand Evaluation for Texas Hold'em.

This module scores 5-7 cards and returns the best 5-card hand as a
HandScore: a category plus the ranks that break ties inside it.
HandScores are totally ordered, so ``max(scores)`` is the best hand and
``a == b`` means a genuine split.

Hand categories (best to worst):
1. Royal Flush: A♠ K♠ Q♠ J♠ T♠
2. Straight Flush: 5 consecutive cards of same suit
3. Four of a Kind: 4 cards of same rank
4. Full House: 3 of a kind + pair
5. Flush: 5 cards of same suit
6. Straight: 5 consecutive cards
7. Three of a Kind: 3 cards of same rank
8. Two Pair: 2 different pairs
9. One Pair: 2 cards of same rank
10. High Card: No made hand

Note: Ace can be low in A-2-3-4-5 straight (wheel), which is the lowest
straight.
"""

from __future__ import annotations
from typing import List, Tuple, Optional, Sequence
from itertools import combinations
from enum import IntEnum
from collections import Counter
from dataclasses import dataclass
from functools import total_ordering

from holdem.core.card import Card, Rank
from holdem.core.errors import InvariantViolation
from holdem.core.rules import HAND_SIZE, MAX_HAND_CARDS


class HandCategory(IntEnum):
    """Hand categories; a higher value is a better hand."""
    ROYAL_FLUSH = 10
    STRAIGHT_FLUSH = 9
    FOUR_OF_A_KIND = 8
    FULL_HOUSE = 7
    FLUSH = 6
    STRAIGHT = 5
    THREE_OF_A_KIND = 4
    TWO_PAIR = 3
    ONE_PAIR = 2
    HIGH_CARD = 1


# Category names for display
CATEGORY_NAMES = {
    HandCategory.ROYAL_FLUSH: "Royal Flush",
    HandCategory.STRAIGHT_FLUSH: "Straight Flush",
    HandCategory.FOUR_OF_A_KIND: "Four of a Kind",
    HandCategory.FULL_HOUSE: "Full House",
    HandCategory.FLUSH: "Flush",
    HandCategory.STRAIGHT: "Straight",
    HandCategory.THREE_OF_A_KIND: "Three of a Kind",
    HandCategory.TWO_PAIR: "Two Pair",
    HandCategory.ONE_PAIR: "One Pair",
    HandCategory.HIGH_CARD: "High Card",
}

WHEEL_RANKS = [Rank.ACE, Rank.FIVE, Rank.FOUR, Rank.THREE, Rank.TWO]


@total_ordering
@dataclass(frozen=True, eq=False)
class HandScore:
    """
    The value of a five-card hand.

    Attributes:
        category: The hand category
        primary_ranks: Ranks that decide ties inside the category, most
            significant first (e.g. full house: trips rank, pair rank)
        five_cards: The five cards making the hand, ordered by importance
            (groups first, wheel with the Ace last)

    Comparison uses (category, primary_ranks, ordered five-card ranks);
    suits never matter, so two scores can be equal while holding
    different cards.
    """

    category: HandCategory
    primary_ranks: Tuple[int, ...]
    five_cards: Tuple[Card, ...]

    @property
    def key(self) -> Tuple[int, Tuple[int, ...], Tuple[int, ...]]:
        return (
            int(self.category),
            tuple(int(r) for r in self.primary_ranks),
            self.card_ranks,
        )

    @property
    def card_ranks(self) -> Tuple[int, ...]:
        """Ranks of the five cards in importance order, Ace low in a wheel."""
        ranks = [int(c.rank) for c in self.five_cards]
        if self.category in (HandCategory.STRAIGHT, HandCategory.STRAIGHT_FLUSH) \
                and self.primary_ranks[0] == Rank.FIVE:
            ranks = [1 if r == Rank.ACE else r for r in ranks]
        return tuple(ranks)

    @property
    def name(self) -> str:
        return CATEGORY_NAMES[self.category]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, HandScore):
            return NotImplemented
        return self.key == other.key

    def __lt__(self, other: HandScore) -> bool:
        if not isinstance(other, HandScore):
            return NotImplemented
        return self.key < other.key

    def __hash__(self) -> int:
        return hash(self.key)

    def __repr__(self) -> str:
        cards = " ".join(c.short_str for c in self.five_cards)
        return f"HandScore({self.category.name}, {list(self.primary_ranks)}, [{cards}])"


def evaluate_hand(cards: Sequence[Card]) -> HandScore:
    """
    Find the best 5-card hand among 5-7 cards.

    Every 5-card subset is classified (21 of them for 7 cards) and the
    highest HandScore wins.

    Raises:
        ValueError: If not 5-7 distinct cards are provided
    """
    cards = list(cards)
    if len(cards) < HAND_SIZE or len(cards) > MAX_HAND_CARDS:
        raise ValueError(f"Need 5-7 cards, got {len(cards)}")
    if len(set(cards)) != len(cards):
        raise ValueError(f"Duplicate cards in hand: {cards}")

    best: Optional[HandScore] = None
    for combo in combinations(cards, HAND_SIZE):
        score = _evaluate_5_cards(list(combo))
        if best is None or score > best:
            best = score
    return best


def _evaluate_5_cards(cards: List[Card]) -> HandScore:
    """Classify exactly 5 cards."""
    # Sort by rank descending
    sorted_cards = sorted(cards, key=lambda c: c.rank, reverse=True)
    ranks = [c.rank for c in sorted_cards]

    is_flush = len({c.suit for c in sorted_cards}) == 1
    straight_high = _check_straight(ranks)

    rank_counts = Counter(ranks)
    counts = sorted(rank_counts.values(), reverse=True)

    if straight_high is not None and is_flush:
        if straight_high == Rank.ACE:
            category = HandCategory.ROYAL_FLUSH
        else:
            category = HandCategory.STRAIGHT_FLUSH
        return _score(category, [straight_high], _straight_order(sorted_cards, straight_high))

    if counts == [4, 1]:
        quads = _ranks_with_count(rank_counts, 4)
        kicker = _ranks_with_count(rank_counts, 1)
        return _score(HandCategory.FOUR_OF_A_KIND, quads + kicker,
                      _sort_by_count(sorted_cards, rank_counts))

    if counts == [3, 2]:
        trips = _ranks_with_count(rank_counts, 3)
        pair = _ranks_with_count(rank_counts, 2)
        return _score(HandCategory.FULL_HOUSE, trips + pair,
                      _sort_by_count(sorted_cards, rank_counts))

    if is_flush:
        return _score(HandCategory.FLUSH, ranks, sorted_cards)

    if straight_high is not None:
        return _score(HandCategory.STRAIGHT, [straight_high],
                      _straight_order(sorted_cards, straight_high))

    if counts == [3, 1, 1]:
        trips = _ranks_with_count(rank_counts, 3)
        kickers = _ranks_with_count(rank_counts, 1)
        return _score(HandCategory.THREE_OF_A_KIND, trips + kickers,
                      _sort_by_count(sorted_cards, rank_counts))

    if counts == [2, 2, 1]:
        pairs = _ranks_with_count(rank_counts, 2)
        kicker = _ranks_with_count(rank_counts, 1)
        return _score(HandCategory.TWO_PAIR, pairs + kicker,
                      _sort_by_count(sorted_cards, rank_counts))

    if counts == [2, 1, 1, 1]:
        pair = _ranks_with_count(rank_counts, 2)
        kickers = _ranks_with_count(rank_counts, 1)
        return _score(HandCategory.ONE_PAIR, pair + kickers,
                      _sort_by_count(sorted_cards, rank_counts))

    if counts == [1, 1, 1, 1, 1]:
        return _score(HandCategory.HIGH_CARD, ranks, sorted_cards)

    raise InvariantViolation(f"Unclassifiable rank pattern {counts} in {sorted_cards}")


def _score(category: HandCategory, primary: List[Rank], cards: List[Card]) -> HandScore:
    return HandScore(category, tuple(int(r) for r in primary), tuple(cards))


def _check_straight(ranks: List[Rank]) -> Optional[Rank]:
    """
    Check if ranks form a straight.

    Returns:
        The straight's high card (FIVE for a wheel), or None
    """
    unique_ranks = sorted(set(ranks), reverse=True)
    if len(unique_ranks) != 5:
        return None

    if unique_ranks[0] - unique_ranks[4] == 4:
        return unique_ranks[0]

    if unique_ranks == WHEEL_RANKS:
        return Rank.FIVE

    return None


def _ranks_with_count(rank_counts: Counter, count: int) -> List[Rank]:
    """Ranks appearing exactly ``count`` times, highest first."""
    return sorted((r for r, c in rank_counts.items() if c == count), reverse=True)


def _sort_by_count(cards: List[Card], rank_counts: Counter) -> List[Card]:
    """Sort cards by count (descending), then by rank (descending)."""
    return sorted(cards, key=lambda c: (rank_counts[c.rank], c.rank), reverse=True)


def _straight_order(cards: List[Card], straight_high: Rank) -> List[Card]:
    """Order a straight high to low, moving the Ace to the end of a wheel."""
    if straight_high != Rank.FIVE:
        return cards
    ace = [c for c in cards if c.rank == Rank.ACE]
    others = [c for c in cards if c.rank != Rank.ACE]
    return others + ace


def compare_scores(score1: HandScore, score2: HandScore) -> int:
    """
    Compare two scores.

    Returns:
        1 if score1 wins, -1 if score2 wins, 0 if tie
    """
    if score1 > score2:
        return 1
    if score1 < score2:
        return -1
    return 0


def compare_hands(cards1: Sequence[Card], cards2: Sequence[Card]) -> int:
    """
    Compare the best hands made from two card sets.

    Returns:
        1 if cards1 wins, -1 if cards2 wins, 0 if tie
    """
    return compare_scores(evaluate_hand(cards1), evaluate_hand(cards2))


def get_hand_description(score: HandScore) -> str:
    """Get a human-readable description of a scored hand."""
    category = score.category
    primary = [Rank(r) for r in score.primary_ranks]

    if category == HandCategory.ROYAL_FLUSH:
        return "Royal Flush"
    elif category == HandCategory.STRAIGHT_FLUSH:
        return f"Straight Flush, {_rank_name(primary[0])} high"
    elif category == HandCategory.FOUR_OF_A_KIND:
        return f"Four of a Kind, {_plural(primary[0])}"
    elif category == HandCategory.FULL_HOUSE:
        return f"Full House, {_plural(primary[0])} full of {_plural(primary[1])}"
    elif category == HandCategory.FLUSH:
        return f"Flush, {_rank_name(primary[0])} high"
    elif category == HandCategory.STRAIGHT:
        if primary[0] == Rank.FIVE:
            return "Straight, Five high (Wheel)"
        return f"Straight, {_rank_name(primary[0])} high"
    elif category == HandCategory.THREE_OF_A_KIND:
        return f"Three of a Kind, {_plural(primary[0])}"
    elif category == HandCategory.TWO_PAIR:
        return f"Two Pair, {_plural(primary[0])} and {_plural(primary[1])}"
    elif category == HandCategory.ONE_PAIR:
        return f"Pair of {_plural(primary[0])}"
    else:
        return f"High Card, {_rank_name(primary[0])}"


def _plural(rank: Rank) -> str:
    return "Sixes" if rank == Rank.SIX else f"{_rank_name(rank)}s"


def _rank_name(rank: Rank) -> str:
    """Get the name of a rank."""
    names = {
        Rank.TWO: "Two", Rank.THREE: "Three", Rank.FOUR: "Four",
        Rank.FIVE: "Five", Rank.SIX: "Six", Rank.SEVEN: "Seven",
        Rank.EIGHT: "Eight", Rank.NINE: "Nine", Rank.TEN: "Ten",
        Rank.JACK: "Jack", Rank.QUEEN: "Queen", Rank.KING: "King",
        Rank.ACE: "Ace"
    }
    return names[rank]
