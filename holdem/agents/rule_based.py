"""
Rule-Based Strategy Implementation.

A fixed-policy opponent:

- Preflop it ranks its two hole cards into starting-hand tiers (1 is
  pocket Aces, 21 is any suited, paired or connected hand) and raises
  more with better tiers.
- Postflop it looks only at the category of its best hand: straight
  flushes go all-in, quads/full houses/flushes raise, straights down to
  one pair check or call, high card gives up.

Raise sizes are in big blinds, so the policy scales with the table's
minimum bet.  Both tables can be replaced per instance.
"""

from typing import Dict, Optional, Sequence, Tuple

from holdem.agents.base import Action, BaseStrategy, DecisionContext
from holdem.core.card import Card, Rank
from holdem.core.hand import HandCategory
from holdem.core.rules import RoundPhase

# Marker values in the action tables
ALL_IN = "ALL_IN"
PASSIVE = "PASSIVE"  # check, or call when facing a bet
GIVE_UP = "GIVE_UP"  # check when free, otherwise fold

UNPLAYABLE = -1
LOOSE_TIER = 21

# Tier ranges -> raise in big blinds
DEFAULT_PREFLOP_POLICY: Tuple[Tuple[range, object], ...] = (
    (range(1, 2), 8),
    (range(2, 6), 4),
    (range(6, 11), 3),
    (range(11, 16), 2),
    (range(16, 21), 1),
    (range(LOOSE_TIER, LOOSE_TIER + 1), PASSIVE),
)

DEFAULT_POSTFLOP_POLICY: Dict[HandCategory, object] = {
    HandCategory.ROYAL_FLUSH: ALL_IN,
    HandCategory.STRAIGHT_FLUSH: ALL_IN,
    HandCategory.FOUR_OF_A_KIND: 4,
    HandCategory.FULL_HOUSE: 3,
    HandCategory.FLUSH: 1,
    HandCategory.STRAIGHT: PASSIVE,
    HandCategory.THREE_OF_A_KIND: PASSIVE,
    HandCategory.TWO_PAIR: PASSIVE,
    HandCategory.ONE_PAIR: PASSIVE,
    HandCategory.HIGH_CARD: GIVE_UP,
}

# (low rank, high rank, suited) -> tier, for unpaired hands
_UNPAIRED_TIERS: Dict[Tuple[Rank, Rank, bool], int] = {
    (Rank.KING, Rank.ACE, True): 5,
    (Rank.KING, Rank.ACE, False): 7,
    (Rank.QUEEN, Rank.ACE, True): 8,
    (Rank.JACK, Rank.ACE, True): 10,
    (Rank.QUEEN, Rank.KING, True): 11,
    (Rank.TEN, Rank.ACE, True): 12,
    (Rank.QUEEN, Rank.ACE, False): 13,
    (Rank.JACK, Rank.KING, True): 15,
    (Rank.TEN, Rank.KING, True): 16,
    (Rank.JACK, Rank.QUEEN, True): 17,
    (Rank.JACK, Rank.ACE, False): 18,
    (Rank.QUEEN, Rank.KING, False): 19,
    (Rank.TEN, Rank.QUEEN, True): 20,
}

_PAIR_TIERS: Dict[Rank, int] = {
    Rank.ACE: 1,
    Rank.KING: 2,
    Rank.QUEEN: 3,
    Rank.JACK: 4,
    Rank.TEN: 6,
    Rank.NINE: 9,
    Rank.EIGHT: 14,
}


def rank_starting_hand(hole_cards: Sequence[Card]) -> int:
    """
    Tier of a two-card starting hand.

    Returns:
        1 (pocket Aces) to 20 for premium hands, 21 for other suited,
        paired or connected hands, -1 for unplayable hands
    """
    low, high = sorted(hole_cards, key=lambda c: c.rank)
    suited = low.suit == high.suit
    paired = low.rank == high.rank
    connected = low.rank + 1 == high.rank

    if paired and low.rank in _PAIR_TIERS:
        return _PAIR_TIERS[low.rank]

    tier = _UNPAIRED_TIERS.get((low.rank, high.rank, suited))
    if tier is not None:
        return tier

    return LOOSE_TIER if (suited or paired or connected) else UNPLAYABLE


class RuleBasedStrategy(BaseStrategy):
    """
    An opponent following fixed preflop and postflop tables.

    Args:
        name: Optional name
        preflop_policy: Sequence of (tier range, action) pairs
        postflop_policy: Mapping of hand category to action

    Actions in the tables are a raise size in big blinds, ALL_IN,
    PASSIVE or GIVE_UP.
    """

    def __init__(
        self,
        name: Optional[str] = None,
        preflop_policy: Optional[Sequence[Tuple[range, object]]] = None,
        postflop_policy: Optional[Dict[HandCategory, object]] = None,
    ):
        super().__init__(name)
        self.preflop_policy = tuple(preflop_policy or DEFAULT_PREFLOP_POLICY)
        self.postflop_policy = dict(postflop_policy or DEFAULT_POSTFLOP_POLICY)

    def decide(self, context: DecisionContext) -> Action:
        if context.phase == RoundPhase.PREFLOP or context.best_hand is None:
            choice = self._preflop_choice(rank_starting_hand(context.hole_cards))
        else:
            choice = self.postflop_policy.get(context.best_hand.category, GIVE_UP)
        return self._to_action(choice, context)

    def _preflop_choice(self, tier: int) -> object:
        for tiers, choice in self.preflop_policy:
            if tier in tiers:
                return choice
        return GIVE_UP

    @staticmethod
    def _to_action(choice: object, context: DecisionContext) -> Action:
        if choice == ALL_IN:
            return Action.raise_by(max(1, context.own_chips))
        if choice == PASSIVE:
            return Action.check() if context.can_check else Action.call()
        if choice == GIVE_UP:
            return Action.check() if context.can_check else Action.fold()
        return Action.raise_by(int(choice) * context.min_bet)
