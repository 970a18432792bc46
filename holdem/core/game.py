"""
Six-seat Texas Hold'em table - State Machine Implementation.

This module drives a hand from the blinds to the payout:
- Dealer button rotation and forced blinds
- Turn order inside each betting round (one clockwise lap)
- Phase transitions with burn cards (preflop, flop, turn, river, showdown)
- Early win when everybody else folds
- Showdown through the hand evaluator, split pots included

Strategies are asked for decisions through ``play_turn``; a caller that
collects decisions itself can use ``take_action`` directly.
"""

from __future__ import annotations
import logging
import random
from contextlib import contextmanager
from typing import Callable, Dict, Iterator, List, Optional, Sequence, Any

from holdem.agents.base import Action, BaseStrategy, DecisionContext
from holdem.agents.rule_based import RuleBasedStrategy
from holdem.core.betting import BettingRound
from holdem.core.card import Card, Deck
from holdem.core.errors import IllegalAction, InvalidBetAmount, InvariantViolation
from holdem.core.hand import HandScore, evaluate_hand, get_hand_description
from holdem.core.player import Player
from holdem.core.rules import (
    RoundPhase, ActionType,
    NUM_SEATS, HOLE_CARDS, BURN_CARDS, HAND_SIZE, COMMUNITY_CARDS_FOR_PHASE,
    clockwise_from, get_blind_amounts, get_blind_positions,
    get_first_to_act_preflop, get_first_to_act_postflop,
    next_dealer_position, next_phase,
)
from holdem.core.showdown import resolve_showdown
from holdem.schemas import (
    CardSchema, HandResult, HandSettlement, PlayerSchema,
    RevealedHand, TableConfig, TableState, Winner,
)


logger = logging.getLogger(__name__)

RenderListener = Callable[[TableState], None]
ResultListener = Callable[[HandResult], None]
SettlementListener = Callable[[HandSettlement], None]


class Table:
    """
    A six-seat Texas Hold'em table implementing the hand state machine.

    Usage:
        table = Table(strategies=[HumanStrategy(input, print)] + [RuleBasedStrategy()] * 5)
        table.add_render_listener(draw)

        while table.is_game_running():
            result = table.play_hand()

    Chips are the only state that survives from one hand to the next.
    """

    def __init__(
        self,
        strategies: Optional[Sequence[BaseStrategy]] = None,
        config: Optional[TableConfig] = None,
        rng: Optional[random.Random] = None,
        deck_factory: Optional[Callable[[], Deck]] = None,
    ):
        """
        Initialize a table.

        Args:
            strategies: One strategy per seat (6); rule-based bots by default
            config: Table settings
            rng: Random source for shuffling
            deck_factory: Builds each hand's deck; replaces shuffling a
                fresh deck (stacked decks in tests, replays)
        """
        self.config = config or TableConfig()
        if strategies is None:
            strategies = [RuleBasedStrategy(name=f"Bot-{i + 1}") for i in range(NUM_SEATS)]
        if len(strategies) != NUM_SEATS:
            raise ValueError(f"A table needs exactly {NUM_SEATS} strategies, got {len(strategies)}")

        self.players: List[Player] = [
            Player(seat=i, chips=self.config.starting_chips, strategy=strategy)
            for i, strategy in enumerate(strategies)
        ]

        self._rng = rng or random.Random()
        self._deck_factory = deck_factory

        # Hand state
        self.deck = Deck(shuffle=False)
        self.community_cards: List[Card] = []
        self.betting = BettingRound()
        self.phase = RoundPhase.PREFLOP
        self.hand_number = 0
        self._hand_running = False
        self._chips_at_hand_start = self.total_chips

        # Position tracking
        self.dealer_position: Optional[int] = None
        self.small_blind_position: Optional[int] = None
        self.big_blind_position: Optional[int] = None
        self.round_first_actor: Optional[int] = None
        self.current_player_index: Optional[int] = None
        # Seats left in this round's lap, current actor first
        self._pending: List[int] = []

        # Hand history for replay
        self.hand_history: List[Dict[str, Any]] = []
        self.last_result: Optional[HandResult] = None

        self._render_listeners: List[RenderListener] = []
        self._result_listeners: List[ResultListener] = []
        self._settlement_listeners: List[SettlementListener] = []

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def num_seats(self) -> int:
        return len(self.players)

    @property
    def min_bet(self) -> int:
        return self.config.min_bet

    @property
    def pot(self) -> int:
        return self.betting.pot

    @property
    def current_bet(self) -> int:
        """Highest bet in the current betting round."""
        return self.betting.current_bet

    @property
    def total_chips(self) -> int:
        """Chips in players' stacks (the pot not included)."""
        return sum(p.chips for p in self.players)

    @property
    def num_players_in_hand(self) -> int:
        """Number of players who have not folded."""
        return sum(1 for p in self.players if p.is_in_hand)

    @property
    def current_player(self) -> Optional[Player]:
        """The player whose turn it is to act."""
        if not self._hand_running or self.current_player_index is None:
            return None
        return self.players[self.current_player_index]

    @property
    def human_player(self) -> Optional[Player]:
        if self.config.human_seat is None:
            return None
        return self.players[self.config.human_seat]

    def is_hand_running(self) -> bool:
        """Check if a hand is currently in progress."""
        return self._hand_running

    def is_game_running(self) -> bool:
        """The human seat still has chips and at least two seats can play."""
        human = self.human_player
        if human is not None and human.chips <= 0:
            return False
        return sum(1 for p in self.players if p.chips > 0) >= 2

    # ------------------------------------------------------------------
    # Listeners
    # ------------------------------------------------------------------

    def add_render_listener(self, listener: RenderListener) -> None:
        """Called with a TableState after every state change."""
        self._render_listeners.append(listener)

    def add_result_listener(self, listener: ResultListener) -> None:
        """Called with the HandResult when a hand is decided."""
        self._result_listeners.append(listener)

    def add_settlement_listener(self, listener: SettlementListener) -> None:
        """Called with updated chip totals after every hand."""
        self._settlement_listeners.append(listener)

    # ------------------------------------------------------------------
    # Hand lifecycle
    # ------------------------------------------------------------------

    def reset_table(self) -> None:
        """Clear all per-hand state; chips and the button position stay."""
        self.community_cards = []
        self.betting.reset_for_new_hand()
        self.phase = RoundPhase.PREFLOP
        self.round_first_actor = None
        self.current_player_index = None
        self._pending = []
        self.hand_history = []
        self.last_result = None
        for player in self.players:
            player.reset_for_new_hand()

    def start_hand(self) -> bool:
        """
        Start a new hand: shuffle, move the button, post blinds, deal.

        Returns:
            True if hand started successfully, False if the game is over
        """
        if self._hand_running:
            raise IllegalAction("A hand is already in progress")

        if not self.is_game_running():
            logger.warning("Cannot start hand: the game is over")
            return False

        self.hand_number += 1
        logger.info(f"Starting hand #{self.hand_number}")

        self.reset_table()
        self._chips_at_hand_start = self.total_chips
        self.deck = self._new_deck()
        self._move_dealer_button()
        self._hand_running = True

        with self._abort_on_invariant_violation():
            self._post_blinds()
            self._deal_hole_cards()

            for player in self.players:
                if player.strategy is not None:
                    player.strategy.on_hand_start(self.hand_number)

            self._log_action("HAND_START", {
                "hand_number": self.hand_number,
                "dealer": self.dealer_position,
                "small_blind": self.small_blind_position,
                "big_blind": self.big_blind_position,
            })

            self._start_round()
            self._verify()
            self._render()
            self._advance()

        return True

    def play_hand(self) -> Optional[HandResult]:
        """
        Play a complete hand, asking each seat's strategy in turn.

        Returns:
            The hand's result, or None if no hand could be started
        """
        if not self.start_hand():
            return None
        while self._hand_running:
            self.play_turn()
        return self.last_result

    def _new_deck(self) -> Deck:
        if self._deck_factory is not None:
            return self._deck_factory()
        return Deck(shuffle=True, rng=self._rng)

    def _move_dealer_button(self) -> None:
        """Move the dealer button one seat and place the blinds."""
        self.dealer_position = next_dealer_position(self.dealer_position, self.num_seats)
        self.small_blind_position, self.big_blind_position = get_blind_positions(
            self.dealer_position, self.num_seats
        )

    def _post_blinds(self) -> None:
        """Post small and big blinds (capped at the posters' stacks)."""
        small_blind, big_blind = get_blind_amounts(self.min_bet)
        sb_player = self.players[self.small_blind_position]
        bb_player = self.players[self.big_blind_position]

        sb_amount = self.betting.place_bet(sb_player, small_blind)
        sb_player.last_action = f"SB ${sb_amount}"

        bb_amount = self.betting.place_bet(bb_player, big_blind)
        bb_player.last_action = f"BB ${bb_amount}"

        logger.debug(f"Blinds posted: SB={sb_amount} BB={bb_amount}")

    def _deal_hole_cards(self) -> None:
        """Deal 2 hole cards to each player in the hand, in seat order."""
        for player in self.players:
            if player.is_in_hand:
                player.deal_cards(self.deck.draw(HOLE_CARDS))

    # ------------------------------------------------------------------
    # Turn order
    # ------------------------------------------------------------------

    def _start_round(self) -> None:
        """Open a betting round: one lap starting at the round's first actor."""
        if self.phase == RoundPhase.PREFLOP:
            first = get_first_to_act_preflop(self.dealer_position, self.num_seats)
        else:
            first = get_first_to_act_postflop(self.dealer_position, self.num_seats)

        self.round_first_actor = first
        self._pending = clockwise_from(first, self.num_seats)
        self._skip_idle_seats()

    def _skip_idle_seats(self) -> None:
        """Drop folded and all-in seats from the front of the lap."""
        while self._pending and not self.players[self._pending[0]].can_act:
            self._pending.pop(0)
        self.current_player_index = self._pending[0] if self._pending else None

    def _round_needs_action(self) -> bool:
        """At least two players can still bet, or someone owes chips."""
        actors = [p for p in self.players if p.can_act]
        if len(actors) >= 2:
            return True
        return any(self.betting.amount_to_call(p) > 0 for p in actors)

    def _advance(self) -> None:
        """Move to the next seat to act, closing finished rounds on the way."""
        while self._hand_running:
            self._skip_idle_seats()
            if self._pending and self._round_needs_action():
                return
            self.advance_phase()

    def advance_phase(self) -> None:
        """
        Close the current betting round and move to the next phase.

        Deals the next street (one burn card, then 3 cards for the flop or
        1 for the turn and river), clears all bets for the new round and
        opens it.  After the river this goes to showdown instead.
        """
        if not self._hand_running:
            raise IllegalAction("No hand in progress")

        with self._abort_on_invariant_violation():
            upcoming = next_phase(self.phase)
            if upcoming == RoundPhase.SHOWDOWN:
                self._go_to_showdown()
                return

            self.deck.draw(BURN_CARDS)
            cards = self.deck.draw(COMMUNITY_CARDS_FOR_PHASE[upcoming])
            self.community_cards.extend(cards)

            self.betting.reset_for_next_phase(self.players)
            self.phase = upcoming
            self._log_action(upcoming.value, {"cards": [str(c) for c in cards]})
            logger.debug(f"{upcoming.value}: {' '.join(str(c) for c in self.community_cards)}")

            self._start_round()
            self._render()

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    def play_turn(self) -> int:
        """
        Ask the current player's strategy for a decision and apply it.

        A refused decision leaves the table untouched and the same
        strategy is asked again, told why, up to ``max_decision_attempts``
        times.

        Returns:
            Chips committed by the accepted action

        Raises:
            IllegalAction / InvalidBetAmount: If the strategy keeps
                answering with illegal actions
        """
        player = self.current_player
        if player is None:
            raise IllegalAction("No player to act")
        if player.strategy is None:
            raise IllegalAction(f"Seat {player.seat} has no strategy")

        rejection: Optional[str] = None
        last_error: Optional[Exception] = None
        for _ in range(self.config.max_decision_attempts):
            context = self.decision_context(player, rejection)
            action = player.strategy.decide(context)
            try:
                return self.take_action(action)
            except (IllegalAction, InvalidBetAmount) as e:
                logger.warning(f"Seat {player.seat} tried {action}: {e}")
                rejection = str(e)
                last_error = e

        raise last_error

    def take_action(self, action: Action) -> int:
        """
        Apply an action for the current player.

        Returns:
            Chips committed to the pot by this action

        Raises:
            IllegalAction: Not allowed now; nothing changed
            InvalidBetAmount: Bad raise amount; nothing changed
        """
        player = self.current_player
        if player is None:
            raise IllegalAction("No hand in progress")
        if not isinstance(action, Action):
            raise IllegalAction(f"Not an action: {action!r}")

        committed = self._execute_action(player, action)

        with self._abort_on_invariant_violation():
            self._pending.pop(0)
            self._log_action(action.type.value, {"seat": player.seat, "amount": committed})
            logger.debug(f"Seat {player.seat}: {player.last_action}")
            self._verify()

            if self.num_players_in_hand == 1:
                self._end_hand_early()
            else:
                self._render()
                self._advance()

        return committed

    def _execute_action(self, player: Player, action: Action) -> int:
        """Execute the specified action for the player."""
        if action.type == ActionType.CHECK:
            self.betting.check(player)
            return 0
        elif action.type == ActionType.CALL:
            return self.betting.call(player)
        elif action.type == ActionType.RAISE:
            return self.betting.raise_by(player, action.amount)
        elif action.type == ActionType.FOLD:
            self.betting.fold(player)
            return 0
        raise IllegalAction(f"Unknown action: {action.type}")

    def decision_context(self, player: Player, rejection: Optional[str] = None) -> DecisionContext:
        """What ``player`` can see right now."""
        best_hand: Optional[HandScore] = None
        if len(player.hole_cards) + len(self.community_cards) >= HAND_SIZE:
            best_hand = evaluate_hand(player.hole_cards + self.community_cards)

        return DecisionContext(
            seat=player.seat,
            hole_cards=tuple(player.hole_cards),
            community_cards=tuple(self.community_cards),
            phase=self.phase,
            table_current_bet=self.current_bet,
            own_current_bet=player.current_bet,
            own_chips=player.chips,
            pot=self.pot,
            min_bet=self.min_bet,
            best_hand=best_hand,
            rejection=rejection,
        )

    # ------------------------------------------------------------------
    # Hand endings
    # ------------------------------------------------------------------

    def _end_hand_early(self) -> None:
        """End the hand when only one player remains."""
        winner = next(p for p in self.players if p.is_in_hand)
        pot = self.betting.pot
        winner.chips += pot
        self.betting.pot = 0
        winner.last_action = f"WON ${pot}"

        logger.info(f"Hand #{self.hand_number}: seat {winner.seat} wins {pot} by default")
        self._log_action("WIN_BY_FOLD", {"winner": winner.seat, "amount": pot})

        self._finish_hand(HandResult(
            hand_number=self.hand_number,
            phase=self.phase.value,
            early_win=True,
            pot=pot,
            board=[str(c) for c in self.community_cards],
            winners=[Winner(seat=winner.seat, amount=pot, description="All other players folded")],
        ))

    def _go_to_showdown(self) -> None:
        """Reveal every remaining hand and award the pot."""
        self._verify()
        self.phase = RoundPhase.SHOWDOWN
        self.current_player_index = None
        self._pending = []
        pot = self.betting.pot

        outcome = resolve_showdown(
            self.players, self.community_cards, pot, self.dealer_position, self.num_seats
        )
        if sum(outcome.awards.values()) != pot:
            raise InvariantViolation(f"Awards {outcome.awards} do not add up to the pot {pot}")

        for seat, amount in outcome.awards.items():
            self.players[seat].chips += amount
            self.players[seat].last_action = f"WON ${amount}"
        self.betting.pot = 0

        winners = []
        for seat in outcome.winners:
            score = outcome.scores[seat]
            winners.append(Winner(
                seat=seat,
                amount=outcome.awards[seat],
                category=score.category.name,
                description=get_hand_description(score),
            ))

        revealed = [
            RevealedHand(
                seat=seat,
                category=score.category.name,
                description=get_hand_description(score),
                primary_ranks=list(score.primary_ranks),
                cards=[c.short_str for c in score.five_cards],
                hole_cards=[c.short_str for c in self.players[seat].hole_cards],
            )
            for seat, score in sorted(outcome.scores.items())
        ]

        logger.info(
            f"Hand #{self.hand_number} showdown: "
            + ", ".join(f"seat {w.seat} wins {w.amount} ({w.description})" for w in winners)
        )
        self._log_action("SHOWDOWN", {"winners": outcome.winners, "awards": outcome.awards})

        self._finish_hand(HandResult(
            hand_number=self.hand_number,
            phase=self.phase.value,
            early_win=False,
            pot=pot,
            board=[str(c) for c in self.community_cards],
            winners=winners,
            revealed_hands=revealed,
        ))

    def _finish_hand(self, result: HandResult) -> None:
        """Close the hand and notify listeners and strategies."""
        self._hand_running = False
        self.current_player_index = None
        self._pending = []

        # Pot already paid out; a mismatch here is raised without a refund
        if self.total_chips != self._chips_at_hand_start:
            raise InvariantViolation(
                f"Chip total changed from {self._chips_at_hand_start} to {self.total_chips}"
            )

        self.last_result = result
        self._render()
        for listener in self._result_listeners:
            listener(result)
        for player in self.players:
            if player.strategy is not None:
                player.strategy.on_hand_end(result)

        settlement = HandSettlement(
            hand_number=self.hand_number,
            chips={p.seat: p.chips for p in self.players},
            human_seat=self.config.human_seat,
            game_over=not self.is_game_running(),
        )
        for listener in self._settlement_listeners:
            listener(settlement)

    def _abort_hand(self, error: Exception) -> None:
        """Give every player back what they committed and drop the hand."""
        logger.error(f"Aborting hand #{self.hand_number}: {error}")
        for player in self.players:
            player.chips += player.total_bet
            player.total_bet = 0
            player.current_bet = 0
        self.betting.reset_for_new_hand()
        self._hand_running = False
        self.current_player_index = None
        self._pending = []
        self._log_action("ABORT", {"reason": str(error)})
        self._render()

    @contextmanager
    def _abort_on_invariant_violation(self) -> Iterator[None]:
        try:
            yield
        except InvariantViolation as e:
            if self._hand_running:
                self._abort_hand(e)
            raise

    def _verify(self) -> None:
        """Pot, bets and chip total must agree."""
        self.betting.verify(self.players)
        in_play = self.total_chips + self.betting.pot
        if in_play != self._chips_at_hand_start:
            raise InvariantViolation(
                f"{in_play} chips in play, {self._chips_at_hand_start} at hand start"
            )

    # ------------------------------------------------------------------
    # State snapshots
    # ------------------------------------------------------------------

    def get_state(self, for_seat: Optional[int] = None) -> TableState:
        """
        Get the current table state.

        Args:
            for_seat: Include this seat's hole cards. Hands that reached a
                showdown are visible to everybody.
        """
        showdown = self.last_result is not None and not self.last_result.early_win
        players = []
        for p in self.players:
            visible = p.seat == for_seat or (showdown and p.is_in_hand)
            data = p.to_dict(hide_cards=not visible)
            players.append(PlayerSchema(**data))

        current = self.current_player
        return TableState(
            hand_number=self.hand_number,
            phase=self.phase.value,
            hand_running=self._hand_running,
            pot=self.pot,
            current_bet=self.current_bet,
            min_bet=self.min_bet,
            board=[CardSchema(**c.to_dict()) for c in self.community_cards],
            dealer_position=self.dealer_position,
            small_blind_position=self.small_blind_position,
            big_blind_position=self.big_blind_position,
            current_player=current.seat if current else None,
            players=players,
        )

    def _render(self) -> None:
        if not self._render_listeners:
            return
        state = self.get_state(for_seat=self.config.human_seat)
        for listener in self._render_listeners:
            listener(state)

    def _log_action(self, action: str, details: Dict[str, Any]) -> None:
        """Log an action to hand history."""
        self.hand_history.append({
            "action": action,
            "phase": self.phase.value,
            **details
        })
