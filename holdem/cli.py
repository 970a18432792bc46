"""
Console front end.

Seats a human at seat 0 against five rule-based bots (or six bots with
``--bots-only``), draws the table as plain text after every change and
asks whether to play another hand.

Usage:
    holdem [--min-bet 2] [--chips 50] [--seed N] [--log-level INFO]
    holdem --bots-only --hands 20
"""

import argparse
import logging
import random
from typing import Callable, List, Optional

from holdem import __version__
from holdem.agents import HumanStrategy, RuleBasedStrategy
from holdem.core.game import Table
from holdem.core.rules import NUM_SEATS, HUMAN_SEAT, DEFAULT_MIN_BET, DEFAULT_STARTING_CHIPS
from holdem.schemas import HandResult, TableConfig, TableState

logger = logging.getLogger(__name__)

DEFAULT_BOT_HANDS = 20


def format_money(amount: int) -> str:
    """Dollar amount with the sign in front: $5, -$10."""
    sign = "-" if amount < 0 else ""
    return f"{sign}${abs(amount)}"


def render_table(state: TableState) -> str:
    """Plain-text picture of a table snapshot."""
    board = " ".join(c.text for c in state.board) or "--"
    lines = [
        f"=== Hand #{state.hand_number}  {state.phase}  Pot: ${state.pot}  Bet: ${state.current_bet} ===",
        f"Board: [ {board} ]",
    ]
    for p in state.players:
        tags = []
        if p.seat == state.dealer_position:
            tags.append("D")
        if p.seat == state.small_blind_position:
            tags.append("SB")
        if p.seat == state.big_blind_position:
            tags.append("BB")
        marker = ">" if p.seat == state.current_player else " "
        cards = " ".join(c.text for c in p.cards) if p.cards else ("--" if p.folded else "?? ??")
        name = "You" if p.is_human else f"Bot {p.seat}"
        line = f"{marker} Seat {p.seat} {name:<6} ${p.chips:<5} bet ${p.bet:<4} [ {cards} ]"
        if tags:
            line += f" ({'/'.join(tags)})"
        if p.last_action:
            line += f"  {p.last_action}"
        if p.all_in:
            line += "  ALL-IN"
        lines.append(line)
    return "\n".join(lines)


def render_result(result: HandResult) -> str:
    lines = []
    if not result.early_win:
        for hand in result.revealed_hands:
            lines.append(
                f"Seat {hand.seat} shows {' '.join(hand.hole_cards)}: {hand.description}"
            )
    for winner in result.winners:
        line = f"Seat {winner.seat} wins ${winner.amount}"
        if winner.description:
            line += f" - {winner.description}"
        lines.append(line)
    if result.is_split:
        lines.append(f"Split pot of ${result.pot}")
    return "\n".join(lines)


def ask_play_again(prompt: Callable[[str], str], output: Callable[[str], None]) -> bool:
    while True:
        answer = prompt("Play again? (y/n): ").strip().lower()
        if answer in ("y", "yes"):
            return True
        if answer in ("n", "no"):
            return False
        output("Please answer y or n")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Six-seat Texas Hold'em")
    parser.add_argument("--min-bet", type=int, default=DEFAULT_MIN_BET, help="Big blind")
    parser.add_argument("--chips", type=int, default=DEFAULT_STARTING_CHIPS, help="Starting chips per seat")
    parser.add_argument("--seed", type=int, default=None, help="Shuffle seed")
    parser.add_argument("--log-level", default="WARNING", help="Logging level")
    parser.add_argument("--bots-only", action="store_true", help="Six bots, no human seat")
    parser.add_argument("--hands", type=int, default=None, help="Stop after this many hands")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(
    argv: Optional[List[str]] = None,
    prompt: Callable[[str], str] = input,
    output: Callable[[str], None] = print,
) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    config = TableConfig(
        min_bet=args.min_bet,
        starting_chips=args.chips,
        human_seat=None if args.bots_only else HUMAN_SEAT,
    )

    if args.bots_only:
        strategies = [RuleBasedStrategy(name=f"Bot {i}") for i in range(NUM_SEATS)]
    else:
        strategies = [HumanStrategy(prompt, output)] + [
            RuleBasedStrategy(name=f"Bot {i}") for i in range(1, NUM_SEATS)
        ]

    table = Table(strategies=strategies, config=config, rng=random.Random(args.seed))
    table.add_render_listener(lambda state: output(render_table(state)))
    table.add_result_listener(lambda result: output(render_result(result)))

    max_hands = args.hands
    if max_hands is None and args.bots_only:
        max_hands = DEFAULT_BOT_HANDS

    played = 0
    while table.is_game_running():
        if max_hands is not None and played >= max_hands:
            break
        table.play_hand()
        played += 1

        if not table.is_game_running():
            break
        if not args.bots_only and max_hands is None and not ask_play_again(prompt, output):
            break

    logger.info(f"Session over after {played} hands")
    output("")
    if args.bots_only:
        for player in table.players:
            output(f"Seat {player.seat}: ${player.chips}")
    else:
        human = table.human_player
        if human.chips <= 0:
            output("You are out of chips. Game over!")
        output(f"Total chips: ${human.chips}")
        output(f"Net winnings: {format_money(human.chips - config.starting_chips)}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
