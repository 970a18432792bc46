"""
Tests for the console front end.
"""

import random

import pytest
from holdem.cli import ask_play_again, build_parser, format_money, main, render_result, render_table
from holdem.core.game import Table
from holdem.schemas import HandResult, Winner


class ScriptedConsole:
    """Answers action questions with ``action`` and play-again questions from a list."""

    def __init__(self, action="fold", replays=()):
        self.action = action
        self.replays = list(replays)
        self.questions = []
        self.lines = []

    def prompt(self, question):
        self.questions.append(question)
        if question.startswith("Play again"):
            return self.replays.pop(0)
        return self.action

    def output(self, message):
        self.lines.append(message)


class TestParser:

    def test_defaults(self):
        args = build_parser().parse_args([])
        assert args.min_bet == 2
        assert args.chips == 50
        assert args.seed is None
        assert not args.bots_only
        assert args.hands is None

    def test_flags(self):
        args = build_parser().parse_args(["--min-bet", "4", "--chips", "100", "--seed", "9", "--bots-only"])
        assert (args.min_bet, args.chips, args.seed, args.bots_only) == (4, 100, 9, True)


class TestRendering:

    def test_render_table(self):
        table = Table(rng=random.Random(2))
        table.start_hand()
        text = render_table(table.get_state(for_seat=0))
        assert "Hand #1" in text
        assert "Pot: $3" in text
        assert "(D)" in text
        assert "(SB)" in text
        assert "(BB)" in text
        assert text.count("Seat ") == 6

    def test_render_all_in_seat(self):
        table = Table(rng=random.Random(2))
        table.start_hand()
        state = table.get_state(for_seat=0)
        state.players[4].all_in = True
        lines = render_table(state).splitlines()
        assert lines[6].endswith("ALL-IN")
        assert sum(1 for line in lines if "ALL-IN" in line) == 1

    @pytest.mark.parametrize("amount,text", [(5, "$5"), (0, "$0"), (-10, "-$10")])
    def test_format_money(self, amount, text):
        assert format_money(amount) == text

    def test_render_result(self):
        result = HandResult(
            hand_number=1, phase="PREFLOP", early_win=True, pot=3, board=[],
            winners=[Winner(seat=2, amount=3, description="All other players folded")],
        )
        assert render_result(result) == "Seat 2 wins $3 - All other players folded"


class TestPlayAgain:

    def test_reprompts_until_yes_or_no(self):
        console = ScriptedConsole(replays=["maybe", "", "Y"])
        assert ask_play_again(console.prompt, console.output) is True
        assert console.lines == ["Please answer y or n", "Please answer y or n"]

    def test_no(self):
        console = ScriptedConsole(replays=["no"])
        assert ask_play_again(console.prompt, console.output) is False


class TestMain:
    """End-to-end sessions with scripted input."""

    def test_single_hand(self):
        """Test a folding human at the button keeps the starting stack."""
        console = ScriptedConsole()
        assert main(["--seed", "3", "--hands", "1"], console.prompt, console.output) == 0
        assert "Total chips: $50" in console.lines
        assert "Net winnings: $0" in console.lines
        assert not any(q.startswith("Play again") for q in console.questions)

    def test_play_again_loop(self):
        console = ScriptedConsole(replays=["maybe", "y", "n"])
        main(["--seed", "5"], console.prompt, console.output)
        assert sum(1 for q in console.questions if q.startswith("Play again")) == 3
        assert "Please answer y or n" in console.lines
        assert any(line.startswith("=== Hand #2") for line in console.lines)
        assert not any(line.startswith("=== Hand #3") for line in console.lines)

    def test_bots_only(self):
        """Test a bots-only session reports every seat and conserves chips."""
        def no_input(question):
            pytest.fail(f"unexpected prompt: {question}")

        console = ScriptedConsole()
        main(["--bots-only", "--hands", "3", "--seed", "7"], no_input, console.output)
        summary = console.lines[-6:]
        assert [line.split(":")[0] for line in summary] == [f"Seat {i}" for i in range(6)]
        assert sum(int(line.split("$")[1]) for line in summary) == 300
