"""
Tests for chip movement inside a betting round.
"""

import pytest
from holdem.core.betting import BettingRound
from holdem.core.errors import IllegalAction, InvalidBetAmount, InvariantViolation
from holdem.core.player import Player


@pytest.fixture
def betting():
    return BettingRound()


@pytest.fixture
def players():
    return [Player(seat=i, chips=50) for i in range(3)]


class TestPlaceBet:
    """Tests for place_bet."""

    def test_bet_moves_chips_to_pot(self, betting, sample_player):
        """Test chips leave the stack and enter the pot."""
        assert betting.place_bet(sample_player, 10) == 10
        assert sample_player.chips == 40
        assert sample_player.current_bet == 10
        assert sample_player.total_bet == 10
        assert betting.pot == 10
        assert betting.current_bet == 10

    def test_bet_capped_at_stack(self, betting):
        """Test betting more than the stack commits an all-in."""
        player = Player(seat=0, chips=5)
        assert betting.place_bet(player, 20) == 5
        assert player.chips == 0
        assert player.is_all_in
        assert player.to_dict()["all_in"]
        assert betting.pot == 5
        assert betting.current_bet == 5

    def test_bets_accumulate_in_round(self, betting, sample_player):
        """Test that a second bet adds to the player's round bet."""
        betting.place_bet(sample_player, 1)
        betting.place_bet(sample_player, 3)
        assert sample_player.current_bet == 4
        assert betting.current_bet == 4
        assert betting.pot == 4

    def test_smaller_bet_keeps_current_bet(self, betting, players):
        betting.place_bet(players[0], 10)
        betting.place_bet(players[1], 4)
        assert betting.current_bet == 10

    @pytest.mark.parametrize("amount", [-1, 2.5, "10", True])
    def test_invalid_amount_changes_nothing(self, betting, sample_player, amount):
        """Test malformed amounts are rejected without any mutation."""
        with pytest.raises(InvalidBetAmount):
            betting.place_bet(sample_player, amount)
        assert sample_player.chips == 50
        assert sample_player.current_bet == 0
        assert betting.pot == 0

    def test_zero_bet(self, betting, sample_player):
        assert betting.place_bet(sample_player, 0) == 0
        assert betting.pot == 0


class TestActions:
    """Tests for check, call, raise and fold."""

    def test_check_when_nothing_owed(self, betting, sample_player):
        betting.check(sample_player)
        assert sample_player.last_action == "CHECK"
        assert betting.pot == 0

    def test_check_facing_bet_is_illegal(self, betting, players):
        """Test that checking against an unmatched bet is refused."""
        betting.place_bet(players[0], 2)
        with pytest.raises(IllegalAction, match=r"must call \$2"):
            betting.check(players[1])
        assert players[1].chips == 50

    def test_call_pays_difference(self, betting, players):
        """Test a call only adds what is missing."""
        betting.place_bet(players[0], 1)
        betting.place_bet(players[1], 2)
        assert betting.call(players[0]) == 1
        assert players[0].current_bet == 2
        assert players[0].chips == 48
        assert players[0].last_action == "CALL $1"
        assert betting.pot == 4

    def test_call_with_nothing_owed_is_illegal(self, betting, sample_player):
        """Test a call is never reinterpreted as a check."""
        with pytest.raises(IllegalAction):
            betting.call(sample_player)
        assert sample_player.last_action is None

    def test_short_call_goes_all_in(self, betting, players):
        short = Player(seat=5, chips=3)
        betting.place_bet(players[0], 10)
        assert betting.call(short) == 3
        assert short.is_all_in
        assert betting.current_bet == 10

    def test_raise_adds_call_amount(self, betting, players):
        """Test raise_by commits the call plus the raise."""
        betting.place_bet(players[0], 2)
        assert betting.raise_by(players[1], 4) == 6
        assert players[1].current_bet == 6
        assert players[1].last_action == "RAISE $4"
        assert betting.current_bet == 6

    def test_raise_beyond_stack_is_all_in(self, betting):
        """Test a 5-chip player raising by 20 commits 5."""
        player = Player(seat=0, chips=5)
        assert betting.raise_by(player, 20) == 5
        assert betting.current_bet == 5
        assert player.last_action == "ALL-IN $5"

    @pytest.mark.parametrize("amount", [0, -3, 1.5, None])
    def test_invalid_raise_changes_nothing(self, betting, players, amount):
        betting.place_bet(players[0], 2)
        with pytest.raises(InvalidBetAmount):
            betting.raise_by(players[1], amount)
        assert players[1].chips == 50
        assert betting.pot == 2
        assert betting.current_bet == 2

    def test_fold_keeps_chips_in_pot(self, betting, players):
        betting.place_bet(players[0], 2)
        betting.fold(players[0])
        assert players[0].folded
        assert players[0].last_action == "FOLD"
        assert betting.pot == 2

    def test_folded_player_cannot_act(self, betting, sample_player):
        """Test every action is refused once a player folded."""
        betting.fold(sample_player)
        with pytest.raises(IllegalAction):
            betting.check(sample_player)
        with pytest.raises(IllegalAction):
            betting.call(sample_player)
        with pytest.raises(IllegalAction):
            betting.raise_by(sample_player, 2)
        with pytest.raises(IllegalAction):
            betting.fold(sample_player)


class TestRoundBookkeeping:
    """Tests for round resets and invariant checks."""

    def test_reset_for_next_phase(self, betting, players):
        betting.place_bet(players[0], 2)
        betting.call(players[1])
        betting.reset_for_next_phase(players)
        assert betting.current_bet == 0
        assert all(p.current_bet == 0 for p in players)
        assert betting.pot == 4
        assert players[0].total_bet == 2

    def test_reset_for_new_hand(self, betting, players):
        betting.place_bet(players[0], 2)
        betting.reset_for_new_hand()
        assert betting.pot == 0
        assert betting.current_bet == 0

    def test_verify_consistent(self, betting, players):
        betting.place_bet(players[0], 1)
        betting.place_bet(players[1], 2)
        betting.fold(players[1])
        betting.verify(players)

    def test_verify_pot_mismatch(self, betting, players):
        betting.place_bet(players[0], 2)
        betting.pot += 1
        with pytest.raises(InvariantViolation):
            betting.verify(players)

    def test_verify_current_bet_mismatch(self, betting, players):
        betting.place_bet(players[0], 2)
        betting.current_bet = 7
        with pytest.raises(InvariantViolation):
            betting.verify(players)
