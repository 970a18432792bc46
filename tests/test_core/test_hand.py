"""
Tests for hand evaluation.
"""

import pytest
from holdem.core.card import Card, Rank, Suit, parse_cards
from holdem.core.hand import (
    HandCategory, HandScore, compare_hands, evaluate_hand, get_hand_description,
)


def score(cards: str) -> HandScore:
    return evaluate_hand(parse_cards(cards))


class TestHandCategories:
    """Each category is recognised with the right tie-break ranks."""

    def test_royal_flush(self, royal_flush):
        """Test royal flush recognition."""
        result = evaluate_hand(royal_flush)
        assert result.category == HandCategory.ROYAL_FLUSH
        assert result.primary_ranks == (14,)

    def test_straight_flush(self, straight_flush):
        """Test straight flush recognition."""
        result = evaluate_hand(straight_flush)
        assert result.category == HandCategory.STRAIGHT_FLUSH
        assert result.primary_ranks == (9,)

    def test_steel_wheel(self):
        """Test A-2-3-4-5 suited is a five-high straight flush."""
        result = score("Ah 2h 3h 4h 5h")
        assert result.category == HandCategory.STRAIGHT_FLUSH
        assert result.primary_ranks == (5,)

    def test_four_of_a_kind(self):
        """Test four of a kind recognition."""
        result = score("As Ah Ad Ac Ks")
        assert result.category == HandCategory.FOUR_OF_A_KIND
        assert result.primary_ranks == (14, 13)

    def test_full_house(self):
        """Test full house recognition."""
        result = score("As Ah Ad Kc Ks")
        assert result.category == HandCategory.FULL_HOUSE
        assert result.primary_ranks == (14, 13)

    def test_flush(self):
        """Test flush recognition."""
        result = score("Ah Jh 9h 6h 2h")
        assert result.category == HandCategory.FLUSH
        assert result.primary_ranks == (14, 11, 9, 6, 2)

    def test_straight(self):
        """Test straight recognition."""
        result = score("9s 8h 7d 6c 5s")
        assert result.category == HandCategory.STRAIGHT
        assert result.primary_ranks == (9,)

    def test_wheel_straight(self, wheel_straight):
        """Test wheel (A-2-3-4-5) straight recognition."""
        result = evaluate_hand(wheel_straight)
        assert result.category == HandCategory.STRAIGHT
        assert result.primary_ranks == (5,)
        assert result.five_cards[-1].rank == Rank.ACE
        assert result.card_ranks == (5, 4, 3, 2, 1)

    def test_broadway_straight(self):
        """Test ten-to-Ace straight is not mistaken for a wheel."""
        result = score("As Kh Qd Jc Ts")
        assert result.category == HandCategory.STRAIGHT
        assert result.primary_ranks == (14,)

    def test_no_wraparound_straight(self):
        """Test Q-K-A-2-3 is not a straight."""
        assert score("Qs Kh Ad 2c 3s").category == HandCategory.HIGH_CARD

    def test_three_of_a_kind(self):
        """Test three of a kind recognition."""
        result = score("7s 7h 7d Kc 2s")
        assert result.category == HandCategory.THREE_OF_A_KIND
        assert result.primary_ranks == (7, 13, 2)

    def test_two_pair(self):
        """Test two pair recognition."""
        result = score("As Ah Kd Kc Qs")
        assert result.category == HandCategory.TWO_PAIR
        assert result.primary_ranks == (14, 13, 12)

    def test_one_pair(self):
        """Test one pair recognition."""
        result = score("As Ah Kd Qc Js")
        assert result.category == HandCategory.ONE_PAIR
        assert result.primary_ranks == (14, 13, 12, 11)

    def test_high_card(self):
        """Test high card recognition."""
        result = score("As Kh 9d 7c 2s")
        assert result.category == HandCategory.HIGH_CARD
        assert result.primary_ranks == (14, 13, 9, 7, 2)

    def test_category_ordering(self):
        """Test that every category beats the one below it."""
        hands = [
            "As Ks Qs Js Ts",
            "9h 8h 7h 6h 5h",
            "As Ah Ad Ac Ks",
            "As Ah Ad Kc Ks",
            "Ah Jh 9h 6h 2h",
            "9s 8h 7d 6c 5s",
            "7s 7h 7d Kc 2s",
            "As Ah Kd Kc Qs",
            "As Ah Kd Qc Js",
            "As Kh 9d 7c 2s",
        ]
        scores = [score(h) for h in hands]
        assert scores == sorted(scores, reverse=True)
        assert len(set(s.category for s in scores)) == 10


class TestSevenCards:
    """Tests for choosing the best five of seven cards."""

    def test_best_five_of_seven(self):
        """Test finding best 5-card hand from 7 cards."""
        result = score("As Ah Kd Kc Qs Jh 2d")
        assert result.category == HandCategory.TWO_PAIR
        assert result.primary_ranks == (14, 13, 12)
        assert len(result.five_cards) == 5

    def test_quads_with_board_aces(self):
        """Test pocket Aces plus two Aces on the board make quads with the best kicker."""
        result = evaluate_hand(parse_cards("As Ah") + parse_cards("Ad Ac 2s 3h 4d"))
        assert result.category == HandCategory.FOUR_OF_A_KIND
        assert result.primary_ranks == (14, 4)

    def test_flush_beats_straight_in_same_seven(self):
        """Test a flush is preferred over a straight made from the same cards."""
        result = score("2h 7h 9h Jh Kh Ts 8c")
        assert result.category == HandCategory.FLUSH

    def test_six_high_straight_over_wheel(self):
        """Test A-2-3-4-5-6 plays as a six-high straight."""
        result = score("As 2h 3d 4c 5s 6h Kd")
        assert result.category == HandCategory.STRAIGHT
        assert result.primary_ranks == (6,)

    def test_full_house_from_two_trips(self):
        """Test two sets of trips make the higher full house."""
        result = score("Ks Kh Kd 9c 9s 9h 2d")
        assert result.category == HandCategory.FULL_HOUSE
        assert result.primary_ranks == (13, 9)

    def test_too_few_cards(self):
        with pytest.raises(ValueError):
            score("As Kh 9d 7c")

    def test_too_many_cards(self):
        with pytest.raises(ValueError):
            score("As Kh 9d 7c 2s 3s 4s 5s")

    def test_duplicate_cards(self):
        with pytest.raises(ValueError):
            score("As As 9d 7c 2s")


class TestHandComparison:
    """Tests for comparing hands."""

    def test_higher_category_wins(self, royal_flush, straight_flush):
        """Test that higher categories beat lower ones."""
        assert compare_hands(royal_flush, straight_flush) == 1
        assert compare_hands(straight_flush, royal_flush) == -1

    def test_wheel_is_lowest_straight(self, wheel_straight):
        """Test that the wheel loses to a six-high straight."""
        six_high = parse_cards("2s 3h 4d 5c 6s")
        assert compare_hands(six_high, wheel_straight) == 1

    def test_kicker_decides(self):
        """Test that kicker determines winner for same pair."""
        assert compare_hands(parse_cards("As Ah Kd Qc Js"), parse_cards("Ac Ad Kh Qs Ts")) == 1

    def test_second_pair_decides(self):
        """Test two pair comparison on the lower pair."""
        assert compare_hands(parse_cards("As Ah Kd Kc 2s"), parse_cards("Ac Ad Qh Qs Js")) == 1

    def test_full_house_trips_first(self):
        """Test full house compares the trips before the pair."""
        assert compare_hands(parse_cards("3s 3h 3d 2c 2s"), parse_cards("2h 2d 2c As Ah")) == 1

    def test_split_ignores_suits(self):
        """Test that identical ranks in different suits tie."""
        first = score("As Kh 9d 7c 2s")
        second = score("Ad Ks 9c 7h 2d")
        assert first == second
        assert hash(first) == hash(second)
        assert compare_hands(parse_cards("As Kh 9d 7c 2s"), parse_cards("Ad Ks 9c 7h 2d")) == 0

    def test_board_plays(self):
        """Test two players playing the board tie."""
        board = parse_cards("As Ks Qs Js Ts")
        assert compare_hands(parse_cards("2h 3h") + board, parse_cards("4c 5c") + board) == 0

    def test_max_picks_best(self):
        scores = [score("As Kh 9d 7c 2s"), score("9s 8h 7d 6c 5s"), score("7s 7h 7d Kc 2s")]
        assert max(scores).category == HandCategory.STRAIGHT


class TestHandDescription:
    """Tests for hand descriptions."""

    @pytest.mark.parametrize("cards,expected", [
        ("As Ks Qs Js Ts", "Royal Flush"),
        ("9h 8h 7h 6h 5h", "Straight Flush, Nine high"),
        ("As Ah Ad Ac Ks", "Four of a Kind, Aces"),
        ("As Ah Ad Kc Ks", "Full House, Aces full of Kings"),
        ("Ah Jh 9h 6h 2h", "Flush, Ace high"),
        ("As 2h 3d 4c 5s", "Straight, Five high (Wheel)"),
        ("7s 7h 7d Kc 2s", "Three of a Kind, Sevens"),
        ("As Ah 6d 6c Qs", "Two Pair, Aces and Sixes"),
        ("6s 6h Kd Qc Js", "Pair of Sixes"),
        ("As Kh 9d 7c 2s", "High Card, Ace"),
    ])
    def test_descriptions(self, cards, expected):
        assert get_hand_description(score(cards)) == expected

    def test_name(self, royal_flush):
        assert evaluate_hand(royal_flush).name == "Royal Flush"
