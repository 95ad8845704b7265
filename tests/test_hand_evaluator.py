"""Unit tests for hand_evaluator.py — categories, kickers and comparisons."""
import random

import pytest

from holdem.core.card import create_shuffled_deck, parse_cards
from holdem.core.errors import InsufficientCardsError
from holdem.core.hand_evaluator import (
    HandRank,
    compare_hands,
    determine_winners,
    evaluate_best_hand,
    evaluate_cards,
    evaluate_five,
)


def _hand(text):
    return evaluate_cards(parse_cards(*text.split()))


class TestCategories:
    @pytest.mark.parametrize("text, rank", [
        ("As Ks Qs Js 10s", HandRank.ROYAL_FLUSH),
        ("9h 8h 7h 6h 5h", HandRank.STRAIGHT_FLUSH),
        ("7c 7d 7h 7s 2c", HandRank.FOUR_OF_A_KIND),
        ("Kc Kd Kh 4s 4c", HandRank.FULL_HOUSE),
        ("Ad 9d 7d 4d 2d", HandRank.FLUSH),
        ("9c 8d 7h 6s 5c", HandRank.STRAIGHT),
        ("Qc Qd Qh 8s 2c", HandRank.THREE_OF_A_KIND),
        ("Jc Jd 5h 5s 2c", HandRank.TWO_PAIR),
        ("10c 10d 8h 5s 2c", HandRank.ONE_PAIR),
        ("Ac Jd 8h 5s 2c", HandRank.HIGH_CARD),
    ])
    def test_five_card_category(self, text, rank):
        assert _hand(text).rank == rank

    def test_names(self):
        assert _hand("Kc Kd Kh 4s 4c").name == "Full House"
        assert _hand("Ac Jd 8h 5s 2c").name == "High Card"


class TestStraights:
    def test_wheel_is_five_high(self):
        hand = _hand("Ac 2d 3h 4s 5c")
        assert hand.rank == HandRank.STRAIGHT
        assert hand.kickers == (5,)

    def test_wheel_loses_to_six_high(self):
        assert _hand("Ac 2d 3h 4s 5c") < _hand("2d 3h 4s 5c 6d")

    def test_steel_wheel(self):
        hand = _hand("As 2s 3s 4s 5s")
        assert hand.rank == HandRank.STRAIGHT_FLUSH
        assert hand.kickers == (5,)

    def test_no_wraparound(self):
        assert _hand("Qc Kd Ah 2s 3c").rank == HandRank.HIGH_CARD

    def test_best_straight_of_seven(self):
        hand = _hand("4c 5d 6h 7s 8c 9d 2h")
        assert hand.rank == HandRank.STRAIGHT
        assert hand.kickers == (9,)


class TestKickers:
    def test_two_pair_kickers(self):
        assert _hand("Kc Kd 9h 9s 4c").kickers == (13, 9, 4)

    def test_full_house_kickers(self):
        assert _hand("4c 4d Kh Ks Kc").kickers == (13, 4)

    def test_flush_kickers_descending(self):
        assert _hand("2d 9d Ad 4d 7d").kickers == (14, 9, 7, 4, 2)

    def test_pair_kicker_decides(self):
        assert _hand("Ac Ad Kh 7s 2c") > _hand("Ac Ad Qh 7s 2c")

    def test_exact_tie(self):
        a = _hand("Ac Ad Kh 7s 2c")
        b = _hand("As Ah Kd 7c 2d")
        assert compare_hands(a, b) == 0
        assert a == b


class TestBestOfSeven:
    def test_full_house_beats_flush(self):
        board = parse_cards("Ah", "Ad", "7h", "2h", "9c")
        flush = evaluate_best_hand(parse_cards("Kh", "Qh"), board)
        boat = evaluate_best_hand(parse_cards("As", "7c"), board)
        assert flush.rank == HandRank.FLUSH
        assert boat.rank == HandRank.FULL_HOUSE
        assert determine_winners([flush, boat]) == [1]

    def test_order_independent(self):
        cards = parse_cards("Kh", "Qh", "Ah", "Ad", "7h", "2h", "9c")
        expected = evaluate_cards(cards)
        rng = random.Random(5)
        for _ in range(10):
            shuffled = list(cards)
            rng.shuffle(shuffled)
            result = evaluate_cards(shuffled)
            assert result == expected
            assert result.cards == expected.cards

    def test_six_cards(self):
        assert _hand("9c 9d 9h 4s 4c 2d").rank == HandRank.FULL_HOUSE

    def test_hand_holds_five_cards(self):
        assert len(_hand("Kh Qh Ah Ad 7h 2h 9c").cards) == 5


class TestMonotonicity:
    # One seven-card holding per category, weakest first
    ladder = [
        "Ac Jd 8h 5s 2c 3d 9h",
        "10c 10d 8h 5s 2c 3d Kh",
        "Jc Jd 5h 5s 2c 9d Kh",
        "Qc Qd Qh 8s 2c 4d 6h",
        "9c 8d 7h 6s 5c 2d Kh",
        "Ad 9d 7d 4d 2d Kc Qh",
        "Kc Kd Kh 4s 4c 8d 2h",
        "7c 7d 7h 7s 2c 9d Jh",
        "9h 8h 7h 6h 5h 2c Kd",
        "As Ks Qs Js 10s 2c 3d",
    ]

    def test_ladder_lands_in_every_category(self):
        assert [_hand(text).rank for text in self.ladder] == list(HandRank)

    def test_higher_category_always_wins(self):
        hands = [_hand(text) for text in self.ladder]
        for i, weaker in enumerate(hands):
            for stronger in hands[i + 1:]:
                assert compare_hands(weaker, stronger) < 0
                assert compare_hands(stronger, weaker) > 0
                assert determine_winners([stronger, weaker]) == [0]

    def test_random_deals_order_by_category(self):
        rng = random.Random(2024)
        seen = set()
        for _ in range(300):
            deck = create_shuffled_deck(rng)
            a, b = evaluate_cards(deck[:7]), evaluate_cards(deck[7:14])
            seen.update((a.rank, b.rank))
            if a.rank > b.rank:
                assert compare_hands(a, b) > 0
            elif a.rank < b.rank:
                assert compare_hands(a, b) < 0
            assert compare_hands(a, b) == -compare_hands(b, a)
        assert len(seen) >= 5


class TestErrors:
    def test_fewer_than_five_cards(self):
        with pytest.raises(InsufficientCardsError):
            evaluate_cards(parse_cards("Ah", "Kh", "Qh", "Jh"))

    def test_more_than_seven_cards(self):
        with pytest.raises(InsufficientCardsError):
            evaluate_cards(parse_cards("2c", "3c", "4c", "5c", "6c", "7c", "8c", "9c"))

    def test_preflop_evaluation_rejected(self):
        with pytest.raises(InsufficientCardsError):
            evaluate_best_hand(parse_cards("Ah", "Kh"), [])

    def test_evaluate_five_requires_five(self):
        with pytest.raises(InsufficientCardsError):
            evaluate_five(parse_cards("Ah", "Kh", "Qh", "Jh", "10h", "9h"))


class TestDetermineWinners:
    def test_single_winner(self):
        hands = [_hand("Ac Jd 8h 5s 2c"), _hand("10c 10d 8h 5s 2c"), _hand("Kc Jd 8h 5s 2c")]
        assert determine_winners(hands) == [1]

    def test_split(self):
        hands = [_hand("Ac Ad Kh 7s 2c"), _hand("Qc Jd 8h 5s 2c"), _hand("As Ah Kd 7c 2d")]
        assert determine_winners(hands) == [0, 2]

    def test_later_better_hand_replaces_ties(self):
        hands = [_hand("Ac Jd 8h 5s 2c"), _hand("As Jh 8d 5c 2d"), _hand("9c 9d 8h 5s 2c")]
        assert determine_winners(hands) == [2]

    def test_empty(self):
        assert determine_winners([]) == []
