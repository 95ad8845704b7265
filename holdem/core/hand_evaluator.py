"""
Best-five-of-seven hand evaluator.

Every 5-card subset of the available cards is scored independently as
(category, kickers) and the maximum is kept. Categories run from
HIGH_CARD (0) to ROYAL_FLUSH (9); kickers break ties inside a category:

  Quads / full house / trips / pairs:  ranks by (count desc, value desc)
  Flush / high card:                   all five values, descending
  Straight / straight flush:           the straight's high card only
                                       (A-2-3-4-5 "wheel" counts as 5-high)
"""
from __future__ import annotations
from collections import Counter
from dataclasses import dataclass
from enum import IntEnum
from functools import total_ordering
from itertools import combinations
from typing import List, Sequence, Tuple

from holdem.core.card import Card
from holdem.core.errors import InsufficientCardsError


class HandRank(IntEnum):
    HIGH_CARD = 0
    ONE_PAIR = 1
    TWO_PAIR = 2
    THREE_OF_A_KIND = 3
    STRAIGHT = 4
    FLUSH = 5
    FULL_HOUSE = 6
    FOUR_OF_A_KIND = 7
    STRAIGHT_FLUSH = 8
    ROYAL_FLUSH = 9


HAND_RANK_NAMES = {
    HandRank.HIGH_CARD: "High Card",
    HandRank.ONE_PAIR: "One Pair",
    HandRank.TWO_PAIR: "Two Pair",
    HandRank.THREE_OF_A_KIND: "Three of a Kind",
    HandRank.STRAIGHT: "Straight",
    HandRank.FLUSH: "Flush",
    HandRank.FULL_HOUSE: "Full House",
    HandRank.FOUR_OF_A_KIND: "Four of a Kind",
    HandRank.STRAIGHT_FLUSH: "Straight Flush",
    HandRank.ROYAL_FLUSH: "Royal Flush",
}

_WHEEL = (2, 3, 4, 5, 14)


@total_ordering
@dataclass(frozen=True)
class EvaluatedHand:
    rank: HandRank
    cards: Tuple[Card, ...]     # the five cards making the hand
    kickers: Tuple[int, ...]    # tiebreaker values, most significant first

    @property
    def name(self) -> str:
        return HAND_RANK_NAMES[self.rank]

    def _key(self) -> Tuple[int, Tuple[int, ...]]:
        return int(self.rank), self.kickers

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, EvaluatedHand):
            return NotImplemented
        return self._key() == other._key()

    def __lt__(self, other: "EvaluatedHand") -> bool:
        return self._key() < other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    def __str__(self) -> str:
        return f"{self.name} ({' '.join(str(c) for c in self.cards)})"


def _straight_high(values: List[int]) -> int:
    """High card of a straight, or 0 if the five values are not one."""
    ordered = sorted(values)
    if tuple(ordered) == _WHEEL:
        return 5
    for lower, upper in zip(ordered, ordered[1:]):
        if upper != lower + 1:
            return 0
    return ordered[-1]


def evaluate_five(cards: Sequence[Card]) -> EvaluatedHand:
    """Score exactly five cards."""
    if len(cards) != 5:
        raise InsufficientCardsError(f"evaluate_five requires exactly 5 cards, got {len(cards)}")

    values = [c.value for c in cards]
    counts = Counter(values)
    shape = sorted(counts.values(), reverse=True)
    # ranks ordered by (count desc, value desc)
    grouped = tuple(v for v, _ in sorted(counts.items(), key=lambda kv: (kv[1], kv[0]), reverse=True))
    descending = tuple(sorted(values, reverse=True))

    flush = len({c.suit for c in cards}) == 1
    straight_high = _straight_high(values)
    hand = tuple(cards)

    if flush and straight_high:
        if straight_high == 14:
            return EvaluatedHand(HandRank.ROYAL_FLUSH, hand, (14,))
        return EvaluatedHand(HandRank.STRAIGHT_FLUSH, hand, (straight_high,))
    if shape[0] == 4:
        return EvaluatedHand(HandRank.FOUR_OF_A_KIND, hand, grouped)
    if shape[:2] == [3, 2]:
        return EvaluatedHand(HandRank.FULL_HOUSE, hand, grouped)
    if flush:
        return EvaluatedHand(HandRank.FLUSH, hand, descending)
    if straight_high:
        return EvaluatedHand(HandRank.STRAIGHT, hand, (straight_high,))
    if shape[0] == 3:
        return EvaluatedHand(HandRank.THREE_OF_A_KIND, hand, grouped)
    if shape[:2] == [2, 2]:
        return EvaluatedHand(HandRank.TWO_PAIR, hand, grouped)
    if shape[0] == 2:
        return EvaluatedHand(HandRank.ONE_PAIR, hand, grouped)
    return EvaluatedHand(HandRank.HIGH_CARD, hand, descending)


def evaluate_cards(cards: Sequence[Card]) -> EvaluatedHand:
    """Best 5-card hand from 5–7 cards."""
    n = len(cards)
    if n < 5:
        raise InsufficientCardsError(f"Need at least 5 cards to evaluate a hand, got {n}")
    if n > 7:
        raise InsufficientCardsError(f"Cannot evaluate more than 7 cards, got {n}")

    # Canonical order so equal-strength subsets always resolve the same way
    ordered = sorted(cards, key=lambda c: (c.value, c.suit.value), reverse=True)
    best = None
    for combo in combinations(ordered, 5):
        hand = evaluate_five(combo)
        if best is None or hand > best:
            best = hand
    return best


def evaluate_best_hand(hole_cards: Sequence[Card], community_cards: Sequence[Card]) -> EvaluatedHand:
    return evaluate_cards(list(hole_cards) + list(community_cards))


def compare_hands(a: EvaluatedHand, b: EvaluatedHand) -> int:
    """Negative if a < b, 0 on an exact tie, positive if a > b."""
    if a.rank != b.rank:
        return int(a.rank) - int(b.rank)
    for ka, kb in zip(a.kickers, b.kickers):
        if ka != kb:
            return ka - kb
    return 0


def determine_winners(hands: Sequence[EvaluatedHand]) -> List[int]:
    """Indices of the best hand(s); more than one on a split."""
    if not hands:
        return []
    best_indices = [0]
    best = hands[0]
    for i in range(1, len(hands)):
        cmp = compare_hands(hands[i], best)
        if cmp > 0:
            best = hands[i]
            best_indices = [i]
        elif cmp == 0:
            best_indices.append(i)
    return best_indices
