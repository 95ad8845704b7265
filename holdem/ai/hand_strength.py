"""
Hand strength estimates for rule-based seats.

Preflop: Chen formula score, normalised to [0, 1].
Postflop: Monte Carlo equity against random opponent holdings.
"""
from __future__ import annotations
import random
from typing import Optional, Sequence

from holdem.core.card import Card, create_deck
from holdem.core.hand_evaluator import compare_hands, evaluate_cards


def chen_score(hole_cards: Sequence[Card]) -> float:
    """
    Chen formula: approximate preflop hand strength as a score 0-20.
    Higher = stronger hand.
    """
    if len(hole_cards) != 2:
        return 0.0

    c1, c2 = sorted(hole_cards, key=lambda c: c.value, reverse=True)
    r1, r2 = c1.value, c2.value
    suited = c1.suit == c2.suit
    gap = r1 - r2

    score_map = {14: 10, 13: 8, 12: 7, 11: 6}
    score = score_map.get(r1, r1 / 2.0)

    # Pair: double it (min 5)
    if r1 == r2:
        return max(score * 2, 5)

    if suited:
        score += 2

    gap_penalties = {0: 0, 1: 0, 2: -1, 3: -2, 4: -4}
    score += gap_penalties.get(gap, -5)

    # Connected bonus (straight potential)
    if gap <= 1 and r1 <= 11:
        score += 1

    return max(score, 0)


def preflop_strength(hole_cards: Sequence[Card]) -> float:
    """Chen score normalized to [0, 1] range."""
    return min(chen_score(hole_cards) / 20.0, 1.0)


def monte_carlo_equity(
    hole_cards: Sequence[Card],
    community_cards: Sequence[Card],
    num_opponents: int,
    simulations: int = 200,
    rng: Optional[random.Random] = None,
) -> float:
    """
    Estimate win equity for our hand vs `num_opponents` random hands.

    Returns a float [0, 1] (ties count as 0.5).
    """
    rng = rng or random.Random()
    known = set(hole_cards) | set(community_cards)
    deck = [c for c in create_deck() if c not in known]
    board_needed = 5 - len(community_cards)
    num_opponents = max(1, num_opponents)

    wins = 0.0
    for _ in range(simulations):
        rng.shuffle(deck)
        board = list(community_cards) + deck[:board_needed]
        ptr = board_needed

        ours = evaluate_cards(list(hole_cards) + board)
        best_opponent = None
        for _ in range(num_opponents):
            theirs = evaluate_cards(deck[ptr:ptr + 2] + board)
            ptr += 2
            if best_opponent is None or theirs > best_opponent:
                best_opponent = theirs

        cmp = compare_hands(ours, best_opponent)
        if cmp > 0:
            wins += 1.0
        elif cmp == 0:
            wins += 0.5

    return wins / simulations


def estimate_strength(
    hole_cards: Sequence[Card],
    community_cards: Sequence[Card],
    num_opponents: int,
    simulations: int = 200,
    rng: Optional[random.Random] = None,
) -> float:
    if len(hole_cards) != 2:
        return 0.0
    if not community_cards:
        return preflop_strength(hole_cards)
    return monte_carlo_equity(hole_cards, community_cards, num_opponents, simulations, rng)
