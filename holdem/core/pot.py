"""Pot layering (side pots) and hand-end settlement."""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Mapping, Optional, Sequence

from holdem.core.card import Card
from holdem.core.hand_evaluator import EvaluatedHand, determine_winners, evaluate_best_hand


@dataclass
class SidePot:
    amount: int
    eligible_player_ids: List[str]

    def __repr__(self) -> str:
        return f"SidePot(amount={self.amount}, eligible={self.eligible_player_ids})"


@dataclass
class Award:
    """Chips won by one player across every layer they took part in."""
    player_id: str
    amount: int
    hand: Optional[EvaluatedHand] = None
    pots_won: List[int] = field(default_factory=list)   # indexes into the layer list


def calculate_side_pots(
    contributions: Mapping[str, int],
    live_player_ids: Optional[Iterable[str]] = None,
) -> List[SidePot]:
    """
    Split total contributions into layers, smallest cap first.

    contributions: player_id -> chips put in this hand (folded players included).
    live_player_ids: players who have not folded. If None, every contributor
        is considered live.

    Layer caps are the distinct non-zero contribution levels of live players.
    Each layer takes (cap - previous cap) from every contributor who reached
    it, folded or not; only live players at or above the cap may win it.
    Folded money above the highest live cap is added to the top layer.
    """
    contributors = {pid: amt for pid, amt in contributions.items() if amt > 0}
    if not contributors:
        return []

    if live_player_ids is None:
        live = list(contributors)
    else:
        live = [pid for pid in live_player_ids if contributors.get(pid, 0) > 0]

    levels = sorted({contributors[pid] for pid in live})
    pots: List[SidePot] = []
    previous = 0
    for level in levels:
        amount = 0
        for amt in contributors.values():
            amount += max(0, min(amt, level) - previous)
        eligible = [pid for pid in live if contributors[pid] >= level]
        if amount > 0:
            pots.append(SidePot(amount=amount, eligible_player_ids=eligible))
        previous = level

    leftover = sum(max(0, amt - previous) for amt in contributors.values())
    if leftover > 0:
        if pots:
            pots[-1].amount += leftover
        else:
            # Nobody live put anything in; the money has no eligible owner yet
            pots.append(SidePot(amount=leftover, eligible_player_ids=list(live)))
    return pots


def split_pot(amount: int, winner_ids: Sequence[str]) -> Dict[str, int]:
    """
    Divide a layer evenly among tied winners.

    The odd chips from a non-even split all go to the first winner in
    iteration order.
    """
    if not winner_ids:
        return {}
    share, remainder = divmod(amount, len(winner_ids))
    result: Dict[str, int] = {}
    for i, pid in enumerate(winner_ids):
        result[pid] = result.get(pid, 0) + share + (remainder if i == 0 else 0)
    return result


def settle(
    contributions: Mapping[str, int],
    live_player_ids: Sequence[str],
    hole_cards: Mapping[str, Sequence[Card]],
    community_cards: Sequence[Card],
) -> List[Award]:
    """
    Award every contributed chip.

    live_player_ids must be in seat order; that order decides who gets the
    odd chip of a split layer. With a single live player the whole pot goes
    to them and no hand is evaluated.
    """
    total = sum(amt for amt in contributions.values() if amt > 0)
    if len(live_player_ids) == 1:
        return [Award(player_id=live_player_ids[0], amount=total, pots_won=[0])]

    pots = calculate_side_pots(contributions, live_player_ids)
    hands: Dict[str, EvaluatedHand] = {
        pid: evaluate_best_hand(hole_cards[pid], community_cards)
        for pid in live_player_ids
    }

    awards: Dict[str, Award] = {}
    for index, pot in enumerate(pots):
        eligible = pot.eligible_player_ids
        winner_indices = determine_winners([hands[pid] for pid in eligible])
        winner_ids = [eligible[i] for i in winner_indices]
        for pid, amount in split_pot(pot.amount, winner_ids).items():
            award = awards.get(pid)
            if award is None:
                award = awards[pid] = Award(player_id=pid, amount=0, hand=hands[pid])
            award.amount += amount
            award.pots_won.append(index)
    return list(awards.values())
