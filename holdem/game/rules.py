"""Seat navigation, dealer rotation, blind posting and first-to-act rules."""
from __future__ import annotations
import time
from dataclasses import replace
from typing import Optional, Sequence, Tuple

from holdem.game.game_state import ActionType, GameState, Player, PlayerAction, PlayerStatus


def next_active_seat(players: Sequence[Player], from_index: int) -> int:
    """Index of the next ACTIVE player after from_index (wrapping), or -1."""
    n = len(players)
    for offset in range(1, n + 1):
        idx = (from_index + offset) % n
        if players[idx].status == PlayerStatus.ACTIVE:
            return idx
    return -1


def next_seat_with_chips(players: Sequence[Player], from_index: int) -> int:
    n = len(players)
    for offset in range(1, n + 1):
        idx = (from_index + offset) % n
        if players[idx].chips > 0:
            return idx
    return -1


def advance_dealer(state: GameState) -> GameState:
    """Move the button to the next seat that still has chips."""
    new_dealer = next_seat_with_chips(state.players, state.dealer_position)
    if new_dealer == -1:
        new_dealer = state.dealer_position
    players = tuple(replace(p, is_dealer=(i == new_dealer)) for i, p in enumerate(state.players))
    return replace(state, dealer_position=new_dealer, players=players)


def get_blind_indices(state: GameState) -> Tuple[int, int]:
    """
    Return (small_blind_index, big_blind_index) for the current dealer.
    Heads-up rule: the dealer posts the small blind.
    """
    players = state.players
    n_active = sum(1 for p in players if p.status == PlayerStatus.ACTIVE)

    if n_active == 2 and players[state.dealer_position].status == PlayerStatus.ACTIVE:
        sb_index = state.dealer_position
    else:
        sb_index = next_active_seat(players, state.dealer_position)

    bb_index = next_active_seat(players, sb_index)
    return sb_index, bb_index


def _post(state: GameState, index: int, amount: int, now: float) -> GameState:
    player = state.players[index]
    before = player.chips
    player = player.commit(amount)
    entry = PlayerAction(
        type=ActionType.BET,
        player_id=player.id,
        timestamp=now,
        amount=before - player.chips,
        phase=state.phase,
    )
    new_state = state.with_player(index, player)
    return replace(new_state, action_log=new_state.action_log + (entry,))


def post_blinds(state: GameState, now: Optional[float] = None) -> GameState:
    """
    Post both blinds. A short stack posts what it has and is all-in.
    Blinds go into the action log as bets.
    """
    now = time.time() if now is None else now
    sb_idx, bb_idx = get_blind_indices(state)
    state = _post(state, sb_idx, state.small_blind, now)
    state = _post(state, bb_idx, state.big_blind, now)
    return state


def first_to_act_preflop(state: GameState, big_blind_index: int) -> int:
    """
    First player to act preflop: the seat after the big blind.
    Heads-up that is the dealer, who posted the small blind.
    """
    return next_active_seat(state.players, big_blind_index)


def first_to_act_postflop(state: GameState) -> int:
    """First active player clockwise from the dealer."""
    return next_active_seat(state.players, state.dealer_position)
