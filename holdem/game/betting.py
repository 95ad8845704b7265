"""
Fixed-limit betting rules.

Every function here is a pure transform over GameState: legal-action
computation, validation, applying an accepted action, and detecting the
end of a betting round.
"""
from __future__ import annotations
import time
from dataclasses import dataclass, replace
from typing import Optional, Set

from holdem.core.errors import IllegalActionError
from holdem.core.pot import calculate_side_pots
from holdem.game.game_state import (
    ActedPlayers,
    ActionType,
    BettingRound,
    GamePhase,
    GameState,
    PlayerAction,
    PlayerStatus,
    Pot,
)

# One bet plus three raises
MAX_RAISES_PER_ROUND = 4


@dataclass(frozen=True)
class ValidActions:
    can_fold: bool
    can_check: bool
    can_call: bool
    call_amount: int        # nominal; the applied amount is capped at the stack
    can_bet: bool
    bet_amount: int
    can_raise: bool
    raise_amount: int

    def allowed(self) -> Set[ActionType]:
        flags = {
            ActionType.FOLD: self.can_fold,
            ActionType.CHECK: self.can_check,
            ActionType.CALL: self.can_call,
            ActionType.BET: self.can_bet,
            ActionType.RAISE: self.can_raise,
        }
        return {action for action, ok in flags.items() if ok}

    def is_allowed(self, action: ActionType) -> bool:
        return action in self.allowed()

    def to_dict(self) -> dict:
        return {
            "can_fold": self.can_fold,
            "can_check": self.can_check,
            "can_call": self.can_call,
            "call_amount": self.call_amount,
            "can_bet": self.can_bet,
            "bet_amount": self.bet_amount,
            "can_raise": self.can_raise,
            "raise_amount": self.raise_amount,
        }


def get_bet_size(phase: GamePhase, big_blind: int) -> int:
    """Small bet (1 BB) preflop and on the flop, big bet (2 BB) on turn and river."""
    if phase in (GamePhase.PREFLOP, GamePhase.FLOP):
        return big_blind
    return big_blind * 2


def get_valid_actions(state: GameState) -> ValidActions:
    """Legal actions for the player whose turn it is."""
    player = state.current_player
    if player is None:
        raise IllegalActionError("No player is due to act")

    betting = state.betting_round
    bet_size = get_bet_size(state.phase, state.big_blind)
    amount_to_call = max(0, betting.current_bet - player.current_bet)

    # Reported only when facing a bet; validate_action accepts a fold regardless
    can_fold = amount_to_call > 0
    can_check = amount_to_call == 0
    # A short stack may still call for whatever it has left (all-in)
    can_call = amount_to_call > 0 and player.chips > 0
    can_bet = betting.current_bet == 0 and player.chips >= bet_size
    can_raise = (
        betting.current_bet > 0
        and betting.raises_this_round < MAX_RAISES_PER_ROUND
        and player.chips >= amount_to_call + bet_size
    )

    return ValidActions(
        can_fold=can_fold,
        can_check=can_check,
        can_call=can_call,
        call_amount=amount_to_call,
        can_bet=can_bet,
        bet_amount=bet_size,
        can_raise=can_raise,
        raise_amount=bet_size,
    )


def validate_action(state: GameState, player_id: str, action: ActionType) -> None:
    """Raise IllegalActionError unless `player_id` may take `action` now."""
    if not state.hand_in_progress:
        raise IllegalActionError(f"No betting in phase {state.phase.value}")

    index = state.player_index(player_id)
    if index == -1:
        raise IllegalActionError(f"Player {player_id} not found")
    if index != state.current_player_index:
        raise IllegalActionError(f"Not {player_id}'s turn")

    player = state.players[index]
    if player.status != PlayerStatus.ACTIVE:
        raise IllegalActionError(f"Player {player_id} is not active ({player.status.value})")

    valid = get_valid_actions(state)
    if action == ActionType.FOLD:
        return
    if action == ActionType.CHECK and not valid.can_check:
        raise IllegalActionError(f"Player {player_id} cannot check (must call {valid.call_amount})")
    if action == ActionType.CALL and not valid.can_call:
        raise IllegalActionError(f"Player {player_id} cannot call - no bet to call or no chips")
    if action == ActionType.BET and not valid.can_bet:
        raise IllegalActionError(f"Player {player_id} cannot bet - already a bet or insufficient chips")
    if action == ActionType.RAISE and not valid.can_raise:
        raise IllegalActionError(f"Player {player_id} cannot raise - cap reached or insufficient chips")


def build_pots(state: GameState) -> tuple:
    """Pot layers implied by the current per-hand contributions."""
    contributions = {p.id: p.total_bet_this_hand for p in state.players}
    live_ids = [p.id for p in state.players if p.is_live]
    return tuple(
        Pot(amount=sp.amount, eligible_players=tuple(sp.eligible_player_ids))
        for sp in calculate_side_pots(contributions, live_ids)
    )


def apply_action(
    state: GameState,
    player_id: str,
    action: ActionType,
    reasoning: Optional[str] = None,
    now: Optional[float] = None,
) -> GameState:
    """
    Apply an already-validated action and return the next state.

    Amounts are fixed by the street; anything the player cannot cover is
    capped at their stack.
    """
    index = state.player_index(player_id)
    if index == -1:
        raise IllegalActionError(f"Player {player_id} not found")
    player = state.players[index]
    betting = state.betting_round
    bet_size = get_bet_size(state.phase, state.big_blind)
    committed: Optional[int] = None

    if action == ActionType.FOLD:
        player = replace(player, status=PlayerStatus.FOLDED)
        acted = betting.acted_players.with_player(player_id)

    elif action == ActionType.CHECK:
        acted = betting.acted_players.with_player(player_id)

    elif action == ActionType.CALL:
        before = player.chips
        player = player.commit(betting.current_bet - player.current_bet)
        committed = before - player.chips
        acted = betting.acted_players.with_player(player_id)

    elif action == ActionType.BET:
        before = player.chips
        player = player.commit(bet_size)
        committed = before - player.chips
        betting = replace(
            betting,
            current_bet=player.current_bet,
            raises_this_round=1,
            last_raiser=player_id,
        )
        # New bet level: everyone else has to respond
        acted = ActedPlayers.only(player_id)

    elif action == ActionType.RAISE:
        before = player.chips
        player = player.commit(betting.current_bet - player.current_bet + bet_size)
        committed = before - player.chips
        betting = replace(
            betting,
            current_bet=max(betting.current_bet, player.current_bet),
            raises_this_round=betting.raises_this_round + 1,
            last_raiser=player_id,
        )
        acted = ActedPlayers.only(player_id)

    else:
        raise IllegalActionError(f"Unknown action: {action}")

    entry = PlayerAction(
        type=action,
        player_id=player_id,
        timestamp=time.time() if now is None else now,
        amount=committed,
        reasoning=reasoning,
        phase=state.phase,
    )
    new_state = replace(
        state.with_player(index, player),
        betting_round=replace(betting, acted_players=acted),
        action_log=state.action_log + (entry,),
    )
    return replace(new_state, pots=build_pots(new_state))


def is_betting_round_complete(state: GameState) -> bool:
    """
    True when at most one player is left in the hand, or when every player
    who can still act has acted since the last bet-level change and matched
    the current bet. All-in players are exempt.
    """
    live = state.live_players
    if len(live) <= 1:
        return True

    betting = state.betting_round
    for p in live:
        if p.status != PlayerStatus.ACTIVE:
            continue
        if p.id not in betting.acted_players:
            return False
        if p.current_bet < betting.current_bet:
            return False
    return True


def reset_betting_round(state: GameState, phase: GamePhase) -> GameState:
    """Fresh betting round for `phase`; current bets go back to zero."""
    return replace(
        state,
        phase=phase,
        betting_round=BettingRound(
            phase=phase,
            current_bet=0,
            min_raise=get_bet_size(phase, state.big_blind),
        ),
        players=tuple(replace(p, current_bet=0) for p in state.players),
    )
