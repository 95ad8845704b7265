"""
Hand lifecycle for a fixed-limit Texas Hold'em table.

State machine:
  WAITING → PREFLOP → FLOP → TURN → RIVER → SHOWDOWN → (start_hand) → PREFLOP ...
  COMPLETE once fewer than two players have chips.

Every public function takes a GameState and returns a new one; the input is
never modified. Nothing here starts the next hand on its own.
"""
from __future__ import annotations
import logging
import random
import uuid
from dataclasses import dataclass, replace
from typing import Optional, Union

from holdem.core.card import create_shuffled_deck, draw
from holdem.core.errors import IllegalActionError
from holdem.core.pot import settle
from holdem.game.betting import (
    apply_action,
    build_pots,
    get_bet_size,
    get_valid_actions,
    is_betting_round_complete,
    reset_betting_round,
    validate_action,
)
from holdem.game.config import GameConfig
from holdem.game.constants import FLOP_CARDS, HOLE_CARDS_COUNT, RIVER_CARDS, TURN_CARDS
from holdem.game.game_state import (
    STREETS,
    ActionType,
    BettingRound,
    GamePhase,
    GameState,
    Player,
    PlayerStatus,
    Winner,
)
from holdem.game.rules import (
    advance_dealer,
    first_to_act_postflop,
    first_to_act_preflop,
    get_blind_indices,
    next_active_seat,
    post_blinds,
)

logger = logging.getLogger(__name__)

_CARDS_FOR_STREET = {
    GamePhase.FLOP: FLOP_CARDS,
    GamePhase.TURN: TURN_CARDS,
    GamePhase.RIVER: RIVER_CARDS,
}

__all__ = [
    "ActionOutcome",
    "create_game",
    "get_game_winner",
    "get_valid_actions",
    "is_game_over",
    "process_action",
    "start_hand",
    "total_chips",
    "try_process_action",
]


@dataclass(frozen=True)
class ActionOutcome:
    """Result of try_process_action: the next state, or the unchanged one plus the error."""
    state: GameState
    error: Optional[IllegalActionError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


# ---------------------------------------------------------------------------
# Table setup
# ---------------------------------------------------------------------------

def create_game(config: Optional[GameConfig] = None, game_id: Optional[str] = None) -> GameState:
    """Build a table in WAITING phase. Raises MalformedConfigError."""
    config = config or GameConfig()
    config.validate()

    n = len(config.players)
    # Button sits on the last seat so the first hand deals it to seat 0
    dealer = n - 1
    players = tuple(
        Player(
            id=seat.id,
            name=seat.name,
            model=seat.model,
            chips=config.starting_chips,
            seat_position=i,
            is_dealer=(i == dealer),
        )
        for i, seat in enumerate(config.players)
    )
    return GameState(
        id=game_id or uuid.uuid4().hex[:8],
        small_blind=config.small_blind,
        big_blind=config.big_blind,
        players=players,
        dealer_position=dealer,
        betting_round=BettingRound(GamePhase.WAITING, min_raise=config.big_blind),
    )


def start_hand(
    state: GameState,
    rng: Optional[random.Random] = None,
    now: Optional[float] = None,
) -> GameState:
    """
    Deal the next hand: rotate the button, post blinds, deal hole cards and
    hand the action to the first preflop player.
    """
    if state.hand_in_progress:
        raise IllegalActionError(f"Hand {state.hand_number} is still in progress")

    players = tuple(
        replace(
            p,
            hole_cards=(),
            current_bet=0,
            total_bet_this_hand=0,
            status=PlayerStatus.ACTIVE if p.chips > 0 else PlayerStatus.OUT,
            is_turn=False,
        )
        for p in state.players
    )
    state = replace(state, players=players, current_player_index=-1, pots=())

    if len(state.active_players) < 2:
        logger.info(f"Table {state.id} complete after {state.hand_number} hands")
        return replace(
            state,
            phase=GamePhase.COMPLETE,
            betting_round=BettingRound(GamePhase.COMPLETE),
        )

    state = advance_dealer(state)
    state = replace(
        state,
        phase=GamePhase.PREFLOP,
        deck=tuple(create_shuffled_deck(rng)),
        community_cards=(),
        action_log=(),
        winners=(),
        hand_number=state.hand_number + 1,
        betting_round=BettingRound(
            phase=GamePhase.PREFLOP,
            current_bet=state.big_blind,
            min_raise=get_bet_size(GamePhase.PREFLOP, state.big_blind),
        ),
    )

    _, bb_idx = get_blind_indices(state)
    state = post_blinds(state, now)
    state = _deal_hole_cards(state)
    state = replace(state, pots=build_pots(state))

    dealer = state.players[state.dealer_position]
    logger.info(f"Table {state.id} hand #{state.hand_number} dealt, button {dealer.name}")

    if not _needs_action(state):
        return _advance_phase(state)
    return _set_current_player(state, first_to_act_preflop(state, bb_idx))


def _deal_hole_cards(state: GameState) -> GameState:
    deck = list(state.deck)
    hole = {p.id: [] for p in state.players if p.is_live}
    for _ in range(HOLE_CARDS_COUNT):
        for p in state.players:
            if p.id in hole:
                card, deck = draw(deck, 1)
                hole[p.id].extend(card)
    players = tuple(
        replace(p, hole_cards=tuple(hole[p.id])) if p.id in hole else p
        for p in state.players
    )
    return replace(state, players=players, deck=tuple(deck))


# ---------------------------------------------------------------------------
# Actions
# ---------------------------------------------------------------------------

def process_action(
    state: GameState,
    player_id: str,
    action: Union[ActionType, str],
    reasoning: Optional[str] = None,
    now: Optional[float] = None,
) -> GameState:
    """
    Validate and apply one action, then move the hand along: end it on a
    fold-out, advance the street when the round is complete, or pass the
    turn to the next active seat.

    Raises IllegalActionError; the caller's state is left untouched.
    """
    try:
        action = _coerce_action(action)
        validate_action(state, player_id, action)
    except IllegalActionError as e:
        logger.warning(f"Rejected {action} from {player_id} in table {state.id}: {e}")
        raise

    new_state = apply_action(state, player_id, action, reasoning=reasoning, now=now)

    if len(new_state.live_players) <= 1:
        return _end_hand(new_state)

    if is_betting_round_complete(new_state):
        return _advance_phase(new_state)

    next_idx = next_active_seat(new_state.players, new_state.current_player_index)
    return _set_current_player(new_state, next_idx)


def try_process_action(
    state: GameState,
    player_id: str,
    action: Union[ActionType, str],
    reasoning: Optional[str] = None,
    now: Optional[float] = None,
) -> ActionOutcome:
    """Like process_action, but returns the rejection instead of raising it."""
    try:
        return ActionOutcome(process_action(state, player_id, action, reasoning=reasoning, now=now))
    except IllegalActionError as e:
        return ActionOutcome(state, e)


def _coerce_action(action: Union[ActionType, str]) -> ActionType:
    if isinstance(action, ActionType):
        return action
    try:
        return ActionType(str(action).strip().lower())
    except ValueError:
        raise IllegalActionError(f"Invalid action type: {action!r}") from None


# ---------------------------------------------------------------------------
# Phase transitions
# ---------------------------------------------------------------------------

def _needs_action(state: GameState) -> bool:
    """Whether anybody can still make a decision in the current round."""
    active = state.active_players
    if len(active) >= 2:
        return True
    if len(active) == 1:
        return active[0].current_bet < state.betting_round.current_bet
    return False


def _advance_phase(state: GameState) -> GameState:
    """Deal the next street and open its betting round, or settle after the river."""
    position = STREETS.index(state.phase)
    if position == len(STREETS) - 1:
        return _end_hand(state)

    next_phase = STREETS[position + 1]
    drawn, deck = draw(state.deck, _CARDS_FOR_STREET[next_phase])
    state = replace(
        state,
        deck=tuple(deck),
        community_cards=state.community_cards + tuple(drawn),
    )
    state = reset_betting_round(state, next_phase)
    logger.debug(
        f"Table {state.id} → {next_phase.value}: "
        f"{' '.join(str(c) for c in state.community_cards)}"
    )

    if not _needs_action(state):
        # Everyone left is all-in (or only one can act): run out the board
        return _advance_phase(_set_current_player(state, -1))

    return _set_current_player(state, first_to_act_postflop(state))


def _set_current_player(state: GameState, index: int) -> GameState:
    players = tuple(
        replace(p, is_turn=(i == index and p.status == PlayerStatus.ACTIVE))
        for i, p in enumerate(state.players)
    )
    return replace(state, players=players, current_player_index=index)


def _end_hand(state: GameState) -> GameState:
    """Settle every pot layer and record the winners."""
    live = state.live_players
    awards = settle(
        contributions={p.id: p.total_bet_this_hand for p in state.players},
        live_player_ids=[p.id for p in live],
        hole_cards={p.id: p.hole_cards for p in live},
        community_cards=state.community_cards,
    )
    won = {a.player_id: a.amount for a in awards}
    players = tuple(
        replace(p, chips=p.chips + won.get(p.id, 0), is_turn=False)
        for p in state.players
    )
    winners = tuple(
        Winner(player_id=a.player_id, amount=a.amount, hand=a.hand, pots_won=tuple(a.pots_won))
        for a in awards
        if a.amount > 0
    )
    for w in winners:
        hand = w.hand.name if w.hand else "uncontested"
        logger.info(f"Table {state.id} hand #{state.hand_number}: {w.player_id} wins {w.amount} ({hand})")

    return replace(
        state,
        phase=GamePhase.SHOWDOWN,
        players=players,
        pots=(),
        winners=winners,
        current_player_index=-1,
        betting_round=replace(state.betting_round, phase=GamePhase.SHOWDOWN),
    )


# ---------------------------------------------------------------------------
# Table-level queries
# ---------------------------------------------------------------------------

def is_game_over(state: GameState) -> bool:
    """True once at most one player has chips between hands."""
    if state.phase == GamePhase.COMPLETE:
        return True
    if state.hand_in_progress:
        return False
    return sum(1 for p in state.players if p.chips > 0) <= 1


def get_game_winner(state: GameState) -> Optional[Player]:
    if not is_game_over(state):
        return None
    with_chips = [p for p in state.players if p.chips > 0]
    return with_chips[0] if len(with_chips) == 1 else None


def total_chips(state: GameState) -> int:
    """Stacks plus everything in the pot; constant across every transition."""
    return sum(p.chips for p in state.players) + state.pot_total
