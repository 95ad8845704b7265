"""Unit tests for betting.py — legal actions, validation and round completion."""
from dataclasses import replace

import pytest

from holdem.core.errors import IllegalActionError
from holdem.game.betting import (
    MAX_RAISES_PER_ROUND,
    apply_action,
    get_bet_size,
    get_valid_actions,
    is_betting_round_complete,
    reset_betting_round,
    validate_action,
)
from holdem.game.game_state import (
    ActedPlayers,
    ActionType,
    BettingRound,
    GamePhase,
    GameState,
    Player,
    PlayerStatus,
)


def _make_state(
    stacks=(1000, 1000, 1000),
    bets=None,
    current_bet=0,
    phase=GamePhase.FLOP,
    to_act=0,
    raises=0,
    acted=(),
    statuses=None,
) -> GameState:
    bets = bets or [0] * len(stacks)
    statuses = statuses or [PlayerStatus.ACTIVE] * len(stacks)
    players = tuple(
        Player(
            id=f"p{i}",
            name=f"Player {i}",
            chips=chips,
            current_bet=bets[i],
            total_bet_this_hand=bets[i],
            status=statuses[i],
            seat_position=i,
            is_turn=(i == to_act),
        )
        for i, chips in enumerate(stacks)
    )
    return GameState(
        id="test",
        small_blind=5,
        big_blind=10,
        phase=phase,
        players=players,
        current_player_index=to_act,
        betting_round=BettingRound(
            phase=phase,
            current_bet=current_bet,
            min_raise=get_bet_size(phase, 10),
            raises_this_round=raises,
            acted_players=ActedPlayers(frozenset(acted)),
        ),
    )


class TestBetSize:
    def test_small_bet_streets(self):
        assert get_bet_size(GamePhase.PREFLOP, 10) == 10
        assert get_bet_size(GamePhase.FLOP, 10) == 10

    def test_big_bet_streets(self):
        assert get_bet_size(GamePhase.TURN, 10) == 20
        assert get_bet_size(GamePhase.RIVER, 10) == 20


class TestGetValidActions:
    def test_unopened_pot(self):
        valid = get_valid_actions(_make_state())
        assert valid.can_check is True
        assert valid.can_bet is True
        assert valid.bet_amount == 10
        assert valid.can_call is False
        assert valid.can_raise is False
        assert valid.can_fold is False
        assert valid.call_amount == 0

    def test_facing_bet(self):
        state = _make_state(bets=[0, 10, 0], current_bet=10, raises=1)
        valid = get_valid_actions(state)
        assert valid.can_check is False
        assert valid.can_fold is True
        assert valid.can_call is True
        assert valid.call_amount == 10
        assert valid.can_raise is True
        assert valid.raise_amount == 10
        assert valid.can_bet is False

    def test_big_bet_on_turn(self):
        valid = get_valid_actions(_make_state(phase=GamePhase.TURN))
        assert valid.bet_amount == 20

    def test_short_stack_can_still_call(self):
        state = _make_state(stacks=(4, 1000, 1000), bets=[0, 10, 0], current_bet=10, raises=1)
        valid = get_valid_actions(state)
        assert valid.can_call is True
        assert valid.call_amount == 10
        assert valid.can_raise is False

    def test_cannot_bet_short(self):
        valid = get_valid_actions(_make_state(stacks=(9, 1000, 1000)))
        assert valid.can_bet is False
        assert valid.can_check is True

    def test_raise_cap(self):
        state = _make_state(bets=[0, 40, 0], current_bet=40, raises=MAX_RAISES_PER_ROUND)
        valid = get_valid_actions(state)
        assert valid.can_raise is False
        assert valid.can_call is True

    def test_nobody_to_act(self):
        with pytest.raises(IllegalActionError):
            get_valid_actions(_make_state(to_act=-1))

    def test_allowed_set(self):
        state = _make_state(bets=[0, 10, 0], current_bet=10, raises=1)
        assert get_valid_actions(state).allowed() == {
            ActionType.FOLD, ActionType.CALL, ActionType.RAISE,
        }


class TestValidateAction:
    def test_wrong_turn(self):
        with pytest.raises(IllegalActionError, match="turn"):
            validate_action(_make_state(), "p1", ActionType.CHECK)

    def test_unknown_player(self):
        with pytest.raises(IllegalActionError, match="not found"):
            validate_action(_make_state(), "ghost", ActionType.CHECK)

    def test_inactive_player(self):
        state = _make_state(statuses=[PlayerStatus.FOLDED, PlayerStatus.ACTIVE, PlayerStatus.ACTIVE])
        with pytest.raises(IllegalActionError, match="not active"):
            validate_action(state, "p0", ActionType.CHECK)

    def test_check_facing_bet(self):
        state = _make_state(bets=[0, 10, 0], current_bet=10, raises=1)
        with pytest.raises(IllegalActionError, match="cannot check"):
            validate_action(state, "p0", ActionType.CHECK)

    def test_bet_when_already_bet(self):
        state = _make_state(bets=[0, 10, 0], current_bet=10, raises=1)
        with pytest.raises(IllegalActionError):
            validate_action(state, "p0", ActionType.BET)

    def test_raise_over_cap(self):
        state = _make_state(bets=[0, 40, 0], current_bet=40, raises=4)
        with pytest.raises(IllegalActionError, match="cap"):
            validate_action(state, "p0", ActionType.RAISE)

    def test_fold_always_accepted(self):
        validate_action(_make_state(), "p0", ActionType.FOLD)

    def test_no_hand_in_progress(self):
        with pytest.raises(IllegalActionError):
            validate_action(_make_state(phase=GamePhase.SHOWDOWN), "p0", ActionType.CHECK)


class TestApplyAction:
    def test_fold(self):
        state = apply_action(_make_state(), "p0", ActionType.FOLD, now=1.0)
        assert state.players[0].status == PlayerStatus.FOLDED
        assert state.players[0].chips == 1000
        assert "p0" in state.betting_round.acted_players

    def test_check_records_action(self):
        state = apply_action(_make_state(), "p0", ActionType.CHECK, now=1.0)
        entry = state.action_log[-1]
        assert entry.type == ActionType.CHECK
        assert entry.amount is None
        assert entry.phase == GamePhase.FLOP

    def test_bet(self):
        state = apply_action(_make_state(acted=("p2",)), "p0", ActionType.BET, reasoning="value")
        assert state.players[0].chips == 990
        assert state.players[0].current_bet == 10
        br = state.betting_round
        assert br.current_bet == 10
        assert br.raises_this_round == 1
        assert br.last_raiser == "p0"
        assert br.acted_players.to_wire() == ["p0"]
        assert state.action_log[-1].reasoning == "value"
        assert state.pot_total == 10

    def test_raise_resets_acted(self):
        state = _make_state(bets=[10, 10, 0], current_bet=10, raises=1, to_act=2, acted=("p0", "p1"))
        state = apply_action(state, "p2", ActionType.RAISE)
        br = state.betting_round
        assert state.players[2].current_bet == 20
        assert br.current_bet == 20
        assert br.raises_this_round == 2
        assert br.acted_players.to_wire() == ["p2"]
        assert state.action_log[-1].amount == 20

    def test_call(self):
        state = _make_state(bets=[0, 20, 0], current_bet=20, raises=1)
        state = apply_action(state, "p0", ActionType.CALL)
        assert state.players[0].chips == 980
        assert state.players[0].total_bet_this_hand == 20
        assert state.action_log[-1].amount == 20

    def test_short_call_goes_all_in(self):
        state = _make_state(stacks=(4, 1000, 1000), bets=[0, 10, 0], current_bet=10, raises=1)
        state = apply_action(state, "p0", ActionType.CALL)
        player = state.players[0]
        assert player.chips == 0
        assert player.current_bet == 4
        assert player.status == PlayerStatus.ALL_IN
        assert state.action_log[-1].amount == 4

    def test_input_state_untouched(self):
        state = _make_state()
        apply_action(state, "p0", ActionType.BET)
        assert state.players[0].chips == 1000
        assert state.betting_round.current_bet == 0
        assert state.action_log == ()


class TestRoundCompletion:
    def test_incomplete_until_everyone_acts(self):
        state = _make_state(acted=("p0", "p1"))
        assert is_betting_round_complete(state) is False

    def test_complete_when_all_checked(self):
        state = _make_state(acted=("p0", "p1", "p2"))
        assert is_betting_round_complete(state) is True

    def test_unmatched_bet_keeps_round_open(self):
        state = _make_state(bets=[20, 10, 20], current_bet=20, acted=("p0", "p1", "p2"))
        assert is_betting_round_complete(state) is False

    def test_all_in_player_exempt(self):
        state = _make_state(
            stacks=(0, 980, 980),
            bets=[5, 20, 20],
            current_bet=20,
            acted=("p1", "p2"),
            statuses=[PlayerStatus.ALL_IN, PlayerStatus.ACTIVE, PlayerStatus.ACTIVE],
        )
        assert is_betting_round_complete(state) is True

    def test_one_player_left(self):
        state = _make_state(statuses=[PlayerStatus.FOLDED, PlayerStatus.FOLDED, PlayerStatus.ACTIVE])
        assert is_betting_round_complete(state) is True


class TestResetBettingRound:
    def test_reset_for_turn(self):
        state = _make_state(bets=[10, 10, 10], current_bet=10, raises=1, acted=("p0", "p1", "p2"))
        state = reset_betting_round(state, GamePhase.TURN)
        br = state.betting_round
        assert state.phase == GamePhase.TURN
        assert br.current_bet == 0
        assert br.min_raise == 20
        assert br.raises_this_round == 0
        assert len(br.acted_players) == 0
        assert all(p.current_bet == 0 for p in state.players)
        assert all(p.total_bet_this_hand == 10 for p in state.players)

    def test_acted_players_wire_form_is_sorted(self):
        acted = ActedPlayers().with_player("p2").with_player("p0").with_player("p2")
        assert acted.to_wire() == ["p0", "p2"]
        assert ActedPlayers.from_wire(["p2", "p0"]) == acted

    def test_replace_keeps_acted_type(self):
        br = BettingRound(GamePhase.FLOP, acted_players=ActedPlayers.only("p1"))
        assert isinstance(replace(br, current_bet=10).acted_players, ActedPlayers)
