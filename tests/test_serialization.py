"""Unit tests for serialization.py — wire format and hole-card masking."""
import json

from holdem.game.engine import create_game, process_action, start_hand
from holdem.game.game_state import ActionType, GamePhase
from holdem.game.serialization import HIDDEN_CARD, state_from_dict, state_to_dict


def _mid_hand(make_config, rng):
    state = start_hand(create_game(make_config(num_players=3), game_id="t1"), rng=rng, now=100.0)
    state = process_action(state, "p0", ActionType.RAISE, reasoning="strong", now=101.0)
    return state


class TestRoundTrip:
    def test_mid_hand_round_trip(self, make_config, rng):
        state = _mid_hand(make_config, rng)
        data = json.loads(json.dumps(state_to_dict(state)))
        assert state_from_dict(data) == state

    def test_showdown_round_trip_keeps_winning_hands(self, make_config, rng):
        state = _mid_hand(make_config, rng)
        while state.hand_in_progress:
            pid = state.current_player.id
            action = ActionType.CALL if state.betting_round.current_bet > state.current_player.current_bet else ActionType.CHECK
            state = process_action(state, pid, action, now=102.0)
        assert state.phase == GamePhase.SHOWDOWN
        restored = state_from_dict(json.loads(json.dumps(state_to_dict(state))))
        assert restored == state
        assert restored.winners[0].hand.name == state.winners[0].hand.name

    def test_acted_players_travel_as_sorted_list(self, make_config, rng):
        state = _mid_hand(make_config, rng)
        state = process_action(state, "p1", ActionType.CALL, now=102.0)
        acted = state_to_dict(state)["betting_round"]["acted_players"]
        assert acted == ["p0", "p1"]

    def test_enums_written_as_strings(self, make_config, rng):
        data = state_to_dict(_mid_hand(make_config, rng))
        assert data["phase"] == "preflop"
        assert data["players"][0]["status"] == "active"
        assert data["action_log"][-1]["type"] == "raise"
        assert data["action_log"][-1]["reasoning"] == "strong"


class TestMasking:
    def test_viewer_sees_only_own_cards(self, make_config, rng):
        state = _mid_hand(make_config, rng)
        data = state_to_dict(state, viewer_id="p1")
        by_id = {p["id"]: p for p in data["players"]}
        assert by_id["p1"]["hole_cards"] == [str(c) for c in state.players[1].hole_cards]
        assert by_id["p0"]["hole_cards"] == [HIDDEN_CARD, HIDDEN_CARD]
        assert by_id["p2"]["hole_cards"] == [HIDDEN_CARD, HIDDEN_CARD]
        assert "deck" not in data

    def test_spectator_without_seat_sees_nothing(self, make_config, rng):
        data = state_to_dict(_mid_hand(make_config, rng), viewer_id="spectator")
        assert all(p["hole_cards"] == [HIDDEN_CARD, HIDDEN_CARD] for p in data["players"])

    def test_unmasked_includes_deck(self, make_config, rng):
        state = _mid_hand(make_config, rng)
        data = state_to_dict(state)
        assert len(data["deck"]) == len(state.deck)

    def test_fold_out_keeps_every_other_hand_hidden(self, make_config, rng):
        state = start_hand(create_game(make_config(num_players=3)), rng=rng)
        state = process_action(state, "p0", ActionType.FOLD)
        state = process_action(state, "p1", ActionType.FOLD)
        assert state.phase == GamePhase.SHOWDOWN
        shown = {p["id"]: p["hole_cards"] for p in state_to_dict(state, viewer_id="p0")["players"]}
        assert shown["p0"] == [str(c) for c in state.players[0].hole_cards]
        assert shown["p1"] == [HIDDEN_CARD, HIDDEN_CARD]
        assert shown["p2"] == [HIDDEN_CARD, HIDDEN_CARD]

    def test_showdown_reveals_live_hands_but_not_folded_ones(self, make_config, rng):
        state = start_hand(create_game(make_config(num_players=3)), rng=rng)
        state = process_action(state, "p0", ActionType.FOLD)
        while state.hand_in_progress:
            player = state.current_player
            facing = state.betting_round.current_bet > player.current_bet
            state = process_action(state, player.id, ActionType.CALL if facing else ActionType.CHECK)
        assert state.phase == GamePhase.SHOWDOWN

        shown = {p["id"]: p["hole_cards"] for p in state_to_dict(state, viewer_id="p1")["players"]}
        assert shown["p0"] == [HIDDEN_CARD, HIDDEN_CARD]
        assert shown["p2"] == [str(c) for c in state.players[2].hole_cards]

        shown = {p["id"]: p["hole_cards"] for p in state_to_dict(state, viewer_id="p0")["players"]}
        assert shown["p0"] == [str(c) for c in state.players[0].hole_cards]
        assert shown["p1"] == [str(c) for c in state.players[1].hole_cards]
