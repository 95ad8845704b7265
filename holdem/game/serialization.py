"""
GameState <-> plain JSON-safe dicts.

This is the one place the acted-players set changes representation: it is
written as a sorted list of ids and read back into ActedPlayers.
"""
from __future__ import annotations
from typing import Any, Dict, List, Optional

from holdem.core.card import Card
from holdem.core.hand_evaluator import EvaluatedHand, HandRank
from holdem.game.game_state import (
    ActedPlayers,
    ActionType,
    BettingRound,
    GamePhase,
    GameState,
    Player,
    PlayerAction,
    PlayerStatus,
    Pot,
    Winner,
)

HIDDEN_CARD = "??"


def _cards(cards) -> List[str]:
    return [str(c) for c in cards]


def _parse_cards(items) -> tuple:
    return tuple(Card.parse(s) for s in items or ())


def hand_to_dict(hand: EvaluatedHand) -> Dict[str, Any]:
    return {
        "rank": int(hand.rank),
        "name": hand.name,
        "cards": _cards(hand.cards),
        "kickers": list(hand.kickers),
    }


def hand_from_dict(data: Dict[str, Any]) -> EvaluatedHand:
    return EvaluatedHand(
        rank=HandRank(data["rank"]),
        cards=_parse_cards(data["cards"]),
        kickers=tuple(data["kickers"]),
    )


def player_to_dict(player: Player, reveal: bool = True) -> Dict[str, Any]:
    return {
        "id": player.id,
        "name": player.name,
        "model": player.model,
        "chips": player.chips,
        "hole_cards": _cards(player.hole_cards) if reveal else [HIDDEN_CARD for _ in player.hole_cards],
        "current_bet": player.current_bet,
        "total_bet_this_hand": player.total_bet_this_hand,
        "status": player.status.value,
        "seat_position": player.seat_position,
        "is_dealer": player.is_dealer,
        "is_turn": player.is_turn,
    }


def player_from_dict(data: Dict[str, Any]) -> Player:
    return Player(
        id=data["id"],
        name=data["name"],
        model=data.get("model", ""),
        chips=data["chips"],
        hole_cards=_parse_cards(data.get("hole_cards")),
        current_bet=data.get("current_bet", 0),
        total_bet_this_hand=data.get("total_bet_this_hand", 0),
        status=PlayerStatus(data.get("status", "active")),
        seat_position=data.get("seat_position", 0),
        is_dealer=data.get("is_dealer", False),
        is_turn=data.get("is_turn", False),
    )


def action_to_dict(action: PlayerAction) -> Dict[str, Any]:
    return {
        "type": action.type.value,
        "player_id": action.player_id,
        "timestamp": action.timestamp,
        "amount": action.amount,
        "reasoning": action.reasoning,
        "phase": action.phase.value if action.phase else None,
    }


def action_from_dict(data: Dict[str, Any]) -> PlayerAction:
    return PlayerAction(
        type=ActionType(data["type"]),
        player_id=data["player_id"],
        timestamp=data["timestamp"],
        amount=data.get("amount"),
        reasoning=data.get("reasoning"),
        phase=GamePhase(data["phase"]) if data.get("phase") else None,
    )


def state_to_dict(state: GameState, viewer_id: Optional[str] = None) -> Dict[str, Any]:
    """
    Serialize a state. With viewer_id set, opponents' hole cards are masked;
    at a contested showdown the hands still live are shown. Folded hands and
    the winner of a fold-out stay hidden, and the deck is never exposed to a viewer.
    """
    contested = state.phase == GamePhase.SHOWDOWN and len(state.live_players) > 1

    def reveal(player: Player) -> bool:
        if viewer_id is None or player.id == viewer_id:
            return True
        return contested and player.is_live

    betting = state.betting_round
    data: Dict[str, Any] = {
        "id": state.id,
        "phase": state.phase.value,
        "small_blind": state.small_blind,
        "big_blind": state.big_blind,
        "players": [
            player_to_dict(p, reveal=reveal(p))
            for p in state.players
        ],
        "community_cards": _cards(state.community_cards),
        "pots": [
            {"amount": pot.amount, "eligible_players": list(pot.eligible_players)}
            for pot in state.pots
        ],
        "dealer_position": state.dealer_position,
        "current_player_index": state.current_player_index,
        "betting_round": {
            "phase": betting.phase.value,
            "current_bet": betting.current_bet,
            "min_raise": betting.min_raise,
            "raises_this_round": betting.raises_this_round,
            "last_raiser": betting.last_raiser,
            "acted_players": betting.acted_players.to_wire(),
        },
        "action_log": [action_to_dict(a) for a in state.action_log],
        "hand_number": state.hand_number,
        "winners": [
            {
                "player_id": w.player_id,
                "amount": w.amount,
                "hand": hand_to_dict(w.hand) if w.hand else None,
                "pots_won": list(w.pots_won),
            }
            for w in state.winners
        ],
    }
    if viewer_id is None:
        data["deck"] = _cards(state.deck)
    return data


def state_from_dict(data: Dict[str, Any]) -> GameState:
    """Inverse of state_to_dict (for unmasked payloads)."""
    betting = data["betting_round"]
    return GameState(
        id=data["id"],
        small_blind=data["small_blind"],
        big_blind=data["big_blind"],
        phase=GamePhase(data["phase"]),
        players=tuple(player_from_dict(p) for p in data["players"]),
        deck=_parse_cards(data.get("deck")),
        community_cards=_parse_cards(data.get("community_cards")),
        pots=tuple(
            Pot(amount=p["amount"], eligible_players=tuple(p["eligible_players"]))
            for p in data.get("pots", ())
        ),
        dealer_position=data["dealer_position"],
        current_player_index=data["current_player_index"],
        betting_round=BettingRound(
            phase=GamePhase(betting["phase"]),
            current_bet=betting["current_bet"],
            min_raise=betting.get("min_raise", 0),
            raises_this_round=betting["raises_this_round"],
            last_raiser=betting.get("last_raiser"),
            acted_players=ActedPlayers.from_wire(betting.get("acted_players")),
        ),
        action_log=tuple(action_from_dict(a) for a in data.get("action_log", ())),
        hand_number=data.get("hand_number", 0),
        winners=tuple(
            Winner(
                player_id=w["player_id"],
                amount=w["amount"],
                hand=hand_from_dict(w["hand"]) if w.get("hand") else None,
                pots_won=tuple(w.get("pots_won", ())),
            )
            for w in data.get("winners", ())
        ),
    )
