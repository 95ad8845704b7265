"""REST API routes: table creation, hand dealing, and seat actions."""
from __future__ import annotations
import logging
from typing import Any, Dict

from fastapi import APIRouter, HTTPException

from holdem.ai.bot import RuleBot
from holdem.ai.decision import play_turn
from holdem.core.errors import IllegalActionError, MalformedConfigError
from holdem.game.betting import get_valid_actions
from holdem.game.engine import get_game_winner, is_game_over, process_action, start_hand
from holdem.game.game_state import GameState
from holdem.game.serialization import player_to_dict, state_to_dict
from holdem.managers.table_manager import table_manager
from holdem.models.requests import ActionRequest, BotTurnRequest, CreateTableRequest

logger = logging.getLogger(__name__)
router = APIRouter()


def _get_table(table_id: str) -> GameState:
    state = table_manager.get(table_id)
    if state is None:
        raise HTTPException(status_code=404, detail="Table not found")
    return state


def _payload(state: GameState, viewer: str = "") -> Dict[str, Any]:
    data = state_to_dict(state, viewer_id=viewer or None)
    winner = get_game_winner(state)
    data["game_over"] = is_game_over(state)
    data["game_winner"] = player_to_dict(winner) if winner else None
    return data


@router.post("/api/tables", status_code=201)
async def create_table(req: CreateTableRequest) -> Dict[str, Any]:
    try:
        state = table_manager.create_table(req.to_config())
    except MalformedConfigError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return _payload(state)


@router.get("/api/tables")
async def list_tables() -> Dict[str, Any]:
    return {"tables": table_manager.list_tables()}


@router.get("/api/tables/{table_id}")
async def get_table(table_id: str, viewer: str = "") -> Dict[str, Any]:
    return _payload(_get_table(table_id), viewer)


@router.post("/api/tables/{table_id}/hands")
async def deal_hand(table_id: str) -> Dict[str, Any]:
    state = _get_table(table_id)
    try:
        state = table_manager.save(start_hand(state))
    except IllegalActionError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return _payload(state)


@router.get("/api/tables/{table_id}/valid-actions")
async def valid_actions(table_id: str) -> Dict[str, Any]:
    state = _get_table(table_id)
    player = state.current_player
    if player is None:
        raise HTTPException(status_code=409, detail="No player is due to act")
    return {"player_id": player.id, "valid_actions": get_valid_actions(state).to_dict()}


@router.post("/api/tables/{table_id}/actions")
async def submit_action(table_id: str, req: ActionRequest) -> Dict[str, Any]:
    state = _get_table(table_id)
    try:
        state = process_action(state, req.player_id, req.action, reasoning=req.reasoning)
    except IllegalActionError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return _payload(table_manager.save(state))


@router.post("/api/tables/{table_id}/bot-turn")
async def bot_turn(table_id: str, req: BotTurnRequest) -> Dict[str, Any]:
    """Let a rules bot act for whoever is due to act."""
    state = _get_table(table_id)
    try:
        state = play_turn(state, RuleBot(difficulty=req.difficulty))
    except IllegalActionError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return _payload(table_manager.save(state))


@router.delete("/api/tables/{table_id}")
async def delete_table(table_id: str) -> Dict[str, Any]:
    if not table_manager.delete(table_id):
        raise HTTPException(status_code=404, detail="Table not found")
    return {"deleted": table_id}
