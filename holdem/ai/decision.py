"""
The decision-source boundary.

A decision source (a remote model, a rules bot, a human at a terminal) is
asked for one of the currently legal actions. The engine never substitutes
an action itself; play_turn is the caller-side helper that falls back to a
safe legal action when a source fails or answers with something illegal.
"""
from __future__ import annotations
import json
import logging
import re
from dataclasses import dataclass
from typing import Optional, Protocol

from holdem.core.errors import IllegalActionError
from holdem.game.betting import ValidActions, get_valid_actions
from holdem.game.constants import DEFAULT_BIG_BLIND
from holdem.game.engine import process_action
from holdem.game.game_state import ActionType, GameState, Player

logger = logging.getLogger(__name__)

_JSON_OBJECT = re.compile(r"\{.*\}", re.DOTALL)

# Keyword search order for free text: aggressive before passive
_KEYWORD_ORDER = (
    ActionType.FOLD,
    ActionType.RAISE,
    ActionType.BET,
    ActionType.CALL,
    ActionType.CHECK,
)


@dataclass(frozen=True)
class Decision:
    action: ActionType
    reasoning: Optional[str] = None


class DecisionSource(Protocol):
    def decide(self, state: GameState, player: Player) -> Decision:
        ...


def safe_action(valid: ValidActions) -> ActionType:
    """Check when possible, otherwise fold."""
    return ActionType.CHECK if valid.can_check else ActionType.FOLD


def fallback_action(valid: ValidActions, cheap_call: int = DEFAULT_BIG_BLIND) -> Decision:
    """Passive default when a reply cannot be understood."""
    if valid.can_check:
        return Decision(ActionType.CHECK, "Default: check when possible")
    if valid.can_call and valid.call_amount <= cheap_call:
        return Decision(ActionType.CALL, "Default: call small bet")
    return Decision(ActionType.FOLD, "Default: fold when uncertain")


def _normalize(action: str, valid: ValidActions) -> Optional[ActionType]:
    try:
        parsed = ActionType(action.strip().lower())
    except ValueError:
        return None
    if parsed == ActionType.FOLD or valid.is_allowed(parsed):
        return parsed
    return None


def _load_json(text: str) -> Optional[dict]:
    try:
        data = json.loads(text.strip())
    except json.JSONDecodeError:
        match = _JSON_OBJECT.search(text)
        if not match:
            return None
        try:
            data = json.loads(match.group(0))
        except json.JSONDecodeError:
            return None
    return data if isinstance(data, dict) else None


def parse_response(text: str, valid: ValidActions, cheap_call: int = DEFAULT_BIG_BLIND) -> Decision:
    """
    Turn a model's reply into a legal Decision.

    Tries, in order: the whole reply as JSON, the first {...} block in it,
    action keywords in the text, and finally fallback_action.
    """
    data = _load_json(text)
    if data and isinstance(data.get("action"), str):
        action = _normalize(data["action"], valid)
        if action is not None:
            reasoning = data.get("reasoning")
            return Decision(action, reasoning if isinstance(reasoning, str) else None)

    lowered = text.lower()
    for action in _KEYWORD_ORDER:
        if action.value in lowered and (action == ActionType.FOLD or valid.is_allowed(action)):
            return Decision(action, "Parsed from text")

    return fallback_action(valid, cheap_call)


def play_turn(state: GameState, source: DecisionSource) -> GameState:
    """
    Ask `source` for the current player's action and apply it. An illegal or
    failed decision is logged and replaced by safe_action.
    """
    player = state.current_player
    if player is None:
        raise IllegalActionError("No player is due to act")
    valid = get_valid_actions(state)

    try:
        decision = source.decide(state, player)
    except Exception as e:
        logger.error(f"Decision source failed for {player.id}: {e}")
        decision = Decision(safe_action(valid), f"Source error: {e}")

    try:
        return process_action(state, player.id, decision.action, reasoning=decision.reasoning)
    except IllegalActionError as e:
        fallback = safe_action(valid)
        logger.warning(f"Invalid action ({decision.action.value}) from {player.id}: {e}. Defaulted to {fallback.value}.")
        return process_action(
            state,
            player.id,
            fallback,
            reasoning=f"Invalid action ({decision.action.value}): {e}. Defaulted to {fallback.value}.",
        )
