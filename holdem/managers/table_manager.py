"""In-memory table store: one authoritative GameState per table id."""
from __future__ import annotations
import logging
from typing import Dict, List, Optional

from holdem.game.config import GameConfig
from holdem.game.engine import create_game
from holdem.game.game_state import GameState

logger = logging.getLogger(__name__)


class TableManager:
    """
    Holds the latest state of each table. Callers read a state, run it
    through the engine and store the result; the engine itself keeps nothing.
    """

    def __init__(self) -> None:
        self._tables: Dict[str, GameState] = {}

    def create_table(self, config: GameConfig) -> GameState:
        state = create_game(config)
        self._tables[state.id] = state
        logger.info(f"Created table {state.id} with {len(state.players)} seats")
        return state

    def get(self, table_id: str) -> Optional[GameState]:
        return self._tables.get(table_id)

    def save(self, state: GameState) -> GameState:
        if state.id not in self._tables:
            raise KeyError(f"Unknown table {state.id}")
        self._tables[state.id] = state
        return state

    def list_tables(self) -> List[dict]:
        result = []
        for tid, state in self._tables.items():
            result.append({
                "table_id": tid,
                "phase": state.phase.value,
                "players": len(state.players),
                "small_blind": state.small_blind,
                "big_blind": state.big_blind,
                "hand_number": state.hand_number,
            })
        return result

    def delete(self, table_id: str) -> bool:
        if table_id in self._tables:
            del self._tables[table_id]
            return True
        return False


# Global singleton
table_manager = TableManager()
