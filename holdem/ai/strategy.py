"""
Fixed-limit strategy for rule-based seats.

Easy:    mostly fold weak hands, call with medium, rarely raise
Medium:  pot-odds aware, bets and raises good hands
Hard:    adds position awareness, bluffing (~15% frequency)

Only actions present in ValidActions are ever returned.
"""
from __future__ import annotations
import random
from typing import Optional

from holdem.game.betting import ValidActions
from holdem.game.game_state import ActionType, GameState, Player


class StrategyEngine:
    """Decides the bot action given equity and game context."""

    def __init__(self, rng: Optional[random.Random] = None) -> None:
        self._rng = rng or random.Random()

    def decide(
        self,
        state: GameState,
        player: Player,
        valid: ValidActions,
        equity: float,
        difficulty: str = "medium",
    ) -> ActionType:
        if difficulty == "easy":
            return self._easy(state, valid, equity)
        elif difficulty == "hard":
            return self._hard(state, player, valid, equity)
        return self._medium(state, valid, equity)

    # ------------------------------------------------------------------
    # Easy bot: straightforward, rarely raises
    # ------------------------------------------------------------------

    def _easy(self, state: GameState, valid: ValidActions, equity: float) -> ActionType:
        if valid.can_check:
            if equity > 0.7 and valid.can_bet and self._rng.random() < 0.3:
                return ActionType.BET
            return ActionType.CHECK

        pot_odds = self._pot_odds(state, valid)
        if equity < 0.35 or (equity < pot_odds and self._rng.random() < 0.8):
            return ActionType.FOLD
        if equity > 0.7 and valid.can_raise and self._rng.random() < 0.2:
            return ActionType.RAISE
        return self._call_or_fold(valid)

    # ------------------------------------------------------------------
    # Medium bot: pot-odds aware
    # ------------------------------------------------------------------

    def _medium(self, state: GameState, valid: ValidActions, equity: float) -> ActionType:
        pot_odds = self._pot_odds(state, valid)

        if valid.can_check:
            if equity > 0.65 and valid.can_bet:
                return ActionType.BET
            if equity > 0.65 and valid.can_raise:
                # big blind's option preflop
                return ActionType.RAISE
            if equity > 0.5 and valid.can_bet and self._rng.random() < 0.3:
                return ActionType.BET
            return ActionType.CHECK

        if equity < pot_odds:
            return ActionType.FOLD
        if equity > 0.7 and valid.can_raise:
            return ActionType.RAISE
        if equity > 0.55 and valid.can_raise and self._rng.random() < 0.4:
            return ActionType.RAISE
        return self._call_or_fold(valid)

    # ------------------------------------------------------------------
    # Hard bot: position-aware, bluffs ~15%
    # ------------------------------------------------------------------

    def _hard(self, state: GameState, player: Player, valid: ValidActions, equity: float) -> ActionType:
        pot_odds = self._pot_odds(state, valid)
        in_position = self._is_in_position(state, player)
        bluffing = in_position and self._rng.random() < 0.15

        if valid.can_check:
            if (equity > 0.6 or bluffing) and valid.can_bet:
                return ActionType.BET
            if equity > 0.6 and valid.can_raise:
                return ActionType.RAISE
            return ActionType.CHECK

        if bluffing and valid.can_raise:
            return ActionType.RAISE
        if equity < pot_odds and not bluffing:
            return ActionType.FOLD
        if equity > 0.75 and valid.can_raise:
            return ActionType.RAISE
        if equity > 0.55 and valid.can_raise and in_position and self._rng.random() < 0.5:
            return ActionType.RAISE
        return self._call_or_fold(valid)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _call_or_fold(self, valid: ValidActions) -> ActionType:
        return ActionType.CALL if valid.can_call else ActionType.FOLD

    def _pot_odds(self, state: GameState, valid: ValidActions) -> float:
        """Minimum equity needed to make a call breakeven."""
        call = valid.call_amount
        if call == 0:
            return 0.0
        return call / (state.pot_total + call)

    def _is_in_position(self, state: GameState, player: Player) -> bool:
        """Simple position heuristic: seats in the back half relative to the dealer."""
        n = len(state.players)
        relative = (state.player_index(player.id) - state.dealer_position) % n
        return relative >= n // 2
