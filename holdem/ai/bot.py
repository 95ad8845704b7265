"""RuleBot — wires hand strength + StrategyEngine into a DecisionSource."""
from __future__ import annotations
import random
from typing import Optional

from holdem.ai.decision import Decision, safe_action
from holdem.ai.hand_strength import estimate_strength
from holdem.ai.strategy import StrategyEngine
from holdem.game.betting import get_valid_actions
from holdem.game.game_state import GameState, Player


class RuleBot:
    """
    Stateless rules-based decision source.

    difficulty: "easy" | "medium" | "hard". Pass a seeded rng for
    reproducible play.
    """

    def __init__(
        self,
        difficulty: str = "medium",
        rng: Optional[random.Random] = None,
        simulations: int = 150,
    ) -> None:
        self.difficulty = difficulty
        self._rng = rng or random.Random()
        self._strategy = StrategyEngine(self._rng)
        self._simulations = simulations

    def decide(self, state: GameState, player: Player) -> Decision:
        valid = get_valid_actions(state)
        if not player.hole_cards:
            return Decision(safe_action(valid), "No cards")

        num_opponents = sum(
            1 for p in state.live_players if p.id != player.id
        )
        equity = estimate_strength(
            player.hole_cards,
            state.community_cards,
            num_opponents,
            simulations=self._simulations,
            rng=self._rng,
        )
        action = self._strategy.decide(state, player, valid, equity, self.difficulty)
        return Decision(action, f"{self.difficulty} bot, equity {equity:.2f}")
