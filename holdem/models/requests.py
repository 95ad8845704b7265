"""Pydantic request models for REST endpoints."""
from __future__ import annotations
from typing import List, Optional
from pydantic import BaseModel, Field

from holdem.game.config import GameConfig, SeatConfig
from holdem.game.constants import (
    DEFAULT_BIG_BLIND,
    DEFAULT_SMALL_BLIND,
    DEFAULT_STARTING_CHIPS,
    MAX_SEATS,
)


class SeatRequest(BaseModel):
    id: str = Field(min_length=1, max_length=64)
    name: str = Field(min_length=1, max_length=30)
    model: str = ""


class CreateTableRequest(BaseModel):
    players: Optional[List[SeatRequest]] = Field(default=None, max_length=MAX_SEATS)
    starting_chips: int = Field(default=DEFAULT_STARTING_CHIPS, ge=1)
    small_blind: int = Field(default=DEFAULT_SMALL_BLIND, ge=1)
    big_blind: int = Field(default=DEFAULT_BIG_BLIND, ge=1)

    def to_config(self) -> GameConfig:
        kwargs = {}
        if self.players is not None:
            kwargs["players"] = tuple(
                SeatConfig(id=s.id, name=s.name, model=s.model) for s in self.players
            )
        return GameConfig(
            starting_chips=self.starting_chips,
            small_blind=self.small_blind,
            big_blind=self.big_blind,
            **kwargs,
        )


class ActionRequest(BaseModel):
    player_id: str
    action: str = Field(pattern="^(fold|check|call|bet|raise)$")
    reasoning: Optional[str] = Field(default=None, max_length=2000)


class BotTurnRequest(BaseModel):
    difficulty: str = Field(default="medium", pattern="^(easy|medium|hard)$")
