"""Table configuration passed to create_game."""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Tuple

from holdem.core.errors import MalformedConfigError
from holdem.game.constants import (
    DEFAULT_BIG_BLIND,
    DEFAULT_SEATS,
    DEFAULT_SMALL_BLIND,
    DEFAULT_STARTING_CHIPS,
    MAX_SEATS,
)


@dataclass(frozen=True)
class SeatConfig:
    id: str
    name: str
    model: str = ""


def _default_seats() -> Tuple[SeatConfig, ...]:
    return tuple(SeatConfig(*seat) for seat in DEFAULT_SEATS)


@dataclass(frozen=True)
class GameConfig:
    players: Tuple[SeatConfig, ...] = field(default_factory=_default_seats)
    starting_chips: int = DEFAULT_STARTING_CHIPS
    small_blind: int = DEFAULT_SMALL_BLIND
    big_blind: int = DEFAULT_BIG_BLIND

    def validate(self) -> None:
        if len(self.players) < 2:
            raise MalformedConfigError(f"Need at least 2 players, got {len(self.players)}")
        if len(self.players) > MAX_SEATS:
            raise MalformedConfigError(f"At most {MAX_SEATS} players, got {len(self.players)}")
        ids = [seat.id for seat in self.players]
        if len(set(ids)) != len(ids):
            raise MalformedConfigError(f"Player ids must be unique: {ids}")
        if any(not seat.id for seat in self.players):
            raise MalformedConfigError("Player ids must be non-empty")
        if self.starting_chips <= 0:
            raise MalformedConfigError(f"Starting chips must be positive, got {self.starting_chips}")
        if self.small_blind <= 0:
            raise MalformedConfigError(f"Small blind must be positive, got {self.small_blind}")
        if self.big_blind < self.small_blind:
            raise MalformedConfigError(
                f"Big blind ({self.big_blind}) must be >= small blind ({self.small_blind})"
            )
