"""Shared fixtures for all tests."""
import random

import pytest

from holdem.game.config import GameConfig, SeatConfig


@pytest.fixture
def rng():
    """Seeded RNG so shuffles and bot choices are reproducible."""
    return random.Random(1234)


@pytest.fixture
def make_config():
    def _make_config(num_players=2, chips=1000, small_blind=5, big_blind=10):
        seats = tuple(SeatConfig(id=f"p{i}", name=f"Player {i}") for i in range(num_players))
        return GameConfig(
            players=seats,
            starting_chips=chips,
            small_blind=small_blind,
            big_blind=big_blind,
        )
    return _make_config
