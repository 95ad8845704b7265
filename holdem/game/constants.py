"""Table defaults and dealing constants."""
from __future__ import annotations

DEFAULT_STARTING_CHIPS = 1000
DEFAULT_SMALL_BLIND = 5
DEFAULT_BIG_BLIND = 10

HOLE_CARDS_COUNT = 2

# Full ring; 2 hole cards per seat plus a 5-card board must fit in one deck
MAX_SEATS = 10

# Community cards dealt when entering each street
FLOP_CARDS = 3
TURN_CARDS = 1
RIVER_CARDS = 1

# (id, name, model) of the seats used when a table is created without players
DEFAULT_SEATS = (
    ("gpt", "GPT", "openai/gpt-5.1"),
    ("claude-haiku", "Claude Haiku", "anthropic/claude-haiku-4.5"),
    ("claude-sonnet", "Claude Sonnet", "anthropic/claude-sonnet-4.5"),
    ("gemini-flash", "Gemini Flash", "google/gemini-2.5-flash"),
)
