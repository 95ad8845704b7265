"""Card, Rank, Suit, and the pure deck operations."""
from __future__ import annotations
import random
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence, Tuple

from holdem.core.errors import InsufficientCardsError


class Suit(Enum):
    def __new__(cls, symbol: str, label: str):
        obj = object.__new__(cls)
        obj._value_ = symbol
        obj.label = label
        return obj

    CLUBS = ("c", "clubs")
    DIAMONDS = ("d", "diamonds")
    HEARTS = ("h", "hearts")
    SPADES = ("s", "spades")

    @property
    def symbol(self) -> str:
        return self._value_

    def __str__(self) -> str:
        return self._value_


class Rank(Enum):
    def __new__(cls, rank_value: int, symbol: str):
        obj = object.__new__(cls)
        obj._value_ = rank_value
        obj.symbol = symbol
        return obj

    TWO   = (2,  "2")
    THREE = (3,  "3")
    FOUR  = (4,  "4")
    FIVE  = (5,  "5")
    SIX   = (6,  "6")
    SEVEN = (7,  "7")
    EIGHT = (8,  "8")
    NINE  = (9,  "9")
    TEN   = (10, "10")
    JACK  = (11, "J")
    QUEEN = (12, "Q")
    KING  = (13, "K")
    ACE   = (14, "A")

    @classmethod
    def from_symbol(cls, symbol: str) -> "Rank":
        for rank in cls:
            if rank.symbol == symbol.upper():
                return rank
        # "T" is a common alias for ten
        if symbol.upper() == "T":
            return cls.TEN
        raise ValueError(f"Unknown rank symbol: {symbol!r}")

    def __str__(self) -> str:
        return self.symbol

    def __lt__(self, other: "Rank") -> bool:
        return self._value_ < other._value_


@dataclass(frozen=True)
class Card:
    rank: Rank
    suit: Suit

    @property
    def value(self) -> int:
        """Numeric rank value 2–14 (Ace high)."""
        return self.rank.value

    @classmethod
    def parse(cls, text: str) -> "Card":
        """Parse 'Ah', '10c', 'Td' into a Card."""
        text = text.strip()
        if len(text) < 2:
            raise ValueError(f"Cannot parse card: {text!r}")
        return cls(Rank.from_symbol(text[:-1]), Suit(text[-1].lower()))

    def __str__(self) -> str:
        return f"{self.rank}{self.suit}"

    def __repr__(self) -> str:
        return f"Card({self})"


def parse_cards(*specs: str) -> List[Card]:
    return [Card.parse(s) for s in specs]


# ---------------------------------------------------------------------------
# Deck operations
#
# A deck is a plain sequence of cards consumed front-to-back. None of these
# functions mutate their input.
# ---------------------------------------------------------------------------

def create_deck() -> List[Card]:
    """Return the 52 canonical cards, suit by suit."""
    return [Card(rank, suit) for suit in Suit for rank in Rank]


def shuffle(deck: Sequence[Card], rng: Optional[random.Random] = None) -> List[Card]:
    """Return a uniformly shuffled copy of deck (Fisher–Yates)."""
    rng = rng or random.Random()
    shuffled = list(deck)
    for i in range(len(shuffled) - 1, 0, -1):
        j = rng.randint(0, i)
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
    return shuffled


def create_shuffled_deck(rng: Optional[random.Random] = None) -> List[Card]:
    return shuffle(create_deck(), rng)


def draw(deck: Sequence[Card], n: int = 1) -> Tuple[List[Card], List[Card]]:
    """Take the first n cards. Returns (drawn, remaining)."""
    if n < 0:
        raise InsufficientCardsError(f"Cannot draw a negative number of cards: {n}")
    if n > len(deck):
        raise InsufficientCardsError(f"Not enough cards: requested {n}, have {len(deck)}")
    return list(deck[:n]), list(deck[n:])
