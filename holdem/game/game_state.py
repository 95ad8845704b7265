"""Immutable GameState value and its parts: Player, BettingRound, Pot, PlayerAction."""
from __future__ import annotations
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import FrozenSet, Iterable, List, Optional, Tuple

from holdem.core.card import Card
from holdem.core.hand_evaluator import EvaluatedHand


class GamePhase(Enum):
    WAITING = "waiting"
    PREFLOP = "preflop"
    FLOP = "flop"
    TURN = "turn"
    RIVER = "river"
    SHOWDOWN = "showdown"
    COMPLETE = "complete"


# Order in which a hand moves through its streets
STREETS = (GamePhase.PREFLOP, GamePhase.FLOP, GamePhase.TURN, GamePhase.RIVER)


class PlayerStatus(Enum):
    ACTIVE = "active"
    FOLDED = "folded"
    ALL_IN = "all_in"
    OUT = "out"


class ActionType(Enum):
    FOLD = "fold"
    CHECK = "check"
    CALL = "call"
    BET = "bet"
    RAISE = "raise"


@dataclass(frozen=True)
class ActedPlayers:
    """
    Ids of the players who acted since the bet level last changed.

    In memory this is a frozenset. Across a serialization boundary it
    travels as a sorted list of ids (see to_wire / from_wire); nothing else
    in the engine should look at the wire form.
    """
    ids: FrozenSet[str] = frozenset()

    def with_player(self, player_id: str) -> "ActedPlayers":
        return ActedPlayers(self.ids | {player_id})

    @classmethod
    def only(cls, player_id: str) -> "ActedPlayers":
        return cls(frozenset({player_id}))

    def __contains__(self, player_id: object) -> bool:
        return player_id in self.ids

    def __len__(self) -> int:
        return len(self.ids)

    def __iter__(self):
        return iter(sorted(self.ids))

    def to_wire(self) -> List[str]:
        return sorted(self.ids)

    @classmethod
    def from_wire(cls, ids: Optional[Iterable[str]]) -> "ActedPlayers":
        return cls(frozenset(ids or ()))


@dataclass(frozen=True)
class Player:
    id: str
    name: str
    model: str = ""                 # free-form strategy/model tag
    chips: int = 0
    hole_cards: Tuple[Card, ...] = ()
    current_bet: int = 0            # committed in the current betting round
    total_bet_this_hand: int = 0    # committed across all rounds of this hand
    status: PlayerStatus = PlayerStatus.ACTIVE
    seat_position: int = 0
    is_dealer: bool = False
    is_turn: bool = False

    @property
    def is_live(self) -> bool:
        """Still contesting the pot (active or all-in)."""
        return self.status in (PlayerStatus.ACTIVE, PlayerStatus.ALL_IN)

    def commit(self, amount: int) -> "Player":
        """Move up to `amount` chips from the stack into the pot."""
        amount = min(amount, self.chips)
        chips = self.chips - amount
        status = PlayerStatus.ALL_IN if chips == 0 and amount > 0 else self.status
        return replace(
            self,
            chips=chips,
            current_bet=self.current_bet + amount,
            total_bet_this_hand=self.total_bet_this_hand + amount,
            status=status,
        )


@dataclass(frozen=True)
class BettingRound:
    phase: GamePhase
    current_bet: int = 0
    min_raise: int = 0              # fixed bet unit for this street
    raises_this_round: int = 0
    last_raiser: Optional[str] = None
    acted_players: ActedPlayers = field(default_factory=ActedPlayers)


@dataclass(frozen=True)
class Pot:
    amount: int
    eligible_players: Tuple[str, ...] = ()


@dataclass(frozen=True)
class PlayerAction:
    type: ActionType
    player_id: str
    timestamp: float
    amount: Optional[int] = None    # chips actually committed
    reasoning: Optional[str] = None
    phase: Optional[GamePhase] = None


@dataclass(frozen=True)
class Winner:
    player_id: str
    amount: int
    hand: Optional[EvaluatedHand] = None
    pots_won: Tuple[int, ...] = ()     # layer indexes, main pot first


@dataclass(frozen=True)
class GameState:
    id: str
    small_blind: int
    big_blind: int
    phase: GamePhase = GamePhase.WAITING
    players: Tuple[Player, ...] = ()
    deck: Tuple[Card, ...] = ()
    community_cards: Tuple[Card, ...] = ()
    pots: Tuple[Pot, ...] = ()
    dealer_position: int = 0
    current_player_index: int = -1
    betting_round: BettingRound = field(default_factory=lambda: BettingRound(GamePhase.WAITING))
    action_log: Tuple[PlayerAction, ...] = ()
    hand_number: int = 0
    winners: Tuple[Winner, ...] = ()

    @property
    def current_player(self) -> Optional[Player]:
        if 0 <= self.current_player_index < len(self.players):
            return self.players[self.current_player_index]
        return None

    @property
    def live_players(self) -> List[Player]:
        """Players still in the hand (active or all-in)."""
        return [p for p in self.players if p.is_live]

    @property
    def active_players(self) -> List[Player]:
        """Players who can still act this hand."""
        return [p for p in self.players if p.status == PlayerStatus.ACTIVE]

    @property
    def pot_total(self) -> int:
        return sum(p.amount for p in self.pots)

    @property
    def hand_in_progress(self) -> bool:
        return self.phase in STREETS

    def get_player(self, player_id: str) -> Optional[Player]:
        for p in self.players:
            if p.id == player_id:
                return p
        return None

    def player_index(self, player_id: str) -> int:
        for i, p in enumerate(self.players):
            if p.id == player_id:
                return i
        return -1

    def with_player(self, index: int, player: Player) -> "GameState":
        """Copy of the state with one seat replaced."""
        players = self.players[:index] + (player,) + self.players[index + 1:]
        return replace(self, players=players)
