from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import List, Optional, Tuple

from .cards import Card

MIN_PLAYERS = 2
MAX_PLAYERS = 10


class Stage(str, Enum):
    PREFLOP = "preflop"
    FLOP = "flop"
    TURN = "turn"
    RIVER = "river"
    SHOWDOWN = "showdown"
    ENDED = "ended"


class ActionType(str, Enum):
    FOLD = "FOLD"
    CHECK = "CHECK"
    CALL = "CALL"
    RAISE_TO = "RAISE_TO"


class RejectReason(str, Enum):
    NOT_YOUR_TURN = "NOT_YOUR_TURN"
    UNKNOWN_PLAYER = "UNKNOWN_PLAYER"
    HAND_OVER = "HAND_OVER"
    CANNOT_CHECK = "CANNOT_CHECK"
    BELOW_MINIMUM_RAISE = "BELOW_MINIMUM_RAISE"
    INSUFFICIENT_CHIPS = "INSUFFICIENT_CHIPS"
    MISSING_AMOUNT = "MISSING_AMOUNT"
    UNSUPPORTED_ACTION = "UNSUPPORTED_ACTION"
    BETTING_INCOMPLETE = "BETTING_INCOMPLETE"
    HAND_IN_PROGRESS = "HAND_IN_PROGRESS"
    POT_NOT_AWARDED = "POT_NOT_AWARDED"
    NOT_ENOUGH_PLAYERS = "NOT_ENOUGH_PLAYERS"
    NO_WINNERS = "NO_WINNERS"
    STALE_VERSION = "STALE_VERSION"


@dataclass
class TableConfig:
    players: int = 6
    starting_stack: int = 1_000
    sb: int = 5
    bb: int = 10
    seed: Optional[int] = None

    def clamped(self) -> "TableConfig":
        return replace(self, players=min(max(self.players, MIN_PLAYERS), MAX_PLAYERS))


@dataclass(frozen=True)
class Player:
    id: str
    name: str
    chips: int
    cards: Tuple[Card, ...] = ()
    is_active: bool = True
    is_dealer: bool = False
    is_small_blind: bool = False
    is_big_blind: bool = False
    is_turn: bool = False
    is_all_in: bool = False
    bet: int = 0
    seat_position: Optional[int] = None

    @property
    def can_act(self) -> bool:
        return self.is_active and not self.is_all_in and self.chips > 0


@dataclass(frozen=True)
class GameState:
    # One immutable snapshot of the table. Every transition returns a new one.
    players: Tuple[Player, ...]
    deck: Tuple[Card, ...]
    community_cards: Tuple[Card, ...] = ()
    pot: int = 0
    current_bet: int = 0
    stage: Stage = Stage.PREFLOP
    current_player_index: int = 0
    dealer_index: int = 0
    small_blind_amount: int = 5
    big_blind_amount: int = 10

    def find_player(self, player_id: str) -> Optional[int]:
        for idx, player in enumerate(self.players):
            if player.id == player_id:
                return idx
        return None

    @property
    def current_player(self) -> Optional[Player]:
        for player in self.players:
            if player.is_turn:
                return player
        return None

    def with_player(self, index: int, **changes: object) -> "GameState":
        players = list(self.players)
        players[index] = replace(players[index], **changes)
        return replace(self, players=tuple(players))


@dataclass(frozen=True)
class Room:
    players: Tuple[Player, ...] = ()
    max_seats: int = MAX_PLAYERS


@dataclass(frozen=True)
class ActionResult:
    """Outcome of a transition: the new state, or the untouched input plus why it was refused."""

    state: GameState
    reason: Optional[RejectReason] = None

    @property
    def accepted(self) -> bool:
        return self.reason is None

    @classmethod
    def ok(cls, state: GameState) -> "ActionResult":
        return cls(state=state)

    @classmethod
    def rejected(cls, state: GameState, reason: RejectReason) -> "ActionResult":
        return cls(state=state, reason=reason)


@dataclass
class ActionWindow:
    legal: List[ActionType] = field(default_factory=list)
    call_amount: Optional[int] = None
    min_raise_to: Optional[int] = None
    max_raise_to: Optional[int] = None
