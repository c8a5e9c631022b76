"""Game models and data structures"""

from dataclasses import dataclass, field
from typing import List, Optional, Union

from .constants import STATUS_WAITING
from .rules import RuleConfig, default_rules


@dataclass
class Player:
    id: str  # transport session id, the join key
    name: str
    avatar: str = ''
    hand: List[int] = field(default_factory=list)  # card ids, never broadcast
    hand_size: int = 0
    has_passed: bool = False
    score: int = 0
    is_owner: bool = False


@dataclass
class RoomState:
    id: str
    owner_id: Optional[str] = None
    password: Optional[str] = None
    version: int = 0
    status: str = STATUS_WAITING  # waiting|playing|ended
    players: List[Player] = field(default_factory=list)  # seat order
    last_play: List[int] = field(default_factory=list)  # empty when the lead is free
    turn_index: int = 0
    pass_count: int = 0  # consecutive passes since the last play
    is_first_turn: bool = True
    log: List[str] = field(default_factory=list)
    rule_config: RuleConfig = field(default_factory=lambda: default_rules.model_copy())

    def find_player(self, player_id: str) -> Optional[Player]:
        return next((p for p in self.players if p.id == player_id), None)

    def seat_of(self, player_id: str) -> int:
        """Index of a player in the roster, -1 if absent."""
        return next((i for i, p in enumerate(self.players) if p.id == player_id), -1)

    @property
    def current_player(self) -> Optional[Player]:
        if not self.players:
            return None
        return self.players[self.turn_index % len(self.players)]


# Events produced by the state machine for the transport to deliver

@dataclass(frozen=True)
class RoomSnapshot:
    """Roster or ownership changed; broadcast to the whole room."""
    room: RoomState


@dataclass(frozen=True)
class GameSnapshot:
    """Play state changed; broadcast to the whole room."""
    room: RoomState


@dataclass(frozen=True)
class PrivateHand:
    """Dealt cards, delivered only to their owner."""
    player_id: str
    cards: List[int]


@dataclass(frozen=True)
class ErrorMessage:
    """Rejected intent, delivered only to the requester."""
    player_id: str
    code: str
    text: str


Event = Union[RoomSnapshot, GameSnapshot, PrivateHand, ErrorMessage]
