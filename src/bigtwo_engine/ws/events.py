"""
WebSocket event models and validation.
"""

import time
from enum import Enum
from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, Field, ValidationError, field_validator

from ..constants import DECK_SIZE, MODE_JOIN
from .. import errors


class EventType(str, Enum):
    """Inbound event types."""
    JOIN = "join"
    START = "start"
    PLAY = "play"
    PASS = "pass"
    LEAVE = "leave"
    RESTART = "restart"


class OutboundEventType(str, Enum):
    """Outbound event types."""
    JOIN_SUCCESS = "join_success"
    ROOM_UPDATE = "room_update"
    GAME_UPDATE = "game_update"
    HAND = "hand"
    ERROR = "error"


class ErrorCode(str, Enum):
    """Error codes for client events."""
    ROOM_NOT_FOUND = errors.ROOM_NOT_FOUND
    ROOM_ALREADY_EXISTS = errors.ROOM_ALREADY_EXISTS
    ROOM_FULL = errors.ROOM_FULL
    WRONG_PASSWORD = errors.WRONG_PASSWORD
    NOT_OWNER = errors.NOT_OWNER
    INSUFFICIENT_PLAYERS = errors.INSUFFICIENT_PLAYERS
    NOT_YOUR_TURN = errors.NOT_YOUR_TURN
    INVALID_HAND_SHAPE = errors.INVALID_HAND_SHAPE
    MUST_LEAD_OPENING_CARD = errors.MUST_LEAD_OPENING_CARD
    SIZE_MISMATCH = errors.SIZE_MISMATCH
    DOES_NOT_BEAT = errors.DOES_NOT_BEAT
    NOT_IN_HAND = errors.NOT_IN_HAND
    NOT_IN_ROOM = errors.NOT_IN_ROOM
    GAME_NOT_ACTIVE = errors.GAME_NOT_ACTIVE
    ACTION_NOT_ALLOWED = errors.ACTION_NOT_ALLOWED
    INVALID_EVENT = errors.INVALID_EVENT
    INTERNAL = errors.INTERNAL_ERROR


# Inbound event models
class BaseEvent(BaseModel):
    """Base event model."""
    type: EventType
    room_id: str = Field(..., min_length=1, max_length=50)


class JoinEvent(BaseEvent):
    """Create or join room event."""
    type: EventType = EventType.JOIN
    name: Optional[str] = Field(default=None, max_length=30)
    password: Optional[str] = Field(default=None, max_length=50)
    mode: Literal['create', 'join'] = MODE_JOIN


class StartEvent(BaseEvent):
    """Start game event."""
    type: EventType = EventType.START


class PlayEvent(BaseEvent):
    """Play cards event."""
    type: EventType = EventType.PLAY
    cards: List[int] = Field(..., min_length=1, max_length=5)

    @field_validator('cards')
    @classmethod
    def validate_cards(cls, v):
        """Card ids must be distinct and inside the deck."""
        if any(card < 0 or card >= DECK_SIZE for card in v):
            raise ValueError(f'card ids must be between 0 and {DECK_SIZE - 1}')
        if len(set(v)) != len(v):
            raise ValueError('card ids must not repeat')
        return v


class PassEvent(BaseEvent):
    """Pass turn event."""
    type: EventType = EventType.PASS


class LeaveEvent(BaseEvent):
    """Leave room event."""
    type: EventType = EventType.LEAVE


class RestartEvent(BaseEvent):
    """Reset a finished room for another round."""
    type: EventType = EventType.RESTART


# Union type for all inbound events
InboundEvent = Union[
    JoinEvent,
    StartEvent,
    PlayEvent,
    PassEvent,
    LeaveEvent,
    RestartEvent
]


# Outbound event models
class JoinSuccessEvent(BaseModel):
    """Join success confirmation event."""
    type: OutboundEventType = OutboundEventType.JOIN_SUCCESS
    player_id: str
    room_id: str
    timestamp: float


class RoomUpdateEvent(BaseModel):
    """Roster or ownership changed."""
    type: OutboundEventType = OutboundEventType.ROOM_UPDATE
    room: Dict[str, Any]
    timestamp: float


class GameUpdateEvent(BaseModel):
    """Play state changed."""
    type: OutboundEventType = OutboundEventType.GAME_UPDATE
    room: Dict[str, Any]
    timestamp: float


class HandEvent(BaseModel):
    """Private dealt hand."""
    type: OutboundEventType = OutboundEventType.HAND
    cards: List[int]
    timestamp: float


class ErrorEvent(BaseModel):
    """Error event."""
    type: OutboundEventType = OutboundEventType.ERROR
    code: ErrorCode
    message: str
    timestamp: float


# Union type for all outbound events
OutboundEvent = Union[
    JoinSuccessEvent,
    RoomUpdateEvent,
    GameUpdateEvent,
    HandEvent,
    ErrorEvent
]


EVENT_MAP = {
    EventType.JOIN: JoinEvent,
    EventType.START: StartEvent,
    EventType.PLAY: PlayEvent,
    EventType.PASS: PassEvent,
    EventType.LEAVE: LeaveEvent,
    EventType.RESTART: RestartEvent,
}


def parse_inbound_event(data: Dict[str, Any]) -> InboundEvent:
    """
    Parse raw event data into appropriate event model.

    Args:
        data: Raw event data from WebSocket

    Returns:
        Parsed event model

    Raises:
        ValueError: If event type is invalid or data is malformed
    """
    if not isinstance(data, dict):
        raise ValueError("Event must be a JSON object")

    event_type = data.get("type")

    if not event_type:
        raise ValueError("Missing event type")

    try:
        event_type = EventType(event_type)
    except ValueError:
        raise ValueError(f"Invalid event type: {event_type}")

    try:
        return EVENT_MAP[event_type](**data)
    except ValidationError as e:
        raise ValueError(f"Invalid event data: {e}")


def create_error_event(code: ErrorCode, message: str) -> ErrorEvent:
    """Create an error event."""
    return ErrorEvent(code=code, message=message, timestamp=time.time())


def create_join_success_event(player_id: str, room_id: str) -> JoinSuccessEvent:
    """Create a join success event."""
    return JoinSuccessEvent(player_id=player_id, room_id=room_id, timestamp=time.time())


def create_room_update_event(room: Dict[str, Any]) -> RoomUpdateEvent:
    return RoomUpdateEvent(room=room, timestamp=time.time())


def create_game_update_event(room: Dict[str, Any]) -> GameUpdateEvent:
    return GameUpdateEvent(room=room, timestamp=time.time())


def create_hand_event(cards: List[int]) -> HandEvent:
    return HandEvent(cards=cards, timestamp=time.time())
