"""
FastAPI WebSocket server for the Big Two game.
"""

import logging
import uuid
from typing import Dict, List, Optional

import orjson
from fastapi import FastAPI, WebSocket, WebSocketDisconnect
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from ..engine import (
    ActionResult, join_room, leave_room, pass_turn, play_cards, restart_game, start_game,
)
from ..errors import ROOM_NOT_FOUND
from ..models import ErrorMessage, Event, GameSnapshot, PrivateHand, RoomSnapshot, RoomState
from ..serialization import get_public_room_info, sanitize_state
from ..store import RoomStore
from .events import (
    ErrorCode, JoinEvent, LeaveEvent, PassEvent, PlayEvent, RestartEvent, StartEvent,
    create_error_event, create_game_update_event, create_hand_event,
    create_join_success_event, create_room_update_event, parse_inbound_event,
)

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# FastAPI app
app = FastAPI(title="Big Two Game Engine", version="1.0.0")

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Configure appropriately for production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

store = RoomStore()


class ConnectionManager:
    """Manages WebSocket connections and which room each one sits in."""

    def __init__(self):
        self.active_connections: Dict[str, WebSocket] = {}
        self.player_rooms: Dict[str, str] = {}

    def connect(self, player_id: str, websocket: WebSocket):
        self.active_connections[player_id] = websocket
        logger.info(f"Player {player_id} connected")

    def disconnect(self, player_id: str) -> Optional[str]:
        """Forget a connection, returning the room it was seated in."""
        self.active_connections.pop(player_id, None)
        room_id = self.player_rooms.pop(player_id, None)
        logger.info(f"Player {player_id} disconnected from room {room_id}")
        return room_id

    def room_of(self, player_id: str) -> Optional[str]:
        return self.player_rooms.get(player_id)

    def seat(self, player_id: str, room_id: str):
        self.player_rooms[player_id] = room_id

    def unseat(self, player_id: str):
        self.player_rooms.pop(player_id, None)

    async def send_to_player(self, player_id: str, event: BaseModel):
        websocket = self.active_connections.get(player_id)
        if websocket is None:
            return
        try:
            await websocket.send_text(event.model_dump_json())
        except Exception as e:
            logger.error(f"Error sending to player {player_id}: {e}")

    async def broadcast_to_room(self, room: RoomState, event: BaseModel):
        """Send an event to every player seated in the room."""
        for player in room.players:
            await self.send_to_player(player.id, event)


manager = ConnectionManager()


async def dispatch_events(events: List[Event]):
    """Deliver the events produced by a command."""
    for event in events:
        if isinstance(event, RoomSnapshot):
            await manager.broadcast_to_room(
                event.room, create_room_update_event(sanitize_state(event.room))
            )
        elif isinstance(event, GameSnapshot):
            await manager.broadcast_to_room(
                event.room, create_game_update_event(sanitize_state(event.room))
            )
        elif isinstance(event, PrivateHand):
            await manager.send_to_player(event.player_id, create_hand_event(event.cards))
        elif isinstance(event, ErrorMessage):
            await manager.send_to_player(
                event.player_id, create_error_event(ErrorCode(event.code), event.text)
            )
        else:
            raise ValueError(f"Unhandled outbound event: {type(event)}")


def _existing_room(player_id: str, command):
    """Wrap a command that needs the room to exist."""
    def run(state: Optional[RoomState]) -> ActionResult:
        if state is None:
            return ActionResult.error(None, player_id, ROOM_NOT_FOUND, "Room not found")
        return command(state)
    return run


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "rooms": len(store),
        "connections": len(manager.active_connections)
    }


@app.get("/rooms")
async def list_rooms():
    """Public listing of open rooms."""
    return [get_public_room_info(room) for room in store.list_rooms()]


@app.websocket("/ws")
async def websocket_endpoint(websocket: WebSocket):
    """Main WebSocket endpoint."""
    await websocket.accept()
    player_id = str(uuid.uuid4())
    manager.connect(player_id, websocket)

    try:
        while True:
            raw_data = await websocket.receive_text()

            try:
                event = parse_inbound_event(orjson.loads(raw_data))
                await handle_event(player_id, event)
            except ValueError as e:
                # Malformed JSON or an invalid event
                await manager.send_to_player(
                    player_id, create_error_event(ErrorCode.INVALID_EVENT, str(e))
                )
            except Exception:
                logger.exception(f"Error handling event from {player_id}")
                await manager.send_to_player(
                    player_id, create_error_event(ErrorCode.INTERNAL, "Internal server error")
                )

    except WebSocketDisconnect:
        logger.info(f"WebSocket disconnected for player {player_id}")
    finally:
        room_id = manager.disconnect(player_id)
        # A dropped connection is an implicit leave
        if room_id:
            result = store.apply(room_id, _existing_room(
                player_id, lambda state: leave_room(state, player_id)
            ))
            if result.success:
                await dispatch_events(result.events)


async def handle_event(player_id: str, event):
    """Handle an inbound event."""
    if isinstance(event, JoinEvent):
        await handle_join(player_id, event)
        return

    if manager.room_of(player_id) != event.room_id:
        await manager.send_to_player(
            player_id, create_error_event(ErrorCode.NOT_IN_ROOM, "Not seated in this room")
        )
        return

    if isinstance(event, StartEvent):
        command = lambda state: start_game(state, player_id)
    elif isinstance(event, PlayEvent):
        command = lambda state: play_cards(state, player_id, event.cards)
    elif isinstance(event, PassEvent):
        command = lambda state: pass_turn(state, player_id)
    elif isinstance(event, LeaveEvent):
        command = lambda state: leave_room(state, player_id)
    elif isinstance(event, RestartEvent):
        command = lambda state: restart_game(state, player_id)
    else:
        raise ValueError(f"Unhandled event type: {type(event)}")

    result = store.apply(event.room_id, _existing_room(player_id, command))
    if result.success and isinstance(event, LeaveEvent):
        manager.unseat(player_id)
    await dispatch_events(result.events)


async def handle_join(player_id: str, event: JoinEvent):
    """Handle create/join room event."""
    if manager.room_of(player_id):
        await manager.send_to_player(player_id, create_error_event(
            ErrorCode.ACTION_NOT_ALLOWED, "Leave your current room first"
        ))
        return

    result = store.apply(event.room_id, lambda state: join_room(
        state, event.room_id, player_id, event.name, event.password, event.mode
    ))

    if result.success:
        manager.seat(player_id, event.room_id)
        await manager.send_to_player(
            player_id, create_join_success_event(player_id, event.room_id)
        )
    else:
        logger.info(f"Join of {event.room_id} by {player_id} failed: {result.error_message}")

    await dispatch_events(result.events)
