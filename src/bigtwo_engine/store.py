"""Room registry shared by the service layer."""

import logging
import threading
from collections import defaultdict
from typing import Callable, Dict, List, Optional

from .engine import ActionResult
from .models import RoomState

logger = logging.getLogger(__name__)


class RoomStore:
    """
    Holds every live room and serialises commands per room.

    Commands for one room run one at a time under that room's lock, in the
    order they arrive; different rooms never block each other.
    """

    def __init__(self):
        self.rooms: Dict[str, RoomState] = {}
        self.room_locks = defaultdict(threading.Lock)

    def get(self, room_id: str) -> Optional[RoomState]:
        return self.rooms.get(room_id)

    def list_rooms(self) -> List[RoomState]:
        return list(self.rooms.values())

    def __contains__(self, room_id: str) -> bool:
        return room_id in self.rooms

    def __len__(self) -> int:
        return len(self.rooms)

    def apply(self, room_id: str,
              command: Callable[[Optional[RoomState]], ActionResult]) -> ActionResult:
        """
        Run a command against the current state of a room.

        The command receives the stored state (None if the room does not
        exist). A successful result replaces the stored state; a room left
        without players is destroyed.
        """
        with self.room_locks[room_id]:
            result = command(self.rooms.get(room_id))
            if result.success and result.state is not None:
                if result.state.players:
                    self.rooms[room_id] = result.state
                else:
                    self.rooms.pop(room_id, None)
                    self.room_locks.pop(room_id, None)
                    logger.info(f"Room {room_id} is empty and was closed")
            return result
