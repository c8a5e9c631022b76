# src/bigtwo_engine/errors.py

class GameError(Exception):
    """Base exception for game-related errors."""
    def __init__(self, code: str, message: str):
        self.code = code
        self.message = message
        super().__init__(f"[{code}] {message}")

# Specific error codes
ROOM_NOT_FOUND = "ROOM_NOT_FOUND"
ROOM_ALREADY_EXISTS = "ROOM_ALREADY_EXISTS"
ROOM_FULL = "ROOM_FULL"
WRONG_PASSWORD = "WRONG_PASSWORD"
NOT_OWNER = "NOT_OWNER"
INSUFFICIENT_PLAYERS = "INSUFFICIENT_PLAYERS"
NOT_YOUR_TURN = "NOT_YOUR_TURN"
INVALID_HAND_SHAPE = "INVALID_HAND_SHAPE"
MUST_LEAD_OPENING_CARD = "MUST_LEAD_OPENING_CARD"
SIZE_MISMATCH = "SIZE_MISMATCH"
DOES_NOT_BEAT = "DOES_NOT_BEAT"
NOT_IN_HAND = "NOT_IN_HAND"
NOT_IN_ROOM = "NOT_IN_ROOM"
GAME_NOT_ACTIVE = "GAME_NOT_ACTIVE"
ACTION_NOT_ALLOWED = "ACTION_NOT_ALLOWED"
INVALID_EVENT = "INVALID_EVENT"
INTERNAL_ERROR = "INTERNAL"

# Helper function to raise common errors
def raise_error(code: str, message: str):
    raise GameError(code, message)
