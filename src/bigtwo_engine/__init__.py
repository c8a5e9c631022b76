"""Big Two card game engine: hand rules, room turn state machine and websocket service."""

__version__ = "1.0.0"
