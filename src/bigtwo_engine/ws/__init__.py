"""
WebSocket server and event handling for the Big Two game.
"""

from .server import app

__all__ = ["app"]
