"""
State serialization utilities.
"""

from typing import Any, Dict

from .hands import classify
from .models import Player, RoomState


def _serialize_rule_config(rule_config) -> Dict[str, Any]:
    """Serialize rule configuration."""
    return {
        "max_players": rule_config.max_players,
        "min_players": rule_config.min_players,
        "win_bonus": rule_config.win_bonus,
    }


def serialize_player(player: Player) -> Dict[str, Any]:
    """Public view of a player; the hand itself is never included."""
    return {
        "id": player.id,
        "name": player.name,
        "avatar": player.avatar,
        "hand_size": player.hand_size,
        "has_passed": player.has_passed,
        "score": player.score,
        "is_owner": player.is_owner,
    }


def sanitize_state(state: RoomState) -> Dict[str, Any]:
    """
    Sanitize room state for broadcast to every player in the room.

    Args:
        state: Room state to sanitize

    Returns:
        Sanitized state dictionary safe for JSON transmission
    """
    current = state.current_player
    last_info = classify(state.last_play) if state.last_play else None

    return {
        "id": state.id,
        "version": state.version,
        "status": state.status,
        "owner_id": state.owner_id,
        "has_password": state.password is not None,
        "players": [serialize_player(p) for p in state.players],
        "turn_index": state.turn_index,
        "turn": current.id if current else None,
        "last_play": {
            "cards": state.last_play.copy(),
            "type": last_info.type if last_info else None,
            "name": last_info.name if last_info else None,
        },
        "pass_count": state.pass_count,
        "is_first_turn": state.is_first_turn,
        "log": state.log.copy(),
        "rules": _serialize_rule_config(state.rule_config),
    }


def get_public_room_info(state: RoomState) -> Dict[str, Any]:
    """Get public information about a room for listings."""
    return {
        "id": state.id,
        "status": state.status,
        "player_count": len(state.players),
        "max_players": state.rule_config.max_players,
        "has_password": state.password is not None,
    }
