"""
Room turn state machine.

Every command takes the prior RoomState and returns an ActionResult holding
the next state plus the events the transport must deliver. The prior state
is never mutated, so a rejected intent leaves the room exactly as it was.
"""

import copy
import logging
from typing import Callable, Iterable, List, Optional

from .cards import card_label, create_deck, deal_cards, hand_label, shuffle_deck
from .constants import (
    AVATARS, MODE_CREATE, MODE_JOIN, OPENING_CARD, STATUS_ENDED, STATUS_PLAYING,
    STATUS_WAITING,
)
from .errors import (
    ACTION_NOT_ALLOWED, GAME_NOT_ACTIVE, INSUFFICIENT_PLAYERS, NOT_IN_HAND,
    NOT_IN_ROOM, NOT_OWNER, NOT_YOUR_TURN, ROOM_ALREADY_EXISTS, ROOM_FULL,
    ROOM_NOT_FOUND, WRONG_PASSWORD, GameError, raise_error,
)
from .hands import compare
from .models import ErrorMessage, Event, GameSnapshot, Player, PrivateHand, RoomSnapshot, RoomState
from .rules import RuleConfig, default_rules
from .scoring import settle_scores

logger = logging.getLogger(__name__)


class ActionResult:
    """Outcome of a command applied to a room."""

    def __init__(
        self,
        success: bool,
        state: Optional[RoomState],
        events: Optional[List[Event]] = None,
        error_code: Optional[str] = None,
        error_message: Optional[str] = None
    ):
        self.success = success
        self.state = state
        self.events = events or []
        self.error_code = error_code
        self.error_message = error_message

    @classmethod
    def ok(cls, state: RoomState, events: List[Event]) -> 'ActionResult':
        return cls(success=True, state=state, events=events)

    @classmethod
    def error(cls, state: Optional[RoomState], player_id: str, error_code: str,
              error_message: str) -> 'ActionResult':
        """A rejection: the prior state is returned untouched."""
        return cls(
            success=False,
            state=state,
            events=[ErrorMessage(player_id=player_id, code=error_code, text=error_message)],
            error_code=error_code,
            error_message=error_message
        )


def _apply(state: RoomState, player_id: str,
           command: Callable[[RoomState], List[Event]]) -> ActionResult:
    """Run a command against a copy of the room."""
    next_state = copy.deepcopy(state)
    try:
        events = command(next_state)
    except GameError as e:
        logger.info(f"Rejected intent from {player_id} in room {state.id}: {e}")
        return ActionResult.error(state, player_id, e.code, e.message)

    next_state.version += 1
    return ActionResult.ok(next_state, events)


def _require_turn(room: RoomState, player_id: str) -> Player:
    if room.status != STATUS_PLAYING:
        raise_error(GAME_NOT_ACTIVE, "No game is in progress")
    player = room.current_player
    if player is None or player.id != player_id:
        raise_error(NOT_YOUR_TURN, "It's not your turn")
    return player


def _advance_turn(room: RoomState):
    room.turn_index = (room.turn_index + 1) % len(room.players)


def _maybe_reset_trick(room: RoomState):
    """Clear the table once every player but the one on turn has passed."""
    if room.pass_count < len(room.players) - 1:
        return
    room.last_play = []
    room.pass_count = 0
    for p in room.players:
        p.has_passed = False
    room.log.append(f"—— New trick, {room.current_player.name} takes the lead ——")


def create_room(room_id: str, owner_id: Optional[str] = None, password: Optional[str] = None,
                rules: Optional[RuleConfig] = None) -> RoomState:
    """Create an empty room waiting for players."""
    room = RoomState(
        id=room_id,
        owner_id=owner_id,
        password=password or None,
        rule_config=(rules or default_rules).model_copy()
    )
    room.log.append(f"Room {room_id} initialised")
    return room


def join_room(state: Optional[RoomState], room_id: str, player_id: str,
              name: Optional[str] = None, password: Optional[str] = None,
              mode: str = MODE_JOIN) -> ActionResult:
    """
    Add a player to a room, creating the room on the create path.

    Args:
        state: Current room state, or None if no room has this id
        room_id: Room being joined
        player_id: Transport session id of the joining player
        name: Display name; a default is derived from the id when empty
        password: Password supplied by the player
        mode: 'create' to open a new room, 'join' to enter an existing one

    Returns:
        ActionResult with the updated room
    """
    if mode == MODE_CREATE and state is not None:
        return ActionResult.error(state, player_id, ROOM_ALREADY_EXISTS,
                                  "Room id is already taken, pick another one")
    if mode == MODE_JOIN and state is None:
        return ActionResult.error(None, player_id, ROOM_NOT_FOUND,
                                  "Room not found, check the room id")
    if state is None:
        state = create_room(room_id, owner_id=player_id, password=password)

    def command(room: RoomState) -> List[Event]:
        if room.status == STATUS_PLAYING and len(room.players) >= room.rule_config.max_players:
            raise_error(ROOM_FULL, "Game in progress and the table is full")
        if room.password and room.password != password:
            raise_error(WRONG_PASSWORD, "Incorrect password")
        if room.find_player(player_id):
            raise_error(ACTION_NOT_ALLOWED, "Already seated in this room")

        player = Player(
            id=player_id,
            name=name or f"Player_{player_id[:4]}",
            avatar=AVATARS[len(room.players) % len(AVATARS)],
            is_owner=player_id == room.owner_id
        )
        room.players.append(player)
        room.log.append(f"[System] {player.name} joined the table")
        logger.info(f"Player {player.name} ({player_id}) joined room {room.id}")
        return [RoomSnapshot(room)]

    return _apply(state, player_id, command)


def start_game(state: RoomState, requester_id: str, seed: Optional[int] = None) -> ActionResult:
    """
    Shuffle, deal and hand the lead to the holder of the opening card.

    Args:
        state: Current room state
        requester_id: Player asking to start, must own the room
        seed: Optional seed for deterministic shuffling

    Returns:
        ActionResult with a private hand event per player and a game snapshot
    """
    def command(room: RoomState) -> List[Event]:
        if requester_id != room.owner_id:
            raise_error(NOT_OWNER, "Only the room owner can start the game")
        if room.status != STATUS_WAITING:
            raise_error(ACTION_NOT_ALLOWED, "The game has already started")
        if not room.rule_config.can_start(len(room.players)):
            raise_error(INSUFFICIENT_PLAYERS,
                        f"At least {room.rule_config.min_players} players are needed to start")
        if not room.rule_config.validate_player_count(len(room.players)):
            raise_error(ROOM_FULL,
                        f"At most {room.rule_config.max_players} players can start a game")

        # The opening card can fall in the undealt remainder; deal again until it is dealt
        attempt = 0
        while True:
            shuffle_seed = None if seed is None else seed + attempt
            hands = deal_cards(shuffle_deck(create_deck(), shuffle_seed), len(room.players))
            if any(OPENING_CARD in hand for hand in hands):
                break
            attempt += 1

        events: List[Event] = []
        for seat, (player, hand) in enumerate(zip(room.players, hands)):
            player.hand = hand
            player.hand_size = len(hand)
            player.has_passed = False
            if OPENING_CARD in hand:
                room.turn_index = seat
            events.append(PrivateHand(player_id=player.id, cards=list(hand)))

        room.status = STATUS_PLAYING
        room.last_play = []
        room.pass_count = 0
        room.is_first_turn = True
        room.log.append(f"—— Battle begins, {card_label(OPENING_CARD)} leads ——")
        logger.info(f"Game started in room {room.id} with {len(room.players)} players, "
                    f"{room.current_player.name} leads")

        events.append(GameSnapshot(room))
        return events

    return _apply(state, requester_id, command)


def play_cards(state: RoomState, player_id: str, cards: Iterable[int]) -> ActionResult:
    """Lay cards on the table if they beat the current play."""
    cards = sorted(cards)

    def command(room: RoomState) -> List[Event]:
        player = _require_turn(room, player_id)

        if not all(card in player.hand for card in cards):
            raise_error(NOT_IN_HAND, "You do not hold all of these cards")

        result = compare(cards, room.last_play, room.is_first_turn)
        if not result.accepted:
            raise_error(result.error_code, result.reason)

        room.last_play = list(cards)
        room.pass_count = 0
        room.is_first_turn = False
        for p in room.players:
            p.has_passed = False

        player.hand = [c for c in player.hand if c not in cards]
        player.hand_size -= len(cards)
        room.log.append(f"{player.name} played [{result.info.name}] {hand_label(cards)}")

        if player.hand_size == 0:
            room.status = STATUS_ENDED
            settle_scores(room, player.id)
            room.log.append(f"🏆 {player.name} wins! Round over.")
            logger.info(f"Room {room.id} round won by {player.name} ({player.id})")
        else:
            _advance_turn(room)

        return [GameSnapshot(room)]

    return _apply(state, player_id, command)


def pass_turn(state: RoomState, player_id: str) -> ActionResult:
    """Pass the turn; once all but one player pass, the trick is cleared."""
    def command(room: RoomState) -> List[Event]:
        player = _require_turn(room, player_id)

        player.has_passed = True
        room.pass_count += 1
        room.log.append(f"{player.name} passed")
        _advance_turn(room)

        _maybe_reset_trick(room)
        return [GameSnapshot(room)]

    return _apply(state, player_id, command)


def leave_room(state: RoomState, player_id: str) -> ActionResult:
    """
    Remove a player from the roster.

    A room whose roster becomes empty is returned with no players and no
    events; the caller discards it. If the owner leaves, ownership moves to
    the first remaining player.
    """
    def command(room: RoomState) -> List[Event]:
        seat = room.seat_of(player_id)
        if seat < 0:
            raise_error(NOT_IN_ROOM, "Player is not in this room")

        leaver = room.players.pop(seat)
        room.log.append(f"[Warning] {leaver.name} left the table")
        logger.info(f"Player {leaver.name} ({player_id}) left room {room.id}")

        if not room.players:
            room.owner_id = None
            return []

        # Keep the same player on turn and the index inside the smaller roster
        if seat < room.turn_index:
            room.turn_index -= 1
        room.turn_index %= len(room.players)
        if leaver.has_passed and room.pass_count > 0:
            room.pass_count -= 1
        if room.status == STATUS_PLAYING and room.last_play:
            _maybe_reset_trick(room)

        if player_id == room.owner_id:
            new_owner = room.players[0]
            room.owner_id = new_owner.id
            new_owner.is_owner = True
            room.log.append(f"[System] Ownership passed to {new_owner.name}")

        return [RoomSnapshot(room)]

    return _apply(state, player_id, command)


def restart_game(state: RoomState, requester_id: str) -> ActionResult:
    """Return a finished room to waiting with the same roster and scores."""
    def command(room: RoomState) -> List[Event]:
        if requester_id != room.owner_id:
            raise_error(NOT_OWNER, "Only the room owner can restart the game")
        if room.status != STATUS_ENDED:
            raise_error(ACTION_NOT_ALLOWED, "The round has not ended yet")

        room.status = STATUS_WAITING
        room.last_play = []
        room.turn_index = 0
        room.pass_count = 0
        room.is_first_turn = True
        for p in room.players:
            p.hand = []
            p.hand_size = 0
            p.has_passed = False
        room.log.append("[System] The table is reset for a new round")

        return [RoomSnapshot(room)]

    return _apply(state, requester_id, command)
