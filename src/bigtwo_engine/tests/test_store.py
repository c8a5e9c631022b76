from bigtwo_engine.engine import join_room, leave_room
from bigtwo_engine.store import RoomStore


def create(store, room_id, player_id, mode="create"):
    return store.apply(room_id, lambda state: join_room(state, room_id, player_id, player_id, mode=mode))


def test_successful_command_is_stored():
    store = RoomStore()
    result = create(store, "alpha", "p0")

    assert result.success
    assert store.get("alpha") is result.state
    assert "alpha" in store
    assert len(store) == 1


def test_rejected_command_is_not_stored():
    store = RoomStore()
    result = create(store, "alpha", "p0", mode="join")

    assert not result.success
    assert store.get("alpha") is None
    assert len(store) == 0


def test_rejection_keeps_previous_state():
    store = RoomStore()
    create(store, "alpha", "p0")
    before = store.get("alpha")

    result = create(store, "alpha", "p1")

    assert not result.success
    assert store.get("alpha") is before


def test_empty_room_is_destroyed():
    store = RoomStore()
    create(store, "alpha", "p0")
    create(store, "alpha", "p1", mode="join")

    store.apply("alpha", lambda state: leave_room(state, "p0"))
    assert store.get("alpha").owner_id == "p1"

    store.apply("alpha", lambda state: leave_room(state, "p1"))
    assert store.get("alpha") is None
    assert store.list_rooms() == []


def test_rooms_are_independent():
    store = RoomStore()
    create(store, "alpha", "p0")
    create(store, "beta", "p1")

    assert {room.id for room in store.list_rooms()} == {"alpha", "beta"}
    assert store.get("alpha").players[0].id == "p0"
    assert store.get("beta").players[0].id == "p1"


def test_closed_room_drops_its_lock():
    store = RoomStore()
    create(store, "alpha", "p0")
    assert "alpha" in store.room_locks

    store.apply("alpha", lambda state: leave_room(state, "p0"))
    assert "alpha" not in store.room_locks

    # the id can be reused afterwards
    assert create(store, "alpha", "p1").success
