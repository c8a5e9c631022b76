"""
End-to-end tests for the websocket service.
"""

import pytest
from fastapi.testclient import TestClient

from bigtwo_engine.ws.events import parse_inbound_event, PlayEvent
from bigtwo_engine.ws.server import app

client = TestClient(app)


@pytest.fixture(scope="module", autouse=True)
def _shared_event_loop():
    # Run every websocket session on one event loop, as under a real server
    with client:
        yield


def join(ws, room_id, name, mode="join", password=None):
    ws.send_json({"type": "join", "room_id": room_id, "name": name, "mode": mode,
                  "password": password})
    joined = ws.receive_json()
    assert joined["type"] == "join_success"
    update = ws.receive_json()
    assert update["type"] == "room_update"
    return joined["player_id"], update["room"]


def test_health_check():
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json()["status"] == "healthy"


def test_parse_play_event_rejects_bad_cards():
    assert isinstance(parse_inbound_event({"type": "play", "room_id": "r", "cards": [0, 4]}), PlayEvent)
    with pytest.raises(ValueError):
        parse_inbound_event({"type": "play", "room_id": "r", "cards": [52]})
    with pytest.raises(ValueError):
        parse_inbound_event({"type": "play", "room_id": "r", "cards": [3, 3]})
    with pytest.raises(ValueError):
        parse_inbound_event({"type": "shuffle", "room_id": "r"})


def test_invalid_event_gets_error():
    with client.websocket_connect("/ws") as ws:
        ws.send_text("not json")
        assert ws.receive_json()["code"] == "INVALID_EVENT"

        ws.send_json({"type": "dance", "room_id": "x"})
        assert ws.receive_json()["code"] == "INVALID_EVENT"


def test_join_missing_room():
    with client.websocket_connect("/ws") as ws:
        ws.send_json({"type": "join", "room_id": "no-such-room", "name": "Alice"})
        msg = ws.receive_json()
        assert msg["type"] == "error"
        assert msg["code"] == "ROOM_NOT_FOUND"


def test_intent_for_another_room_is_refused():
    with client.websocket_connect("/ws") as ws:
        join(ws, "ws-solo", "Alice", mode="create")
        ws.send_json({"type": "start", "room_id": "elsewhere"})
        assert ws.receive_json()["code"] == "NOT_IN_ROOM"


def test_full_game_flow():
    with client.websocket_connect("/ws") as alice:
        alice_id, room = join(alice, "ws-room", "Alice", mode="create", password="pw")
        assert room["owner_id"] == alice_id
        assert room["has_password"]

        with client.websocket_connect("/ws") as bob:
            bob.send_json({"type": "join", "room_id": "ws-room", "name": "Bob"})
            assert bob.receive_json()["code"] == "WRONG_PASSWORD"

            bob_id, room = join(bob, "ws-room", "Bob", password="pw")
            assert [p["name"] for p in room["players"]] == ["Alice", "Bob"]
            assert alice.receive_json()["type"] == "room_update"

            listing = client.get("/rooms").json()
            assert {"id": "ws-room", "status": "waiting", "player_count": 2,
                    "max_players": 4, "has_password": True} in listing

            # only the owner may start
            bob.send_json({"type": "start", "room_id": "ws-room"})
            assert bob.receive_json()["code"] == "NOT_OWNER"

            alice.send_json({"type": "start", "room_id": "ws-room"})
            hands = {}
            for pid, ws in ((alice_id, alice), (bob_id, bob)):
                hand = ws.receive_json()
                assert hand["type"] == "hand"
                assert len(hand["cards"]) == 26
                hands[pid] = hand["cards"]
                update = ws.receive_json()
                assert update["type"] == "game_update"
                assert update["room"]["status"] == "playing"
                assert "hand" not in update["room"]["players"][0]

            assert not set(hands[alice_id]) & set(hands[bob_id])
            leader = update["room"]["turn"]
            assert 0 in hands[leader]
            sockets = {alice_id: alice, bob_id: bob}
            other = bob_id if leader == alice_id else alice_id

            sockets[other].send_json({"type": "play", "room_id": "ws-room",
                                      "cards": [hands[other][0]]})
            assert sockets[other].receive_json()["code"] == "NOT_YOUR_TURN"

            sockets[leader].send_json({"type": "play", "room_id": "ws-room", "cards": [0]})
            for ws in (alice, bob):
                update = ws.receive_json()
                assert update["type"] == "game_update"
                assert update["room"]["last_play"]["cards"] == [0]
                assert update["room"]["last_play"]["type"] == "SINGLE"
                assert update["room"]["turn"] == other

            sockets[other].send_json({"type": "pass", "room_id": "ws-room"})
            for ws in (alice, bob):
                update = ws.receive_json()
                assert update["room"]["last_play"]["cards"] == []
                assert update["room"]["turn"] == leader

        # bob's disconnect is an implicit leave
        update = alice.receive_json()
        assert update["type"] == "room_update"
        assert [p["id"] for p in update["room"]["players"]] == [alice_id]
