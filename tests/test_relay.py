"""Tests for the chat relay registry and the /ws endpoint."""
from __future__ import annotations

import pytest
from fastapi.testclient import TestClient
from starlette.websockets import WebSocketDisconnect

from camrent.main import app
from camrent.models.conversation import Message
from camrent.services.auth import create_access_token
from camrent.services.relay import ChatRelay, RelayConnection


class DummySocket:
    def __init__(self) -> None:
        self.messages: list[dict] = []

    async def send(self, message: dict) -> None:
        self.messages.append(message)


class DeadSocket:
    async def send(self, message: dict) -> None:
        raise RuntimeError("socket closed")


@pytest.mark.asyncio
async def test_relay_delivers_to_every_socket_of_a_user():
    relay = ChatRelay()
    tab_one, tab_two, other = DummySocket(), DummySocket(), DummySocket()
    await relay.register(RelayConnection(user_id=1, send=tab_one.send))
    await relay.register(RelayConnection(user_id=1, send=tab_two.send))
    await relay.register(RelayConnection(user_id=2, send=other.send))

    delivered = await relay.notify_new_message(conversation_id=10, recipient_id=1)

    assert delivered == 2
    assert tab_one.messages == [{"type": "new_message", "conversationId": 10}]
    assert tab_two.messages == tab_one.messages
    assert other.messages == []


@pytest.mark.asyncio
async def test_relay_unregister_and_offline_user():
    relay = ChatRelay()
    socket = DummySocket()
    connection = RelayConnection(user_id=5, send=socket.send)
    await relay.register(connection)
    assert await relay.is_online(5)

    await relay.unregister(connection)
    assert not await relay.is_online(5)
    assert await relay.notify_new_message(1, 5) == 0
    assert socket.messages == []
    # unregistering twice is harmless
    await relay.unregister(connection)


@pytest.mark.asyncio
async def test_relay_drops_dead_sockets():
    relay = ChatRelay()
    alive = DummySocket()
    await relay.register(RelayConnection(user_id=3, send=DeadSocket().send))
    await relay.register(RelayConnection(user_id=3, send=alive.send))

    assert await relay.notify_new_message(4, 3) == 1
    assert len(alive.messages) == 1
    # the dead socket is gone, the live one stays
    assert await relay.notify_new_message(4, 3) == 1
    assert await relay.is_online(3)


def _ws_url(user) -> str:
    return f"/ws?token={create_access_token(user)}"


def _conversation(client, renter, prop) -> int:
    response = client.post(
        "/api/conversations",
        json={"property_id": prop.id},
        headers={"Authorization": f"Bearer {create_access_token(renter)}"},
    )
    return response.json()["id"]


def test_socket_without_valid_token_is_accepted_then_closed():
    with TestClient(app) as client:
        for url in ("/ws", "/ws?token=garbage"):
            # The handshake completes; the close code arrives as a close frame
            with client.websocket_connect(url) as ws:
                with pytest.raises(WebSocketDisconnect) as exc:
                    ws.receive_json()
            assert exc.value.code == 4401


def test_socket_identity_comes_from_token(landlord, renter):
    with TestClient(app) as client:
        with client.websocket_connect(_ws_url(renter)) as ws:
            assert ws.receive_json() == {"type": "auth_success", "userId": renter.id}

            ws.send_json({"type": "auth", "userId": renter.id})
            assert ws.receive_json()["type"] == "auth_success"

            # a legacy auth frame cannot rebind the socket
            ws.send_json({"type": "auth", "userId": landlord.id})
            assert ws.receive_json()["type"] == "error"


def test_send_message_persists_and_nudges_recipient(db, landlord, renter, make_property):
    prop = make_property(landlord)
    with TestClient(app) as client:
        conversation_id = _conversation(client, renter, prop)
        with client.websocket_connect(_ws_url(renter)) as ws_renter, client.websocket_connect(
            _ws_url(landlord)
        ) as ws_landlord:
            ws_renter.receive_json()
            ws_landlord.receive_json()

            ws_renter.send_json(
                {"type": "send_message", "conversationId": conversation_id, "content": "Still available?"}
            )
            ack = ws_renter.receive_json()
            assert ack["type"] == "message_sent"
            assert ack["conversationId"] == conversation_id

            nudge = ws_landlord.receive_json()
            # invalidation only: the content is fetched over REST
            assert nudge == {"type": "new_message", "conversationId": conversation_id}

    db.expire_all()
    message = db.get(Message, ack["messageId"])
    assert message.content == "Still available?"
    assert message.sender_id == renter.id


def test_rest_message_nudges_open_socket(landlord, renter, make_property):
    prop = make_property(landlord)
    with TestClient(app) as client:
        conversation_id = _conversation(client, renter, prop)
        with client.websocket_connect(_ws_url(landlord)) as ws_landlord:
            ws_landlord.receive_json()
            response = client.post(
                f"/api/conversations/{conversation_id}/messages",
                json={"content": "Hello from REST"},
                headers={"Authorization": f"Bearer {create_access_token(renter)}"},
            )
            assert response.status_code == 201
            assert ws_landlord.receive_json() == {"type": "new_message", "conversationId": conversation_id}


def test_bad_frames_get_errors_and_socket_stays_open(landlord, renter, make_user, make_property):
    prop = make_property(landlord)
    with TestClient(app) as client:
        conversation_id = _conversation(client, renter, prop)
        stranger = make_user()
        with client.websocket_connect(_ws_url(stranger)) as ws:
            ws.receive_json()

            ws.send_text("not json")
            assert ws.receive_json()["type"] == "error"

            ws.send_bytes(b'{"type": "auth"}')
            assert ws.receive_json() == {"type": "error", "message": "Malformed frame"}

            ws.send_json({"type": "teleport"})
            assert ws.receive_json()["type"] == "error"

            ws.send_json({"type": "send_message", "content": "hi"})
            assert ws.receive_json()["type"] == "error"

            ws.send_json({"type": "send_message", "conversationId": 10**19, "content": "hi"})
            assert ws.receive_json() == {"type": "error", "message": "Conversation not found"}

            # not a participant
            ws.send_json({"type": "send_message", "conversationId": conversation_id, "content": "hi"})
            error = ws.receive_json()
            assert error == {"type": "error", "message": "Conversation not found"}

            ws.send_json({"type": "auth", "userId": stranger.id})
            assert ws.receive_json()["type"] == "auth_success"
