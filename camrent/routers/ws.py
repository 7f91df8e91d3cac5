"""Chat relay socket.

The socket is bound to a user when it opens (`/ws?token=<JWT>`, the same token as the REST
API). Frames:

    -> {"type": "send_message", "conversationId": 1, "content": "...", "messageType": "text"}
    <- {"type": "message_sent", "conversationId": 1, "messageId": 7}
    other participant <- {"type": "new_message", "conversationId": 1}

`new_message` carries no content; clients re-fetch the conversation over REST.
Bad frames (including binary ones) get {"type": "error", "message": ...} and the socket
stays open. A missing or invalid token is accepted and then closed with code 4401.
"""
import json
import logging

from fastapi import APIRouter, Depends, HTTPException, Query, WebSocket, WebSocketDisconnect
from fastapi.concurrency import run_in_threadpool
from sqlalchemy.orm import Session

from camrent.database import MAX_ID, get_db
from camrent.models.conversation import MessageType
from camrent.models.user import User
from camrent.services.auth import user_id_from_token
from camrent.services.messaging import get_conversation_for_user, send_message
from camrent.services.relay import RelayConnection, relay

log = logging.getLogger("uvicorn.error")

router = APIRouter(tags=["realtime"])

WS_UNAUTHORIZED = 4401


def _load_user(db: Session, user_id: int) -> User | None:
    try:
        return db.query(User).filter(User.id == user_id).first()
    finally:
        db.rollback()


def _persist_message(
    db: Session, user_id: int, conversation_id: int, content: str, message_type: MessageType
) -> tuple[int, int]:
    """Store a message through the same path as the REST route. Returns (message id, recipient id)."""
    try:
        sender = db.query(User).filter(User.id == user_id).first()
        if not sender:
            raise HTTPException(status_code=401, detail="User not found")
        conversation = get_conversation_for_user(db, conversation_id, user_id)
        message = send_message(db, conversation, sender, content, message_type)
        return message.id, conversation.other_participant_id(user_id)
    except Exception:
        db.rollback()
        raise


def _error(message: str) -> dict:
    return {"type": "error", "message": message}


async def _handle_send_message(websocket: WebSocket, db: Session, user_id: int, frame: dict) -> None:
    try:
        conversation_id = int(frame.get("conversationId"))
    except (TypeError, ValueError):
        await websocket.send_json(_error("conversationId is required"))
        return
    if not 0 < conversation_id <= MAX_ID:
        await websocket.send_json(_error("Conversation not found"))
        return
    content = frame.get("content")
    if not isinstance(content, str) or not content.strip():
        await websocket.send_json(_error("content is required"))
        return
    try:
        message_type = MessageType(frame.get("messageType") or MessageType.text.value)
    except ValueError:
        await websocket.send_json(_error("Unknown messageType"))
        return
    try:
        message_id, recipient_id = await run_in_threadpool(
            _persist_message, db, user_id, conversation_id, content, message_type
        )
    except HTTPException as e:
        await websocket.send_json(_error(str(e.detail)))
        return
    await websocket.send_json({"type": "message_sent", "conversationId": conversation_id, "messageId": message_id})
    await relay.notify_new_message(conversation_id, recipient_id)


@router.websocket("/ws")
async def chat_socket(
    websocket: WebSocket,
    token: str | None = Query(default=None),
    db: Session = Depends(get_db),
):
    user_id = user_id_from_token(token) if token else None
    user = await run_in_threadpool(_load_user, db, user_id) if user_id is not None else None
    await websocket.accept()
    if user is None:
        await websocket.close(code=WS_UNAUTHORIZED)
        return
    connection = RelayConnection(user_id=user_id, send=websocket.send_json)
    await relay.register(connection)
    try:
        await websocket.send_json({"type": "auth_success", "userId": user_id})
        while True:
            message = await websocket.receive()
            if message["type"] == "websocket.disconnect":
                raise WebSocketDisconnect(message.get("code", 1000))
            text = message.get("text")
            if text is None:
                await websocket.send_json(_error("Malformed frame"))
                continue
            try:
                frame = json.loads(text)
            except ValueError:
                await websocket.send_json(_error("Malformed frame"))
                continue
            if not isinstance(frame, dict):
                await websocket.send_json(_error("Malformed frame"))
                continue
            frame_type = frame.get("type")
            if frame_type == "auth":
                # Identity comes from the token; an auth frame can only confirm it
                if str(frame.get("userId")) == str(user_id):
                    await websocket.send_json({"type": "auth_success", "userId": user_id})
                else:
                    await websocket.send_json(_error("Socket is bound to another user"))
            elif frame_type == "send_message":
                await _handle_send_message(websocket, db, user_id, frame)
            else:
                await websocket.send_json(_error(f"Unknown message type: {frame_type}"))
    except WebSocketDisconnect:
        pass
    finally:
        await relay.unregister(connection)
