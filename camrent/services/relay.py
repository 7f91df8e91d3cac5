"""In-memory chat relay: maps user ids to their open sockets and pushes invalidation nudges.

The relay never carries message content. Receivers get `{"type": "new_message",
"conversationId": ...}` and re-fetch the conversation over REST, which stays the
system of record. The registry is process-local and is lost on restart; running more
than one API process would need an external pub/sub bus in front of it.
"""
from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Awaitable, Callable, Dict
from uuid import uuid4

SendCallable = Callable[[dict], Awaitable[None]]

log = logging.getLogger("uvicorn.error")


@dataclass(slots=True)
class RelayConnection:
    """One open socket bound to one user."""

    user_id: int
    send: SendCallable
    connection_id: str = field(default_factory=lambda: uuid4().hex)


class ChatRelay:
    """Registry of open sockets keyed by user id; a user may have several tabs open."""

    def __init__(self) -> None:
        self._connections: Dict[int, Dict[str, RelayConnection]] = {}
        self._lock = asyncio.Lock()

    async def register(self, connection: RelayConnection) -> None:
        async with self._lock:
            self._connections.setdefault(connection.user_id, {})[connection.connection_id] = connection
        log.info("Relay: user %s connected (%s)", connection.user_id, connection.connection_id)

    async def unregister(self, connection: RelayConnection) -> None:
        async with self._lock:
            sockets = self._connections.get(connection.user_id)
            if not sockets:
                return
            sockets.pop(connection.connection_id, None)
            if not sockets:
                self._connections.pop(connection.user_id, None)
        log.info("Relay: user %s disconnected (%s)", connection.user_id, connection.connection_id)

    async def is_online(self, user_id: int) -> bool:
        async with self._lock:
            return bool(self._connections.get(user_id))

    async def send_to_user(self, user_id: int, payload: dict) -> int:
        """Send to every socket of a user; returns how many sockets took it.
        Sockets that fail are dropped, nothing is retried or queued."""
        async with self._lock:
            targets = list(self._connections.get(user_id, {}).values())
        if not targets:
            return 0
        results = await asyncio.gather(*(c.send(payload) for c in targets), return_exceptions=True)
        delivered = 0
        for connection, result in zip(targets, results):
            if isinstance(result, Exception):
                log.warning("Relay: dropping dead socket for user %s: %s", user_id, result)
                await self.unregister(connection)
            else:
                delivered += 1
        return delivered

    async def notify_new_message(self, conversation_id: int, recipient_id: int) -> int:
        return await self.send_to_user(recipient_id, {"type": "new_message", "conversationId": conversation_id})


relay = ChatRelay()
