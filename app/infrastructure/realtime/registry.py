"""Process-local registry of live realtime connections."""

from __future__ import annotations

import asyncio
import logging
import threading
from collections import defaultdict
from collections.abc import Iterable
from typing import Any, DefaultDict

from app.domain.entities import Account

from .connection import Connection

logger = logging.getLogger(__name__)

PRIVATE_ROOM_PREFIX = "user_"


def private_room(user_id: str) -> str:
    """Return the per-user room used for out-of-band deliveries."""

    return f"{PRIVATE_ROOM_PREFIX}{user_id}"


class ConnectionRegistry:
    """Track authenticated connections by user and by room.

    Every mutation and every snapshot is taken under one lock so connects and
    disconnects coming from different tasks or threads never corrupt the maps.
    Sends always happen on a snapshot, outside the lock.
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._connections: dict[str, Connection] = {}
        self._by_user: DefaultDict[str, list[Connection]] = defaultdict(list)
        self._rooms: DefaultDict[str, set[str]] = defaultdict(set)

    @property
    def connection_count(self) -> int:
        with self._lock:
            return len(self._connections)

    def register(self, connection: Connection, account: Account) -> None:
        """Tag ``connection`` with ``account`` and join its private room."""

        with self._lock:
            connection.bind(account)
            self._connections[connection.id] = connection
            self._by_user[account.id].append(connection)
            self._join_locked(connection, private_room(account.id))
        logger.info("User %s connected (%s)", account.id, connection.id)

    def unregister(self, connection: Connection) -> bool:
        """Forget ``connection`` and every room it joined.

        Returns ``False`` when the connection was not registered, which makes
        repeated calls harmless.
        """

        with self._lock:
            if self._connections.pop(connection.id, None) is None:
                return False
            for room in list(connection.rooms):
                self._leave_locked(connection, room)
            user_connections = self._by_user.get(connection.user_id or "")
            if user_connections is not None:
                if connection in user_connections:
                    user_connections.remove(connection)
                if not user_connections:
                    self._by_user.pop(connection.user_id or "", None)
        logger.info("User %s disconnected (%s)", connection.user_id, connection.id)
        return True

    def join_room(self, connection: Connection, room: str) -> bool:
        with self._lock:
            return self._join_locked(connection, room)

    def leave_room(self, connection: Connection, room: str) -> bool:
        with self._lock:
            return self._leave_locked(connection, room)

    def members(self, room: str) -> list[Connection]:
        with self._lock:
            return [
                self._connections[connection_id]
                for connection_id in self._rooms.get(room, ())
                if connection_id in self._connections
            ]

    def connections_for(self, user_id: str) -> list[Connection]:
        with self._lock:
            return list(self._by_user.get(user_id, ()))

    def find_live_connection(self, user_id: str) -> Connection | None:
        """Return the most recently registered connection of ``user_id``."""

        with self._lock:
            connections = self._by_user.get(user_id)
            return connections[-1] if connections else None

    async def emit_to_room(
        self,
        room: str,
        event: str,
        data: Any,
        *,
        exclude: Connection | None = None,
    ) -> int:
        """Send ``event`` to every member of ``room``; return how many were reached."""

        targets = [member for member in self.members(room) if member is not exclude]
        return await self._deliver(targets, event, data)

    async def emit_to_user(self, user_id: str, event: str, data: Any) -> int:
        return await self.emit_to_room(private_room(user_id), event, data)

    async def broadcast(
        self, event: str, data: Any, *, exclude: Connection | None = None
    ) -> int:
        with self._lock:
            targets = [conn for conn in self._connections.values() if conn is not exclude]
        return await self._deliver(targets, event, data)

    def close(self) -> None:
        """Drop every registration; used when the server shuts down."""

        with self._lock:
            for connection in self._connections.values():
                connection.rooms.clear()
            self._connections.clear()
            self._by_user.clear()
            self._rooms.clear()

    async def _deliver(self, targets: Iterable[Connection], event: str, data: Any) -> int:
        targets = list(targets)
        if not targets:
            return 0
        results = await asyncio.gather(
            *(target.send_event(event, data) for target in targets),
            return_exceptions=True,
        )
        reached = 0
        for target, result in zip(targets, results):
            if isinstance(result, BaseException):
                logger.warning(
                    "Dropping connection %s after failed %s delivery: %s",
                    target.id,
                    event,
                    result,
                )
                self.unregister(target)
                continue
            reached += 1
        return reached

    def _join_locked(self, connection: Connection, room: str) -> bool:
        if room in connection.rooms:
            return False
        connection.rooms.add(room)
        self._rooms[room].add(connection.id)
        return True

    def _leave_locked(self, connection: Connection, room: str) -> bool:
        if room not in connection.rooms:
            return False
        connection.rooms.discard(room)
        members = self._rooms.get(room)
        if members is not None:
            members.discard(connection.id)
            if not members:
                self._rooms.pop(room, None)
        return True


__all__ = ["ConnectionRegistry", "PRIVATE_ROOM_PREFIX", "private_room"]
