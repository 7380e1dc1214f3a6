"""Deterministic room naming and conversation membership."""

from __future__ import annotations

import logging

from app.domain.errors import AuthError, ValidationError
from app.infrastructure.realtime import Connection, ConnectionRegistry, private_room

logger = logging.getLogger(__name__)

ROOM_SEPARATOR = "_"


def room_key(user_a: str, user_b: str) -> str:
    """Return the conversation room shared by two users, whatever their order."""

    return ROOM_SEPARATOR.join(sorted((str(user_a), str(user_b))))


class ConversationRouter:
    """Join and leave the conversation rooms of authenticated connections."""

    def __init__(self, registry: ConnectionRegistry) -> None:
        self._registry = registry

    def join(self, connection: Connection, other_user_id: str) -> str:
        room = self._room_for(connection, other_user_id)
        if self._registry.join_room(connection, room):
            logger.debug("%s joined conversation room %s", connection.user_id, room)
        return room

    def leave(self, connection: Connection, other_user_id: str) -> str:
        room = self._room_for(connection, other_user_id)
        if self._registry.leave_room(connection, room):
            logger.debug("%s left conversation room %s", connection.user_id, room)
        return room

    @staticmethod
    def _room_for(connection: Connection, other_user_id: str) -> str:
        if not connection.is_authenticated:
            raise AuthError("Authentication required")
        if not isinstance(other_user_id, str) or not other_user_id.strip():
            raise ValidationError("otherUserId is required")
        return room_key(connection.user_id, other_user_id.strip())


__all__ = ["ConversationRouter", "ROOM_SEPARATOR", "private_room", "room_key"]
