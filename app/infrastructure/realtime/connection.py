"""Wrapper around a websocket owned by one authenticated account."""

from __future__ import annotations

from typing import Any

from fastapi import WebSocket
from fastapi.encoders import jsonable_encoder

from app.domain.entities import Account, AccountRole
from app.utils import new_identifier


class Connection:
    """A realtime channel plus the identity and rooms attached to it.

    The socket is tagged exactly once, during the handshake; until then
    ``user_id`` is ``None`` and no event other than the handshake is served.
    """

    def __init__(self, websocket: WebSocket) -> None:
        self.websocket = websocket
        self.id = new_identifier()
        self.user_id: str | None = None
        self.role: AccountRole | None = None
        self.display_name = ""
        self.rooms: set[str] = set()

    @property
    def is_authenticated(self) -> bool:
        return self.user_id is not None

    def bind(self, account: Account) -> None:
        if self.is_authenticated:
            raise RuntimeError("Connection is already authenticated")
        self.user_id = account.id
        self.role = account.role
        self.display_name = account.display_name

    async def send_event(self, event: str, data: Any) -> None:
        """Send one ``{"type", "data"}`` frame to the client."""

        await self.websocket.send_json({"type": event, "data": jsonable_encoder(data)})

    def __repr__(self) -> str:
        return f"<Connection {self.id} user={self.user_id}>"


__all__ = ["Connection"]
