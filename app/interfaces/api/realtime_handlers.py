"""Dispatch of client events received over the chat websocket."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from typing import Any

from pydantic import BaseModel
from pydantic import ValidationError as PayloadError
from sqlalchemy.orm import sessionmaker

from app.application.use_cases.chat import (
    SEND_FAILED_MESSAGE,
    ChatServices,
    room_key,
)
from app.domain.entities import Account
from app.domain.errors import ChatError
from app.infrastructure.database import SessionLocal
from app.infrastructure.realtime import Connection
from app.interfaces.api.schemas import (
    ConversationPayload,
    MarkReadPayload,
    SendMessagePayload,
    StatusPayload,
    TypingPayload,
)

logger = logging.getLogger(__name__)

Handler = Callable[[dict[str, Any]], Awaitable[None]]


class ChatEventHandler:
    """Serve the events of one authenticated connection.

    Every event runs in its own database session. Domain errors are reported
    back to the originating connection as ``error`` events and never close the
    socket.
    """

    def __init__(
        self,
        connection: Connection,
        account: Account,
        services: ChatServices,
        session_factory: sessionmaker = SessionLocal,
    ) -> None:
        self.connection = connection
        self.account = account
        self.services = services
        self._session_factory = session_factory
        self._handlers: dict[str, Handler] = {
            "handshake": self._on_handshake,
            "ping": self._on_ping,
            "join_conversation": self._on_join,
            "leave_conversation": self._on_leave,
            "send_message": self._on_send_message,
            "typing_start": self._on_typing_start,
            "typing_stop": self._on_typing_stop,
            "mark_messages_read": self._on_mark_read,
            "update_status": self._on_update_status,
        }

    async def handle(self, frame: Any) -> None:
        if not isinstance(frame, dict) or not isinstance(frame.get("type"), str):
            await self._error("Malformed event")
            return
        event = frame["type"]
        handler = self._handlers.get(event)
        if handler is None:
            await self._error(f"Unknown event: {event}")
            return
        data = frame.get("data")
        if data is None:
            data = {}
        if not isinstance(data, dict):
            await self._error(f"Invalid payload for {event}")
            return
        try:
            await handler(data)
        except PayloadError:
            await self._error(f"Invalid payload for {event}")
        except ChatError as exc:
            await self._error(exc.message)

    async def _on_handshake(self, data: dict[str, Any]) -> None:
        await self._error("Already authenticated")

    async def _on_ping(self, data: dict[str, Any]) -> None:
        await self.connection.send_event("pong", {})

    async def _on_join(self, data: dict[str, Any]) -> None:
        payload = _parse(ConversationPayload, data)
        room = self.services.router.join(self.connection, payload.other_user_id)
        await self.connection.send_event("joined_conversation", {"conversationId": room})

    async def _on_leave(self, data: dict[str, Any]) -> None:
        payload = _parse(ConversationPayload, data)
        room = self.services.router.leave(self.connection, payload.other_user_id)
        await self.connection.send_event("left_conversation", {"conversationId": room})

    async def _on_send_message(self, data: dict[str, Any]) -> None:
        payload = _parse(SendMessagePayload, data)
        try:
            with self._session_factory() as session:
                outcome = await self.services.dispatcher.send(
                    session,
                    self.account,
                    payload.to_user_id,
                    payload.message,
                    kind=payload.message_type,
                    attachment=payload.attachment,
                )
        except Exception:
            logger.exception("Unexpected failure sending message for %s", self.account.id)
            await self._error(SEND_FAILED_MESSAGE)
            return

        if outcome.error is not None:
            await self._error(outcome.error.message)
            return
        await self.connection.send_event("message_sent", {"messageId": outcome.message.id})

    async def _on_typing_start(self, data: dict[str, Any]) -> None:
        await self._relay_typing(_parse(TypingPayload, data), True)

    async def _on_typing_stop(self, data: dict[str, Any]) -> None:
        await self._relay_typing(_parse(TypingPayload, data), False)

    async def _relay_typing(self, payload: TypingPayload, is_typing: bool) -> None:
        await self.services.registry.emit_to_room(
            room_key(self.account.id, payload.to_user_id),
            "user_typing",
            {
                "userId": self.account.id,
                "userName": self.account.display_name,
                "isTyping": is_typing,
            },
            exclude=self.connection,
        )

    async def _on_mark_read(self, data: dict[str, Any]) -> None:
        payload = _parse(MarkReadPayload, data)
        with self._session_factory() as session:
            await self.services.reconciler.mark_read(
                session, reader_id=self.account.id, counterpart_id=payload.from_user_id
            )

    async def _on_update_status(self, data: dict[str, Any]) -> None:
        payload = _parse(StatusPayload, data)
        await self.services.registry.broadcast(
            "user_status_update",
            {"userId": self.account.id, "status": payload.status},
            exclude=self.connection,
        )

    async def _error(self, message: str) -> None:
        await self.connection.send_event("error", {"message": message})


def _parse(model: type[BaseModel], data: dict[str, Any]) -> Any:
    return model.model_validate(data)


__all__ = ["ChatEventHandler"]
