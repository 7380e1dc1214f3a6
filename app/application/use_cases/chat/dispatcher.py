"""Accept outbound messages, store them and route them to live connections."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from functools import partial
from typing import Any

from anyio import to_thread
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.application.use_cases.notifications import notify_new_message
from app.domain.entities import Account, ChatMessage, MessageKind, Notification
from app.domain.errors import ChatError, NotFoundError, StorageError, ValidationError
from app.infrastructure.realtime import (
    ConnectionRegistry,
    notification_event,
    serialize_message,
)
from app.infrastructure.repositories import AccountDirectory, ChatMessageRepository
from app.utils import now_in_app_timezone

from .rooms import room_key
from .validation import validate_outbound_message

logger = logging.getLogger(__name__)

SEND_FAILED_MESSAGE = "Failed to send message"


class DispatchState(str, Enum):
    """Lifecycle of one ``send`` call.

    ``PENDING -> PERSISTED -> DELIVERED | QUEUED``, or ``PENDING -> REJECTED``.
    """

    PENDING = "pending"
    PERSISTED = "persisted"
    DELIVERED = "delivered"
    QUEUED = "queued"
    REJECTED = "rejected"


@dataclass
class DispatchOutcome:
    state: DispatchState = DispatchState.PENDING
    room: str | None = None
    message: ChatMessage | None = None
    notification: Notification | None = None
    reached: int = 0
    error: ChatError | None = None
    transitions: list[DispatchState] = field(
        default_factory=lambda: [DispatchState.PENDING]
    )

    @property
    def rejected(self) -> bool:
        return self.state is DispatchState.REJECTED

    def advance(self, state: DispatchState) -> "DispatchOutcome":
        self.state = state
        self.transitions.append(state)
        return self

    def reject(self, error: ChatError) -> "DispatchOutcome":
        self.error = error
        return self.advance(DispatchState.REJECTED)

    def raise_for_error(self) -> None:
        if self.error is not None:
            raise self.error


class MessageDispatcher:
    """Persist a message, broadcast it to its room and fall back to a notification.

    The live-connection check and the broadcast are not atomic: a recipient
    who is connected but outside the room, or who drops between the two steps,
    receives neither the live event nor a notification.
    """

    def __init__(self, registry: ConnectionRegistry, *, max_length: int = 1000) -> None:
        self._registry = registry
        self._max_length = max_length

    async def send(
        self,
        session: Session,
        sender: Account,
        recipient_id: Any,
        body: Any,
        *,
        kind: Any = MessageKind.TEXT,
        attachment: Any = None,
    ) -> DispatchOutcome:
        outcome = DispatchOutcome()
        try:
            recipient, message = await to_thread.run_sync(
                partial(
                    self._persist,
                    session,
                    sender,
                    recipient_id,
                    body,
                    kind=kind,
                    attachment=attachment,
                )
            )
        except (ValidationError, NotFoundError) as exc:
            logger.debug("Rejected message from %s: %s", sender.id, exc.message)
            return outcome.reject(exc)
        except SQLAlchemyError:
            session.rollback()
            logger.exception("Could not persist message from %s", sender.id)
            return outcome.reject(StorageError(SEND_FAILED_MESSAGE))

        outcome.message = message
        outcome.room = room_key(sender.id, recipient.id)
        outcome.advance(DispatchState.PERSISTED)

        outcome.reached = await self._registry.emit_to_room(
            outcome.room,
            "new_message",
            {
                "message": serialize_message(message, sender=sender),
                "conversationId": outcome.room,
            },
        )

        if self._registry.find_live_connection(recipient.id) is not None:
            outcome.advance(DispatchState.DELIVERED)
        else:
            outcome.notification = await self._queue_notification(session, sender, message)
            outcome.advance(DispatchState.QUEUED)

        logger.debug(
            "Message %s from %s to %s %s (reached %d)",
            message.id,
            sender.id,
            recipient.id,
            outcome.state.value,
            outcome.reached,
        )
        return outcome

    def _persist(
        self,
        session: Session,
        sender: Account,
        recipient_id: Any,
        body: Any,
        *,
        kind: Any,
        attachment: Any,
    ) -> tuple[Account, ChatMessage]:
        draft = validate_outbound_message(
            sender_id=sender.id,
            recipient_id=recipient_id,
            body=body,
            kind=kind,
            attachment=attachment,
            max_length=self._max_length,
        )
        recipient = AccountDirectory(session).find_any(draft.recipient_id)
        if recipient is None:
            raise NotFoundError("Recipient not found")
        message = ChatMessageRepository(session).create(
            ChatMessage(
                id=None,
                sender_id=draft.sender_id,
                recipient_id=draft.recipient_id,
                body=draft.body,
                kind=draft.kind,
                attachment=draft.attachment,
                created_at=now_in_app_timezone(),
            )
        )
        return recipient, message

    async def _queue_notification(
        self, session: Session, sender: Account, message: ChatMessage
    ) -> Notification | None:
        try:
            notification = await to_thread.run_sync(
                partial(notify_new_message, session, sender=sender, message=message)
            )
        except StorageError:
            # The message itself is durable; the sender is still acknowledged.
            logger.warning("Message %s stored without its offline notification", message.id)
            return None
        await self._registry.emit_to_user(
            message.recipient_id, "new_notification", notification_event(notification)
        )
        return notification


__all__ = ["DispatchOutcome", "DispatchState", "MessageDispatcher", "SEND_FAILED_MESSAGE"]
