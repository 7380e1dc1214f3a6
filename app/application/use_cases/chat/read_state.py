"""Single read-state transition shared by the realtime and REST paths."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from functools import partial
from typing import Sequence

from anyio import to_thread
from sqlalchemy.orm import Session

from app.domain.entities import ChatMessage
from app.domain.errors import AccessDeniedError, NotFoundError
from app.infrastructure.realtime import ConnectionRegistry
from app.infrastructure.repositories import ChatMessageRepository
from app.utils import now_in_app_timezone

from ..storage import storage_guard

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReadReceipt:
    read_by: str
    counterpart_id: str
    read_at: datetime
    updated: int


class ReadStateReconciler:
    """Move messages from unread to read exactly once.

    Both entry points go through :meth:`apply`, which only touches rows whose
    ``read_at`` is still null. Only the realtime entry point emits a
    ``messages_read`` receipt; the history fetch stays silent.
    """

    def __init__(self, registry: ConnectionRegistry) -> None:
        self._registry = registry

    def apply(
        self,
        session: Session,
        *,
        reader_id: str,
        counterpart_id: str,
        at: datetime | None = None,
    ) -> ReadReceipt:
        read_at = at or now_in_app_timezone()
        with storage_guard(session, "Failed to update read state"):
            updated = ChatMessageRepository(session).mark_conversation_read(
                reader_id=reader_id, counterpart_id=counterpart_id, read_at=read_at
            )
        if updated:
            logger.debug("%s read %d messages from %s", reader_id, updated, counterpart_id)
        return ReadReceipt(
            read_by=reader_id,
            counterpart_id=counterpart_id,
            read_at=read_at,
            updated=updated,
        )

    async def mark_read(
        self, session: Session, *, reader_id: str, counterpart_id: str
    ) -> ReadReceipt:
        """Realtime path: apply the transition and notify the counterpart.

        The receipt is emitted even when no row changed.
        """

        receipt = await to_thread.run_sync(
            partial(self.apply, session, reader_id=reader_id, counterpart_id=counterpart_id)
        )
        await self._registry.emit_to_user(
            counterpart_id,
            "messages_read",
            {"readBy": receipt.read_by, "readAt": receipt.read_at.isoformat()},
        )
        return receipt

    def fetch_history(
        self, session: Session, *, requester_id: str, counterpart_id: str
    ) -> Sequence[ChatMessage]:
        """Polling path: return the pair's history, then mark it read."""

        with storage_guard(session, "Failed to load messages"):
            messages = ChatMessageRepository(session).list_between(
                requester_id, counterpart_id
            )
        self.apply(session, reader_id=requester_id, counterpart_id=counterpart_id)
        return messages

    def mark_message_read(
        self, session: Session, *, reader_id: str, message_id: str
    ) -> ChatMessage:
        repository = ChatMessageRepository(session)
        with storage_guard(session, "Failed to update read state"):
            message = repository.get(message_id)
            if message is None or message.is_deleted:
                raise NotFoundError("Message not found")
            if message.recipient_id != reader_id:
                raise AccessDeniedError("Access denied")
            if message.read_at is None:
                repository.mark_read(message_id, read_at=now_in_app_timezone())
                message = repository.get(message_id) or message
        return message

    @staticmethod
    def unread_count(
        session: Session, *, user_id: str, counterpart_id: str | None = None
    ) -> int:
        """Count unread, undeleted messages; never cached."""

        with storage_guard(session, "Failed to count unread messages"):
            return ChatMessageRepository(session).count_unread(
                user_id, counterpart_id=counterpart_id
            )


__all__ = ["ReadReceipt", "ReadStateReconciler"]
