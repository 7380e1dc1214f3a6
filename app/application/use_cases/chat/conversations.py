"""Conversation listing and sender-only message deletion."""

from __future__ import annotations

from sqlalchemy.orm import Session

from app.domain.entities import ConversationSummary
from app.domain.errors import AccessDeniedError, NotFoundError
from app.infrastructure.repositories import AccountDirectory, ChatMessageRepository
from app.utils import now_in_app_timezone

from ..storage import storage_guard


def list_conversations(session: Session, *, user_id: str) -> list[ConversationSummary]:
    """Return one summary per counterpart, latest conversation first.

    Counterparts whose account no longer exists are left out.
    """

    with storage_guard(session, "Failed to load conversations"):
        summaries = ChatMessageRepository(session).summarize_conversations(user_id)
        accounts = AccountDirectory(session).find_many(
            summary.counterpart_id for summary in summaries
        )
    visible: list[ConversationSummary] = []
    for summary in summaries:
        account = accounts.get(summary.counterpart_id)
        if account is None:
            continue
        summary.counterpart = account.public_profile()
        visible.append(summary)
    return visible


def delete_message(session: Session, *, user_id: str, message_id: str) -> None:
    """Soft-delete ``message_id``; only its sender may do so."""

    repository = ChatMessageRepository(session)
    with storage_guard(session, "Failed to delete message"):
        message = repository.get(message_id)
        if message is None or message.is_deleted:
            raise NotFoundError("Message not found")
        if message.sender_id != user_id:
            raise AccessDeniedError("Access denied")
        repository.soft_delete(message_id, deleted_at=now_in_app_timezone())


__all__ = ["delete_message", "list_conversations"]
