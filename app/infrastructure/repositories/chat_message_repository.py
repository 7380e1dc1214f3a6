"""Persistence helpers for chat messages."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from sqlalchemy import and_, func, or_
from sqlalchemy.orm import Session

from app.domain.entities import (
    ChatMessage,
    ConversationSummary,
    MessageAttachment,
    MessageKind,
)
from app.infrastructure.models import ChatMessageModel
from app.utils import ensure_app_naive_datetime, ensure_app_timezone, now_in_app_timezone


class ChatMessageRepository:
    """Provide storage operations for :class:`ChatMessage` objects.

    Messages are never removed; deletion only flips ``is_deleted``.
    """

    def __init__(self, session: Session) -> None:
        self.session = session

    def create(self, message: ChatMessage) -> ChatMessage:
        model = ChatMessageModel()
        model.sender_id = message.sender_id
        model.recipient_id = message.recipient_id
        model.body = message.body
        model.kind = message.kind.value
        if message.attachment is not None:
            model.attachment_url = message.attachment.url
            model.attachment_filename = message.attachment.filename
            model.attachment_type = message.attachment.file_type
            model.attachment_size = message.attachment.file_size
        model.created_at = ensure_app_naive_datetime(
            message.created_at or now_in_app_timezone()
        )
        model.read_at = None
        model.is_deleted = False
        model.deleted_at = None
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def get(self, message_id: str) -> ChatMessage | None:
        model = self.session.get(ChatMessageModel, message_id)
        return self._to_entity(model) if model else None

    def list_between(self, user_id: str, other_id: str) -> Sequence[ChatMessage]:
        """Return the visible history of a pair, oldest first."""

        query = (
            self.session.query(ChatMessageModel)
            .filter(self._pair_clause(user_id, other_id))
            .filter(ChatMessageModel.is_deleted.is_(False))
            .order_by(ChatMessageModel.created_at.asc(), ChatMessageModel.id.asc())
        )
        return [self._to_entity(model) for model in query.all()]

    def list_for_user(self, user_id: str) -> Sequence[ChatMessage]:
        """Return every visible message involving ``user_id``, newest first."""

        query = (
            self.session.query(ChatMessageModel)
            .filter(
                or_(
                    ChatMessageModel.sender_id == user_id,
                    ChatMessageModel.recipient_id == user_id,
                )
            )
            .filter(ChatMessageModel.is_deleted.is_(False))
            .order_by(ChatMessageModel.created_at.desc(), ChatMessageModel.id.desc())
        )
        return [self._to_entity(model) for model in query.all()]

    def mark_conversation_read(
        self, *, reader_id: str, counterpart_id: str, read_at: datetime
    ) -> int:
        """Set ``read_at`` on every unread message ``counterpart_id`` sent to ``reader_id``.

        Only rows whose ``read_at`` is still null are touched, so a timestamp is
        never overwritten.
        """

        updated = (
            self.session.query(ChatMessageModel)
            .filter(
                ChatMessageModel.sender_id == counterpart_id,
                ChatMessageModel.recipient_id == reader_id,
                ChatMessageModel.read_at.is_(None),
            )
            .update(
                {ChatMessageModel.read_at: ensure_app_naive_datetime(read_at)},
                synchronize_session=False,
            )
        )
        self.session.commit()
        return int(updated or 0)

    def mark_read(self, message_id: str, *, read_at: datetime) -> bool:
        updated = (
            self.session.query(ChatMessageModel)
            .filter(
                ChatMessageModel.id == message_id,
                ChatMessageModel.read_at.is_(None),
            )
            .update(
                {ChatMessageModel.read_at: ensure_app_naive_datetime(read_at)},
                synchronize_session=False,
            )
        )
        self.session.commit()
        return bool(updated)

    def soft_delete(self, message_id: str, *, deleted_at: datetime) -> None:
        model = self.session.get(ChatMessageModel, message_id)
        if model is None:
            msg = f"Message with id {message_id} not found"
            raise ValueError(msg)
        model.is_deleted = True
        model.deleted_at = ensure_app_naive_datetime(deleted_at)
        self.session.add(model)
        self.session.commit()

    def count_unread(self, user_id: str, *, counterpart_id: str | None = None) -> int:
        query = self.session.query(func.count(ChatMessageModel.id)).filter(
            ChatMessageModel.recipient_id == user_id,
            ChatMessageModel.read_at.is_(None),
            ChatMessageModel.is_deleted.is_(False),
        )
        if counterpart_id is not None:
            query = query.filter(ChatMessageModel.sender_id == counterpart_id)
        return int(query.scalar() or 0)

    def summarize_conversations(self, user_id: str) -> list[ConversationSummary]:
        """Group the user's messages by counterpart, most recent conversation first."""

        summaries: dict[str, ConversationSummary] = {}
        for message in self.list_for_user(user_id):
            counterpart_id = message.counterpart_of(user_id)
            summary = summaries.get(counterpart_id)
            if summary is None:
                summary = ConversationSummary(
                    counterpart_id=counterpart_id, last_message=message
                )
                summaries[counterpart_id] = summary
            if message.recipient_id == user_id and message.read_at is None:
                summary.unread_count += 1
        return sorted(
            summaries.values(),
            key=lambda item: item.last_message.created_at,
            reverse=True,
        )

    @staticmethod
    def _pair_clause(user_id: str, other_id: str):
        return or_(
            and_(
                ChatMessageModel.sender_id == user_id,
                ChatMessageModel.recipient_id == other_id,
            ),
            and_(
                ChatMessageModel.sender_id == other_id,
                ChatMessageModel.recipient_id == user_id,
            ),
        )

    @staticmethod
    def _to_entity(model: ChatMessageModel) -> ChatMessage:
        attachment = None
        if model.attachment_url:
            attachment = MessageAttachment(
                url=model.attachment_url,
                filename=model.attachment_filename,
                file_type=model.attachment_type,
                file_size=model.attachment_size,
            )
        return ChatMessage(
            id=model.id,
            sender_id=model.sender_id,
            recipient_id=model.recipient_id,
            body=model.body,
            kind=MessageKind(model.kind),
            attachment=attachment,
            created_at=ensure_app_timezone(model.created_at),
            read_at=ensure_app_timezone(model.read_at),
            is_deleted=model.is_deleted,
            deleted_at=ensure_app_timezone(model.deleted_at),
        )


__all__ = ["ChatMessageRepository"]
