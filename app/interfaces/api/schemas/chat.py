"""Pydantic models describing chat REST payloads."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from app.domain.entities import ChatMessage, ConversationSummary


class AttachmentPayload(BaseModel):
    """Attachment reference supplied by the client."""

    model_config = ConfigDict(populate_by_name=True)

    url: str
    filename: str | None = None
    file_type: str | None = Field(default=None, alias="fileType")
    file_size: int | None = Field(default=None, alias="fileSize", ge=0)


class SendMessageRequest(BaseModel):
    """Body of ``POST /chat/send``; content rules are enforced by the dispatcher."""

    model_config = ConfigDict(populate_by_name=True)

    receiver_id: str = Field(alias="receiverId")
    message: str | None = None
    type: str | None = None
    attachment: AttachmentPayload | None = None


class AttachmentRead(BaseModel):
    url: str
    filename: str | None = None
    file_type: str | None = None
    file_size: int | None = None


class MessageRead(BaseModel):
    """Representation of a chat message delivered to the client."""

    id: str
    sender_id: str
    recipient_id: str
    body: str
    kind: str
    attachment: AttachmentRead | None = None
    created_at: datetime
    read_at: datetime | None = None

    @classmethod
    def from_entity(cls, message: ChatMessage) -> "MessageRead":
        attachment = None
        if message.attachment is not None:
            attachment = AttachmentRead(
                url=message.attachment.url,
                filename=message.attachment.filename,
                file_type=message.attachment.file_type,
                file_size=message.attachment.file_size,
            )
        return cls(
            id=message.id or "",
            sender_id=message.sender_id,
            recipient_id=message.recipient_id,
            body=message.body,
            kind=message.kind.value,
            attachment=attachment,
            created_at=message.created_at,
            read_at=message.read_at,
        )


class ConversationRead(BaseModel):
    counterpart: dict[str, Any]
    last_message: MessageRead
    unread_count: int

    @classmethod
    def from_entity(cls, summary: ConversationSummary) -> "ConversationRead":
        return cls(
            counterpart=summary.counterpart,
            last_message=MessageRead.from_entity(summary.last_message),
            unread_count=summary.unread_count,
        )


class UnreadCountRead(BaseModel):
    unread_count: int


class StatusMessage(BaseModel):
    message: str


__all__ = [
    "AttachmentPayload",
    "AttachmentRead",
    "ConversationRead",
    "MessageRead",
    "SendMessageRequest",
    "StatusMessage",
    "UnreadCountRead",
]
