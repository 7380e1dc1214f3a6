"""Domain entities describing direct chat messages."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


class MessageKind(str, Enum):
    """Closed set of message kinds accepted by the dispatcher."""

    TEXT = "text"
    IMAGE = "image"
    FILE = "file"
    SYSTEM = "system"


@dataclass
class MessageAttachment:
    """Descriptor of a file stored elsewhere and referenced by a message."""

    url: str
    filename: str | None = None
    file_type: str | None = None
    file_size: int | None = None


@dataclass
class ChatMessage:
    """A message sent from one account to another.

    ``read_at`` is ``None`` while the message is unread and is set exactly once
    when the recipient observes it.
    """

    id: str | None
    sender_id: str
    recipient_id: str
    body: str
    kind: MessageKind = MessageKind.TEXT
    attachment: MessageAttachment | None = None
    created_at: datetime | None = None
    read_at: datetime | None = None
    is_deleted: bool = False
    deleted_at: datetime | None = None

    @property
    def is_read(self) -> bool:
        return self.read_at is not None

    def counterpart_of(self, user_id: str) -> str:
        """Return the participant that is not ``user_id``."""

        return self.recipient_id if self.sender_id == user_id else self.sender_id


@dataclass
class ConversationSummary:
    """Last message and unread count exchanged with one counterpart."""

    counterpart_id: str
    last_message: ChatMessage
    unread_count: int = 0
    counterpart: dict[str, object] = field(default_factory=dict)


__all__ = ["ChatMessage", "ConversationSummary", "MessageAttachment", "MessageKind"]
