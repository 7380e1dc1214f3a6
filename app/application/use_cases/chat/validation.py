"""Checks applied to every outbound message before it is stored."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from app.domain.entities import MessageAttachment, MessageKind
from app.domain.errors import ValidationError


@dataclass(frozen=True)
class OutboundMessage:
    """A message that passed validation and may be persisted."""

    sender_id: str
    recipient_id: str
    body: str
    kind: MessageKind
    attachment: MessageAttachment | None


def _parse_kind(kind: Any) -> MessageKind:
    if kind is None:
        return MessageKind.TEXT
    if isinstance(kind, MessageKind):
        return kind
    try:
        return MessageKind(str(kind))
    except ValueError as exc:
        allowed = ", ".join(item.value for item in MessageKind)
        raise ValidationError(f"Invalid message type. Allowed types: {allowed}") from exc


def _parse_attachment(attachment: Any) -> MessageAttachment | None:
    if attachment is None or isinstance(attachment, MessageAttachment):
        return attachment
    if not isinstance(attachment, Mapping):
        raise ValidationError("Attachment must be an object")
    url = attachment.get("url")
    if not isinstance(url, str) or not url.strip():
        raise ValidationError("Attachment url is required")
    size = attachment.get("file_size", attachment.get("fileSize"))
    if size is not None and (not isinstance(size, int) or isinstance(size, bool) or size < 0):
        raise ValidationError("Attachment size must be a positive integer")
    return MessageAttachment(
        url=url.strip(),
        filename=attachment.get("filename"),
        file_type=attachment.get("file_type", attachment.get("fileType")),
        file_size=size,
    )


def validate_outbound_message(
    *,
    sender_id: str,
    recipient_id: Any,
    body: Any,
    kind: Any = MessageKind.TEXT,
    attachment: Any = None,
    max_length: int = 1000,
) -> OutboundMessage:
    """Return the normalized message or raise :class:`ValidationError`."""

    if not isinstance(recipient_id, str) or not recipient_id.strip():
        raise ValidationError("Recipient is required")
    recipient_id = recipient_id.strip()
    if recipient_id == sender_id:
        raise ValidationError("Cannot send message to yourself")

    text = body.strip() if isinstance(body, str) else ""
    if not text:
        raise ValidationError("Message cannot be empty")
    if len(text) > max_length:
        raise ValidationError(f"Message cannot exceed {max_length} characters")

    return OutboundMessage(
        sender_id=sender_id,
        recipient_id=recipient_id,
        body=text,
        kind=_parse_kind(kind),
        attachment=_parse_attachment(attachment),
    )


__all__ = ["OutboundMessage", "validate_outbound_message"]
