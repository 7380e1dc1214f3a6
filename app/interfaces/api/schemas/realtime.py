"""Payloads of the events a client may send over the chat websocket."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class _EventPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class HandshakePayload(_EventPayload):
    token: str | None = None


class ConversationPayload(_EventPayload):
    other_user_id: str = Field(alias="otherUserId")


class SendMessagePayload(_EventPayload):
    to_user_id: str = Field(alias="toUserId")
    message: str | None = None
    message_type: str | None = Field(default=None, alias="messageType")
    attachment: dict[str, Any] | None = None


class TypingPayload(_EventPayload):
    to_user_id: str = Field(alias="toUserId")


class MarkReadPayload(_EventPayload):
    from_user_id: str = Field(alias="fromUserId")


class StatusPayload(_EventPayload):
    status: str = Field(..., min_length=1, max_length=50)


__all__ = [
    "ConversationPayload",
    "HandshakePayload",
    "MarkReadPayload",
    "SendMessagePayload",
    "StatusPayload",
    "TypingPayload",
]
