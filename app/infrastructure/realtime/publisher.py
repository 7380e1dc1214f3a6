"""Serialize domain objects into realtime payloads and schedule their delivery."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from anyio import from_thread

from app.domain.entities import Account, ChatMessage, Notification

from .registry import ConnectionRegistry

logger = logging.getLogger(__name__)


def serialize_message(
    message: ChatMessage, *, sender: Account | None = None
) -> dict[str, Any]:
    """Return the wire representation of ``message``.

    When ``sender`` is given its public profile is attached under ``sender``.
    """

    attachment = None
    if message.attachment is not None:
        attachment = {
            "url": message.attachment.url,
            "filename": message.attachment.filename,
            "file_type": message.attachment.file_type,
            "file_size": message.attachment.file_size,
        }
    payload: dict[str, Any] = {
        "id": message.id,
        "sender_id": message.sender_id,
        "recipient_id": message.recipient_id,
        "body": message.body,
        "kind": message.kind.value,
        "attachment": attachment,
        "created_at": message.created_at.isoformat() if message.created_at else None,
        "read_at": message.read_at.isoformat() if message.read_at else None,
    }
    if sender is not None:
        payload["sender"] = sender.public_profile()
    return payload


def notification_event(notification: Notification) -> dict[str, Any]:
    """Return the compact ``new_notification`` payload."""

    return {
        "id": notification.id,
        "type": notification.kind.value,
        "title": notification.title,
        "message": notification.message,
        "priority": notification.priority.value,
    }


class RealtimePublisher:
    """Push events to a user's private room from async or worker-thread code."""

    def __init__(self, registry: ConnectionRegistry) -> None:
        self._registry = registry
        self._pending: set[asyncio.Task] = set()

    def publish_notification(self, notification: Notification) -> None:
        self.publish(notification.user_id, "new_notification", notification_event(notification))

    def publish(self, user_id: str, event: str, payload: dict[str, Any]) -> None:
        """Schedule ``event`` for ``user_id`` without waiting for delivery."""

        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            try:
                from_thread.run(self._registry.emit_to_user, user_id, event, payload)
            except RuntimeError:
                logger.debug("No event loop available; %s for %s not pushed", event, user_id)
        else:
            task = loop.create_task(self._registry.emit_to_user(user_id, event, payload))
            self._pending.add(task)
            task.add_done_callback(self._pending.discard)


__all__ = [
    "RealtimePublisher",
    "notification_event",
    "serialize_message",
]
