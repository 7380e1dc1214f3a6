"""Utility helpers to generate and dispatch domain notifications."""

from __future__ import annotations

import logging
from datetime import datetime
from enum import Enum
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.domain.entities import (
    Account,
    AccountRole,
    ChatMessage,
    Notification,
    NotificationKind,
    NotificationPriority,
)
from app.domain.errors import StorageError, ValidationError
from app.infrastructure.realtime import RealtimePublisher
from app.infrastructure.repositories import AccountDirectory, NotificationRepository
from app.utils import now_in_app_timezone

logger = logging.getLogger(__name__)

TITLE_MAX_LENGTH = 100
MESSAGE_MAX_LENGTH = 500
NEW_MESSAGE_TITLE = "New Message"


class AnnouncementAudience(str, Enum):
    ALL = "all"
    STUDENTS = "students"
    COMPANIES = "companies"


_AUDIENCE_ROLES: dict[AnnouncementAudience, tuple[AccountRole, ...]] = {
    AnnouncementAudience.ALL: tuple(AccountRole),
    AnnouncementAudience.STUDENTS: (AccountRole.STUDENT,),
    AnnouncementAudience.COMPANIES: (AccountRole.COMPANY,),
}


def _build_notification(
    *,
    user_id: str,
    kind: NotificationKind,
    title: str,
    message: str,
    payload: dict[str, Any] | None,
    priority: NotificationPriority,
    expires_at: datetime | None,
) -> Notification:
    title = (title or "").strip()
    message = (message or "").strip()
    if not title or len(title) > TITLE_MAX_LENGTH:
        raise ValidationError(
            f"Notification title must be between 1 and {TITLE_MAX_LENGTH} characters"
        )
    if not message or len(message) > MESSAGE_MAX_LENGTH:
        raise ValidationError(
            f"Notification message must be between 1 and {MESSAGE_MAX_LENGTH} characters"
        )
    return Notification(
        id=None,
        user_id=user_id,
        kind=kind,
        title=title,
        message=message,
        payload=payload or {},
        priority=priority,
        created_at=now_in_app_timezone(),
        expires_at=expires_at,
    )


def notify(
    session: Session,
    *,
    user_id: str,
    kind: NotificationKind,
    title: str,
    message: str,
    payload: dict[str, Any] | None = None,
    priority: NotificationPriority = NotificationPriority.MEDIUM,
    expires_at: datetime | None = None,
    publisher: RealtimePublisher | None = None,
) -> Notification:
    """Persist a notification for ``user_id`` and optionally push it live."""

    notification = _build_notification(
        user_id=user_id,
        kind=kind,
        title=title,
        message=message,
        payload=payload,
        priority=priority,
        expires_at=expires_at,
    )
    try:
        saved = NotificationRepository(session).create(notification)
    except SQLAlchemyError as exc:
        session.rollback()
        logger.exception("Could not store %s notification for %s", kind.value, user_id)
        raise StorageError("Failed to store notification") from exc
    if publisher is not None:
        publisher.publish_notification(saved)
    return saved


def notify_new_message(
    session: Session, *, sender: Account, message: ChatMessage
) -> Notification:
    """Record the fallback alert for a message whose recipient is offline."""

    return notify(
        session,
        user_id=message.recipient_id,
        kind=NotificationKind.NEW_MESSAGE,
        title=NEW_MESSAGE_TITLE,
        message=f"You have a new message from {sender.display_name}",
        payload={"sender_id": sender.id, "related_id": message.id},
        priority=NotificationPriority.MEDIUM,
    )


def announce(
    session: Session,
    *,
    audience: AnnouncementAudience,
    title: str,
    message: str,
    priority: NotificationPriority = NotificationPriority.MEDIUM,
    publisher: RealtimePublisher | None = None,
) -> list[Notification]:
    """Create a system announcement for every active account in ``audience``."""

    recipients = AccountDirectory(session).list_active_ids(_AUDIENCE_ROLES[audience])
    notifications = [
        _build_notification(
            user_id=user_id,
            kind=NotificationKind.SYSTEM_ANNOUNCEMENT,
            title=title,
            message=message,
            payload={"metadata": {"audience": audience.value}},
            priority=priority,
            expires_at=None,
        )
        for user_id in recipients
    ]
    try:
        saved = NotificationRepository(session).create_many(notifications)
    except SQLAlchemyError as exc:
        session.rollback()
        logger.exception("Could not store announcement for %s", audience.value)
        raise StorageError("Failed to store announcement") from exc
    logger.info("Announcement sent to %d %s accounts", len(saved), audience.value)
    if publisher is not None:
        for notification in saved:
            publisher.publish_notification(notification)
    return saved


__all__ = [
    "AnnouncementAudience",
    "NEW_MESSAGE_TITLE",
    "announce",
    "notify",
    "notify_new_message",
]
