"""Read, acknowledge and delete the notifications of one user."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence

from sqlalchemy.orm import Session

from app.domain.entities import Notification, NotificationKind, NotificationPriority
from app.domain.errors import NotFoundError
from app.infrastructure.repositories import NotificationRepository
from app.utils import now_in_app_timezone

from ..storage import storage_guard


@dataclass
class NotificationPage:
    notifications: Sequence[Notification]
    total: int
    page: int
    total_pages: int


def list_notifications(
    session: Session,
    user_id: str,
    *,
    page: int = 1,
    limit: int = 20,
    kind: NotificationKind | None = None,
    priority: NotificationPriority | None = None,
) -> NotificationPage:
    """Return one page of the user's unexpired notifications, newest first."""

    page = max(page, 1)
    limit = max(limit, 1)
    with storage_guard(session, "Failed to load notifications"):
        notifications, total = NotificationRepository(session).list_for_user(
            user_id,
            kind=kind,
            priority=priority,
            offset=(page - 1) * limit,
            limit=limit,
        )
    return NotificationPage(
        notifications=notifications,
        total=total,
        page=page,
        total_pages=math.ceil(total / limit),
    )


def mark_notification_read(session: Session, notification_id: str, *, user_id: str) -> Notification:
    repository = NotificationRepository(session)
    with storage_guard(session, "Failed to update notification"):
        notification = repository.get_for_user(notification_id, user_id=user_id)
        if notification is None:
            raise NotFoundError("Notification not found")
        if not notification.is_read:
            repository.mark_as_read(
                notification_id, user_id=user_id, read_at=now_in_app_timezone()
            )
            notification = repository.get_for_user(notification_id, user_id=user_id) or notification
    return notification


def mark_all_notifications_read(session: Session, *, user_id: str) -> int:
    with storage_guard(session, "Failed to update notifications"):
        return NotificationRepository(session).mark_all_as_read(
            user_id, read_at=now_in_app_timezone()
        )


def delete_notification(session: Session, notification_id: str, *, user_id: str) -> None:
    with storage_guard(session, "Failed to delete notification"):
        deleted = NotificationRepository(session).delete(notification_id, user_id=user_id)
    if not deleted:
        raise NotFoundError("Notification not found")


def unread_notification_count(session: Session, *, user_id: str) -> int:
    with storage_guard(session, "Failed to count notifications"):
        return NotificationRepository(session).count_unread(user_id)


__all__ = [
    "NotificationPage",
    "delete_notification",
    "list_notifications",
    "mark_all_notifications_read",
    "mark_notification_read",
    "unread_notification_count",
]
