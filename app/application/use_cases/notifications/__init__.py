"""Public helpers for emitting and managing notifications."""

from .events import (
    NEW_MESSAGE_TITLE,
    AnnouncementAudience,
    announce,
    notify,
    notify_new_message,
)
from .inbox import (
    NotificationPage,
    delete_notification,
    list_notifications,
    mark_all_notifications_read,
    mark_notification_read,
    unread_notification_count,
)

__all__ = [
    "AnnouncementAudience",
    "NEW_MESSAGE_TITLE",
    "NotificationPage",
    "announce",
    "delete_notification",
    "list_notifications",
    "mark_all_notifications_read",
    "mark_notification_read",
    "notify",
    "notify_new_message",
    "unread_notification_count",
]
