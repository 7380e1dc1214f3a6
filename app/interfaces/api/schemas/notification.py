"""Pydantic models describing notification payloads."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from app.application.use_cases.notifications import AnnouncementAudience
from app.domain.entities import Notification, NotificationPriority


class NotificationRead(BaseModel):
    """Representation of a notification delivered to the client."""

    id: str
    user_id: str
    type: str
    title: str
    message: str
    payload: dict[str, Any] = Field(default_factory=dict)
    priority: str
    is_read: bool
    read_at: datetime | None = None
    expires_at: datetime | None = None
    created_at: datetime

    @classmethod
    def from_entity(cls, notification: Notification) -> "NotificationRead":
        return cls(
            id=notification.id or "",
            user_id=notification.user_id,
            type=notification.kind.value,
            title=notification.title,
            message=notification.message,
            payload=notification.payload or {},
            priority=notification.priority.value,
            is_read=notification.is_read,
            read_at=notification.read_at,
            expires_at=notification.expires_at,
            created_at=notification.created_at,
        )


class NotificationPageRead(BaseModel):
    notifications: list[NotificationRead]
    total: int
    total_pages: int
    current_page: int


class AnnouncementCreate(BaseModel):
    """Payload used by administrators to broadcast a system announcement."""

    model_config = ConfigDict(populate_by_name=True)

    title: str = Field(..., min_length=1, max_length=100)
    message: str = Field(..., min_length=1, max_length=500)
    target_audience: AnnouncementAudience = Field(
        default=AnnouncementAudience.ALL, alias="targetAudience"
    )
    priority: NotificationPriority = NotificationPriority.MEDIUM


class AnnouncementResult(BaseModel):
    created: int


__all__ = [
    "AnnouncementCreate",
    "AnnouncementResult",
    "NotificationPageRead",
    "NotificationRead",
]
