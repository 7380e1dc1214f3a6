"""Domain entity representing a user notification."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any


class NotificationKind(str, Enum):
    """Closed enumeration of the alerts the portal can raise."""

    ACCOUNT_VERIFIED = "account_verified"
    ACCOUNT_REJECTED = "account_rejected"
    ENDORSEMENT_RECEIVED = "endorsement_received"
    BADGE_EARNED = "badge_earned"
    CHECKLIST_UPDATED = "checklist_updated"
    NEW_MESSAGE = "new_message"
    APPLICATION_RECEIVED = "application_received"
    APPLICATION_ACCEPTED = "application_accepted"
    APPLICATION_REJECTED = "application_rejected"
    SLOT_POSTED = "slot_posted"
    SYSTEM_ANNOUNCEMENT = "system_announcement"


class NotificationPriority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"


@dataclass
class Notification:
    """Information message delivered to a specific user.

    Once read, only ``is_read`` and ``read_at`` may change.
    """

    id: str | None
    user_id: str
    kind: NotificationKind
    title: str
    message: str
    payload: dict[str, Any] = field(default_factory=dict)
    priority: NotificationPriority = NotificationPriority.MEDIUM
    is_read: bool = False
    read_at: datetime | None = None
    expires_at: datetime | None = None
    created_at: datetime | None = None


__all__ = ["Notification", "NotificationKind", "NotificationPriority"]
