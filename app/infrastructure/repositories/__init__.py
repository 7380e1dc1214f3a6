"""Repository implementations for infrastructure layer."""

from .account_repository import (
    AccountDirectory,
    AccountStore,
    AdminAccountStore,
    CompanyAccountStore,
    StudentAccountStore,
)
from .chat_message_repository import ChatMessageRepository
from .notification_repository import NotificationRepository

__all__ = [
    "AccountDirectory",
    "AccountStore",
    "AdminAccountStore",
    "CompanyAccountStore",
    "StudentAccountStore",
    "ChatMessageRepository",
    "NotificationRepository",
]
