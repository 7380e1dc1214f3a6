"""Domain entities exposed by the application."""

from .account import Account, AccountRole
from .message import ChatMessage, ConversationSummary, MessageAttachment, MessageKind
from .notification import Notification, NotificationKind, NotificationPriority

__all__ = [
    "Account",
    "AccountRole",
    "ChatMessage",
    "ConversationSummary",
    "MessageAttachment",
    "MessageKind",
    "Notification",
    "NotificationKind",
    "NotificationPriority",
]
