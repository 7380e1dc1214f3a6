"""ORM models used by the application infrastructure."""

from .accounts import AdminModel, CompanyModel, StudentModel
from .chat_message import ChatMessageModel
from .notification import NotificationModel

__all__ = [
    "AdminModel",
    "ChatMessageModel",
    "CompanyModel",
    "NotificationModel",
    "StudentModel",
]
