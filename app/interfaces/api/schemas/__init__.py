from .auth import LoginRequest, Token
from .chat import (
    AttachmentPayload,
    AttachmentRead,
    ConversationRead,
    MessageRead,
    SendMessageRequest,
    StatusMessage,
    UnreadCountRead,
)
from .notification import (
    AnnouncementCreate,
    AnnouncementResult,
    NotificationPageRead,
    NotificationRead,
)
from .realtime import (
    ConversationPayload,
    HandshakePayload,
    MarkReadPayload,
    SendMessagePayload,
    StatusPayload,
    TypingPayload,
)

__all__ = [
    "AnnouncementCreate",
    "AnnouncementResult",
    "AttachmentPayload",
    "AttachmentRead",
    "ConversationPayload",
    "ConversationRead",
    "HandshakePayload",
    "LoginRequest",
    "MarkReadPayload",
    "MessageRead",
    "NotificationPageRead",
    "NotificationRead",
    "SendMessagePayload",
    "StatusMessage",
    "StatusPayload",
    "Token",
    "TypingPayload",
    "UnreadCountRead",
]
