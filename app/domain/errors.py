"""Errors raised by the chat and notification use cases."""

from __future__ import annotations


class ChatError(Exception):
    """Base class for failures that are reported back to the caller."""

    default_message = "Request failed"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class AuthError(ChatError):
    """Missing, invalid or expired credential, or an inactive account."""

    default_message = "Authentication error"


class ValidationError(ChatError):
    """Input rejected before anything was persisted."""

    default_message = "Invalid request"


class NotFoundError(ChatError):
    default_message = "Not found"


class AccessDeniedError(ChatError):
    default_message = "Access denied"


class StorageError(ChatError):
    """The database could not complete the operation; callers may retry."""

    default_message = "Storage temporarily unavailable"


__all__ = [
    "AccessDeniedError",
    "AuthError",
    "ChatError",
    "NotFoundError",
    "StorageError",
    "ValidationError",
]
