"""Realtime connection helpers for the infrastructure layer."""

from .connection import Connection
from .publisher import (
    RealtimePublisher,
    notification_event,
    serialize_message,
)
from .registry import PRIVATE_ROOM_PREFIX, ConnectionRegistry, private_room

__all__ = [
    "Connection",
    "ConnectionRegistry",
    "PRIVATE_ROOM_PREFIX",
    "private_room",
    "RealtimePublisher",
    "notification_event",
    "serialize_message",
]
