"""Use cases behind direct messaging."""

from .conversations import delete_message, list_conversations
from .dispatcher import (
    SEND_FAILED_MESSAGE,
    DispatchOutcome,
    DispatchState,
    MessageDispatcher,
)
from .read_state import ReadReceipt, ReadStateReconciler
from .rooms import ConversationRouter, private_room, room_key
from .services import ChatServices, build_chat_services
from .validation import OutboundMessage, validate_outbound_message

__all__ = [
    "ChatServices",
    "ConversationRouter",
    "DispatchOutcome",
    "DispatchState",
    "MessageDispatcher",
    "OutboundMessage",
    "ReadReceipt",
    "ReadStateReconciler",
    "SEND_FAILED_MESSAGE",
    "build_chat_services",
    "delete_message",
    "list_conversations",
    "private_room",
    "room_key",
    "validate_outbound_message",
]
