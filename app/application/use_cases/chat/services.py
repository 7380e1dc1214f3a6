"""Wire the chat components around one connection registry."""

from __future__ import annotations

from dataclasses import dataclass

from app.config import Settings, get_settings
from app.infrastructure.realtime import ConnectionRegistry, RealtimePublisher

from .dispatcher import MessageDispatcher
from .read_state import ReadStateReconciler
from .rooms import ConversationRouter


@dataclass
class ChatServices:
    registry: ConnectionRegistry
    router: ConversationRouter
    dispatcher: MessageDispatcher
    reconciler: ReadStateReconciler
    publisher: RealtimePublisher


def build_chat_services(
    registry: ConnectionRegistry, settings: Settings | None = None
) -> ChatServices:
    settings = settings or get_settings()
    return ChatServices(
        registry=registry,
        router=ConversationRouter(registry),
        dispatcher=MessageDispatcher(registry, max_length=settings.message_max_length),
        reconciler=ReadStateReconciler(registry),
        publisher=RealtimePublisher(registry),
    )


__all__ = ["ChatServices", "build_chat_services"]
