"""Tests for the per-connection websocket event handler."""

from __future__ import annotations

import pytest

from app.application.use_cases.chat import build_chat_services
from app.infrastructure.database import SessionLocal
from app.infrastructure.realtime import ConnectionRegistry
from app.infrastructure.repositories import ChatMessageRepository, NotificationRepository
from app.interfaces.api.realtime_handlers import ChatEventHandler


@pytest.mark.anyio
async def test_sender_is_acknowledged_when_room_delivery_fails(
    student, company, make_connection
) -> None:
    services = build_chat_services(ConnectionRegistry())
    sender_conn = make_connection()
    recipient_conn = make_connection(fail=True)
    services.registry.register(sender_conn, student)
    services.registry.register(recipient_conn, company)
    services.router.join(recipient_conn, student.id)
    handler = ChatEventHandler(sender_conn, student, services)

    await handler.handle(
        {"type": "send_message", "data": {"toUserId": company.id, "message": "hi"}}
    )

    [ack] = sender_conn.websocket.events("message_sent")
    with SessionLocal() as session:
        [stored] = ChatMessageRepository(session).list_between(student.id, company.id)
        notifications, total = NotificationRepository(session).list_for_user(company.id)
    assert ack["data"] == {"messageId": stored.id}
    assert sender_conn.websocket.events("error") == []
    assert total == 1
    assert notifications[0].payload["related_id"] == stored.id


@pytest.mark.anyio
async def test_unknown_and_invalid_events_report_errors(student, make_connection) -> None:
    services = build_chat_services(ConnectionRegistry())
    connection = make_connection()
    services.registry.register(connection, student)
    handler = ChatEventHandler(connection, student, services)

    await handler.handle({"type": "typing_start", "data": "nope"})
    await handler.handle({"type": "update_status", "data": {"status": ""}})
    await handler.handle(["not", "an", "object"])

    assert [frame["data"]["message"] for frame in connection.websocket.events("error")] == [
        "Invalid payload for typing_start",
        "Invalid payload for update_status",
        "Malformed event",
    ]
