"""Tests for conversation room naming and membership."""

from __future__ import annotations

import pytest

from app.application.use_cases.chat import ConversationRouter, room_key
from app.domain.entities import Account, AccountRole
from app.domain.errors import AuthError, ValidationError
from app.infrastructure.realtime import ConnectionRegistry


def test_room_key_is_order_independent() -> None:
    assert room_key("b7", "a3") == room_key("a3", "b7") == "a3_b7"


def test_room_key_differs_between_pairs() -> None:
    assert room_key("a", "b") != room_key("a", "c")
    assert room_key("ab", "c") != room_key("a", "bc")


def test_join_and_leave_return_the_shared_room(make_connection) -> None:
    registry = ConnectionRegistry()
    router = ConversationRouter(registry)
    connection = make_connection()
    registry.register(
        connection,
        Account(
            id="zed",
            role=AccountRole.COMPANY,
            email="zed@example.com",
            display_name="Zed",
            password_hash="x",
        ),
    )

    room = router.join(connection, "amy")
    assert room == "amy_zed"
    assert router.join(connection, "amy") == room
    assert registry.members(room) == [connection]

    assert router.leave(connection, "amy") == room
    assert router.leave(connection, "amy") == room
    assert registry.members(room) == []


def test_join_requires_authentication(make_connection) -> None:
    router = ConversationRouter(ConnectionRegistry())

    with pytest.raises(AuthError):
        router.join(make_connection(), "amy")


def test_join_requires_a_counterpart(make_connection) -> None:
    registry = ConnectionRegistry()
    router = ConversationRouter(registry)
    connection = make_connection()
    registry.register(
        connection,
        Account(
            id="zed",
            role=AccountRole.STUDENT,
            email="zed@example.com",
            display_name="Zed",
            password_hash="x",
        ),
    )

    with pytest.raises(ValidationError):
        router.join(connection, "  ")
