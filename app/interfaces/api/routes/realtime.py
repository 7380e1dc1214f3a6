"""Websocket endpoint carrying chat events."""

from __future__ import annotations

import json
import logging
from typing import Any

import anyio
from fastapi import APIRouter, WebSocket, WebSocketDisconnect, status
from pydantic import ValidationError as PayloadError

from app.application.use_cases.auth import authenticate_credential
from app.application.use_cases.chat import ChatServices
from app.domain.entities import Account
from app.domain.errors import AuthError
from app.infrastructure.database import SessionLocal
from app.infrastructure.realtime import Connection
from app.interfaces.api.realtime_handlers import ChatEventHandler
from app.interfaces.api.schemas import HandshakePayload

router = APIRouter(tags=["realtime"])
logger = logging.getLogger(__name__)


async def _receive_frame(websocket: WebSocket) -> Any:
    """Return the next decoded JSON frame, or ``None`` when it is not JSON text.

    Binary frames count as malformed.
    """

    message = await websocket.receive()
    if message["type"] == "websocket.disconnect":
        raise WebSocketDisconnect(message.get("code", 1000), message.get("reason"))
    raw = message.get("text")
    if raw is None:
        return None
    try:
        return json.loads(raw)
    except ValueError:
        return None


def _token_from_request(websocket: WebSocket) -> str | None:
    token = websocket.query_params.get("token")
    if token:
        return token
    authorization = websocket.headers.get("authorization", "")
    scheme, _, credentials = authorization.partition(" ")
    if scheme.lower() == "bearer" and credentials:
        return credentials.strip()
    return None


async def _reject(websocket: WebSocket, message: str) -> None:
    await websocket.send_json({"type": "error", "data": {"message": message}})
    await websocket.close(code=status.WS_1008_POLICY_VIOLATION)


async def _handshake(websocket: WebSocket) -> Account | None:
    """Authenticate the socket before any other event is served."""

    token = _token_from_request(websocket)
    if token is None:
        frame = await _receive_frame(websocket)
        if not isinstance(frame, dict) or frame.get("type") != "handshake":
            await _reject(websocket, "Authentication error: No token provided")
            return None
        try:
            token = HandshakePayload.model_validate(frame.get("data") or {}).token
        except PayloadError:
            token = None

    session = SessionLocal()
    try:
        return authenticate_credential(session, token)
    except AuthError as exc:
        await _reject(websocket, exc.message)
        return None
    finally:
        session.close()


@router.websocket("/ws")
async def chat_websocket(websocket: WebSocket) -> None:
    """Serve one client: handshake, then events until it disconnects."""

    await websocket.accept()
    try:
        account = await _handshake(websocket)
    except WebSocketDisconnect:
        return
    if account is None:
        return

    services: ChatServices = websocket.app.state.chat
    registry = services.registry
    connection = Connection(websocket)
    registry.register(connection, account)
    handler = ChatEventHandler(connection, account, services)
    try:
        await connection.send_event(
            "connected", {"userId": account.id, "role": account.role.value}
        )
        while True:
            frame = await _receive_frame(websocket)
            if frame is None:
                await connection.send_event("error", {"message": "Malformed event"})
                continue
            await handler.handle(frame)
    except WebSocketDisconnect:
        pass
    finally:
        with anyio.CancelScope(shield=True):
            registry.unregister(connection)
            await registry.broadcast(
                "user_offline", {"userId": account.id}, exclude=connection
            )


__all__ = ["router"]
