"""REST endpoints for direct messaging."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.application.use_cases.chat import (
    ChatServices,
    delete_message as delete_message_uc,
    list_conversations as list_conversations_uc,
)
from app.domain.entities import Account
from app.domain.errors import ChatError
from app.infrastructure.database import get_db
from app.interfaces.api.dependencies import get_chat_services, get_current_account
from app.interfaces.api.routes_helpers import http_error_from
from app.interfaces.api.schemas import (
    ConversationRead,
    MessageRead,
    SendMessageRequest,
    StatusMessage,
    UnreadCountRead,
)

router = APIRouter(prefix="/chat", tags=["chat"])


@router.get("/conversations", response_model=list[ConversationRead])
def list_conversations(
    db: Session = Depends(get_db),
    current_account: Account = Depends(get_current_account),
) -> list[ConversationRead]:
    """Return the last message and unread count for every counterpart."""

    try:
        summaries = list_conversations_uc(db, user_id=current_account.id)
    except ChatError as exc:
        raise http_error_from(exc) from exc
    return [ConversationRead.from_entity(summary) for summary in summaries]


@router.get("/messages/{user_id}", response_model=list[MessageRead])
def get_messages(
    user_id: str,
    db: Session = Depends(get_db),
    current_account: Account = Depends(get_current_account),
    chat: ChatServices = Depends(get_chat_services),
) -> list[MessageRead]:
    """Return the history with ``user_id`` and mark their messages as read."""

    try:
        messages = chat.reconciler.fetch_history(
            db, requester_id=current_account.id, counterpart_id=user_id
        )
    except ChatError as exc:
        raise http_error_from(exc) from exc
    return [MessageRead.from_entity(message) for message in messages]


@router.post("/send", response_model=MessageRead, status_code=status.HTTP_201_CREATED)
async def send_message(
    payload: SendMessageRequest,
    db: Session = Depends(get_db),
    current_account: Account = Depends(get_current_account),
    chat: ChatServices = Depends(get_chat_services),
) -> MessageRead:
    """Send a message without a websocket; same rules as the realtime path."""

    outcome = await chat.dispatcher.send(
        db,
        current_account,
        payload.receiver_id,
        payload.message,
        kind=payload.type,
        attachment=payload.attachment.model_dump() if payload.attachment else None,
    )
    if outcome.error is not None:
        raise http_error_from(outcome.error) from outcome.error
    return MessageRead.from_entity(outcome.message)


@router.put("/messages/{message_id}/read", response_model=StatusMessage)
def mark_message_read(
    message_id: str,
    db: Session = Depends(get_db),
    current_account: Account = Depends(get_current_account),
    chat: ChatServices = Depends(get_chat_services),
) -> StatusMessage:
    try:
        chat.reconciler.mark_message_read(
            db, reader_id=current_account.id, message_id=message_id
        )
    except ChatError as exc:
        raise http_error_from(exc) from exc
    return StatusMessage(message="Message marked as read")


@router.delete("/messages/{message_id}", response_model=StatusMessage)
def delete_message(
    message_id: str,
    db: Session = Depends(get_db),
    current_account: Account = Depends(get_current_account),
) -> StatusMessage:
    """Soft-delete a message; only its sender may do so."""

    try:
        delete_message_uc(db, user_id=current_account.id, message_id=message_id)
    except ChatError as exc:
        raise http_error_from(exc) from exc
    return StatusMessage(message="Message deleted successfully")


@router.get("/unread-count", response_model=UnreadCountRead)
def get_unread_count(
    db: Session = Depends(get_db),
    current_account: Account = Depends(get_current_account),
    chat: ChatServices = Depends(get_chat_services),
) -> UnreadCountRead:
    try:
        count = chat.reconciler.unread_count(db, user_id=current_account.id)
    except ChatError as exc:
        raise http_error_from(exc) from exc
    return UnreadCountRead(unread_count=count)
