"""Endpoints to read and manage notifications."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.application.use_cases.chat import ChatServices
from app.application.use_cases.notifications import (
    announce,
    delete_notification as delete_notification_uc,
    list_notifications as list_notifications_uc,
    mark_all_notifications_read,
    mark_notification_read as mark_notification_read_uc,
    unread_notification_count,
)
from app.domain.entities import Account, NotificationKind, NotificationPriority
from app.domain.errors import ChatError
from app.infrastructure.database import get_db
from app.interfaces.api.dependencies import (
    get_chat_services,
    get_current_account,
    require_admin,
)
from app.interfaces.api.routes_helpers import http_error_from
from app.interfaces.api.schemas import (
    AnnouncementCreate,
    AnnouncementResult,
    NotificationPageRead,
    NotificationRead,
    StatusMessage,
    UnreadCountRead,
)

router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.get("/", response_model=NotificationPageRead)
def list_notifications(
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    type: NotificationKind | None = Query(None),
    priority: NotificationPriority | None = Query(None),
    db: Session = Depends(get_db),
    current_account: Account = Depends(get_current_account),
) -> NotificationPageRead:
    """Return the most recent notifications for the authenticated account."""

    try:
        result = list_notifications_uc(
            db,
            current_account.id,
            page=page,
            limit=limit,
            kind=type,
            priority=priority,
        )
    except ChatError as exc:
        raise http_error_from(exc) from exc
    return NotificationPageRead(
        notifications=[NotificationRead.from_entity(item) for item in result.notifications],
        total=result.total,
        total_pages=result.total_pages,
        current_page=result.page,
    )


@router.get("/unread-count", response_model=UnreadCountRead)
def get_unread_count(
    db: Session = Depends(get_db),
    current_account: Account = Depends(get_current_account),
) -> UnreadCountRead:
    try:
        count = unread_notification_count(db, user_id=current_account.id)
    except ChatError as exc:
        raise http_error_from(exc) from exc
    return UnreadCountRead(unread_count=count)


@router.put("/read-all", response_model=StatusMessage)
def mark_all_read(
    db: Session = Depends(get_db),
    current_account: Account = Depends(get_current_account),
) -> StatusMessage:
    try:
        mark_all_notifications_read(db, user_id=current_account.id)
    except ChatError as exc:
        raise http_error_from(exc) from exc
    return StatusMessage(message="All notifications marked as read")


@router.put("/{notification_id}/read", response_model=NotificationRead)
def mark_notification_read(
    notification_id: str,
    db: Session = Depends(get_db),
    current_account: Account = Depends(get_current_account),
) -> NotificationRead:
    try:
        notification = mark_notification_read_uc(
            db, notification_id, user_id=current_account.id
        )
    except ChatError as exc:
        raise http_error_from(exc) from exc
    return NotificationRead.from_entity(notification)


@router.delete("/{notification_id}", response_model=StatusMessage)
def delete_notification(
    notification_id: str,
    db: Session = Depends(get_db),
    current_account: Account = Depends(get_current_account),
) -> StatusMessage:
    try:
        delete_notification_uc(db, notification_id, user_id=current_account.id)
    except ChatError as exc:
        raise http_error_from(exc) from exc
    return StatusMessage(message="Notification deleted successfully")


@router.post(
    "/announcements",
    response_model=AnnouncementResult,
    status_code=status.HTTP_201_CREATED,
)
def create_announcement(
    payload: AnnouncementCreate,
    db: Session = Depends(get_db),
    _admin: Account = Depends(require_admin),
    chat: ChatServices = Depends(get_chat_services),
) -> AnnouncementResult:
    """Notify every active account of the selected audience."""

    try:
        created = announce(
            db,
            audience=payload.target_audience,
            title=payload.title,
            message=payload.message,
            priority=payload.priority,
            publisher=chat.publisher,
        )
    except ChatError as exc:
        raise http_error_from(exc) from exc
    return AnnouncementResult(created=len(created))
