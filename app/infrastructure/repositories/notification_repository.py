"""Persistence helpers for notification entities."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from sqlalchemy import func, or_
from sqlalchemy.orm import Query, Session

from app.domain.entities import Notification, NotificationKind, NotificationPriority
from app.infrastructure.models import NotificationModel
from app.utils import (
    ensure_app_naive_datetime,
    ensure_app_timezone,
    now_in_app_timezone,
)


class NotificationRepository:
    """Provide storage operations for :class:`Notification` objects.

    There is no general ``update``: after creation only the read
    flag and timestamp can change.
    """

    def __init__(self, session: Session) -> None:
        self.session = session

    def create(self, notification: Notification) -> Notification:
        model = self._build_model(notification)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def create_many(self, notifications: Sequence[Notification]) -> list[Notification]:
        models = [self._build_model(notification) for notification in notifications]
        if not models:
            return []
        self.session.add_all(models)
        self.session.commit()
        for model in models:
            self.session.refresh(model)
        return [self._to_entity(model) for model in models]

    def get_for_user(self, notification_id: str, *, user_id: str) -> Notification | None:
        model = (
            self.session.query(NotificationModel)
            .filter(
                NotificationModel.id == notification_id,
                NotificationModel.user_id == user_id,
            )
            .first()
        )
        return self._to_entity(model) if model else None

    def list_for_user(
        self,
        user_id: str,
        *,
        kind: NotificationKind | None = None,
        priority: NotificationPriority | None = None,
        offset: int = 0,
        limit: int | None = 20,
    ) -> tuple[Sequence[Notification], int]:
        """Return one page of notifications (newest first) and the total count."""

        query = self._visible_query(user_id)
        if kind is not None:
            query = query.filter(NotificationModel.kind == kind.value)
        if priority is not None:
            query = query.filter(NotificationModel.priority == priority.value)
        total = query.count()
        query = query.order_by(
            NotificationModel.created_at.desc(), NotificationModel.id.desc()
        ).offset(offset)
        if limit is not None:
            query = query.limit(limit)
        return [self._to_entity(model) for model in query.all()], total

    def count_unread(self, user_id: str) -> int:
        query = self._visible_query(user_id).filter(NotificationModel.is_read.is_(False))
        return int(query.with_entities(func.count(NotificationModel.id)).scalar() or 0)

    def mark_as_read(self, notification_id: str, *, user_id: str, read_at: datetime) -> bool:
        updated = (
            self.session.query(NotificationModel)
            .filter(
                NotificationModel.id == notification_id,
                NotificationModel.user_id == user_id,
                NotificationModel.is_read.is_(False),
            )
            .update(
                {
                    NotificationModel.is_read: True,
                    NotificationModel.read_at: ensure_app_naive_datetime(read_at),
                },
                synchronize_session=False,
            )
        )
        self.session.commit()
        return bool(updated)

    def mark_all_as_read(self, user_id: str, *, read_at: datetime) -> int:
        updated = (
            self.session.query(NotificationModel)
            .filter(
                NotificationModel.user_id == user_id,
                NotificationModel.is_read.is_(False),
            )
            .update(
                {
                    NotificationModel.is_read: True,
                    NotificationModel.read_at: ensure_app_naive_datetime(read_at),
                },
                synchronize_session=False,
            )
        )
        self.session.commit()
        return int(updated or 0)

    def delete(self, notification_id: str, *, user_id: str) -> bool:
        deleted = (
            self.session.query(NotificationModel)
            .filter(
                NotificationModel.id == notification_id,
                NotificationModel.user_id == user_id,
            )
            .delete(synchronize_session=False)
        )
        self.session.commit()
        return bool(deleted)

    def _visible_query(self, user_id: str) -> Query:
        now = ensure_app_naive_datetime(now_in_app_timezone())
        return (
            self.session.query(NotificationModel)
            .filter(NotificationModel.user_id == user_id)
            .filter(
                or_(
                    NotificationModel.expires_at.is_(None),
                    NotificationModel.expires_at > now,
                )
            )
        )

    @staticmethod
    def _build_model(notification: Notification) -> NotificationModel:
        model = NotificationModel()
        model.user_id = notification.user_id
        model.kind = notification.kind.value
        model.title = notification.title
        model.message = notification.message
        model.payload = notification.payload or {}
        model.priority = notification.priority.value
        model.is_read = notification.is_read
        model.read_at = ensure_app_naive_datetime(notification.read_at)
        model.expires_at = ensure_app_naive_datetime(notification.expires_at)
        model.created_at = ensure_app_naive_datetime(
            notification.created_at or now_in_app_timezone()
        )
        return model

    @staticmethod
    def _to_entity(model: NotificationModel) -> Notification:
        return Notification(
            id=model.id,
            user_id=model.user_id,
            kind=NotificationKind(model.kind),
            title=model.title,
            message=model.message,
            payload=model.payload or {},
            priority=NotificationPriority(model.priority),
            is_read=model.is_read,
            read_at=ensure_app_timezone(model.read_at),
            expires_at=ensure_app_timezone(model.expires_at),
            created_at=ensure_app_timezone(model.created_at),
        )


__all__ = ["NotificationRepository"]
