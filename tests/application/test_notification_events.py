"""Tests for notification creation, announcements and inbox management."""

from __future__ import annotations

from datetime import timedelta

import pytest

from app.application.use_cases.notifications import (
    AnnouncementAudience,
    announce,
    delete_notification,
    list_notifications,
    mark_all_notifications_read,
    mark_notification_read,
    notify,
    unread_notification_count,
)
from app.domain.entities import NotificationKind, NotificationPriority
from app.domain.errors import NotFoundError, ValidationError
from app.infrastructure.database import SessionLocal
from app.utils import now_in_app_timezone


def test_notify_validates_lengths(student) -> None:
    with SessionLocal() as session:
        with pytest.raises(ValidationError):
            notify(
                session,
                user_id=student.id,
                kind=NotificationKind.BADGE_EARNED,
                title="x" * 101,
                message="Too long a title",
            )
        with pytest.raises(ValidationError):
            notify(
                session,
                user_id=student.id,
                kind=NotificationKind.BADGE_EARNED,
                title="Badge",
                message="   ",
            )
        assert unread_notification_count(session, user_id=student.id) == 0


def test_listing_filters_and_paginates(student) -> None:
    with SessionLocal() as session:
        for index in range(3):
            notify(
                session,
                user_id=student.id,
                kind=NotificationKind.SLOT_POSTED,
                title=f"Slot {index}",
                message="A new internship slot is open",
                priority=NotificationPriority.HIGH,
            )
        notify(
            session,
            user_id=student.id,
            kind=NotificationKind.BADGE_EARNED,
            title="Badge",
            message="You earned a badge",
            priority=NotificationPriority.LOW,
        )

        first_page = list_notifications(session, student.id, page=1, limit=2)
        assert first_page.total == 4
        assert first_page.total_pages == 2
        assert len(first_page.notifications) == 2

        slots = list_notifications(session, student.id, kind=NotificationKind.SLOT_POSTED)
        assert slots.total == 3
        low = list_notifications(session, student.id, priority=NotificationPriority.LOW)
        assert [item.title for item in low.notifications] == ["Badge"]


def test_expired_notifications_are_hidden(student) -> None:
    with SessionLocal() as session:
        notify(
            session,
            user_id=student.id,
            kind=NotificationKind.SYSTEM_ANNOUNCEMENT,
            title="Old",
            message="Expired news",
            expires_at=now_in_app_timezone() - timedelta(days=1),
        )
        assert list_notifications(session, student.id).total == 0
        assert unread_notification_count(session, user_id=student.id) == 0


def test_read_and_delete_are_scoped_to_the_owner(student, company) -> None:
    with SessionLocal() as session:
        first = notify(
            session,
            user_id=student.id,
            kind=NotificationKind.ACCOUNT_VERIFIED,
            title="Verified",
            message="Your account was verified",
        )
        notify(
            session,
            user_id=student.id,
            kind=NotificationKind.BADGE_EARNED,
            title="Badge",
            message="You earned a badge",
        )

        with pytest.raises(NotFoundError):
            mark_notification_read(session, first.id, user_id=company.id)
        read = mark_notification_read(session, first.id, user_id=student.id)
        assert read.is_read is True
        assert read.read_at is not None
        assert unread_notification_count(session, user_id=student.id) == 1

        assert mark_all_notifications_read(session, user_id=student.id) == 1
        assert unread_notification_count(session, user_id=student.id) == 0

        with pytest.raises(NotFoundError):
            delete_notification(session, first.id, user_id=company.id)
        delete_notification(session, first.id, user_id=student.id)
        assert list_notifications(session, student.id).total == 1


def test_announcement_reaches_the_selected_audience(student, company, admin) -> None:
    with SessionLocal() as session:
        created = announce(
            session,
            audience=AnnouncementAudience.STUDENTS,
            title="Maintenance",
            message="The portal will be down tonight",
            priority=NotificationPriority.URGENT,
        )
        assert [item.user_id for item in created] == [student.id]
        assert created[0].kind is NotificationKind.SYSTEM_ANNOUNCEMENT

        everyone = announce(
            session,
            audience=AnnouncementAudience.ALL,
            title="Welcome",
            message="New term starts",
        )
        assert {item.user_id for item in everyone} == {student.id, company.id, admin.id}
