"""Tests for the notification REST endpoints."""

from __future__ import annotations

import pytest
from sqlalchemy.exc import SQLAlchemyError

from app.application.use_cases.notifications import notify
from app.domain.entities import NotificationKind
from app.infrastructure.database import SessionLocal
from app.infrastructure.repositories import NotificationRepository


def _seed(user_id: str, count: int) -> list[str]:
    with SessionLocal() as session:
        return [
            notify(
                session,
                user_id=user_id,
                kind=NotificationKind.APPLICATION_RECEIVED,
                title=f"Application {index}",
                message="A student applied to your slot",
            ).id
            for index in range(count)
        ]


def test_list_and_unread_count(client, company, auth_headers) -> None:
    _seed(company.id, 3)
    headers = auth_headers(company)

    page = client.get("/notifications/", params={"page": 2, "limit": 2}, headers=headers)
    assert page.status_code == 200
    body = page.json()
    assert body["total"] == 3
    assert body["total_pages"] == 2
    assert body["current_page"] == 2
    assert len(body["notifications"]) == 1
    assert body["notifications"][0]["type"] == "application_received"

    filtered = client.get("/notifications/", params={"type": "badge_earned"}, headers=headers)
    assert filtered.json()["total"] == 0

    assert client.get("/notifications/unread-count", headers=headers).json() == {
        "unread_count": 3
    }


def test_mark_read_and_delete(client, company, student, auth_headers) -> None:
    first, second = _seed(company.id, 2)
    headers = auth_headers(company)

    assert client.put(f"/notifications/{first}/read", headers=auth_headers(student)).status_code == 404

    read = client.put(f"/notifications/{first}/read", headers=headers)
    assert read.status_code == 200
    assert read.json()["is_read"] is True
    assert client.get("/notifications/unread-count", headers=headers).json() == {
        "unread_count": 1
    }

    assert client.put("/notifications/read-all", headers=headers).status_code == 200
    assert client.get("/notifications/unread-count", headers=headers).json() == {
        "unread_count": 0
    }

    assert client.delete(f"/notifications/{second}", headers=headers).status_code == 200
    assert client.delete(f"/notifications/{second}", headers=headers).status_code == 404
    assert client.get("/notifications/", headers=headers).json()["total"] == 1


def test_announcements_require_admin(client, student, auth_headers) -> None:
    response = client.post(
        "/notifications/announcements",
        headers=auth_headers(student),
        json={"title": "Hi", "message": "Everyone"},
    )

    assert response.status_code == 403
    assert response.json()["detail"] == "Access denied. Admin privileges required."


def test_announcement_is_stored_and_pushed(client, admin, student, company, auth_headers) -> None:
    with client.websocket_connect(f"/ws?token={_token(auth_headers, student)}") as websocket:
        assert websocket.receive_json()["type"] == "connected"

        response = client.post(
            "/notifications/announcements",
            headers=auth_headers(admin),
            json={
                "title": "Career fair",
                "message": "Join us on Friday",
                "targetAudience": "students",
                "priority": "high",
            },
        )
        assert response.status_code == 201
        assert response.json() == {"created": 1}

        event = websocket.receive_json()
        assert event["type"] == "new_notification"
        assert event["data"]["type"] == "system_announcement"
        assert event["data"]["title"] == "Career fair"
        assert event["data"]["priority"] == "high"

    assert client.get("/notifications/", headers=auth_headers(company)).json()["total"] == 0


def _token(auth_headers, account) -> str:
    return auth_headers(account)["Authorization"].removeprefix("Bearer ")


@pytest.mark.parametrize(
    ("method", "path", "repository_method"),
    [
        ("get", "/notifications/", "list_for_user"),
        ("get", "/notifications/unread-count", "count_unread"),
        ("put", "/notifications/read-all", "mark_all_as_read"),
    ],
)
def test_storage_failures_map_to_service_unavailable(
    client, company, auth_headers, monkeypatch, method, path, repository_method
) -> None:
    def _fail(self, *args, **kwargs):
        raise SQLAlchemyError("database is locked")

    monkeypatch.setattr(NotificationRepository, repository_method, _fail)

    response = client.request(method, path, headers=auth_headers(company))

    assert response.status_code == 503
