"""Tests for the chat REST endpoints."""

from __future__ import annotations

from app.domain.entities import AccountRole


def _send(client, headers, receiver_id, message, **extra):
    return client.post(
        "/chat/send", headers=headers, json={"receiverId": receiver_id, "message": message, **extra}
    )


def test_send_stores_message_and_notifies_offline_recipient(
    client, student, company, auth_headers
) -> None:
    response = _send(client, auth_headers(student), company.id, "  Hello Acme  ")

    assert response.status_code == 201
    body = response.json()
    assert body["body"] == "Hello Acme"
    assert body["sender_id"] == student.id
    assert body["recipient_id"] == company.id
    assert body["kind"] == "text"
    assert body["read_at"] is None

    notifications = client.get("/notifications/", headers=auth_headers(company)).json()
    assert notifications["total"] == 1
    assert notifications["notifications"][0]["title"] == "New Message"
    assert notifications["notifications"][0]["payload"]["related_id"] == body["id"]


def test_send_rejects_invalid_messages(client, student, company, auth_headers) -> None:
    headers = auth_headers(student)

    assert _send(client, headers, company.id, "   ").status_code == 400
    assert _send(client, headers, student.id, "me").status_code == 400
    invalid_kind = _send(client, headers, company.id, "hi", type="video")
    assert invalid_kind.status_code == 400
    assert invalid_kind.json()["detail"].startswith("Invalid message type")
    assert _send(client, headers, "unknown", "hi").status_code == 404

    history = client.get(f"/chat/messages/{company.id}", headers=headers)
    assert history.json() == []


def test_send_accepts_attachments(client, student, company, auth_headers) -> None:
    response = _send(
        client,
        auth_headers(student),
        company.id,
        "My CV",
        type="file",
        attachment={"url": "https://cdn.example/cv.pdf", "filename": "cv.pdf", "fileSize": 2048},
    )

    assert response.status_code == 201
    assert response.json()["attachment"] == {
        "url": "https://cdn.example/cv.pdf",
        "filename": "cv.pdf",
        "file_type": None,
        "file_size": 2048,
    }


def test_history_is_ordered_and_marks_messages_read(
    client, student, company, auth_headers
) -> None:
    for text in ("first", "second", "third"):
        _send(client, auth_headers(student), company.id, text)
    _send(client, auth_headers(company), student.id, "reply")
    company_headers = auth_headers(company)

    assert client.get("/chat/unread-count", headers=company_headers).json() == {"unread_count": 3}

    history = client.get(f"/chat/messages/{student.id}", headers=company_headers).json()
    assert [item["body"] for item in history] == ["first", "second", "third", "reply"]

    assert client.get("/chat/unread-count", headers=company_headers).json() == {"unread_count": 0}
    # The student's unread reply is untouched by the company reading its side.
    assert client.get("/chat/unread-count", headers=auth_headers(student)).json() == {
        "unread_count": 1
    }


def test_conversations_are_listed_latest_first(
    client, make_account, student, company, auth_headers
) -> None:
    other = make_account(AccountRole.COMPANY, email="jobs@globex.example", name="Globex")
    _send(client, auth_headers(company), student.id, "Interview on Monday?")
    _send(client, auth_headers(other), student.id, "Welcome aboard")
    _send(client, auth_headers(other), student.id, "Please sign the form")

    conversations = client.get("/chat/conversations", headers=auth_headers(student)).json()

    assert [item["counterpart"]["id"] for item in conversations] == [other.id, company.id]
    assert conversations[0]["counterpart"]["name"] == "Globex"
    assert conversations[0]["last_message"]["body"] == "Please sign the form"
    assert conversations[0]["unread_count"] == 2
    assert conversations[1]["unread_count"] == 1


def test_mark_single_message_read(client, student, company, auth_headers) -> None:
    message = _send(client, auth_headers(student), company.id, "ping").json()

    forbidden = client.put(f"/chat/messages/{message['id']}/read", headers=auth_headers(student))
    assert forbidden.status_code == 403

    response = client.put(f"/chat/messages/{message['id']}/read", headers=auth_headers(company))
    assert response.status_code == 200
    assert client.get("/chat/unread-count", headers=auth_headers(company)).json() == {
        "unread_count": 0
    }

    missing = client.put("/chat/messages/unknown/read", headers=auth_headers(company))
    assert missing.status_code == 404


def test_soft_delete_is_sender_only_and_hides_message(
    client, student, company, auth_headers
) -> None:
    message = _send(client, auth_headers(student), company.id, "oops").json()

    denied = client.delete(f"/chat/messages/{message['id']}", headers=auth_headers(company))
    assert denied.status_code == 403

    deleted = client.delete(f"/chat/messages/{message['id']}", headers=auth_headers(student))
    assert deleted.status_code == 200
    assert deleted.json() == {"message": "Message deleted successfully"}

    again = client.delete(f"/chat/messages/{message['id']}", headers=auth_headers(student))
    assert again.status_code == 404

    history = client.get(f"/chat/messages/{student.id}", headers=auth_headers(company)).json()
    assert history == []
    assert client.get("/chat/unread-count", headers=auth_headers(company)).json() == {
        "unread_count": 0
    }
