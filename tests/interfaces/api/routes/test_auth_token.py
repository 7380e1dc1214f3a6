"""Tests for the authentication token endpoint."""

from __future__ import annotations

from app.domain.entities import AccountRole
from app.infrastructure.database import SessionLocal
from app.infrastructure.models import StudentModel
from app.infrastructure.security import decode_access_token


def test_login_returns_token_for_matching_role(client, company) -> None:
    response = client.post(
        "/auth/token",
        json={"email": "HR@acme.example", "password": "password123", "role": "company"},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["token_type"] == "bearer"
    assert body["role"] == "company"
    assert body["user_id"] == company.id
    claims = decode_access_token(body["access_token"])
    assert claims["sub"] == company.id
    assert claims["role"] == AccountRole.COMPANY.value


def test_login_rejects_wrong_password(client, student) -> None:
    response = client.post(
        "/auth/token",
        json={"email": "ana@example.com", "password": "nope", "role": "student"},
    )

    assert response.status_code == 401
    assert response.json()["detail"] == "Invalid credentials"


def test_login_looks_only_in_the_requested_role(client, student) -> None:
    response = client.post(
        "/auth/token",
        json={"email": "ana@example.com", "password": "password123", "role": "company"},
    )

    assert response.status_code == 401


def test_login_rejects_deactivated_accounts(client, student) -> None:
    with SessionLocal() as session:
        session.get(StudentModel, student.id).is_active = False
        session.commit()

    response = client.post(
        "/auth/token",
        json={"email": "ana@example.com", "password": "password123", "role": "student"},
    )

    assert response.status_code == 401
    assert response.json()["detail"] == "Account is deactivated"


def test_protected_route_rejects_inactive_account_token(client, student, auth_headers) -> None:
    headers = auth_headers(student)
    with SessionLocal() as session:
        session.get(StudentModel, student.id).is_active = False
        session.commit()

    response = client.get("/chat/unread-count", headers=headers)

    assert response.status_code == 401
    assert response.json()["detail"] == "Authentication error: Invalid user"


def test_protected_route_requires_a_token(client) -> None:
    response = client.get("/chat/conversations")

    assert response.status_code == 401
