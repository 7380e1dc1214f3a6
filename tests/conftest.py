"""Shared fixtures: an isolated SQLite database, accounts and app clients."""

from __future__ import annotations

import os
import sys
import tempfile
from collections.abc import Callable, Iterator
from pathlib import Path
from typing import Any

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.append(str(ROOT))

TEST_DB_PATH = Path(tempfile.gettempdir()) / "internship_chat_test.db"
os.environ["DATABASE_URL"] = f"sqlite:///{TEST_DB_PATH}"
os.environ["SECRET_KEY"] = "test-secret"
os.environ["ACCESS_TOKEN_EXPIRE_MINUTES"] = "30"

from app.config import get_settings  # noqa: E402

get_settings.cache_clear()

from fastapi.testclient import TestClient  # noqa: E402

from app.application.use_cases.auth import issue_credential, register_account  # noqa: E402
from app.domain.entities import Account, AccountRole  # noqa: E402
from app.infrastructure.database import (  # noqa: E402
    Base,
    SessionLocal,
    engine,
    initialize_database,
)
from app.infrastructure.realtime import Connection  # noqa: E402
from main import create_app  # noqa: E402

PASSWORD = "password123"


@pytest.fixture(autouse=True)
def reset_database() -> Iterator[None]:
    """Ensure the test database starts from a clean state for each test."""

    Base.metadata.drop_all(bind=engine)
    initialize_database()
    yield
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
def make_account() -> Callable[..., Account]:
    def _make(
        role: AccountRole = AccountRole.STUDENT,
        *,
        email: str,
        name: str = "Test User",
        password: str = PASSWORD,
    ) -> Account:
        with SessionLocal() as session:
            return register_account(
                session, role=role, email=email, password=password, display_name=name
            )

    return _make


@pytest.fixture
def student(make_account) -> Account:
    return make_account(AccountRole.STUDENT, email="ana@example.com", name="Ana Perez")


@pytest.fixture
def company(make_account) -> Account:
    return make_account(AccountRole.COMPANY, email="hr@acme.example", name="Acme Corp")


@pytest.fixture
def admin(make_account) -> Account:
    return make_account(AccountRole.ADMIN, email="admin@example.com", name="Admin")


@pytest.fixture
def auth_headers() -> Callable[[Account], dict[str, str]]:
    def _headers(account: Account) -> dict[str, str]:
        return {"Authorization": f"Bearer {issue_credential(account)}"}

    return _headers


@pytest.fixture
def client() -> Iterator[TestClient]:
    # The context manager runs the lifespan and shares one event loop between
    # HTTP requests and every websocket opened by the test.
    with TestClient(create_app()) as test_client:
        yield test_client


class RecordingSocket:
    """Stand-in for a websocket that keeps every frame it is asked to send."""

    def __init__(self, *, fail: bool = False) -> None:
        self.frames: list[dict[str, Any]] = []
        self.fail = fail

    async def send_json(self, data: dict[str, Any]) -> None:
        if self.fail:
            raise RuntimeError("socket closed")
        self.frames.append(data)

    def events(self, event_type: str | None = None) -> list[dict[str, Any]]:
        return [
            frame for frame in self.frames if event_type is None or frame["type"] == event_type
        ]


@pytest.fixture
def make_connection() -> Callable[..., Connection]:
    def _make(*, fail: bool = False) -> Connection:
        return Connection(RecordingSocket(fail=fail))

    return _make
