import pytest

from app.domain.errors import (
    AccessDeniedError,
    AuthError,
    ChatError,
    NotFoundError,
    StorageError,
    ValidationError,
)
from app.interfaces.api.routes_helpers import http_error_from


@pytest.mark.parametrize(
    ("error", "status_code"),
    [
        (AuthError("Authentication error: Invalid token"), 401),
        (ValidationError("Message cannot be empty"), 400),
        (AccessDeniedError(), 403),
        (NotFoundError("Message not found"), 404),
        (StorageError("Failed to send message"), 503),
        (ChatError("Something else"), 500),
    ],
)
def test_http_error_from_maps_domain_errors(error, status_code):
    exc = http_error_from(error)

    assert exc.status_code == status_code
    assert exc.detail == error.message


def test_auth_errors_carry_bearer_challenge():
    assert http_error_from(AuthError()).headers == {"WWW-Authenticate": "Bearer"}
    assert http_error_from(NotFoundError()).headers is None


def test_default_messages():
    assert AccessDeniedError().message == "Access denied"
    assert StorageError().message == "Storage temporarily unavailable"
