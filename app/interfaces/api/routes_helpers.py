"""Helper utilities shared across API route handlers."""

from fastapi import HTTPException, status

from app.domain.errors import (
    AccessDeniedError,
    AuthError,
    ChatError,
    NotFoundError,
    StorageError,
    ValidationError,
)

_STATUS_BY_ERROR: tuple[tuple[type[ChatError], int], ...] = (
    (AuthError, status.HTTP_401_UNAUTHORIZED),
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (AccessDeniedError, status.HTTP_403_FORBIDDEN),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (StorageError, status.HTTP_503_SERVICE_UNAVAILABLE),
)


def http_error_from(exc: ChatError) -> HTTPException:
    """Return the HTTP exception matching a domain error."""

    for error_type, status_code in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            headers = {"WWW-Authenticate": "Bearer"} if error_type is AuthError else None
            return HTTPException(status_code=status_code, detail=exc.message, headers=headers)
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=exc.message
    )
