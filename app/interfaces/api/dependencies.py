"""FastAPI dependency utilities."""

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from app.application.use_cases.auth import authenticate_credential
from app.application.use_cases.chat import ChatServices
from app.domain.entities import Account, AccountRole
from app.domain.errors import AuthError
from app.infrastructure.database import get_db
from app.interfaces.api.routes_helpers import http_error_from

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="auth/token")


def get_current_account(
    token: str = Depends(oauth2_scheme),
    db: Session = Depends(get_db),
) -> Account:
    """Return the active account referenced by the bearer token."""

    try:
        return authenticate_credential(db, token)
    except AuthError as exc:
        raise http_error_from(exc) from exc


def require_admin(current_account: Account = Depends(get_current_account)) -> Account:
    """Ensure the authenticated account has administrator privileges."""

    if current_account.role is not AccountRole.ADMIN:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Access denied. Admin privileges required.",
        )
    return current_account


def get_chat_services(request: Request) -> ChatServices:
    """Return the chat components built for this application instance."""

    return request.app.state.chat
