"""Credential issuance and verification for every account role."""

from __future__ import annotations

import logging
from datetime import timedelta

from sqlalchemy.orm import Session

from app.domain.entities import Account, AccountRole
from app.domain.errors import AuthError
from app.infrastructure.repositories import AccountDirectory
from app.infrastructure.security import create_access_token, decode_access_token

logger = logging.getLogger(__name__)


def issue_credential(account: Account, *, expires_delta: timedelta | None = None) -> str:
    """Return a signed token carrying the account id and role."""

    return create_access_token(
        {"sub": account.id, "role": account.role.value}, expires_delta=expires_delta
    )


def authenticate_credential(session: Session, token: str | None) -> Account:
    """Resolve the active account referenced by ``token``.

    The account is looked up in the store matching the role embedded in the
    token, never by probing every table.
    """

    if not token:
        raise AuthError("Authentication error: No token provided")
    try:
        claims = decode_access_token(token)
    except ValueError as exc:
        raise AuthError("Authentication error: Invalid token") from exc

    account_id = claims.get("sub")
    try:
        role = AccountRole(claims.get("role"))
    except ValueError as exc:
        raise AuthError("Authentication error: Invalid token") from exc
    if not isinstance(account_id, str) or not account_id:
        raise AuthError("Authentication error: Invalid token")

    directory = AccountDirectory(session)
    store = directory.store_for(role)
    account = store.find_by_id(account_id)
    if account is None or not store.is_active(account):
        logger.info("Rejected credential for %s %s", role.value, account_id)
        raise AuthError("Authentication error: Invalid user")
    return account


def authenticate_account(
    session: Session, *, role: AccountRole, email: str, password: str
) -> Account:
    """Check an email/password pair against the store of ``role``."""

    store = AccountDirectory(session).store_for(role)
    account = store.find_by_email(email.strip().lower())
    if account is None or not store.compare_password(account, password):
        raise AuthError("Invalid credentials")
    if not store.is_active(account):
        raise AuthError("Account is deactivated")
    return account
