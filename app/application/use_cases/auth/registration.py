"""Use case for creating accounts of any role."""

from sqlalchemy.orm import Session

from app.domain.entities import Account, AccountRole
from app.domain.errors import ValidationError
from app.infrastructure.repositories import AccountDirectory
from app.infrastructure.security import get_password_hash


def register_account(
    session: Session,
    *,
    role: AccountRole,
    email: str,
    password: str,
    display_name: str,
) -> Account:
    """Create an account ensuring the email is unique within its role."""

    email = email.strip().lower()
    if not email or not password or not display_name.strip():
        raise ValidationError("Email, password and name are required")

    store = AccountDirectory(session).store_for(role)
    if store.find_by_email(email):
        raise ValidationError("Email is already registered")

    return store.create(
        email=email,
        password_hash=get_password_hash(password),
        display_name=display_name,
    )
