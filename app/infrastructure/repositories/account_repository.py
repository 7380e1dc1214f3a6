"""Persistence layer for the role-specific account tables."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Any, ClassVar

from sqlalchemy.orm import Session

from app.domain.entities import Account, AccountRole
from app.infrastructure.models import AdminModel, CompanyModel, StudentModel
from app.infrastructure.security import verify_password


class AccountStore:
    """Read access to one account table, exposed as :class:`Account` entities.

    Subclasses declare the ORM model and how its columns map onto the shared
    entity; callers only ever see ``find_by_id``/``is_active``/``compare_password``.
    """

    role: ClassVar[AccountRole]
    model: ClassVar[Any]

    def __init__(self, session: Session) -> None:
        self.session = session

    def find_by_id(self, account_id: str) -> Account | None:
        model = self.session.get(self.model, account_id)
        return self._to_entity(model) if model else None

    def find_by_email(self, email: str) -> Account | None:
        model = self.session.query(self.model).filter_by(email=email).first()
        return self._to_entity(model) if model else None

    def find_many(self, account_ids: Iterable[str]) -> list[Account]:
        ids = list(account_ids)
        if not ids:
            return []
        query = self.session.query(self.model).filter(self.model.id.in_(ids))
        return [self._to_entity(model) for model in query.all()]

    def create(self, *, email: str, password_hash: str, display_name: str) -> Account:
        model = self.model(
            email=email, password=password_hash, **self._name_columns(display_name)
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def list_active_ids(self) -> list[str]:
        query = self.session.query(self.model.id).filter(self.model.is_active.is_(True))
        return [account_id for (account_id,) in query.all()]

    @staticmethod
    def is_active(account: Account) -> bool:
        return account.is_active

    @staticmethod
    def compare_password(account: Account, password: str) -> bool:
        return verify_password(password, account.password_hash)

    def _to_entity(self, model: Any) -> Account:
        return Account(
            id=model.id,
            role=self.role,
            email=model.email,
            display_name=self._display_name(model),
            password_hash=model.password,
            is_active=model.is_active,
            avatar_url=self._avatar_url(model),
        )

    def _display_name(self, model: Any) -> str:
        raise NotImplementedError

    def _name_columns(self, display_name: str) -> dict[str, str]:
        raise NotImplementedError

    def _avatar_url(self, model: Any) -> str | None:
        return None


class StudentAccountStore(AccountStore):
    role = AccountRole.STUDENT
    model = StudentModel

    def _display_name(self, model: StudentModel) -> str:
        return f"{model.first_name} {model.last_name}".strip()

    def _name_columns(self, display_name: str) -> dict[str, str]:
        first_name, _, last_name = display_name.strip().partition(" ")
        return {"first_name": first_name, "last_name": last_name.strip()}

    def _avatar_url(self, model: StudentModel) -> str | None:
        return model.profile_pic_url


class CompanyAccountStore(AccountStore):
    role = AccountRole.COMPANY
    model = CompanyModel

    def _display_name(self, model: CompanyModel) -> str:
        return model.company_name

    def _name_columns(self, display_name: str) -> dict[str, str]:
        return {"company_name": display_name.strip()}

    def _avatar_url(self, model: CompanyModel) -> str | None:
        return model.logo_url


class AdminAccountStore(AccountStore):
    role = AccountRole.ADMIN
    model = AdminModel

    def _display_name(self, model: AdminModel) -> str:
        return model.name

    def _name_columns(self, display_name: str) -> dict[str, str]:
        return {"name": display_name.strip()}


STORE_TYPES: tuple[type[AccountStore], ...] = (
    StudentAccountStore,
    CompanyAccountStore,
    AdminAccountStore,
)


class AccountDirectory:
    """Resolve accounts across every role-specific store."""

    def __init__(self, session: Session) -> None:
        self._stores: dict[AccountRole, AccountStore] = {
            store_type.role: store_type(session) for store_type in STORE_TYPES
        }

    def store_for(self, role: AccountRole) -> AccountStore:
        return self._stores[role]

    def find(self, role: AccountRole, account_id: str) -> Account | None:
        return self.store_for(role).find_by_id(account_id)

    def find_any(self, account_id: str) -> Account | None:
        """Return the account with ``account_id`` whatever its role."""

        for store in self._stores.values():
            account = store.find_by_id(account_id)
            if account is not None:
                return account
        return None

    def find_many(self, account_ids: Iterable[str]) -> dict[str, Account]:
        remaining = set(account_ids)
        found: dict[str, Account] = {}
        for store in self._stores.values():
            if not remaining:
                break
            for account in store.find_many(remaining):
                found[account.id] = account
            remaining -= found.keys()
        return found

    def list_active_ids(self, roles: Sequence[AccountRole] | None = None) -> list[str]:
        selected = roles or list(self._stores)
        ids: list[str] = []
        for role in selected:
            ids.extend(self.store_for(role).list_active_ids())
        return ids


__all__ = [
    "AccountDirectory",
    "AccountStore",
    "AdminAccountStore",
    "CompanyAccountStore",
    "StudentAccountStore",
]
