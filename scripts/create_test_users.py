"""Utility script to seed one account per role and print their tokens."""

from __future__ import annotations

import argparse

from sqlalchemy.exc import SQLAlchemyError

from app.application.use_cases.auth import issue_credential, register_account
from app.domain.entities import AccountRole
from app.domain.errors import ValidationError
from app.infrastructure.database import SessionLocal, initialize_database

DEFAULT_ACCOUNTS = (
    (AccountRole.STUDENT, "student@example.com", "Test Student"),
    (AccountRole.COMPANY, "company@example.com", "Test Company"),
    (AccountRole.ADMIN, "admin@example.com", "Administrator"),
)


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Create a student, a company and an admin for local chat testing.",
    )
    parser.add_argument(
        "--password",
        default="password123",
        help="Password shared by every seeded account (default: password123)",
    )
    return parser.parse_args()


def main() -> None:
    """Create the accounts that do not exist yet and print a token for each."""

    args = parse_args()
    initialize_database()

    session = SessionLocal()
    try:
        for role, email, name in DEFAULT_ACCOUNTS:
            try:
                account = register_account(
                    session, role=role, email=email, password=args.password, display_name=name
                )
            except ValidationError:
                print(f"{role.value}: {email} already exists, skipped")
                continue
            except SQLAlchemyError as exc:
                session.rollback()
                raise SystemExit(f"Could not store the {role.value} account: {exc}") from exc
            print(
                f"{role.value} created:\n"
                f"  ID: {account.id}\n"
                f"  Email: {account.email}\n"
                f"  Token: {issue_credential(account)}"
            )
    finally:
        session.close()


if __name__ == "__main__":
    main()
