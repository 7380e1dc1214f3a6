"""Identifier helpers shared by persisted entities."""

from uuid import uuid4


def new_identifier() -> str:
    """Return a new opaque identifier suitable for primary keys."""

    return uuid4().hex
