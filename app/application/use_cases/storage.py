"""Translate database failures into :class:`StorageError`."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.domain.errors import StorageError

logger = logging.getLogger(__name__)


@contextmanager
def storage_guard(session: Session, message: str) -> Iterator[None]:
    """Roll back ``session`` and raise ``StorageError(message)`` on database errors."""

    try:
        yield
    except SQLAlchemyError as exc:
        session.rollback()
        logger.exception(message)
        raise StorageError(message) from exc
