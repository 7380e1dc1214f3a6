"""Endpoint issuing bearer credentials for every account role."""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.application.use_cases.auth import authenticate_account, issue_credential
from app.domain.errors import AuthError
from app.infrastructure.database import get_db
from app.interfaces.api.routes_helpers import http_error_from
from app.interfaces.api.schemas import LoginRequest, Token

router = APIRouter(prefix="/auth", tags=["auth"])
logger = logging.getLogger(__name__)


@router.post("/token", response_model=Token)
def login_for_access_token(payload: LoginRequest, db: Session = Depends(get_db)) -> Token:
    """Check the credentials against the store of the requested role."""

    try:
        account = authenticate_account(
            db, role=payload.role, email=payload.email, password=payload.password
        )
    except AuthError as exc:
        logger.info("Failed %s login for %s", payload.role.value, payload.email)
        raise http_error_from(exc) from exc

    return Token(
        access_token=issue_credential(account),
        token_type="bearer",
        role=account.role.value,
        user_id=account.id,
    )
