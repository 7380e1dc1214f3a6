"""Pydantic models for the credential endpoint."""

from pydantic import BaseModel

from app.domain.entities import AccountRole


class LoginRequest(BaseModel):
    email: str
    password: str
    role: AccountRole


class Token(BaseModel):
    access_token: str
    token_type: str
    role: str
    user_id: str
