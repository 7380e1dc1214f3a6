"""Use cases for the identity provider boundary."""

from .identity import authenticate_account, authenticate_credential, issue_credential
from .registration import register_account

__all__ = [
    "authenticate_account",
    "authenticate_credential",
    "issue_credential",
    "register_account",
]
