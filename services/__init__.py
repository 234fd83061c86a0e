"""Account lifecycle services."""

from .accounts import AccountService, Registration, get_account_service, normalize_email
from .errors import (
    AccountError,
    AuthError,
    ConflictError,
    InfrastructureError,
    NotFoundError,
    ValidationError,
)
from .guard import AccessGuard, require_account

__all__ = [
    "AccessGuard",
    "AccountError",
    "AccountService",
    "AuthError",
    "ConflictError",
    "InfrastructureError",
    "NotFoundError",
    "Registration",
    "ValidationError",
    "get_account_service",
    "normalize_email",
    "require_account",
]
