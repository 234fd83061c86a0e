"""Errors raised by the account lifecycle operations."""

from __future__ import annotations

from http import HTTPStatus


class AccountError(Exception):
    """Base class for failures surfaced to API callers."""

    status_code = HTTPStatus.BAD_REQUEST
    title = "Bad Request"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(AccountError):
    """Malformed or missing input."""


class ConflictError(AccountError):
    """An account with the same email already exists."""

    status_code = HTTPStatus.CONFLICT
    title = "Conflict"


class AuthError(AccountError):
    """Bad credentials, a blocked account, or no authenticated identity."""

    status_code = HTTPStatus.UNAUTHORIZED
    title = "Unauthorized"


class NotFoundError(AccountError):
    status_code = HTTPStatus.NOT_FOUND
    title = "Not Found"


class InfrastructureError(AccountError):
    """The backing store failed; the message is never shown to callers."""

    status_code = HTTPStatus.INTERNAL_SERVER_ERROR
    title = "Internal Server Error"
