"""Account lifecycle rules: registration, verification, login and bulk admin actions."""

from __future__ import annotations

import logging
import secrets
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Callable, Iterable

from flask import current_app

from identity.abstract_provider import SessionProvider
from models.user import (
    EMAIL_MAX_LENGTH,
    NAME_MAX_LENGTH,
    PASSWORD_MAX_LENGTH,
    STATUS_BLOCKED,
    STATUS_UNVERIFIED,
    User,
)
from repository.abstract_repository import AccountRepository

from .errors import AuthError, ConflictError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)

DEFAULT_SESSION_TTL = timedelta(days=1)
INVALID_CREDENTIALS = "Invalid email or password."


def _text(value: object) -> str:
    return value.strip() if isinstance(value, str) else ""


def normalize_email(raw_email: object) -> str:
    """Normalize an email string by stripping whitespace and lowering case."""
    return _text(raw_email).lower()


def generate_verification_token() -> str:
    """Return a 128-bit random token, hex encoded."""
    return secrets.token_hex(16)


def _require_ids(account_ids: Iterable[int] | None, message: str) -> list[int]:
    unique = list(dict.fromkeys(account_ids or ()))
    if not unique:
        raise ValidationError(message)
    return unique


@dataclass(frozen=True)
class Registration:
    account: User
    verification_token: str


class AccountService:
    """Apply account state transitions against a repository and session provider."""

    def __init__(
        self,
        repository: AccountRepository,
        sessions: SessionProvider,
        *,
        session_ttl: timedelta = DEFAULT_SESSION_TTL,
        clock: Callable[[], datetime] | None = None,
    ):
        self.repository = repository
        self.sessions = sessions
        self.session_ttl = session_ttl
        self._clock = clock or (lambda: datetime.now(UTC))

    def register(self, name: str | None, email: str | None, password: str | None) -> Registration:
        """Create an unverified account and return it with its verification token."""

        if not _text(name) or not _text(email) or not _text(password):
            raise ValidationError("Name, email and password are required.")

        normalized = normalize_email(email)
        for label, value, limit in (
            ("Name", name.strip(), NAME_MAX_LENGTH),
            ("Email", normalized, EMAIL_MAX_LENGTH),
            ("Password", password, PASSWORD_MAX_LENGTH),
        ):
            if len(value) > limit:
                raise ValidationError(f"{label} must be at most {limit} characters.")

        if self.repository.exists_by_email(normalized):
            raise ConflictError("Email already registered.")

        token = generate_verification_token()
        account = User(
            name=name.strip(),
            email=normalized,
            password=password,
            status=STATUS_UNVERIFIED,
            created_at=self._clock(),
            verification_token=token,
        )
        # A concurrent registration that slipped past the check above is
        # rejected by the unique index and surfaces as ConflictError here.
        self.repository.insert(account)
        logger.info("Registered account %s", account.id)
        return Registration(account=account, verification_token=token)

    def verify(self, token: str | None) -> User:
        """Consume a verification token and activate its account."""

        if not _text(token):
            raise ValidationError("Missing token.")

        account = self.repository.find_by_token(token)
        if account is None:
            raise NotFoundError("Invalid token.")

        # Applied regardless of the current status, blocked included.
        account.mark_verified()
        self.repository.update_many([account])
        logger.info("Verified account %s", account.id)
        return account

    def login(self, email: str | None, password: str | None) -> User:
        """Check credentials, stamp the login time and bind the session."""

        if not _text(email) or not _text(password):
            raise ValidationError("Email and password are required.")

        account = self.repository.find_by_email(normalize_email(email))
        if account is None or account.password != password:
            raise AuthError(INVALID_CREDENTIALS)
        if account.is_blocked:
            raise AuthError("Account is blocked.")

        account.last_login = self._clock()
        self.repository.update_many([account])
        self.sessions.bind(account.id, self.session_ttl)
        logger.info("Account %s logged in", account.id)
        return account

    def list_accounts(self) -> list[User]:
        return self.repository.list_ordered()

    def block(self, account_ids: Iterable[int] | None) -> bool:
        """Block the given accounts; return True when the caller blocked itself."""

        ids = _require_ids(account_ids, "No user ids provided.")
        accounts = self.repository.find_many_by_ids(ids)
        current_id = self.sessions.read()

        blocked_self = False
        for account in accounts:
            account.status = STATUS_BLOCKED
            if current_id is not None and account.id == current_id:
                blocked_self = True
        self.repository.update_many(accounts)

        if blocked_self:
            self.sessions.invalidate()
        logger.info("Blocked accounts %s", [account.id for account in accounts])
        return blocked_self

    def unblock(self, account_ids: Iterable[int] | None) -> list[User]:
        """Unblock accounts, returning those still awaiting verification to unverified."""

        ids = _require_ids(account_ids, "No user ids provided.")
        accounts = self.repository.find_many_by_ids(ids)
        for account in accounts:
            account.mark_unblocked()
        self.repository.update_many(accounts)
        logger.info("Unblocked accounts %s", [account.id for account in accounts])
        return accounts

    def delete_unverified(self, account_ids: Iterable[int] | None) -> list[int]:
        """Delete only the selected accounts whose status is unverified."""

        ids = _require_ids(account_ids, "Select at least one user.")
        candidates = [
            account
            for account in self.repository.find_many_by_ids(ids)
            if account.status == STATUS_UNVERIFIED
        ]
        deleted = self.repository.delete_many(candidates)
        if deleted:
            logger.info("Deleted unverified accounts %s", deleted)
        return deleted

    def delete(self, account_ids: Iterable[int] | None) -> list[int]:
        """Delete the selected accounts whatever their status."""

        ids = _require_ids(account_ids, "No user ids provided.")
        deleted = self.repository.delete_many(self.repository.find_many_by_ids(ids))
        logger.info("Deleted accounts %s", deleted)
        return deleted


def get_account_service() -> AccountService:
    """Return the service wired into the current application."""

    return current_app.extensions["accounts"]
