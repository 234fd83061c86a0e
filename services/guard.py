"""Access guard for privileged account endpoints."""

from __future__ import annotations

from functools import wraps

from flask import g

from identity.abstract_provider import SessionProvider
from models.user import User
from repository.abstract_repository import AccountRepository

from .accounts import get_account_service
from .errors import AuthError


class AccessGuard:
    """Admit only callers bound to an existing, non-blocked account.

    The check runs on every privileged request; nothing is cached between
    requests, so a block takes effect on the blocked account's next call.
    """

    def __init__(self, repository: AccountRepository, sessions: SessionProvider):
        self.repository = repository
        self.sessions = sessions

    def check(self) -> User:
        account_id = self.sessions.read()
        if account_id is None:
            raise AuthError("Authentication required.")

        account = self.repository.find_by_id(account_id)
        if account is None or account.is_blocked:
            raise AuthError("Authentication required.")
        return account


def require_account(view):
    """Run the application's access guard before ``view``."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        service = get_account_service()
        g.current_account = AccessGuard(service.repository, service.sessions).check()
        return view(*args, **kwargs)

    return wrapper
