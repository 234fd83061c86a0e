"""Tests for the privileged-endpoint access guard."""

from __future__ import annotations

import pytest

from services import AccessGuard, AuthError


@pytest.fixture()
def guard(service, fake_sessions) -> AccessGuard:
    return AccessGuard(service.repository, fake_sessions)


def test_guard_rejects_missing_session(guard):
    with pytest.raises(AuthError):
        guard.check()


def test_guard_rejects_unknown_account(guard, fake_sessions):
    fake_sessions.current = 12345

    with pytest.raises(AuthError):
        guard.check()


def test_guard_admits_unverified_account(guard, service, fake_sessions):
    account_id = service.register("Ann", "ann@ex.com", "pw1").account.id
    fake_sessions.current = account_id

    assert guard.check().id == account_id


def test_guard_rejects_blocked_account_on_next_check(guard, service, fake_sessions):
    ann = service.register("Ann", "ann@ex.com", "pw1").account.id
    bob = service.register("Bob", "bob@ex.com", "pw2").account.id
    fake_sessions.current = bob
    assert guard.check().id == bob

    # Another admin blocks Bob; Bob's stale session must stop working.
    fake_sessions.current = ann
    service.block([bob])
    fake_sessions.current = bob

    with pytest.raises(AuthError):
        guard.check()
