"""Tests for the SQLAlchemy account repository."""

from __future__ import annotations

import pytest
from sqlalchemy.exc import OperationalError

from models import db
from models.user import User
from repository import SQLAlchemyAccountRepository
from services import ConflictError, InfrastructureError


@pytest.fixture()
def repository(app):
    with app.app_context():
        yield SQLAlchemyAccountRepository(db)


def _account(email: str, **fields) -> User:
    return User(name=email.split("@")[0], email=email, password="pw", **fields)


def test_lookups(repository):
    ann = repository.insert(_account("ann@ex.com", verification_token="tok-ann"))
    bob = repository.insert(_account("bob@ex.com"))

    assert repository.find_by_id(ann.id) is ann
    assert repository.find_by_email("bob@ex.com") is bob
    assert repository.find_by_email("BOB@ex.com") is None
    assert repository.find_by_token("tok-ann") is ann
    assert repository.find_by_token("tok-bob") is None
    assert repository.exists_by_email("ann@ex.com") is True
    assert repository.exists_by_email("cy@ex.com") is False
    assert [a.id for a in repository.find_many_by_ids({bob.id, ann.id, 999})] == [ann.id, bob.id]
    assert repository.find_many_by_ids([]) == []


def test_insert_duplicate_email_raises_conflict(repository):
    repository.insert(_account("ann@ex.com"))

    with pytest.raises(ConflictError):
        repository.insert(_account("ann@ex.com"))

    assert len(repository.list_ordered()) == 1


def test_delete_many_returns_ids(repository):
    ann = repository.insert(_account("ann@ex.com"))
    bob = repository.insert(_account("bob@ex.com"))

    assert repository.delete_many([ann, bob]) == [ann.id, bob.id]
    assert repository.delete_many([]) == []
    assert repository.list_ordered() == []


def test_store_failures_become_infrastructure_errors(repository, monkeypatch):
    ann = repository.insert(_account("ann@ex.com"))

    def _fail():
        raise OperationalError("COMMIT", {}, Exception("db-host unreachable"))

    monkeypatch.setattr(db.session, "commit", _fail)
    ann.status = "blocked"

    with pytest.raises(InfrastructureError) as excinfo:
        repository.update_many([ann])

    assert isinstance(excinfo.value.__cause__, OperationalError)
    monkeypatch.undo()
    assert repository.find_by_id(ann.id).status == "unverified"
