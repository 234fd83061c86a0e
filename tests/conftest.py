"""Shared pytest fixtures for the application tests."""

from __future__ import annotations

import sys
from datetime import UTC, datetime, timedelta
from pathlib import Path

import pytest
from flask import Flask
from flask.testing import FlaskClient

ROOT_DIR = Path(__file__).resolve().parent.parent
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from app import create_app  # noqa: E402
from config import Config  # noqa: E402
from identity import SessionProvider  # noqa: E402
from models import db  # noqa: E402
from repository import SQLAlchemyAccountRepository  # noqa: E402
from services import AccountService  # noqa: E402

FIXED_NOW = datetime(2024, 5, 1, 12, 0, tzinfo=UTC)


class TestConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SECRET_KEY = "test-secret"
    JWT_SECRET_KEY = "test-jwt-secret-with-enough-length-for-hs256"


class FakeSessions(SessionProvider):
    """In-memory session provider recording what the service asked for."""

    def __init__(self):
        self.current: int | None = None
        self.bindings: list[tuple[int, timedelta]] = []
        self.invalidated = False

    def bind(self, account_id, ttl):
        self.current = account_id
        self.bindings.append((account_id, ttl))

    def read(self):
        return self.current

    def invalidate(self):
        self.current = None
        self.invalidated = True


@pytest.fixture()
def app() -> Flask:
    """Create a Flask application instance for tests."""

    application = create_app(TestConfig)

    with application.app_context():
        db.create_all()

    yield application

    with application.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(app: Flask) -> FlaskClient:
    """Return a test client for the Flask app."""

    return app.test_client()


@pytest.fixture()
def fake_sessions() -> FakeSessions:
    return FakeSessions()


@pytest.fixture()
def service(app: Flask, fake_sessions: FakeSessions) -> AccountService:
    """An account service over the test database, used inside an app context."""

    with app.app_context():
        yield AccountService(
            SQLAlchemyAccountRepository(db),
            fake_sessions,
            clock=lambda: FIXED_NOW,
        )
