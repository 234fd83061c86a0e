"""Tests covering CORS, request ids and the JSON error shape."""

from __future__ import annotations

import sys
from pathlib import Path

from flask import Flask

ROOT_DIR = Path(__file__).resolve().parent.parent
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from app import create_app
from config import Config
from models import db
from services import InfrastructureError


class _SecurityBaseConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    JWT_SECRET_KEY = "security-test-secret-with-enough-length"


def _build_app(**overrides) -> Flask:
    class TestConfig(_SecurityBaseConfig):
        pass

    for key, value in overrides.items():
        setattr(TestConfig, key, value)

    return create_app(TestConfig)


def test_cors_allows_configured_origin():
    app = _build_app(CORS_ORIGINS=["https://client.example"])
    client = app.test_client()

    response = client.get("/health", headers={"Origin": "https://client.example"})

    assert response.status_code == 200
    assert response.headers.get("Access-Control-Allow-Origin") == "https://client.example"
    assert response.headers.get("Access-Control-Allow-Credentials") == "true"
    assert response.headers.get("X-Request-ID")


def test_request_id_is_echoed():
    client = _build_app().test_client()

    response = client.get("/health", headers={"X-Request-ID": "req-123"})

    assert response.headers["X-Request-ID"] == "req-123"


def test_json_error_shape_for_invalid_request():
    client = _build_app().test_client()

    response = client.post(
        "/api/user/register",
        data="not-json",
        content_type="text/plain",
    )

    assert response.status_code == 400
    payload = response.get_json()
    assert payload["error"] == "Bad Request"
    assert "content type" in payload["detail"]
    assert payload["request_id"]


def test_unknown_route_uses_json_error_shape():
    client = _build_app().test_client()

    response = client.get("/api/user/nope")

    assert response.status_code == 404
    assert response.get_json()["error"] == "Not Found"


def test_store_failure_is_reported_generically(monkeypatch):
    app = _build_app()
    client = app.test_client()
    with app.app_context():
        db.create_all()

    def _broken(email):
        raise InfrastructureError("password=hunter2 host=db.internal")

    monkeypatch.setattr(app.extensions["accounts"].repository, "exists_by_email", _broken)

    response = client.post(
        "/api/user/register",
        json={"name": "Ann", "email": "ann@ex.com", "password": "pw"},
    )

    assert response.status_code == 500
    body = response.get_data(as_text=True)
    assert "hunter2" not in body
    assert "db.internal" not in body
