"""Application factory."""

import json
import os
import uuid

from flask import Flask, jsonify, g, redirect, request
from flask_cors import CORS
from flask_jwt_extended import JWTManager
from flask_migrate import Migrate
from sqlalchemy.engine import make_url
from sqlalchemy.exc import ArgumentError
from werkzeug.exceptions import HTTPException

from config import Config
from identity import CookieSessionProvider
from models import db
from repository import SQLAlchemyAccountRepository
from routes.user import user_bp
from services import AccountError, AccountService, InfrastructureError

migrate = Migrate()
jwt = JWTManager()


def create_app(config_class: type[Config] = Config) -> Flask:
    """Create and configure the Flask application."""
    app = Flask(__name__)
    app.config.from_object(config_class)

    # Core subsystems
    db.init_app(app)
    migrate.init_app(app, db)
    jwt.init_app(app)
    app.logger.info("Using database %s", _masked_database_url(app))

    # CORS
    CORS(
        app,
        resources={r"/*": {"origins": app.config.get("CORS_ORIGINS", "*")}},
        supports_credentials=True,
    )

    # Account lifecycle
    sessions = CookieSessionProvider(app)
    app.extensions["accounts"] = AccountService(
        SQLAlchemyAccountRepository(db),
        sessions,
        session_ttl=app.config["SESSION_TTL"],
    )

    # Blueprints
    app.register_blueprint(user_bp, url_prefix="/api/user")

    @app.route("/", methods=["GET"])
    def index():
        return redirect(app.config.get("LOGIN_PAGE_URL", "/login.html"))

    # Health
    @app.route("/health", methods=["GET"])
    def health_check():
        return jsonify({"status": "ok"})

    @app.route("/api/diag/db", methods=["GET"])
    def database_check():
        app.extensions["accounts"].repository.ping()
        return jsonify("DB OK")

    # Errors
    _register_error_handlers(app)

    return app


def _masked_database_url(app: Flask) -> str:
    raw = app.config.get("SQLALCHEMY_DATABASE_URI") or ""
    try:
        return make_url(raw).render_as_string(hide_password=True)
    except ArgumentError:
        return "<unparseable database url>"


def _error_response(status_code: int, title: str, detail: str):
    request_id = g.get("request_id") or str(uuid.uuid4())
    response = jsonify({"error": title, "detail": detail, "request_id": request_id})
    response.status_code = status_code
    response.headers.setdefault("X-Request-ID", request_id)
    return response


def _register_error_handlers(app: Flask) -> None:
    """Register JSON error handlers with request IDs."""

    @app.before_request
    def _assign_request_id():
        g.request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())

    @app.after_request
    def _add_request_id_header(response):
        request_id = g.get("request_id")
        if request_id:
            response.headers.setdefault("X-Request-ID", request_id)
        return response

    @app.errorhandler(AccountError)
    def _handle_account_error(error: AccountError):
        if isinstance(error, InfrastructureError):
            app.logger.error("Account store failure: %s", error.message, exc_info=error)
            return _error_response(
                500, "Internal Server Error", "An unexpected error occurred."
            )
        return _error_response(int(error.status_code), error.title, error.message)

    @app.errorhandler(HTTPException)
    def _handle_http_exception(error: HTTPException):
        request_id = g.get("request_id") or str(uuid.uuid4())
        response = error.get_response()
        payload = {
            "error": getattr(error, "name", "Error"),
            "detail": error.description,
            "request_id": request_id,
        }
        response.data = json.dumps(payload)
        response.content_type = "application/json"
        response.headers.setdefault("X-Request-ID", request_id)
        return response

    @app.errorhandler(Exception)
    def _handle_unexpected(error: Exception):  # pragma: no cover
        app.logger.exception("Unhandled application error", exc_info=error)
        return _error_response(500, "Internal Server Error", "An unexpected error occurred.")


if __name__ == "__main__":
    application = create_app()
    application.run(host="0.0.0.0", port=int(os.environ.get("PORT", 5000)))
