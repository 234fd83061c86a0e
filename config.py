"""Application configuration module."""

import os
from datetime import timedelta


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in {"1", "true", "yes", "on"}


class Config:
    """Base configuration for the Flask application."""

    # Core
    SECRET_KEY = os.getenv("SECRET_KEY", "change-me")
    JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", SECRET_KEY)
    DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///app.db")
    SQLALCHEMY_DATABASE_URI = DATABASE_URL
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # CORS
    _raw_origins = os.getenv("ORIGINS", "*")
    if _raw_origins.strip() == "*":
        CORS_ORIGINS = "*"
    else:
        CORS_ORIGINS = [o.strip() for o in _raw_origins.split(",") if o.strip()]

    # Identity cookie
    IDENTITY_COOKIE_NAME = os.getenv("IDENTITY_COOKIE_NAME", "uid")
    IDENTITY_COOKIE_SECURE = _env_flag("IDENTITY_COOKIE_SECURE")
    SESSION_TTL = timedelta(hours=int(os.getenv("SESSION_TTL_HOURS", "24")))

    # Pages served by the static front end
    LOGIN_PAGE_URL = os.getenv("LOGIN_PAGE_URL", "/login.html")
    VERIFY_PAGE_PATH = os.getenv("VERIFY_PAGE_PATH", "/verify.html")
