"""Signed identity cookie backed by Flask-JWT-Extended tokens."""

from __future__ import annotations

from datetime import timedelta

from flask import Flask, Response, current_app, g, request
from flask_jwt_extended import create_access_token, decode_token
from flask_jwt_extended.exceptions import JWTExtendedException
from jwt.exceptions import PyJWTError

from .abstract_provider import SessionProvider

_PENDING_ATTR = "identity_cookie_pending"


class CookieSessionProvider(SessionProvider):
    """Keep the account id in a JWT stored in a plain (non HTTP-only) cookie.

    Changes are queued on ``flask.g`` and written to the outgoing response
    by an ``after_request`` hook, so callers never handle the response.
    """

    def __init__(self, app: Flask | None = None):
        if app is not None:
            self.init_app(app)

    def init_app(self, app: Flask) -> None:
        app.after_request(self._apply_pending)

    @property
    def cookie_name(self) -> str:
        return current_app.config.get("IDENTITY_COOKIE_NAME", "uid")

    def bind(self, account_id: int, ttl: timedelta) -> None:
        token = create_access_token(identity=str(account_id), expires_delta=ttl)
        setattr(g, _PENDING_ATTR, ("set", token, ttl))

    def read(self) -> int | None:
        pending = g.get(_PENDING_ATTR)
        if pending is not None and pending[0] == "clear":
            return None

        raw = request.cookies.get(self.cookie_name)
        if not raw:
            return None
        try:
            claims = decode_token(raw)
        except (JWTExtendedException, PyJWTError):
            return None

        try:
            return int(claims.get("sub"))
        except (TypeError, ValueError):
            return None

    def invalidate(self) -> None:
        setattr(g, _PENDING_ATTR, ("clear",))

    def _apply_pending(self, response: Response) -> Response:
        pending = g.get(_PENDING_ATTR)
        if pending is None:
            return response

        secure = bool(current_app.config.get("IDENTITY_COOKIE_SECURE", False))
        if pending[0] == "set":
            _, token, ttl = pending
            response.set_cookie(
                self.cookie_name,
                token,
                max_age=int(ttl.total_seconds()),
                httponly=False,
                samesite="Lax",
                secure=secure,
            )
        else:
            response.delete_cookie(
                self.cookie_name, httponly=False, samesite="Lax", secure=secure
            )
        return response
