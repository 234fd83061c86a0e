"""User blueprint: registration, verification, login and account administration."""

from __future__ import annotations

from http import HTTPStatus
from urllib.parse import urlencode

from flask import Blueprint, current_app, jsonify, redirect, request

from services import get_account_service, require_account
from utils.request_validation import parse_id_list, parse_json_request, parse_query_ids

user_bp = Blueprint("user", __name__)

# Non-standard "login time-out" status used to tell the client it was logged out.
SELF_BLOCKED_STATUS = 440


def _verify_url(token: str) -> str:
    path = current_app.config.get("VERIFY_PAGE_PATH", "/verify.html")
    return f"{request.host_url.rstrip('/')}{path}?{urlencode({'token': token})}"


def _ids_from_body() -> list[int]:
    return parse_id_list(parse_json_request(request, allow_empty=True))


@user_bp.route("/register", methods=["POST"])
def register() -> tuple:
    """Register an unverified account and hand back its verification link."""
    payload = parse_json_request(request)
    registration = get_account_service().register(
        payload.get("name"), payload.get("email"), payload.get("password")
    )
    token = registration.verification_token
    return (
        jsonify(
            {
                "message": "Registered successfully. Please verify your email.",
                "verificationToken": token,
                "verifyUrl": _verify_url(token),
            }
        ),
        HTTPStatus.OK,
    )


@user_bp.route("/verify", methods=["GET"])
def verify():
    """Consume a verification token and send the user to the login page."""
    get_account_service().verify(request.args.get("token"))
    return redirect(current_app.config.get("LOGIN_PAGE_URL", "/login.html"))


@user_bp.route("/login", methods=["POST"])
def login() -> tuple:
    """Authenticate and set the identity cookie."""
    payload = parse_json_request(request)
    account = get_account_service().login(payload.get("email"), payload.get("password"))
    return (
        jsonify({"message": "Login successful", "status": account.status, "id": account.id}),
        HTTPStatus.OK,
    )


@user_bp.route("/all", methods=["GET"])
@require_account
def list_users():
    accounts = get_account_service().list_accounts()
    return jsonify([account.to_dict() for account in accounts])


@user_bp.route("/block", methods=["POST"])
@require_account
def block() -> tuple:
    blocked_self = get_account_service().block(_ids_from_body())
    if blocked_self:
        return (
            jsonify({"message": "You blocked your own account. Logging out..."}),
            SELF_BLOCKED_STATUS,
        )
    return jsonify({"message": "Selected users blocked."}), HTTPStatus.OK


@user_bp.route("/unblock", methods=["POST"])
@require_account
def unblock() -> tuple:
    get_account_service().unblock(_ids_from_body())
    return (
        jsonify({"message": "Selected users unblocked (verification preserved)."}),
        HTTPStatus.OK,
    )


@user_bp.route("/delete-unverified", methods=["POST"])
@require_account
def delete_unverified():
    deleted = get_account_service().delete_unverified(_ids_from_body())
    if not deleted:
        return "", HTTPStatus.NO_CONTENT
    return jsonify({"deleted": deleted}), HTTPStatus.OK


@user_bp.route("/delete", methods=["POST"])
@require_account
def delete() -> tuple:
    """Delete accounts named in the body, the ``ids`` query list or ``id``."""
    body_ids: list[int] = []
    if request.is_json:
        body_ids = parse_id_list(parse_json_request(request, allow_empty=True))

    deleted = get_account_service().delete(body_ids + parse_query_ids(request))
    return (
        jsonify({"message": f"Deleted {len(deleted)} user(s).", "deletedIds": deleted}),
        HTTPStatus.OK,
    )
