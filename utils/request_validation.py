"""Utilities for validating incoming Flask requests."""

from __future__ import annotations

from typing import Iterable

from flask import Request

from services.errors import ValidationError


def parse_json_request(
    req: Request,
    *,
    required_keys: Iterable[str] | None = None,
    allow_empty: bool = False,
) -> dict:
    """Return the parsed JSON body or raise a ValidationError."""

    if not req.is_json:
        raise ValidationError("Request content type must be application/json.")

    data = req.get_json(silent=True)
    if data is None:
        raise ValidationError("Request JSON body is required.")

    if not isinstance(data, dict):
        raise ValidationError("Request JSON payload must be an object.")

    if not data and not allow_empty:
        raise ValidationError("Request JSON body must not be empty.")

    if required_keys:
        missing = [key for key in required_keys if not data.get(key)]
        if missing:
            raise ValidationError(
                "Missing required fields: {}.".format(", ".join(sorted(missing)))
            )

    return data


def parse_id_list(payload: dict | None, key: str = "ids") -> list[int]:
    """Return the integer ids listed under ``key`` (missing means empty)."""

    raw = (payload or {}).get(key)
    if raw is None:
        return []
    if not isinstance(raw, list):
        raise ValidationError(f"'{key}' must be a list of integers.")

    ids: list[int] = []
    for value in raw:
        # bool is an int subclass; reject it explicitly.
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValidationError(f"'{key}' must be a list of integers.")
        ids.append(value)
    return ids


def parse_query_ids(req: Request) -> list[int]:
    """Collect ids from the ``ids`` (comma separated) and ``id`` query arguments.

    Fragments of ``ids`` that are not integers are skipped; a non-integer
    ``id`` is rejected.
    """

    ids: list[int] = []

    single = req.args.get("id")
    if single is not None and single.strip():
        try:
            ids.append(int(single.strip()))
        except ValueError:
            raise ValidationError("'id' must be an integer.") from None

    for fragment in (req.args.get("ids") or "").split(","):
        fragment = fragment.strip()
        if not fragment:
            continue
        try:
            ids.append(int(fragment))
        except ValueError:
            continue
    return ids
