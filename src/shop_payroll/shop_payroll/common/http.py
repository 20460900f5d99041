from __future__ import annotations

import logging
from datetime import date, timedelta
from functools import wraps
from typing import Any

from flask import Flask, g, jsonify, request, session

from ..core.constants import DEFAULT_REPORT_DAYS
from ..core.exceptions import (
    AuthenticationError,
    ConflictError,
    DomainError,
    DuplicateDateError,
    MissingRuleError,
    NotFoundError,
    StorageUnavailable,
    ValidationError,
)
from ..identity.model import Denied, Principal
from .datetime_utils import parse_iso_date

logger = logging.getLogger(__name__)

ERROR_STATUS = (
    (ValidationError, 400, "validation-error"),
    (AuthenticationError, 401, "authentication-error"),
    (NotFoundError, 404, "not-found"),
    (DuplicateDateError, 409, "duplicate-date"),
    (ConflictError, 409, "conflict"),
    (MissingRuleError, 500, "missing-rule"),
    (StorageUnavailable, 503, "storage-unavailable"),
)

SESSION_KEY = "principal"


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        data = session.get(SESSION_KEY)
        if not data:
            return jsonify({"error": "authentication-required"}), 401
        g.principal = Principal.from_session(data)
        return view(*args, **kwargs)

    return wrapper


def current_principal() -> Principal:
    return g.principal


def json_body() -> dict:
    body = request.get_json(silent=True)
    if not isinstance(body, dict):
        raise ValidationError("Request body must be a JSON object")
    return body


def date_range_args() -> tuple[date, date]:
    today = date.today()
    start_s = request.args.get("start")
    end_s = request.args.get("end")
    end = parse_iso_date(end_s) if end_s else today
    start = parse_iso_date(start_s) if start_s else end - timedelta(days=DEFAULT_REPORT_DAYS)
    return start, end


def gate_response(result: Any, *, status: int = 200):
    """Serialize an access-gate result; Denied becomes 403."""
    if isinstance(result, Denied):
        return jsonify({"error": "denied", "reason": result.reason.value}), 403
    if result is None:
        return "", 204
    if isinstance(result, (list, tuple)):
        return jsonify([item.as_dict() for item in result]), status
    return jsonify(result.as_dict()), status


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(exc: DomainError):
        for exc_type, status, code in ERROR_STATUS:
            if isinstance(exc, exc_type):
                if status >= 500:
                    logger.error("%s: %s", code, exc)
                return jsonify({"error": code, "message": str(exc)}), status
        logger.error("Unmapped domain error: %s", exc, exc_info=True)
        return jsonify({"error": "domain-error", "message": str(exc)}), 500
