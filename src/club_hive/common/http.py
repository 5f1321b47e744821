from __future__ import annotations

import logging
from functools import wraps
from typing import Any, Optional

from flask import Flask, current_app, jsonify, request, session
from werkzeug.exceptions import HTTPException

from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    DomainError,
    NotFoundError,
    ValidationError,
)
from ..core.identity import Identity
from .serialization import to_jsonable
from .validators import require_int

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR = (
    (ValidationError, 400),
    (AuthenticationError, 401),
    (AuthorizationError, 403),
    (NotFoundError, 404),
)


def current_identity() -> Identity:
    """Identity of the logged-in caller, with the site role read fresh from ``users``."""
    if "user_id" not in session:
        raise AuthenticationError("Please log in to continue")
    user = current_app.extensions["club_hive"].users_repo.get_by_id(int(session["user_id"]))
    if not user:
        session.clear()
        raise AuthenticationError("Please log in to continue")
    return Identity(user_id=user.user_id, role=user.role)


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        current_identity()
        return view(*args, **kwargs)

    return wrapper


def admin_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if not current_identity().is_admin:
            raise AuthorizationError("Admin access required")
        return view(*args, **kwargs)

    return wrapper


def json_body() -> dict:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def query_int(name: str, default: Optional[int] = None) -> Optional[int]:
    raw = request.args.get(name)
    if raw is None or raw == "":
        return default
    return require_int(raw, name)


def query_bool(name: str) -> bool:
    return (request.args.get(name) or "").lower() in ("1", "true", "yes")


def ok(data: Any = None, *, status: int = 200, message: Optional[str] = None):
    payload: dict = {"success": True}
    if message:
        payload["message"] = message
    if data is not None:
        payload["data"] = to_jsonable(data)
    return jsonify(payload), status


def error(message: str, status: int):
    return jsonify({"success": False, "message": message}), status


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(e: DomainError):
        for cls, status in _STATUS_BY_ERROR:
            if isinstance(e, cls):
                return error(str(e), status)
        return error(str(e), 400)

    @app.errorhandler(HTTPException)
    def handle_http_error(e: HTTPException):
        return error(e.description or e.name, e.code or 500)

    @app.errorhandler(Exception)
    def handle_unexpected(e: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.path)
        if app.config.get("DEBUG"):
            return error(f"Internal server error: {e}", 500)
        return error("Internal server error", 500)
