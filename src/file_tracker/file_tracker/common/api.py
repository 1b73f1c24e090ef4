"""JSON response helpers, error mapping and the authentication decorator."""

from __future__ import annotations

import logging
from functools import wraps
from typing import Any, Optional

from flask import Flask, jsonify, request
from flask_jwt_extended import JWTManager, get_jwt_identity, verify_jwt_in_request
from werkzeug.exceptions import HTTPException

from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    DomainError,
    NotFoundError,
    ValidationError,
)

logger = logging.getLogger(__name__)

AUTH_REQUIRED = "Authentication required"

_STATUS_BY_ERROR = (
    (ValidationError, 400),
    (AuthenticationError, 401),
    (AuthorizationError, 403),
    (NotFoundError, 404),
    (ConflictError, 409),
)


def error_response(message: str, status_code: int, *, field: Optional[str] = None):
    body: dict[str, Any] = {"error": message}
    if field:
        body["field"] = field
    return jsonify(body), status_code


def json_body() -> dict:
    payload = request.get_json(silent=True)
    if payload is None:
        return {}
    if not isinstance(payload, dict):
        raise ValidationError("Request body must be a JSON object")
    return payload


def login_required_for(auth_service):
    """Build a decorator that verifies the token and passes the actor as the first argument."""

    def login_required(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            verify_jwt_in_request()
            actor = auth_service.resolve_actor(get_jwt_identity())
            return view(actor, *args, **kwargs)

        return wrapper

    return login_required


def register_jwt_handlers(jwt: JWTManager) -> None:
    # Every token failure gets the same body, so callers learn nothing about users.
    @jwt.unauthorized_loader
    def missing_token(reason: str):
        return error_response(AUTH_REQUIRED, 401)

    @jwt.invalid_token_loader
    def invalid_token(reason: str):
        logger.info("Rejected invalid token: %s", reason)
        return error_response(AUTH_REQUIRED, 401)

    @jwt.expired_token_loader
    def expired_token(jwt_header: dict, jwt_payload: dict):
        return error_response(AUTH_REQUIRED, 401)


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(e: DomainError):
        status_code = next((code for cls, code in _STATUS_BY_ERROR if isinstance(e, cls)), 400)
        if status_code == 403:
            logger.warning("Denied %s %s: %s", request.method, request.path, e)
        return error_response(str(e), status_code, field=getattr(e, "field", None))

    @app.errorhandler(HTTPException)
    def handle_http_error(e: HTTPException):
        return error_response(e.description or e.name, e.code or 500)

    @app.errorhandler(Exception)
    def handle_unexpected(e: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.path)
        return error_response("Internal server error", 500)
