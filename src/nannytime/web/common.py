from __future__ import annotations

import logging
from functools import wraps
from typing import Optional

from flask import Flask, g, jsonify, request, session
from werkzeug.exceptions import HTTPException

from ..common.datetime_utils import to_iso
from ..container import Container
from ..core.exceptions import (
    AlreadyClosedError,
    AuthenticationError,
    DomainError,
    NotAuthenticatedError,
    NotFoundError,
    StoreError,
    ValidationError,
)
from ..profiles.model import Profile
from ..shifts.model import Shift

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR = (
    (ValidationError, 400),
    (AlreadyClosedError, 400),
    (AuthenticationError, 401),
    (NotAuthenticatedError, 401),
    (NotFoundError, 404),
    (StoreError, 503),
)


def status_for(error: DomainError) -> int:
    for error_type, status in _STATUS_BY_ERROR:
        if isinstance(error, error_type):
            return status
    return 400


def error_response(message: str, status: int):
    return jsonify({"success": False, "message": message}), status


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(e: DomainError):
        return error_response(str(e), status_for(e))

    @app.errorhandler(Exception)
    def handle_unexpected(e: Exception):
        if isinstance(e, HTTPException):
            return error_response(str(e.description), int(e.code or 500))
        logger.exception("Unhandled error on %s %s", request.method, request.path)
        if app.config.get("DEBUG"):
            return error_response(f"Server error: {e}", 500)
        return error_response("Server error", 500)


def client_required(container: Container):
    """Resolve the AppController of the signed-in browser into flask.g.client."""

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            client = container.clients.get(session.get("token"))
            if client is None or client.state.session is None:
                session.pop("token", None)
                return error_response("Please sign in to continue", 401)
            g.client = client
            return view(*args, **kwargs)

        return wrapper

    return decorator


def json_body() -> dict:
    body = request.get_json(silent=True)
    return body if isinstance(body, dict) else {}


def shift_to_dict(shift: Shift) -> dict:
    return {
        "id": shift.shift_id,
        "start_time": to_iso(shift.start_time),
        "end_time": to_iso(shift.end_time),
        "notes": shift.notes,
        "is_active": shift.is_active,
    }


def profile_to_dict(profile: Optional[Profile]) -> Optional[dict]:
    if profile is None:
        return None
    return {
        "id": profile.user_id,
        "name": profile.name,
        "hourly_rate": profile.hourly_rate,
        "currency": profile.currency.value,
        "currency_symbol": profile.currency.symbol,
    }
