from __future__ import annotations

import logging
from functools import wraps

from flask import jsonify, request, session

from ..core.actor import Actor
from ..core.enums import Role
from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    DomainError,
    NotFoundError,
    ValidationError,
)

logger = logging.getLogger(__name__)

_STATUS = (
    (ValidationError, 400),
    (ConflictError, 400),
    (AuthenticationError, 401),
    (AuthorizationError, 403),
    (NotFoundError, 404),
)


def current_actor() -> Actor:
    """Build the actor from the session set by the identity provider."""
    if "user_id" not in session:
        raise AuthenticationError("Unauthorized")
    try:
        return Actor(user_id=int(session["user_id"]), role=Role(session.get("role")))
    except (TypeError, ValueError):
        raise AuthenticationError("Unauthorized")


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        try:
            actor = current_actor()
        except AuthenticationError as e:
            return domain_error(e)
        return view(actor, *args, **kwargs)

    return wrapper


def json_body() -> dict:
    body = request.get_json(silent=True)
    return body if isinstance(body, dict) else {}


def domain_error(e: DomainError):
    for exc_type, status in _STATUS:
        if isinstance(e, exc_type):
            return jsonify({"message": str(e)}), status
    return server_error()


def server_error():
    return jsonify({"message": "Server error"}), 500
