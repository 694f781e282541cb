from __future__ import annotations

import logging

from flask import jsonify, request

from ..core.context import OperatorContext
from ..core.exceptions import ConflictError, DomainError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)


def operator_context_from_request() -> OperatorContext:
    """Read the caller identity from the X-Actor-Id header or an actor_id field."""
    payload = request.get_json(silent=True) or {}
    raw = (
        request.headers.get("X-Actor-Id")
        or request.form.get("actor_id")
        or payload.get("actor_id")
    )
    name = request.headers.get("X-Actor-Name") or payload.get("actor_name")
    try:
        actor_id = int(raw) if raw not in (None, "") else None
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid actor_id: {raw!r}") from None
    return OperatorContext(actor_id=actor_id, actor_name=name)


def error_response(exc: Exception):
    if isinstance(exc, ValidationError):
        return jsonify({"success": False, "message": str(exc)}), 400
    if isinstance(exc, NotFoundError):
        return jsonify({"success": False, "message": str(exc)}), 404
    if isinstance(exc, ConflictError):
        return jsonify({"success": False, "message": str(exc)}), 409
    if isinstance(exc, DomainError):
        return jsonify({"success": False, "message": str(exc)}), 500
    logger.exception("Unhandled error: %s", exc)
    return jsonify({"success": False, "message": "Internal server error"}), 500
