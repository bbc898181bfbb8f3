from __future__ import annotations

from datetime import date

from flask import jsonify, request

from ..core.exceptions import (
    AlreadyMarkedError,
    AuthorizationError,
    DomainError,
    LocationOutOfRangeError,
    NotFoundError,
    ValidationError,
)
from .datetime_utils import parse_iso_date

_STATUS_CODES = (
    (AlreadyMarkedError, 409),
    (NotFoundError, 404),
    (AuthorizationError, 403),
    (ValidationError, 400),
)


def error_response(e: DomainError):
    """JSON body and HTTP status for a domain error."""
    status = next((code for cls, code in _STATUS_CODES if isinstance(e, cls)), 400)
    body = {"success": False, "message": str(e)}
    if isinstance(e, AlreadyMarkedError) and e.record is not None:
        body["attendance"] = e.record.to_dict()
    if isinstance(e, LocationOutOfRangeError) and e.distance_km is not None:
        body["distance"] = e.distance_km
    return jsonify(body), status


def json_body() -> dict:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def require_date(value, field_name: str = "date") -> date:
    if not value:
        raise ValidationError(f"{field_name} is required")
    try:
        return parse_iso_date(str(value))
    except ValueError:
        raise ValidationError(f"{field_name} must be YYYY-MM-DD") from None
