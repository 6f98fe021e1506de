"""Helpers shared by the Flask controllers: identity, JSON rendering, error mapping."""

from __future__ import annotations

import logging
from datetime import date, time
from enum import Enum
from typing import Any

from flask import Flask, jsonify, session

from ..core.enums import RejectionKind
from ..core.exceptions import AuthenticationError, StoreError, ValidationError
from ..core.result import Outcome
from ..employees.model import EmployeeProfile
from ..employees.repository import IdentityProvider

logger = logging.getLogger(__name__)

# State conflicts answer 409; everything else the caller must fix in its input answers 422.
CONFLICT_KINDS = frozenset(
    {
        RejectionKind.ALREADY_EXISTS,
        RejectionKind.NO_CHECK_IN,
        RejectionKind.ALREADY_CHECKED_OUT,
        RejectionKind.FIRST_LEAVE_PENDING,
        RejectionKind.FIRST_LEAVE_NOT_APPROVED,
        RejectionKind.PREVIOUS_LEAVE_ONGOING,
    }
)


def to_json(value: Any) -> Any:
    if isinstance(value, (date, time)):
        return value.isoformat()
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, dict):
        return {k: to_json(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_json(v) for v in value]
    return value


def current_employee(identity: IdentityProvider) -> EmployeeProfile:
    employee_id = session.get("employee_id")
    if employee_id is None:
        raise AuthenticationError("Please sign in to continue")
    profile = identity.get_profile(int(employee_id))
    if profile is None:
        raise AuthenticationError("Employee not found")
    return profile


def outcome_response(outcome: Outcome, payload: dict, *, status: int = 200):
    if outcome.ok:
        return jsonify({"success": True, **to_json(payload)}), status

    rejection = outcome.rejection
    code = 409 if rejection.kind in CONFLICT_KINDS else 422
    body = {
        "success": False,
        "code": rejection.kind.value,
        "message": rejection.message,
        "context": to_json(rejection.context),
    }
    return jsonify(body), code


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(ValidationError)
    def _validation(e: ValidationError):
        return jsonify({"success": False, "message": str(e)}), 400

    @app.errorhandler(AuthenticationError)
    def _authentication(e: AuthenticationError):
        return jsonify({"success": False, "message": str(e)}), 401

    @app.errorhandler(StoreError)
    def _store(e: StoreError):
        logger.error("Store failure while handling request: %s", e)
        message = str(e) if app.config.get("DEBUG") else "Storage is temporarily unavailable"
        return jsonify({"success": False, "message": message}), 503
