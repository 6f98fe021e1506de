from __future__ import annotations

from dataclasses import asdict

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date
from ..common.validators import require_non_empty, require_positive_int
from ..common.web import current_employee, outcome_response, to_json
from ..container import Container


def register(app: Flask, container: Container) -> None:
    engine = container.leave_engine

    @app.route("/leaves", methods=["POST"], endpoint="submit_leave")
    def submit_leave():
        profile = current_employee(container.identity_provider)
        data = request.get_json(silent=True) or request.form

        outcome = engine.submit_leave(
            profile.employee_id,
            profile,
            from_date=parse_iso_date(require_non_empty(data.get("from_date"), "from_date"), "from_date"),
            to_date=parse_iso_date(require_non_empty(data.get("to_date"), "to_date"), "to_date"),
            leave_type_id=require_positive_int(data.get("leave_type_id"), "leave_type_id"),
            description=require_non_empty(data.get("description"), "description"),
        )
        payload = {"message": "New Leave created"}
        if outcome.ok:
            payload["leave"] = asdict(outcome.value)
        return outcome_response(outcome, payload, status=201)

    @app.route("/leaves", methods=["GET"], endpoint="list_leaves")
    def list_leaves():
        profile = current_employee(container.identity_provider)
        rows = engine.list_leaves(profile.employee_id)
        return jsonify({"items": [to_json(asdict(r)) for r in rows]})

    @app.route("/leave-types", methods=["GET"], endpoint="list_leave_types")
    def list_leave_types():
        return jsonify({"items": [asdict(t) for t in engine.list_leave_types()]})
