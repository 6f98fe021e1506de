from __future__ import annotations

from dataclasses import asdict

from flask import Flask, jsonify, request

from ..common.validators import require_positive_int
from ..common.web import current_employee, outcome_response, to_json
from ..container import Container


def register(app: Flask, container: Container) -> None:
    engine = container.attendance_engine

    @app.route("/attendance/check-in", methods=["POST"], endpoint="checkin")
    def checkin():
        profile = current_employee(container.identity_provider)
        outcome = engine.check_in(profile.employee_id, profile)
        payload = {"message": "Attendance given successfully."}
        if outcome.ok:
            payload["attendance"] = asdict(outcome.value)
        return outcome_response(outcome, payload, status=201)

    @app.route("/attendance/check-out", methods=["POST"], endpoint="checkout")
    def checkout():
        profile = current_employee(container.identity_provider)
        outcome = engine.check_out(profile.employee_id)
        payload = {"message": "You have checked out successfully."}
        if outcome.ok:
            receipt = outcome.value
            payload["attendance"] = asdict(receipt)
            if receipt.overtime:
                payload["message"] = f"You have checked out successfully. Overtime: {receipt.overtime}"
        return outcome_response(outcome, payload)

    @app.route("/attendance/today", methods=["GET"], endpoint="attendance_today")
    def attendance_today():
        profile = current_employee(container.identity_provider)
        record = engine.today_record(profile.employee_id)
        return jsonify({"attendance": to_json(asdict(record)) if record else None})

    @app.route("/attendance/history", methods=["GET"], endpoint="attendance_history")
    def attendance_history():
        profile = current_employee(container.identity_provider)
        limit = require_positive_int(request.args.get("limit", container.history_limit), "limit")
        rows = engine.history(profile.employee_id, limit=limit)
        return jsonify({"items": [to_json(asdict(r)) for r in rows]})
