from __future__ import annotations

from flask import Flask, jsonify

from ..common.web import current_employee
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/me", methods=["GET"], endpoint="me")
    def me():
        profile = current_employee(container.identity_provider)
        snapshot = profile.snapshot()
        return jsonify(
            {
                "employee_id": profile.employee_id,
                "name": snapshot.employee_name,
                "department_name": snapshot.department_name,
                "designation_name": snapshot.designation_name,
            }
        )
