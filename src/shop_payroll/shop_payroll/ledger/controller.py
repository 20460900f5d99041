from __future__ import annotations

from flask import Flask, request

from ..common.http import current_principal, date_range_args, gate_response, json_body, login_required
from ..container import Container
from ..core.exceptions import ValidationError


def _expected_version(body: dict):
    raw = body.pop("version", None)
    if raw is None:
        raw = request.headers.get("If-Match")
    if raw is None or raw == "":
        return None
    try:
        return int(str(raw).strip('"'))
    except ValueError:
        raise ValidationError("version must be an integer")


def register(app: Flask, container: Container) -> None:
    gate = container.gate

    @app.route("/employees/<int:employee_id>/entries", methods=["GET"], endpoint="list_entries")
    @login_required
    def list_entries(employee_id: int):
        start, end = date_range_args()
        return gate_response(gate.list_entries(current_principal(), employee_id, start, end))

    @app.route("/employees/<int:employee_id>/entries", methods=["POST"], endpoint="append_entry")
    @login_required
    def append_entry(employee_id: int):
        result = gate.append_entry(current_principal(), employee_id, json_body())
        return gate_response(result, status=201)

    @app.route("/employees/<int:employee_id>/entries/<work_date>", methods=["PATCH"], endpoint="edit_entry")
    @login_required
    def edit_entry(employee_id: int, work_date: str):
        body = json_body()
        expected_version = _expected_version(body)
        result = gate.edit_entry(
            current_principal(), employee_id, work_date, body, expected_version=expected_version
        )
        return gate_response(result)
