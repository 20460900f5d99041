from __future__ import annotations

from dataclasses import asdict

from flask import Flask, request

from ..common.http import current_principal, gate_response, json_body, login_required
from ..container import Container
from .model import Employee


class _EmployeeView:
    def __init__(self, employee: Employee):
        self._employee = employee

    def as_dict(self) -> dict:
        data = asdict(self._employee)
        data["position"] = self._employee.position.value
        for key in ("base_rate", "sales_percentage"):
            data[key] = str(data[key]) if data[key] is not None else None
        return data


def _view(result):
    return _EmployeeView(result) if isinstance(result, Employee) else result


def register(app: Flask, container: Container) -> None:
    gate = container.gate

    @app.route("/employees", methods=["POST"], endpoint="create_employee")
    @login_required
    def create_employee():
        body = json_body()
        result = gate.create_employee(
            current_principal(),
            full_name=body.get("full_name", ""),
            position=body.get("position"),
            base_rate=body.get("base_rate"),
            sales_percentage=body.get("sales_percentage"),
        )
        return gate_response(_view(result), status=201)

    @app.route("/employees/<int:employee_id>", methods=["PATCH"], endpoint="update_employee")
    @login_required
    def update_employee(employee_id: int):
        result = gate.update_employee(current_principal(), employee_id, json_body())
        return gate_response(_view(result))

    @app.route("/employees/<int:employee_id>", methods=["DELETE"], endpoint="delete_employee")
    @login_required
    def delete_employee(employee_id: int):
        reason = request.args.get("reason")
        return gate_response(gate.delete_employee(current_principal(), employee_id, reason=reason))
