from __future__ import annotations

from flask import Flask

from ..common.http import current_principal, date_range_args, gate_response, login_required
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/employees/<int:employee_id>/compensation", methods=["GET"], endpoint="compensation")
    @login_required
    def compensation(employee_id: int):
        start, end = date_range_args()
        return gate_response(container.gate.compute_breakdown(current_principal(), employee_id, start, end))
