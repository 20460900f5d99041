from __future__ import annotations

from flask import Flask

from ..common.http import current_principal, gate_response, json_body, login_required
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/rules", methods=["GET"], endpoint="list_rules")
    @login_required
    def list_rules():
        return gate_response(container.gate.list_rules(current_principal()))

    @app.route("/rules/<position>", methods=["PUT"], endpoint="set_rule")
    @login_required
    def set_rule(position: str):
        body = json_body()
        result = container.gate.set_rule(
            current_principal(),
            position=position,
            base_rate=body.get("base_rate"),
            sales_percentage=body.get("sales_percentage"),
        )
        return gate_response(result)
