from __future__ import annotations

from datetime import timedelta

from flask import Flask, jsonify, session

from ..common.http import SESSION_KEY, current_principal, json_body, login_required
from ..container import Container
from ..core.constants import DEFAULT_SESSION_DAYS


def register(app: Flask, container: Container) -> None:
    @app.route("/login", methods=["POST"], endpoint="login")
    def login():
        body = json_body()
        principal = container.auth_service.authenticate(body.get("username", ""), body.get("password", ""))

        session.permanent = bool(body.get("remember_me"))
        app.permanent_session_lifetime = timedelta(days=DEFAULT_SESSION_DAYS)
        session[SESSION_KEY] = principal.to_session()
        return jsonify(principal.to_session())

    @app.route("/logout", methods=["POST"], endpoint="logout")
    def logout():
        session.clear()
        return "", 204

    @app.route("/me", methods=["GET"], endpoint="me")
    @login_required
    def me():
        return jsonify(current_principal().to_session())
