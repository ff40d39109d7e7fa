from __future__ import annotations

from flask import Flask, g, jsonify

from ..common.http import json_body
from ..container import Container
from .gates import login_required


def register(app: Flask, container: Container) -> None:
    @app.route("/api/auth/login", methods=["POST"], endpoint="auth_login")
    def login():
        data = json_body()
        identifier = data.get("identifier") or data.get("email") or ""
        result = container.auth_service.login(str(identifier), str(data.get("password") or ""))
        return jsonify({"token": result.token, "user": result.user.to_public_dict()})

    @app.route("/api/auth/logout", methods=["POST"], endpoint="auth_logout")
    def logout():
        # Tokens are stateless; the client discards its copy.
        return jsonify({"message": "Logout successful"})

    @app.route("/api/auth/me", methods=["GET"], endpoint="auth_me")
    @login_required
    def me():
        return jsonify({"user": g.identity.to_dict()})

    @app.route("/api/auth/change-password", methods=["POST"], endpoint="auth_change_password")
    @login_required
    def change_password():
        data = json_body()
        container.auth_service.change_password(
            user_id=g.identity.user_id,
            current_password=str(data.get("current_password") or ""),
            new_password=str(data.get("new_password") or ""),
        )
        return jsonify({"message": "Password changed successfully"})
