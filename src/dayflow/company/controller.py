from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import json_body
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/company/exists", methods=["GET"], endpoint="company_exists")
    def company_exists():
        return jsonify({"exists": container.company_service.exists()})

    @app.route("/api/company", methods=["GET"], endpoint="company_get")
    def company_get():
        return jsonify(container.company_service.get().to_dict())

    @app.route("/api/company/setup", methods=["POST"], endpoint="company_setup")
    def company_setup():
        data = json_body()
        company, admin = container.company_service.setup(
            company_name=data.get("company_name") or "",
            company_code=data.get("company_code") or "",
            admin_name=data.get("admin_name") or "",
            admin_email=data.get("admin_email") or "",
            admin_password=data.get("admin_password") or "",
            company_logo=data.get("company_logo"),
        )
        admin_out = {"id": admin.user_id, "email": admin.email, "role": admin.role.value}
        return jsonify({"company": company.to_dict(), "admin": admin_out}), 201
