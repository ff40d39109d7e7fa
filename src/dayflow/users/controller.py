from __future__ import annotations

from flask import Flask, g, jsonify

from ..auth.gates import admin_required, login_required
from ..common.http import json_body
from ..container import Container


def register(app: Flask, container: Container) -> None:
    employees = container.employee_service

    @app.route("/api/employees", methods=["GET"], endpoint="employees_list")
    @login_required
    def employees_list():
        return jsonify([e.to_dict() for e in employees.list_for(g.identity)])

    @app.route("/api/employees", methods=["POST"], endpoint="employees_create")
    @login_required
    @admin_required
    def employees_create():
        created = employees.create(json_body())
        out = created.employee.to_dict()
        out["password_change_required"] = created.employee.user.password_change_required
        if created.temporary_password:
            out["temporary_password"] = created.temporary_password
        return jsonify(out), 201

    @app.route("/api/employees/<int:user_id>", methods=["GET"], endpoint="employees_get")
    @login_required
    def employees_get(user_id: int):
        return jsonify(employees.get(g.identity, user_id).to_dict())

    @app.route("/api/employees/<int:user_id>", methods=["PUT"], endpoint="employees_update")
    @login_required
    def employees_update(user_id: int):
        return jsonify(employees.update(g.identity, user_id, json_body()).to_dict())

    @app.route("/api/employees/<int:user_id>", methods=["DELETE"], endpoint="employees_delete")
    @login_required
    @admin_required
    def employees_delete(user_id: int):
        deleted_id = employees.delete(user_id)
        return jsonify({"message": "Employee deleted successfully", "id": deleted_id})
