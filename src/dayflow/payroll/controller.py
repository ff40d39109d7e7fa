from __future__ import annotations

from flask import Flask, g, jsonify

from ..auth.gates import admin_required, login_required
from ..common.http import json_body
from ..container import Container


def register(app: Flask, container: Container) -> None:
    payroll = container.payroll_service

    @app.route("/api/payroll/my-payroll", methods=["GET"], endpoint="payroll_mine")
    @login_required
    def my_payroll():
        return jsonify([p.to_dict() for p in payroll.my_payroll(g.identity.user_id)])

    @app.route("/api/payroll", methods=["GET"], endpoint="payroll_list")
    @login_required
    @admin_required
    def payroll_list():
        return jsonify([p.to_dict() for p in payroll.list_all()])

    @app.route("/api/payroll/user/<int:user_id>", methods=["GET"], endpoint="payroll_for_user")
    @login_required
    @admin_required
    def payroll_for_user(user_id: int):
        return jsonify([p.to_dict() for p in payroll.for_user(user_id)])

    @app.route("/api/payroll", methods=["POST"], endpoint="payroll_create")
    @login_required
    @admin_required
    def payroll_create():
        return jsonify(payroll.create(json_body()).to_dict()), 201

    @app.route("/api/payroll/<int:payroll_id>", methods=["PUT"], endpoint="payroll_update")
    @login_required
    @admin_required
    def payroll_update(payroll_id: int):
        return jsonify(payroll.update(payroll_id, json_body()).to_dict())

    @app.route("/api/payroll/<int:payroll_id>", methods=["DELETE"], endpoint="payroll_delete")
    @login_required
    @admin_required
    def payroll_delete(payroll_id: int):
        deleted_id = payroll.delete(payroll_id)
        return jsonify({"message": "Payroll entry deleted successfully", "id": deleted_id})
