from __future__ import annotations

from flask import Flask, g, jsonify

from ..auth.gates import admin_required, login_required
from ..common.http import json_body
from ..container import Container


def register(app: Flask, container: Container) -> None:
    leave = container.leave_service

    @app.route("/api/leave/request", methods=["POST"], endpoint="leave_request")
    @login_required
    def request_leave():
        created = leave.request_leave(user_id=g.identity.user_id, payload=json_body())
        return jsonify(created.to_dict()), 201

    @app.route("/api/leave/my-requests", methods=["GET"], endpoint="leave_my_requests")
    @login_required
    def my_requests():
        return jsonify([r.to_dict() for r in leave.my_requests(g.identity.user_id)])

    @app.route("/api/leave/pending", methods=["GET"], endpoint="leave_pending")
    @login_required
    @admin_required
    def pending():
        return jsonify([r.to_dict() for r in leave.pending()])

    @app.route("/api/leave/all", methods=["GET"], endpoint="leave_all")
    @login_required
    @admin_required
    def all_requests():
        return jsonify([r.to_dict() for r in leave.list_all()])

    @app.route("/api/leave/<int:request_id>/approve", methods=["PUT"], endpoint="leave_approve")
    @login_required
    @admin_required
    def approve(request_id: int):
        decided = leave.approve(request_id, admin_comments=json_body().get("admin_comments"))
        return jsonify(decided.to_dict())

    @app.route("/api/leave/<int:request_id>/reject", methods=["PUT"], endpoint="leave_reject")
    @login_required
    @admin_required
    def reject(request_id: int):
        decided = leave.reject(request_id, admin_comments=json_body().get("admin_comments"))
        return jsonify(decided.to_dict())
