from __future__ import annotations

from flask import Flask, g, jsonify, request

from ..auth.gates import admin_required, login_required
from ..container import Container


def register(app: Flask, container: Container) -> None:
    attendance = container.attendance_service

    @app.route("/api/attendance/checkin", methods=["POST"], endpoint="attendance_checkin")
    @login_required
    def checkin():
        record = attendance.check_in(g.identity.user_id)
        return jsonify(record.to_dict()), 201

    @app.route("/api/attendance/checkout", methods=["POST"], endpoint="attendance_checkout")
    @login_required
    def checkout():
        return jsonify(attendance.check_out(g.identity.user_id).to_dict())

    @app.route("/api/attendance/daily", methods=["GET"], endpoint="attendance_daily")
    @login_required
    def daily():
        records = attendance.daily(g.identity.user_id, request.args.get("date"))
        return jsonify([r.to_dict() for r in records])

    @app.route("/api/attendance/weekly", methods=["GET"], endpoint="attendance_weekly")
    @login_required
    def weekly():
        records = attendance.weekly(g.identity.user_id, request.args.get("startDate"))
        return jsonify([r.to_dict() for r in records])

    @app.route("/api/attendance/user/<int:user_id>", methods=["GET"], endpoint="attendance_for_user")
    @login_required
    @admin_required
    def for_user(user_id: int):
        records = attendance.for_user(
            user_id,
            start=request.args.get("startDate"),
            end=request.args.get("endDate"),
        )
        return jsonify([r.to_dict() for r in records])
