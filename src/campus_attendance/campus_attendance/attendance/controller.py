from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import now_local
from ..common.http import current_caller, json_body, login_required, role_required
from ..core.enums import Role
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/attendance/<user_id>", methods=["GET"], endpoint="attendance_history")
    @login_required
    def attendance_history(user_id: str):
        records = container.attendance_service.get_history(
            caller=current_caller(),
            user_id=user_id,
            limit=request.args.get("limit"),
        )
        return jsonify([r.to_dict() for r in records])

    @app.route("/api/attendance-all", methods=["GET"], endpoint="attendance_all")
    @role_required(Role.HEAD, Role.ADMIN)
    def attendance_all():
        work_date = request.args.get("date") or now_local().date().isoformat()
        entries = container.attendance_service.get_attendance_for_day(caller=current_caller(), work_date=work_date)
        return jsonify([e.to_dict() for e in entries])

    @app.route("/api/mark-attendance", methods=["POST"], endpoint="mark_attendance")
    @role_required(Role.MAZER, Role.ASSISTANT)
    def mark_attendance():
        body = json_body()
        rec = container.attendance_service.mark_attendance(
            caller=current_caller(),
            user_id=body.get("userId"),
            work_date=body.get("date"),
            status=body.get("status"),
            time_in=body.get("timeIn"),
            time_out=body.get("timeOut"),
        )
        return jsonify(rec.to_dict()), 201
