from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import current_caller, json_body, login_required, role_required
from ..core.enums import Role
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/schedules/<day_of_week>", methods=["GET"], endpoint="schedules_for_day")
    @login_required
    def schedules_for_day(day_of_week: str):
        entries = container.schedule_service.get_schedule_for_day(day_of_week)
        return jsonify([e.to_dict() for e in entries])

    @app.route("/api/schedules", methods=["POST"], endpoint="create_schedule")
    @role_required(Role.ADMIN)
    def create_schedule():
        body = json_body()
        schedule = container.schedule_service.create_schedule(
            caller=current_caller(),
            user_id=body.get("userId"),
            day_of_week=body.get("dayOfWeek"),
            start_time=body.get("startTime"),
            end_time=body.get("endTime"),
            subject=body.get("subject"),
            work_type=body.get("workType"),
        )
        return jsonify(schedule.to_dict()), 201

    @app.route("/api/users/<user_id>/schedules", methods=["GET"], endpoint="user_schedules")
    @login_required
    def user_schedules(user_id: str):
        schedules = container.schedule_service.list_for_user(caller=current_caller(), user_id=user_id)
        return jsonify([s.to_dict() for s in schedules])
