from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import current_caller, json_body, login_required, role_required
from ..core.enums import Role
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/leave-requests", methods=["POST"], endpoint="create_leave_request")
    @login_required
    def create_leave_request():
        body = json_body()
        req = container.leave_service.create_leave_request(
            caller=current_caller(),
            leave_type=body.get("leaveType"),
            from_date=body.get("fromDate"),
            to_date=body.get("toDate"),
            reason=body.get("reason"),
        )
        return jsonify(req.to_dict()), 201

    @app.route("/api/leave-requests", methods=["GET"], endpoint="list_leave_requests")
    @login_required
    def list_leave_requests():
        items = container.leave_service.list_leave_requests(caller=current_caller())
        return jsonify([item.to_dict() for item in items])

    @app.route("/api/leave-requests/<int:request_id>/respond", methods=["POST"], endpoint="respond_leave_request")
    @role_required(Role.HEAD)
    def respond_leave_request(request_id: int):
        body = json_body()
        req = container.leave_service.respond(
            caller=current_caller(),
            request_id=request_id,
            status=body.get("status"),
        )
        return jsonify(req.to_dict())
