from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import current_caller, role_required
from ..core.enums import Role
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/dashboard-stats", methods=["GET"], endpoint="dashboard_stats")
    @role_required(Role.HEAD, Role.ADMIN)
    def dashboard_stats():
        stats = container.dashboard_service.get_stats(caller=current_caller())
        return jsonify(stats.to_dict())
