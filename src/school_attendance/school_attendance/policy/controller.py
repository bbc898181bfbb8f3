from __future__ import annotations

import re

from flask import Flask, jsonify

from ..common.decorators import admin_required
from ..common.http import error_response, json_body
from ..core.exceptions import DomainError
from ..container import Container

_CAMEL = re.compile(r"(?<!^)(?=[A-Z])")


def _snake(key: str) -> str:
    return _CAMEL.sub("_", key).lower()


def register(app: Flask, container: Container) -> None:
    @app.route("/api/admin/attendance-settings", methods=["GET"], endpoint="get_attendance_settings")
    @admin_required
    def get_attendance_settings():
        return jsonify({"success": True, "settings": container.policy_service.get().to_dict()})

    @app.route("/api/admin/attendance-settings", methods=["PUT"], endpoint="update_attendance_settings")
    @admin_required
    def update_attendance_settings():
        changes = {_snake(k): v for k, v in json_body().items()}
        try:
            result = container.policy_service.update(changes)
        except DomainError as e:
            return error_response(e)

        if result.deadline_changed:
            container.sweep_scheduler.reschedule(result.settings.deadline_time)

        return jsonify({
            "success": True,
            "message": "Attendance settings updated",
            "settings": result.settings.to_dict(),
        })
