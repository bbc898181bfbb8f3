from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.decorators import admin_required
from ..container import Container
from ..core.enums import SweepOutcome


def register(app: Flask, container: Container) -> None:
    @app.route("/api/admin/attendance/auto-mark", methods=["POST"], endpoint="trigger_sweep")
    @admin_required
    def trigger_sweep():
        force = (request.args.get("force") or "").lower() in {"1", "true", "yes"}
        report = container.sweep_scheduler.trigger(force=force)
        if report.outcome is SweepOutcome.FAILED:
            return jsonify({"success": False, "message": report.message, "result": report.to_dict()}), 500
        return jsonify({"success": True, "result": report.to_dict()})

    @app.route("/api/admin/attendance/auto-mark/status", methods=["GET"], endpoint="sweep_status")
    @admin_required
    def sweep_status():
        return jsonify({"success": True, "status": container.sweep_scheduler.status().to_dict()})
