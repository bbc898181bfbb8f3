from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.decorators import admin_required
from ..core.constants import DEFAULT_LEADERBOARD_LIMIT
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/admin/teacher-performance", methods=["GET"], endpoint="all_teacher_performance")
    @admin_required
    def all_teacher_performance():
        snapshots = container.performance_service.get_all()
        return jsonify({
            "success": True,
            "count": len(snapshots),
            "teachers": [s.to_dict() for s in snapshots],
        })

    @app.route("/api/admin/teacher-performance/leaderboard", methods=["GET"], endpoint="performance_leaderboard")
    @admin_required
    def performance_leaderboard():
        limit = request.args.get("limit", default=DEFAULT_LEADERBOARD_LIMIT, type=int)
        entries = container.performance_service.get_leaderboard(limit)
        return jsonify({"success": True, "leaderboard": [e.to_dict() for e in entries]})

    @app.route("/api/admin/teacher-performance/<int:teacher_id>", methods=["GET"], endpoint="teacher_performance")
    @admin_required
    def teacher_performance(teacher_id: int):
        snapshot = container.performance_service.get_performance(teacher_id)
        if snapshot is None:
            return jsonify({
                "success": False,
                "message": "Teacher not found or performance data unavailable",
            }), 404
        return jsonify({"success": True, "performance": snapshot.to_dict()})
