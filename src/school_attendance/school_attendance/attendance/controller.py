from __future__ import annotations

from flask import Flask, jsonify, request, session

from ..common.decorators import admin_required, login_required
from ..common.http import error_response, json_body, require_date
from ..common.validators import coerce_float
from ..core.exceptions import DomainError
from ..container import Container
from .model import GeoLocation


def _location_from(payload) -> GeoLocation | None:
    if not isinstance(payload, dict):
        return None
    return GeoLocation(
        latitude=coerce_float(payload.get("latitude")),
        longitude=coerce_float(payload.get("longitude")),
        address=(payload.get("address") or None),
    )


def register(app: Flask, container: Container) -> None:
    @app.route("/api/teacher-attendance/mark", methods=["POST"], endpoint="mark_attendance")
    @login_required
    def mark_attendance():
        data = json_body()
        try:
            record = container.attendance_service.self_mark(
                int(session["user_id"]),
                data.get("status") or "Present",
                location=_location_from(data.get("location")),
                remarks=data.get("remarks"),
            )
        except DomainError as e:
            return error_response(e)

        return jsonify({
            "success": True,
            "message": "Attendance marked successfully",
            "attendance": record.to_dict(),
        }), 201

    @app.route("/api/teacher-attendance/today", methods=["GET"], endpoint="today_status")
    @login_required
    def today_status():
        status = container.attendance_service.get_today_status(int(session["user_id"]))
        return jsonify({"success": True, **status.to_dict()})

    @app.route("/api/teacher-attendance/my-history", methods=["GET"], endpoint="my_history")
    @login_required
    def my_history():
        history = container.attendance_service.get_history(int(session["user_id"]))
        return jsonify({"success": True, **history.to_dict()})

    @app.route("/api/admin/attendance/today-summary", methods=["GET"], endpoint="admin_today_summary")
    @admin_required
    def admin_today_summary():
        summary = container.attendance_service.get_today_summary()
        return jsonify({"success": True, **summary.to_dict()})

    @app.route("/api/admin/attendance/teacher/<int:teacher_id>", methods=["GET"], endpoint="admin_teacher_attendance")
    @admin_required
    def admin_teacher_attendance(teacher_id: int):
        try:
            history = container.attendance_service.get_teacher_history(teacher_id)
        except DomainError as e:
            return error_response(e)
        return jsonify({"success": True, **history.to_dict()})

    @app.route("/api/admin/attendance/mark", methods=["POST"], endpoint="admin_mark_attendance")
    @admin_required
    def admin_mark_attendance():
        data = json_body()
        try:
            teacher_id = data.get("teacherId")
            if teacher_id is None:
                return jsonify({"success": False, "message": "teacherId is required"}), 400
            record = container.attendance_service.admin_mark(
                int(teacher_id),
                require_date(data.get("date")),
                data.get("status") or "Present",
                remarks=data.get("remarks"),
            )
        except DomainError as e:
            return error_response(e)
        except (TypeError, ValueError):
            return jsonify({"success": False, "message": "teacherId must be a number"}), 400

        return jsonify({
            "success": True,
            "message": "Attendance marked successfully",
            "attendance": record.to_dict(),
        })

    @app.route("/api/admin/attendance/all", methods=["GET"], endpoint="admin_list_attendance")
    @admin_required
    def admin_list_attendance():
        args = request.args
        try:
            if args.get("date"):
                start = end = require_date(args.get("date"))
            elif args.get("start") or args.get("end"):
                start = require_date(args.get("start"), "start")
                end = require_date(args.get("end"), "end")
            else:
                start = end = None
            listing = container.attendance_service.list_attendance(start, end)
        except DomainError as e:
            return error_response(e)
        return jsonify({"success": True, **listing.to_dict()})

    @app.route("/api/admin/attendance/<int:attendance_id>", methods=["PUT"], endpoint="admin_update_attendance")
    @admin_required
    def admin_update_attendance(attendance_id: int):
        data = json_body()
        if not data.get("status"):
            return jsonify({"success": False, "message": "status is required"}), 400
        try:
            record = container.attendance_service.admin_update(
                attendance_id, data.get("status"), remarks=data.get("remarks")
            )
        except DomainError as e:
            return error_response(e)
        return jsonify({
            "success": True,
            "message": "Attendance updated successfully",
            "attendance": record.to_dict(),
        })

    @app.route("/api/admin/attendance/<int:attendance_id>", methods=["DELETE"], endpoint="admin_delete_attendance")
    @admin_required
    def admin_delete_attendance(attendance_id: int):
        try:
            container.attendance_service.admin_delete(attendance_id)
        except DomainError as e:
            return error_response(e)
        return jsonify({"success": True, "message": "Attendance record deleted"})
