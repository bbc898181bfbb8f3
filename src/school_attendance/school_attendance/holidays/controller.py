from __future__ import annotations

from flask import Flask, jsonify, request, session

from ..common.datetime_utils import now_local
from ..common.decorators import admin_required
from ..common.http import error_response, json_body, require_date
from ..core.constants import DEFAULT_UPCOMING_HOLIDAYS
from ..core.exceptions import DomainError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    def _today():
        return now_local(container.sweeper.timezone).date()

    @app.route("/api/admin/holidays", methods=["GET"], endpoint="list_holidays")
    @admin_required
    def list_holidays():
        year = request.args.get("year", type=int)
        if year:
            holidays = container.holiday_service.list_for_year(year)
        else:
            holidays = container.holiday_service.list_all()
        return jsonify({"success": True, "holidays": [h.to_dict() for h in holidays]})

    @app.route("/api/admin/holidays", methods=["POST"], endpoint="create_holiday")
    @admin_required
    def create_holiday():
        data = json_body()
        try:
            holiday = container.holiday_service.create(
                holiday_date=require_date(data.get("date")),
                name=data.get("name") or "",
                description=data.get("description") or "",
                is_recurring=bool(data.get("isRecurring", False)),
                created_by=int(session["user_id"]),
            )
        except DomainError as e:
            return error_response(e)
        return jsonify({"success": True, "message": "Holiday created", "holiday": holiday.to_dict()}), 201

    @app.route("/api/admin/holidays/upcoming", methods=["GET"], endpoint="upcoming_holidays")
    @admin_required
    def upcoming_holidays():
        limit = request.args.get("limit", default=DEFAULT_UPCOMING_HOLIDAYS, type=int)
        holidays = container.holiday_service.list_upcoming(today=_today(), limit=limit)
        return jsonify({"success": True, "holidays": [h.to_dict() for h in holidays]})

    @app.route("/api/admin/holidays/check", methods=["POST"], endpoint="check_holiday")
    @admin_required
    def check_holiday():
        data = json_body()
        try:
            day = require_date(data.get("date")) if data.get("date") else _today()
        except DomainError as e:
            return error_response(e)
        check = container.holiday_service.is_holiday(day)
        return jsonify({
            "success": True,
            "isHoliday": check.is_holiday,
            "holiday": check.holiday.to_dict() if check.holiday else None,
        })

    @app.route("/api/admin/holidays/<int:holiday_id>", methods=["GET"], endpoint="get_holiday")
    @admin_required
    def get_holiday(holiday_id: int):
        try:
            holiday = container.holiday_service.get(holiday_id)
        except DomainError as e:
            return error_response(e)
        return jsonify({"success": True, "holiday": holiday.to_dict()})

    @app.route("/api/admin/holidays/<int:holiday_id>", methods=["PUT"], endpoint="update_holiday")
    @admin_required
    def update_holiday(holiday_id: int):
        data = json_body()
        try:
            holiday = container.holiday_service.update(
                holiday_id,
                holiday_date=require_date(data["date"]) if data.get("date") else None,
                name=data.get("name"),
                description=data.get("description"),
                is_recurring=data.get("isRecurring"),
            )
        except DomainError as e:
            return error_response(e)
        return jsonify({"success": True, "message": "Holiday updated", "holiday": holiday.to_dict()})

    @app.route("/api/admin/holidays/<int:holiday_id>", methods=["DELETE"], endpoint="delete_holiday")
    @admin_required
    def delete_holiday(holiday_id: int):
        try:
            container.holiday_service.delete(holiday_id)
        except DomainError as e:
            return error_response(e)
        return jsonify({"success": True, "message": "Holiday deleted"})
