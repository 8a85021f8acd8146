from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date
from ..common.validators import require_list
from ..container import Container
from ..core.exceptions import ValidationError


def register(app: Flask, container: Container) -> None:
    @app.route("/api/attendance/check", methods=["POST"], endpoint="check_attendance")
    def check_attendance():
        data = request.get_json(silent=True)
        if not isinstance(data, dict) or not data.get("date") or not data.get("groupId"):
            raise ValidationError("Invalid request. Date, studentEmails array, and groupId required.")

        emails = require_list(data.get("studentEmails"), "studentEmails")
        result = container.attendance_service.check(
            day=parse_iso_date(str(data["date"])),
            student_emails=emails,
            group_id=str(data["groupId"]),
        )
        return jsonify(result.to_dict())
