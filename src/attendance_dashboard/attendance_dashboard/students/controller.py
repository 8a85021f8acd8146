from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.validators import require_list
from ..container import Container
from ..core.exceptions import ValidationError
from .csv_import import parse_roster_csv


def register(app: Flask, container: Container) -> None:
    roster = container.roster_service

    def _json_body() -> dict:
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            raise ValidationError("Request body must be a JSON object")
        return data

    @app.route("/api/students", methods=["GET"], endpoint="list_students")
    def list_students():
        return jsonify([s.to_dict() for s in roster.list_students()])

    @app.route("/api/students", methods=["PUT"], endpoint="replace_students")
    def replace_students():
        records = require_list(_json_body().get("students"), "Students")
        students = roster.replace_all(records)
        return jsonify({"success": True, "totalStudents": len(students)})

    @app.route("/api/students/upload-csv", methods=["POST"], endpoint="upload_students_csv")
    def upload_students_csv():
        upload = request.files.get("file")
        if upload is not None:
            records = parse_roster_csv(upload.read().decode("utf-8-sig"))
            if not records:
                raise ValidationError(
                    "No valid student data found in CSV. Make sure your CSV has email, name, and hour columns."
                )
        else:
            records = require_list(_json_body().get("students"), "Students")

        summary = roster.merge_upsert(records)
        return jsonify({
            "success": True,
            "totalStudents": summary.total,
            "newStudents": summary.added,
            "updatedStudents": summary.updated,
            "existingKept": summary.kept,
        })

    @app.route("/api/students/remove", methods=["POST"], endpoint="remove_student")
    def remove_student():
        email = _json_body().get("email") or ""
        remaining = roster.remove(email)
        return jsonify({"success": True, "removedCount": 1, "remainingCount": remaining})

    @app.route("/api/students/clear", methods=["POST"], endpoint="clear_students")
    def clear_students():
        roster.clear()
        return jsonify({"success": True, "message": "All students have been removed from the roster"})

    @app.route("/api/students/update-hour", methods=["POST"], endpoint="update_student_hour")
    def update_student_hour():
        data = _json_body()
        if not data.get("email") or not data.get("newHour"):
            raise ValidationError("Email and newHour are required")

        student, old_hour = roster.update_hour(data["email"], data["newHour"])
        return jsonify({"success": True, "studentName": student.name, "oldHour": old_hour, "newHour": student.hour})

    @app.route("/api/students/update-photos", methods=["POST"], endpoint="update_student_photos")
    def update_student_photos():
        updates = require_list(_json_body().get("photoUpdates"), "Photo updates")
        summary = roster.update_photos(updates)
        return jsonify({
            "success": True,
            "updatedCount": summary.updated,
            "notFoundCount": summary.not_found,
            "totalStudents": summary.total,
        })

    @app.route("/api/students/debug", methods=["GET"], endpoint="students_debug")
    def students_debug():
        return jsonify(roster.stats())
