from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http import api_errors, json_payload
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/attendance", methods=["GET"], endpoint="attendance_for_day")
    @api_errors()
    def attendance_for_day():
        records = container.attendance_service.list_for_day(
            email=request.args.get("email") or None,
            day=request.args.get("date") or None,
        )
        return jsonify(records)

    @app.route("/api/attendance-Form", methods=["POST"], endpoint="attendance_form")
    @api_errors()
    def attendance_form():
        container.attendance_service.submit(json_payload())
        return jsonify({"result": "success", "message": "Attendance recorded successfully"})

    @app.route("/api/getAttendance-Data", methods=["GET"], endpoint="attendance_data")
    @api_errors(server_error="Server error: Failed to fetch data")
    def attendance_data():
        return jsonify({"data": container.attendance_service.list_all()})
