from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import api_errors, json_payload
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/getFormData", methods=["GET"], endpoint="leave_requests")
    @api_errors(server_error="Server error: Failed to fetch data")
    def leave_requests():
        return jsonify({"data": container.leave_service.list_requests()})

    @app.route("/api/leave-form", methods=["POST"], endpoint="leave_form")
    @api_errors()
    def leave_form():
        container.leave_service.submit(json_payload())
        return jsonify({"result": "success", "message": "Leave form recorded successfully"})

    @app.route("/api/Approve-leave", methods=["POST"], endpoint="approve_leave")
    @api_errors(server_error="Server error")
    def approve_leave():
        payload = json_payload()
        container.leave_service.approve(
            emp_code=payload.get("EMPCODE"),
            approved=payload.get("Approved"),
            leave_days=payload.get("leaveDays"),
        )
        return jsonify({"message": "Leave status and days updated successfully"})
