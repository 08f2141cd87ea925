from __future__ import annotations

from functools import wraps

from flask import Flask, g, jsonify, request

from ..common.http import api_errors, json_payload
from ..container import Container


def _bearer_token() -> str:
    header = request.headers.get("Authorization", "")
    parts = header.split(" ", 1)
    return parts[1].strip() if len(parts) == 2 else ""


def register(app: Flask, container: Container) -> None:
    def token_required(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            g.current_email = container.auth_service.authenticate(_bearer_token())
            return view(*args, **kwargs)

        return wrapper

    @app.route("/api/login", methods=["POST"], endpoint="login")
    @api_errors(empty_status=400, server_error="Server error")
    def login():
        payload = json_payload()
        result = container.auth_service.login(
            str(payload.get("email") or ""),
            str(payload.get("password") or ""),
        )
        return jsonify({"token": result.token, "userType": result.role.value})

    @app.route("/api/user", methods=["GET"], endpoint="current_user")
    @api_errors()
    @token_required
    def current_user():
        return jsonify({"email": g.current_email})

    @app.route("/api/DropdownUserData", methods=["GET"], endpoint="dropdown_users")
    @api_errors(
        empty_status=400,
        server_error="Failed to fetch data from Google Sheet",
        extra={"success": False},
    )
    def dropdown_users():
        users = container.directory_service.list_dropdown_users()
        return jsonify({"success": True, "count": len(users), "data": users})

    @app.route("/api/getEmployees", methods=["GET"], endpoint="employees")
    @api_errors(server_error="Server error: Failed to fetch data")
    def employees():
        return jsonify({"data": container.directory_service.list_employees()})
