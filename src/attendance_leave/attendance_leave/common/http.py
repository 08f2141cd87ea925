from __future__ import annotations

import logging
from functools import wraps
from typing import Any, Mapping, Optional

from flask import jsonify, request

from ..core.exceptions import DomainError, EmptyTableError

logger = logging.getLogger(__name__)


def json_payload() -> dict:
    """Request body as a dict; anything that is not a JSON object reads as empty."""
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def error_response(message: str, status: int, *, details: Optional[str] = None, extra: Optional[Mapping[str, Any]] = None):
    body: dict = dict(extra or {})
    body["error"] = message
    if details:
        body["details"] = details
    return jsonify(body), status


def api_errors(*, empty_status: int = 404, server_error: str = "Internal server error", extra: Optional[Mapping[str, Any]] = None):
    """Map domain errors raised by a view to JSON error replies.

    ``empty_status`` is the status for an empty sheet, which differs per endpoint.
    """

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            try:
                return view(*args, **kwargs)
            except EmptyTableError as e:
                return error_response(e.message, empty_status, details=e.details, extra=extra)
            except DomainError as e:
                if e.status_code >= 500:
                    logger.error("%s %s failed: %s", request.method, request.path, e)
                return error_response(e.message, e.status_code, details=e.details, extra=extra)
            except Exception as e:
                logger.exception("Unhandled error in %s %s", request.method, request.path)
                return error_response(server_error, 500, details=str(e), extra=extra)

        return wrapper

    return decorator
