"""
API Response Utilities - Standardized success payloads and request helpers
"""

from flask import request


class ErrorCode:
    SUCCESS = "SUCCESS"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    INTERNAL_ERROR = "INTERNAL_ERROR"
    DATABASE_ERROR = "DATABASE_ERROR"
    STORE_UNAVAILABLE = "STORE_UNAVAILABLE"
    UPLOAD_ERROR = "UPLOAD_ERROR"


def success_response(data=None, message=None, status_code=200):
    """
    Standard success response format for API endpoints.
    Returned as a (payload, status) pair so flask-restx renders it.
    """
    response = {"code": ErrorCode.SUCCESS, "success": True}

    if data is not None:
        response["data"] = data

    if message:
        response["message"] = message

    return response, status_code


def created_response(data, message=None):
    return success_response(data, message=message, status_code=201)


def request_payload():
    """
    Return the request body as a dict, whether it was sent as JSON or as a form.
    Multipart forms keep repeated fields (e.g. several `tags` entries) as lists.
    """
    if request.is_json:
        body = request.get_json(silent=True)
        return body if isinstance(body, dict) else {}

    payload = {}
    for key in request.form.keys():
        values = request.form.getlist(key)
        payload[key] = values if len(values) > 1 else values[0]
    return payload


def query_flag(name, default=False):
    """Read a boolean query-string flag (`?with_tags=false`)."""
    value = request.args.get(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")
