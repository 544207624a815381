"""
Error taxonomy for the scoring pipeline and the DRF exception handler that
renders every API error as ``{"success": false, "error": ..., "code": ...}``.
"""
import logging

from django.http import JsonResponse
from rest_framework import status
from rest_framework.exceptions import APIException, NotFound, ValidationError
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


class InvalidInput(APIException):
    """Missing or malformed request fields. The user has to fix the request."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Invalid input."
    default_code = "invalid_input"


class ServiceUnavailable(APIException):
    """The analysis engine could not be reached. Safe for the user to retry."""
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_detail = "Speech analysis service is unavailable. Please try again."
    default_code = "service_unavailable"


class AnalysisTimeout(ServiceUnavailable):
    default_detail = "Speech analysis took too long. Please try again."
    default_code = "analysis_timeout"


class ServiceRejected(APIException):
    """The engine answered but reported a failure; its message is passed through."""
    status_code = status.HTTP_502_BAD_GATEWAY
    default_detail = "Speech analysis failed."
    default_code = "service_rejected"


class SessionNotFound(NotFound):
    # same answer for "absent" and "owned by someone else"
    default_detail = "Session not found."
    default_code = "not_found"


class PersistenceError(APIException):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = "Failed to save practice session."
    default_code = "persistence_error"


def _first_message(data):
    if isinstance(data, dict):
        if "detail" in data:
            return _first_message(data["detail"])
        for value in data.values():
            return _first_message(value)
        return ""
    if isinstance(data, (list, tuple)):
        return _first_message(data[0]) if data else ""
    return str(data)


def api_exception_handler(exc, context):
    response = exception_handler(exc, context)
    if response is None:
        return None

    data = response.data
    view = context.get("view")
    view_name = view.__class__.__name__ if view is not None else "-"

    if isinstance(exc, ValidationError):
        body = {
            "success": False,
            "error": _first_message(data) or "Invalid input.",
            "code": "invalid_input",
            "fields": data,
        }
    else:
        detail = data.get("detail", data) if isinstance(data, dict) else data
        body = {
            "success": False,
            "error": _first_message(detail),
            "code": getattr(detail, "code", None) or getattr(exc, "default_code", "error"),
        }

    if response.status_code >= 500:
        logger.error("%s failed: %s (%s)", view_name, body["error"], body["code"])
    else:
        logger.info("%s rejected request: %s (%s)", view_name, body["error"], body["code"])

    response.data = body
    return response


def route_not_found(request, exception=None):
    """`handler404`: unknown URLs get the same JSON envelope as API errors."""
    return JsonResponse(
        {"success": False, "error": f"Route {request.path} not found", "code": "not_found"},
        status=status.HTTP_404_NOT_FOUND,
    )
