"""Global exception handlers for the notification service."""

import logging
import traceback
from datetime import UTC, datetime
from typing import Any

from django.conf import settings
from django.core.exceptions import PermissionDenied
from django.http import Http404

from rest_framework import status
from rest_framework.exceptions import APIException
from rest_framework.response import Response
from rest_framework.views import exception_handler

from core.exceptions.notification_exceptions import (
    NotificationNotFoundError,
    ResourceNotFoundError,
    TemplateNotFoundError,
    UnknownJobError,
)
from core.logging.context import get_request_id

logger = logging.getLogger(__name__)

_NOT_FOUND_ERRORS = (NotificationNotFoundError, ResourceNotFoundError, UnknownJobError)


def custom_exception_handler(
    exc: Exception, context: dict[str, Any]
) -> Response | None:
    """Custom exception handler for Django REST Framework.

    Handles DRF, Django and notification pipeline exceptions, providing:
    - Standard response format for clients: {status, message, request_id, timestamp}
    - Detailed logging for troubleshooting: error type, path, stack trace

    Args:
        exc: The exception that was raised.
        context: Context dictionary containing request and view information.

    Returns:
        A Response object with the error details.
    """
    view = context.get("view")
    request = view.request if view else None
    request_id = get_request_id()

    # Let DRF handle its own exceptions first
    response = exception_handler(exc, context)

    if response is None:
        if isinstance(exc, _NOT_FOUND_ERRORS):
            response = _error_response(status.HTTP_404_NOT_FOUND, str(exc), request_id)
        elif isinstance(exc, TemplateNotFoundError):
            # Permanent for the notification; surfaced as a server error
            response = _error_response(
                status.HTTP_500_INTERNAL_SERVER_ERROR, str(exc), request_id
            )
        elif isinstance(exc, Http404):
            response = _error_response(
                status.HTTP_404_NOT_FOUND,
                "The requested resource was not found.",
                request_id,
            )
        elif isinstance(exc, PermissionDenied):
            response = _error_response(
                status.HTTP_403_FORBIDDEN,
                str(exc) or "You do not have permission to perform this action.",
                request_id,
            )
        else:
            response = _error_response(
                status.HTTP_500_INTERNAL_SERVER_ERROR,
                "An internal server error occurred.",
                request_id,
            )

    if request_id and response:
        response["X-Request-ID"] = request_id

    _log_exception(exc, request, response)

    return response


def _error_response(
    status_code: int, message: str, request_id: str | None
) -> Response:
    """Create a response with the standard error body.

    Args:
        status_code: The HTTP status code.
        message: The error message to return to the client.
        request_id: The request ID for tracing.

    Returns:
        Response with ``{status, message, request_id, timestamp}``.
    """
    return Response(
        {
            "status": status_code,
            "message": message,
            "request_id": request_id,
            "timestamp": datetime.now(UTC).isoformat(),
        },
        status=status_code,
    )


def _log_exception(
    exc: Exception,
    request: Any,
    response: Response | None,
) -> None:
    """Log exception details; client errors as warnings, the rest as errors.

    In DEBUG mode the log line includes the stack trace.
    """
    status_code = response.status_code if response else 500
    if isinstance(exc, (Http404, APIException)) or 400 <= status_code < 500:
        log_level = logging.WARNING if status_code < 500 else logging.ERROR
    else:
        log_level = logging.ERROR

    request_path = request.path if request else "unknown"
    request_method = request.method if request else "unknown"

    log_message = (
        f"Exception occurred: {type(exc).__name__}: {exc} | "
        f"Path: {request_method} {request_path} | "
        f"Status: {status_code}"
    )

    if settings.DEBUG:
        stack_trace = "".join(
            traceback.format_exception(type(exc), exc, exc.__traceback__)
        )
        log_message += f"\nStack trace:\n{stack_trace}"

    logger.log(log_level, log_message)
