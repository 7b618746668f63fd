"""
API exception handlers.

This module provides custom exception handling for REST API responses.
Every failure is rendered as ``{"status": false, "message": ..., "code": ...}``.
"""

import logging
from typing import Any, Dict, Optional

from django.http import Http404
from rest_framework import status
from rest_framework.exceptions import APIException, ValidationError
from rest_framework.response import Response
from rest_framework.views import exception_handler

from core.domain.exceptions import (
    ConflictError,
    DomainException,
    ForbiddenError,
    InfrastructureError,
    InvalidArgumentError,
    InvalidFormatError,
    KeyspaceExhaustedError,
    NotFoundError,
    UnauthenticatedError,
)
from core.metrics import errors_total

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "An internal error occurred"

DOMAIN_STATUS_CODES = (
    (UnauthenticatedError, status.HTTP_401_UNAUTHORIZED),
    (ForbiddenError, status.HTTP_403_FORBIDDEN),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (InvalidFormatError, status.HTTP_400_BAD_REQUEST),
    (InvalidArgumentError, status.HTTP_400_BAD_REQUEST),
    (ConflictError, status.HTTP_400_BAD_REQUEST),
    (KeyspaceExhaustedError, status.HTTP_500_INTERNAL_SERVER_ERROR),
    (InfrastructureError, status.HTTP_500_INTERNAL_SERVER_ERROR),
)


def error_body(message: str, code: str) -> Dict[str, Any]:
    """Build the failure envelope."""
    return {"status": False, "message": message, "code": code}


def status_code_for(exc: DomainException) -> int:
    """Map a domain exception to its HTTP status code."""
    for exc_type, status_code in DOMAIN_STATUS_CODES:
        if isinstance(exc, exc_type):
            return status_code
    return status.HTTP_400_BAD_REQUEST


def custom_exception_handler(exc: Exception, context: Dict[str, Any]) -> Response:
    """Custom exception handler for REST API."""
    trace_id = _get_trace_id(context)

    if isinstance(exc, DomainException):
        response = _handle_domain_exception(exc, context, trace_id)
    elif isinstance(exc, ValidationError):
        response = Response(
            error_body(_first_validation_message(exc.detail), "VALIDATION_ERROR"),
            status=status.HTTP_400_BAD_REQUEST,
        )
    elif isinstance(exc, APIException):
        response = exception_handler(exc, context)
        code = exc.default_code.upper().replace("-", "_")
        response.data = error_body(str(exc.detail), code)
    elif isinstance(exc, Http404):
        response = Response(
            error_body("Resource not found", "NOT_FOUND"),
            status=status.HTTP_404_NOT_FOUND,
        )
    else:
        response = _handle_unexpected_exception(exc, context, trace_id)

    if trace_id:
        response["X-Trace-ID"] = trace_id
    return response


def _get_trace_id(context: Dict[str, Any]) -> Optional[str]:
    """Extract trace ID from request context."""
    request = context.get("request")
    if not request:
        return None
    return getattr(request, "trace_id", getattr(request, "correlation_id", None))


def _endpoint(context: Dict[str, Any]) -> str:
    view = context.get("view")
    return view.__class__.__name__ if view else "unknown"


def _first_validation_message(detail: Any) -> str:
    """Flatten DRF validation details into a single message."""
    if isinstance(detail, dict):
        for field, value in detail.items():
            message = _first_validation_message(value)
            return message if field == "non_field_errors" else f"{field}: {message}"
    if isinstance(detail, list) and detail:
        return _first_validation_message(detail[0])
    return str(detail) if detail else "Invalid request"


def _handle_domain_exception(
    exc: DomainException, context: Dict[str, Any], trace_id: Optional[str]
) -> Response:
    """Handle domain-specific exceptions."""
    status_code = status_code_for(exc)

    if status_code >= 500:
        logger.error(
            "Domain exception: %s - %s",
            exc.code,
            exc.message,
            extra={"trace_id": trace_id},
            exc_info=exc.__cause__ is not None,
        )
        errors_total.labels(error_type=exc.code, endpoint=_endpoint(context)).inc()
    else:
        logger.warning(
            "Domain exception: %s - %s", exc.code, exc.message, extra={"trace_id": trace_id}
        )

    return Response(error_body(exc.message, exc.code), status=status_code)


def _handle_unexpected_exception(
    exc: Exception, context: Dict[str, Any], trace_id: Optional[str]
) -> Response:
    """Handle unexpected or untracked exceptions."""
    logger.error("Unexpected error: %s", exc, extra={"trace_id": trace_id}, exc_info=True)
    errors_total.labels(error_type=type(exc).__name__, endpoint=_endpoint(context)).inc()
    return Response(
        error_body(GENERIC_ERROR_MESSAGE, "INTERNAL_ERROR"),
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
