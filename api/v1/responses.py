"""
Response envelope helpers shared by the v1 API views.
"""

from datetime import date, datetime
from typing import Any, Optional, Union

from rest_framework import serializers, status
from rest_framework.response import Response

_datetime_field = serializers.DateTimeField()
_date_field = serializers.DateField()


def format_datetime(value: Optional[Union[datetime, date]]) -> Optional[str]:
    """Render a date or datetime the same way the serializers do."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return _datetime_field.to_representation(value)
    return _date_field.to_representation(value)


def success(message: str, status_code: int = status.HTTP_200_OK, **payload: Any) -> Response:
    """
    Build the success envelope.

    Args:
        message: Human-readable message
        status_code: HTTP status code
        **payload: Operation-specific fields

    Returns:
        ``{"status": true, "message": ..., **payload}`` response
    """
    return Response({"status": True, "message": message, **payload}, status=status_code)


def caller_of(request) -> Any:
    """Return the caller attached by the bearer middleware, if any."""
    return getattr(request, "caller", None)
