"""
Database utilities and error translation.
"""

import contextlib
import logging
from typing import Any, Iterator

from django.db import DatabaseError

from core.domain.exceptions import InfrastructureError

logger = logging.getLogger(__name__)


@contextlib.contextmanager
def translate_database_errors(operation: str) -> Iterator[None]:
    """
    Context manager turning store failures into InfrastructureError.

    Usage:
        with translate_database_errors("license.find_by_key"):
            # Database operations
            pass
    """
    try:
        yield
    except DatabaseError as e:
        logger.error(
            f"Database error during {operation}: {e}",
            exc_info=True,
            extra={"operation": operation},
        )
        raise InfrastructureError() from e


def as_bool(value: Any) -> bool:
    """
    Normalize a stored boolean.

    Older rows may hold 0/1 integers or "true"/"false" strings.
    """
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "t", "yes")
    return bool(value)
