"""
ValidateLicenseQuery.
"""

from dataclasses import dataclass
from typing import Optional

from core.domain.value_objects import Caller


@dataclass
class ValidateLicenseQuery:
    """Query whether the calling account currently holds a usable license."""

    caller: Optional[Caller]
