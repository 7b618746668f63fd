"""
Admin management queries.
"""

from dataclasses import dataclass
from typing import Optional

from core.domain.value_objects import Caller

DEFAULT_EXPIRING_WITHIN_DAYS = 7


@dataclass
class ListAdminsQuery:
    """Query every admin account with its license."""

    caller: Optional[Caller]


@dataclass
class ListExpiringLicensesQuery:
    """Query enabled licenses expiring within ``days`` calendar days."""

    caller: Optional[Caller]
    days: int = DEFAULT_EXPIRING_WITHIN_DAYS


@dataclass
class GetMyAdminDataQuery:
    """Query the calling admin's own account and license."""

    caller: Optional[Caller]
