"""
CreateAdminCommand.

Command to create an admin account together with its license.
"""

from dataclasses import dataclass
from typing import Optional

from core.domain.value_objects import Caller


@dataclass
class CreateAdminCommand:
    """
    Command to create an admin with an active license.

    The license expiry comes from ``expiry_date`` when given, otherwise
    from ``start_date`` (default today) plus ``license_period_days``.
    Without either the license never expires.
    """

    caller: Optional[Caller]
    email: Optional[str]
    password: Optional[str]
    start_date: Optional[str] = None
    expiry_date: Optional[str] = None
    license_period_days: Optional[int] = None
