"""
RenewAdminLicenseCommand.

Command to renew the license held by an admin account.
"""

import uuid
from dataclasses import dataclass
from typing import Optional

from core.domain.value_objects import Caller


@dataclass
class RenewAdminLicenseCommand:
    """
    Command to renew an admin's license.

    Exactly one of ``expiry_date`` (YYYY-MM-DD) or ``extend_days``
    must be given.
    """

    caller: Optional[Caller]
    admin_id: uuid.UUID
    expiry_date: Optional[str] = None
    extend_days: Optional[int] = None
