"""
UpdateLicenseExpiryCommand.
"""

import uuid
from dataclasses import dataclass
from typing import Optional

from core.domain.value_objects import Caller


@dataclass
class UpdateLicenseExpiryCommand:
    """
    Command to set or clear a license's expiry date.

    An empty ``expiry_date`` clears it, meaning the license never expires.
    """

    caller: Optional[Caller]
    license_id: uuid.UUID
    expiry_date: Optional[str] = None
