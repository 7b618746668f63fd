"""
UpdateAdminExpiryCommand.
"""

import uuid
from dataclasses import dataclass
from typing import Optional

from core.domain.value_objects import Caller


@dataclass
class UpdateAdminExpiryCommand:
    """Command to set or clear the expiry of every license an admin owns."""

    caller: Optional[Caller]
    admin_id: uuid.UUID
    expiry_date: Optional[str] = None
