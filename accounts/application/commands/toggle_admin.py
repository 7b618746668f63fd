"""
ToggleAdminCommand.
"""

import uuid
from dataclasses import dataclass
from typing import Optional

from core.domain.value_objects import Caller


@dataclass
class ToggleAdminCommand:
    """Command to activate or deactivate an admin account."""

    caller: Optional[Caller]
    admin_id: uuid.UUID
