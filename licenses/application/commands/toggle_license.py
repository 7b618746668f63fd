"""
ToggleLicenseCommand.
"""

import uuid
from dataclasses import dataclass
from typing import Optional

from core.domain.value_objects import Caller


@dataclass
class ToggleLicenseCommand:
    """Command to flip a license's active flag."""

    caller: Optional[Caller]
    license_id: uuid.UUID
