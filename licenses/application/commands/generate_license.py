"""
GenerateLicenseCommand.
"""

from dataclasses import dataclass
from typing import Optional

from core.domain.value_objects import Caller


@dataclass
class GenerateLicenseCommand:
    """Command to generate a new, unused license key."""

    caller: Optional[Caller]
    expiry_date: Optional[str] = None  # YYYY-MM-DD
