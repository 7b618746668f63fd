"""
ActivateLicenseCommand.

Command to bind a license key to the calling account.
"""

from dataclasses import dataclass
from typing import Optional

from core.domain.value_objects import Caller


@dataclass
class ActivateLicenseCommand:
    """
    Command to activate a license key.

    ``license_key`` is raw user input; it is trimmed and
    upper-cased by the handler.
    """

    caller: Optional[Caller]
    license_key: Optional[str]
