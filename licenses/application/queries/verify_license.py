"""
VerifyLicenseQuery.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass
class VerifyLicenseQuery:
    """Unauthenticated query checking a single license key."""

    license_key: Optional[str]
