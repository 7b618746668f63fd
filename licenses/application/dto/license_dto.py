"""
License DTOs for API responses.
"""
import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from licenses.domain.license import License


@dataclass
class LicenseDTO:
    """DTO for license information."""

    id: uuid.UUID
    license_key: str
    status: str
    is_active: bool
    admin_id: Optional[uuid.UUID]
    assigned_email: Optional[str]
    expiry_date: Optional[datetime]
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, license: License) -> "LicenseDTO":
        return cls(
            id=license.id,
            license_key=license.license_key,
            status=license.status.value,
            is_active=license.is_active,
            admin_id=license.admin_id,
            assigned_email=license.assigned_email,
            expiry_date=license.expiry_date,
            created_at=license.created_at,
            updated_at=license.updated_at,
        )


@dataclass
class ActivationResultDTO:
    """DTO for activation outcome."""

    message: str
    already_active: bool
    license: LicenseDTO


@dataclass
class LicenseCheckDTO:
    """DTO for validate and verify responses."""

    valid: bool
    message: str


@dataclass
class GeneratedLicenseDTO:
    """DTO for a freshly generated license key."""

    id: uuid.UUID
    license_key: str
    expiry_date: Optional[datetime]


@dataclass
class LicenseToggleDTO:
    """DTO for toggle response."""

    license_id: uuid.UUID
    is_active: bool


@dataclass
class LicenseExpiryDTO:
    """DTO for expiry update and renewal responses."""

    license_id: uuid.UUID
    expiry_date: Optional[datetime]
