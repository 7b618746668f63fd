"""
Admin management DTOs for API responses.
"""
import uuid
from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from accounts.domain.account import Account
from licenses.domain.license import License


@dataclass
class AdminLicenseDTO:
    """DTO for the license shown next to an admin."""

    id: uuid.UUID
    license_key: str
    status: str
    is_active: bool
    expiry_date: Optional[datetime]
    days_remaining: Optional[int]
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, license: License, now: datetime) -> "AdminLicenseDTO":
        return cls(
            id=license.id,
            license_key=license.license_key,
            status=license.status.value,
            is_active=license.is_active,
            expiry_date=license.expiry_date,
            days_remaining=license.days_remaining(now),
            created_at=license.created_at,
            updated_at=license.updated_at,
        )


@dataclass
class AdminDTO:
    """DTO for an admin account and its license."""

    id: uuid.UUID
    email: str
    user_active: bool
    license: Optional[AdminLicenseDTO]

    @classmethod
    def from_entities(
        cls, account: Account, license: Optional[License], now: datetime
    ) -> "AdminDTO":
        return cls(
            id=account.id,
            email=account.email,
            user_active=account.is_active,
            license=AdminLicenseDTO.from_entity(license, now) if license else None,
        )


@dataclass
class CreatedAdminDTO:
    """DTO for create admin response."""

    admin_id: uuid.UUID
    email: str
    role: str
    license_id: uuid.UUID
    license_key: str
    expiry_date: Optional[datetime]
    start_date: date


@dataclass
class AdminToggleDTO:
    """DTO for toggle admin response."""

    admin_id: uuid.UUID
    is_active: bool


@dataclass
class AdminExpiryDTO:
    """DTO for admin expiry update response."""

    admin_id: uuid.UUID
    expiry_date: Optional[datetime]
    updated_licenses: int


@dataclass
class ExpiringLicenseDTO:
    """DTO for a license that expires soon."""

    admin_id: uuid.UUID
    email: str
    license_id: uuid.UUID
    license_key: str
    expiry_date: datetime
    days_remaining: int
