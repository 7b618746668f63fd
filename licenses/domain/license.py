"""
License domain entity.

This is the core domain entity representing a license.
It contains business logic and is independent of infrastructure.
"""
import uuid
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Optional

from core.domain.value_objects import LicenseStatus


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class License:
    """
    License domain entity.

    Represents a license key that grants an administrative account
    continued access. ``status`` and ``is_active`` are independent:
    ``status`` tracks assignment, ``is_active`` gates access.
    """

    id: uuid.UUID
    license_key: str
    status: LicenseStatus
    is_active: bool
    admin_id: Optional[uuid.UUID]
    assigned_email: Optional[str]
    expiry_date: Optional[datetime]
    created_at: datetime
    updated_at: datetime

    def __post_init__(self):
        """Validate license entity."""
        if not self.license_key:
            raise ValueError("License key is required")

    @classmethod
    def create(
        cls,
        license_key: str,
        expiry_date: Optional[datetime] = None,
        license_id: Optional[uuid.UUID] = None,
    ) -> "License":
        """
        Create a new, unassigned License entity.

        Args:
            license_key: Unique license key string
            expiry_date: Optional expiration datetime
            license_id: Optional UUID (generated if not provided)

        Returns:
            License entity instance
        """
        now = _now()
        return cls(
            id=license_id or uuid.uuid4(),
            license_key=license_key,
            status=LicenseStatus.UNUSED,
            is_active=True,
            admin_id=None,
            assigned_email=None,
            expiry_date=expiry_date,
            created_at=now,
            updated_at=now,
        )

    @classmethod
    def create_assigned(
        cls,
        license_key: str,
        admin_id: uuid.UUID,
        assigned_email: str,
        expiry_date: Optional[datetime] = None,
    ) -> "License":
        """Create a license that is already active for an admin account."""
        return replace(
            cls.create(license_key=license_key, expiry_date=expiry_date),
            status=LicenseStatus.ACTIVE,
            admin_id=admin_id,
            assigned_email=assigned_email,
        )

    @property
    def is_unused(self) -> bool:
        return self.status == LicenseStatus.UNUSED

    @property
    def is_assigned(self) -> bool:
        return self.admin_id is not None

    def is_owned_by(self, account_id: uuid.UUID) -> bool:
        """Check whether the license is assigned to the given account."""
        return self.admin_id is not None and str(self.admin_id) == str(account_id)

    def is_expired(self, current_time: Optional[datetime] = None) -> bool:
        """
        Check whether the expiry date has strictly passed.

        Args:
            current_time: Current time (defaults to now, UTC)

        Returns:
            True if an expiry date is set and lies before ``current_time``
        """
        if self.expiry_date is None:
            return False
        return (current_time or _now()) > self.expiry_date

    def is_usable(self, current_time: Optional[datetime] = None) -> bool:
        """
        Check if the license currently grants access.

        A license is usable when it is active and either never expires
        or expires in the future.
        """
        if not self.is_active:
            return False
        if self.expiry_date is None:
            return True
        return self.expiry_date > (current_time or _now())

    def is_fully_active(self) -> bool:
        """Check whether the license is both assigned-active and enabled."""
        return self.status == LicenseStatus.ACTIVE and self.is_active

    def days_remaining(self, current_time: Optional[datetime] = None) -> Optional[int]:
        """
        Calendar days until expiry.

        Returns:
            None when the license never expires, -1 when it has expired,
            otherwise the number of calendar days left
        """
        if self.expiry_date is None:
            return None
        now = current_time or _now()
        if self.expiry_date <= now:
            return -1
        expiry = self.expiry_date.astimezone(now.tzinfo) if now.tzinfo else self.expiry_date
        return (expiry.date() - now.date()).days

    def activated_for(self, admin_id: uuid.UUID, email: str) -> "License":
        """Return a copy assigned to ``admin_id`` and enabled."""
        if self.is_assigned and not self.is_owned_by(admin_id):
            raise ValueError("License is assigned to another account")
        return replace(
            self,
            admin_id=admin_id,
            assigned_email=email,
            status=LicenseStatus.ACTIVE,
            is_active=True,
            updated_at=_now(),
        )

    def toggled(self) -> "License":
        """Return a copy with ``is_active`` flipped."""
        return replace(self, is_active=not self.is_active, updated_at=_now())

    def with_expiry(self, expiry_date: Optional[datetime]) -> "License":
        """Return a copy with a new (or cleared) expiry date."""
        return replace(self, expiry_date=expiry_date, updated_at=_now())

    def renewed(self, expiry_date: datetime) -> "License":
        """Return a copy renewed until ``expiry_date`` and forced active."""
        return replace(
            self,
            expiry_date=expiry_date,
            status=LicenseStatus.ACTIVE,
            is_active=True,
            updated_at=_now(),
        )
