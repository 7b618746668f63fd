"""
License domain events.

Domain events represent something that happened in the license domain.
"""

import uuid
from datetime import datetime
from typing import Optional

from core.domain.events import DomainEvent


class LicenseGenerated(DomainEvent):
    """Event raised when a superadmin generates a new license key."""

    def __init__(
        self,
        license_id: uuid.UUID,
        license_key: str,
        expiry_date: Optional[datetime] = None,
        occurred_at: Optional[datetime] = None,
    ):
        """
        Initialize LicenseGenerated event.

        Args:
            license_id: License UUID
            license_key: Generated key
            expiry_date: Expiry of the new license, if any
            occurred_at: When the event occurred
        """
        super().__init__(
            event_id=uuid.uuid4(),
            occurred_at=occurred_at,
            aggregate_id=str(license_id),
            event_type="LicenseGenerated",
        )
        self.license_id = license_id
        self.license_key = license_key
        self.expiry_date = expiry_date


class LicenseActivated(DomainEvent):
    """Event raised when a license is bound to an account."""

    def __init__(
        self,
        license_id: uuid.UUID,
        admin_id: uuid.UUID,
        email: str,
        occurred_at: Optional[datetime] = None,
    ):
        """
        Initialize LicenseActivated event.

        Args:
            license_id: License UUID
            admin_id: Account that activated the license
            email: Email the license was activated against
            occurred_at: When the event occurred
        """
        super().__init__(
            event_id=uuid.uuid4(),
            occurred_at=occurred_at,
            aggregate_id=str(license_id),
            event_type="LicenseActivated",
        )
        self.license_id = license_id
        self.admin_id = admin_id
        self.email = email


class LicenseActiveToggled(DomainEvent):
    """Event raised when a license's active flag is flipped."""

    def __init__(
        self,
        license_id: uuid.UUID,
        is_active: bool,
        admin_id: Optional[uuid.UUID] = None,
        occurred_at: Optional[datetime] = None,
    ):
        super().__init__(
            event_id=uuid.uuid4(),
            occurred_at=occurred_at,
            aggregate_id=str(license_id),
            event_type="LicenseActiveToggled",
        )
        self.license_id = license_id
        self.is_active = is_active
        self.admin_id = admin_id


class LicenseExpiryUpdated(DomainEvent):
    """Event raised when a license's expiry date is set or cleared."""

    def __init__(
        self,
        license_id: uuid.UUID,
        expiry_date: Optional[datetime],
        admin_id: Optional[uuid.UUID] = None,
        occurred_at: Optional[datetime] = None,
    ):
        super().__init__(
            event_id=uuid.uuid4(),
            occurred_at=occurred_at,
            aggregate_id=str(license_id),
            event_type="LicenseExpiryUpdated",
        )
        self.license_id = license_id
        self.expiry_date = expiry_date
        self.admin_id = admin_id


class LicenseRenewed(DomainEvent):
    """Event raised when a superadmin renews an admin's license."""

    def __init__(
        self,
        license_id: uuid.UUID,
        admin_id: uuid.UUID,
        admin_email: str,
        new_expiration: datetime,
        occurred_at: Optional[datetime] = None,
    ):
        """
        Initialize LicenseRenewed event.

        Args:
            license_id: License UUID
            admin_id: Admin owning the license
            admin_email: Email of the admin
            new_expiration: New expiration datetime
            occurred_at: When the event occurred
        """
        super().__init__(
            event_id=uuid.uuid4(),
            occurred_at=occurred_at,
            aggregate_id=str(license_id),
            event_type="LicenseRenewed",
        )
        self.license_id = license_id
        self.admin_id = admin_id
        self.admin_email = admin_email
        self.new_expiration = new_expiration
