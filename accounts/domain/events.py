"""
Account domain events.
"""

import uuid
from datetime import datetime
from typing import Optional

from core.domain.events import DomainEvent


class AdminCreated(DomainEvent):
    """Event raised when a superadmin creates an admin with a license."""

    def __init__(
        self,
        admin_id: uuid.UUID,
        email: str,
        license_id: uuid.UUID,
        occurred_at: Optional[datetime] = None,
    ):
        """
        Initialize AdminCreated event.

        Args:
            admin_id: New admin account UUID
            email: Admin email
            license_id: License created together with the account
            occurred_at: When the event occurred
        """
        super().__init__(
            event_id=uuid.uuid4(),
            occurred_at=occurred_at,
            aggregate_id=str(admin_id),
            event_type="AdminCreated",
        )
        self.admin_id = admin_id
        self.email = email
        self.license_id = license_id


class AdminStatusToggled(DomainEvent):
    """Event raised when an admin account is activated or deactivated."""

    def __init__(
        self,
        admin_id: uuid.UUID,
        email: str,
        is_active: bool,
        occurred_at: Optional[datetime] = None,
    ):
        super().__init__(
            event_id=uuid.uuid4(),
            occurred_at=occurred_at,
            aggregate_id=str(admin_id),
            event_type="AdminStatusToggled",
        )
        self.admin_id = admin_id
        self.email = email
        self.is_active = is_active
