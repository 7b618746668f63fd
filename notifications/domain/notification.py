"""
Notification domain entity.
"""
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Optional


class NotificationType(Enum):
    """Kinds of notifications recorded by the license service."""

    ADMIN_CREATED = "admin_created"
    ADMIN_STATUS_CHANGED = "admin_status_changed"
    LICENSE_GENERATED = "license_generated"
    LICENSE_ACTIVATED = "license_activated"
    LICENSE_STATUS_CHANGED = "license_status_changed"
    LICENSE_EXPIRY_UPDATED = "license_expiry_updated"
    LICENSE_RENEWED = "license_renewed"
    RENEWAL_APPROVED = "renewal_approved"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Notification:
    """A message addressed to a role or to a single account."""

    id: uuid.UUID
    type: str
    message: str
    target_role: str
    target_user_id: Optional[uuid.UUID]
    related_license_id: Optional[uuid.UUID]
    is_read: bool
    created_at: datetime

    @classmethod
    def create(
        cls,
        type: str,
        message: str,
        target_role: str,
        target_user_id: Optional[uuid.UUID] = None,
        related_license_id: Optional[uuid.UUID] = None,
    ) -> "Notification":
        return cls(
            id=uuid.uuid4(),
            type=str(type),
            message=message,
            target_role=str(target_role),
            target_user_id=target_user_id,
            related_license_id=related_license_id,
            is_read=False,
            created_at=datetime.now(timezone.utc),
        )
