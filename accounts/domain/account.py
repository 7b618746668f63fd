"""
Account domain entity.

Accounts are the administrative users the license service serves.
The service reads them to resolve identity and role, and the admin
management use cases create and toggle admin accounts.
"""
import uuid
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Optional

from core.domain.value_objects import Email, Role


@dataclass(frozen=True)
class Account:
    """
    Account domain entity.

    ``role`` is kept as a plain string: besides ``admin`` and
    ``superadmin`` the wider system knows other roles the license
    service only has to reject.
    """

    id: uuid.UUID
    email: str
    role: str
    is_active: bool
    password_hash: str
    created_at: datetime
    updated_at: datetime

    def __post_init__(self):
        """Validate account entity."""
        Email(self.email)

    @classmethod
    def create(
        cls,
        email: str,
        password_hash: str,
        role: str = Role.ADMIN.value,
        account_id: Optional[uuid.UUID] = None,
    ) -> "Account":
        """
        Create a new, active Account entity.

        Args:
            email: Login email
            password_hash: Already hashed password
            role: Account role
            account_id: Optional UUID (generated if not provided)

        Returns:
            Account entity instance
        """
        now = datetime.now(timezone.utc)
        return cls(
            id=account_id or uuid.uuid4(),
            email=email,
            role=role,
            is_active=True,
            password_hash=password_hash,
            created_at=now,
            updated_at=now,
        )

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN.value

    @property
    def is_superadmin(self) -> bool:
        return self.role == Role.SUPERADMIN.value

    def toggled(self) -> "Account":
        """Return a copy with ``is_active`` flipped."""
        return replace(self, is_active=not self.is_active, updated_at=datetime.now(timezone.utc))
