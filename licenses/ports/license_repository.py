"""
License repository port (interface).

This defines the contract for license persistence operations.
Implementations are in the infrastructure layer. Reads never raise
for a missing license: single lookups return None, list lookups
return an empty list.
"""
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Dict, List, Optional
import uuid

from licenses.domain.license import License


class LicenseRepository(ABC):
    """
    Abstract repository for License entities.

    This is a port in hexagonal architecture - it defines
    what operations are available, not how they're implemented.
    """

    @abstractmethod
    async def insert(self, license: License) -> License:
        """
        Insert a new license entity.

        Args:
            license: License entity to insert

        Returns:
            Stored license entity
        """
        pass

    @abstractmethod
    async def update(
        self, license_id: uuid.UUID, fields: Dict[str, Any]
    ) -> Optional[License]:
        """
        Update selected fields of a single license.

        Args:
            license_id: License UUID
            fields: Column name to new value

        Returns:
            Updated license entity or None if not found
        """
        pass

    @abstractmethod
    async def update_by_admin(
        self, admin_id: uuid.UUID, fields: Dict[str, Any]
    ) -> int:
        """
        Update selected fields of every license owned by an admin.

        Returns:
            Number of updated licenses
        """
        pass

    @abstractmethod
    async def claim_unused(
        self, license_key: str, admin_id: uuid.UUID, email: str
    ) -> bool:
        """
        Atomically assign an unused, unowned license.

        The assignment only happens when the license is still unused
        and has no owner at write time.

        Returns:
            True if this call claimed the license
        """
        pass

    @abstractmethod
    async def find_by_id(self, license_id: uuid.UUID) -> Optional[License]:
        """Find a license by ID."""
        pass

    @abstractmethod
    async def find_by_key(self, license_key: str) -> Optional[License]:
        """Find a license by its key string."""
        pass

    @abstractmethod
    async def exists_by_key(self, license_key: str) -> bool:
        """Check if a key is already stored."""
        pass

    @abstractmethod
    async def find_by_admin(self, admin_id: uuid.UUID) -> List[License]:
        """Find licenses owned by an admin, newest first."""
        pass

    @abstractmethod
    async def find_by_email(self, email: str) -> List[License]:
        """Find licenses assigned to an email, newest first."""
        pass

    @abstractmethod
    async def find_active_for_holder(
        self, admin_id: uuid.UUID, email: str
    ) -> List[License]:
        """
        Find active, enabled licenses held by an account.

        A license is held when it is owned by ``admin_id`` or
        assigned to ``email``.
        """
        pass

    @abstractmethod
    async def list_all(self) -> List[License]:
        """List every license, newest first."""
        pass

    @abstractmethod
    async def list_by_admin(self, admin_id: uuid.UUID) -> List[License]:
        """List licenses owned by an admin, newest first."""
        pass

    @abstractmethod
    async def list_expiring(self, after: datetime, before: datetime) -> List[License]:
        """
        List enabled, assigned licenses expiring in a window.

        Args:
            after: Exclusive lower bound for the expiry date
            before: Exclusive upper bound for the expiry date

        Returns:
            Licenses ordered by expiry date ascending
        """
        pass
