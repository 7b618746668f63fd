"""
Account repository port (interface).
"""
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional
import uuid

from accounts.domain.account import Account


class AccountRepository(ABC):
    """
    Abstract repository for Account entities.

    Lookups return None or an empty list when nothing matches.
    """

    @abstractmethod
    async def insert(self, account: Account) -> Account:
        """
        Insert a new account.

        Args:
            account: Account entity to insert

        Returns:
            Stored account entity
        """
        pass

    @abstractmethod
    async def update(
        self, account_id: uuid.UUID, fields: Dict[str, Any]
    ) -> Optional[Account]:
        """
        Update selected fields of an account.

        Returns:
            Updated account entity or None if not found
        """
        pass

    @abstractmethod
    async def delete(self, account_id: uuid.UUID) -> bool:
        """
        Remove an account.

        Only used to undo a half-finished admin creation.

        Returns:
            True if an account was removed
        """
        pass

    @abstractmethod
    async def find_by_id(self, account_id: uuid.UUID) -> Optional[Account]:
        """Find an account by ID."""
        pass

    @abstractmethod
    async def find_by_email(self, email: str) -> Optional[Account]:
        """Find an account by email."""
        pass

    @abstractmethod
    async def exists_by_email(self, email: str) -> bool:
        """Check if an email is already registered."""
        pass

    @abstractmethod
    async def list_by_role(self, role: str) -> List[Account]:
        """List accounts with a role, newest first."""
        pass
