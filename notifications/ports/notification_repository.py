"""
Notification repository port (interface).
"""
from abc import ABC, abstractmethod
from typing import List
import uuid

from notifications.domain.notification import Notification


class NotificationRepository(ABC):
    """Abstract repository for Notification entities."""

    @abstractmethod
    async def insert(self, notification: Notification) -> Notification:
        """Insert a notification."""
        pass

    @abstractmethod
    async def list_for_role(self, role: str) -> List[Notification]:
        """List notifications addressed to a role, newest first."""
        pass

    @abstractmethod
    async def list_for_user(self, user_id: uuid.UUID) -> List[Notification]:
        """List notifications addressed to one account, newest first."""
        pass
