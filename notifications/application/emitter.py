"""
Notification emitter.

Recording a notification is best-effort: a failure is logged and
never reaches the operation that triggered it.
"""

import logging
import uuid
from typing import Optional

from notifications.domain.notification import Notification
from notifications.ports.notification_repository import NotificationRepository

logger = logging.getLogger(__name__)


class NotificationEmitter:
    """Records notifications through a NotificationRepository."""

    def __init__(self, repository: NotificationRepository):
        self.repository = repository

    async def emit(
        self,
        type: str,
        message: str,
        target_role: str,
        target_user_id: Optional[uuid.UUID] = None,
        related_license_id: Optional[uuid.UUID] = None,
    ) -> Optional[Notification]:
        """
        Record a notification.

        Args:
            type: Notification type
            message: Human-readable message
            target_role: Role the notification is addressed to
            target_user_id: Single recipient, if any
            related_license_id: License the notification is about, if any

        Returns:
            Stored notification, or None if recording failed
        """
        try:
            notification = Notification.create(
                type=type,
                message=message,
                target_role=target_role,
                target_user_id=target_user_id,
                related_license_id=related_license_id,
            )
            return await self.repository.insert(notification)
        except Exception as e:  # pylint: disable=broad-exception-caught
            logger.error(
                f"Failed to record {type} notification: {e}",
                exc_info=True,
                extra={"notification_type": str(type), "target_role": str(target_role)},
            )
            return None
