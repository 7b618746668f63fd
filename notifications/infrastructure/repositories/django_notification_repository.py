"""
Django implementation of NotificationRepository port.
"""
import uuid
from typing import List

from asgiref.sync import sync_to_async

from core.infrastructure.database import as_bool, translate_database_errors
from notifications.domain.notification import Notification
from notifications.infrastructure.models import Notification as NotificationModel
from notifications.ports.notification_repository import NotificationRepository


class DjangoNotificationRepository(NotificationRepository):
    """Django ORM implementation of NotificationRepository."""

    def _to_domain(self, model: NotificationModel) -> Notification:
        return Notification(
            id=model.id,
            type=model.type,
            message=model.message,
            target_role=model.target_role,
            target_user_id=model.target_user_id,
            related_license_id=model.related_license_id,
            is_read=as_bool(model.is_read),
            created_at=model.created_at,
        )

    @sync_to_async
    def insert(self, notification: Notification) -> Notification:
        with translate_database_errors("notification.insert"):
            model = NotificationModel.objects.create(
                id=notification.id,
                type=notification.type,
                message=notification.message,
                target_role=notification.target_role,
                target_user_id=notification.target_user_id,
                related_license_id=notification.related_license_id,
                is_read=notification.is_read,
            )
            return self._to_domain(model)

    @sync_to_async
    def list_for_role(self, role: str) -> List[Notification]:
        with translate_database_errors("notification.list_for_role"):
            models = NotificationModel.objects.filter(target_role=role).order_by("-created_at")
            return [self._to_domain(model) for model in models]

    @sync_to_async
    def list_for_user(self, user_id: uuid.UUID) -> List[Notification]:
        with translate_database_errors("notification.list_for_user"):
            models = NotificationModel.objects.filter(target_user_id=user_id).order_by(
                "-created_at"
            )
            return [self._to_domain(model) for model in models]
