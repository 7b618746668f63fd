"""
Event handlers for domain events.

These handlers process domain events for side effects
like audit logging and notifications.
"""

import logging
from typing import Optional

from accounts.domain.events import AdminCreated, AdminStatusToggled
from core.domain.events import DomainEvent, EventHandler
from core.domain.value_objects import Role
from licenses.domain.events import (
    LicenseActivated,
    LicenseActiveToggled,
    LicenseExpiryUpdated,
    LicenseGenerated,
    LicenseRenewed,
)
from notifications.application.emitter import NotificationEmitter
from notifications.domain.notification import NotificationType

logger = logging.getLogger(__name__)

ALL_EVENTS = (
    LicenseGenerated,
    LicenseActivated,
    LicenseActiveToggled,
    LicenseExpiryUpdated,
    LicenseRenewed,
    AdminCreated,
    AdminStatusToggled,
)


def _format_day(value) -> str:
    return value.date().isoformat() if value else "never"


class AuditLogEventHandler(EventHandler):
    """
    Event handler for audit logging.

    Logs all domain events with their identifiers.
    """

    async def handle(self, event: DomainEvent) -> None:
        """
        Handle domain event for audit logging.

        Args:
            event: Domain event to log
        """
        logger.info(
            "Audit log: %s - %s",
            event.event_type,
            event.aggregate_id,
            extra=event.log_context(),
        )


class NotificationEventHandler(EventHandler):
    """
    Event handler recording notifications for state changes.

    Uses the Django notification store unless an emitter is given.
    """

    def __init__(self, emitter: Optional[NotificationEmitter] = None):
        self._emitter = emitter

    @property
    def emitter(self) -> NotificationEmitter:
        if self._emitter is None:
            from notifications.infrastructure.repositories.django_notification_repository import (  # noqa: E501
                DjangoNotificationRepository,
            )

            self._emitter = NotificationEmitter(DjangoNotificationRepository())
        return self._emitter

    async def handle(self, event: DomainEvent) -> None:
        """
        Translate a domain event into one or more notifications.

        Args:
            event: Domain event
        """
        superadmin = Role.SUPERADMIN.value

        if isinstance(event, LicenseRenewed):
            await self.emitter.emit(
                NotificationType.RENEWAL_APPROVED.value,
                "Your license has been renewed. "
                f"New expiry date: {_format_day(event.new_expiration)}",
                Role.ADMIN.value,
                target_user_id=event.admin_id,
                related_license_id=event.license_id,
            )
            await self.emitter.emit(
                NotificationType.LICENSE_RENEWED.value,
                f"License renewed for admin: {event.admin_email}",
                superadmin,
                related_license_id=event.license_id,
            )

        elif isinstance(event, AdminCreated):
            await self.emitter.emit(
                NotificationType.ADMIN_CREATED.value,
                f"New admin created: {event.email}",
                superadmin,
                related_license_id=event.license_id,
            )

        elif isinstance(event, AdminStatusToggled):
            state = "activated" if event.is_active else "deactivated"
            await self.emitter.emit(
                NotificationType.ADMIN_STATUS_CHANGED.value,
                f"Admin {event.email} {state}",
                superadmin,
            )

        elif isinstance(event, LicenseActivated):
            await self.emitter.emit(
                NotificationType.LICENSE_ACTIVATED.value,
                f"License activated by: {event.email}",
                superadmin,
                related_license_id=event.license_id,
            )

        elif isinstance(event, LicenseGenerated):
            await self.emitter.emit(
                NotificationType.LICENSE_GENERATED.value,
                f"New license key generated: {event.license_key}",
                superadmin,
                related_license_id=event.license_id,
            )

        elif isinstance(event, LicenseActiveToggled):
            state = "activated" if event.is_active else "deactivated"
            await self.emitter.emit(
                NotificationType.LICENSE_STATUS_CHANGED.value,
                f"License {state}",
                superadmin,
                target_user_id=None,
                related_license_id=event.license_id,
            )
            if event.admin_id and not event.is_active:
                await self.emitter.emit(
                    NotificationType.LICENSE_STATUS_CHANGED.value,
                    "Your license has been deactivated",
                    Role.ADMIN.value,
                    target_user_id=event.admin_id,
                    related_license_id=event.license_id,
                )

        elif isinstance(event, LicenseExpiryUpdated):
            await self.emitter.emit(
                NotificationType.LICENSE_EXPIRY_UPDATED.value,
                f"License expiry date updated: {_format_day(event.expiry_date)}",
                superadmin,
                related_license_id=event.license_id,
            )

        else:
            logger.debug("No notification for event: %s", event.event_type)


# Register event handlers
def register_event_handlers(bus=None, notification_handler: Optional[EventHandler] = None):
    """
    Register all event handlers with the event bus.

    Safe to call more than once: the bus ignores duplicate handler classes.
    """
    if bus is None:
        from core.infrastructure.events import event_bus

        bus = event_bus

    audit_handler = AuditLogEventHandler()
    notification_handler = notification_handler or NotificationEventHandler()

    for event_type in ALL_EVENTS:
        bus.subscribe(event_type, audit_handler)
        bus.subscribe(event_type, notification_handler)

    logger.info("Event handlers registered")
