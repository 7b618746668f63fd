"""
Django management command to report licenses that expire soon.

Meant to run periodically (e.g., via cron) so upcoming
expirations show up in the logs before admins lose access.
"""

import logging
import uuid

from asgiref.sync import async_to_sync
from django.core.management.base import BaseCommand, CommandError

from accounts.application.handlers.admin_management_handlers import ListExpiringLicensesHandler
from accounts.application.queries.admin_queries import (
    DEFAULT_EXPIRING_WITHIN_DAYS,
    ListExpiringLicensesQuery,
)
from accounts.infrastructure.repositories.django_account_repository import (
    DjangoAccountRepository,
)
from core.domain.exceptions import InvalidArgumentError
from core.domain.value_objects import Caller, Role
from licenses.infrastructure.repositories.django_license_repository import DjangoLicenseRepository

logger = logging.getLogger(__name__)

# Identity used for scheduled jobs; never matches a stored account
SYSTEM_CALLER = Caller(id=uuid.UUID(int=0), email="system@localhost", role=Role.SUPERADMIN.value)


class Command(BaseCommand):
    """Command to report expiring licenses."""

    help = "List enabled admin licenses that expire within the given number of days"

    def add_arguments(self, parser):
        """Add command arguments."""
        parser.add_argument(
            "--days",
            type=int,
            default=DEFAULT_EXPIRING_WITHIN_DAYS,
            help=f"Window in calendar days (default: {DEFAULT_EXPIRING_WITHIN_DAYS})",
        )

    def handle(self, *args, **options):
        """Execute the command."""
        handler = ListExpiringLicensesHandler(
            account_repository=DjangoAccountRepository(),
            license_repository=DjangoLicenseRepository(),
        )
        try:
            licenses = async_to_sync(handler.handle)(
                ListExpiringLicensesQuery(caller=SYSTEM_CALLER, days=options["days"])
            )
        except InvalidArgumentError as e:
            raise CommandError(e.message) from e

        self.stdout.write(
            f"Found {len(licenses)} license(s) expiring within {options['days']} day(s)"
        )
        for item in licenses:
            logger.warning(
                "License expiring soon",
                extra={
                    "license_id": str(item.license_id),
                    "admin_id": str(item.admin_id),
                    "days_remaining": item.days_remaining,
                },
            )
            self.stdout.write(
                f"  - {item.license_key} ({item.email}) expires {item.expiry_date:%Y-%m-%d}, "
                f"{item.days_remaining} day(s) left"
            )
