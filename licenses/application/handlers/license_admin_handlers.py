"""
Superadmin license handlers.

Generate, toggle, expiry update and renewal of licenses.
"""

import logging
from typing import Optional

from django.conf import settings
from django.utils import timezone as django_timezone

from accounts.application.role_gate import requires_role
from accounts.ports.account_repository import AccountRepository
from core.domain.exceptions import (
    AccountNotFoundError,
    AdminHasNoLicenseError,
    InvalidArgumentError,
    LicenseNotFoundError,
)
from core.domain.value_objects import LicenseStatus, Role
from core.infrastructure.events import event_bus
from core.metrics import license_operations_total
from licenses.application.commands.generate_license import GenerateLicenseCommand
from licenses.application.commands.renew_license import RenewAdminLicenseCommand
from licenses.application.commands.toggle_license import ToggleLicenseCommand
from licenses.application.commands.update_license_expiry import UpdateLicenseExpiryCommand
from licenses.application.dto.license_dto import (
    GeneratedLicenseDTO,
    LicenseExpiryDTO,
    LicenseToggleDTO,
)
from licenses.domain.events import (
    LicenseActiveToggled,
    LicenseExpiryUpdated,
    LicenseGenerated,
    LicenseRenewed,
)
from licenses.domain.license import License
from licenses.domain.license_key import DEFAULT_MAX_ATTEMPTS, LicenseKeyGenerator
from licenses.domain.services import ExpiryPolicy
from licenses.ports.license_repository import LicenseRepository

logger = logging.getLogger(__name__)


def default_expiry_policy() -> ExpiryPolicy:
    """Expiry policy pinned to the configured TIME_ZONE."""
    return ExpiryPolicy(django_timezone.get_default_timezone())


def key_max_attempts() -> int:
    return int(getattr(settings, "LICENSE_KEY_MAX_ATTEMPTS", DEFAULT_MAX_ATTEMPTS))


class GenerateLicenseHandler:
    """Handler for GenerateLicenseCommand."""

    def __init__(
        self,
        license_repository: LicenseRepository,
        expiry_policy: Optional[ExpiryPolicy] = None,
        max_attempts: Optional[int] = None,
        bus=None,
    ):
        """Initialize handler with repository and policies."""
        self.license_repository = license_repository
        self.expiry_policy = expiry_policy or default_expiry_policy()
        self.max_attempts = key_max_attempts() if max_attempts is None else max_attempts
        self.event_bus = bus or event_bus

    @requires_role(Role.SUPERADMIN)
    async def handle(self, command: GenerateLicenseCommand) -> GeneratedLicenseDTO:
        """
        Handle generate license command.

        Args:
            command: GenerateLicenseCommand

        Returns:
            GeneratedLicenseDTO for the new unused license

        Raises:
            InvalidFormatError: If the expiry date is malformed
            KeyspaceExhaustedError: If no unique key could be found
        """
        expiry_date = self.expiry_policy.parse_expiry(command.expiry_date)
        key = await LicenseKeyGenerator.generate_unique(
            self.license_repository, max_attempts=self.max_attempts
        )

        license = await self.license_repository.insert(
            License.create(license_key=key, expiry_date=expiry_date)
        )
        license_operations_total.labels(operation="generate", result="success").inc()
        logger.info(
            "License key generated",
            extra={"license_id": str(license.id), "caller_id": str(command.caller.id)},
        )

        await self.event_bus.publish(
            LicenseGenerated(
                license_id=license.id,
                license_key=license.license_key,
                expiry_date=license.expiry_date,
            )
        )
        return GeneratedLicenseDTO(
            id=license.id,
            license_key=license.license_key,
            expiry_date=license.expiry_date,
        )


class ToggleLicenseHandler:
    """Handler for ToggleLicenseCommand."""

    def __init__(self, license_repository: LicenseRepository, bus=None):
        """Initialize handler with repository."""
        self.license_repository = license_repository
        self.event_bus = bus or event_bus

    @requires_role(Role.SUPERADMIN)
    async def handle(self, command: ToggleLicenseCommand) -> LicenseToggleDTO:
        """
        Handle toggle license command.

        Only ``is_active`` changes; status and expiry are kept.

        Raises:
            LicenseNotFoundError: If license not found
        """
        license = await self.license_repository.find_by_id(command.license_id)
        if not license:
            raise LicenseNotFoundError()

        toggled = license.toggled()
        await self.license_repository.update(license.id, {"is_active": toggled.is_active})
        license_operations_total.labels(operation="toggle", result="success").inc()

        await self.event_bus.publish(
            LicenseActiveToggled(
                license_id=license.id,
                is_active=toggled.is_active,
                admin_id=license.admin_id,
            )
        )
        return LicenseToggleDTO(license_id=license.id, is_active=toggled.is_active)


class UpdateLicenseExpiryHandler:
    """Handler for UpdateLicenseExpiryCommand."""

    def __init__(
        self,
        license_repository: LicenseRepository,
        expiry_policy: Optional[ExpiryPolicy] = None,
        bus=None,
    ):
        """Initialize handler with repository."""
        self.license_repository = license_repository
        self.expiry_policy = expiry_policy or default_expiry_policy()
        self.event_bus = bus or event_bus

    @requires_role(Role.SUPERADMIN)
    async def handle(self, command: UpdateLicenseExpiryCommand) -> LicenseExpiryDTO:
        """
        Handle update expiry command.

        Raises:
            InvalidFormatError: If the date is malformed
            LicenseNotFoundError: If license not found
        """
        expiry_date = self.expiry_policy.parse_expiry(command.expiry_date)

        license = await self.license_repository.find_by_id(command.license_id)
        if not license:
            raise LicenseNotFoundError()

        await self.license_repository.update(license.id, {"expiry_date": expiry_date})
        license_operations_total.labels(operation="update_expiry", result="success").inc()

        await self.event_bus.publish(
            LicenseExpiryUpdated(
                license_id=license.id,
                expiry_date=expiry_date,
                admin_id=license.admin_id,
            )
        )
        return LicenseExpiryDTO(license_id=license.id, expiry_date=expiry_date)


class RenewAdminLicenseHandler:
    """Handler for RenewAdminLicenseCommand."""

    def __init__(
        self,
        license_repository: LicenseRepository,
        account_repository: AccountRepository,
        expiry_policy: Optional[ExpiryPolicy] = None,
        bus=None,
    ):
        """Initialize handler with repositories."""
        self.license_repository = license_repository
        self.account_repository = account_repository
        self.expiry_policy = expiry_policy or default_expiry_policy()
        self.event_bus = bus or event_bus

    def _parse_extend_days(self, value) -> Optional[int]:
        if value is None or value == "":
            return None
        try:
            days = int(value)
        except (TypeError, ValueError) as e:
            raise InvalidArgumentError("extend_days must be a whole number of days") from e
        if days < 1:
            raise InvalidArgumentError("extend_days must be a positive number of days")
        return days

    @requires_role(Role.SUPERADMIN)
    async def handle(self, command: RenewAdminLicenseCommand) -> LicenseExpiryDTO:
        """
        Handle renew admin license command.

        A day-count extension counts from the current expiry when the
        license has one, otherwise from now. The renewed license is
        forced active.

        Args:
            command: RenewAdminLicenseCommand

        Returns:
            LicenseExpiryDTO with the new expiry date

        Raises:
            InvalidArgumentError: If both or neither of expiry_date and
                extend_days are given
            InvalidFormatError: If expiry_date is malformed
            AccountNotFoundError: If the admin does not exist
            AdminHasNoLicenseError: If the admin holds no license
        """
        extend_days = self._parse_extend_days(command.extend_days)
        has_date = bool(command.expiry_date and str(command.expiry_date).strip())
        if has_date and extend_days is not None:
            raise InvalidArgumentError("Provide either expiry_date or extend_days, not both")
        if not has_date and extend_days is None:
            raise InvalidArgumentError("Either expiry_date or extend_days is required")
        absolute_expiry = self.expiry_policy.parse_expiry(command.expiry_date) if has_date else None

        admin = await self.account_repository.find_by_id(command.admin_id)
        if not admin or not admin.is_admin:
            raise AccountNotFoundError("Admin not found")

        licenses = await self.license_repository.find_by_admin(admin.id)
        if not licenses:
            raise AdminHasNoLicenseError()
        license = licenses[0]

        if absolute_expiry is not None:
            new_expiry = absolute_expiry
        else:
            new_expiry = self.expiry_policy.extend(license.expiry_date, extend_days)

        renewed = license.renewed(new_expiry)
        await self.license_repository.update(
            license.id,
            {
                "expiry_date": renewed.expiry_date,
                "is_active": True,
                "status": LicenseStatus.ACTIVE,
            },
        )
        license_operations_total.labels(operation="renew", result="success").inc()

        await self.event_bus.publish(
            LicenseRenewed(
                license_id=license.id,
                admin_id=admin.id,
                admin_email=admin.email,
                new_expiration=new_expiry,
            )
        )
        return LicenseExpiryDTO(license_id=license.id, expiry_date=new_expiry)
