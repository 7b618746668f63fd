"""
ActivateLicenseHandler.

Binds an unused license key to the calling account.
"""

import logging
from datetime import datetime, timezone

from accounts.ports.account_repository import AccountRepository
from core.domain.exceptions import (
    AccountNotFoundError,
    ActiveLicenseExistsError,
    InvalidArgumentError,
    InvalidFormatError,
    LicenseAlreadyUsedError,
    LicenseAssignedToAnotherAdminError,
    LicenseNotFoundError,
    UnauthenticatedError,
)
from core.domain.value_objects import LicenseKeyString, LicenseStatus
from core.infrastructure.events import event_bus
from core.metrics import license_operations_total
from licenses.application.commands.activate_license import ActivateLicenseCommand
from licenses.application.dto.license_dto import ActivationResultDTO, LicenseDTO
from licenses.domain.events import LicenseActivated
from licenses.ports.license_repository import LicenseRepository

logger = logging.getLogger(__name__)

INVALID_KEY_FORMAT_MESSAGE = "Invalid license key format. Expected format: APP-XXXX-YYYY-ZZZZ"


class ActivateLicenseHandler:
    """Handler for ActivateLicenseCommand."""

    def __init__(
        self,
        license_repository: LicenseRepository,
        account_repository: AccountRepository,
        bus=None,
    ):
        """Initialize handler with repositories."""
        self.license_repository = license_repository
        self.account_repository = account_repository
        self.event_bus = bus or event_bus

    async def handle(self, command: ActivateLicenseCommand) -> ActivationResultDTO:
        """
        Handle activate license command.

        Activation is idempotent for the owning account. For an unused
        key the assignment is a conditional update, so only one of two
        concurrent claims can win.

        Args:
            command: ActivateLicenseCommand

        Returns:
            ActivationResultDTO

        Raises:
            UnauthenticatedError: If there is no caller
            InvalidArgumentError: If the key is missing
            InvalidFormatError: If the key is malformed
            LicenseNotFoundError: If the key is unknown
            AccountNotFoundError: If the caller has no account
            ConflictError: If the key belongs to someone else, is no
                longer claimable, or the caller already holds an active license
        """
        caller = command.caller
        if caller is None or not caller.email:
            raise UnauthenticatedError()

        if not command.license_key or not str(command.license_key).strip():
            raise InvalidArgumentError("License key is required")

        try:
            key = LicenseKeyString.parse(command.license_key).value
        except ValueError as e:
            raise InvalidFormatError(INVALID_KEY_FORMAT_MESSAGE) from e

        license = await self.license_repository.find_by_key(key)
        if not license:
            raise LicenseNotFoundError("Invalid license key")

        account = await self.account_repository.find_by_email(caller.email)
        if not account:
            raise AccountNotFoundError()

        if license.is_owned_by(account.id):
            if license.is_fully_active():
                return ActivationResultDTO(
                    message="License is already active for your account",
                    already_active=True,
                    license=LicenseDTO.from_entity(license),
                )
            updated = await self.license_repository.update(
                license.id,
                {
                    "assigned_email": account.email,
                    "status": LicenseStatus.ACTIVE,
                    "is_active": True,
                },
            )
            license_operations_total.labels(operation="activate", result="reactivated").inc()
            await self.event_bus.publish(
                LicenseActivated(license_id=license.id, admin_id=account.id, email=account.email)
            )
            return ActivationResultDTO(
                message="License activated successfully",
                already_active=False,
                license=LicenseDTO.from_entity(
                    updated or license.activated_for(account.id, account.email)
                ),
            )

        if license.is_assigned:
            logger.warning(
                "Activation of license owned by another account rejected",
                extra={"license_id": str(license.id), "caller_id": str(account.id)},
            )
            raise LicenseAssignedToAnotherAdminError()

        if not license.is_unused:
            raise LicenseAlreadyUsedError()

        now = datetime.now(timezone.utc)
        held = await self.license_repository.find_active_for_holder(account.id, account.email)
        if any(other.is_usable(now) and other.id != license.id for other in held):
            raise ActiveLicenseExistsError()

        claimed = await self.license_repository.claim_unused(key, account.id, account.email)
        if not claimed:
            logger.warning(
                "License claimed concurrently", extra={"license_id": str(license.id)}
            )
            raise LicenseAlreadyUsedError()

        license_operations_total.labels(operation="activate", result="success").inc()
        await self.event_bus.publish(
            LicenseActivated(license_id=license.id, admin_id=account.id, email=account.email)
        )

        activated = await self.license_repository.find_by_id(license.id)
        return ActivationResultDTO(
            message="License activated successfully",
            already_active=False,
            license=LicenseDTO.from_entity(
                activated or license.activated_for(account.id, account.email)
            ),
        )
