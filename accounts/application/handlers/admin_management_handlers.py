"""
Admin management handlers.

Superadmin workflows around admin accounts and their licenses,
plus the admin's own view of its account.
"""

import logging
from datetime import datetime, time, timedelta, timezone
from typing import List, Optional

from django.contrib.auth.hashers import make_password

from accounts.application.commands.create_admin import CreateAdminCommand
from accounts.application.commands.toggle_admin import ToggleAdminCommand
from accounts.application.commands.update_admin_expiry import UpdateAdminExpiryCommand
from accounts.application.dto.admin_dto import (
    AdminDTO,
    AdminExpiryDTO,
    AdminToggleDTO,
    CreatedAdminDTO,
    ExpiringLicenseDTO,
)
from accounts.application.queries.admin_queries import (
    GetMyAdminDataQuery,
    ListAdminsQuery,
    ListExpiringLicensesQuery,
)
from accounts.application.role_gate import requires_role
from accounts.domain.account import Account
from accounts.domain.events import AdminCreated, AdminStatusToggled
from accounts.ports.account_repository import AccountRepository
from core.domain.exceptions import (
    AccountAlreadyExistsError,
    AccountNotFoundError,
    InvalidArgumentError,
    LicenseNotFoundError,
)
from core.domain.value_objects import Email, Role
from core.infrastructure.events import event_bus
from core.metrics import admin_operations_total
from licenses.application.handlers.license_admin_handlers import (
    default_expiry_policy,
    key_max_attempts,
)
from licenses.domain.events import LicenseExpiryUpdated
from licenses.domain.license import License
from licenses.domain.license_key import LicenseKeyGenerator
from licenses.domain.services import ExpiryPolicy
from licenses.ports.license_repository import LicenseRepository

logger = logging.getLogger(__name__)


async def _find_admin(account_repository: AccountRepository, admin_id) -> Account:
    admin = await account_repository.find_by_id(admin_id)
    if not admin or not admin.is_admin:
        raise AccountNotFoundError("Admin not found")
    return admin


class CreateAdminHandler:
    """Handler for CreateAdminCommand."""

    def __init__(
        self,
        account_repository: AccountRepository,
        license_repository: LicenseRepository,
        expiry_policy: Optional[ExpiryPolicy] = None,
        max_attempts: Optional[int] = None,
        bus=None,
    ):
        """Initialize handler with repositories."""
        self.account_repository = account_repository
        self.license_repository = license_repository
        self.expiry_policy = expiry_policy or default_expiry_policy()
        self.max_attempts = key_max_attempts() if max_attempts is None else max_attempts
        self.event_bus = bus or event_bus

    def _period_days(self, value) -> Optional[int]:
        if value is None or value == "":
            return None
        try:
            return int(value)
        except (TypeError, ValueError) as e:
            raise InvalidArgumentError(
                "license_period_days must be a whole number of days"
            ) from e

    @requires_role(Role.SUPERADMIN)
    async def handle(self, command: CreateAdminCommand) -> CreatedAdminDTO:
        """
        Handle create admin command.

        The license key is generated before anything is written. If the
        license insert fails the new account is removed again, so a
        failure never leaves an admin without a license behind.

        Args:
            command: CreateAdminCommand

        Returns:
            CreatedAdminDTO

        Raises:
            InvalidArgumentError: If email or password is missing
            InvalidFormatError: If a date is malformed
            AccountAlreadyExistsError: If the email is taken
            KeyspaceExhaustedError: If no unique key could be found
        """
        email = (command.email or "").strip()
        if not email or not command.password:
            raise InvalidArgumentError("Email and password are required")
        try:
            Email(email)
        except ValueError as e:
            raise InvalidArgumentError("Invalid email address") from e

        today = datetime.now(self.expiry_policy.reference_tz).date()
        start_date = self.expiry_policy.parse_date(command.start_date) or today
        period_days = self._period_days(command.license_period_days)
        if command.expiry_date:
            expiry_date = self.expiry_policy.parse_expiry(command.expiry_date)
        elif period_days is not None:
            expiry_date = self.expiry_policy.from_period(start_date, period_days, today)
        else:
            expiry_date = None

        if await self.account_repository.exists_by_email(email):
            raise AccountAlreadyExistsError()

        key = await LicenseKeyGenerator.generate_unique(
            self.license_repository, max_attempts=self.max_attempts
        )

        account = await self.account_repository.insert(
            Account.create(email=email, password_hash=make_password(command.password))
        )
        try:
            license = await self.license_repository.insert(
                License.create_assigned(
                    license_key=key,
                    admin_id=account.id,
                    assigned_email=account.email,
                    expiry_date=expiry_date,
                )
            )
        except Exception:
            logger.error(
                "License insert failed, removing new admin account",
                extra={"admin_id": str(account.id)},
            )
            await self.account_repository.delete(account.id)
            raise

        admin_operations_total.labels(operation="create_admin").inc()
        await self.event_bus.publish(
            AdminCreated(admin_id=account.id, email=account.email, license_id=license.id)
        )

        return CreatedAdminDTO(
            admin_id=account.id,
            email=account.email,
            role=account.role,
            license_id=license.id,
            license_key=license.license_key,
            expiry_date=license.expiry_date,
            start_date=start_date,
        )


class ListAdminsHandler:
    """Handler for ListAdminsQuery."""

    def __init__(
        self,
        account_repository: AccountRepository,
        license_repository: LicenseRepository,
    ):
        """Initialize handler with repositories."""
        self.account_repository = account_repository
        self.license_repository = license_repository

    @requires_role(Role.SUPERADMIN)
    async def handle(self, query: ListAdminsQuery) -> List[AdminDTO]:
        """Every admin account, newest first, with its newest license."""
        now = datetime.now(timezone.utc)
        admins = await self.account_repository.list_by_role(Role.ADMIN.value)
        result = []
        for admin in admins:
            licenses = await self.license_repository.find_by_admin(admin.id)
            result.append(AdminDTO.from_entities(admin, licenses[0] if licenses else None, now))
        return result


class ToggleAdminHandler:
    """Handler for ToggleAdminCommand."""

    def __init__(
        self,
        account_repository: AccountRepository,
        license_repository: LicenseRepository,
        bus=None,
    ):
        """Initialize handler with repositories."""
        self.account_repository = account_repository
        self.license_repository = license_repository
        self.event_bus = bus or event_bus

    @requires_role(Role.SUPERADMIN)
    async def handle(self, command: ToggleAdminCommand) -> AdminToggleDTO:
        """
        Handle toggle admin command.

        Deactivating an admin also disables every license it owns.
        Reactivating leaves the licenses as they are.

        Raises:
            AccountNotFoundError: If the admin does not exist
        """
        admin = await _find_admin(self.account_repository, command.admin_id)
        toggled = admin.toggled()

        await self.account_repository.update(admin.id, {"is_active": toggled.is_active})
        if not toggled.is_active:
            disabled = await self.license_repository.update_by_admin(
                admin.id, {"is_active": False}
            )
            logger.info(
                f"Admin deactivated, {disabled} license(s) disabled",
                extra={"admin_id": str(admin.id)},
            )

        admin_operations_total.labels(operation="toggle_admin").inc()
        await self.event_bus.publish(
            AdminStatusToggled(admin_id=admin.id, email=admin.email, is_active=toggled.is_active)
        )
        return AdminToggleDTO(admin_id=admin.id, is_active=toggled.is_active)


class UpdateAdminExpiryHandler:
    """Handler for UpdateAdminExpiryCommand."""

    def __init__(
        self,
        account_repository: AccountRepository,
        license_repository: LicenseRepository,
        expiry_policy: Optional[ExpiryPolicy] = None,
        bus=None,
    ):
        """Initialize handler with repositories."""
        self.account_repository = account_repository
        self.license_repository = license_repository
        self.expiry_policy = expiry_policy or default_expiry_policy()
        self.event_bus = bus or event_bus

    @requires_role(Role.SUPERADMIN)
    async def handle(self, command: UpdateAdminExpiryCommand) -> AdminExpiryDTO:
        """
        Handle update admin expiry command.

        Raises:
            InvalidFormatError: If the date is malformed
            AccountNotFoundError: If the admin does not exist
            LicenseNotFoundError: If the admin owns no license
        """
        expiry_date = self.expiry_policy.parse_expiry(command.expiry_date)
        admin = await _find_admin(self.account_repository, command.admin_id)

        licenses = await self.license_repository.find_by_admin(admin.id)
        if not licenses:
            raise LicenseNotFoundError("License not found for this admin")

        updated = await self.license_repository.update_by_admin(
            admin.id, {"expiry_date": expiry_date}
        )
        admin_operations_total.labels(operation="update_admin_expiry").inc()

        for license in licenses:
            await self.event_bus.publish(
                LicenseExpiryUpdated(
                    license_id=license.id, expiry_date=expiry_date, admin_id=admin.id
                )
            )
        return AdminExpiryDTO(admin_id=admin.id, expiry_date=expiry_date, updated_licenses=updated)


class ListExpiringLicensesHandler:
    """Handler for ListExpiringLicensesQuery."""

    def __init__(
        self,
        account_repository: AccountRepository,
        license_repository: LicenseRepository,
        expiry_policy: Optional[ExpiryPolicy] = None,
    ):
        """Initialize handler with repositories."""
        self.account_repository = account_repository
        self.license_repository = license_repository
        self.expiry_policy = expiry_policy or default_expiry_policy()

    @requires_role(Role.SUPERADMIN)
    async def handle(self, query: ListExpiringLicensesQuery) -> List[ExpiringLicenseDTO]:
        """
        Enabled, owned licenses expiring in the future but at most
        ``days`` calendar days away, soonest first.
        """
        try:
            days = int(query.days)
        except (TypeError, ValueError) as e:
            raise InvalidArgumentError("days must be a whole number") from e
        if days < 0:
            raise InvalidArgumentError("days must not be negative")

        now = datetime.now(timezone.utc)
        today = now.astimezone(self.expiry_policy.reference_tz).date()
        window_end = datetime.combine(
            today + timedelta(days=days + 1), time.min, tzinfo=self.expiry_policy.reference_tz
        )
        licenses = await self.license_repository.list_expiring(now, window_end)

        result = []
        emails = {}
        for license in licenses:
            if license.admin_id not in emails:
                admin = await self.account_repository.find_by_id(license.admin_id)
                emails[license.admin_id] = admin.email if admin else license.assigned_email
            result.append(
                ExpiringLicenseDTO(
                    admin_id=license.admin_id,
                    email=emails[license.admin_id] or "",
                    license_id=license.id,
                    license_key=license.license_key,
                    expiry_date=license.expiry_date,
                    days_remaining=license.days_remaining(now),
                )
            )
        return result


class GetMyAdminDataHandler:
    """Handler for GetMyAdminDataQuery."""

    def __init__(
        self,
        account_repository: AccountRepository,
        license_repository: LicenseRepository,
    ):
        """Initialize handler with repositories."""
        self.account_repository = account_repository
        self.license_repository = license_repository

    @requires_role(Role.ADMIN)
    async def handle(self, query: GetMyAdminDataQuery) -> AdminDTO:
        """
        The caller's own account and newest license.

        Raises:
            AccountNotFoundError: If the caller's account is gone
        """
        account = await self.account_repository.find_by_id(query.caller.id)
        if not account or not account.is_admin:
            raise AccountNotFoundError("Admin data not found")

        licenses = await self.license_repository.find_by_admin(account.id)
        return AdminDTO.from_entities(
            account, licenses[0] if licenses else None, datetime.now(timezone.utc)
        )
