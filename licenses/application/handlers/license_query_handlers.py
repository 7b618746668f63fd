"""
License query handlers.

Validate, verify and role-scoped listing of licenses.
"""

import logging
from datetime import datetime, timezone
from typing import List

from accounts.application.role_gate import requires_role
from accounts.ports.account_repository import AccountRepository
from core.domain.exceptions import InvalidArgumentError, UnauthenticatedError
from core.domain.value_objects import LicenseKeyString, LicenseStatus, Role
from core.metrics import license_checks_total
from licenses.application.dto.license_dto import LicenseCheckDTO, LicenseDTO
from licenses.application.queries.list_licenses import ListLicensesQuery
from licenses.application.queries.validate_license import ValidateLicenseQuery
from licenses.application.queries.verify_license import VerifyLicenseQuery
from licenses.domain.services import LicenseValidator
from licenses.ports.license_repository import LicenseRepository

logger = logging.getLogger(__name__)


class ValidateLicenseHandler:
    """Handler for ValidateLicenseQuery."""

    def __init__(
        self,
        license_repository: LicenseRepository,
        account_repository: AccountRepository,
    ):
        """Initialize handler with repositories."""
        self.license_repository = license_repository
        self.account_repository = account_repository

    async def handle(self, query: ValidateLicenseQuery) -> LicenseCheckDTO:
        """
        Handle validate license query.

        Admin accounts are checked through licenses they own; every
        other account through licenses assigned to its email.

        Args:
            query: ValidateLicenseQuery

        Returns:
            LicenseCheckDTO; a missing license is reported as invalid,
            never raised
        """
        caller = query.caller
        if caller is None:
            raise UnauthenticatedError()

        now = datetime.now(timezone.utc)
        account = None
        if caller.email:
            account = await self.account_repository.find_by_email(caller.email)

        if account is not None and account.is_admin:
            candidates = await self.license_repository.find_by_admin(account.id)
            valid = any(license.is_usable(now) for license in candidates)
        else:
            candidates = await self.license_repository.find_by_email(caller.email)
            valid = any(
                license.status == LicenseStatus.ACTIVE and license.is_usable(now)
                for license in candidates
            )

        license_checks_total.labels(check="validate", valid=str(valid).lower()).inc()
        return LicenseCheckDTO(
            valid=valid,
            message="License is valid" if valid else "No active license found",
        )


class VerifyLicenseHandler:
    """Handler for VerifyLicenseQuery."""

    def __init__(self, license_repository: LicenseRepository):
        """Initialize handler with repository."""
        self.license_repository = license_repository

    async def handle(self, query: VerifyLicenseQuery) -> LicenseCheckDTO:
        """
        Handle verify license query.

        Args:
            query: VerifyLicenseQuery

        Returns:
            LicenseCheckDTO with the reason a key is not valid

        Raises:
            InvalidArgumentError: If the key is missing or blank
        """
        key = LicenseKeyString.normalize(query.license_key)
        if not key:
            raise InvalidArgumentError("License key is required")
        license = await self.license_repository.find_by_key(key)

        valid, message = LicenseValidator.verify(license, datetime.now(timezone.utc))
        license_checks_total.labels(check="verify", valid=str(valid).lower()).inc()
        return LicenseCheckDTO(valid=valid, message=message)


class ListLicensesHandler:
    """Handler for ListLicensesQuery."""

    def __init__(self, license_repository: LicenseRepository):
        """Initialize handler with repository."""
        self.license_repository = license_repository

    @requires_role(Role.ADMIN, Role.SUPERADMIN)
    async def handle(self, query: ListLicensesQuery) -> List[LicenseDTO]:
        """
        Handle list licenses query.

        Args:
            query: ListLicensesQuery

        Returns:
            All licenses for a superadmin, owned licenses for an admin
        """
        if query.caller.is_superadmin:
            licenses = await self.license_repository.list_all()
        else:
            licenses = await self.license_repository.list_by_admin(query.caller.id)
        return [LicenseDTO.from_entity(license) for license in licenses]
