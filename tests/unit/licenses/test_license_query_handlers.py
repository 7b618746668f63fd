"""
Unit tests for validate, verify and list handlers.
"""
import uuid
from datetime import datetime, timedelta, timezone

import pytest

from core.domain.exceptions import ForbiddenError, InvalidArgumentError, UnauthenticatedError
from core.domain.value_objects import Caller, LicenseStatus
from licenses.application.handlers.license_query_handlers import (
    ListLicensesHandler,
    ValidateLicenseHandler,
    VerifyLicenseHandler,
)
from licenses.application.queries.list_licenses import ListLicensesQuery
from licenses.application.queries.validate_license import ValidateLicenseQuery
from licenses.application.queries.verify_license import VerifyLicenseQuery
from tests.doubles import make_account, make_license


def _now():
    return datetime.now(timezone.utc)


@pytest.mark.asyncio
class TestValidateLicenseHandler:
    """Tests for ValidateLicenseHandler."""

    @pytest.fixture
    def handler(self, memory_license_repository, memory_account_repository):
        return ValidateLicenseHandler(
            license_repository=memory_license_repository,
            account_repository=memory_account_repository,
        )

    async def test_admin_with_usable_license(
        self, handler, memory_license_repository, admin_account, admin_caller
    ):
        memory_license_repository.add(
            make_license(
                status=LicenseStatus.ACTIVE,
                admin_id=admin_account.id,
                expiry_date=_now() + timedelta(days=1),
            )
        )

        result = await handler.handle(ValidateLicenseQuery(caller=admin_caller))

        assert result.valid is True
        assert result.message == "License is valid"

    async def test_admin_with_expired_license(
        self, handler, memory_license_repository, admin_account, admin_caller
    ):
        memory_license_repository.add(
            make_license(
                status=LicenseStatus.ACTIVE,
                admin_id=admin_account.id,
                expiry_date=_now() - timedelta(seconds=1),
            )
        )

        result = await handler.handle(ValidateLicenseQuery(caller=admin_caller))

        assert result.valid is False
        assert result.message == "No active license found"

    async def test_admin_with_disabled_license(
        self, handler, memory_license_repository, admin_account, admin_caller
    ):
        memory_license_repository.add(
            make_license(status=LicenseStatus.ACTIVE, is_active=False, admin_id=admin_account.id)
        )

        result = await handler.handle(ValidateLicenseQuery(caller=admin_caller))

        assert result.valid is False

    async def test_non_admin_is_checked_by_email(
        self, handler, memory_license_repository, memory_account_repository
    ):
        user = memory_account_repository.add(make_account("user@example.com", role="user"))
        memory_license_repository.add(
            make_license(status=LicenseStatus.ACTIVE, assigned_email=user.email)
        )

        result = await handler.handle(
            ValidateLicenseQuery(caller=Caller(id=user.id, email=user.email, role="user"))
        )

        assert result.valid is True

    async def test_unused_license_on_email_does_not_count(
        self, handler, memory_license_repository
    ):
        memory_license_repository.add(make_license(assigned_email="user@example.com"))

        result = await handler.handle(
            ValidateLicenseQuery(
                caller=Caller(id=uuid.uuid4(), email="user@example.com", role="user")
            )
        )

        assert result.valid is False

    async def test_requires_caller(self, handler):
        with pytest.raises(UnauthenticatedError):
            await handler.handle(ValidateLicenseQuery(caller=None))


@pytest.mark.asyncio
class TestVerifyLicenseHandler:
    """Tests for VerifyLicenseHandler."""

    @pytest.fixture
    def handler(self, memory_license_repository):
        return VerifyLicenseHandler(license_repository=memory_license_repository)

    async def test_valid_key_is_normalized(self, handler, memory_license_repository):
        memory_license_repository.add(make_license(key="APP-ABCD-EFGH-JKLM"))

        result = await handler.handle(VerifyLicenseQuery(license_key=" app-abcd-efgh-jklm"))

        assert result.valid is True
        assert result.message == "License is valid"

    async def test_unknown_key(self, handler):
        result = await handler.handle(VerifyLicenseQuery(license_key="APP-ABCD-EFGH-JKLM"))
        assert (result.valid, result.message) == (False, "License key not found")

    @pytest.mark.parametrize("raw", [None, "", "   "])
    async def test_missing_key(self, handler, raw):
        with pytest.raises(InvalidArgumentError, match="License key is required"):
            await handler.handle(VerifyLicenseQuery(license_key=raw))

    async def test_expired_key(self, handler, memory_license_repository):
        memory_license_repository.add(
            make_license(key="APP-ABCD-EFGH-JKLM", expiry_date=_now() - timedelta(seconds=1))
        )

        result = await handler.handle(VerifyLicenseQuery(license_key="APP-ABCD-EFGH-JKLM"))

        assert (result.valid, result.message) == (False, "License has expired")


@pytest.mark.asyncio
class TestListLicensesHandler:
    """Tests for ListLicensesHandler."""

    @pytest.fixture
    def handler(self, memory_license_repository):
        return ListLicensesHandler(license_repository=memory_license_repository)

    @pytest.fixture
    def stored(self, memory_license_repository, admin_account, other_admin_account):
        now = _now()
        mine = memory_license_repository.add(
            make_license(
                status=LicenseStatus.ACTIVE,
                admin_id=admin_account.id,
                created_at=now - timedelta(minutes=2),
            )
        )
        theirs = memory_license_repository.add(
            make_license(
                status=LicenseStatus.ACTIVE,
                admin_id=other_admin_account.id,
                created_at=now - timedelta(minutes=1),
            )
        )
        unused = memory_license_repository.add(make_license(created_at=now))
        return mine, theirs, unused

    async def test_superadmin_sees_everything_newest_first(
        self, handler, stored, superadmin_caller
    ):
        mine, theirs, unused = stored

        result = await handler.handle(ListLicensesQuery(caller=superadmin_caller))

        assert [license.id for license in result] == [unused.id, theirs.id, mine.id]

    async def test_admin_sees_own_licenses_only(self, handler, stored, admin_caller):
        mine, _, _ = stored

        result = await handler.handle(ListLicensesQuery(caller=admin_caller))

        assert [license.id for license in result] == [mine.id]

    async def test_other_roles_are_forbidden(self, handler):
        caller = Caller(id=uuid.uuid4(), email="user@example.com", role="user")
        with pytest.raises(ForbiddenError, match="Admin or SuperAdmin access required"):
            await handler.handle(ListLicensesQuery(caller=caller))
