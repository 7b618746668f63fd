"""
Unit tests for admin management handlers.
"""
import uuid
from datetime import date, datetime, timedelta, timezone

import pytest
from django.contrib.auth.hashers import check_password

from accounts.application.commands.create_admin import CreateAdminCommand
from accounts.application.commands.toggle_admin import ToggleAdminCommand
from accounts.application.commands.update_admin_expiry import UpdateAdminExpiryCommand
from accounts.application.handlers.admin_management_handlers import (
    CreateAdminHandler,
    GetMyAdminDataHandler,
    ListAdminsHandler,
    ListExpiringLicensesHandler,
    ToggleAdminHandler,
    UpdateAdminExpiryHandler,
)
from accounts.application.queries.admin_queries import (
    GetMyAdminDataQuery,
    ListAdminsQuery,
    ListExpiringLicensesQuery,
)
from accounts.domain.events import AdminCreated, AdminStatusToggled
from core.domain.exceptions import (
    AccountAlreadyExistsError,
    AccountNotFoundError,
    ForbiddenError,
    InfrastructureError,
    InvalidArgumentError,
    LicenseNotFoundError,
)
from core.domain.value_objects import LicenseStatus
from licenses.domain.services import ExpiryPolicy
from tests.doubles import InMemoryLicenseRepository, make_account, make_license

UTC_POLICY = ExpiryPolicy(timezone.utc)


def _owned_license(admin, **kwargs):
    return make_license(
        status=LicenseStatus.ACTIVE,
        admin_id=admin.id,
        assigned_email=admin.email,
        **kwargs,
    )


class FailingInsertLicenseRepository(InMemoryLicenseRepository):
    async def insert(self, license):
        raise InfrastructureError()


@pytest.mark.asyncio
class TestCreateAdminHandler:
    """Tests for CreateAdminHandler."""

    @pytest.fixture
    def handler(self, memory_account_repository, memory_license_repository, event_bus):
        return CreateAdminHandler(
            account_repository=memory_account_repository,
            license_repository=memory_license_repository,
            expiry_policy=UTC_POLICY,
            bus=event_bus,
        )

    async def test_creates_admin_with_active_license(
        self,
        handler,
        memory_account_repository,
        memory_license_repository,
        superadmin_caller,
        event_bus,
    ):
        result = await handler.handle(
            CreateAdminCommand(
                caller=superadmin_caller,
                email="new@example.com",
                password="s3cret",
                expiry_date="2031-06-30",
            )
        )

        account = await memory_account_repository.find_by_id(result.admin_id)
        assert account.role == "admin"
        assert account.is_active is True
        assert check_password("s3cret", account.password_hash)

        license = await memory_license_repository.find_by_id(result.license_id)
        assert license.status == LicenseStatus.ACTIVE
        assert license.is_active is True
        assert license.admin_id == account.id
        assert license.assigned_email == "new@example.com"
        assert result.expiry_date == datetime(2031, 6, 30, 23, 59, 59, tzinfo=timezone.utc)

        (event,) = event_bus.recorder.events
        assert isinstance(event, AdminCreated)
        assert event.email == "new@example.com"

    async def test_period_counts_from_start_date(self, handler, superadmin_caller):
        result = await handler.handle(
            CreateAdminCommand(
                caller=superadmin_caller,
                email="period@example.com",
                password="s3cret",
                start_date="2030-01-01",
                license_period_days=30,
            )
        )

        assert result.start_date == date(2030, 1, 1)
        assert result.expiry_date == datetime(2030, 1, 31, 23, 59, 59, tzinfo=timezone.utc)

    async def test_without_expiry_input_never_expires(self, handler, superadmin_caller):
        result = await handler.handle(
            CreateAdminCommand(caller=superadmin_caller, email="open@example.com", password="pw")
        )
        assert result.expiry_date is None
        assert result.start_date == datetime.now(timezone.utc).date()

    async def test_duplicate_email(
        self, handler, memory_license_repository, admin_account, superadmin_caller
    ):
        with pytest.raises(AccountAlreadyExistsError):
            await handler.handle(
                CreateAdminCommand(
                    caller=superadmin_caller, email=admin_account.email, password="pw"
                )
            )
        assert memory_license_repository.licenses == {}

    @pytest.mark.parametrize(
        "email,password",
        [("", "pw"), ("someone@example.com", ""), (None, None), ("not-an-email", "pw")],
    )
    async def test_missing_or_invalid_credentials(
        self, handler, superadmin_caller, email, password
    ):
        with pytest.raises(InvalidArgumentError):
            await handler.handle(
                CreateAdminCommand(caller=superadmin_caller, email=email, password=password)
            )

    async def test_non_numeric_period(self, handler, superadmin_caller):
        with pytest.raises(InvalidArgumentError):
            await handler.handle(
                CreateAdminCommand(
                    caller=superadmin_caller,
                    email="x@example.com",
                    password="pw",
                    license_period_days="thirty",
                )
            )

    async def test_failed_license_insert_removes_account(
        self, memory_account_repository, superadmin_caller, event_bus
    ):
        handler = CreateAdminHandler(
            account_repository=memory_account_repository,
            license_repository=FailingInsertLicenseRepository(),
            expiry_policy=UTC_POLICY,
            bus=event_bus,
        )

        with pytest.raises(InfrastructureError):
            await handler.handle(
                CreateAdminCommand(
                    caller=superadmin_caller, email="ghost@example.com", password="pw"
                )
            )

        assert await memory_account_repository.find_by_email("ghost@example.com") is None
        assert event_bus.recorder.events == []

    async def test_admin_cannot_create_admins(self, handler, admin_caller):
        with pytest.raises(ForbiddenError):
            await handler.handle(
                CreateAdminCommand(caller=admin_caller, email="x@example.com", password="pw")
            )


@pytest.mark.asyncio
class TestListAdminsHandler:
    """Tests for ListAdminsHandler."""

    async def test_lists_admins_with_newest_license(
        self,
        memory_account_repository,
        memory_license_repository,
        admin_account,
        other_admin_account,
        superadmin_caller,
    ):
        now = datetime.now(timezone.utc)
        memory_license_repository.add(
            _owned_license(admin_account, created_at=now - timedelta(days=3))
        )
        newest = memory_license_repository.add(
            _owned_license(admin_account, expiry_date=now + timedelta(days=5), created_at=now)
        )
        handler = ListAdminsHandler(
            account_repository=memory_account_repository,
            license_repository=memory_license_repository,
        )

        admins = await handler.handle(ListAdminsQuery(caller=superadmin_caller))

        by_email = {admin.email: admin for admin in admins}
        assert set(by_email) == {admin_account.email, other_admin_account.email}
        assert by_email[admin_account.email].license.id == newest.id
        assert by_email[admin_account.email].license.days_remaining == 5
        assert by_email[other_admin_account.email].license is None


@pytest.mark.asyncio
class TestToggleAdminHandler:
    """Tests for ToggleAdminHandler."""

    @pytest.fixture
    def handler(self, memory_account_repository, memory_license_repository, event_bus):
        return ToggleAdminHandler(
            account_repository=memory_account_repository,
            license_repository=memory_license_repository,
            bus=event_bus,
        )

    async def test_deactivation_disables_licenses(
        self,
        handler,
        memory_account_repository,
        memory_license_repository,
        admin_account,
        superadmin_caller,
        event_bus,
    ):
        license = memory_license_repository.add(_owned_license(admin_account))

        result = await handler.handle(
            ToggleAdminCommand(caller=superadmin_caller, admin_id=admin_account.id)
        )

        assert result.is_active is False
        assert (await memory_account_repository.find_by_id(admin_account.id)).is_active is False
        assert (await memory_license_repository.find_by_id(license.id)).is_active is False
        (event,) = event_bus.recorder.events
        assert isinstance(event, AdminStatusToggled)
        assert event.is_active is False

    async def test_reactivation_keeps_licenses_disabled(
        self, handler, memory_account_repository, memory_license_repository, superadmin_caller
    ):
        admin = memory_account_repository.add(make_account("off@example.com", is_active=False))
        license = memory_license_repository.add(_owned_license(admin, is_active=False))

        result = await handler.handle(
            ToggleAdminCommand(caller=superadmin_caller, admin_id=admin.id)
        )

        assert result.is_active is True
        assert (await memory_license_repository.find_by_id(license.id)).is_active is False

    async def test_unknown_admin(self, handler, superadmin_caller):
        with pytest.raises(AccountNotFoundError):
            await handler.handle(
                ToggleAdminCommand(caller=superadmin_caller, admin_id=uuid.uuid4())
            )


@pytest.mark.asyncio
class TestUpdateAdminExpiryHandler:
    """Tests for UpdateAdminExpiryHandler."""

    @pytest.fixture
    def handler(self, memory_account_repository, memory_license_repository, event_bus):
        return UpdateAdminExpiryHandler(
            account_repository=memory_account_repository,
            license_repository=memory_license_repository,
            expiry_policy=UTC_POLICY,
            bus=event_bus,
        )

    async def test_updates_every_owned_license(
        self,
        handler,
        memory_license_repository,
        admin_account,
        superadmin_caller,
        event_bus,
    ):
        first = memory_license_repository.add(_owned_license(admin_account))
        second = memory_license_repository.add(_owned_license(admin_account))

        result = await handler.handle(
            UpdateAdminExpiryCommand(
                caller=superadmin_caller, admin_id=admin_account.id, expiry_date="2029-09-09"
            )
        )

        expected = datetime(2029, 9, 9, 23, 59, 59, tzinfo=timezone.utc)
        assert result.updated_licenses == 2
        for license in (first, second):
            assert (await memory_license_repository.find_by_id(license.id)).expiry_date == expected
        assert len(event_bus.recorder.events) == 2

    async def test_admin_without_licenses(self, handler, admin_account, superadmin_caller):
        with pytest.raises(LicenseNotFoundError, match="License not found for this admin"):
            await handler.handle(
                UpdateAdminExpiryCommand(
                    caller=superadmin_caller, admin_id=admin_account.id, expiry_date="2029-09-09"
                )
            )


@pytest.mark.asyncio
class TestListExpiringLicensesHandler:
    """Tests for ListExpiringLicensesHandler."""

    @pytest.fixture
    def handler(self, memory_account_repository, memory_license_repository):
        return ListExpiringLicensesHandler(
            account_repository=memory_account_repository,
            license_repository=memory_license_repository,
            expiry_policy=UTC_POLICY,
        )

    async def test_window_and_order(
        self,
        handler,
        memory_license_repository,
        admin_account,
        other_admin_account,
        superadmin_caller,
    ):
        now = datetime.now(timezone.utc)
        later = memory_license_repository.add(
            _owned_license(admin_account, expiry_date=now + timedelta(days=6))
        )
        sooner = memory_license_repository.add(
            _owned_license(other_admin_account, expiry_date=now + timedelta(days=2))
        )
        memory_license_repository.add(
            _owned_license(admin_account, expiry_date=now + timedelta(days=30))
        )
        memory_license_repository.add(
            _owned_license(admin_account, expiry_date=now - timedelta(days=1))
        )
        memory_license_repository.add(
            _owned_license(admin_account, expiry_date=now + timedelta(days=1), is_active=False)
        )
        memory_license_repository.add(make_license(expiry_date=now + timedelta(days=1)))

        result = await handler.handle(ListExpiringLicensesQuery(caller=superadmin_caller, days=7))

        assert [item.license_id for item in result] == [sooner.id, later.id]
        assert result[0].email == other_admin_account.email
        assert result[0].days_remaining == 2

    async def test_negative_days(self, handler, superadmin_caller):
        with pytest.raises(InvalidArgumentError):
            await handler.handle(ListExpiringLicensesQuery(caller=superadmin_caller, days=-1))


@pytest.mark.asyncio
class TestGetMyAdminDataHandler:
    """Tests for GetMyAdminDataHandler."""

    @pytest.fixture
    def handler(self, memory_account_repository, memory_license_repository):
        return GetMyAdminDataHandler(
            account_repository=memory_account_repository,
            license_repository=memory_license_repository,
        )

    async def test_returns_own_account_and_license(
        self, handler, memory_license_repository, admin_account, admin_caller
    ):
        license = memory_license_repository.add(_owned_license(admin_account))

        result = await handler.handle(GetMyAdminDataQuery(caller=admin_caller))

        assert result.id == admin_account.id
        assert result.user_active is True
        assert result.license.id == license.id
        assert result.license.days_remaining is None

    async def test_superadmin_is_forbidden(self, handler, superadmin_caller):
        with pytest.raises(ForbiddenError, match="Admin access required"):
            await handler.handle(GetMyAdminDataQuery(caller=superadmin_caller))
