"""
Integration tests for management commands.
"""

from io import StringIO

import pytest
from django.core.management import call_command
from django.core.management.base import CommandError

from accounts.infrastructure.models import Account as AccountModel


@pytest.mark.django_db
@pytest.mark.integration
class TestCreateSuperadmin:
    def test_creates_superadmin(self):
        out = StringIO()
        call_command("create_superadmin", "boss@example.com", "pw-123", "--print-token", stdout=out)

        account = AccountModel.objects.get(email="boss@example.com")
        assert account.role == "superadmin"
        assert account.password != "pw-123"
        assert "boss@example.com created" in out.getvalue()
        assert out.getvalue().strip().splitlines()[-1].count(".") == 2

    def test_existing_email(self, db_admin):
        with pytest.raises(CommandError, match="already exists"):
            call_command("create_superadmin", db_admin.email, "pw-123", stdout=StringIO())

    def test_invalid_email(self):
        with pytest.raises(CommandError):
            call_command("create_superadmin", "not-an-email", "pw-123", stdout=StringIO())


@pytest.mark.django_db
@pytest.mark.integration
class TestReportExpiringLicenses:
    def test_reports_nothing_on_empty_store(self):
        out = StringIO()
        call_command("report_expiring_licenses", "--days", "3", stdout=out)
        assert "Found 0 license(s) expiring within 3 day(s)" in out.getvalue()

    def test_negative_days(self):
        with pytest.raises(CommandError):
            call_command("report_expiring_licenses", "--days", "-1", stdout=StringIO())
