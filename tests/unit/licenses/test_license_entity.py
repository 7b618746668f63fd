"""
Unit tests for License domain entity.
"""

import uuid
from datetime import datetime, timedelta, timezone

import pytest

from core.domain.value_objects import LicenseStatus
from licenses.domain.license import License
from tests.doubles import make_license

NOW = datetime(2025, 1, 15, 12, 0, tzinfo=timezone.utc)


class TestLicenseEntity:
    """Tests for License domain entity."""

    def test_create_license(self):
        """Test creating an unassigned license."""
        expiry = NOW + timedelta(days=30)
        license = License.create(license_key="APP-AAAA-BBBB-CCCC", expiry_date=expiry)

        assert license.status == LicenseStatus.UNUSED
        assert license.is_active is True
        assert license.admin_id is None
        assert license.assigned_email is None
        assert license.expiry_date == expiry

    def test_create_requires_key(self):
        with pytest.raises(ValueError, match="License key is required"):
            License.create(license_key="")

    def test_create_assigned(self):
        admin_id = uuid.uuid4()
        license = License.create_assigned(
            license_key="APP-AAAA-BBBB-CCCC", admin_id=admin_id, assigned_email="a@example.com"
        )

        assert license.status == LicenseStatus.ACTIVE
        assert license.is_owned_by(admin_id)
        assert license.is_fully_active()

    def test_license_without_expiry_never_expires(self):
        license = make_license()
        assert not license.is_expired(NOW)
        assert license.is_usable(NOW)
        assert license.days_remaining(NOW) is None

    def test_expiry_is_strict(self):
        license = make_license(expiry_date=NOW)
        assert not license.is_expired(NOW)
        assert license.is_expired(NOW + timedelta(seconds=1))

    def test_usable_requires_future_expiry_and_active_flag(self):
        assert make_license(expiry_date=NOW + timedelta(seconds=1)).is_usable(NOW)
        assert not make_license(expiry_date=NOW - timedelta(seconds=1)).is_usable(NOW)
        assert not make_license(is_active=False).is_usable(NOW)

    def test_days_remaining_counts_calendar_days(self):
        license = make_license(expiry_date=datetime(2025, 1, 20, 0, 30, tzinfo=timezone.utc))
        assert license.days_remaining(NOW) == 5

    def test_days_remaining_is_minus_one_once_expired(self):
        license = make_license(expiry_date=NOW - timedelta(days=3))
        assert license.days_remaining(NOW) == -1

    def test_activated_for(self):
        admin_id = uuid.uuid4()
        activated = make_license(is_active=False).activated_for(admin_id, "a@example.com")

        assert activated.status == LicenseStatus.ACTIVE
        assert activated.is_active is True
        assert activated.admin_id == admin_id
        assert activated.assigned_email == "a@example.com"

    def test_activated_for_rejects_other_owner(self):
        license = make_license(status=LicenseStatus.ACTIVE, admin_id=uuid.uuid4())
        with pytest.raises(ValueError):
            license.activated_for(uuid.uuid4(), "b@example.com")

    def test_toggled_keeps_status_and_expiry(self):
        expiry = NOW + timedelta(days=5)
        license = make_license(status=LicenseStatus.ACTIVE, expiry_date=expiry)
        toggled = license.toggled()

        assert toggled.is_active is False
        assert toggled.status == LicenseStatus.ACTIVE
        assert toggled.expiry_date == expiry
        assert toggled.toggled().is_active is True

    def test_renewed_forces_active(self):
        expiry = NOW + timedelta(days=60)
        renewed = make_license(is_active=False).renewed(expiry)

        assert renewed.is_active is True
        assert renewed.status == LicenseStatus.ACTIVE
        assert renewed.expiry_date == expiry
