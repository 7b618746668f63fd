"""
Integration tests for the license API.
"""

import uuid

import pytest
from asgiref.sync import async_to_sync
from django.urls import reverse

from accounts.domain.account import Account
from licenses.infrastructure.models import License as LicenseModel
from notifications.infrastructure.models import Notification as NotificationModel
from tests.doubles import auth_header


def _generate(api_client, superadmin, expiry_date=None):
    params = {"expiry_date": expiry_date} if expiry_date else {}
    response = api_client.get(reverse("license:generate"), params, **auth_header(superadmin))
    assert response.status_code == 200
    return response.json()


@pytest.mark.django_db
@pytest.mark.integration
class TestLicenseLifecycle:
    """Generate, activate, verify and toggle through the HTTP surface."""

    def test_full_lifecycle(self, api_client, db_admin, db_superadmin):
        generated = _generate(api_client, db_superadmin, expiry_date="2099-12-31")
        assert generated["status"] is True
        assert generated["message"] == "License key generated successfully"
        assert generated["expiry_date"].startswith("2099-12-31T23:59:59")
        key = generated["license_key"]

        response = api_client.post(
            reverse("license:activate"),
            {"license_key": key.lower()},
            format="json",
            **auth_header(db_admin),
        )
        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "License activated successfully"
        assert body["data"]["status"] == "active"
        assert body["data"]["admin_id"] == str(db_admin.id)

        again = api_client.post(
            reverse("license:activate"),
            {"license_key": key},
            format="json",
            **auth_header(db_admin),
        )
        assert again.status_code == 200
        assert again.json()["message"] == "License is already active for your account"

        verify = api_client.post(reverse("license:verify"), {"license_key": key}, format="json")
        assert verify.json() == {"status": True, "valid": True, "message": "License is valid"}

        validate = api_client.post(reverse("license:validate"), **auth_header(db_admin))
        assert validate.json()["valid"] is True

        license_id = body["data"]["id"]
        toggle = api_client.put(
            reverse("license:toggle", args=[license_id]), **auth_header(db_superadmin)
        )
        assert toggle.status_code == 200
        assert toggle.json() == {
            "status": True,
            "message": "License deactivated successfully",
            "is_active": False,
        }

        verify = api_client.post(reverse("license:verify"), {"license_key": key}, format="json")
        assert verify.json()["valid"] is False
        assert verify.json()["message"] == "License is inactive"

        validate = api_client.post(reverse("license:validate"), **auth_header(db_admin))
        assert validate.json() == {
            "status": True,
            "valid": False,
            "message": "No active license found",
        }

        types = set(NotificationModel.objects.values_list("type", flat=True))
        assert {"license_generated", "license_activated", "license_status_changed"} <= types

    def test_update_expiry_and_clear(self, api_client, db_superadmin):
        generated = _generate(api_client, db_superadmin)
        listed = api_client.get(reverse("license:list"), **auth_header(db_superadmin)).json()
        license_id = listed["data"][0]["id"]
        assert listed["data"][0]["license_key"] == generated["license_key"]

        past = api_client.put(
            reverse("license:update-expiry", args=[license_id]),
            {"expiry_date": "2000-01-01"},
            format="json",
            **auth_header(db_superadmin),
        )
        assert past.status_code == 200
        verify = api_client.post(
            reverse("license:verify"), {"license_key": generated["license_key"]}, format="json"
        )
        assert verify.json()["message"] == "License has expired"

        cleared = api_client.put(
            reverse("license:update-expiry", args=[license_id]),
            {"expiry_date": None},
            format="json",
            **auth_header(db_superadmin),
        )
        assert cleared.json()["expiry_date"] is None
        verify = api_client.post(
            reverse("license:verify"), {"license_key": generated["license_key"]}, format="json"
        )
        assert verify.json()["valid"] is True


@pytest.mark.django_db
@pytest.mark.integration
class TestLicenseApiErrors:
    """Failure envelopes of the license API."""

    def test_missing_token(self, api_client):
        response = api_client.post(reverse("license:validate"))

        assert response.status_code == 401
        assert response.json()["status"] is False
        assert response.json()["code"] == "UNAUTHENTICATED"

    def test_invalid_token(self, api_client):
        response = api_client.post(
            reverse("license:validate"), HTTP_AUTHORIZATION="Bearer not-a-token"
        )

        assert response.status_code == 401
        assert response.json()["message"] == "Invalid or expired token"

    def test_admin_cannot_generate(self, api_client, db_admin):
        response = api_client.get(reverse("license:generate"), **auth_header(db_admin))

        assert response.status_code == 403
        assert response.json()["message"] == "SuperAdmin access required"

    def test_malformed_key(self, api_client, db_admin):
        response = api_client.post(
            reverse("license:activate"),
            {"license_key": "NOT-A-KEY"},
            format="json",
            **auth_header(db_admin),
        )

        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_FORMAT"

    def test_unknown_key(self, api_client, db_admin):
        response = api_client.post(
            reverse("license:activate"),
            {"license_key": "APP-ZZZZ-ZZZZ-ZZZZ"},
            format="json",
            **auth_header(db_admin),
        )

        assert response.status_code == 404
        assert response.json()["message"] == "Invalid license key"

    def test_toggle_unknown_license(self, api_client, db_superadmin):
        response = api_client.put(
            reverse("license:toggle", args=[uuid.uuid4()]), **auth_header(db_superadmin)
        )
        assert response.status_code == 404

    def test_verify_unknown_key_is_not_an_error(self, api_client):
        response = api_client.post(
            reverse("license:verify"), {"license_key": "APP-ZZZZ-ZZZZ-ZZZZ"}, format="json"
        )

        assert response.status_code == 200
        assert response.json() == {
            "status": True,
            "valid": False,
            "message": "License key not found",
        }

    def test_key_owned_by_other_admin_stays_owned(
        self, api_client, db_admin, db_superadmin, account_repository
    ):
        other = async_to_sync(account_repository.insert)(
            Account.create(email="other@example.com", password_hash="x")
        )
        key = _generate(api_client, db_superadmin)["license_key"]
        api_client.post(
            reverse("license:activate"),
            {"license_key": key},
            format="json",
            **auth_header(db_admin),
        )

        response = api_client.post(
            reverse("license:activate"), {"license_key": key}, format="json", **auth_header(other)
        )

        assert response.status_code == 400
        assert response.json()["code"] == "LICENSE_ASSIGNED_TO_ANOTHER_ADMIN"
        stored = LicenseModel.objects.get(license_key=key)
        assert stored.admin_id == db_admin.id
        assert stored.assigned_email == db_admin.email
        assert stored.status == "active"

    @pytest.mark.parametrize("payload", [{}, {"license_key": ""}, {"license_key": "   "}])
    def test_verify_without_key(self, api_client, payload):
        response = api_client.post(reverse("license:verify"), payload, format="json")

        assert response.status_code == 400
        assert response.json() == {
            "status": False,
            "message": "License key is required",
            "code": "INVALID_ARGUMENT",
        }

    def test_verify_is_rate_limited(self, api_client, settings):
        url = reverse("license:verify")
        for _ in range(settings.VERIFY_RATE_LIMIT):
            response = api_client.post(url, {"license_key": "APP-ZZZZ-ZZZZ-ZZZZ"}, format="json")
            assert response.status_code == 200

        response = api_client.post(url, {"license_key": "APP-ZZZZ-ZZZZ-ZZZZ"}, format="json")

        assert response.status_code == 429
        assert response.json()["code"] == "RATE_LIMIT_EXCEEDED"
        assert "Retry-After" in response


@pytest.mark.django_db
@pytest.mark.integration
def test_list_is_scoped_to_admin(api_client, db_admin, db_superadmin):
    first = _generate(api_client, db_superadmin)
    _generate(api_client, db_superadmin)
    api_client.post(
        reverse("license:activate"),
        {"license_key": first["license_key"]},
        format="json",
        **auth_header(db_admin),
    )

    as_admin = api_client.get(reverse("license:list"), **auth_header(db_admin)).json()
    as_superadmin = api_client.get(reverse("license:list"), **auth_header(db_superadmin)).json()

    assert [item["license_key"] for item in as_admin["data"]] == [first["license_key"]]
    assert len(as_superadmin["data"]) == 2
