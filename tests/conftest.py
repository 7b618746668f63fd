"""
Pytest configuration and shared fixtures.
"""

from datetime import datetime, timedelta, timezone

import pytest
from asgiref.sync import async_to_sync
from django.contrib.auth.hashers import make_password
from django.core.cache import cache

from accounts.domain.account import Account
from accounts.infrastructure.repositories.django_account_repository import (
    DjangoAccountRepository,
)
from core.domain.value_objects import Role
from core.infrastructure.events import InMemoryEventBus
from licenses.domain.license import License
from licenses.domain.license_key import generate_license_key
from licenses.infrastructure.repositories.django_license_repository import DjangoLicenseRepository
from tests.doubles import (
    InMemoryAccountRepository,
    InMemoryLicenseRepository,
    RecordingEventHandler,
    caller_for,
    make_account,
)


@pytest.fixture(autouse=True)
def clear_cache():
    """Start every test with empty rate limit counters."""
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def event_bus():
    """Private event bus with a recording subscriber for every event type."""
    from core.infrastructure.event_handlers import ALL_EVENTS

    bus = InMemoryEventBus()
    recorder = RecordingEventHandler()
    for event_type in ALL_EVENTS:
        bus.subscribe(event_type, recorder)
    bus.recorder = recorder
    return bus


@pytest.fixture
def memory_license_repository():
    """Fixture for the in-memory LicenseRepository."""
    return InMemoryLicenseRepository()


@pytest.fixture
def memory_account_repository():
    """Fixture for the in-memory AccountRepository."""
    return InMemoryAccountRepository()


@pytest.fixture
def admin_account(memory_account_repository):
    """Admin account stored in the in-memory repository."""
    return memory_account_repository.add(make_account("admin@example.com"))


@pytest.fixture
def other_admin_account(memory_account_repository):
    """Second admin account stored in the in-memory repository."""
    return memory_account_repository.add(make_account("other@example.com"))


@pytest.fixture
def superadmin_account(memory_account_repository):
    """Superadmin account stored in the in-memory repository."""
    return memory_account_repository.add(
        make_account("root@example.com", role=Role.SUPERADMIN.value)
    )


@pytest.fixture
def admin_caller(admin_account):
    return caller_for(admin_account)


@pytest.fixture
def superadmin_caller(superadmin_account):
    return caller_for(superadmin_account)


@pytest.fixture
def license_repository():
    """Fixture for LicenseRepository."""
    return DjangoLicenseRepository()


@pytest.fixture
def account_repository():
    """Fixture for AccountRepository."""
    return DjangoAccountRepository()


def _store_account(repository, email: str, role: str) -> Account:
    account = Account.create(email=email, password_hash=make_password("secret-pass"), role=role)
    return async_to_sync(repository.insert)(account)


@pytest.fixture
def db_admin(db, account_repository):
    """Admin account saved in database."""
    return _store_account(account_repository, "admin@example.com", Role.ADMIN.value)


@pytest.fixture
def db_superadmin(db, account_repository):
    """Superadmin account saved in database."""
    return _store_account(account_repository, "root@example.com", Role.SUPERADMIN.value)


@pytest.fixture
def db_license(db, license_repository):
    """Unused license saved in database, expiring in 30 days."""
    license = License.create(
        license_key=generate_license_key(),
        expiry_date=datetime.now(timezone.utc) + timedelta(days=30),
    )
    return async_to_sync(license_repository.insert)(license)


@pytest.fixture
def api_client():
    """Fixture for DRF API client."""
    from rest_framework.test import APIClient

    return APIClient()
