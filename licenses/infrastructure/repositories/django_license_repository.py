"""
Django implementation of LicenseRepository port.

This adapter converts between domain entities and Django ORM models.
"""
import logging
import uuid
from datetime import datetime
from typing import Any, Dict, List, Optional

from asgiref.sync import sync_to_async
from django.db.models import Q
from django.utils import timezone

from core.domain.exceptions import InfrastructureError
from core.domain.value_objects import LicenseStatus
from core.infrastructure.database import as_bool, translate_database_errors
from licenses.domain.license import License
from licenses.infrastructure.models import License as LicenseModel
from licenses.ports.license_repository import LicenseRepository

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = {"status", "is_active", "expiry_date", "admin_id", "assigned_email"}


class DjangoLicenseRepository(LicenseRepository):
    """
    Django ORM implementation of LicenseRepository.

    This adapter:
    1. Converts Django models to domain entities
    2. Converts domain entities to Django models
    3. Implements repository interface
    """

    def _to_domain(self, model: LicenseModel) -> License:
        """
        Convert Django model to domain entity.

        Args:
            model: Django License model

        Returns:
            License domain entity
        """
        try:
            status = LicenseStatus(model.status)
        except ValueError as e:
            logger.error(
                f"License {model.id} has unknown status {model.status!r}",
                extra={"license_id": str(model.id)},
            )
            raise InfrastructureError() from e

        return License(
            id=model.id,
            license_key=model.license_key,
            status=status,
            is_active=as_bool(model.is_active),
            admin_id=model.admin_id,
            assigned_email=model.assigned_email,
            expiry_date=model.expiry_date,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _to_model(self, license: License) -> LicenseModel:
        """
        Convert domain entity to Django model.

        Args:
            license: License domain entity

        Returns:
            Unsaved Django License model
        """
        return LicenseModel(
            id=license.id,
            license_key=license.license_key,
            status=license.status.value,
            is_active=license.is_active,
            admin_id=license.admin_id,
            assigned_email=license.assigned_email,
            expiry_date=license.expiry_date,
        )

    def _clean_fields(self, fields: Dict[str, Any]) -> Dict[str, Any]:
        unknown = set(fields) - UPDATABLE_FIELDS
        if unknown:
            raise ValueError(f"Cannot update license fields: {sorted(unknown)}")
        cleaned = dict(fields)
        if isinstance(cleaned.get("status"), LicenseStatus):
            cleaned["status"] = cleaned["status"].value
        # QuerySet.update() skips auto_now
        cleaned["updated_at"] = timezone.now()
        return cleaned

    @sync_to_async
    def insert(self, license: License) -> License:
        """
        Insert a license entity.

        Args:
            license: License entity to insert

        Returns:
            Stored license entity
        """
        with translate_database_errors("license.insert"):
            model = self._to_model(license)
            model.save(force_insert=True)
            return self._to_domain(model)

    @sync_to_async
    def update(
        self, license_id: uuid.UUID, fields: Dict[str, Any]
    ) -> Optional[License]:
        """
        Update selected fields of a license.

        Args:
            license_id: License UUID
            fields: Field name to new value

        Returns:
            Updated license entity or None if not found
        """
        cleaned = self._clean_fields(fields)
        with translate_database_errors("license.update"):
            updated = LicenseModel.objects.filter(id=license_id).update(**cleaned)
            if not updated:
                return None
            return self._to_domain(LicenseModel.objects.get(id=license_id))

    @sync_to_async
    def update_by_admin(self, admin_id: uuid.UUID, fields: Dict[str, Any]) -> int:
        cleaned = self._clean_fields(fields)
        with translate_database_errors("license.update_by_admin"):
            return LicenseModel.objects.filter(admin_id=admin_id).update(**cleaned)

    @sync_to_async
    def claim_unused(self, license_key: str, admin_id: uuid.UUID, email: str) -> bool:
        """
        Assign an unused license with a single conditional UPDATE.

        Two concurrent claims on the same key cannot both succeed:
        the second one matches zero rows.
        """
        with translate_database_errors("license.claim_unused"):
            updated = LicenseModel.objects.filter(
                license_key=license_key,
                status=LicenseStatus.UNUSED.value,
                admin__isnull=True,
            ).update(
                admin_id=admin_id,
                assigned_email=email,
                status=LicenseStatus.ACTIVE.value,
                is_active=True,
                updated_at=timezone.now(),
            )
            return updated == 1

    @sync_to_async
    def find_by_id(self, license_id: uuid.UUID) -> Optional[License]:
        """
        Find a license by ID.

        Args:
            license_id: License UUID

        Returns:
            License entity or None if not found
        """
        with translate_database_errors("license.find_by_id"):
            try:
                model = LicenseModel.objects.get(id=license_id)
                return self._to_domain(model)
            except LicenseModel.DoesNotExist:
                return None

    @sync_to_async
    def find_by_key(self, license_key: str) -> Optional[License]:
        """
        Find a license by key string.

        Args:
            license_key: License key string

        Returns:
            License entity or None if not found
        """
        with translate_database_errors("license.find_by_key"):
            try:
                model = LicenseModel.objects.get(license_key=license_key)
                return self._to_domain(model)
            except LicenseModel.DoesNotExist:
                return None

    @sync_to_async
    def exists_by_key(self, license_key: str) -> bool:
        with translate_database_errors("license.exists_by_key"):
            return LicenseModel.objects.filter(license_key=license_key).exists()

    @sync_to_async
    def find_by_admin(self, admin_id: uuid.UUID) -> List[License]:
        with translate_database_errors("license.find_by_admin"):
            models = LicenseModel.objects.filter(admin_id=admin_id).order_by("-created_at")
            return [self._to_domain(model) for model in models]

    @sync_to_async
    def find_by_email(self, email: str) -> List[License]:
        with translate_database_errors("license.find_by_email"):
            models = LicenseModel.objects.filter(assigned_email=email).order_by("-created_at")
            return [self._to_domain(model) for model in models]

    @sync_to_async
    def find_active_for_holder(self, admin_id: uuid.UUID, email: str) -> List[License]:
        """
        Find active, enabled licenses owned by or assigned to an account.

        Args:
            admin_id: Account UUID
            email: Account email

        Returns:
            List of License entities
        """
        with translate_database_errors("license.find_active_for_holder"):
            models = LicenseModel.objects.filter(
                Q(admin_id=admin_id) | Q(assigned_email=email),
                status=LicenseStatus.ACTIVE.value,
                is_active=True,
            ).order_by("-created_at")
            return [self._to_domain(model) for model in models]

    @sync_to_async
    def list_all(self) -> List[License]:
        with translate_database_errors("license.list_all"):
            return [
                self._to_domain(model)
                for model in LicenseModel.objects.all().order_by("-created_at")
            ]

    @sync_to_async
    def list_by_admin(self, admin_id: uuid.UUID) -> List[License]:
        with translate_database_errors("license.list_by_admin"):
            models = LicenseModel.objects.filter(admin_id=admin_id).order_by("-created_at")
            return [self._to_domain(model) for model in models]

    @sync_to_async
    def list_expiring(self, after: datetime, before: datetime) -> List[License]:
        """
        List enabled, assigned licenses with ``after < expiry_date < before``.

        Args:
            after: Exclusive lower bound
            before: Exclusive upper bound

        Returns:
            License entities ordered by expiry date
        """
        with translate_database_errors("license.list_expiring"):
            models = LicenseModel.objects.filter(
                admin__isnull=False,
                is_active=True,
                expiry_date__gt=after,
                expiry_date__lt=before,
            ).order_by("expiry_date")
            return [self._to_domain(model) for model in models]
