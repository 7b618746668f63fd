"""
Django implementation of AccountRepository port.

This adapter converts between domain entities and Django ORM models.
"""
import uuid
from typing import Any, Dict, List, Optional

from asgiref.sync import sync_to_async
from django.utils import timezone

from accounts.domain.account import Account
from accounts.infrastructure.models import Account as AccountModel
from accounts.ports.account_repository import AccountRepository
from core.infrastructure.database import as_bool, translate_database_errors

UPDATABLE_FIELDS = {"is_active", "role", "password"}


class DjangoAccountRepository(AccountRepository):
    """Django ORM implementation of AccountRepository."""

    def _to_domain(self, model: AccountModel) -> Account:
        """
        Convert Django model to domain entity.

        Args:
            model: Django Account model

        Returns:
            Account domain entity
        """
        return Account(
            id=model.id,
            email=model.email,
            role=model.role,
            is_active=as_bool(model.is_active),
            password_hash=model.password,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _to_model(self, account: Account) -> AccountModel:
        return AccountModel(
            id=account.id,
            email=account.email,
            password=account.password_hash,
            role=account.role,
            is_active=account.is_active,
        )

    @sync_to_async
    def insert(self, account: Account) -> Account:
        """
        Insert an account entity.

        Args:
            account: Account entity to insert

        Returns:
            Stored account entity
        """
        with translate_database_errors("account.insert"):
            model = self._to_model(account)
            model.save(force_insert=True)
            return self._to_domain(model)

    @sync_to_async
    def update(self, account_id: uuid.UUID, fields: Dict[str, Any]) -> Optional[Account]:
        unknown = set(fields) - UPDATABLE_FIELDS
        if unknown:
            raise ValueError(f"Cannot update account fields: {sorted(unknown)}")
        with translate_database_errors("account.update"):
            updated = AccountModel.objects.filter(id=account_id).update(
                updated_at=timezone.now(), **fields
            )
            if not updated:
                return None
            return self._to_domain(AccountModel.objects.get(id=account_id))

    @sync_to_async
    def delete(self, account_id: uuid.UUID) -> bool:
        with translate_database_errors("account.delete"):
            deleted, _ = AccountModel.objects.filter(id=account_id).delete()
            return deleted > 0

    @sync_to_async
    def find_by_id(self, account_id: uuid.UUID) -> Optional[Account]:
        """
        Find an account by ID.

        Args:
            account_id: Account UUID

        Returns:
            Account entity or None if not found
        """
        with translate_database_errors("account.find_by_id"):
            try:
                return self._to_domain(AccountModel.objects.get(id=account_id))
            except AccountModel.DoesNotExist:
                return None

    @sync_to_async
    def find_by_email(self, email: str) -> Optional[Account]:
        with translate_database_errors("account.find_by_email"):
            try:
                return self._to_domain(AccountModel.objects.get(email__iexact=email))
            except AccountModel.DoesNotExist:
                return None

    @sync_to_async
    def exists_by_email(self, email: str) -> bool:
        with translate_database_errors("account.exists_by_email"):
            return AccountModel.objects.filter(email__iexact=email).exists()

    @sync_to_async
    def list_by_role(self, role: str) -> List[Account]:
        with translate_database_errors("account.list_by_role"):
            models = AccountModel.objects.filter(role=role).order_by("-created_at")
            return [self._to_domain(model) for model in models]
