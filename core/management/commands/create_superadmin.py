"""
Django management command to create a superadmin account.

Superadmins are never created through the API, so every
deployment bootstraps its first one with this command.
"""

import logging

from asgiref.sync import async_to_sync
from django.contrib.auth.hashers import make_password
from django.core.management.base import BaseCommand, CommandError

from accounts.domain.account import Account
from accounts.infrastructure.repositories.django_account_repository import (
    DjangoAccountRepository,
)
from accounts.infrastructure.tokens import issue_access_token
from core.domain.value_objects import Role

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    """Command to create a superadmin."""

    help = "Create a superadmin account"

    def add_arguments(self, parser):
        """Add command arguments."""
        parser.add_argument("email", type=str, help="Superadmin email address")
        parser.add_argument("password", type=str, help="Superadmin password")
        parser.add_argument(
            "--print-token",
            action="store_true",
            help="Print an access token for the new account",
        )

    def handle(self, *args, **options):
        """Execute the command."""
        repository = DjangoAccountRepository()
        email = options["email"].strip()

        if async_to_sync(repository.exists_by_email)(email):
            raise CommandError(f"An account with email {email} already exists")

        try:
            account = Account.create(
                email=email,
                password_hash=make_password(options["password"]),
                role=Role.SUPERADMIN.value,
            )
        except ValueError as e:
            raise CommandError(str(e)) from e

        account = async_to_sync(repository.insert)(account)
        logger.info("Superadmin created", extra={"account_id": str(account.id)})
        # pylint: disable=no-member
        self.stdout.write(self.style.SUCCESS(f"Superadmin {account.email} created ({account.id})"))

        if options["print_token"]:
            self.stdout.write(issue_access_token(account.id, account.email, account.role))
