"""
Django management command to issue an access token for an account.

Tokens are normally minted by the login service; this command covers
local development and smoke tests.
"""

from datetime import timedelta

from asgiref.sync import async_to_sync
from django.core.management.base import BaseCommand, CommandError

from accounts.infrastructure.repositories.django_account_repository import (
    DjangoAccountRepository,
)
from accounts.infrastructure.tokens import issue_access_token


class Command(BaseCommand):
    """Command to issue an access token."""

    help = "Issue a bearer access token for an existing account"

    def add_arguments(self, parser):
        """Add command arguments."""
        parser.add_argument("email", type=str, help="Account email address")
        parser.add_argument(
            "--lifetime",
            type=int,
            default=None,
            help="Token lifetime in seconds (default: ACCESS_TOKEN_LIFETIME_SECONDS)",
        )

    def handle(self, *args, **options):
        """Execute the command."""
        account = async_to_sync(DjangoAccountRepository().find_by_email)(options["email"])
        if not account:
            raise CommandError(f"No account with email {options['email']}")
        if not account.is_active:
            raise CommandError(f"Account {account.email} is inactive")

        lifetime = None
        if options["lifetime"] is not None:
            lifetime = timedelta(seconds=options["lifetime"])

        self.stdout.write(
            issue_access_token(account.id, account.email, account.role, lifetime=lifetime)
        )
