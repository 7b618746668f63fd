"""
Admin API views.

Endpoints an admin uses to look at its own account.
"""

from asgiref.sync import async_to_sync
from drf_spectacular.utils import extend_schema
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from accounts.application.handlers.admin_management_handlers import GetMyAdminDataHandler
from accounts.application.queries.admin_queries import GetMyAdminDataQuery
from accounts.infrastructure.repositories.django_account_repository import (
    DjangoAccountRepository,
)
from api.v1.license.serializers import ErrorResponseSerializer
from api.v1.responses import caller_of, success
from api.v1.superadmin.serializers import AdminSerializer
from core.instrumentation import Status, StatusCode, get_tracer
from licenses.infrastructure.repositories.django_license_repository import DjangoLicenseRepository

_license_repo = DjangoLicenseRepository()
_account_repo = DjangoAccountRepository()

tracer = get_tracer(__name__)


class MyAdminDataView(APIView):
    """View for the calling admin's account and license."""

    @extend_schema(
        operation_id="get_my_admin_data",
        summary="My Admin Data",
        description="The calling admin's account with its license and days remaining.",
        tags=["Admin API"],
        responses={
            200: AdminSerializer,
            401: ErrorResponseSerializer,
            403: ErrorResponseSerializer,
            404: ErrorResponseSerializer,
        },
    )
    def get(self, request: Request) -> Response:
        """Get own admin data."""
        return async_to_sync(self._handle_my_data)(request)

    async def _handle_my_data(self, request: Request) -> Response:
        """Async handler for my admin data."""
        with tracer.start_as_current_span("get_my_admin_data") as span:
            span.set_attribute("operation", "get_my_admin_data")

            handler = GetMyAdminDataHandler(
                account_repository=_account_repo,
                license_repository=_license_repo,
            )
            admin = await handler.handle(GetMyAdminDataQuery(caller=caller_of(request)))

            span.set_attribute("admin.id", str(admin.id))
            span.set_status(Status(StatusCode.OK))
            return success("Admin data retrieved successfully", data=AdminSerializer(admin).data)
