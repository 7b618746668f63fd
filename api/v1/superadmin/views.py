"""
Superadmin API views.

These endpoints let a superadmin manage admin accounts
and the licenses bound to them.
"""

import uuid

from asgiref.sync import async_to_sync
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from accounts.application.commands.create_admin import CreateAdminCommand
from accounts.application.commands.toggle_admin import ToggleAdminCommand
from accounts.application.commands.update_admin_expiry import UpdateAdminExpiryCommand
from accounts.application.handlers.admin_management_handlers import (
    CreateAdminHandler,
    ListAdminsHandler,
    ListExpiringLicensesHandler,
    ToggleAdminHandler,
    UpdateAdminExpiryHandler,
)
from accounts.application.queries.admin_queries import ListAdminsQuery, ListExpiringLicensesQuery
from accounts.infrastructure.repositories.django_account_repository import (
    DjangoAccountRepository,
)
from api.v1.license.serializers import ErrorResponseSerializer
from api.v1.responses import caller_of, format_datetime, success
from api.v1.superadmin.serializers import (
    AdminSerializer,
    CreateAdminRequestSerializer,
    CreatedAdminSerializer,
    ExpiringLicenseSerializer,
    ExpiringLicensesQuerySerializer,
    RenewLicenseRequestSerializer,
    UpdateAdminExpiryRequestSerializer,
)
from core.instrumentation import Status, StatusCode, get_tracer
from licenses.application.commands.renew_license import RenewAdminLicenseCommand
from licenses.application.handlers.license_admin_handlers import RenewAdminLicenseHandler
from licenses.infrastructure.repositories.django_license_repository import DjangoLicenseRepository

# Initialize repositories (in production, use DI container)
_license_repo = DjangoLicenseRepository()
_account_repo = DjangoAccountRepository()

tracer = get_tracer(__name__)

ERROR_RESPONSES = {
    400: ErrorResponseSerializer,
    401: ErrorResponseSerializer,
    403: ErrorResponseSerializer,
    404: ErrorResponseSerializer,
}


class CreateAdminView(APIView):
    """View for creating an admin account with its license."""

    @extend_schema(
        operation_id="create_admin",
        summary="Create Admin",
        description=(
            "Create an admin account together with an active license. The expiry "
            "comes from expiry_date, or from start_date plus license_period_days."
        ),
        tags=["Superadmin API"],
        request=CreateAdminRequestSerializer,
        responses={201: {"description": "Admin created"}, **ERROR_RESPONSES},
    )
    def post(self, request: Request) -> Response:
        """Create an admin."""
        return async_to_sync(self._handle_create_admin)(request)

    async def _handle_create_admin(self, request: Request) -> Response:
        """Async handler for create admin."""
        with tracer.start_as_current_span("create_admin") as span:
            span.set_attribute("operation", "create_admin")

            serializer = CreateAdminRequestSerializer(data=request.data)
            serializer.is_valid(raise_exception=True)
            data = serializer.validated_data

            handler = CreateAdminHandler(
                account_repository=_account_repo,
                license_repository=_license_repo,
            )
            result = await handler.handle(
                CreateAdminCommand(
                    caller=caller_of(request),
                    email=data.get("email"),
                    password=data.get("password"),
                    start_date=data.get("start_date"),
                    expiry_date=data.get("expiry_date"),
                    license_period_days=data.get("license_period_days"),
                )
            )

            span.set_attribute("admin.id", str(result.admin_id))
            span.set_attribute("license.id", str(result.license_id))
            span.set_status(Status(StatusCode.OK))
            return success(
                "Admin created successfully",
                status_code=status.HTTP_201_CREATED,
                data=CreatedAdminSerializer(result).data,
            )


class ListAdminsView(APIView):
    """View for listing admins with their licenses."""

    @extend_schema(
        operation_id="list_admins",
        summary="List Admins",
        description="Every admin account with its license and days remaining.",
        tags=["Superadmin API"],
        responses={200: AdminSerializer(many=True), **ERROR_RESPONSES},
    )
    def get(self, request: Request) -> Response:
        """List admins."""
        return async_to_sync(self._handle_list_admins)(request)

    async def _handle_list_admins(self, request: Request) -> Response:
        """Async handler for list admins."""
        with tracer.start_as_current_span("list_admins") as span:
            span.set_attribute("operation", "list_admins")

            handler = ListAdminsHandler(
                account_repository=_account_repo,
                license_repository=_license_repo,
            )
            admins = await handler.handle(ListAdminsQuery(caller=caller_of(request)))

            span.set_attribute("admins.count", len(admins))
            span.set_status(Status(StatusCode.OK))
            return success(
                "Admins retrieved successfully",
                data=AdminSerializer(admins, many=True).data,
            )


class RenewAdminLicenseView(APIView):
    """View for renewing an admin's license."""

    @extend_schema(
        operation_id="renew_admin_license",
        summary="Renew Admin License",
        description=(
            "Renew the license of an admin with either an absolute expiry_date "
            "or extend_days counted from the current expiry. Forces the license active."
        ),
        tags=["Superadmin API"],
        request=RenewLicenseRequestSerializer,
        responses={200: {"description": "License renewed"}, **ERROR_RESPONSES},
    )
    def put(self, request: Request, admin_id: uuid.UUID) -> Response:
        """Renew an admin's license."""
        return async_to_sync(self._handle_renew)(request, admin_id)

    async def _handle_renew(self, request: Request, admin_id: uuid.UUID) -> Response:
        """Async handler for renew admin license."""
        with tracer.start_as_current_span("renew_admin_license") as span:
            span.set_attribute("operation", "renew_admin_license")
            span.set_attribute("admin.id", str(admin_id))

            serializer = RenewLicenseRequestSerializer(data=request.data)
            serializer.is_valid(raise_exception=True)

            handler = RenewAdminLicenseHandler(
                license_repository=_license_repo,
                account_repository=_account_repo,
            )
            result = await handler.handle(
                RenewAdminLicenseCommand(
                    caller=caller_of(request),
                    admin_id=admin_id,
                    expiry_date=serializer.validated_data.get("expiry_date"),
                    extend_days=serializer.validated_data.get("extend_days"),
                )
            )

            span.set_attribute("license.id", str(result.license_id))
            span.set_status(Status(StatusCode.OK))
            return success(
                "License renewed successfully",
                data={"expiry_date": format_datetime(result.expiry_date)},
            )


class ToggleAdminView(APIView):
    """View for activating or deactivating an admin."""

    @extend_schema(
        operation_id="toggle_admin",
        summary="Toggle Admin",
        description="Activate or deactivate an admin. Deactivation also disables its licenses.",
        tags=["Superadmin API"],
        request=None,
        responses={200: {"description": "Admin toggled"}, **ERROR_RESPONSES},
    )
    def put(self, request: Request, admin_id: uuid.UUID) -> Response:
        """Toggle an admin."""
        return async_to_sync(self._handle_toggle_admin)(request, admin_id)

    async def _handle_toggle_admin(self, request: Request, admin_id: uuid.UUID) -> Response:
        """Async handler for toggle admin."""
        with tracer.start_as_current_span("toggle_admin") as span:
            span.set_attribute("operation", "toggle_admin")
            span.set_attribute("admin.id", str(admin_id))

            handler = ToggleAdminHandler(
                account_repository=_account_repo,
                license_repository=_license_repo,
            )
            result = await handler.handle(
                ToggleAdminCommand(caller=caller_of(request), admin_id=admin_id)
            )

            span.set_attribute("admin.is_active", result.is_active)
            span.set_status(Status(StatusCode.OK))
            state = "activated" if result.is_active else "deactivated"
            return success(
                f"Admin {state} successfully",
                data={"is_active": result.is_active},
            )


class UpdateAdminExpiryView(APIView):
    """View for setting or clearing the expiry of an admin's licenses."""

    @extend_schema(
        operation_id="update_admin_expiry",
        summary="Update Admin License Expiry",
        description="Set or clear the expiry date of every license owned by an admin.",
        tags=["Superadmin API"],
        request=UpdateAdminExpiryRequestSerializer,
        responses={200: {"description": "Expiry date updated"}, **ERROR_RESPONSES},
    )
    def put(self, request: Request, admin_id: uuid.UUID) -> Response:
        """Update an admin's license expiry."""
        return async_to_sync(self._handle_update_expiry)(request, admin_id)

    async def _handle_update_expiry(self, request: Request, admin_id: uuid.UUID) -> Response:
        """Async handler for update admin expiry."""
        with tracer.start_as_current_span("update_admin_expiry") as span:
            span.set_attribute("operation", "update_admin_expiry")
            span.set_attribute("admin.id", str(admin_id))

            serializer = UpdateAdminExpiryRequestSerializer(data=request.data)
            serializer.is_valid(raise_exception=True)

            handler = UpdateAdminExpiryHandler(
                account_repository=_account_repo,
                license_repository=_license_repo,
            )
            result = await handler.handle(
                UpdateAdminExpiryCommand(
                    caller=caller_of(request),
                    admin_id=admin_id,
                    expiry_date=serializer.validated_data.get("expiry_date"),
                )
            )

            span.set_attribute("licenses.updated", result.updated_licenses)
            span.set_status(Status(StatusCode.OK))
            return success(
                "Expiry date updated successfully",
                data={"expiry_date": format_datetime(result.expiry_date)},
            )


class ExpiringLicensesView(APIView):
    """View for licenses that expire soon."""

    @extend_schema(
        operation_id="list_expiring_licenses",
        summary="List Expiring Licenses",
        description="Enabled admin licenses expiring within the given number of days.",
        tags=["Superadmin API"],
        parameters=[
            OpenApiParameter(
                name="days",
                type=int,
                location=OpenApiParameter.QUERY,
                required=False,
                description="Window in calendar days (default 7)",
            ),
        ],
        responses={200: ExpiringLicenseSerializer(many=True), **ERROR_RESPONSES},
    )
    def get(self, request: Request) -> Response:
        """List expiring licenses."""
        return async_to_sync(self._handle_expiring)(request)

    async def _handle_expiring(self, request: Request) -> Response:
        """Async handler for list expiring licenses."""
        with tracer.start_as_current_span("list_expiring_licenses") as span:
            span.set_attribute("operation", "list_expiring_licenses")

            serializer = ExpiringLicensesQuerySerializer(data=request.query_params)
            serializer.is_valid(raise_exception=True)
            days = serializer.validated_data["days"]
            span.set_attribute("days", days)

            handler = ListExpiringLicensesHandler(
                account_repository=_account_repo,
                license_repository=_license_repo,
            )
            licenses = await handler.handle(
                ListExpiringLicensesQuery(caller=caller_of(request), days=days)
            )

            span.set_attribute("licenses.count", len(licenses))
            span.set_status(Status(StatusCode.OK))
            return success(
                "Expiring licenses retrieved successfully",
                data=ExpiringLicenseSerializer(licenses, many=True).data,
            )
