"""
License API views.

These endpoints are used by the procurement frontend to:
- Activate, validate and verify license keys
- Generate, list, toggle and re-date licenses (superadmin)
"""

import uuid

from asgiref.sync import async_to_sync
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from accounts.infrastructure.repositories.django_account_repository import (
    DjangoAccountRepository,
)
from api.v1.license.serializers import (
    ActivateLicenseRequestSerializer,
    ErrorResponseSerializer,
    GeneratedLicenseResponseSerializer,
    GenerateLicenseQuerySerializer,
    LicenseCheckResponseSerializer,
    LicenseListResponseSerializer,
    LicenseSerializer,
    UpdateExpiryRequestSerializer,
    VerifyLicenseRequestSerializer,
)
from api.v1.responses import caller_of, format_datetime, success
from core.instrumentation import Status, StatusCode, get_tracer
from licenses.application.commands.activate_license import ActivateLicenseCommand
from licenses.application.commands.generate_license import GenerateLicenseCommand
from licenses.application.commands.toggle_license import ToggleLicenseCommand
from licenses.application.commands.update_license_expiry import UpdateLicenseExpiryCommand
from licenses.application.handlers.activate_license_handler import ActivateLicenseHandler
from licenses.application.handlers.license_admin_handlers import (
    GenerateLicenseHandler,
    ToggleLicenseHandler,
    UpdateLicenseExpiryHandler,
)
from licenses.application.handlers.license_query_handlers import (
    ListLicensesHandler,
    ValidateLicenseHandler,
    VerifyLicenseHandler,
)
from licenses.application.queries.list_licenses import ListLicensesQuery
from licenses.application.queries.validate_license import ValidateLicenseQuery
from licenses.application.queries.verify_license import VerifyLicenseQuery
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


class ActivateLicenseView(APIView):
    """View for activating a license key."""

    @extend_schema(
        operation_id="activate_license",
        summary="Activate License",
        description=(
            "Bind an unused license key to the calling account. "
            "Activating a key the caller already owns is idempotent."
        ),
        tags=["License API"],
        request=ActivateLicenseRequestSerializer,
        responses={200: LicenseSerializer, **ERROR_RESPONSES},
    )
    def post(self, request: Request) -> Response:
        """Activate a license key."""
        return async_to_sync(self._handle_activate)(request)

    async def _handle_activate(self, request: Request) -> Response:
        """Async handler for activate license."""
        with tracer.start_as_current_span("activate_license") as span:
            span.set_attribute("operation", "activate_license")

            serializer = ActivateLicenseRequestSerializer(data=request.data)
            serializer.is_valid(raise_exception=True)

            caller = caller_of(request)
            if caller:
                span.set_attribute("caller.id", str(caller.id))

            handler = ActivateLicenseHandler(
                license_repository=_license_repo,
                account_repository=_account_repo,
            )
            result = await handler.handle(
                ActivateLicenseCommand(
                    caller=caller,
                    license_key=serializer.validated_data.get("license_key"),
                )
            )

            span.set_attribute("license.id", str(result.license.id))
            span.set_attribute("already_active", result.already_active)
            span.set_status(Status(StatusCode.OK))
            return success(result.message, data=LicenseSerializer(result.license).data)


class ValidateLicenseView(APIView):
    """View for checking the caller's own license."""

    @extend_schema(
        operation_id="validate_license",
        summary="Validate License",
        description="Check whether the calling account currently holds a usable license.",
        tags=["License API"],
        request=None,
        responses={200: LicenseCheckResponseSerializer, 401: ErrorResponseSerializer},
    )
    def post(self, request: Request) -> Response:
        """Validate the caller's license."""
        return async_to_sync(self._handle_validate)(request)

    async def _handle_validate(self, request: Request) -> Response:
        """Async handler for validate license."""
        with tracer.start_as_current_span("validate_license") as span:
            span.set_attribute("operation", "validate_license")

            handler = ValidateLicenseHandler(
                license_repository=_license_repo,
                account_repository=_account_repo,
            )
            result = await handler.handle(ValidateLicenseQuery(caller=caller_of(request)))

            span.set_attribute("license.valid", result.valid)
            span.set_status(Status(StatusCode.OK))
            return success(result.message, valid=result.valid)


class VerifyLicenseView(APIView):
    """View for verifying a license key without authentication."""

    @extend_schema(
        operation_id="verify_license",
        summary="Verify License",
        description=(
            "Check a license key. Unknown, inactive and expired keys are "
            "reported with valid=false and a reason. Rate limited per client."
        ),
        tags=["License API"],
        request=VerifyLicenseRequestSerializer,
        responses={
            200: LicenseCheckResponseSerializer,
            400: ErrorResponseSerializer,
            429: ErrorResponseSerializer,
        },
    )
    def post(self, request: Request) -> Response:
        """Verify a license key."""
        return async_to_sync(self._handle_verify)(request)

    async def _handle_verify(self, request: Request) -> Response:
        """Async handler for verify license."""
        with tracer.start_as_current_span("verify_license") as span:
            span.set_attribute("operation", "verify_license")

            serializer = VerifyLicenseRequestSerializer(data=request.data)
            serializer.is_valid(raise_exception=True)

            handler = VerifyLicenseHandler(license_repository=_license_repo)
            result = await handler.handle(
                VerifyLicenseQuery(license_key=serializer.validated_data.get("license_key"))
            )

            span.set_attribute("license.valid", result.valid)
            span.set_status(Status(StatusCode.OK))
            return success(result.message, valid=result.valid)


class GenerateLicenseView(APIView):
    """View for generating a new license key."""

    @extend_schema(
        operation_id="generate_license",
        summary="Generate License",
        description="Generate a new unused license key (superadmin only).",
        tags=["License API"],
        parameters=[
            OpenApiParameter(
                name="expiry_date",
                type=str,
                location=OpenApiParameter.QUERY,
                required=False,
                description="Expiry date as YYYY-MM-DD",
            ),
        ],
        responses={200: GeneratedLicenseResponseSerializer, **ERROR_RESPONSES},
    )
    def get(self, request: Request) -> Response:
        """Generate a license key."""
        return async_to_sync(self._handle_generate)(request)

    async def _handle_generate(self, request: Request) -> Response:
        """Async handler for generate license."""
        with tracer.start_as_current_span("generate_license") as span:
            span.set_attribute("operation", "generate_license")

            serializer = GenerateLicenseQuerySerializer(data=request.query_params)
            serializer.is_valid(raise_exception=True)

            handler = GenerateLicenseHandler(license_repository=_license_repo)
            result = await handler.handle(
                GenerateLicenseCommand(
                    caller=caller_of(request),
                    expiry_date=serializer.validated_data.get("expiry_date"),
                )
            )

            span.set_attribute("license.id", str(result.id))
            span.set_status(Status(StatusCode.OK))
            return success(
                "License key generated successfully",
                license_key=result.license_key,
                expiry_date=format_datetime(result.expiry_date),
            )


class ListLicensesView(APIView):
    """View for listing licenses visible to the caller."""

    @extend_schema(
        operation_id="list_licenses",
        summary="List Licenses",
        description="Superadmins see every license, admins only their own.",
        tags=["License API"],
        responses={200: LicenseListResponseSerializer, **ERROR_RESPONSES},
    )
    def get(self, request: Request) -> Response:
        """List licenses."""
        return async_to_sync(self._handle_list)(request)

    async def _handle_list(self, request: Request) -> Response:
        """Async handler for list licenses."""
        with tracer.start_as_current_span("list_licenses") as span:
            span.set_attribute("operation", "list_licenses")

            handler = ListLicensesHandler(license_repository=_license_repo)
            licenses = await handler.handle(ListLicensesQuery(caller=caller_of(request)))

            span.set_attribute("licenses.count", len(licenses))
            span.set_status(Status(StatusCode.OK))
            return success(
                "Licenses retrieved successfully",
                data=LicenseSerializer(licenses, many=True).data,
            )


class ToggleLicenseView(APIView):
    """View for flipping a license's active flag."""

    @extend_schema(
        operation_id="toggle_license",
        summary="Toggle License",
        description="Activate or deactivate a license (superadmin only).",
        tags=["License API"],
        request=None,
        responses={200: {"description": "License toggled"}, **ERROR_RESPONSES},
    )
    def put(self, request: Request, license_id: uuid.UUID) -> Response:
        """Toggle a license."""
        return async_to_sync(self._handle_toggle)(request, license_id)

    async def _handle_toggle(self, request: Request, license_id: uuid.UUID) -> Response:
        """Async handler for toggle license."""
        with tracer.start_as_current_span("toggle_license") as span:
            span.set_attribute("operation", "toggle_license")
            span.set_attribute("license.id", str(license_id))

            handler = ToggleLicenseHandler(license_repository=_license_repo)
            result = await handler.handle(
                ToggleLicenseCommand(caller=caller_of(request), license_id=license_id)
            )

            span.set_attribute("license.is_active", result.is_active)
            span.set_status(Status(StatusCode.OK))
            state = "activated" if result.is_active else "deactivated"
            return success(f"License {state} successfully", is_active=result.is_active)


class UpdateLicenseExpiryView(APIView):
    """View for setting or clearing a license's expiry date."""

    @extend_schema(
        operation_id="update_license_expiry",
        summary="Update License Expiry",
        description=(
            "Set the expiry date of a license, or clear it with an empty value "
            "so the license never expires (superadmin only)."
        ),
        tags=["License API"],
        request=UpdateExpiryRequestSerializer,
        responses={200: {"description": "Expiry date updated"}, **ERROR_RESPONSES},
    )
    def put(self, request: Request, license_id: uuid.UUID) -> Response:
        """Update a license's expiry date."""
        return async_to_sync(self._handle_update_expiry)(request, license_id)

    async def _handle_update_expiry(self, request: Request, license_id: uuid.UUID) -> Response:
        """Async handler for update license expiry."""
        with tracer.start_as_current_span("update_license_expiry") as span:
            span.set_attribute("operation", "update_license_expiry")
            span.set_attribute("license.id", str(license_id))

            serializer = UpdateExpiryRequestSerializer(data=request.data)
            serializer.is_valid(raise_exception=True)

            handler = UpdateLicenseExpiryHandler(license_repository=_license_repo)
            result = await handler.handle(
                UpdateLicenseExpiryCommand(
                    caller=caller_of(request),
                    license_id=license_id,
                    expiry_date=serializer.validated_data.get("expiry_date"),
                )
            )

            span.set_status(Status(StatusCode.OK))
            return success(
                "Expiry date updated successfully",
                expiry_date=format_datetime(result.expiry_date),
            )
