"""
Serializers for license API endpoints.
"""

from rest_framework import serializers


class ActivateLicenseRequestSerializer(serializers.Serializer):
    """Serializer for activate license request."""

    license_key = serializers.CharField(required=False, allow_blank=True, allow_null=True)


class VerifyLicenseRequestSerializer(serializers.Serializer):
    """Serializer for verify license request."""

    license_key = serializers.CharField(required=False, allow_blank=True, allow_null=True)


class GenerateLicenseQuerySerializer(serializers.Serializer):
    """Serializer for generate license query parameters."""

    expiry_date = serializers.CharField(
        required=False, allow_blank=True, help_text="Expiry date as YYYY-MM-DD"
    )


class UpdateExpiryRequestSerializer(serializers.Serializer):
    """Serializer for update expiry request. Null or empty clears the expiry."""

    expiry_date = serializers.CharField(
        required=False, allow_blank=True, allow_null=True, help_text="Expiry date as YYYY-MM-DD"
    )


class LicenseSerializer(serializers.Serializer):
    """Serializer for LicenseDTO."""

    id = serializers.UUIDField()
    license_key = serializers.CharField()
    status = serializers.CharField()
    is_active = serializers.BooleanField()
    admin_id = serializers.UUIDField(allow_null=True)
    assigned_email = serializers.EmailField(allow_null=True)
    expiry_date = serializers.DateTimeField(allow_null=True)
    created_at = serializers.DateTimeField()
    updated_at = serializers.DateTimeField()


class LicenseCheckResponseSerializer(serializers.Serializer):
    """Serializer for validate and verify responses."""

    status = serializers.BooleanField()
    valid = serializers.BooleanField()
    message = serializers.CharField()


class GeneratedLicenseResponseSerializer(serializers.Serializer):
    """Serializer for generate license response."""

    status = serializers.BooleanField()
    message = serializers.CharField()
    license_key = serializers.CharField()
    expiry_date = serializers.DateTimeField(allow_null=True)


class LicenseListResponseSerializer(serializers.Serializer):
    """Serializer for list licenses response."""

    status = serializers.BooleanField()
    message = serializers.CharField()
    data = LicenseSerializer(many=True)


class ErrorResponseSerializer(serializers.Serializer):
    """Serializer for the failure envelope."""

    status = serializers.BooleanField()
    message = serializers.CharField()
    code = serializers.CharField()
