"""
Serializers for superadmin and admin API endpoints.
"""

from rest_framework import serializers

from accounts.application.queries.admin_queries import DEFAULT_EXPIRING_WITHIN_DAYS


class CreateAdminRequestSerializer(serializers.Serializer):
    """Serializer for create admin request."""

    email = serializers.CharField(required=False, allow_blank=True)
    password = serializers.CharField(
        required=False, allow_blank=True, write_only=True, trim_whitespace=False
    )
    start_date = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    expiry_date = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    license_period_days = serializers.IntegerField(required=False, allow_null=True, min_value=1)


class RenewLicenseRequestSerializer(serializers.Serializer):
    """Serializer for renew license request. Give exactly one field."""

    expiry_date = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    extend_days = serializers.IntegerField(required=False, allow_null=True, min_value=1)


class UpdateAdminExpiryRequestSerializer(serializers.Serializer):
    """Serializer for admin expiry update. Null or empty clears the expiry."""

    expiry_date = serializers.CharField(required=False, allow_blank=True, allow_null=True)


class ExpiringLicensesQuerySerializer(serializers.Serializer):
    """Serializer for expiring licenses query parameters."""

    days = serializers.IntegerField(
        required=False, default=DEFAULT_EXPIRING_WITHIN_DAYS, min_value=0
    )


class AdminLicenseSerializer(serializers.Serializer):
    """Serializer for AdminLicenseDTO."""

    id = serializers.UUIDField()
    license_key = serializers.CharField()
    status = serializers.CharField()
    is_active = serializers.BooleanField()
    expiry_date = serializers.DateTimeField(allow_null=True)
    days_remaining = serializers.IntegerField(allow_null=True)
    created_at = serializers.DateTimeField()
    updated_at = serializers.DateTimeField()


class AdminSerializer(serializers.Serializer):
    """Serializer for AdminDTO."""

    id = serializers.UUIDField()
    email = serializers.EmailField()
    user_active = serializers.BooleanField()
    license = AdminLicenseSerializer(allow_null=True)


class ExpiringLicenseSerializer(serializers.Serializer):
    """Serializer for ExpiringLicenseDTO."""

    admin_id = serializers.UUIDField()
    email = serializers.CharField()
    license_id = serializers.UUIDField()
    license_key = serializers.CharField()
    expiry_date = serializers.DateTimeField()
    days_remaining = serializers.IntegerField()


class CreatedAdminSerializer(serializers.Serializer):
    """Serializer for CreatedAdminDTO, nested as admin and license."""

    def to_representation(self, instance):
        return {
            "admin": {
                "id": str(instance.admin_id),
                "email": instance.email,
                "role": instance.role,
            },
            "license": {
                "id": str(instance.license_id),
                "license_key": instance.license_key,
                "expiry_date": serializers.DateTimeField().to_representation(instance.expiry_date)
                if instance.expiry_date
                else None,
                "start_date": serializers.DateField().to_representation(instance.start_date),
            },
        }
