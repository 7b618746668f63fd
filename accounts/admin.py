"""
Django admin configuration for accounts app.
"""
from django.contrib import admin

from accounts.infrastructure.models import Account


@admin.register(Account)
class AccountAdmin(admin.ModelAdmin):
    """Admin interface for Account model."""

    list_display = ["email", "role", "is_active", "license_count", "created_at"]
    list_filter = ["role", "is_active", "created_at"]
    search_fields = ["email"]
    readonly_fields = ["id", "password", "created_at", "updated_at"]
    fieldsets = (
        (
            "Basic Information",
            {
                "fields": ("id", "email", "role", "is_active"),
            },
        ),
        (
            "Credentials",
            {
                "fields": ("password",),
                "classes": ("collapse",),
            },
        ),
        (
            "Timestamps",
            {
                "fields": ("created_at", "updated_at"),
                "classes": ("collapse",),
            },
        ),
    )

    def license_count(self, obj):
        """Display number of licenses owned by this account."""
        return obj.licenses.count()

    license_count.short_description = "Licenses"

    def get_queryset(self, request):
        """Optimize queryset."""
        return super().get_queryset(request).prefetch_related("licenses")
