"""
Django admin configuration for licenses app.
"""
from django.contrib import admin
from django.utils.html import format_html

from licenses.infrastructure.models import License


@admin.register(License)
class LicenseAdmin(admin.ModelAdmin):
    """Admin interface for License model."""

    list_display = [
        "license_key",
        "admin",
        "assigned_email",
        "status_display",
        "is_active",
        "expiry_date",
        "created_at",
    ]
    list_filter = ["status", "is_active", "expiry_date", "created_at"]
    search_fields = ["license_key", "assigned_email", "admin__email"]
    readonly_fields = ["id", "license_key", "created_at", "updated_at"]
    fieldsets = (
        (
            "Basic Information",
            {
                "fields": ("id", "license_key", "status", "is_active"),
            },
        ),
        (
            "Assignment",
            {
                "fields": ("admin", "assigned_email"),
            },
        ),
        (
            "Expiration",
            {
                "fields": ("expiry_date",),
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

    def status_display(self, obj):
        """Display status with color coding."""
        colors = {
            "unused": "gray",
            "active": "green",
        }
        color = colors.get(obj.status, "black")
        if obj.status == "active" and not obj.is_active:
            color = "orange"
        return format_html(
            '<span style="color: {}; font-weight: bold;">{}</span>',
            color,
            obj.status.upper(),
        )

    status_display.short_description = "Status"

    def get_queryset(self, request):
        """Optimize queryset."""
        return super().get_queryset(request).select_related("admin")
