"""
Django admin configuration for notifications app.
"""
from django.contrib import admin

from notifications.infrastructure.models import Notification


@admin.register(Notification)
class NotificationAdmin(admin.ModelAdmin):
    """Admin interface for Notification model."""

    list_display = ["type", "target_role", "target_user_id", "is_read", "created_at"]
    list_filter = ["type", "target_role", "is_read", "created_at"]
    search_fields = ["message", "target_user_id", "related_license_id"]
    readonly_fields = [
        "id",
        "type",
        "message",
        "target_role",
        "target_user_id",
        "related_license_id",
        "created_at",
    ]
