"""
Notification model.
"""
import uuid

from django.db import models


class Notification(models.Model):
    """A notification addressed to a role, optionally narrowed to one account."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    type = models.CharField(max_length=64, db_index=True)
    message = models.TextField()
    target_role = models.CharField(max_length=32, db_index=True)
    target_user_id = models.UUIDField(null=True, blank=True, db_index=True)
    related_license_id = models.UUIDField(null=True, blank=True)
    is_read = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "notifications"
        ordering = ["-created_at"]

    def __str__(self):
        return f"{self.type}: {self.message[:50]}"
