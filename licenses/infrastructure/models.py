"""
License model.
"""
import uuid

from django.db import models


class License(models.Model):
    """
    A license key granting an administrative account access.

    ``status`` records assignment, ``is_active`` gates access.
    A null ``expiry_date`` means the license never expires.
    """

    STATUS_CHOICES = [
        ("unused", "Unused"),
        ("active", "Active"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    license_key = models.CharField(max_length=32, unique=True, db_index=True)
    admin = models.ForeignKey(
        "accounts.Account",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="licenses",
    )
    assigned_email = models.EmailField(null=True, blank=True, db_index=True)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default="unused")
    is_active = models.BooleanField(default=True)
    expiry_date = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "licenses"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["admin", "status"], name="licenses_admin_status_idx"),
            models.Index(fields=["assigned_email", "status"], name="licenses_email_status_idx"),
            models.Index(fields=["expiry_date"], name="licenses_expiry_idx"),
        ]

    def __str__(self):
        return self.license_key
