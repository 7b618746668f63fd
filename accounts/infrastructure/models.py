"""
Account model.
"""
import uuid

from django.db import models


class Account(models.Model):
    """
    Administrative account of the procurement backend.

    Passwords are stored as Django password hashes.
    """

    ROLE_CHOICES = [
        ("admin", "Admin"),
        ("superadmin", "Super Admin"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    email = models.EmailField(unique=True, db_index=True)
    password = models.CharField(max_length=255)
    role = models.CharField(max_length=32, default="admin", db_index=True)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "accounts"
        ordering = ["-created_at"]

    def __str__(self):
        return f"{self.email} ({self.role})"
