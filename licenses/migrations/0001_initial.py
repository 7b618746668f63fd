import uuid

import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("accounts", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="License",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        default=uuid.uuid4, editable=False, primary_key=True, serialize=False
                    ),
                ),
                ("license_key", models.CharField(db_index=True, max_length=32, unique=True)),
                (
                    "assigned_email",
                    models.EmailField(blank=True, db_index=True, max_length=254, null=True),
                ),
                (
                    "status",
                    models.CharField(
                        choices=[("unused", "Unused"), ("active", "Active")],
                        default="unused",
                        max_length=20,
                    ),
                ),
                ("is_active", models.BooleanField(default=True)),
                ("expiry_date", models.DateTimeField(blank=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "admin",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="licenses",
                        to="accounts.account",
                    ),
                ),
            ],
            options={
                "db_table": "licenses",
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(fields=["admin", "status"], name="licenses_admin_status_idx"),
                    models.Index(
                        fields=["assigned_email", "status"], name="licenses_email_status_idx"
                    ),
                    models.Index(fields=["expiry_date"], name="licenses_expiry_idx"),
                ],
            },
        ),
    ]
