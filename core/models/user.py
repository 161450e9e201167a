"""User model."""

import uuid
from typing import ClassVar

from django.db import models

from core.enums import UserRole


class User(models.Model):
    """Workforce user matching the construction application's users table.

    This model is unmanaged as the database schema is owned by the main
    application. It provides read-only access to the contact details and
    notification preferences the delivery pipeline needs.

    ``notify_prefs`` mirrors the application's preference document::

        {
            "email": true,
            "whatsapp": false,
            "inApp": true,
            "quietHours": {"start": "21:00", "end": "07:00"},
            "categories": {"timesheet": "...", "compliance": "..."}
        }
    """

    user_id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    role = models.CharField(
        max_length=20,
        choices=[(role.value, role.value) for role in UserRole],
        default=UserRole.EMPLOYEE.value,
    )
    full_name = models.CharField(max_length=255, default="", blank=True)
    email = models.EmailField(max_length=255, null=True, blank=True)
    phone = models.CharField(
        max_length=32,
        null=True,
        blank=True,
        help_text="E.164 phone number used for WhatsApp delivery",
    )
    whatsapp_opt_in = models.BooleanField(default=False)
    timezone = models.CharField(
        max_length=64,
        default="",
        blank=True,
        help_text="IANA timezone name, e.g. America/New_York",
    )
    notify_prefs = models.JSONField(default=dict, blank=True)
    supervisor = models.ForeignKey(
        "self",
        null=True,
        blank=True,
        on_delete=models.SET_NULL,
        related_name="crew",
        db_column="supervisor_id",
        help_text="Foreman this user reports to",
    )
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        """Django model metadata."""

        db_table = "users"
        managed = False  # Schema is managed externally
        ordering: ClassVar[list[str]] = ["full_name"]
        indexes: ClassVar[list] = [models.Index(fields=["role"])]

    def __str__(self) -> str:
        """Return string representation of user."""
        return f"{self.full_name or self.user_id} ({self.role})"

    def __repr__(self) -> str:
        """Return detailed representation of user."""
        return f"<User(user_id={self.user_id}, role='{self.role}')>"

    @property
    def quiet_hours(self) -> dict | None:
        """Configured do-not-disturb window, if any."""
        prefs = self.notify_prefs or {}
        return prefs.get("quietHours")
