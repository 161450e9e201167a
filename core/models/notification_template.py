"""Notification template model."""

from typing import ClassVar

from django.db import models

from core.enums import NotificationCategory


class NotificationTemplate(models.Model):
    """Renderable content for one kind of notification.

    Fields contain ``{{ placeholder }}`` variables substituted from the
    notification payload at delivery time. Templates are edited by
    administrators in the main application and read-only here.
    """

    template_key = models.CharField(
        max_length=100,
        primary_key=True,
        help_text="Stable key, e.g. TS_REMIND_DUE_V1",
    )
    category = models.CharField(
        max_length=20,
        choices=[(category.value, category.value) for category in NotificationCategory],
        default=NotificationCategory.SYSTEM.value,
    )
    subject = models.CharField(max_length=255)
    email_html = models.TextField()
    inapp_text = models.TextField()
    whatsapp_body = models.TextField(
        null=True,
        blank=True,
        help_text="Approved WhatsApp body; falls back to in-app text, then subject",
    )

    class Meta:
        """Django model metadata."""

        db_table = "notification_templates"
        managed = False
        ordering: ClassVar[list[str]] = ["template_key"]

    def __str__(self) -> str:
        """Return string representation of template."""
        return self.template_key
