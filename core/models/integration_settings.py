"""Integration settings model."""

from django.db import models

INTEGRATIONS_SETTINGS_KEY = "integrations"


class IntegrationSettingsRecord(models.Model):
    """Credentials and enablement flags for third-party channels.

    A single row keyed ``integrations`` holds one JSON document per
    integration, edited by Super Admins in the main application.
    """

    settings_key = models.CharField(
        max_length=50,
        primary_key=True,
        default=INTEGRATIONS_SETTINGS_KEY,
    )
    smtp = models.JSONField(default=dict, blank=True)
    whatsapp = models.JSONField(default=dict, blank=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        """Django model metadata."""

        db_table = "system_settings"
        managed = False

    def __str__(self) -> str:
        """Return string representation of the settings row."""
        return self.settings_key
