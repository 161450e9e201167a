"""Audit event model."""

from typing import ClassVar

from django.db import models


class AuditEvent(models.Model):
    """Append-only record of a pipeline event shown in the admin audit log."""

    event_name = models.CharField(max_length=100)
    details = models.JSONField(default=dict, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        """Django model metadata."""

        db_table = "audit_events"
        managed = False
        ordering: ClassVar[list[str]] = ["-created_at"]
        indexes: ClassVar[list] = [models.Index(fields=["event_name", "-created_at"])]

    def __str__(self) -> str:
        """Return string representation of audit event."""
        return self.event_name
