"""Employee training certificate model."""

import uuid
from typing import ClassVar

from django.db import models


class EmployeeCertificate(models.Model):
    """Training or safety certificate held by a workforce user.

    Unmanaged: certificates are uploaded and maintained by the main
    application. The notification service only reads expiry dates.
    """

    certificate_id = models.UUIDField(
        primary_key=True, default=uuid.uuid4, editable=False
    )
    holder = models.ForeignKey(
        "core.User",
        on_delete=models.CASCADE,
        related_name="certificates",
        db_column="user_id",
    )
    name = models.CharField(max_length=255)
    valid_from = models.DateField(null=True, blank=True)
    valid_until = models.DateField()
    file_url = models.URLField(max_length=500, null=True, blank=True)

    class Meta:
        """Django model metadata."""

        db_table = "employee_certificates"
        managed = False
        ordering: ClassVar[list[str]] = ["valid_until"]
        indexes: ClassVar[list] = [models.Index(fields=["valid_until"])]

    def __str__(self) -> str:
        """Return string representation of certificate."""
        return f"{self.name} (until {self.valid_until})"
