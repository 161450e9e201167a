"""Material order model."""

import uuid
from typing import ClassVar

from django.db import models

from core.enums import MaterialOrderStatus


class MaterialOrder(models.Model):
    """Material order placed by a foreman for a job. Unmanaged."""

    order_id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    foreman = models.ForeignKey(
        "core.User",
        on_delete=models.DO_NOTHING,
        db_constraint=False,
        related_name="material_orders",
        db_column="foreman_id",
    )
    foreman_name = models.CharField(max_length=255, default="", blank=True)
    job_name = models.CharField(max_length=255)
    status = models.CharField(
        max_length=30,
        choices=[(status.value, status.value) for status in MaterialOrderStatus],
        default=MaterialOrderStatus.PENDING.value,
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        """Django model metadata."""

        db_table = "material_orders"
        managed = False
        ordering: ClassVar[list[str]] = ["-created_at"]

    def __str__(self) -> str:
        """Return string representation of material order."""
        return f"{self.job_name} ({self.status})"
