"""Timesheet submission model."""

import uuid
from typing import ClassVar

from django.db import models

from core.enums import SubmissionStatus


class TimesheetSubmission(models.Model):
    """A foreman's daily timesheet for one job.

    Unmanaged: owned by the main application. Read by the reminder and
    digest jobs and by the timesheet event endpoints.
    """

    submission_id = models.UUIDField(
        primary_key=True, default=uuid.uuid4, editable=False
    )
    foreman = models.ForeignKey(
        "core.User",
        on_delete=models.DO_NOTHING,
        db_constraint=False,
        related_name="submissions",
        db_column="foreman_id",
    )
    foreman_name = models.CharField(max_length=255, default="", blank=True)
    job_name = models.CharField(max_length=255)
    date = models.CharField(max_length=10, help_text="Work date, YYYY-MM-DD")
    status = models.CharField(
        max_length=20,
        choices=[(status.value, status.value) for status in SubmissionStatus],
        default=SubmissionStatus.DRAFT.value,
    )
    submitted_at = models.DateTimeField()
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        """Django model metadata."""

        db_table = "submissions"
        managed = False
        ordering: ClassVar[list[str]] = ["-submitted_at"]
        indexes: ClassVar[list] = [models.Index(fields=["status", "submitted_at"])]

    def __str__(self) -> str:
        """Return string representation of submission."""
        return f"{self.job_name} {self.date} ({self.status})"
