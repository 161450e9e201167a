"""Notification model: one intended multi-channel delivery.

This module defines the durable notification record written by the fan-out
writer and mutated exactly once by the delivery worker. Per-channel outcomes
are kept on the record itself in ``results``.
"""

import uuid
from typing import Any, ClassVar

from django.db import models
from django.db.models import F
from django.utils import timezone

from core.enums import TERMINAL_STATUSES, NotificationStatusEnum


class Notification(models.Model):
    """Durable notification request.

    Attributes:
        notification_id: Unique identifier generated at creation.
        user: Recipient. The user row may be missing; delivery then treats
            the recipient as having no contact details.
        template_key: Key of the NotificationTemplate to render.
        channels: Requested channel values (email, whatsapp, inapp).
        payload: Template variables.
        schedule_at: Earliest delivery time; NULL means immediately eligible.
        dedupe_key: Optional idempotency key, unique across all records.
        priority_high: Bypasses quiet hours when true.
        status: scheduled, sent, partially_failed, failed or
            skipped_quiet_hours. Only ``scheduled`` is non-terminal.
        attempts: Number of delivery attempts that reached dispatch.
        results: Per-channel outcome dicts of the terminal attempt.
        last_error: ``"channel: error"`` pairs joined with ``"; "``.
        twilio_message_sid: WhatsApp provider message id, if any.
    """

    notification_id = models.UUIDField(
        primary_key=True,
        default=uuid.uuid4,
        editable=False,
        help_text="Unique identifier for the notification",
    )
    user = models.ForeignKey(
        "core.User",
        on_delete=models.DO_NOTHING,
        db_constraint=False,
        related_name="notifications",
        db_column="user_id",
        help_text="User receiving the notification",
    )
    template_key = models.CharField(
        max_length=100,
        help_text="Key of the template rendered at delivery time",
    )
    channels = models.JSONField(
        default=list,
        help_text="Requested delivery channels",
    )
    payload = models.JSONField(
        default=dict,
        blank=True,
        help_text="Template variables",
    )
    schedule_at = models.DateTimeField(
        null=True,
        blank=True,
        help_text="Earliest instant delivery should be attempted",
    )
    dedupe_key = models.CharField(
        max_length=255,
        null=True,
        blank=True,
        unique=True,
        help_text="Idempotency key; at most one record per key",
    )
    priority_high = models.BooleanField(
        default=False,
        help_text="Deliver even during the recipient's quiet hours",
    )
    status = models.CharField(
        max_length=30,
        choices=[(status.value, status.value) for status in NotificationStatusEnum],
        default=NotificationStatusEnum.SCHEDULED.value,
    )
    attempts = models.PositiveIntegerField(default=0)
    results = models.JSONField(default=list, blank=True)
    last_error = models.TextField(null=True, blank=True)
    twilio_message_sid = models.CharField(max_length=64, null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)
    sent_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        """Django model metadata."""

        db_table = "notifications"
        managed = False
        ordering: ClassVar[list[str]] = ["-created_at"]
        indexes: ClassVar[list] = [
            models.Index(fields=["status", "schedule_at"]),
            models.Index(fields=["user", "-created_at"]),
        ]

    def __str__(self) -> str:
        """Return string representation of notification."""
        return f"{self.template_key} for user {self.user_id}"

    def __repr__(self) -> str:
        """Return detailed representation of notification."""
        return (
            f"<Notification(id={self.notification_id}, "
            f"template={self.template_key}, "
            f"user={self.user_id}, "
            f"status={self.status})>"
        )

    @property
    def is_terminal(self) -> bool:
        """Whether delivery has already concluded for this record."""
        return self.status in TERMINAL_STATUSES

    def mark_skipped_quiet_hours(self) -> bool:
        """Conclude the record without attempting any channel.

        Returns:
            False if another delivery concluded the record first.
        """
        return self._conclude(status=NotificationStatusEnum.SKIPPED_QUIET_HOURS.value)

    def mark_failed(self, error_msg: str) -> bool:
        """Conclude the record as failed before any channel was attempted.

        Args:
            error_msg: Description of the failure.

        Returns:
            False if another delivery concluded the record first.
        """
        return self._conclude(
            status=NotificationStatusEnum.FAILED.value, last_error=error_msg
        )

    def record_delivery(
        self,
        status: NotificationStatusEnum,
        results: list[dict[str, Any]],
        last_error: str | None,
        twilio_message_sid: str | None = None,
    ) -> bool:
        """Persist the outcome of a dispatch attempt.

        Returns:
            False if another delivery concluded the record first; the
            stored outcome is then left as that delivery wrote it.
        """
        return self._conclude(
            status=status.value,
            sent_at=timezone.now(),
            attempts=F("attempts") + 1,
            results=results,
            last_error=last_error,
            twilio_message_sid=twilio_message_sid,
        )

    def _conclude(self, **fields: Any) -> bool:
        # Only a scheduled row may move to a terminal status, so concurrent
        # deliveries of the same id write exactly one outcome.
        updated = type(self).objects.filter(
            pk=self.pk, status=NotificationStatusEnum.SCHEDULED.value
        ).update(updated_at=timezone.now(), **fields)
        self.refresh_from_db(fields=[*fields, "updated_at"])
        return updated == 1
