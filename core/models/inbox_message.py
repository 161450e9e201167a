"""In-app inbox message model."""

import uuid
from typing import ClassVar

from django.db import models


class InboxMessage(models.Model):
    """Message shown in a user's in-app notification bell.

    Written by the in-app channel provider; each message links back to the
    notification that produced it.
    """

    message_id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey(
        "core.User",
        on_delete=models.DO_NOTHING,
        db_constraint=False,
        related_name="inbox_messages",
        db_column="user_id",
    )
    notification = models.ForeignKey(
        "core.Notification",
        on_delete=models.DO_NOTHING,
        db_constraint=False,
        related_name="inbox_messages",
        db_column="notification_id",
    )
    text = models.TextField()
    read = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        """Django model metadata."""

        db_table = "inbox_messages"
        managed = False
        ordering: ClassVar[list[str]] = ["-created_at"]
        indexes: ClassVar[list] = [
            models.Index(fields=["user", "read", "-created_at"]),
        ]

    def __str__(self) -> str:
        """Return string representation of inbox message."""
        return f"Inbox message for user {self.user_id}"
