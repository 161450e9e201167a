"""Notification-related enumerations.

This module contains enums for delivery channels, notification lifecycle
statuses, per-channel result statuses and the business categories that
notifications belong to.
"""

from enum import Enum


class Channel(str, Enum):
    """Delivery channels a notification can be dispatched to.

    A single notification may request several channels; each one is
    attempted independently.
    """

    EMAIL = "email"
    WHATSAPP = "whatsapp"
    IN_APP = "inapp"


class NotificationStatusEnum(str, Enum):
    """Lifecycle status of a notification record.

    ``SCHEDULED`` is the only non-terminal value. Named with 'Enum' suffix
    to avoid clashing with the ``status`` model field.
    """

    SCHEDULED = "scheduled"
    SENT = "sent"
    PARTIALLY_FAILED = "partially_failed"
    FAILED = "failed"
    SKIPPED_QUIET_HOURS = "skipped_quiet_hours"

    @property
    def is_terminal(self) -> bool:
        """Whether the delivery worker must leave a record in this status alone."""
        return self is not NotificationStatusEnum.SCHEDULED


TERMINAL_STATUSES = frozenset(
    status.value for status in NotificationStatusEnum if status.is_terminal
)


class ChannelResultStatus(str, Enum):
    """Outcome of one channel dispatch."""

    OK = "ok"
    ERROR = "error"


class NotificationCategory(str, Enum):
    """Business area a notification belongs to.

    Users can express per-category preferences; the category travels with
    every channel selection.
    """

    TIMESHEET = "timesheet"
    MATERIAL_ORDER = "MO"
    INVENTORY = "inventory"
    SYSTEM = "system"
    COMPLIANCE = "compliance"
