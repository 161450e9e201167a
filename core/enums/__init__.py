"""Enumerations for the core app."""

from core.enums.health_status import HealthStatus
from core.enums.material_order_status import MaterialOrderStatus
from core.enums.notification import (
    TERMINAL_STATUSES,
    Channel,
    ChannelResultStatus,
    NotificationCategory,
    NotificationStatusEnum,
)
from core.enums.submission_status import SubmissionStatus
from core.enums.user_role import UserRole

__all__ = [
    "TERMINAL_STATUSES",
    "Channel",
    "ChannelResultStatus",
    "HealthStatus",
    "MaterialOrderStatus",
    "NotificationCategory",
    "NotificationStatusEnum",
    "SubmissionStatus",
    "UserRole",
]
