"""Notification schemas."""

from core.schemas.notification.channel_result import ChannelResult
from core.schemas.notification.delivery_outcome import DeliveryOutcome
from core.schemas.notification.notification_request import NotificationRequest
from core.schemas.notification.quiet_hours_window import QuietHoursWindow
from core.schemas.notification.rendered_template import RenderedTemplate
from core.schemas.notification.request import (
    MaterialOrderEventRequest,
    TimesheetEventRequest,
)
from core.schemas.notification.response import (
    BatchNotificationResponse,
    DeliveryResponse,
    NotificationCreated,
)

__all__ = [
    "BatchNotificationResponse",
    "ChannelResult",
    "DeliveryOutcome",
    "DeliveryResponse",
    "MaterialOrderEventRequest",
    "NotificationCreated",
    "NotificationRequest",
    "QuietHoursWindow",
    "RenderedTemplate",
    "TimesheetEventRequest",
]
