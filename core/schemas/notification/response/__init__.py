"""Notification response schemas."""

from core.schemas.notification.response.batch_notification_response import (
    BatchNotificationResponse,
)
from core.schemas.notification.response.delivery_response import DeliveryResponse
from core.schemas.notification.response.notification_created import (
    NotificationCreated,
)

__all__ = ["BatchNotificationResponse", "DeliveryResponse", "NotificationCreated"]
