"""Schemas for the core app."""

from core.schemas.health import (
    DependencyHealth,
    LivenessResponse,
    ReadinessResponse,
)
from core.schemas.inbox import InboxListResponse, InboxMessageDetail, MarkReadResponse
from core.schemas.integration import (
    IntegrationSettings,
    SmtpConfig,
    SmtpTestRequest,
    WhatsAppConfig,
)
from core.schemas.job import JobRunResponse
from core.schemas.notification import (
    BatchNotificationResponse,
    ChannelResult,
    DeliveryOutcome,
    DeliveryResponse,
    MaterialOrderEventRequest,
    NotificationCreated,
    NotificationRequest,
    QuietHoursWindow,
    RenderedTemplate,
    TimesheetEventRequest,
)

__all__ = [
    "BatchNotificationResponse",
    "ChannelResult",
    "DeliveryOutcome",
    "DeliveryResponse",
    "DependencyHealth",
    "InboxListResponse",
    "InboxMessageDetail",
    "IntegrationSettings",
    "JobRunResponse",
    "LivenessResponse",
    "MarkReadResponse",
    "MaterialOrderEventRequest",
    "NotificationCreated",
    "NotificationRequest",
    "QuietHoursWindow",
    "ReadinessResponse",
    "RenderedTemplate",
    "SmtpConfig",
    "SmtpTestRequest",
    "TimesheetEventRequest",
    "WhatsAppConfig",
]
