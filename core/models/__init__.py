"""Database models for core application."""

from core.models.audit_event import AuditEvent
from core.models.certificate import EmployeeCertificate
from core.models.inbox_message import InboxMessage
from core.models.integration_settings import (
    INTEGRATIONS_SETTINGS_KEY,
    IntegrationSettingsRecord,
)
from core.models.material_order import MaterialOrder
from core.models.notification import Notification
from core.models.notification_template import NotificationTemplate
from core.models.timesheet_submission import TimesheetSubmission
from core.models.user import User

__all__ = [
    "INTEGRATIONS_SETTINGS_KEY",
    "AuditEvent",
    "EmployeeCertificate",
    "InboxMessage",
    "IntegrationSettingsRecord",
    "MaterialOrder",
    "Notification",
    "NotificationTemplate",
    "TimesheetSubmission",
    "User",
]
