"""Notification request schemas."""

from core.schemas.notification.request.material_order_event_request import (
    MaterialOrderEventRequest,
)
from core.schemas.notification.request.timesheet_event_request import (
    TimesheetEventRequest,
)

__all__ = ["MaterialOrderEventRequest", "TimesheetEventRequest"]
