"""Schema for the delivery trigger response."""

from uuid import UUID

from pydantic import Field

from core.enums import NotificationStatusEnum
from core.schemas.base_schema_model import BaseSchemaModel


class DeliveryResponse(BaseSchemaModel):
    """Response schema for ``POST notifications/deliver``."""

    notification_id: UUID = Field(..., description="Delivered notification")
    status: NotificationStatusEnum = Field(..., description="Status after delivery")
    already_processed: bool = Field(
        ..., description="True when the notification was already terminal"
    )
    message: str = Field(..., description="Human-readable summary")
