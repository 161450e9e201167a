"""Delivery outcome schema."""

from uuid import UUID

from pydantic import Field

from core.enums import NotificationStatusEnum
from core.schemas.base_schema_model import BaseSchemaModel
from core.schemas.notification.channel_result import ChannelResult


class DeliveryOutcome(BaseSchemaModel):
    """Result of one delivery worker invocation."""

    notification_id: UUID = Field(..., description="Delivered notification")
    status: NotificationStatusEnum = Field(..., description="Status after the call")
    already_processed: bool = Field(
        False, description="True when the record was already terminal"
    )
    results: list[ChannelResult] = Field(
        default_factory=list, description="Per-channel results of this attempt"
    )
