"""Notification request schema consumed by the fan-out writer."""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import Field

from core.enums import Channel
from core.schemas.base_schema_model import BaseSchemaModel


class NotificationRequest(BaseSchemaModel):
    """Candidate notification produced by a scheduler job or event producer."""

    user_id: UUID = Field(..., description="Recipient user ID")
    template_key: str = Field(..., min_length=1, description="Template key")
    channels: list[Channel] = Field(
        default_factory=list, description="Requested delivery channels"
    )
    payload: dict[str, Any] = Field(
        default_factory=dict, description="Template variables"
    )
    schedule_at: datetime | None = Field(
        None, description="Earliest delivery time; None means immediately"
    )
    dedupe_key: str | None = Field(None, description="Idempotency key")
    priority_high: bool = Field(False, description="Bypass quiet hours")
