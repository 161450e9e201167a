"""Inbox message schema."""

from datetime import datetime
from uuid import UUID

from pydantic import Field

from core.schemas.base_schema_model import BaseSchemaModel


class InboxMessageDetail(BaseSchemaModel):
    """One message in the caller's in-app inbox."""

    message_id: UUID = Field(..., description="Inbox message ID")
    notification_id: UUID = Field(..., description="Notification that produced it")
    text: str = Field(..., description="Rendered in-app text")
    read: bool = Field(..., description="Whether the user has read it")
    created_at: datetime = Field(..., description="When the message was created")
