"""Paginated inbox response schema."""

from pydantic import Field

from core.schemas.base_schema_model import BaseSchemaModel
from core.schemas.inbox.inbox_message_detail import InboxMessageDetail


class InboxListResponse(BaseSchemaModel):
    """Page of inbox messages, newest first."""

    results: list[InboxMessageDetail] = Field(..., description="Messages on this page")
    count: int = Field(..., description="Total number of messages")
    unread_count: int = Field(..., description="Number of unread messages")
    next: str | None = Field(None, description="URL of the next page")
    previous: str | None = Field(None, description="URL of the previous page")
