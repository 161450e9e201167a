"""Mark-as-read response schema."""

from pydantic import Field

from core.schemas.base_schema_model import BaseSchemaModel


class MarkReadResponse(BaseSchemaModel):
    """Number of messages that changed from unread to read."""

    updated_count: int = Field(..., description="Messages marked as read")
